from __future__ import annotations

import logging

from lyricflow.agent.prompts import EMOTION_PROMPT_TEMPLATE, SYSTEM_INSTRUCTION_EMOTION
from lyricflow.config import AGENT_TEMPERATURES, AGENT_TOP_P, MODEL_FAST
from lyricflow.errors import ConfigurationError, wrap_agent_error
from lyricflow.models.analysis import EmotionAnalysis
from lyricflow.services.generation_client import GenerationClient

log = logging.getLogger(__name__)


async def run_emotion_agent(
    user_request: str,
    client: GenerationClient,
    model: str = MODEL_FAST,
    temperature: float | None = None,
) -> EmotionAnalysis:
    """Classify the request's emotion and suggest values for every unset setting.

    Args:
        user_request: Free-text description of the song.
        client: Shared generation client.
        model: Model identifier.
        temperature: Override for the configured emotion temperature.

    Returns:
        EmotionAnalysis with all six ``suggested_*`` fields filled.
    """
    try:
        return await client.generate_json(
            EMOTION_PROMPT_TEMPLATE.format(user_request=user_request),
            EmotionAnalysis,
            model=model,
            system_instruction=SYSTEM_INSTRUCTION_EMOTION,
            temperature=temperature if temperature is not None else AGENT_TEMPERATURES["EMOTION"],
            top_p=AGENT_TOP_P["EMOTION"],
        )
    except ConfigurationError:
        log.error("Emotion agent: credentials rejected", exc_info=True)
        raise
    except Exception as e:
        log.error("Emotion agent error: %s", e, exc_info=True)
        raise wrap_agent_error("Emotion", e) from e
