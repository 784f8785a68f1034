from __future__ import annotations

import logging

from lyricflow.agent.prompts import REVIEW_PROMPT_TEMPLATE, SYSTEM_INSTRUCTION_REVIEW
from lyricflow.agent.rhyme import describe_rhyme_scheme
from lyricflow.config import AGENT_TEMPERATURES, AGENT_TOP_P, MODEL_QUALITY
from lyricflow.errors import ConfigurationError
from lyricflow.models.lyrics import GeneratedLyrics
from lyricflow.models.settings import GenerationSettings, LanguageProfile
from lyricflow.services.generation_client import GenerationClient

log = logging.getLogger(__name__)

DEFAULT_REVIEW_COMPLEXITY = "Poetic"
DEFAULT_REVIEW_RHYME_SCHEME = "AABB (Couplets)"


async def run_review_agent(
    draft: str,
    original_context: str,
    profile: LanguageProfile,
    settings: GenerationSettings | None,
    client: GenerationClient,
    model: str = MODEL_QUALITY,
    temperature: float | None = None,
) -> str:
    """Audit and rewrite the draft in one call. Never fails the pipeline.

    Any error other than a credential error is logged and the draft is
    returned unchanged. There are no retries.
    """
    complexity = settings.complexity if settings else DEFAULT_REVIEW_COMPLEXITY
    rhyme_scheme = settings.rhyme_scheme if settings else DEFAULT_REVIEW_RHYME_SCHEME

    prompt = REVIEW_PROMPT_TEMPLATE.format(
        draft=draft,
        context=original_context,
        primary=profile.primary,
        complexity=complexity,
        rhyme_scheme=rhyme_scheme,
        rhyme_instruction=describe_rhyme_scheme(rhyme_scheme, condensed=True),
    )

    try:
        reviewed = await client.generate_json(
            prompt,
            GeneratedLyrics,
            model=model,
            system_instruction=SYSTEM_INSTRUCTION_REVIEW,
            temperature=temperature if temperature is not None else AGENT_TEMPERATURES["REVIEW"],
            top_p=AGENT_TOP_P["REVIEW"],
            retries=0,
        )
    except ConfigurationError:
        log.error("Review agent: credentials rejected", exc_info=True)
        raise
    except Exception as e:
        log.warning("Review failed, returning draft lyrics: %s", e, exc_info=True)
        return draft

    text = reviewed.to_display_text()
    if not text:
        log.warning("Review returned empty lyrics, returning draft lyrics")
        return draft
    return text
