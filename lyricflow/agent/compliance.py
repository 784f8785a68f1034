from __future__ import annotations

import logging

from lyricflow.agent.prompts import COMPLIANCE_PROMPT_TEMPLATE, SYSTEM_INSTRUCTION_COMPLIANCE
from lyricflow.config import AGENT_TEMPERATURES, AGENT_TOP_P, MODEL_FAST
from lyricflow.errors import ConfigurationError
from lyricflow.models.analysis import ComplianceReport
from lyricflow.models.lyrics import GeneratedLyrics
from lyricflow.services.generation_client import GenerationClient

log = logging.getLogger(__name__)


async def run_compliance_agent(
    lyrics: GeneratedLyrics | str,
    client: GenerationClient,
    model: str = MODEL_FAST,
    temperature: float | None = None,
) -> ComplianceReport:
    """Score originality / plagiarism risk.

    Credential errors propagate. Anything else yields ``ComplianceReport.unavailable()``
    whose "Error Checking" verdict is distinguishable from a real "Safe".
    """
    if isinstance(lyrics, GeneratedLyrics):
        lyrics_text = lyrics.model_dump_json(by_alias=True)
    else:
        lyrics_text = lyrics

    try:
        return await client.generate_json(
            COMPLIANCE_PROMPT_TEMPLATE.format(lyrics=lyrics_text),
            ComplianceReport,
            model=model,
            system_instruction=SYSTEM_INSTRUCTION_COMPLIANCE,
            temperature=temperature if temperature is not None else AGENT_TEMPERATURES["COMPLIANCE"],
            top_p=AGENT_TOP_P["COMPLIANCE"],
            retries=0,
        )
    except ConfigurationError:
        log.error("Compliance agent: credentials rejected", exc_info=True)
        raise
    except Exception as e:
        log.error("Compliance agent error: %s", e, exc_info=True)
        return ComplianceReport.unavailable()
