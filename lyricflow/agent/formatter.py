from __future__ import annotations

import logging

from lyricflow.agent.prompts import FORMATTER_PROMPT_TEMPLATE, SYSTEM_INSTRUCTION_FORMATTER
from lyricflow.config import AGENT_TEMPERATURES, AGENT_TOP_P, DEFAULT_HQ_TAGS, MODEL_FAST
from lyricflow.errors import ConfigurationError, MissingCredentialsError, wrap_agent_error
from lyricflow.models.lyrics import FormatterOutput
from lyricflow.services.generation_client import GenerationClient
from lyricflow.services.validation import (
    validate_api_key,
    validate_hq_tags,
    validate_lyrics_length,
)

log = logging.getLogger(__name__)

MAX_HQ_TAGS_FROM_CONTEXT = 6

# (keywords, tags); first matching row wins within each table
GENRE_HQ_TAGS: tuple[tuple[tuple[str, ...], tuple[str, ...]], ...] = (
    (("classical", "carnatic"), ("Classical Instruments", "Authentic Recording", "Concert Hall Acoustics")),
    (("folk", "traditional"), ("Live Performance", "Organic Sound", "Cultural Authenticity")),
    (("edm", "electronic"), ("Heavy Bass", "Club Mix", "Digital Mastering")),
    (("cinematic", "orchestral"), ("Epic Orchestration", "Surround Sound", "Film Score Quality")),
    (("rap", "hip-hop"), ("Hard Hitting Beats", "Clear Vocals", "Studio Production")),
)
MOOD_HQ_TAGS: tuple[tuple[tuple[str, ...], tuple[str, ...]], ...] = (
    (("romantic", "love"), ("Emotional Depth", "Smooth Mix")),
    (("energetic", "party"), ("High Energy", "Dance Floor Ready")),
    (("melancholic", "sad"), ("Emotional", "Intimate Mix")),
)
BASE_HQ_TAGS = ("High Fidelity", "Professional Mix")


def _first_match(context: str, table) -> tuple[str, ...]:
    for keywords, tags in table:
        if any(keyword in context for keyword in keywords):
            return tags
    return ()


def get_hq_tags(user_tags: list[str] | None = None, context: str | None = None) -> str:
    """Pick the HQ tag suffix for the style prompt.

    User tags win. Otherwise genre and mood keywords in ``context`` pick tags,
    followed by the base quality tags, capped at six. Otherwise the defaults.
    """
    if user_tags:
        return ", ".join(user_tags)

    if context:
        lowered = context.lower()
        tags = [
            *_first_match(lowered, GENRE_HQ_TAGS),
            *_first_match(lowered, MOOD_HQ_TAGS),
            *BASE_HQ_TAGS,
        ]
        return ", ".join(tags[:MAX_HQ_TAGS_FROM_CONTEXT])

    return DEFAULT_HQ_TAGS


async def run_formatter_agent(
    lyrics: str,
    client: GenerationClient,
    model: str = MODEL_FAST,
    custom_hq_tags: list[str] | None = None,
    context: str | None = None,
    temperature: float | None = None,
) -> FormatterOutput:
    """Produce the export-ready meta-tagged lyrics and the music-style prompt.

    Args:
        lyrics: Final reviewed lyrics text.
        client: Shared generation client.
        model: Model identifier.
        custom_hq_tags: User HQ tags. Ignored with a warning when invalid.
        context: "<style> <mood> <theme>" used to pick HQ tags.
        temperature: Override for the configured formatter temperature.

    Returns:
        FormatterOutput with ``style_prompt`` and ``formatted_lyrics``.

    Raises:
        MissingCredentialsError: credentials fail the shape check (no provider call).
        ConfigurationError: lyrics empty or too long (no provider call).
        AgentError: the provider call failed. Formatting failures are fatal.
    """
    key_check = validate_api_key(client.credentials)
    if not key_check.valid:
        raise MissingCredentialsError(key_check.error)
    length_check = validate_lyrics_length(lyrics)
    if not length_check.valid:
        raise ConfigurationError(length_check.error)

    if custom_hq_tags:
        tags_check = validate_hq_tags(custom_hq_tags)
        if not tags_check.valid:
            log.warning("Ignoring invalid custom HQ tags: %s", tags_check.error)
            custom_hq_tags = None
    hq_tags = get_hq_tags(custom_hq_tags, context)

    try:
        output = await client.generate_json(
            FORMATTER_PROMPT_TEMPLATE.format(lyrics=lyrics, hq_tags=hq_tags),
            FormatterOutput,
            model=model,
            system_instruction=SYSTEM_INSTRUCTION_FORMATTER,
            temperature=temperature if temperature is not None else AGENT_TEMPERATURES["FORMATTER"],
            top_p=AGENT_TOP_P["FORMATTER"],
        )
    except ConfigurationError:
        log.error("Formatter agent: credentials rejected", exc_info=True)
        raise
    except Exception as e:
        log.error("Formatter agent error: %s", e, exc_info=True)
        raise wrap_agent_error("Formatter", e) from e

    log.info("Style prompt: %s", output.style_prompt)
    return output
