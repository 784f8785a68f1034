from __future__ import annotations

import logging
from typing import Awaitable, Callable

from lyricflow.agent.prompts import (
    RESEARCH_GROUNDED_SUFFIX,
    RESEARCH_PLAIN_SUFFIX,
    RESEARCH_PROMPT_TEMPLATE,
)
from lyricflow.config import AGENT_TEMPERATURES, AGENT_TOP_P, MODEL_FAST, RESEARCH_TOP_K
from lyricflow.errors import ConfigurationError, wrap_agent_error
from lyricflow.models.provider import WebSource
from lyricflow.services.generation_client import GenerationClient
from lyricflow.tools.web_search import SearchResult, format_results, web_search

log = logging.getLogger(__name__)

SOURCES_HEADER = "[RESEARCH SOURCES]"

SearchFn = Callable[[str], Awaitable[list[SearchResult]]]


def append_sources(text: str, sources: list[WebSource]) -> str:
    """Append a trailing sources block, one ``- title: uri`` line per distinct URI."""
    seen: set[str] = set()
    lines: list[str] = []
    for source in sources:
        if source.uri in seen:
            continue
        seen.add(source.uri)
        lines.append(f"- {source.title or source.uri}: {source.uri}")
    if not lines:
        return text
    return f"{text}\n\n{SOURCES_HEADER}\n" + "\n".join(lines)


async def run_research_agent(
    topic: str,
    mood: str | None,
    client: GenerationClient,
    model: str = MODEL_FAST,
    search: SearchFn | None = web_search,
    temperature: float | None = None,
) -> str:
    """Gather cultural metaphors, musical context and trends for a topic.

    Tries a search-grounded call first. If that fails for any reason other than
    credentials, retries once with a plain prompt and no retrieval.

    Args:
        topic: Usually the user's request.
        mood: Emotional focus, e.g. the detected vibe.
        client: Shared generation client.
        model: Model identifier.
        search: Web search used to add snippets to the grounded prompt. None skips it.
        temperature: Override for the configured research temperature.

    Returns:
        Free-text research, with a "[RESEARCH SOURCES]" block when citations came back.
    """
    base_prompt = RESEARCH_PROMPT_TEMPLATE.format(topic=topic, mood=mood or "General")
    temperature = temperature if temperature is not None else AGENT_TEMPERATURES["RESEARCH"]

    try:
        snippets = ""
        if search is not None:
            snippets = format_results(await search(f"{topic} {mood or ''}".strip()))
        text, sources = await client.generate_grounded(
            base_prompt + RESEARCH_GROUNDED_SUFFIX.format(snippets=snippets),
            model=model,
            temperature=temperature,
            top_p=AGENT_TOP_P["RESEARCH"],
            top_k=RESEARCH_TOP_K,
        )
        log.info("Grounded research returned %d chars, %d sources", len(text), len(sources))
        return append_sources(text, sources)
    except ConfigurationError:
        log.error("Research agent: credentials rejected", exc_info=True)
        raise
    except Exception as e:
        log.warning("Grounded research failed (%s), falling back to plain prompt", e)

    try:
        return await client.generate_text(
            base_prompt + RESEARCH_PLAIN_SUFFIX,
            model=model,
            temperature=temperature,
            top_p=AGENT_TOP_P["RESEARCH"],
            top_k=RESEARCH_TOP_K,
        )
    except ConfigurationError:
        log.error("Research agent: credentials rejected", exc_info=True)
        raise
    except Exception as e:
        log.error("Research agent error: %s", e, exc_info=True)
        raise wrap_agent_error("Research", e) from e
