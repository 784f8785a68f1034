"""Web search used by the research agent to ground cultural context."""

from __future__ import annotations

import logging

import httpx
from pydantic import BaseModel

log = logging.getLogger(__name__)

DUCKDUCKGO_URL = "https://api.duckduckgo.com/"


class SearchResult(BaseModel):
    title: str
    url: str
    snippet: str


async def web_search(
    query: str,
    max_results: int = 5,
    client: httpx.AsyncClient | None = None,
) -> list[SearchResult]:
    """Search the web for information about a query.

    Args:
        query: The search query string
        max_results: Maximum number of results to return (default: 5)
        client: Optional shared httpx client (tests pass one with a mock transport)

    Returns:
        Search results with title, URL and snippet. Empty when the search fails,
        since grounding is optional for the research agent.
    """
    params = {
        "q": query,
        "format": "json",
        "no_html": 1,
        "no_redirect": 1,
    }
    try:
        if client is None:
            async with httpx.AsyncClient() as own_client:
                response = await own_client.get(DUCKDUCKGO_URL, params=params, timeout=10.0)
        else:
            response = await client.get(DUCKDUCKGO_URL, params=params, timeout=10.0)
        response.raise_for_status()
        data = response.json()
    except (httpx.HTTPError, ValueError) as e:
        log.error("Web search error for '%s': %s", query, e)
        return []

    results: list[SearchResult] = []

    # Abstract is the instant-answer summary
    if data.get("Abstract"):
        results.append(
            SearchResult(
                title=data.get("Heading") or query,
                url=data.get("AbstractURL", ""),
                snippet=data["Abstract"],
            )
        )

    for topic in data.get("RelatedTopics") or []:
        if len(results) >= max_results:
            break
        if not isinstance(topic, dict) or not topic.get("Text"):
            continue
        text = topic["Text"]
        results.append(
            SearchResult(
                title=text.split(" - ")[0][:80],
                url=topic.get("FirstURL", ""),
                snippet=text[:200],
            )
        )

    log.info("Web search results for '%s': %d results", query, len(results))
    return results[:max_results]


def format_results(results: list[SearchResult]) -> str:
    """Render results as numbered snippet lines for a prompt."""
    if not results:
        return ""
    lines = ["WEB SEARCH RESULTS:"]
    for i, result in enumerate(results, start=1):
        lines.append(f"{i}. {result.snippet}\n   URL: {result.url}")
    return "\n".join(lines)
