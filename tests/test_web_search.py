"""Tests for the DuckDuckGo web search tool using a mock transport."""

import httpx
import pytest

from lyricflow.tools.web_search import format_results, web_search

DDG_PAYLOAD = {
    "Heading": "Sangeet",
    "Abstract": "Sangeet is a pre-wedding music ceremony.",
    "AbstractURL": "https://en.wikipedia.org/wiki/Sangeet",
    "RelatedTopics": [
        {"Text": "Mehendi - Henna ceremony before the wedding", "FirstURL": "https://duckduckgo.com/Mehendi"},
        {"Name": "grouped topic without text"},
        {"Text": "Haldi - Turmeric ceremony", "FirstURL": "https://duckduckgo.com/Haldi"},
    ],
}


def client_for(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestWebSearch:
    @pytest.mark.asyncio
    async def test_parses_abstract_and_topics(self):
        seen = {}

        def handler(request):
            seen["q"] = request.url.params["q"]
            return httpx.Response(200, json=DDG_PAYLOAD)

        async with client_for(handler) as client:
            results = await web_search("sangeet ceremony", client=client)

        assert seen["q"] == "sangeet ceremony"
        assert [r.title for r in results] == ["Sangeet", "Mehendi", "Haldi"]
        assert results[0].url == "https://en.wikipedia.org/wiki/Sangeet"

    @pytest.mark.asyncio
    async def test_respects_max_results(self):
        async with client_for(lambda request: httpx.Response(200, json=DDG_PAYLOAD)) as client:
            results = await web_search("sangeet", max_results=2, client=client)
        assert len(results) == 2

    @pytest.mark.asyncio
    async def test_http_error_returns_empty(self):
        async with client_for(lambda request: httpx.Response(503)) as client:
            assert await web_search("sangeet", client=client) == []

    @pytest.mark.asyncio
    async def test_non_json_returns_empty(self):
        async with client_for(lambda request: httpx.Response(200, text="<html>")) as client:
            assert await web_search("sangeet", client=client) == []

    def test_format_results(self):
        assert format_results([]) == ""


@pytest.mark.asyncio
async def test_formatted_results_are_numbered():
    async with client_for(lambda request: httpx.Response(200, json=DDG_PAYLOAD)) as client:
        text = format_results(await web_search("sangeet", client=client))
    assert text.startswith("WEB SEARCH RESULTS:")
    assert "1. Sangeet is a pre-wedding music ceremony." in text
