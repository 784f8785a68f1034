"""Tests for the individual agents against a scripted provider."""

import json

import pytest

from lyricflow.agent.compliance import run_compliance_agent
from lyricflow.agent.emotion import run_emotion_agent
from lyricflow.agent.formatter import get_hq_tags, run_formatter_agent
from lyricflow.agent.lyricist import (
    build_language_instruction,
    build_lyricist_prompt,
    build_scenario_instruction,
    run_lyricist_agent,
)
from lyricflow.agent.mock_provider import (
    get_mock_analysis,
    get_mock_compliance,
    get_mock_formatter_output,
    get_mock_lyrics,
)
from lyricflow.agent.research import SOURCES_HEADER, append_sources, run_research_agent
from lyricflow.agent.review import run_review_agent
from lyricflow.config import DEFAULT_HQ_TAGS
from lyricflow.errors import (
    AgentError,
    ConfigurationError,
    MissingCredentialsError,
    TransientProviderError,
)
from lyricflow.models.provider import (
    Candidate,
    GroundingChunk,
    GroundingMetadata,
    ProviderResponse,
    WebSource,
)
from lyricflow.models.settings import GenerationSettings, LanguageProfile

DRAFT = "Title: Draft\n\n[Verse 1]\nfirst line\nsecond line"
PURE_TELUGU = LanguageProfile(primary="Telugu")
RESOLVED = GenerationSettings(
    mood="Energetic",
    style="Bollywood",
    theme="Wedding",
    rhyme_scheme="AABB (Couplets)",
    singer_config="Duet",
    complexity="Moderate",
    ceremony="sangeet",
)


def as_json(model) -> str:
    return model.model_dump_json(by_alias=True)


class TestEmotionAgent:
    @pytest.mark.asyncio
    async def test_returns_analysis(self, make_client):
        client, provider = make_client(as_json(get_mock_analysis()))
        analysis = await run_emotion_agent("A sangeet song for my sister", client)
        assert analysis.navarasa == "Shringara"
        assert "sangeet song for my sister" in provider.requests[0].contents

    @pytest.mark.asyncio
    async def test_wraps_generic_failures(self, make_client):
        client, _ = make_client(TransientProviderError("503"), retries=0)
        with pytest.raises(AgentError, match="Emotion agent failed"):
            await run_emotion_agent("A sangeet song", client)

    @pytest.mark.asyncio
    async def test_credentials_error_passes_through(self, make_client):
        client, provider = make_client(MissingCredentialsError("Invalid API key"))
        with pytest.raises(MissingCredentialsError):
            await run_emotion_agent("A sangeet song", client)
        assert provider.calls == 1


class TestResearchAgent:
    @pytest.mark.asyncio
    async def test_grounded_sources_appended(self, make_client):
        sources = [
            WebSource(title="Sangeet", uri="https://example.org/sangeet"),
            WebSource(title="Sangeet again", uri="https://example.org/sangeet"),
        ]
        response = ProviderResponse(
            text="Metaphors and context",
            candidates=[
                Candidate(
                    grounding_metadata=GroundingMetadata(
                        grounding_chunks=[GroundingChunk(web=s) for s in sources]
                    )
                )
            ],
        )
        client, _ = make_client(response)
        text = await run_research_agent("sangeet", "joy", client, search=None)
        assert text.startswith("Metaphors and context")
        assert SOURCES_HEADER in text
        assert text.count("https://example.org/sangeet") == 1

    @pytest.mark.asyncio
    async def test_falls_back_to_plain_prompt(self, make_client):
        """A failed grounded call is followed by one ungrounded call."""
        client, provider = make_client(TransientProviderError("search down"), "plain research", retries=0)
        text = await run_research_agent("sangeet", "joy", client, search=None)
        assert text == "plain research"
        assert provider.requests[0].config.tools == ["web_search"]
        assert provider.requests[1].config.tools == []
        assert SOURCES_HEADER not in text

    @pytest.mark.asyncio
    async def test_blank_grounded_text_falls_back(self, make_client):
        """Whitespace-only grounded research is treated as a failure, not as empty research."""
        client, provider = make_client("   ", "plain research", retries=0)
        text = await run_research_agent("sangeet", "joy", client, search=None)
        assert text == "plain research"
        assert provider.calls == 2

    @pytest.mark.asyncio
    async def test_search_snippets_reach_prompt(self, make_client):
        from lyricflow.tools.web_search import SearchResult

        async def fake_search(query):
            return [SearchResult(title="t", url="https://example.org", snippet="Dholak nights")]

        client, provider = make_client("grounded")
        await run_research_agent("sangeet", "joy", client, search=fake_search)
        assert "Dholak nights" in provider.requests[0].contents

    @pytest.mark.asyncio
    async def test_both_attempts_failing_is_agent_error(self, make_client):
        client, _ = make_client(TransientProviderError("down"), retries=0)
        with pytest.raises(AgentError, match="Research"):
            await run_research_agent("sangeet", "joy", client, search=None)

    def test_append_sources_without_sources(self):
        assert append_sources("text", []) == "text"


class TestLyricistAgent:
    def test_pure_mode_instruction(self):
        instruction = build_language_instruction(PURE_TELUGU)
        assert "PURE MODE ACTIVATED" in instruction
        assert "FUSION MODE ACTIVATED" not in instruction

    def test_fusion_mode_instruction(self):
        profile = LanguageProfile(primary="Hindi", secondary="English")
        instruction = build_language_instruction(profile)
        assert "FUSION MODE ACTIVATED" in instruction
        assert "English" in instruction

    def test_scenario_instruction(self):
        assert "Sangeet" in build_scenario_instruction(RESOLVED)
        assert build_scenario_instruction(GenerationSettings()) == ""

    def test_prompt_includes_settings_and_research(self):
        prompt = build_lyricist_prompt("RESEARCH NOTES", "request", PURE_TELUGU, get_mock_analysis(), RESOLVED)
        assert "RESEARCH NOTES" in prompt
        assert "Bollywood" in prompt
        assert "Couplets (AABB)" in prompt

    @pytest.mark.asyncio
    async def test_returns_display_text(self, make_client):
        client, provider = make_client(as_json(get_mock_lyrics()))
        text = await run_lyricist_agent("research", "request", PURE_TELUGU, None, RESOLVED, client)
        assert text.startswith("Title: ")
        assert "[Chorus]" in text
        assert provider.requests[0].config.safety_settings

    @pytest.mark.asyncio
    async def test_failure_is_fatal(self, make_client):
        client, _ = make_client("{not json", retries=0)
        with pytest.raises(AgentError, match="Lyricist"):
            await run_lyricist_agent("research", "request", PURE_TELUGU, None, RESOLVED, client)


class TestReviewAgent:
    @pytest.mark.asyncio
    async def test_returns_reviewed_lyrics(self, make_client):
        client, _ = make_client(as_json(get_mock_lyrics()))
        text = await run_review_agent(DRAFT, "request", PURE_TELUGU, RESOLVED, client)
        assert text == get_mock_lyrics().to_display_text()

    @pytest.mark.asyncio
    async def test_trailing_prose_with_braces_is_parsed(self, make_client):
        client, _ = make_client(as_json(get_mock_lyrics()) + "\n\nAll tags use {brackets}.")
        text = await run_review_agent(DRAFT, "request", PURE_TELUGU, RESOLVED, client)
        assert text == get_mock_lyrics().to_display_text()

    @pytest.mark.asyncio
    async def test_failure_returns_draft_without_retry(self, make_client):
        client, provider = make_client(TransientProviderError("overloaded"))
        assert await run_review_agent(DRAFT, "request", PURE_TELUGU, RESOLVED, client) == DRAFT
        assert provider.calls == 1

    @pytest.mark.asyncio
    async def test_credentials_error_propagates(self, make_client):
        client, _ = make_client(MissingCredentialsError("Invalid API key"))
        with pytest.raises(MissingCredentialsError):
            await run_review_agent(DRAFT, "request", PURE_TELUGU, RESOLVED, client)

    @pytest.mark.asyncio
    async def test_missing_settings_use_defaults(self, make_client):
        client, provider = make_client(as_json(get_mock_lyrics()))
        await run_review_agent(DRAFT, "request", PURE_TELUGU, None, client)
        assert "Poetic" in provider.requests[0].contents


class TestComplianceAgent:
    @pytest.mark.asyncio
    async def test_returns_report(self, make_client):
        client, _ = make_client(as_json(get_mock_compliance()))
        report = await run_compliance_agent(DRAFT, client)
        assert report.verdict == "Safe"

    @pytest.mark.asyncio
    async def test_failure_yields_unavailable(self, make_client):
        client, provider = make_client("garbage")
        report = await run_compliance_agent(DRAFT, client)
        assert report.verdict == "Error Checking"
        assert report.originality_score == 100
        assert provider.calls == 1

    @pytest.mark.asyncio
    async def test_structured_lyrics_are_serialized(self, make_client):
        client, provider = make_client(as_json(get_mock_compliance()))
        await run_compliance_agent(get_mock_lyrics(), client)
        assert '"sectionName"' in provider.requests[0].contents


class TestFormatterAgent:
    def test_hq_tags_user_wins(self):
        assert get_hq_tags(["Lo-fi", "Tape"], "Folk Energetic") == "Lo-fi, Tape"

    def test_hq_tags_from_context(self):
        tags = get_hq_tags(None, "Folk Energetic Wedding").split(", ")
        assert tags[:2] == ["Live Performance", "Organic Sound"]
        assert "High Energy" in tags
        assert len(tags) <= 6

    def test_hq_tags_default(self):
        assert get_hq_tags() == DEFAULT_HQ_TAGS

    @pytest.mark.asyncio
    async def test_empty_lyrics_rejected_before_call(self, make_client):
        client, provider = make_client(as_json(get_mock_formatter_output()))
        with pytest.raises(ConfigurationError):
            await run_formatter_agent("   ", client)
        assert provider.calls == 0

    @pytest.mark.asyncio
    async def test_bad_credentials_rejected_before_call(self, make_client):
        client, provider = make_client(as_json(get_mock_formatter_output()))
        client.credentials = "bogus"
        with pytest.raises(MissingCredentialsError):
            await run_formatter_agent(DRAFT, client)
        assert provider.calls == 0

    @pytest.mark.asyncio
    async def test_hq_tags_reach_prompt(self, make_client):
        client, provider = make_client(as_json(get_mock_formatter_output()))
        output = await run_formatter_agent(DRAFT, client, custom_hq_tags=["Warm Tape"])
        assert "Warm Tape" in provider.requests[0].contents
        assert output.style_prompt

    @pytest.mark.asyncio
    async def test_invalid_custom_tags_ignored(self, make_client):
        client, provider = make_client(as_json(get_mock_formatter_output()))
        await run_formatter_agent(DRAFT, client, custom_hq_tags=["x" * 80], context="Folk")
        assert "Live Performance" in provider.requests[0].contents

    @pytest.mark.asyncio
    async def test_failure_is_fatal(self, make_client):
        client, _ = make_client(TransientProviderError("down"), retries=0)
        with pytest.raises(AgentError, match="Formatter"):
            await run_formatter_agent(DRAFT, client)


def test_mock_payloads_are_wire_format():
    """Canned payloads use camelCase keys like a real provider response."""
    payload = json.loads(as_json(get_mock_analysis()))
    assert "suggestedMood" in payload
