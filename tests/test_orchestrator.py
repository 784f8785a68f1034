"""End-to-end workflow tests using the mock provider and swapped-out agents."""

import pytest

from lyricflow.agent.mock_provider import get_mock_formatter_output
from lyricflow.agent.orchestrator import Agents, run_lyric_generation_workflow
from lyricflow.errors import AgentError, ConfigurationError, MissingCredentialsError
from lyricflow.models.settings import GenerationSettings, LanguageProfile

from conftest import VALID_KEY

REQUEST = "A high-energy sangeet song for my sister's wedding"
CHECKPOINTS = [5, 15, 20, 25, 30, 40, 60, 70, 80, 85, 88, 95, 100]


async def run(provider, sleep, events, **kwargs):
    kwargs.setdefault("search", None)
    kwargs.setdefault("rate_limit_delay", 0.5)
    return await run_lyric_generation_workflow(
        REQUEST,
        LanguageProfile(primary="Telugu"),
        GenerationSettings(ceremony="sangeet"),
        VALID_KEY,
        events.append,
        provider=provider,
        sleep=sleep,
        **kwargs,
    )


def lyricist_prompt(provider) -> str:
    for request in provider.requests:
        schema = request.config.response_schema or {}
        if schema.get("title") == "DraftLyrics":
            return request.contents
    raise AssertionError("no lyricist request recorded")


class TestWorkflowEndToEnd:
    @pytest.mark.asyncio
    async def test_sangeet_in_pure_telugu(self, mock_provider, sleep):
        """Ceremony defaults reach the lyricist, which writes in pure mode."""
        events = []
        result = await run(mock_provider, sleep, events)

        prompt = lyricist_prompt(mock_provider)
        assert "PURE MODE ACTIVATED" in prompt
        assert "FUSION MODE ACTIVATED" not in prompt
        assert "Sangeet" in prompt
        assert "- Mood: Energetic" in prompt

        assert "[Chorus]" in result.lyrics
        assert result.style_prompt == get_mock_formatter_output().style_prompt
        assert result.analysis.navarasa == "Shringara"
        assert result.compliance.verdict == "Safe"
        assert result.research_data.startswith("1. Cultural Metaphors")

    @pytest.mark.asyncio
    async def test_progress_checkpoints(self, mock_provider, sleep):
        """Progress is emitted at every fixed checkpoint, in order, ending at 100."""
        events = []
        await run(mock_provider, sleep, events)
        assert [e.progress for e in events] == CHECKPOINTS
        assert events[-1].message == "Workflow Complete."
        assert any(e.message == "Configuration Resolved: Bollywood | Energetic" for e in events)

    @pytest.mark.asyncio
    async def test_log_type_only_on_log_events(self, mock_provider, sleep):
        events = []
        await run(mock_provider, sleep, events)
        untyped = [e.progress for e in events if e.type is None]
        assert untyped == [40, 70, 85, 95, 100]

    @pytest.mark.asyncio
    async def test_rate_limit_between_stages(self, mock_provider, sleep):
        """One delay before each of research, lyricist, review, compliance and formatter."""
        await run(mock_provider, sleep, [])
        assert sleep.delays == [0.5] * 5

    @pytest.mark.asyncio
    async def test_stage_order(self, mock_provider, sleep):
        await run(mock_provider, sleep, [])
        titles = [
            (r.config.response_schema or {}).get("title", "research") for r in mock_provider.requests
        ]
        assert titles == [
            "EmotionAnalysis",
            "research",
            "DraftLyrics",
            "GeneratedLyrics",
            "ComplianceReport",
            "FormatterOutput",
        ]

    @pytest.mark.asyncio
    async def test_without_callback(self, mock_provider, sleep):
        result = await run_lyric_generation_workflow(
            REQUEST,
            LanguageProfile(primary="Hindi", secondary="English"),
            GenerationSettings(),
            VALID_KEY,
            None,
            provider=mock_provider,
            sleep=sleep,
            search=None,
        )
        assert result.lyrics
        assert "FUSION MODE ACTIVATED" in lyricist_prompt(mock_provider)


class TestWorkflowFailures:
    @pytest.mark.asyncio
    async def test_compliance_failure_degrades(self, mock_provider, sleep):
        async def broken_compliance(*args, **kwargs):
            raise RuntimeError("compliance exploded")

        events = []
        result = await run(mock_provider, sleep, events, agents=Agents(compliance=broken_compliance))
        assert result.compliance is None
        assert any(e.message == "Compliance Agent unavailable, skipping." for e in events)
        assert events[-1].progress == 100

    @pytest.mark.asyncio
    async def test_review_failure_keeps_draft(self, mock_provider, sleep):
        seen = {}

        async def broken_review(*args, **kwargs):
            raise RuntimeError("review exploded")

        async def capturing_formatter(lyrics, **kwargs):
            seen["lyrics"] = lyrics
            return get_mock_formatter_output()

        await run(
            mock_provider,
            sleep,
            [],
            agents=Agents(review=broken_review, formatter=capturing_formatter),
        )
        assert seen["lyrics"].startswith("Title: ")
        assert "[Verse 1]" in seen["lyrics"]

    @pytest.mark.asyncio
    async def test_review_credentials_error_is_fatal(self, mock_provider, sleep):
        async def rejected_review(*args, **kwargs):
            raise MissingCredentialsError("Invalid API key")

        with pytest.raises(MissingCredentialsError):
            await run(mock_provider, sleep, [], agents=Agents(review=rejected_review))

    @pytest.mark.asyncio
    async def test_lyricist_failure_is_fatal(self, mock_provider, sleep):
        async def broken_lyricist(*args, **kwargs):
            raise AgentError("Lyricist", "model overloaded")

        events = []
        with pytest.raises(AgentError, match="Lyricist"):
            await run(mock_provider, sleep, events, agents=Agents(lyricist=broken_lyricist))
        assert events[-1].progress == 40

    @pytest.mark.asyncio
    async def test_invalid_input_raises_before_any_event(self, mock_provider, sleep):
        events = []
        with pytest.raises(ConfigurationError):
            await run_lyric_generation_workflow(
                "hey",
                LanguageProfile(primary="Telugu"),
                GenerationSettings(),
                VALID_KEY,
                events.append,
                provider=mock_provider,
                sleep=sleep,
            )
        assert events == []
        assert mock_provider.requests == []

    @pytest.mark.asyncio
    async def test_missing_credentials_raise_before_any_event(self, mock_provider, sleep):
        events = []
        with pytest.raises(MissingCredentialsError):
            await run_lyric_generation_workflow(
                REQUEST,
                LanguageProfile(primary="Telugu"),
                GenerationSettings(),
                "",
                events.append,
                provider=mock_provider,
                sleep=sleep,
            )
        assert events == []
