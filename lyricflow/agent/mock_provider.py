"""Mock provider with canned responses for development and testing."""

from __future__ import annotations

import logging

from lyricflow.models.analysis import ComplianceReport, EmotionAnalysis
from lyricflow.models.lyrics import FormatterOutput, GeneratedLyrics, LyricSection
from lyricflow.models.provider import (
    WEB_SEARCH_TOOL,
    Candidate,
    GroundingChunk,
    GroundingMetadata,
    ProviderRequest,
    ProviderResponse,
    WebSource,
)

log = logging.getLogger(__name__)

# Passes the key-shape check; never sent anywhere
MOCK_API_KEY = "sk-mock-" + "0" * 32


def get_mock_analysis() -> EmotionAnalysis:
    return EmotionAnalysis(
        sentiment="Positive",
        navarasa="Shringara",
        intensity=8,
        suggested_keywords=["sangeet", "dholak", "family", "celebration"],
        vibe_description="A joyous wedding night full of music, teasing and dance",
        suggested_mood="Joyful",
        suggested_style="Folk",
        suggested_theme="Wedding",
        suggested_rhyme_scheme="AABB (Couplets)",
        suggested_complexity="Simple",
        suggested_singer_config="Duet",
    )


def get_mock_lyrics() -> GeneratedLyrics:
    """Return a short Telugu sangeet song in the canonical section order."""
    return GeneratedLyrics(
        title="సంగీత రాత్రి",
        language="Pure Telugu",
        ragam="Mohanam",
        taalam="Adi Talam (8 beats)",
        structure="Intro-V1-C-V2-C-Br-V3-C-Outro",
        sections=[
            LyricSection(section_name="[Intro]", lines=["ఆ... ఆ... ఆ...,"]),
            LyricSection(
                section_name="[Verse 1]",
                lines=["మెహందీ చేతుల్లో మెరిసే రంగులు,", "మనసులు కలిసే ముచ్చట్ల సంగులు!"],
            ),
            LyricSection(
                section_name="[Chorus]",
                lines=["ఆడుదాం పాడుదాం ఈ రాత్రి,", "పెళ్లి సందడిలో వెలిగే జ్యోతి!"],
            ),
            LyricSection(
                section_name="[Verse 2]",
                lines=["డోలక్ మోతలో అడుగులు వేద్దాం,", "బంధువులందరితో నవ్వులు పంచుదాం!"],
            ),
            LyricSection(
                section_name="[Chorus]",
                lines=["ఆడుదాం పాడుదాం ఈ రాత్రి,", "పెళ్లి సందడిలో వెలిగే జ్యోతి!"],
            ),
            LyricSection(
                section_name="[Bridge]",
                lines=["అమ్మ కళ్లలో ఆనంద బాష్పాలు,", "నాన్న మాటల్లో దీవెన పుష్పాలు..."],
            ),
            LyricSection(
                section_name="[Verse 3]",
                lines=["ఏడడుగుల బాటకు ఇది తొలి వేడుక,", "ఇద్దరి మనసుల ప్రేమకు ఇది తోడుక!"],
            ),
            LyricSection(
                section_name="[Chorus]",
                lines=["ఆడుదాం పాడుదాం ఈ రాత్రి,", "పెళ్లి సందడిలో వెలిగే జ్యోతి!"],
            ),
            LyricSection(section_name="[Outro]", lines=["ఆ... ఆ... సంగీత రాత్రి..."]),
        ],
    )


def get_mock_compliance() -> ComplianceReport:
    return ComplianceReport(
        originality_score=94,
        flagged_phrases=[],
        similar_songs=["Mehndi Laga Ke Rakhna (style only)"],
        verdict="Safe",
    )


def get_mock_formatter_output() -> FormatterOutput:
    return FormatterOutput(
        style_prompt=(
            "Telugu Folk Fusion, Dholak, Nadaswaram, Energetic Duet, "
            "High Fidelity, Masterpiece, Studio Quality, 4k Audio, Wide Stereo"
        ),
        formatted_lyrics=get_mock_lyrics().to_display_text(),
    )


MOCK_RESEARCH = """\
1. Cultural Metaphors: turmeric as blessing, the mangalsutra as a lifelong knot, moonlight on the mandapam.
2. Musical Context: dholak, nadaswaram, Mohanam raagam, Adi talam.
3. Vocabulary Bank: పెళ్లి, సందడి, మేళం, దీవెన, ముచ్చట, వేడుక, బంధం, పల్లకి, తాళి, మనసు.
4. Trend Check: folk-pop fusion with call-and-response choruses."""

MOCK_SOURCES = [
    WebSource(title="Sangeet ceremony traditions", uri="https://en.wikipedia.org/wiki/Sangeet"),
]

# schema title (pydantic class name) -> canned payload
_SCHEMA_RESPONSES = {
    "EmotionAnalysis": get_mock_analysis,
    "DraftLyrics": get_mock_lyrics,
    "GeneratedLyrics": get_mock_lyrics,
    "ComplianceReport": get_mock_compliance,
    "FormatterOutput": get_mock_formatter_output,
}


class MockProvider:
    """Answers every agent's request with schema-valid canned data.

    Records every request it sees in ``requests`` so callers can inspect prompts.
    """

    def __init__(self):
        self.requests: list[ProviderRequest] = []

    async def generate(self, request: ProviderRequest) -> ProviderResponse:
        self.requests.append(request)
        schema = request.config.response_schema
        if schema is not None:
            title = schema.get("title", "")
            factory = _SCHEMA_RESPONSES.get(title)
            if factory is None:
                log.warning("No mock response for schema '%s'", title)
                return ProviderResponse(text=None)
            return ProviderResponse(text=factory().model_dump_json(by_alias=True))

        if WEB_SEARCH_TOOL in request.config.tools:
            chunks = [GroundingChunk(web=source) for source in MOCK_SOURCES]
            return ProviderResponse(
                text=MOCK_RESEARCH,
                candidates=[Candidate(grounding_metadata=GroundingMetadata(grounding_chunks=chunks))],
            )
        return ProviderResponse(text=MOCK_RESEARCH)
