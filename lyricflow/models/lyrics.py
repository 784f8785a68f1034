from __future__ import annotations

from pydantic import Field

from lyricflow.models.base import CamelModel

CANONICAL_SECTION_TAGS = (
    "[Intro]",
    "[Verse 1]",
    "[Verse 2]",
    "[Verse 3]",
    "[Chorus]",
    "[Bridge]",
    "[Outro]",
)


class LyricSection(CamelModel):
    """One performed section, in performance order."""

    section_name: str = Field(
        description=(
            "STRICTLY ENGLISH TAGS IN SQUARE BRACKETS: [Chorus], [Verse 1], [Verse 2], "
            "[Verse 3], [Bridge], [Intro], [Outro]."
        )
    )
    lines: list[str] = Field(description="The sung lines of this section")


class GeneratedLyrics(CamelModel):
    """Structured song artifact produced by the lyricist and replaced by the reviewer."""

    title: str = Field(description="Title in the native script of the primary language")
    language: str | None = Field(default=None, description="Description of the language mix used")
    ragam: str | None = Field(
        default=None,
        description="Suggested Carnatic/Hindustani Raagam (or Scale/Mode for Western)",
    )
    taalam: str | None = Field(default=None, description="Suggested Time Signature or Beat")
    structure: str | None = Field(
        default=None,
        description="Structure Overview (e.g., Intro-V1-C-V2-C-Br-V3-C-Outro)",
    )
    sections: list[LyricSection] = Field(description="Sections in performance order")

    def to_display_text(self) -> str:
        """Flatten to the plain text handed between agents and shown to the user."""
        output = ""
        if self.title:
            output += f"Title: {self.title}\n"
        if self.ragam:
            output += f"Ragam/Scale: {self.ragam}\n"
        if self.taalam:
            output += f"Taalam/Beat: {self.taalam}\n\n"

        for section in self.sections:
            output += f"{section.section_name}\n"
            for line in section.lines:
                output += f"{line}\n"
            output += "\n"

        return output.strip()


class DraftLyrics(GeneratedLyrics):
    """Lyricist output. Same shape as GeneratedLyrics with the metadata required."""

    language: str = Field(description="Description of the language mix used")
    ragam: str = Field(description="Suggested Carnatic/Hindustani Raagam (or Scale/Mode for Western)")
    taalam: str = Field(description="Suggested Time Signature or Beat")
    structure: str = Field(description="Structure Overview (e.g., Intro-V1-C-V2-C-Br-V3-C-Outro)")


class FormatterOutput(CamelModel):
    """Export-ready lyrics plus the music-style prompt."""

    style_prompt: str = Field(description="A creative music style prompt with HQ tags.")
    formatted_lyrics: str = Field(description="The lyrics with enhanced meta-tags.")
