from pydantic import Field

from lyricflow.models.base import CamelModel


class EmotionAnalysis(CamelModel):
    """Sentiment classification plus suggested values for unset settings."""

    sentiment: str = Field(description="Positive, Negative, or Neutral")
    navarasa: str = Field(description="The dominant Rasa (e.g., Shringara, Raudra)")
    intensity: int = Field(ge=1, le=10, description="Scale of 1 to 10")
    suggested_keywords: list[str] = Field(
        default_factory=list, description="Keywords that match this emotion"
    )
    vibe_description: str = Field(description="A poetic description of the detected vibe")
    suggested_mood: str = Field(description="Best matching mood (e.g., Romantic, Energetic)")
    suggested_style: str = Field(
        description="Best matching musical style (e.g., Cinematic, Pop, Folk)"
    )
    suggested_theme: str = Field(description="Best matching theme (e.g., Love, Nature)")
    suggested_rhyme_scheme: str = Field(
        description="Best rhyme scheme (e.g., AABB (Couplets), Free Verse (No Rhyme))"
    )
    suggested_complexity: str = Field(description="Simple, Moderate, or Complex")
    suggested_singer_config: str = Field(
        description="Best singer setup (e.g., Duet, Male Solo, Female Solo, Chorus)"
    )


class ComplianceReport(CamelModel):
    """Originality / plagiarism-risk assessment of a finished draft."""

    originality_score: int = Field(ge=0, le=100, description="0 to 100")
    flagged_phrases: list[str] = Field(
        default_factory=list,
        description="Phrases that sound too similar to existing famous songs",
    )
    similar_songs: list[str] = Field(
        default_factory=list, description="Names of songs that share style or lyrics"
    )
    verdict: str = Field(description="Safe, Caution, or High Risk")

    @classmethod
    def unavailable(cls) -> "ComplianceReport":
        """Synthetic report used when the check itself could not run."""
        return cls(
            originality_score=100,
            flagged_phrases=[],
            similar_songs=[],
            verdict="Error Checking",
        )
