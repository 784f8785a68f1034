"""Progress events and the terminal result of one workflow run."""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import ConfigDict, Field

from lyricflow.models.analysis import ComplianceReport, EmotionAnalysis
from lyricflow.models.base import CamelModel


class AgentKind(str, Enum):
    LYRICIST = "LYRICIST"
    REVIEW = "REVIEW"
    COMPLIANCE = "COMPLIANCE"
    IDLE = "IDLE"


class GenerationStep(CamelModel):
    """A single progress notification pushed to the caller's callback."""

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    message: str
    agent: AgentKind = AgentKind.IDLE
    progress: int = Field(ge=0, le=100)
    type: Literal["log"] | None = None


class WorkflowResult(CamelModel):
    """What a successful run hands back. Never mutated after construction."""

    model_config = ConfigDict(frozen=True)

    lyrics: str = Field(description="Formatted, meta-tagged lyrics")
    style_prompt: str = Field(description="Music-style prompt ending with the HQ tags")
    research_data: str | None = None
    analysis: EmotionAnalysis | None = None
    compliance: ComplianceReport | None = None
