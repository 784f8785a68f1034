from pydantic import ConfigDict, Field

from lyricflow.models.base import CamelModel


class ScenarioEvent(CamelModel):
    """A ceremony or situation with its default creative configuration."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    default_mood: str
    default_style: str
    default_complexity: str
    default_rhyme: str
    default_singer: str
    prompt_context: str = Field(description="One-line cultural context injected into the lyricist prompt")


class ScenarioCategory(CamelModel):
    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    events: tuple[ScenarioEvent, ...]
