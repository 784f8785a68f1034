"""Language profile and creative configuration for one generation request."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from pydantic import ConfigDict, Field, model_validator

from lyricflow.models.base import CamelModel

AUTO_OPTION = "Auto"
CUSTOM_OPTION = "Custom"
NONE_OPTION = "None"


class LanguageProfile(CamelModel):
    """Primary language plus up to two fusion languages.

    Secondary and tertiary default to the primary language, which is "pure mode".
    """

    model_config = ConfigDict(frozen=True)

    primary: str = Field(description="Language the lyrics are written in, e.g. 'Telugu'")
    secondary: str = Field(default="", description="Optional fusion language")
    tertiary: str = Field(default="", description="Optional second fusion language")

    @model_validator(mode="before")
    @classmethod
    def _default_to_primary(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = dict(data)
            primary = data.get("primary") or ""
            for slot in ("secondary", "tertiary"):
                if not data.get(slot):
                    data[slot] = primary
        return data

    @property
    def is_fusion(self) -> bool:
        return self.primary != self.secondary or self.primary != self.tertiary

    @property
    def borrowed_languages(self) -> list[str]:
        langs: list[str] = []
        for lang in (self.secondary, self.tertiary):
            if lang and lang != self.primary and lang not in langs:
                langs.append(lang)
        return langs


class GenerationSettings(CamelModel):
    """Creative configuration as the user (or a ceremony preset) left it.

    Each primary field may hold "Auto" (infer it) or "Custom" (use the matching
    ``custom_*`` field). After resolution every primary field is concrete.
    """

    category: str = ""
    ceremony: str = ""
    theme: str = AUTO_OPTION
    custom_theme: str = ""
    mood: str = AUTO_OPTION
    custom_mood: str = ""
    style: str = AUTO_OPTION
    custom_style: str = ""
    singer_config: str = AUTO_OPTION
    custom_singer_config: str = ""
    rhyme_scheme: str = AUTO_OPTION
    custom_rhyme_scheme: str = ""
    complexity: str = AUTO_OPTION

    @property
    def has_ceremony(self) -> bool:
        return bool(self.ceremony) and self.ceremony != NONE_OPTION


# Tagged view of a single settable field, used by the resolver instead of
# comparing raw sentinel strings.
@dataclass(frozen=True)
class Resolved:
    value: str


@dataclass(frozen=True)
class Auto:
    pass


@dataclass(frozen=True)
class Custom:
    value: str


Choice = Union[Resolved, Auto, Custom]


def classify_choice(value: str | None, custom: str | None = None) -> Choice:
    """Classify a raw settings string into Resolved, Auto or Custom."""
    if value == CUSTOM_OPTION:
        return Custom((custom or "").strip())
    if not value or not value.strip() or value == AUTO_OPTION:
        return Auto()
    return Resolved(value)


def is_concrete(value: str | None) -> bool:
    """True when a value can be handed to the lyricist as-is."""
    return isinstance(classify_choice(value), Resolved)
