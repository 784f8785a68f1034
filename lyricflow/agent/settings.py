"""Merge user choices, ceremony-seeded values and AI suggestions into one concrete configuration."""

from __future__ import annotations

from lyricflow.models.analysis import EmotionAnalysis
from lyricflow.models.settings import (
    Custom,
    GenerationSettings,
    Resolved,
    classify_choice,
    is_concrete,
)

FIELD_DEFAULTS: dict[str, str] = {
    "mood": "Romantic",
    "style": "Cinematic",
    "theme": "Love",
    "rhyme_scheme": "AABB (Couplets)",
    "singer_config": "Duet",
    "complexity": "Moderate",
}

# field -> (custom override field, EmotionAnalysis suggestion field)
RESOLVABLE_FIELDS: dict[str, tuple[str, str]] = {
    "mood": ("custom_mood", "suggested_mood"),
    "style": ("custom_style", "suggested_style"),
    "theme": ("custom_theme", "suggested_theme"),
    "rhyme_scheme": ("custom_rhyme_scheme", "suggested_rhyme_scheme"),
    "singer_config": ("custom_singer_config", "suggested_singer_config"),
}


def _fallback(suggestion: str | None, default: str) -> str:
    if is_concrete(suggestion):
        return suggestion.strip()
    return default


def _resolve_field(value: str, custom: str, suggestion: str | None, default: str) -> str:
    choice = classify_choice(value, custom)
    if isinstance(choice, Resolved):
        return choice.value
    if isinstance(choice, Custom) and choice.value:
        return choice.value
    # Auto, or Custom with an empty override
    return _fallback(suggestion, default)


def resolve_settings(
    user_settings: GenerationSettings, analysis: EmotionAnalysis | None
) -> GenerationSettings:
    """Return a copy of ``user_settings`` where every creative field is concrete.

    Pure and total. Explicit (or ceremony-seeded) values win over AI suggestions,
    AI suggestions win over the hardcoded defaults. ``custom_*`` fields, category
    and ceremony are carried through untouched, so resolving twice with the same
    analysis gives the same result.

    Args:
        user_settings: Settings as the user (or a ceremony preset) left them.
        analysis: Emotion analysis whose ``suggested_*`` fields fill Auto slots.

    Returns:
        A new GenerationSettings with no "Auto" and no unresolved "Custom".
    """
    updates: dict[str, str] = {}

    for field, (custom_field, suggestion_field) in RESOLVABLE_FIELDS.items():
        updates[field] = _resolve_field(
            getattr(user_settings, field),
            getattr(user_settings, custom_field),
            getattr(analysis, suggestion_field, None),
            FIELD_DEFAULTS[field],
        )

    # complexity has no custom override
    if is_concrete(user_settings.complexity):
        updates["complexity"] = user_settings.complexity
    else:
        updates["complexity"] = _fallback(
            getattr(analysis, "suggested_complexity", None), FIELD_DEFAULTS["complexity"]
        )

    updates["category"] = user_settings.category or ""
    updates["ceremony"] = user_settings.ceremony or ""
    return user_settings.model_copy(update=updates)
