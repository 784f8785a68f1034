"""Tests for settings resolution and ceremony seeding."""

import pytest

from lyricflow.agent.mock_provider import get_mock_analysis
from lyricflow.agent.scenarios import apply_ceremony_defaults, find_scenario, list_categories
from lyricflow.agent.settings import FIELD_DEFAULTS, resolve_settings
from lyricflow.models.settings import (
    Auto,
    Custom,
    GenerationSettings,
    LanguageProfile,
    Resolved,
    classify_choice,
)

CREATIVE_FIELDS = ("mood", "style", "theme", "rhyme_scheme", "singer_config", "complexity")


class TestClassifyChoice:
    @pytest.mark.parametrize("value", ["Auto", "", "   ", None])
    def test_auto(self, value):
        assert classify_choice(value) == Auto()

    def test_custom_carries_trimmed_override(self):
        assert classify_choice("Custom", "  Devotional ") == Custom("Devotional")

    def test_resolved(self):
        assert classify_choice("Melancholic") == Resolved("Melancholic")


class TestLanguageProfile:
    def test_slots_default_to_primary(self):
        """Omitted fusion slots mean pure mode."""
        profile = LanguageProfile(primary="Telugu")
        assert profile.secondary == "Telugu"
        assert profile.tertiary == "Telugu"
        assert not profile.is_fusion

    def test_fusion_lists_borrowed_languages_once(self):
        profile = LanguageProfile(primary="Hindi", secondary="English", tertiary="English")
        assert profile.is_fusion
        assert profile.borrowed_languages == ["English"]

    def test_accepts_camel_case_wire_format(self):
        profile = LanguageProfile.model_validate({"primary": "Tamil", "secondary": "English"})
        assert profile.to_wire() == {"primary": "Tamil", "secondary": "English", "tertiary": "Tamil"}


class TestResolveSettings:
    """Merging user choices, AI suggestions and defaults."""

    def test_all_auto_takes_suggestions(self):
        resolved = resolve_settings(GenerationSettings(), get_mock_analysis())
        assert resolved.mood == "Joyful"
        assert resolved.style == "Folk"
        assert resolved.theme == "Wedding"
        assert resolved.rhyme_scheme == "AABB (Couplets)"
        assert resolved.singer_config == "Duet"
        assert resolved.complexity == "Simple"

    def test_total_without_analysis(self):
        """Every creative field is concrete even with no analysis at all."""
        resolved = resolve_settings(GenerationSettings(), None)
        for field in CREATIVE_FIELDS:
            assert getattr(resolved, field) == FIELD_DEFAULTS[field]

    def test_explicit_values_win(self):
        settings = GenerationSettings(mood="Melancholic", style="Ghazal", complexity="Complex")
        resolved = resolve_settings(settings, get_mock_analysis())
        assert resolved.mood == "Melancholic"
        assert resolved.style == "Ghazal"
        assert resolved.complexity == "Complex"

    def test_custom_override_used(self):
        settings = GenerationSettings(theme="Custom", custom_theme="Monsoon homecoming")
        resolved = resolve_settings(settings, get_mock_analysis())
        assert resolved.theme == "Monsoon homecoming"
        assert resolved.custom_theme == "Monsoon homecoming"

    def test_empty_custom_falls_back_like_auto(self):
        settings = GenerationSettings(mood="Custom", custom_mood="   ")
        resolved = resolve_settings(settings, get_mock_analysis())
        assert resolved.mood == "Joyful"

    def test_idempotent(self):
        """Resolving an already-resolved configuration changes nothing."""
        analysis = get_mock_analysis()
        settings = GenerationSettings(theme="Custom", custom_theme="Harvest", ceremony="sangeet")
        once = resolve_settings(settings, analysis)
        twice = resolve_settings(once, analysis)
        assert once == twice

    def test_does_not_mutate_input(self):
        settings = GenerationSettings()
        resolve_settings(settings, get_mock_analysis())
        assert settings.mood == "Auto"

    def test_blank_suggestion_uses_default(self):
        analysis = get_mock_analysis().model_copy(update={"suggested_style": "  "})
        assert resolve_settings(GenerationSettings(), analysis).style == FIELD_DEFAULTS["style"]


class TestCeremonyDefaults:
    def test_sangeet_seeds_auto_fields(self):
        seeded = apply_ceremony_defaults(GenerationSettings(ceremony="sangeet"))
        assert seeded.mood == "Energetic"
        assert seeded.style == "Bollywood"
        assert seeded.rhyme_scheme == "AABB"
        assert seeded.singer_config == "Duet"
        assert seeded.complexity == "Moderate"

    def test_ceremony_beats_ai_suggestion(self):
        """Sangeet says Energetic, the analysis says Joyful: the ceremony wins."""
        seeded = apply_ceremony_defaults(GenerationSettings(ceremony="sangeet"))
        resolved = resolve_settings(seeded, get_mock_analysis())
        assert resolved.mood == "Energetic"

    def test_explicit_value_beats_ceremony(self):
        seeded = apply_ceremony_defaults(GenerationSettings(ceremony="sangeet", mood="Melancholic"))
        assert seeded.mood == "Melancholic"

    def test_custom_is_left_alone(self):
        settings = GenerationSettings(ceremony="sangeet", style="Custom", custom_style="Qawwali")
        seeded = apply_ceremony_defaults(settings)
        assert seeded.style == "Custom"
        assert resolve_settings(seeded, None).style == "Qawwali"

    @pytest.mark.parametrize("ceremony", ["", "None", "no_such_event"])
    def test_no_known_ceremony_is_noop(self, ceremony):
        settings = GenerationSettings(ceremony=ceremony)
        assert apply_ceremony_defaults(settings) == settings


class TestScenarioKnowledgeBase:
    def test_ids_are_unique(self):
        ids = [event.id for category in list_categories() for event in category.events]
        assert len(ids) == len(set(ids))

    def test_find_scenario(self):
        assert find_scenario("sangeet").label == "Sangeet"
        assert find_scenario("") is None
        assert find_scenario("unknown") is None
