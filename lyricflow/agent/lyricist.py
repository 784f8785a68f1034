from __future__ import annotations

import logging

from lyricflow.agent.prompts import (
    COMPLEXITY_INSTRUCTIONS,
    DEFAULT_COMPLEXITY,
    FUSION_MODE_CLAUSE,
    LYRICIST_PROMPT_TEMPLATE,
    NATIVE_SCRIPT_CLAUSE,
    PURE_MODE_CLAUSE,
    SCENARIO_CLAUSE,
    STANDARD_SCRIPT_CLAUSE,
    SYSTEM_INSTRUCTION_LYRICIST,
)
from lyricflow.agent.rhyme import describe_rhyme_scheme
from lyricflow.agent.scenarios import INDIAN_LANGUAGES, find_scenario
from lyricflow.config import AGENT_TEMPERATURES, AGENT_TOP_P, MODEL_QUALITY, SAFETY_SETTINGS
from lyricflow.errors import ConfigurationError, wrap_agent_error
from lyricflow.models.analysis import EmotionAnalysis
from lyricflow.models.lyrics import DraftLyrics
from lyricflow.models.settings import GenerationSettings, LanguageProfile
from lyricflow.services.generation_client import GenerationClient

log = logging.getLogger(__name__)


def build_language_instruction(profile: LanguageProfile) -> str:
    """Script clause plus either the pure-mode or the fusion-mode clause."""
    if profile.primary in INDIAN_LANGUAGES:
        instruction = NATIVE_SCRIPT_CLAUSE.format(primary=profile.primary)
    else:
        instruction = STANDARD_SCRIPT_CLAUSE.format(primary=profile.primary)

    if profile.is_fusion:
        borrowed = " and ".join(profile.borrowed_languages)
        instruction += FUSION_MODE_CLAUSE.format(primary=profile.primary, borrowed=borrowed)
    else:
        instruction += PURE_MODE_CLAUSE.format(primary=profile.primary)
    return instruction


def build_scenario_instruction(settings: GenerationSettings) -> str:
    if not settings.has_ceremony:
        return ""
    scenario = find_scenario(settings.ceremony)
    if scenario is None:
        log.warning("Unknown ceremony '%s', writing without scenario context", settings.ceremony)
        return ""
    return SCENARIO_CLAUSE.format(
        label=scenario.label, context=scenario.prompt_context, theme=settings.theme
    )


def build_lyricist_prompt(
    research: str,
    user_request: str,
    profile: LanguageProfile,
    analysis: EmotionAnalysis | None,
    settings: GenerationSettings,
) -> str:
    complexity_instruction = COMPLEXITY_INSTRUCTIONS.get(
        settings.complexity, COMPLEXITY_INSTRUCTIONS[DEFAULT_COMPLEXITY]
    )
    return LYRICIST_PROMPT_TEMPLATE.format(
        user_request=user_request,
        primary=profile.primary,
        language_instruction=build_language_instruction(profile),
        theme=settings.theme,
        mood=settings.mood,
        style=settings.style,
        complexity=settings.complexity,
        singer_config=settings.singer_config,
        rhyme_scheme=settings.rhyme_scheme,
        scenario_instruction=build_scenario_instruction(settings),
        complexity_instruction=complexity_instruction,
        rhyme_instruction=describe_rhyme_scheme(settings.rhyme_scheme),
        navarasa=analysis.navarasa if analysis else "N/A",
        intensity=analysis.intensity if analysis else 5,
        research=research,
    )


async def run_lyricist_agent(
    research: str,
    user_request: str,
    profile: LanguageProfile,
    analysis: EmotionAnalysis | None,
    settings: GenerationSettings,
    client: GenerationClient,
    model: str = MODEL_QUALITY,
    temperature: float | None = None,
) -> str:
    """Write the first structured draft and flatten it to display text.

    Args:
        research: Output of the research agent, used as context only.
        user_request: The original request.
        profile: Language profile deciding pure or fusion mode.
        analysis: Emotion analysis for navarasa and intensity hints.
        settings: Fully resolved generation settings.
        client: Shared generation client.
        model: Model identifier.
        temperature: Override for the configured lyricist temperature.

    Returns:
        Draft lyrics as display text (title/ragam/taalam header, then tagged sections).
    """
    prompt = build_lyricist_prompt(research, user_request, profile, analysis, settings)
    try:
        draft = await client.generate_json(
            prompt,
            DraftLyrics,
            model=model,
            system_instruction=SYSTEM_INSTRUCTION_LYRICIST,
            temperature=temperature if temperature is not None else AGENT_TEMPERATURES["LYRICIST"],
            top_p=AGENT_TOP_P["LYRICIST"],
            safety_settings=SAFETY_SETTINGS,
        )
    except ConfigurationError:
        log.error("Lyricist agent: credentials rejected", exc_info=True)
        raise
    except Exception as e:
        log.error("Lyricist agent error: %s", e, exc_info=True)
        raise wrap_agent_error("Lyricist", e) from e

    log.info("Draft '%s' with %d sections", draft.title, len(draft.sections))
    return draft.to_display_text()
