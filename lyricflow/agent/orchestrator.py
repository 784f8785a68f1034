"""The lyric generation pipeline.

Emotion -> Research -> resolve settings -> Lyricist -> Review -> Compliance -> Formatter,
strictly in sequence, with a flat rate-limit delay between provider-calling
stages and a progress event at every fixed checkpoint.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Union

from lyricflow.agent.compliance import run_compliance_agent
from lyricflow.agent.debug import trace_final_output, trace_model_config, trace_resolved_settings
from lyricflow.agent.emotion import run_emotion_agent
from lyricflow.agent.formatter import run_formatter_agent
from lyricflow.agent.lyricist import run_lyricist_agent
from lyricflow.agent.research import SearchFn, run_research_agent
from lyricflow.agent.review import run_review_agent
from lyricflow.agent.scenarios import apply_ceremony_defaults
from lyricflow.agent.settings import resolve_settings
from lyricflow.config import (
    MODEL_FAST,
    MODEL_QUALITY,
    OPENROUTER_BASE_URL,
    RATE_LIMIT_DELAY,
    adjusted_temperatures,
)
from lyricflow.errors import ConfigurationError, MissingCredentialsError
from lyricflow.models.analysis import ComplianceReport, EmotionAnalysis
from lyricflow.models.lyrics import FormatterOutput
from lyricflow.models.settings import GenerationSettings, LanguageProfile
from lyricflow.models.workflow import AgentKind, GenerationStep, WorkflowResult
from lyricflow.services.generation_client import GenerationClient, Sleep
from lyricflow.services.provider import Provider
from lyricflow.services.validation import (
    sanitize_input,
    validate_api_key,
    validate_language,
    validate_user_input,
)
from lyricflow.tools.web_search import web_search

log = logging.getLogger(__name__)

ProgressCallback = Callable[[GenerationStep], None]


class Stage(str, Enum):
    VALIDATE_INPUT = "VALIDATE_INPUT"
    EMOTION = "EMOTION"
    RESEARCH = "RESEARCH"
    RESOLVE_SETTINGS = "RESOLVE_SETTINGS"
    LYRICIST = "LYRICIST"
    REVIEW = "REVIEW"
    COMPLIANCE = "COMPLIANCE"
    FORMAT = "FORMAT"
    DONE = "DONE"
    FAILED = "FAILED"


@dataclass(frozen=True)
class Fatal:
    """Stage failure aborts the workflow."""


@dataclass(frozen=True)
class Degrade:
    """Stage failure is replaced by ``fallback(state)``.

    Exceptions listed in ``reraise`` still abort the workflow.
    """

    fallback: Callable[["WorkflowState"], Any]
    reraise: tuple[type[BaseException], ...] = ()


StagePolicy = Union[Fatal, Degrade]

FATAL = Fatal()

STAGE_POLICIES: dict[Stage, StagePolicy] = {
    Stage.EMOTION: FATAL,
    Stage.RESEARCH: FATAL,
    Stage.LYRICIST: FATAL,
    Stage.REVIEW: Degrade(lambda state: state.draft, reraise=(ConfigurationError,)),
    Stage.COMPLIANCE: Degrade(lambda state: None),
    Stage.FORMAT: FATAL,
}


@dataclass
class Agents:
    """The six agent callables. Swap any of them out to test the orchestrator alone."""

    emotion: Callable[..., Awaitable[EmotionAnalysis]] = run_emotion_agent
    research: Callable[..., Awaitable[str]] = run_research_agent
    lyricist: Callable[..., Awaitable[str]] = run_lyricist_agent
    review: Callable[..., Awaitable[str]] = run_review_agent
    compliance: Callable[..., Awaitable[ComplianceReport]] = run_compliance_agent
    formatter: Callable[..., Awaitable[FormatterOutput]] = run_formatter_agent


@dataclass
class WorkflowState:
    """Everything one run has produced so far. Lives only as long as the run."""

    stage: Stage = Stage.VALIDATE_INPUT
    analysis: EmotionAnalysis | None = None
    research: str | None = None
    settings: GenerationSettings | None = None
    draft: str | None = None
    lyrics: str | None = None
    compliance: ComplianceReport | None = None
    timings: dict[str, float] = field(default_factory=dict)


def validate_workflow_input(
    user_request: str, language_profile: LanguageProfile, credentials: str
) -> None:
    """Raise a ConfigurationError before anything touches the network."""
    if not credentials or not credentials.strip():
        raise MissingCredentialsError()
    key_check = validate_api_key(credentials)
    if not key_check.valid:
        raise MissingCredentialsError(key_check.error)

    input_check = validate_user_input(user_request)
    if not input_check.valid:
        raise ConfigurationError(input_check.error)

    language_check = validate_language(language_profile.primary)
    if not language_check.valid:
        raise ConfigurationError(language_check.error)


async def _run_stage(
    stage: Stage,
    state: WorkflowState,
    fn: Callable[[], Awaitable[Any]],
) -> tuple[Any, bool]:
    """Run one stage under its policy. Returns (result, succeeded)."""
    policy = STAGE_POLICIES.get(stage, FATAL)
    state.stage = stage
    start = time.time()
    try:
        result = await fn()
    except Exception as e:
        if isinstance(policy, Degrade) and not isinstance(e, policy.reraise):
            log.warning("%s stage failed, continuing with fallback: %s", stage.value, e, exc_info=True)
            return policy.fallback(state), False
        state.stage = Stage.FAILED
        log.error("%s stage failed: %s", stage.value, e, exc_info=True)
        raise
    state.timings[stage.value] = time.time() - start
    log.info("%s stage completed in %.2fs", stage.value, state.timings[stage.value])
    return result, True


async def run_lyric_generation_workflow(
    user_request: str,
    language_profile: LanguageProfile,
    generation_settings: GenerationSettings,
    credentials: str,
    on_progress: ProgressCallback | None,
    *,
    client: GenerationClient | None = None,
    provider: Provider | None = None,
    agents: Agents | None = None,
    sleep: Sleep = asyncio.sleep,
    rate_limit_delay: float = RATE_LIMIT_DELAY,
    custom_hq_tags: list[str] | None = None,
    temperature_preference: str = "balanced",
    fast_model: str = MODEL_FAST,
    quality_model: str = MODEL_QUALITY,
    search: SearchFn | None = web_search,
    debug: bool = False,
) -> WorkflowResult:
    """Run the whole pipeline once and return the composed result.

    Args:
        user_request: Free-text description of the song.
        language_profile: Primary language plus optional fusion languages.
        generation_settings: Settings as the user left them (may hold "Auto"/"Custom").
        credentials: Provider API key.
        on_progress: Called synchronously with every progress event, in order.
        client: Pre-built generation client. Built from ``credentials`` if omitted.
        provider: Provider for the client built here (ignored when ``client`` is given).
        agents: Agent callables, mainly for tests.
        sleep: Awaitable sleep used for the rate-limit delay.
        rate_limit_delay: Seconds between consecutive provider-calling stages.
        custom_hq_tags: User HQ tags for the style prompt.
        temperature_preference: "precise", "balanced" or "creative".
        fast_model: Model for emotion, research, compliance and formatting.
        quality_model: Model for the lyricist and the reviewer.
        search: Web search for research grounding. None disables it.
        debug: Log banner-delimited traces of settings and output.

    Returns:
        WorkflowResult. ``compliance`` is None when the compliance stage failed.

    Raises:
        ConfigurationError: invalid input, raised before any progress event.
        MissingCredentialsError: absent, malformed or rejected credentials.
        AgentError: a fatal stage failed.
    """
    validate_workflow_input(user_request, language_profile, credentials)
    user_request = sanitize_input(user_request)

    agents = agents or Agents()
    client = client or GenerationClient(credentials, provider, sleep=sleep)
    temperatures = adjusted_temperatures(temperature_preference)
    state = WorkflowState()
    overall_start = time.time()

    if debug:
        trace_model_config(fast_model, quality_model, OPENROUTER_BASE_URL, temperatures)

    def emit(message: str, progress: int, agent: AgentKind = AgentKind.IDLE, is_log: bool = True) -> None:
        step = GenerationStep(
            message=message, agent=agent, progress=progress, type="log" if is_log else None
        )
        log.info("[%3d%%] %s", progress, message)
        if on_progress is not None:
            on_progress(step)

    async def rate_limit() -> None:
        await sleep(rate_limit_delay)

    # ceremony presets seed the Auto fields before AI suggestions get a say
    seeded = apply_ceremony_defaults(generation_settings)

    # 1. emotion
    emit("Emotion Agent: Analyzing sentiment & Navarasa...", 5)
    analysis, _ = await _run_stage(
        Stage.EMOTION,
        state,
        lambda: agents.emotion(
            user_request, client=client, model=fast_model, temperature=temperatures["EMOTION"]
        ),
    )
    state.analysis = analysis
    emit(f"Detected Mood: {analysis.sentiment} ({analysis.navarasa})", 15)

    # 2. research
    await rate_limit()
    focus = analysis.vibe_description or analysis.suggested_mood
    emit(f"Research Agent: Scanning cultural context for '{focus}'...", 20)
    research, _ = await _run_stage(
        Stage.RESEARCH,
        state,
        lambda: agents.research(
            user_request,
            focus,
            client=client,
            model=fast_model,
            search=search,
            temperature=temperatures["RESEARCH"],
        ),
    )
    state.research = research
    emit("Cultural context acquired.", 25)

    # 3. settings
    state.stage = Stage.RESOLVE_SETTINGS
    settings = resolve_settings(seeded, analysis)
    state.settings = settings
    emit(f"Configuration Resolved: {settings.style} | {settings.mood}", 30)
    if debug:
        trace_resolved_settings(generation_settings, settings)

    # 4. lyricist
    await rate_limit()
    emit(
        f"Lyricist Agent: Composing {settings.style} lyrics in {language_profile.primary}...",
        40,
        AgentKind.LYRICIST,
        is_log=False,
    )
    draft, _ = await _run_stage(
        Stage.LYRICIST,
        state,
        lambda: agents.lyricist(
            research,
            user_request,
            language_profile,
            analysis,
            settings,
            client=client,
            model=quality_model,
            temperature=temperatures["LYRICIST"],
        ),
    )
    state.draft = draft
    emit("Draft generated. Handing off to Reviewer.", 60, AgentKind.LYRICIST)

    # 5. review
    await rate_limit()
    emit(
        "Review Agent: Sahitya Pundit is auditing rhymes & meter...",
        70,
        AgentKind.REVIEW,
        is_log=False,
    )
    lyrics, _ = await _run_stage(
        Stage.REVIEW,
        state,
        lambda: agents.review(
            draft,
            user_request,
            language_profile,
            settings,
            client=client,
            model=quality_model,
            temperature=temperatures["REVIEW"],
        ),
    )
    state.lyrics = lyrics
    emit("Review complete. Checking compliance...", 80, AgentKind.REVIEW)

    # 6. compliance, best effort
    await rate_limit()
    emit("Compliance Agent: Checking originality...", 85, AgentKind.COMPLIANCE, is_log=False)
    compliance, checked = await _run_stage(
        Stage.COMPLIANCE,
        state,
        lambda: agents.compliance(
            lyrics, client=client, model=fast_model, temperature=temperatures["COMPLIANCE"]
        ),
    )
    state.compliance = compliance
    if checked and compliance is not None:
        emit(
            f"Compliance Check: {compliance.verdict} ({compliance.originality_score}% Originality)",
            88,
        )
    else:
        emit("Compliance Agent unavailable, skipping.", 88)

    # 7. formatter
    await rate_limit()
    emit("Formatter Agent: Preparing Suno.com tags...", 95, is_log=False)
    formatted, _ = await _run_stage(
        Stage.FORMAT,
        state,
        lambda: agents.formatter(
            lyrics,
            client=client,
            model=fast_model,
            custom_hq_tags=custom_hq_tags,
            context=f"{settings.style} {settings.mood} {settings.theme}",
            temperature=temperatures["FORMATTER"],
        ),
    )

    state.stage = Stage.DONE
    emit("Workflow Complete.", 100, is_log=False)
    log.info("Total generation time: %.2fs", time.time() - overall_start)

    result = WorkflowResult(
        lyrics=formatted.formatted_lyrics,
        style_prompt=formatted.style_prompt,
        research_data=research,
        analysis=analysis,
        compliance=compliance,
    )
    if debug:
        trace_final_output(result)
    return result
