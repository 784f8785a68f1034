"""REST API routes for the lyric generation workflow."""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from fastapi import BackgroundTasks, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from lyricflow.agent.mock_provider import MOCK_API_KEY, MockProvider
from lyricflow.agent.orchestrator import run_lyric_generation_workflow
from lyricflow.agent.scenarios import list_categories
from lyricflow.config import API_KEY, MODEL_FAST, MODEL_QUALITY, USER_HQ_TAGS
from lyricflow.errors import ConfigurationError, LyricflowError
from lyricflow.models.settings import GenerationSettings, LanguageProfile
from lyricflow.models.workflow import GenerationStep

log = logging.getLogger(__name__)

# Simple in-memory job storage (use Redis/DB for production)
jobs: dict[str, dict] = {}


class GenerateRequest(BaseModel):
    text: str = Field(description="Free-text description of the song")
    language: LanguageProfile
    settings: GenerationSettings = Field(default_factory=GenerationSettings)
    api_key: Optional[str] = Field(default=None, description="Falls back to OPENROUTER_API_KEY")
    custom_hq_tags: Optional[list[str]] = None
    temperature_preference: str = "balanced"
    fast_model: Optional[str] = None
    quality_model: Optional[str] = None
    use_mock: bool = False


class JobStatus(BaseModel):
    job_id: str
    status: str  # "processing", "completed", "failed"
    events: list[dict] = Field(default_factory=list)
    result: Optional[dict] = None
    error: Optional[str] = None
    error_code: Optional[str] = None


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Lyricflow API",
        description="REST API for the multi-agent lyric generation workflow",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # In production, restrict to specific domains
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.post("/api/generate")
    async def generate_lyrics(request: GenerateRequest, background_tasks: BackgroundTasks) -> dict:
        """Start a lyric generation job.

        Args:
            request: Song description, language profile, settings and options.
            background_tasks: FastAPI background tasks

        Returns:
            Job ID and initial status
        """
        job_id = str(uuid.uuid4())
        jobs[job_id] = {
            "status": "processing",
            "events": [],
            "result": None,
            "error": None,
            "error_code": None,
        }
        background_tasks.add_task(_run_generation, job_id, request)
        return {"job_id": job_id, "status": "processing"}

    @app.get("/api/status/{job_id}")
    async def get_status(job_id: str) -> JobStatus:
        """Get the status, progress events and result of a generation job."""
        if job_id not in jobs:
            raise HTTPException(status_code=404, detail="Job not found")

        job = jobs[job_id]
        return JobStatus(job_id=job_id, **job)

    @app.get("/api/scenarios")
    async def get_scenarios() -> dict:
        """List the scenario knowledge base grouped by category."""
        return {"categories": [category.to_wire() for category in list_categories()]}

    @app.get("/api/health")
    async def health_check() -> dict:
        """Health check endpoint."""
        return {"status": "ok"}

    return app


async def _run_generation(job_id: str, request: GenerateRequest) -> None:
    """Run one workflow in the background and record every progress event."""
    events: list[dict] = jobs[job_id]["events"]

    def on_progress(step: GenerationStep) -> None:
        events.append(step.to_wire())

    options: dict = {}
    credentials = request.api_key or API_KEY
    if request.use_mock:
        credentials = MOCK_API_KEY
        options = {"provider": MockProvider(), "search": None, "rate_limit_delay": 0.0}

    log.info("[%s] Starting generation (mock=%s)", job_id, request.use_mock)
    try:
        result = await run_lyric_generation_workflow(
            request.text,
            request.language,
            request.settings,
            credentials,
            on_progress,
            custom_hq_tags=request.custom_hq_tags or USER_HQ_TAGS or None,
            temperature_preference=request.temperature_preference,
            fast_model=request.fast_model or MODEL_FAST,
            quality_model=request.quality_model or MODEL_QUALITY,
            **options,
        )
    except ConfigurationError as e:
        log.warning("[%s] Rejected: %s", job_id, e)
        jobs[job_id].update(status="failed", error=str(e), error_code=e.code)
        return
    except Exception as e:
        log.error("[%s] Error during generation: %s", job_id, e, exc_info=True)
        code = e.code if isinstance(e, LyricflowError) else "INTERNAL_ERROR"
        jobs[job_id].update(status="failed", error=str(e), error_code=code)
        return

    jobs[job_id].update(status="completed", result=result.to_wire())
    log.info("[%s] Completed lyric generation", job_id)
