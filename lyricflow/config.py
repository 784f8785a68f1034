"""Runtime configuration: models, rate limiting, sampling and retry parameters."""

from __future__ import annotations

import os

# OpenRouter config: set OPENROUTER_API_KEY env var
OPENROUTER_BASE_URL = os.environ.get("OPENROUTER_BASE_URL", "https://openrouter.ai/api/v1")
API_KEY = os.environ.get("OPENROUTER_API_KEY", "")
API_KEY_PREFIX = "sk-"
API_KEY_MIN_LENGTH = 32

MODEL_FAST = os.environ.get("LYRICFLOW_MODEL_FAST", "google/gemini-2.5-flash")
MODEL_QUALITY = os.environ.get("LYRICFLOW_MODEL_QUALITY", "google/gemini-2.5-pro")

# Seconds between two consecutive provider-calling stages
RATE_LIMIT_DELAY = float(os.environ.get("LYRICFLOW_RATE_LIMIT_DELAY", "0.8"))

# Upper bound on a single provider call; None disables the wrapper
PROVIDER_TIMEOUT = float(os.environ.get("LYRICFLOW_PROVIDER_TIMEOUT", "120")) or None

MAX_RETRIES = 2
RETRY_INITIAL_DELAY = 1.0

AGENT_TEMPERATURES: dict[str, float] = {
    "EMOTION": 0.4,
    "RESEARCH": 0.3,
    "LYRICIST": 0.85,
    "REVIEW": 0.3,
    "COMPLIANCE": 0.2,
    "FORMATTER": 0.75,
}

AGENT_TOP_P: dict[str, float] = {
    "EMOTION": 0.8,
    "RESEARCH": 0.7,
    "LYRICIST": 0.95,
    "REVIEW": 0.6,
    "COMPLIANCE": 0.5,
    "FORMATTER": 0.6,
}

RESEARCH_TOP_K = 40

MIN_TEMPERATURE = 0.1
MAX_TEMPERATURE = 0.95
TEMPERATURE_SHIFT = {"precise": -0.2, "balanced": 0.0, "creative": 0.2}

SAFETY_SETTINGS: list[dict[str, str]] = [
    {"category": "HARM_CATEGORY_HATE_SPEECH", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
    {"category": "HARM_CATEGORY_SEXUALLY_EXPLICIT", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
    {"category": "HARM_CATEGORY_DANGEROUS_CONTENT", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
    {"category": "HARM_CATEGORY_HARASSMENT", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
]

DEFAULT_HQ_TAGS = "High Fidelity, Masterpiece, Studio Quality, 4k Audio, Wide Stereo"
USER_HQ_TAGS = [t.strip() for t in os.environ.get("LYRICFLOW_HQ_TAGS", "").split(",") if t.strip()]


def adjusted_temperatures(preference: str = "balanced") -> dict[str, float]:
    """Shift every agent temperature for a precise/balanced/creative preference."""
    shift = TEMPERATURE_SHIFT.get(preference, 0.0)
    return {
        agent: round(min(MAX_TEMPERATURE, max(MIN_TEMPERATURE, temp + shift)), 2)
        for agent, temp in AGENT_TEMPERATURES.items()
    }

HOST = os.environ.get("HOST", "0.0.0.0")
PORT = int(os.environ.get("PORT", "8000"))
LOG_LEVEL = os.environ.get("LYRICFLOW_LOG_LEVEL", "INFO").upper()
