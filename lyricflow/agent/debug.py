"""Debug tracing utilities for workflow execution."""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import BaseModel

from lyricflow.models.provider import ProviderRequest
from lyricflow.models.settings import GenerationSettings

log = logging.getLogger(__name__)


def _format_value(value: Any, max_length: int | None = 300) -> str:
    """Format a value for display, truncating if needed."""
    if isinstance(value, str):
        s = value
    elif isinstance(value, BaseModel):
        s = value.model_dump_json(indent=2, by_alias=True)
    elif isinstance(value, dict):
        s = json.dumps(value, indent=2, default=str)
    else:
        s = str(value)

    if max_length is not None and len(s) > max_length:
        return s[:max_length] + f"\n... (truncated {len(s) - max_length} chars)"
    return s


def _banner(title: str) -> None:
    log.debug("=" * 80)
    log.debug(title)
    log.debug("=" * 80)


def trace_model_config(
    fast_model: str, quality_model: str, base_url: str, temperatures: dict[str, float]
) -> None:
    """Log model configuration."""
    _banner("MODEL CONFIGURATION")
    log.debug(f"Fast model: {fast_model}")
    log.debug(f"Quality model: {quality_model}")
    log.debug(f"Base URL: {base_url}")
    log.debug(f"Temperatures: {_format_value(temperatures)}")
    log.debug("=" * 80)


def trace_request(request: ProviderRequest) -> None:
    """Log one provider request: model, sampling, tools and the prompt itself."""
    config = request.config
    _banner(f"PROVIDER REQUEST: {request.model}")
    log.debug(f"Temperature: {config.temperature}  top_p: {config.top_p}  top_k: {config.top_k}")
    if config.tools:
        log.debug(f"Tools: {', '.join(config.tools)}")
    if config.response_schema:
        log.debug(f"Schema: {config.response_schema.get('title', '<untitled>')}")
    if config.system_instruction:
        log.debug(f"System instruction:\n{_format_value(config.system_instruction, max_length=None)}")
    log.debug(f"Prompt:\n{_format_value(request.contents, max_length=2000)}")
    log.debug("=" * 80)


def trace_resolved_settings(before: GenerationSettings, after: GenerationSettings) -> None:
    """Log which settings changed during resolution."""
    _banner("RESOLVED SETTINGS")
    before_values = before.model_dump()
    for name, value in after.model_dump().items():
        if before_values.get(name) != value:
            log.debug(f"{name}: {before_values.get(name)!r} -> {value!r}")
        else:
            log.debug(f"{name}: {value!r}")
    log.debug("=" * 80)


def trace_final_output(output: Any) -> None:
    """Log the final workflow output."""
    _banner("FINAL OUTPUT")
    log.debug(_format_value(output, max_length=None))
    log.debug("=" * 80)
