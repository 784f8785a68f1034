"""Input validation shared by the orchestrator and the agents.

Validators never raise. They return a ValidationResult and the caller decides
which error to raise from it.
"""

from __future__ import annotations

import re

from pydantic import BaseModel

from lyricflow.config import API_KEY_MIN_LENGTH, API_KEY_PREFIX

MIN_INPUT_LENGTH = 5
MAX_INPUT_LENGTH = 5000
MAX_LYRICS_LENGTH = 50000
MAX_HQ_TAGS = 10
MAX_HQ_TAG_LENGTH = 50

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_WHITESPACE = re.compile(r"\s+")


class ValidationResult(BaseModel):
    valid: bool
    error: str | None = None


def _ok() -> ValidationResult:
    return ValidationResult(valid=True)


def _fail(error: str) -> ValidationResult:
    return ValidationResult(valid=False, error=error)


def validate_api_key(api_key: str | None) -> ValidationResult:
    if not api_key or not api_key.strip():
        return _fail("API Key is required")
    trimmed = api_key.strip()
    if not trimmed.startswith(API_KEY_PREFIX):
        return _fail(f'Invalid API Key format. Must start with "{API_KEY_PREFIX}"')
    if len(trimmed) < API_KEY_MIN_LENGTH:
        return _fail("API Key is too short")
    return _ok()


def validate_user_input(text: str | None) -> ValidationResult:
    if not text or not text.strip():
        return _fail("Please enter a song description")
    trimmed = text.strip()
    if len(trimmed) < MIN_INPUT_LENGTH:
        return _fail("Description is too short. Please provide more details.")
    if len(trimmed) > MAX_INPUT_LENGTH:
        return _fail(f"Description is too long. Maximum {MAX_INPUT_LENGTH} characters.")
    return _ok()


def validate_language(language: str | None) -> ValidationResult:
    if not language or not language.strip():
        return _fail("Language must be selected")
    return _ok()


def validate_lyrics_length(lyrics: str | None) -> ValidationResult:
    if not lyrics or not lyrics.strip():
        return _fail("Lyrics cannot be empty")
    if len(lyrics.strip()) > MAX_LYRICS_LENGTH:
        return _fail("Lyrics are too long. Maximum 50,000 characters.")
    return _ok()


def validate_hq_tags(tags: list[str] | None) -> ValidationResult:
    """Custom HQ tags: 1 to 10 non-empty strings, each under 50 characters."""
    if not isinstance(tags, list):
        return _fail("Tags must be a list")
    if not tags:
        return _fail("At least one tag is required")
    if len(tags) > MAX_HQ_TAGS:
        return _fail(f"Maximum {MAX_HQ_TAGS} tags allowed")
    for tag in tags:
        if not isinstance(tag, str) or not tag.strip():
            return _fail("All tags must be non-empty strings")
        if len(tag) >= MAX_HQ_TAG_LENGTH:
            return _fail(f"Each tag must be less than {MAX_HQ_TAG_LENGTH} characters")
    return _ok()


def sanitize_input(text: str) -> str:
    """Collapse runs of whitespace and drop control characters."""
    return _CONTROL_CHARS.sub("", _WHITESPACE.sub(" ", text.strip()))
