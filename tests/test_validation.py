"""Tests for input validators."""

import pytest

from lyricflow.services.validation import (
    sanitize_input,
    validate_api_key,
    validate_hq_tags,
    validate_language,
    validate_lyrics_length,
    validate_user_input,
)

from conftest import VALID_KEY


class TestValidators:
    def test_api_key(self):
        assert validate_api_key(VALID_KEY).valid
        assert not validate_api_key("").valid
        assert not validate_api_key("sk-short").valid
        result = validate_api_key("AIza" + "x" * 40)
        assert not result.valid
        assert "sk-" in result.error

    @pytest.mark.parametrize(
        "text, valid",
        [("", False), ("hey", False), ("A wedding song for my sister", True), ("x" * 5001, False)],
    )
    def test_user_input(self, text, valid):
        assert validate_user_input(text).valid is valid

    def test_language(self):
        assert validate_language("Telugu").valid
        assert not validate_language(" ").valid

    def test_lyrics_length(self):
        assert validate_lyrics_length("[Chorus]\nla la").valid
        assert not validate_lyrics_length("").valid
        assert not validate_lyrics_length("a" * 50001).valid

    def test_hq_tags(self):
        assert validate_hq_tags(["Lo-fi", "Warm Tape"]).valid
        assert not validate_hq_tags([]).valid
        assert not validate_hq_tags(["t"] * 11).valid
        assert not validate_hq_tags(["x" * 50]).valid
        assert not validate_hq_tags(["ok", " "]).valid

    def test_sanitize_input(self):
        assert sanitize_input("  a   song\x07 for\n\nher ") == "a song for her"
