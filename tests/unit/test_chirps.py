"""
Unit tests for chirp censoring and validation.
"""

import json

import pytest

from chirpy.chirps import (
    BLOCKED_WORDS,
    MAX_CHIRP_LENGTH,
    Chirp,
    ChirpError,
    ChirpTooLongError,
    MalformedChirpError,
    censor,
    validate_chirp,
)


def body_of(text) -> bytes:
    return json.dumps({"body": text}).encode()


class TestCensor:
    """Tests for the word filter."""

    def test_replaces_blocked_word(self):
        assert (censor("I hear Mastodon is better than Chirpy. sharbert I need to migrate")
                == "I hear Mastodon is better than Chirpy. **** I need to migrate")

    def test_case_insensitive(self):
        assert censor("I really need a Kerfuffle to go to bed sooner, Fornax !") == \
            "I really need a **** to go to bed sooner, **** !"

    def test_punctuation_is_part_of_word(self):
        assert censor("what a kerfuffle!") == "what a kerfuffle!"

    def test_preserves_spacing(self):
        assert censor("  fornax   sharbert ") == "  ****   **** "

    def test_clean_text_unchanged(self):
        text = "I had something interesting for breakfast"
        assert censor(text) == text

    def test_empty(self):
        assert censor("") == ""

    def test_custom_blocked_words(self):
        assert censor("hello World", blocked={"WORLD"}) == "hello ****"

    def test_blocked_set_not_mutated(self):
        blocked = {"Kerfuffle"}
        censor("kerfuffle", blocked)
        assert blocked == {"Kerfuffle"}

    def test_default_words(self):
        assert BLOCKED_WORDS == {"kerfuffle", "sharbert", "fornax"}


class TestValidateChirp:
    """Tests for request body validation."""

    def test_valid_chirp(self):
        chirp = validate_chirp(body_of("what a kerfuffle"))

        assert chirp == Chirp(body="what a kerfuffle", cleaned_body="what a ****")
        assert chirp.to_dict() == {"cleaned_body": "what a ****"}

    def test_exactly_max_length_accepted(self):
        text = "a" * MAX_CHIRP_LENGTH
        assert validate_chirp(body_of(text)).cleaned_body == text

    def test_too_long_rejected(self):
        with pytest.raises(ChirpTooLongError) as exc_info:
            validate_chirp(body_of("a" * (MAX_CHIRP_LENGTH + 1)))

        assert exc_info.value.message == "Chirp is too long"
        assert exc_info.value.status_code == 400

    def test_length_counts_characters_not_bytes(self):
        text = "é" * MAX_CHIRP_LENGTH
        assert len(text.encode("utf-8")) > MAX_CHIRP_LENGTH

        assert validate_chirp(body_of(text)).body == text

    def test_custom_max_length(self):
        with pytest.raises(ChirpTooLongError):
            validate_chirp(body_of("hello"), max_length=4)

    def test_empty_body_is_valid(self):
        assert validate_chirp(body_of("")).cleaned_body == ""

    @pytest.mark.parametrize("raw", [
        b"",
        b"not json",
        b"{\"body\": ",
        b"[\"body\"]",
        b"\"just a string\"",
        b"{}",
        b"{\"text\": \"hello\"}",
        b"{\"body\": 42}",
        b"{\"body\": null}",
        b"\x80\x81abc",
    ])
    def test_malformed_bodies(self, raw):
        with pytest.raises(MalformedChirpError) as exc_info:
            validate_chirp(raw)

        assert exc_info.value.message == "Invalid request body"

    def test_errors_share_base_class(self):
        assert issubclass(MalformedChirpError, ChirpError)
        assert issubclass(ChirpTooLongError, ChirpError)

    def test_extra_fields_ignored(self):
        raw = json.dumps({"body": "hi", "extra": True}).encode()
        assert validate_chirp(raw).cleaned_body == "hi"
