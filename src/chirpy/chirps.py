"""
=============================================================================
CHIRP VALIDATION
=============================================================================

A chirp is a short text post. Validation turns a raw request body into
either a cleaned chirp or an error the handler can send straight back:

    b'{"body": "what a kerfuffle"}'
            │
            ├── not JSON / not an object / no string "body"  → MalformedChirpError (400)
            ├── more than 140 characters                     → ChirpTooLongError  (400)
            ▼
    Chirp(body="what a kerfuffle", cleaned_body="what a ****")

Censoring works word by word on single spaces, ignoring case:

    "Kerfuffle  fornax!"  →  "****  fornax!"

The double space survives because the empty token between the spaces is
kept, and "fornax!" survives because punctuation is part of the word.

Length is measured in characters (code points), not bytes, so a chirp of
140 emoji is accepted.

Nothing is stored; a validated chirp exists only for the length of the
request.

=============================================================================
"""

import json
from dataclasses import dataclass
from typing import Iterable

BLOCKED_WORDS = frozenset({"kerfuffle", "sharbert", "fornax"})
MAX_CHIRP_LENGTH = 140
CENSOR_MASK = "****"


class ChirpError(Exception):
    """Base class for chirp validation failures. Carries the HTTP answer."""

    status_code = 400
    message = "Invalid chirp"

    def __init__(self, message: str = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class MalformedChirpError(ChirpError):
    message = "Invalid request body"


class ChirpTooLongError(ChirpError):
    message = "Chirp is too long"


@dataclass(frozen=True)
class Chirp:
    body: str
    cleaned_body: str

    def to_dict(self) -> dict:
        return {"cleaned_body": self.cleaned_body}


def censor(text: str, blocked: Iterable[str] = BLOCKED_WORDS) -> str:
    """
    Replace every blocked word in ``text`` with ``****``.

    Words are split on single spaces and compared case-insensitively;
    ``blocked`` itself is not modified.

        >>> censor("This is a kerfuffle opinion I need to share with the world")
        'This is a **** opinion I need to share with the world'
        >>> censor("Sharbert! is fine")
        'Sharbert! is fine'
    """
    if not text:
        return ""

    lowered = {word.lower() for word in blocked}
    words = text.split(" ")
    return " ".join(CENSOR_MASK if word.lower() in lowered else word for word in words)


def validate_chirp(
    raw_body: bytes,
    blocked: Iterable[str] = BLOCKED_WORDS,
    max_length: int = MAX_CHIRP_LENGTH,
) -> Chirp:
    """
    Decode and validate a ``{"body": "..."}`` request body.

    Args:
        raw_body: Request body bytes (or an already decoded str).
        blocked: Words to censor.
        max_length: Longest accepted chirp, in characters.

    Returns:
        The chirp with its censored text.

    Raises:
        MalformedChirpError: The body is not a JSON object with a string
            "body" field.
        ChirpTooLongError: The chirp is longer than ``max_length``.
    """
    try:
        params = json.loads(raw_body)
    except (ValueError, TypeError):
        raise MalformedChirpError() from None

    if not isinstance(params, dict):
        raise MalformedChirpError()

    body = params.get("body")
    if not isinstance(body, str):
        raise MalformedChirpError()

    if len(body) > max_length:
        raise ChirpTooLongError()

    return Chirp(body=body, cleaned_body=censor(body, blocked))
