"""
Chirp validation endpoint.

    POST /api/validate_chirp  {"body": "what a kerfuffle"}

    200  {"cleaned_body": "what a ****"}
    400  {"error": "Invalid request body"}
    400  {"error": "Chirp is too long"}
"""

from typing import Iterable

from ..chirps import BLOCKED_WORDS, MAX_CHIRP_LENGTH, ChirpError, validate_chirp
from ..http.request import HTTPRequest
from ..http.response import HTTPResponse, respond_with_error, respond_with_json
from ..http.status_codes import HTTPStatus


class ChirpHandler:
    def __init__(
        self,
        blocked_words: Iterable[str] = BLOCKED_WORDS,
        max_length: int = MAX_CHIRP_LENGTH,
    ):
        self.blocked_words = frozenset(word.lower() for word in blocked_words)
        self.max_length = max_length

    def validate(self, request: HTTPRequest) -> HTTPResponse:
        try:
            chirp = validate_chirp(request.body, self.blocked_words, self.max_length)
        except ChirpError as e:
            return respond_with_error(e.status_code, e.message)

        return respond_with_json(HTTPStatus.OK, chirp.to_dict())
