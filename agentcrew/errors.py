"""API errors and their conversion to JSON error responses."""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "internal server error"


class APIError(Exception):
    """An error carrying an HTTP status code and a message for the client."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __repr__(self) -> str:
        return f"APIError(code={self.code!r}, message={self.message!r})"


def error_response(error: BaseException) -> tuple[int, dict[str, Any]]:
    """Return the status code and JSON body for an error.

    Client errors (4xx) expose their message; server errors and unexpected
    exceptions get a generic message so details are not leaked.
    """
    code = 500
    message = INTERNAL_ERROR_MESSAGE
    if isinstance(error, APIError):
        code = error.code
        if code < 500:
            message = error.message
        else:
            logger.error("internal error: %s", error.message)
    else:
        logger.error("unhandled error: %s", error)
    return code, {"error": message}