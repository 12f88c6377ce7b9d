"""
Remote Config Errors.

A single exception type is raised by this package. Its ``code`` tells the
failure kind apart: ``invalid-argument`` for values failing a shape, type or
format check, and the service's own error kinds for failed REST calls.
"""

from __future__ import annotations

import json
from typing import Optional

# Service error status -> client error code
ERROR_CODE_MAPPING = {
    "ABORTED": "aborted",
    "ALREADY_EXISTS": "already-exists",
    "INVALID_ARGUMENT": "invalid-argument",
    "INTERNAL": "internal-error",
    "FAILED_PRECONDITION": "failed-precondition",
    "NOT_FOUND": "not-found",
    "OUT_OF_RANGE": "out-of-range",
    "PERMISSION_DENIED": "permission-denied",
    "RESOURCE_EXHAUSTED": "resource-exhausted",
    "UNAUTHENTICATED": "unauthenticated",
    "UNKNOWN": "unknown-error",
}

INVALID_ARGUMENT = "invalid-argument"
UNKNOWN_ERROR = "unknown-error"


class RemoteConfigError(Exception):
    """Raised when a Remote Config value is invalid or a service call fails."""

    def __init__(
        self,
        message: str,
        code: str = UNKNOWN_ERROR,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


def invalid_argument(message: str) -> RemoteConfigError:
    """Build an ``invalid-argument`` error."""
    return RemoteConfigError(message, code=INVALID_ARGUMENT)


def describe(value: object) -> str:
    """Render a rejected value for an error message, as JSON where possible."""
    try:
        return json.dumps(value)
    except (TypeError, ValueError):
        return repr(value)
