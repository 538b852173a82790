"""Error types raised by the Moodle Web Services client.

Every failure carries a ``kind`` discriminator so callers can branch on
``err.kind`` exhaustively instead of chaining isinstance checks:

  - AUTH       -> MoodleAuthError
  - API        -> MoodleApiError (remote application error)
  - NETWORK    -> MoodleNetworkError (timeout, non-2xx, connection failure)
  - VALIDATION -> MoodleValidationError (bad local configuration)

None of these are retried by the client.
"""

from __future__ import annotations

import enum
from typing import Any, ClassVar, TypedDict


class ErrorKind(enum.Enum):
    AUTH = "auth"
    API = "api"
    NETWORK = "network"
    VALIDATION = "validation"


class MoodleError(Exception):
    """Base class for all client failures.

    Only the subclasses are raised; each one sets ``kind``.
    """

    kind: ClassVar[ErrorKind]

    def __init__(
        self,
        message: str,
        code: str | None = None,
        debug_info: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.debug_info = debug_info

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, code={self.code!r})"


class MoodleAuthError(MoodleError):
    kind = ErrorKind.AUTH

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "auth_failed")


class MoodleApiError(MoodleError):
    """Error reported by Moodle itself in a JSON error payload."""

    kind = ErrorKind.API

    def __init__(
        self,
        message: str,
        error_code: str,
        exception: str | None = None,
        debug_info: str | None = None,
    ) -> None:
        super().__init__(message, error_code, debug_info)
        self.error_code = error_code
        self.exception = exception


class MoodleNetworkError(MoodleError):
    kind = ErrorKind.NETWORK

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, "network_error")
        self.cause = cause
        self.status_code = status_code


class MoodleValidationError(MoodleError):
    kind = ErrorKind.VALIDATION

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, "validation_error")
        self.field = field


class MoodleErrorResponse(TypedDict, total=False):
    """Shape of the JSON body Moodle returns on failure."""

    exception: str
    errorcode: str
    message: str
    debuginfo: str


def is_moodle_error_response(value: Any) -> bool:
    """Return True if a decoded response body is a Moodle error payload.

    A body counts as an error when it is an object with a ``message`` and at
    least one of ``exception`` or ``errorcode``. A bare ``message`` is not
    enough; some functions return that as ordinary data.
    """
    return (
        isinstance(value, dict)
        and "message" in value
        and ("exception" in value or "errorcode" in value)
    )
