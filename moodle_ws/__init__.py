"""Typed Python client for Moodle Web Services.

Typed per-version bindings are generated into ``moodle_ws.generated`` by
``python -m generator``.
"""

from .call import CallResult, MoodleWarning, build_request_params, call
from .client import MoodleClient, SiteInfo
from .errors import (
    ErrorKind,
    MoodleApiError,
    MoodleAuthError,
    MoodleError,
    MoodleErrorResponse,
    MoodleNetworkError,
    MoodleValidationError,
    is_moodle_error_response,
)
from .serialize import (
    SerializableParams,
    SerializableValue,
    encode_form,
    merge_params,
    serialize_params,
)

__all__ = [
    "CallResult",
    "ErrorKind",
    "MoodleApiError",
    "MoodleAuthError",
    "MoodleClient",
    "MoodleError",
    "MoodleErrorResponse",
    "MoodleNetworkError",
    "MoodleValidationError",
    "MoodleWarning",
    "SerializableParams",
    "SerializableValue",
    "SiteInfo",
    "build_request_params",
    "call",
    "encode_form",
    "is_moodle_error_response",
    "merge_params",
    "serialize_params",
]
