"""Single-shot POST to Moodle's REST endpoint with error classification."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Generic, TypedDict, TypeVar

import httpx

from .errors import MoodleApiError, MoodleNetworkError, is_moodle_error_response
from .serialize import SerializableParams, encode_form, serialize_params

logger = logging.getLogger(__name__)

REST_ENDPOINT = "/webservice/rest/server.php"
DEFAULT_TIMEOUT_MS = 30000

# Keys the protocol owns; caller values for these are dropped.
_PROTOCOL_KEYS = ("wstoken", "wsfunction", "moodlewsrestformat")

T = TypeVar("T")


class MoodleWarning(TypedDict, total=False):
    item: str
    itemid: int
    warningcode: str
    message: str


@dataclass(frozen=True)
class CallResult(Generic[T]):
    """Outcome of a successful call.

    ``data`` is the decoded body as Moodle sent it. When the body carries a
    ``warnings`` list it is also exposed here, but ``data`` is not unwrapped:
    Moodle functions are inconsistent about wrapping their results.
    """

    data: T
    warnings: tuple[MoodleWarning, ...] | None = None


def build_request_params(
    wsfunction: str,
    token: str,
    params: SerializableParams | None = None,
) -> dict[str, Any]:
    """Build the request mapping with protocol fields first.

    Caller keys that collide with a protocol field are dropped so the token,
    function name and response format can never be overridden.
    """
    request: dict[str, Any] = {
        "wstoken": token,
        "wsfunction": wsfunction,
        "moodlewsrestformat": "json",
    }
    for key, value in (params or {}).items():
        if key in _PROTOCOL_KEYS:
            continue
        request[key] = value
    return request


def _extract_warnings(data: Any) -> tuple[MoodleWarning, ...] | None:
    if isinstance(data, dict) and isinstance(data.get("warnings"), list):
        return tuple(data["warnings"])
    return None


async def call(
    wsfunction: str,
    params: SerializableParams | None = None,
    *,
    base_url: str,
    token: str,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    transport: httpx.AsyncBaseTransport | None = None,
) -> CallResult[Any]:
    """Call a Moodle web service function once.

    Raises MoodleApiError when Moodle reports an error payload and
    MoodleNetworkError for timeouts, non-2xx statuses, transport failures
    and undecodable bodies.
    """
    url = base_url.rstrip("/") + REST_ENDPOINT
    body = encode_form(serialize_params(build_request_params(wsfunction, token, params)))

    logger.debug("POST %s wsfunction=%s", url, wsfunction)

    # httpx per-phase timeouts share the call deadline; their default is 5s.
    async with httpx.AsyncClient(transport=transport, timeout=timeout_ms / 1000) as client:
        try:
            response = await asyncio.wait_for(
                client.post(
                    url,
                    content=body,
                    headers={"Content-Type": "application/x-www-form-urlencoded"},
                ),
                timeout=timeout_ms / 1000,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            logger.warning("%s timed out after %sms", wsfunction, timeout_ms)
            raise MoodleNetworkError(
                f"Request timeout after {timeout_ms}ms", cause=exc,
            ) from exc
        except Exception as exc:
            # httpx.HTTPError, and anything a custom transport raises
            logger.warning("%s transport error: %r", wsfunction, exc)
            raise MoodleNetworkError(str(exc) or type(exc).__name__, cause=exc) from exc

    if not response.is_success:
        logger.warning("%s returned HTTP %s", wsfunction, response.status_code)
        raise MoodleNetworkError(
            f"HTTP {response.status_code}: {response.reason_phrase}",
            status_code=response.status_code,
        )

    try:
        data = response.json()
    except ValueError as exc:
        raise MoodleNetworkError(f"Invalid JSON response: {exc}", cause=exc) from exc

    if is_moodle_error_response(data):
        logger.warning(
            "%s failed: %s (%s)", wsfunction, data["message"], data.get("errorcode"),
        )
        raise MoodleApiError(
            data["message"],
            data["errorcode"] if data.get("errorcode") is not None else "unknown",
            data.get("exception"),
            data.get("debuginfo"),
        )

    return CallResult(data=data, warnings=_extract_warnings(data))
