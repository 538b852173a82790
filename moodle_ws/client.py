"""Configured Moodle Web Services client."""

from __future__ import annotations

import os
from typing import Any, TypedDict

import httpx

from .call import DEFAULT_TIMEOUT_MS, CallResult, call
from .errors import MoodleValidationError
from .serialize import SerializableParams


class SiteFunction(TypedDict):
    name: str
    version: str


class SiteInfo(TypedDict, total=False):
    sitename: str
    username: str
    firstname: str
    lastname: str
    fullname: str
    lang: str
    userid: int
    siteurl: str
    userpictureurl: str
    functions: list[SiteFunction]
    release: str
    version: str


class MoodleClient:
    """Typed entry point for Moodle Web Services.

    Usage::

        client = MoodleClient("https://moodle.example.com", token="...")
        result = await client.call("core_course_get_courses", {"options": {"ids": [1, 2]}})
        courses = result.data

    Generated bindings in ``moodle_ws.generated`` take a client as their
    first argument.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not base_url:
            raise MoodleValidationError("base_url is required", field="base_url")
        if not token:
            raise MoodleValidationError("token is required", field="token")

        self._base_url = base_url.rstrip("/")
        self._token = token
        self.timeout_ms = timeout_ms
        self._transport = transport

    @classmethod
    def from_env(
        cls,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> MoodleClient:
        """Build a client from MOODLE_URL, MOODLE_TOKEN and MOODLE_TIMEOUT_MS."""
        raw_timeout = os.environ.get("MOODLE_TIMEOUT_MS", "")
        try:
            timeout_ms = int(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT_MS
        except ValueError:
            raise MoodleValidationError(
                f"MOODLE_TIMEOUT_MS must be an integer, got {raw_timeout!r}",
                field="timeout_ms",
            ) from None
        return cls(
            os.environ.get("MOODLE_URL", ""),
            os.environ.get("MOODLE_TOKEN", ""),
            timeout_ms=timeout_ms,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    def __repr__(self) -> str:
        return f"MoodleClient(base_url={self._base_url!r})"

    async def call(
        self,
        wsfunction: str,
        params: SerializableParams | None = None,
    ) -> CallResult[Any]:
        """Call a web service function with this client's settings."""
        return await call(
            wsfunction,
            params,
            base_url=self._base_url,
            token=self._token,
            timeout_ms=self.timeout_ms,
            transport=self._transport,
        )

    async def get_site_info(self) -> CallResult[SiteInfo]:
        """Fetch site info for the token's user; handy as a connection check."""
        return await self.call("core_webservice_get_site_info")
