"""Test helpers shared across client tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable
from urllib.parse import parse_qsl

import httpx

BASE_URL = "https://moodle.example.com"
TOKEN = "test-token"


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it sees.

    ``last_form`` decodes the most recent body into ordered pairs.
    """

    def __init__(self, handler: Callable[[httpx.Request], Any]) -> None:
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request):
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)

    @property
    def last_form(self) -> list[tuple[str, str]]:
        return parse_qsl(self.requests[-1].content.decode(), keep_blank_values=True)


def json_response(body: Any, status_code: int = 200) -> httpx.Response:
    """Build a response whose body is ``body`` encoded as JSON, null included."""
    return httpx.Response(
        status_code,
        content=json.dumps(body).encode(),
        headers={"Content-Type": "application/json"},
    )


FIXTURES_DIR = Path(__file__).parent / "fixtures"
SAMPLE_SCHEMA = FIXTURES_DIR / "MOODLE_405_STABLE.json"


def load_sample_raw() -> dict[str, Any]:
    """Read the sample schema document as raw JSON."""
    with open(SAMPLE_SCHEMA, encoding="utf-8") as f:
        return json.load(f)
