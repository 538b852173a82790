"""Shared fixtures for the Moodle client and generator tests."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

from generator.schema_parser import SchemaDocument, parse_document
from helpers import SAMPLE_SCHEMA, RecordingTransport, json_response, load_sample_raw


# ---------------------------------------------------------------------------
# Schema fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session")
def sample_schema_path() -> Path:
    return SAMPLE_SCHEMA


@pytest.fixture(scope="session")
def raw_schema() -> dict[str, Any]:
    return load_sample_raw()


@pytest.fixture(scope="session")
def document(raw_schema) -> SchemaDocument:
    return parse_document(raw_schema)


# ---------------------------------------------------------------------------
# Transport fakes
# ---------------------------------------------------------------------------

@pytest.fixture
def json_transport() -> Callable[..., RecordingTransport]:
    """Return a factory for transports that answer with a fixed JSON body.

    Usage::

        transport = json_transport({"sitename": "x"})
        transport = json_transport(None, status_code=503)
    """
    def _factory(body: Any = None, status_code: int = 200) -> RecordingTransport:
        def handler(request: httpx.Request) -> httpx.Response:
            return json_response(body, status_code)
        return RecordingTransport(handler)
    return _factory


# ---------------------------------------------------------------------------
# Live instance: skip unless configured
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session")
def live_client():
    """A MoodleClient for a real instance, or skip the test."""
    from moodle_ws import MoodleClient

    if not os.environ.get("MOODLE_URL") or not os.environ.get("MOODLE_TOKEN"):
        pytest.skip("MOODLE_URL / MOODLE_TOKEN not set")
    return MoodleClient.from_env()
