"""Shared fixtures for smartpaste tests."""

from __future__ import annotations

import json
from typing import Callable

import httpx
import pytest

from smartpaste.models.telemetry import TelemetryEvent


class RecordingTelemetrySink:
    def __init__(self):
        self.events: list[TelemetryEvent] = []

    def write_event(self, event: TelemetryEvent) -> None:
        self.events.append(event)

    @property
    def names(self) -> list[str]:
        return [e.name for e in self.events]


@pytest.fixture
def telemetry() -> RecordingTelemetrySink:
    return RecordingTelemetrySink()


@pytest.fixture
def success_payload() -> dict:
    """Return the bulleted-list response body."""
    return {
        "usage": {"input_tokens": 10, "output_tokens": 5},
        "output": {"text": "- a\\n- b\\n- c", "finish_reason": "stop"},
        "request_id": "req-123",
    }


@pytest.fixture
def make_transport() -> Callable[..., httpx.MockTransport]:
    """Build an httpx mock transport that records requests and returns a canned reply."""

    def factory(status_code: int = 200, body: dict | str | None = None, seen: list | None = None):
        def handler(request: httpx.Request) -> httpx.Response:
            if seen is not None:
                seen.append(request)
            if isinstance(body, dict):
                return httpx.Response(status_code, content=json.dumps(body).encode("utf-8"))
            return httpx.Response(status_code, text=body or "")

        return httpx.MockTransport(handler)

    return factory
