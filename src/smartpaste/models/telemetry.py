"""Telemetry event records."""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict


class TelemetryEvent(BaseModel):
    name: ClassVar[str] = "Event"


class FormatSucceeded(TelemetryEvent):
    model_config = ConfigDict(protected_namespaces=())

    name: ClassVar[str] = "FormatSucceeded"

    prompt_tokens: int
    completion_tokens: int
    model_name: str


class FormatFailed(TelemetryEvent):
    name: ClassVar[str] = "FormatFailed"

    error_message: str
