"""Telemetry sink abstraction.

The orchestrator reports exactly two outcomes (``FormatSucceeded`` and
``FormatFailed``). Delivery is the sink's concern; ``write_event`` must be safe to call
from concurrent completions. Callers go through ``emit_event`` so a failing
sink never interrupts a completion.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from rich.console import Console
from rich.markup import escape

from ..models.telemetry import TelemetryEvent

console = Console(stderr=True)


@runtime_checkable
class TelemetrySink(Protocol):
    """Protocol that all telemetry sinks must implement."""

    def write_event(self, event: TelemetryEvent) -> None: ...


class NullTelemetrySink:
    """Discards every event."""

    def write_event(self, event: TelemetryEvent) -> None:
        return None


class ConsoleTelemetrySink:
    """Prints events as dim one-liners on stderr."""

    def __init__(self, target: Console | None = None):
        self.console = target or console

    def write_event(self, event: TelemetryEvent) -> None:
        fields = " ".join(f"{k}={v!r}" for k, v in event.model_dump().items())
        self.console.print(f"  [dim]telemetry {event.name} {escape(fields)}[/dim]", highlight=False)


def get_telemetry_sink(config: dict) -> TelemetrySink:
    """Factory function for the configured telemetry sink."""
    if config.get("telemetry", {}).get("enabled", True):
        return ConsoleTelemetrySink()
    return NullTelemetrySink()


def emit_event(sink: TelemetrySink, event: TelemetryEvent) -> None:
    """Deliver one event, reporting and dropping any sink failure."""
    try:
        sink.write_event(event)
    except Exception as e:
        console.print(
            f"  [yellow]WARN[/yellow] Telemetry sink dropped {event.name}: {escape(type(e).__name__)}",
            highlight=False,
        )
