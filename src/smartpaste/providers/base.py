"""Completion transport abstraction."""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

import httpx

from ..core.telemetry import NullTelemetrySink, TelemetrySink
from ..models.completion import CompletionRequest, ProviderResponse


@runtime_checkable
class CompletionTransport(Protocol):
    """Protocol that all completion providers must implement.

    ``post`` performs one network round trip and returns the raw success
    body; ``parse`` turns that body into a response. Both raise a
    ``SmartPasteError`` subclass on failure. ``send`` chains the two.
    """

    name: str

    async def post(self, request: CompletionRequest, secret: str) -> bytes: ...

    def parse(self, body: str | bytes) -> ProviderResponse: ...

    async def send(self, request: CompletionRequest, secret: str) -> ProviderResponse: ...


def get_ai_provider(
    config: dict,
    telemetry: Optional[TelemetrySink] = None,
    http_transport: Optional[httpx.AsyncBaseTransport] = None,
) -> CompletionTransport:
    """Factory function to create the configured completion provider."""
    ai_config = config.get("ai", {})
    provider_name = ai_config.get("provider", "dashscope")
    provider_config = dict(ai_config.get(provider_name, {}))
    timeout = ai_config.get("timeout_seconds")

    if provider_name == "dashscope":
        from .dashscope import DashScopeProvider
        return DashScopeProvider(
            provider_config,
            timeout=timeout,
            telemetry=telemetry or NullTelemetrySink(),
            http_transport=http_transport,
        )
    else:
        raise ValueError(f"Unknown AI provider: {provider_name}")
