"""DashScope text-generation provider."""

from __future__ import annotations

from typing import Optional

import httpx
from pydantic import ValidationError
from rich.console import Console

from ..core.telemetry import NullTelemetrySink, TelemetrySink, emit_event
from ..errors import ParseError, TransportError, UnescapeError
from ..models.completion import (
    CompletionRequest,
    DashScopePayload,
    ProviderResponse,
)
from ..models.telemetry import FormatFailed
from ..utils.unescape import unescape_text

console = Console(stderr=True)


def build_request_body(request: CompletionRequest, model: str) -> dict:
    return {
        "model": model,
        "input": {
            "messages": [
                {"role": "system", "content": request.system_instructions},
                {"role": "user", "content": request.user_message},
            ],
        },
    }


def parse_response(body: str | bytes) -> ProviderResponse:
    """Parse a generation response body into a ``ProviderResponse``.

    Raises ``ParseError`` when the body is not JSON or any of
    ``usage.input_tokens``, ``usage.output_tokens``, ``output.text`` and
    ``output.finish_reason`` is missing or has the wrong type.
    """
    try:
        payload = DashScopePayload.model_validate_json(body)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
            for err in e.errors()
        )
        raise ParseError(f"Unexpected response schema: {problems}") from e
    return ProviderResponse.from_payload(payload)


class DashScopeProvider:
    name = "dashscope"
    API_URL = "https://dashscope.aliyuncs.com/api/v1/services/aigc/text-generation/generation"
    DEFAULT_MODEL = "qwen-plus-latest"

    def __init__(
        self,
        provider_config: Optional[dict] = None,
        timeout: Optional[float] = None,
        telemetry: Optional[TelemetrySink] = None,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = provider_config or {}
        self.endpoint = self.config.get("endpoint") or self.API_URL
        self.model = self.config.get("model") or self.DEFAULT_MODEL
        self.timeout = timeout
        self.telemetry = telemetry or NullTelemetrySink()
        self.http_transport = http_transport

    async def post(self, request: CompletionRequest, secret: str) -> bytes:
        """Issue the generation request and return the raw success body."""
        body = build_request_body(request, self.model)
        headers = {
            "Authorization": f"Bearer {secret}",
            "Accept": "application/json",
        }

        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout), transport=self.http_transport
        ) as client:
            response = await client.post(self.endpoint, json=body, headers=headers)
            try:
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                raise TransportError(response.status_code, response.text) from e
            return response.content

    def parse(self, body: str | bytes) -> ProviderResponse:
        """Parse a success body and decode escapes in the generated text."""
        parsed = parse_response(body)

        try:
            text = unescape_text(parsed.content)
        except UnescapeError as e:
            # Keep the escaped text; the response itself is still usable.
            emit_event(self.telemetry, FormatFailed(error_message=str(e)))
        else:
            parsed = parsed.model_copy(update={"content": text})

        if parsed.truncated:
            console.print("  [yellow]WARN[/yellow] Completion cut off due to length constraints")

        return parsed

    async def send(self, request: CompletionRequest, secret: str) -> ProviderResponse:
        return self.parse(await self.post(request, secret))
