"""Single-call completion orchestrator.

Sequences credential lookup, prompt building and the provider round trip,
then reduces the outcome to a ``CompletionResult`` and one telemetry event.
No exception raised along the way reaches the caller.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

import httpx
from rich.console import Console
from rich.markup import escape

from ..models.completion import CompletionResult
from ..models.telemetry import FormatFailed, FormatSucceeded
from ..providers.base import CompletionTransport, get_ai_provider
from ..utils.sanitize import sanitize_error
from .credentials import (
    DEFAULT_ACCOUNT,
    DEFAULT_SERVICE,
    CredentialAccessor,
    SecretResolver,
    keyring_resolver,
)
from .prompts import build_request
from .telemetry import NullTelemetrySink, TelemetrySink, emit_event

console = Console(stderr=True)

DEFAULT_REPORTED_MODEL = "gpt-3.5-turbo-instruct"


class CompletionState(str, Enum):
    IDLE = "idle"
    BUILDING = "building"
    SENDING = "sending"
    PARSING = "parsing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class CompletionOrchestrator:
    def __init__(
        self,
        transport: CompletionTransport,
        credentials: Optional[CredentialAccessor] = None,
        telemetry: Optional[TelemetrySink] = None,
        model_name: str = DEFAULT_REPORTED_MODEL,
    ):
        self.transport = transport
        self.credentials = credentials or CredentialAccessor()
        self.telemetry = telemetry or NullTelemetrySink()
        self.model_name = model_name

    @classmethod
    def from_config(
        cls,
        config: dict,
        telemetry: Optional[TelemetrySink] = None,
        resolver: Optional[SecretResolver] = None,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> CompletionOrchestrator:
        """Wire credentials, provider and telemetry from an effective config."""
        telemetry = telemetry or NullTelemetrySink()
        cred_config = config.get("credentials", {})
        if resolver is None:
            resolver = keyring_resolver(
                cred_config.get("service", DEFAULT_SERVICE),
                cred_config.get("account", DEFAULT_ACCOUNT),
            )
        ai_config = config.get("ai", {})
        provider_config = ai_config.get(ai_config.get("provider", "dashscope"), {})
        return cls(
            transport=get_ai_provider(config, telemetry, http_transport),
            credentials=CredentialAccessor(resolver),
            telemetry=telemetry,
            model_name=provider_config.get("reported_model", DEFAULT_REPORTED_MODEL),
        )

    def is_enabled(self) -> bool:
        return self.credentials.is_enabled()

    def get_secret(self) -> str:
        return self.credentials.get()

    def set_secret(self, secret: str) -> None:
        self.credentials.set(secret)

    async def complete(self, instructions: str, content: str) -> CompletionResult:
        """Reformat ``content`` according to ``instructions``.

        Returns ``CompletionResult(response=<text>, status_code=0)`` on success
        and ``CompletionResult(response=None, status_code=-1)`` on any failure.
        """
        result, _ = await self.complete_with_state(instructions, content)
        return result

    async def complete_with_state(
        self, instructions: str, content: str
    ) -> tuple[CompletionResult, CompletionState]:
        """Like ``complete``, also returning the state this call finished in.

        The state lives only for the duration of the call, so overlapping
        calls on one orchestrator never see each other's progress.
        """
        secret = self.credentials.get()
        state = CompletionState.IDLE
        try:
            state = CompletionState.BUILDING
            request = build_request(instructions, content)

            state = CompletionState.SENDING
            body = await self.transport.post(request, secret)

            state = CompletionState.PARSING
            response = self.transport.parse(body)
        except Exception as e:
            message = sanitize_error(str(e) or type(e).__name__, secret)
            try:
                console.print(
                    f"  [red]ERROR[/red] Completion failed while {state.value}: {escape(message)}"
                )
            except OSError:
                pass
            emit_event(self.telemetry, FormatFailed(error_message=message))
            return CompletionResult.failed(), CompletionState.FAILED

        emit_event(
            self.telemetry,
            FormatSucceeded(
                prompt_tokens=response.prompt_tokens,
                completion_tokens=response.completion_tokens,
                model_name=self.model_name,
            ),
        )
        return CompletionResult.succeeded(response.content), CompletionState.SUCCEEDED
