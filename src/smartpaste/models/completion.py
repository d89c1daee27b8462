"""Completion request/response data models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

STATUS_SUCCESS = 0
STATUS_FAILURE = -1

FINISH_REASON_LENGTH = "length"


class CompletionRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    system_instructions: str
    user_message: str


class DashScopeUsage(BaseModel):
    input_tokens: StrictInt = Field(ge=0)
    output_tokens: StrictInt = Field(ge=0)


class DashScopeOutput(BaseModel):
    text: StrictStr
    finish_reason: StrictStr


class DashScopePayload(BaseModel):
    """Typed view of the generation response body. Extra keys are ignored."""

    usage: DashScopeUsage
    output: DashScopeOutput


class ProviderResponse(BaseModel):
    prompt_tokens: int = Field(ge=0)
    completion_tokens: int = Field(ge=0)
    content: str
    finish_reason: str

    @property
    def truncated(self) -> bool:
        return self.finish_reason == FINISH_REASON_LENGTH

    @classmethod
    def from_payload(cls, payload: DashScopePayload) -> ProviderResponse:
        return cls(
            prompt_tokens=payload.usage.input_tokens,
            completion_tokens=payload.usage.output_tokens,
            content=payload.output.text,
            finish_reason=payload.output.finish_reason,
        )


class CompletionResult(BaseModel):
    response: Optional[str] = None
    status_code: int = STATUS_FAILURE

    @property
    def success(self) -> bool:
        return self.status_code == STATUS_SUCCESS

    @classmethod
    def succeeded(cls, response: str) -> CompletionResult:
        return cls(response=response, status_code=STATUS_SUCCESS)

    @classmethod
    def failed(cls) -> CompletionResult:
        return cls(response=None, status_code=STATUS_FAILURE)
