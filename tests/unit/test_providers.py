"""Tests for providers/."""

from __future__ import annotations

import json

import pytest

from smartpaste.core.prompts import build_request
from smartpaste.errors import ParseError, TransportError
from smartpaste.providers.base import CompletionTransport, get_ai_provider
from smartpaste.providers.dashscope import DashScopeProvider, build_request_body, parse_response


class TestGetAIProvider:
    def test_dashscope_provider(self):
        provider = get_ai_provider({"ai": {"provider": "dashscope"}})
        assert provider.name == "dashscope"
        assert isinstance(provider, CompletionTransport)

    def test_default_provider(self):
        assert get_ai_provider({}).name == "dashscope"

    def test_invalid_provider_raises(self):
        with pytest.raises(ValueError, match="Unknown"):
            get_ai_provider({"ai": {"provider": "invalid"}})

    def test_endpoint_and_model_from_config(self):
        config = {"ai": {"dashscope": {"endpoint": "https://example.test/gen", "model": "qwen-max"}}}
        provider = get_ai_provider(config)
        assert provider.endpoint == "https://example.test/gen"
        assert provider.model == "qwen-max"


class TestBuildRequestBody:
    def test_envelope_shape(self):
        request = build_request("upper", "abc")
        body = build_request_body(request, "qwen-plus-latest")
        assert body["model"] == "qwen-plus-latest"
        messages = body["input"]["messages"]
        assert [m["role"] for m in messages] == ["system", "user"]
        assert messages[0]["content"] == request.system_instructions
        assert messages[1]["content"] == request.user_message


class TestParseResponse:
    def test_extracts_fields(self, success_payload):
        parsed = parse_response(json.dumps(success_payload))
        assert parsed.prompt_tokens == 10
        assert parsed.completion_tokens == 5
        assert parsed.content == "- a\\n- b\\n- c"
        assert parsed.finish_reason == "stop"
        assert not parsed.truncated

    def test_invalid_json(self):
        with pytest.raises(ParseError):
            parse_response("not json")

    def test_wrong_type_tokens(self):
        body = {"usage": {"input_tokens": "10", "output_tokens": 5}, "output": {"text": "t", "finish_reason": "stop"}}
        with pytest.raises(ParseError, match="input_tokens"):
            parse_response(json.dumps(body))

    def test_null_text(self):
        body = {"usage": {"input_tokens": 1, "output_tokens": 5}, "output": {"text": None, "finish_reason": "stop"}}
        with pytest.raises(ParseError):
            parse_response(json.dumps(body))

    def test_negative_tokens(self):
        body = {"usage": {"input_tokens": -1, "output_tokens": 5}, "output": {"text": "t", "finish_reason": "stop"}}
        with pytest.raises(ParseError):
            parse_response(json.dumps(body))

    def test_missing_usage(self):
        with pytest.raises(ParseError, match="usage"):
            parse_response(json.dumps({"output": {"text": "t", "finish_reason": "stop"}}))


class TestDashScopeSend:
    @pytest.mark.asyncio
    async def test_request_headers_and_body(self, make_transport, success_payload):
        seen: list = []
        provider = DashScopeProvider(http_transport=make_transport(200, success_payload, seen=seen))

        response = await provider.send(build_request("bullets", "a, b, c"), "sk-secret")

        assert response.content == "- a\n- b\n- c"
        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == DashScopeProvider.API_URL
        assert request.headers["Authorization"] == "Bearer sk-secret"
        assert request.headers["Accept"] == "application/json"
        assert request.headers["Content-Type"] == "application/json"
        body = json.loads(request.content)
        assert body["model"] == "qwen-plus-latest"
        assert "bullets" in body["input"]["messages"][1]["content"]

    @pytest.mark.asyncio
    async def test_error_status_carries_body(self, make_transport):
        provider = DashScopeProvider(http_transport=make_transport(500, "rate limited"))
        with pytest.raises(TransportError) as exc_info:
            await provider.send(build_request("x", "y"), "sk-secret")
        assert exc_info.value.status_code == 500
        assert exc_info.value.body == "rate limited"
        assert "rate limited" in str(exc_info.value)
        assert exc_info.value.__cause__ is not None

    @pytest.mark.asyncio
    async def test_length_truncation_still_succeeds(self, make_transport):
        payload = {
            "usage": {"input_tokens": 1, "output_tokens": 100},
            "output": {"text": "partial", "finish_reason": "length"},
        }
        provider = DashScopeProvider(http_transport=make_transport(200, payload))
        response = await provider.send(build_request("x", "y"), "k")
        assert response.truncated
        assert response.content == "partial"

    @pytest.mark.asyncio
    async def test_unescape_failure_reported(self, make_transport, telemetry):
        payload = {
            "usage": {"input_tokens": 1, "output_tokens": 1},
            "output": {"text": "trailing \\", "finish_reason": "stop"},
        }
        provider = DashScopeProvider(http_transport=make_transport(200, payload), telemetry=telemetry)
        response = await provider.send(build_request("x", "y"), "k")
        assert response.content == "trailing \\"
        assert telemetry.names == ["FormatFailed"]


class TestDashScopeSteps:
    @pytest.mark.asyncio
    async def test_post_returns_raw_body(self, make_transport, success_payload):
        provider = DashScopeProvider(http_transport=make_transport(200, success_payload))
        raw = await provider.post(build_request("x", "y"), "k")
        assert json.loads(raw) == success_payload

    def test_parse_unescapes(self, success_payload):
        parsed = DashScopeProvider().parse(json.dumps(success_payload))
        assert parsed.content == "- a\n- b\n- c"

    def test_parse_raises_on_schema_mismatch(self):
        with pytest.raises(ParseError):
            DashScopeProvider().parse(b'{"usage": {}}')
