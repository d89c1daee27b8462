"""Tests for core/prompts.py."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from smartpaste.core.prompts import SYSTEM_INSTRUCTIONS, build_request


class TestBuildRequest:
    def test_user_message_layout(self):
        request = build_request("Make this a bulleted list", "a, b, c")
        assert request.user_message == (
            "User instructions:\nMake this a bulleted list\n\n"
            "Clipboard Content:\na, b, c\n\n"
            "Output:\n"
        )

    def test_system_instructions_fixed(self):
        first = build_request("one", "x")
        second = build_request("two", "y")
        assert first.system_instructions == second.system_instructions == SYSTEM_INSTRUCTIONS
        assert "Do not output anything else" in SYSTEM_INSTRUCTIONS

    def test_braces_are_not_templated(self):
        request = build_request("wrap in {json}", "{value}")
        assert "wrap in {json}" in request.user_message
        assert "{value}" in request.user_message

    def test_empty_inputs_allowed(self):
        request = build_request("", "")
        assert request.user_message.startswith("User instructions:\n\n")

    def test_request_is_frozen(self):
        request = build_request("a", "b")
        with pytest.raises(ValidationError):
            request.user_message = "changed"
