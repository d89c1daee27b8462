"""Prompt templates for clipboard reformatting."""

from __future__ import annotations

from ..models.completion import CompletionRequest

SYSTEM_INSTRUCTIONS = (
    "You are tasked with reformatting user's clipboard data. Use the user's "
    "instructions, and the content of their clipboard below to edit their "
    "clipboard content as they have requested it.\n"
    "\n"
    "Do not output anything else besides the reformatted clipboard content."
)

USER_MESSAGE_TEMPLATE = (
    "User instructions:\n"
    "{instructions}\n"
    "\n"
    "Clipboard Content:\n"
    "{content}\n"
    "\n"
    "Output:\n"
)


def build_request(instructions: str, content: str) -> CompletionRequest:
    """Interpolate the caller's instructions and clipboard text into the prompts."""
    return CompletionRequest(
        system_instructions=SYSTEM_INSTRUCTIONS,
        user_message=USER_MESSAGE_TEMPLATE.format(
            instructions=instructions, content=content
        ),
    )
