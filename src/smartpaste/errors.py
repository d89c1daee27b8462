"""Exceptions raised while producing a completion.

Credential lookup failures are not represented here: a missing secret is a
normal "AI disabled" state reported by ``CredentialAccessor.is_enabled()``.
"""

from __future__ import annotations


class SmartPasteError(Exception):
    """Base class for completion errors."""


class TransportError(SmartPasteError):
    """The generation endpoint answered with a non-success HTTP status.

    The response body is the primary diagnostic and becomes the message.
    """

    def __init__(self, status_code: int, body: str):
        super().__init__(body or f"HTTP {status_code}")
        self.status_code = status_code
        self.body = body


class ParseError(SmartPasteError):
    """The response body did not match the expected schema."""


class UnescapeError(SmartPasteError):
    """Generated text contained an escape sequence that could not be decoded."""
