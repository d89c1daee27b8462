"""Scrub credentials from messages before they reach telemetry or the console."""

from __future__ import annotations

import os
import re

# Held secrets shorter than this are not redacted verbatim.
MIN_SECRET_LENGTH = 8

_SECRET_PATTERNS = (
    (re.compile(r"Bearer\s+\S+"), "Bearer [REDACTED]"),
    (re.compile(r"Authorization:\s*\S+"), "Authorization: [REDACTED]"),
    (re.compile(r"sk-[a-zA-Z0-9_-]{16,}"), "[REDACTED_KEY]"),
)


def sanitize_error(message: str, secret: str = "") -> str:
    """Redact API keys, bearer tokens and the user's home path."""
    if not message:
        return message

    sanitized = message
    if secret and len(secret) >= MIN_SECRET_LENGTH:
        sanitized = sanitized.replace(secret, "[REDACTED_KEY]")
    for pattern, replacement in _SECRET_PATTERNS:
        sanitized = pattern.sub(replacement, sanitized)

    home = os.environ.get("USERPROFILE") or os.environ.get("HOME") or ""
    if home and home != os.sep:
        sanitized = sanitized.replace(home, "[USER_HOME]")

    return sanitized
