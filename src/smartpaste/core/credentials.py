"""API key access backed by the OS credential store.

A missing key is not an error: it switches AI formatting off. Every lookup
failure, whether the vault is absent, locked or broken, is mapped to that
disabled state and never propagated.
"""

from __future__ import annotations

from typing import Callable, Optional

import keyring
from rich.console import Console

console = Console(stderr=True)

DEFAULT_SERVICE = "https://platform.openai.com/api-keys"
DEFAULT_ACCOUNT = "PowerToys_AdvancedPaste_OpenAIKey"

SecretResolver = Callable[[], Optional[str]]


def keyring_resolver(
    service: str = DEFAULT_SERVICE, account: str = DEFAULT_ACCOUNT
) -> SecretResolver:
    """Build a resolver that reads one entry from the system keyring."""

    def resolve() -> Optional[str]:
        return keyring.get_password(service, account)

    return resolve


def lookup_secret(resolver: SecretResolver) -> Optional[str]:
    """Run a resolver, returning None when no usable secret is available."""
    try:
        secret = resolver()
    except Exception as e:
        console.print(f"  [dim]Credential lookup failed: {type(e).__name__}[/dim]")
        return None
    if not isinstance(secret, str) or not secret:
        return None
    return secret


class CredentialAccessor:
    """Holds the API key for one orchestrator.

    The key is resolved once at construction; ``set`` replaces it for all
    subsequent calls. Nothing is written back to the store.
    """

    def __init__(self, resolver: Optional[SecretResolver] = None):
        self.resolver = resolver or keyring_resolver()
        self._secret = self.load()

    def load(self) -> str:
        return lookup_secret(self.resolver) or ""

    def get(self) -> str:
        return self._secret

    def set(self, new_secret: str) -> None:
        self._secret = new_secret or ""

    def is_enabled(self) -> bool:
        return bool(self._secret)
