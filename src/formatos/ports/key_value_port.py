from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyValuePort(Protocol):
    def get(self, key: str) -> str | None:
        """Return the stored value for a key, or None if missing."""

    def set(self, key: str, value: str) -> None:
        """Store a value under a key, replacing any previous value."""
