from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class PermissionPort(Protocol):
    def has_permission(self, role: str) -> bool:
        """Return True if the current user holds at least the given role."""
