from __future__ import annotations

import logging

import requests

from formatos.ports.permission_port import PermissionPort

logger = logging.getLogger(__name__)

ROLE_HIERARCHY = {
    "ADMINISTRADOR": 2,
    "CONSULTA": 1,
}


def role_satisfies(user_role: str | None, required_role: str) -> bool:
    """
    Compare roles by hierarchy; unknown roles rank as the lowest level.

    Examples:
        >>> role_satisfies("ADMINISTRADOR", "CONSULTA")
        True
        >>> role_satisfies(None, "ADMINISTRADOR")
        False
    """
    if not user_role:
        return False
    user_level = ROLE_HIERARCHY.get(user_role.upper(), 1)
    required_level = ROLE_HIERARCHY.get(required_role.upper(), 1)
    return user_level >= required_level


class RestPermissionAdapter(PermissionPort):
    """Asks the backend for a role decision, falling back to the locally known role."""

    def __init__(
        self,
        base_url: str,
        access_token: str = "",
        local_role: str | None = None,
        timeout: float = 30,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._access_token = access_token
        self._local_role = local_role
        self._timeout = timeout

    def has_permission(self, role: str) -> bool:
        """
        An explicit 401/403 from the backend is a denial and is never
        overridden by the local role. Only an unreachable or failing
        endpoint falls back to it.
        """
        try:
            response = requests.get(
                f"{self._base_url}/auth/permission",
                headers=self._auth_header(),
                params={"role": role},
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            logger.warning("Permission endpoint unreachable, using local role: %s", exc)
            return role_satisfies(self._local_role, role)
        if response.status_code in (401, 403):
            logger.info("Backend denied role %s (HTTP %s)", role, response.status_code)
            return False
        try:
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.warning("Permission endpoint failed, using local role: %s", exc)
            return role_satisfies(self._local_role, role)
        if not isinstance(payload, dict):
            logger.warning("Permission endpoint returned %r, using local role", payload)
            return role_satisfies(self._local_role, role)
        return bool(payload.get("hasPermission", False))

    def _auth_header(self) -> dict[str, str]:
        if not self._access_token:
            return {}
        return {"Authorization": f"Bearer {self._access_token}"}


class StaticPermissionAdapter(PermissionPort):
    def __init__(self, user_role: str | None) -> None:
        self._user_role = user_role

    def has_permission(self, role: str) -> bool:
        return role_satisfies(self._user_role, role)
