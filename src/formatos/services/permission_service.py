from __future__ import annotations

import logging

from formatos.ports.permission_port import PermissionPort
from formatos.settings import ROLE_ADMIN

logger = logging.getLogger(__name__)


class PermissionService:
    """Caches the admin decision so mutation gates never wait on the network."""

    def __init__(self, permissions: PermissionPort, admin_role: str = ROLE_ADMIN) -> None:
        self._permissions = permissions
        self._admin_role = admin_role
        self._is_admin = False

    @property
    def is_admin(self) -> bool:
        return self._is_admin

    def refresh(self) -> bool:
        try:
            self._is_admin = bool(self._permissions.has_permission(self._admin_role))
        except RuntimeError as exc:
            logger.warning("Permission check failed, treating user as read-only: %s", exc)
            self._is_admin = False
        return self._is_admin
