from __future__ import annotations

from collections.abc import Callable
from concurrent.futures import Executor
from typing import Any

from formatos.adapters.rest_file_store import RestFileStoreAdapter
from formatos.adapters.rest_permission import RestPermissionAdapter
from formatos.adapters.sqlite_key_value import SQLiteKeyValueStore
from formatos.domain.listing_view import ListingViewEngine
from formatos.services.file_manager import FileManager
from formatos.services.file_service import FileService, open_in_browser
from formatos.services.folder_service import FolderService
from formatos.services.navigation_service import NavigationService
from formatos.services.notification_service import NotificationQueue
from formatos.services.permission_service import PermissionService
from formatos.settings import (
    API_BASE_URL,
    NOTIFICATION_TTL_SECONDS,
    REQUEST_TIMEOUT_SECONDS,
    ROLE_ADMIN,
    USER_ROLE,
)


def build_services(
    access_token: str,
    sqlite_path: str,
    confirm: Callable[[str], bool],
    opener: Callable[[str, str], None] = open_in_browser,
    base_url: str = API_BASE_URL,
    user_role: str | None = USER_ROLE,
    executor: Executor | None = None,
) -> dict[str, Any]:
    store = RestFileStoreAdapter(base_url, access_token, timeout=REQUEST_TIMEOUT_SECONDS)
    permission_port = RestPermissionAdapter(
        base_url,
        access_token,
        local_role=user_role or None,
        timeout=REQUEST_TIMEOUT_SECONDS,
    )
    persistence = SQLiteKeyValueStore(sqlite_path)
    notifications = NotificationQueue(ttl_seconds=NOTIFICATION_TTL_SECONDS)
    permissions = PermissionService(permission_port, admin_role=ROLE_ADMIN)
    navigation = NavigationService(store, persistence, notifications, executor=executor)
    folder_service = FolderService(store, navigation, permissions, notifications, confirm)
    file_service = FileService(store, navigation, permissions, notifications, confirm, opener=opener)
    file_manager = FileManager(
        navigation,
        folder_service,
        file_service,
        permissions,
        notifications,
        view=ListingViewEngine(),
    )
    return {
        "file_manager": file_manager,
        "navigation_service": navigation,
        "folder_service": folder_service,
        "file_service": file_service,
        "permission_service": permissions,
        "notifications": notifications,
        "store": store,
        "persistence": persistence,
    }
