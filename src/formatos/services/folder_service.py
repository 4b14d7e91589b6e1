from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from formatos.domain.errors import FileStoreError
from formatos.domain.models import (
    ERROR,
    RENAME_IDLE,
    SUCCESS,
    WARNING,
    Listing,
    RenameEditing,
    RenameState,
)
from formatos.domain.paths import join_path
from formatos.ports.file_store_port import FileStorePort
from formatos.services.navigation_service import NavigationService
from formatos.services.notification_service import NotificationQueue
from formatos.services.permission_service import PermissionService

logger = logging.getLogger(__name__)

PERMISSION_DENIED_MESSAGE = "Permission denied: Admin access required"


class FolderService:
    def __init__(
        self,
        store: FileStorePort,
        navigation: NavigationService,
        permissions: PermissionService,
        notifications: NotificationQueue,
        confirm: Callable[[str], bool],
    ) -> None:
        self._store = store
        self._navigation = navigation
        self._permissions = permissions
        self._notifications = notifications
        self._confirm = confirm
        self._lock = threading.Lock()
        self._rename_state: RenameState = RENAME_IDLE
        self.new_folder_name = ""
        self._subscription = navigation.subscribe(self._on_listing_applied)

    @property
    def rename_state(self) -> RenameState:
        return self._rename_state

    def create_folder(self, name: str | None = None) -> bool:
        requested = self.new_folder_name if name is None else name
        if not self._permissions.is_admin:
            self._notifications.push(PERMISSION_DENIED_MESSAGE, ERROR)
            return False
        folder_name = requested.strip()
        if not folder_name:
            self._notifications.push("Folder name is required", WARNING)
            return False
        parent = self._navigation.current_path
        try:
            self._store.create_folder(folder_name, parent)
        except FileStoreError as exc:
            self._notifications.push(f"Error creating folder: {exc}", ERROR)
            return False
        logger.info("Created folder %r under %r", folder_name, parent)
        self._notifications.push("Folder created successfully", SUCCESS)
        self.new_folder_name = ""
        self._navigation.reload_if_current(parent)
        return True

    def start_rename(self, folder_name: str) -> RenameEditing:
        session = RenameEditing(folder_name=folder_name, draft=folder_name)
        with self._lock:
            self._rename_state = session
        return session

    def update_rename_draft(self, draft: str) -> None:
        with self._lock:
            state = self._rename_state
            if isinstance(state, RenameEditing):
                self._rename_state = RenameEditing(folder_name=state.folder_name, draft=draft)

    def cancel_rename(self) -> None:
        with self._lock:
            self._rename_state = RENAME_IDLE

    def commit_rename(self) -> bool:
        with self._lock:
            state = self._rename_state
            if not isinstance(state, RenameEditing):
                return False
            new_name = state.draft.strip()
            if not new_name:
                return False
            self._rename_state = RENAME_IDLE
        if not self._permissions.is_admin:
            self._notifications.push(PERMISSION_DENIED_MESSAGE, ERROR)
            return False
        parent = self._navigation.current_path
        try:
            self._store.rename_folder(state.folder_name, new_name, parent)
        except FileStoreError as exc:
            self._notifications.push(f"Error renaming folder: {exc}", ERROR)
            return False
        logger.info("Renamed folder %r to %r under %r", state.folder_name, new_name, parent)
        self._notifications.push("Folder renamed successfully", SUCCESS)
        self._navigation.reload_if_current(parent)
        return True

    def delete_folder(self, folder_name: str) -> bool:
        if not self._permissions.is_admin:
            self._notifications.push(PERMISSION_DENIED_MESSAGE, ERROR)
            return False
        if not self._confirm(f"Delete folder '{folder_name}' and all contents?"):
            return False
        parent = self._navigation.current_path
        try:
            self._store.delete_folder(join_path(parent, folder_name))
        except FileStoreError as exc:
            self._notifications.push(f"Error deleting folder: {exc}", ERROR)
            return False
        logger.info("Deleted folder %r under %r", folder_name, parent)
        self._notifications.push("Folder deleted successfully", SUCCESS)
        self._navigation.reload_if_current(parent)
        return True

    def close(self) -> None:
        self._subscription.close()
        self.cancel_rename()

    def _on_listing_applied(self, path: str, listing: Listing) -> None:
        self.cancel_rename()
