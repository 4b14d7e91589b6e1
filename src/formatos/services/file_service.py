from __future__ import annotations

import logging
import webbrowser
from collections.abc import Callable

from formatos.domain.errors import FileStoreError
from formatos.domain.models import ERROR, SUCCESS, UploadItem
from formatos.domain.paths import join_path
from formatos.ports.file_store_port import FileStorePort
from formatos.services.folder_service import PERMISSION_DENIED_MESSAGE
from formatos.services.navigation_service import NavigationService
from formatos.services.notification_service import NotificationQueue
from formatos.services.permission_service import PermissionService

logger = logging.getLogger(__name__)

UPLOAD_PERMISSION_MESSAGE = "Permission denied: Admin access required for uploads"


def open_in_browser(url: str, filename: str) -> None:
    webbrowser.open(url)


class FileService:
    def __init__(
        self,
        store: FileStorePort,
        navigation: NavigationService,
        permissions: PermissionService,
        notifications: NotificationQueue,
        confirm: Callable[[str], bool],
        opener: Callable[[str, str], None] = open_in_browser,
    ) -> None:
        self._store = store
        self._navigation = navigation
        self._permissions = permissions
        self._notifications = notifications
        self._confirm = confirm
        self._opener = opener
        self._uploading = False

    @property
    def uploading(self) -> bool:
        return self._uploading

    def upload_batch(self, items: list[UploadItem]) -> bool:
        """
        Upload files one after another into the current path.

        The first failure stops the batch. Files uploaded before it stay on the
        server, and the batch reports a single failure.
        """
        if not self._permissions.is_admin:
            self._notifications.push(UPLOAD_PERMISSION_MESSAGE, ERROR)
            return False
        if not items:
            return False
        target = self._navigation.current_path
        uploaded = 0
        self._uploading = True
        try:
            for item in items:
                self._store.upload(item, target)
                uploaded += 1
        except FileStoreError as exc:
            logger.info("Upload batch into %r stopped after %s of %s files", target, uploaded, len(items))
            self._notifications.push(f"Upload error: {exc}", ERROR)
            if uploaded:
                self._navigation.reload_if_current(target)
            return False
        finally:
            self._uploading = False
        self._notifications.push(f"{uploaded} files uploaded successfully", SUCCESS)
        self._navigation.reload_if_current(target)
        return True

    def download_file(self, name: str) -> str | None:
        full_path = join_path(self._navigation.current_path, name)
        try:
            url = self._store.download_url(full_path)
        except FileStoreError as exc:
            self._notifications.push(f"Error downloading file: {exc}", ERROR)
            return None
        self._opener(url, name)
        return url

    def delete_file(self, name: str) -> bool:
        if not self._permissions.is_admin:
            self._notifications.push(PERMISSION_DENIED_MESSAGE, ERROR)
            return False
        if not self._confirm(f"Delete file '{name}'?"):
            return False
        parent = self._navigation.current_path
        try:
            self._store.delete_file(join_path(parent, name))
        except FileStoreError as exc:
            self._notifications.push(f"Error deleting file: {exc}", ERROR)
            return False
        logger.info("Deleted file %r under %r", name, parent)
        self._notifications.push("File deleted successfully", SUCCESS)
        self._navigation.reload_if_current(parent)
        return True
