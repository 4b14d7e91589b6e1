from __future__ import annotations

from formatos.domain.listing_view import ListingViewEngine
from formatos.domain.models import FileEntry, Listing
from formatos.services.file_service import FileService
from formatos.services.folder_service import FolderService
from formatos.services.navigation_service import NavigationService
from formatos.services.notification_service import NotificationQueue
from formatos.services.permission_service import PermissionService


class FileManager:
    """One browsing session: navigation, mutations, the derived view and notifications."""

    def __init__(
        self,
        navigation: NavigationService,
        folders: FolderService,
        files: FileService,
        permissions: PermissionService,
        notifications: NotificationQueue,
        view: ListingViewEngine | None = None,
    ) -> None:
        self.navigation = navigation
        self.folders = folders
        self.files = files
        self.permissions = permissions
        self.notifications = notifications
        self.view = view or ListingViewEngine()
        self._subscription = navigation.subscribe(self._on_listing_applied)
        self._started = False

    def start(self) -> None:
        if self._started:
            return
        self._started = True
        self.permissions.refresh()
        self.navigation.start()

    @property
    def is_admin(self) -> bool:
        return self.permissions.is_admin

    @property
    def folder_names(self) -> list[str]:
        return list(self.navigation.listing.folders)

    @property
    def visible_files(self) -> list[FileEntry]:
        return self.view.visible_files

    def close(self) -> None:
        self._subscription.close()
        self.folders.close()
        self.navigation.close()
        self.notifications.close()

    def _on_listing_applied(self, path: str, listing: Listing) -> None:
        self.view.set_files(listing.files)
