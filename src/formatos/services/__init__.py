from .file_manager import FileManager
from .file_service import FileService
from .folder_service import FolderService
from .navigation_service import NavigationService, Subscription
from .notification_service import NotificationQueue
from .permission_service import PermissionService

__all__ = [
    "FileManager",
    "FileService",
    "FolderService",
    "NavigationService",
    "NotificationQueue",
    "PermissionService",
    "Subscription",
]
