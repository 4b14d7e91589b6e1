from .errors import (
    FileStoreError,
    NetworkFailureError,
    PermissionDeniedError,
    SizeLimitExceededError,
    StoreRejectedError,
)
from .listing_view import ListingQuery, ListingView, ListingViewEngine, build_listing_view
from .models import (
    FileEntry,
    Listing,
    Notification,
    RenameEditing,
    RenameIdle,
    UploadItem,
)
from .paths import breadcrumbs, join_path, normalize_path, parent_path, prefix_of

__all__ = [
    "FileEntry",
    "FileStoreError",
    "Listing",
    "ListingQuery",
    "ListingView",
    "ListingViewEngine",
    "NetworkFailureError",
    "Notification",
    "PermissionDeniedError",
    "RenameEditing",
    "RenameIdle",
    "SizeLimitExceededError",
    "StoreRejectedError",
    "UploadItem",
    "breadcrumbs",
    "build_listing_view",
    "join_path",
    "normalize_path",
    "parent_path",
    "prefix_of",
]
