from __future__ import annotations

from typing import Protocol, runtime_checkable

from formatos.domain.models import Listing, UploadItem, UploadResult


@runtime_checkable
class FileStorePort(Protocol):
    def list(self, path: str) -> Listing:
        """Return files and inferred folders directly under a path."""

    def upload(self, item: UploadItem, path: str) -> UploadResult:
        """Upload one file into a path."""

    def download_url(self, path: str) -> str:
        """Return a short-lived URL for fetching the file at path."""

    def delete_file(self, path: str) -> None:
        """Delete the file at path."""

    def create_folder(self, name: str, parent_path: str) -> dict:
        """Create a folder under parent_path and return its descriptor."""

    def rename_folder(self, old_name: str, new_name: str, parent_path: str) -> None:
        """Rename a folder within parent_path."""

    def delete_folder(self, path: str) -> None:
        """Delete a folder and everything under it."""
