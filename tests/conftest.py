from __future__ import annotations

from datetime import datetime, timezone

import pytest

from formatos.adapters.sqlite_key_value import InMemoryKeyValueStore
from formatos.domain.errors import StoreRejectedError
from formatos.domain.file_types import classify_name
from formatos.domain.models import FileEntry, Listing, UploadItem, UploadResult
from formatos.domain.paths import join_path, normalize_path, parent_path, split_segments
from formatos.services.notification_service import NotificationQueue


class ManualTimer:
    def __init__(self, delay: float, callback) -> None:
        self.delay = delay
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    def __init__(self) -> None:
        self.timers: list[ManualTimer] = []

    def __call__(self, delay: float, callback) -> ManualTimer:
        timer = ManualTimer(delay, callback)
        self.timers.append(timer)
        return timer

    def fire_all(self) -> None:
        for timer in list(self.timers):
            if not timer.cancelled:
                timer.callback()


class InMemoryFileStore:
    """Path-prefix store: folders exist only through explicit creation or file paths."""

    def __init__(self) -> None:
        self.files: dict[str, FileEntry] = {}
        self.folders: set[str] = set()
        self.calls: list[tuple] = []
        self._counter = 0

    def add_file(self, path: str, size_bytes: int = 10, created_at: datetime | None = None) -> FileEntry:
        path = normalize_path(path)
        self._counter += 1
        name = split_segments(path)[-1]
        entry = FileEntry(
            file_id=f"f{self._counter}",
            name=name,
            size_bytes=size_bytes,
            created_at=created_at or datetime(2024, 1, self._counter, tzinfo=timezone.utc),
            mime_category=classify_name(name),
        )
        self.files[path] = entry
        return entry

    def list(self, path: str) -> Listing:
        self.calls.append(("list", path))
        path = normalize_path(path)
        files = [entry for key, entry in self.files.items() if parent_path(key) == path]
        return Listing(files=files, folders=self._folder_names(path))

    def _folder_names(self, path: str) -> list[str]:
        prefix = split_segments(path)
        depth = len(prefix)
        names: set[str] = set()
        for key in self.files:
            segments = split_segments(key)
            if segments[:depth] == prefix and len(segments) > depth + 1:
                names.add(segments[depth])
        for folder in self.folders:
            segments = split_segments(folder)
            if segments[:depth] == prefix and len(segments) > depth:
                names.add(segments[depth])
        return sorted(names)

    def upload(self, item: UploadItem, path: str) -> UploadResult:
        self.calls.append(("upload", item.name, path))
        full_path = join_path(path, item.name)
        self.add_file(full_path, size_bytes=item.size_bytes)
        return UploadResult(path=full_path, url=None)

    def download_url(self, path: str) -> str:
        self.calls.append(("download_url", path))
        if normalize_path(path) not in self.files:
            raise StoreRejectedError("File not found", status_code=404)
        return f"https://files.example/{path}?sig=1"

    def delete_file(self, path: str) -> None:
        self.calls.append(("delete_file", path))
        if self.files.pop(normalize_path(path), None) is None:
            raise StoreRejectedError("File not found", status_code=404)

    def create_folder(self, name: str, parent_path: str) -> dict:
        self.calls.append(("create_folder", name, parent_path))
        full_path = join_path(parent_path, name)
        if name in self._folder_names(normalize_path(parent_path)):
            raise StoreRejectedError(f"Folder '{name}' already exists", status_code=409)
        self.folders.add(full_path)
        return {"path": full_path}

    def rename_folder(self, old_name: str, new_name: str, parent_path: str) -> None:
        self.calls.append(("rename_folder", old_name, new_name, parent_path))
        old_path = join_path(parent_path, old_name)
        new_path = join_path(parent_path, new_name)
        self.folders = {_swap_prefix(folder, old_path, new_path) for folder in self.folders}
        self.files = {_swap_prefix(key, old_path, new_path): entry for key, entry in self.files.items()}

    def delete_folder(self, path: str) -> None:
        self.calls.append(("delete_folder", path))
        path = normalize_path(path)
        self.folders = {folder for folder in self.folders if not _under(folder, path)}
        self.files = {key: entry for key, entry in self.files.items() if not _under(key, path)}

    def mutating_calls(self) -> list[tuple]:
        return [call for call in self.calls if call[0] != "list"]


def _under(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix + "/")


def _swap_prefix(path: str, old: str, new: str) -> str:
    if path == old:
        return new
    if path.startswith(old + "/"):
        return new + path[len(old):]
    return path


class StaticPermissions:
    def __init__(self, allowed: bool) -> None:
        self.allowed = allowed
        self.calls: list[str] = []

    def has_permission(self, role: str) -> bool:
        self.calls.append(role)
        return self.allowed


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def notifications(scheduler: ManualScheduler) -> NotificationQueue:
    return NotificationQueue(ttl_seconds=5.0, scheduler=scheduler)


@pytest.fixture
def store() -> InMemoryFileStore:
    return InMemoryFileStore()


@pytest.fixture
def persistence() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()
