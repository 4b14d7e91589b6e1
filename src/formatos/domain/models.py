from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Union

SUCCESS = "success"
ERROR = "error"
WARNING = "warning"
INFO = "info"

NOTIFICATION_KINDS = (SUCCESS, ERROR, WARNING, INFO)


@dataclass(frozen=True)
class FileEntry:
    file_id: str
    name: str
    size_bytes: int | None
    created_at: datetime | None
    mime_category: str


@dataclass(frozen=True)
class Listing:
    files: list[FileEntry] = field(default_factory=list)
    folders: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class UploadItem:
    name: str
    content: bytes
    content_type: str = "application/octet-stream"

    @property
    def size_bytes(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class UploadResult:
    path: str
    url: str | None


@dataclass(frozen=True)
class Notification:
    notification_id: int
    message: str
    kind: str
    created_at: datetime


@dataclass(frozen=True)
class RenameIdle:
    pass


@dataclass(frozen=True)
class RenameEditing:
    folder_name: str
    draft: str


RenameState = Union[RenameIdle, RenameEditing]

RENAME_IDLE = RenameIdle()
