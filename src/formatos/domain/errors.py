from __future__ import annotations


class FileStoreError(RuntimeError):
    """Base class for failures surfaced by the file manager."""


class PermissionDeniedError(FileStoreError):
    pass


class StoreRejectedError(FileStoreError):
    """The backend refused the request (unknown path, duplicate name, bad input)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NetworkFailureError(FileStoreError):
    pass


class SizeLimitExceededError(FileStoreError):
    def __init__(self, name: str, size_bytes: int, max_bytes: int) -> None:
        super().__init__(
            f"File '{name}' is {size_bytes} bytes, above the {max_bytes} byte limit."
        )
        self.name = name
        self.size_bytes = size_bytes
        self.max_bytes = max_bytes
