from __future__ import annotations

from .errors import SizeLimitExceededError
from .models import UploadItem

MEGABYTE = 1024 * 1024


def split_by_size_limit(
    items: list[UploadItem], max_bytes: int
) -> tuple[list[UploadItem], list[SizeLimitExceededError]]:
    """
    Separate files the upload control accepts from those above the size limit.

    Example:
        accepted, rejected = split_by_size_limit([UploadItem("a.pdf", b"x")], 100 * MEGABYTE)
        # accepted == [UploadItem("a.pdf", b"x")], rejected == []
    """
    accepted: list[UploadItem] = []
    rejected: list[SizeLimitExceededError] = []
    for item in items:
        if item.size_bytes > max_bytes:
            rejected.append(SizeLimitExceededError(item.name, item.size_bytes, max_bytes))
            continue
        accepted.append(item)
    return accepted, rejected
