from __future__ import annotations

import threading
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Callable

from .file_types import ALL_TYPES
from .models import FileEntry

SORT_NAME = "name"
SORT_SIZE = "size"
SORT_CREATED_AT = "createdAt"
SORT_TYPE = "type"
SORT_KEYS = (SORT_NAME, SORT_SIZE, SORT_CREATED_AT, SORT_TYPE)

ASC = "asc"
DESC = "desc"
SORT_ORDERS = (ASC, DESC)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class ListingQuery:
    search_term: str = ""
    type_filter: str = ALL_TYPES
    sort_key: str = SORT_CREATED_AT
    sort_order: str = DESC

    def __post_init__(self) -> None:
        if self.sort_order not in SORT_ORDERS:
            raise ValueError(f"Unknown sort order: {self.sort_order}")


@dataclass(frozen=True)
class ListingView:
    visible_files: list[FileEntry] = field(default_factory=list)


def _created_at_key(entry: FileEntry) -> datetime:
    value = entry.created_at
    if value is None:
        return _EPOCH
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


_SORT_FIELDS: dict[str, Callable[[FileEntry], Any]] = {
    SORT_NAME: lambda entry: entry.name.casefold(),
    SORT_SIZE: lambda entry: entry.size_bytes or 0,
    SORT_CREATED_AT: _created_at_key,
    SORT_TYPE: lambda entry: entry.mime_category.casefold(),
}


def matches_query(entry: FileEntry, query: ListingQuery) -> bool:
    if query.search_term and query.search_term.casefold() not in entry.name.casefold():
        return False
    if query.type_filter != ALL_TYPES and entry.mime_category != query.type_filter:
        return False
    return True


def sort_key_for(sort_key: str) -> Callable[[FileEntry], Any]:
    return _SORT_FIELDS.get(sort_key, _SORT_FIELDS[SORT_NAME])


def build_listing_view(files: list[FileEntry], query: ListingQuery) -> ListingView:
    """
    Filter then sort a directory listing.

    Sorting is stable in both directions: entries with equal keys keep their
    listing order, including under ``desc``.

    Example:
        files = [FileEntry("1", "b.pdf", 100, None, "document"),
                 FileEntry("2", "a.jpg", 50, None, "image")]
        build_listing_view(files, ListingQuery(sort_key="name", sort_order="asc"))
        # visible_files -> [a.jpg, b.pdf]
    """
    filtered = [entry for entry in files if matches_query(entry, query)]
    ordered = sorted(
        filtered,
        key=sort_key_for(query.sort_key),
        reverse=query.sort_order == DESC,
    )
    return ListingView(visible_files=ordered)


class ListingViewEngine:
    """
    Holds the listing inputs and re-derives the view whenever one changes.

    Safe to feed from a background listing thread while the UI thread edits
    the query.
    """

    def __init__(self, query: ListingQuery | None = None) -> None:
        self._lock = threading.RLock()
        self._files: list[FileEntry] = []
        self._query = query or ListingQuery()
        self._view: ListingView | None = None

    @property
    def query(self) -> ListingQuery:
        return self._query

    @property
    def files(self) -> list[FileEntry]:
        with self._lock:
            return list(self._files)

    def set_files(self, files: list[FileEntry]) -> None:
        with self._lock:
            self._files = list(files)
            self._view = None

    def update_query(self, **changes: str) -> ListingQuery:
        with self._lock:
            self._query = replace(self._query, **changes)
            self._view = None
            return self._query

    def set_search_term(self, search_term: str) -> None:
        self.update_query(search_term=search_term)

    def set_type_filter(self, type_filter: str) -> None:
        self.update_query(type_filter=type_filter)

    def set_sort(self, sort_key: str, sort_order: str | None = None) -> None:
        if sort_order is None:
            self.update_query(sort_key=sort_key)
        else:
            self.update_query(sort_key=sort_key, sort_order=sort_order)

    def toggle_sort_order(self) -> None:
        with self._lock:
            self.update_query(sort_order=ASC if self._query.sort_order == DESC else DESC)

    @property
    def view(self) -> ListingView:
        with self._lock:
            if self._view is None:
                self._view = build_listing_view(self._files, self._query)
            return self._view

    @property
    def visible_files(self) -> list[FileEntry]:
        return self.view.visible_files
