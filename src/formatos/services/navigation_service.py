from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Executor, Future

from formatos.domain.models import ERROR, Listing
from formatos.domain.paths import Breadcrumb, breadcrumbs, join_path, normalize_path, parent_path
from formatos.ports.file_store_port import FileStorePort
from formatos.ports.key_value_port import KeyValuePort
from formatos.services.notification_service import NotificationQueue
from formatos.settings import LAST_PATH_KEY

logger = logging.getLogger(__name__)

ListingListener = Callable[[str, Listing], None]


class Subscription:
    def __init__(self, owner: "NavigationService", listener: ListingListener) -> None:
        self._owner = owner
        self._listener = listener
        self._closed = False

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._owner._unsubscribe(self._listener)


class NavigationService:
    """
    Owns the current path and the listing shown for it.

    Every listing request is tagged with a generation number. A result is only
    applied while its generation is the newest and its path is still the
    current path, so rapid navigation is last-write-wins.
    """

    def __init__(
        self,
        store: FileStorePort,
        persistence: KeyValuePort,
        notifications: NotificationQueue,
        executor: Executor | None = None,
        last_path_key: str = LAST_PATH_KEY,
    ) -> None:
        self._store = store
        self._persistence = persistence
        self._notifications = notifications
        self._executor = executor
        self._last_path_key = last_path_key
        self._lock = threading.RLock()
        self._current_path = ""
        self._listing = Listing()
        self._listing_path: str | None = None
        self._loading = False
        self._generation = 0
        self._started = False
        self._closed = False
        self._listeners: list[ListingListener] = []

    @property
    def current_path(self) -> str:
        return self._current_path

    @property
    def listing(self) -> Listing:
        return self._listing

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def breadcrumbs(self) -> list[Breadcrumb]:
        return breadcrumbs(self._current_path)

    def start(self) -> Future | None:
        with self._lock:
            if self._started:
                return None
            self._started = True
        return self.navigate_to(self._read_last_path())

    def navigate_to(self, path: str) -> Future | None:
        normalized = normalize_path(path)
        with self._lock:
            self._current_path = normalized
            generation = self._next_generation()
        self._persist_path(normalized)
        return self._schedule_load(generation, normalized)

    def navigate_into_folder(self, folder_name: str) -> Future | None:
        return self.navigate_to(join_path(self._current_path, folder_name))

    def navigate_to_breadcrumb(self, prefix: str) -> Future | None:
        return self.navigate_to(prefix)

    def navigate_up(self) -> Future | None:
        return self.navigate_to(parent_path(self._current_path))

    def reload(self) -> Future | None:
        with self._lock:
            path = self._current_path
            generation = self._next_generation()
        return self._schedule_load(generation, path)

    def reload_if_current(self, path: str) -> Future | None:
        """Reload only if the user is still looking at ``path``."""
        if normalize_path(path) != self._current_path:
            logger.debug("Skipping reload for %r, current path is %r", path, self._current_path)
            return None
        return self.reload()

    def subscribe(self, listener: ListingListener) -> Subscription:
        with self._lock:
            self._listeners.append(listener)
        return Subscription(self, listener)

    def close(self) -> None:
        with self._lock:
            self._closed = True
            self._generation += 1
            self._listeners.clear()
            self._loading = False

    def _unsubscribe(self, listener: ListingListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def _next_generation(self) -> int:
        self._generation += 1
        self._loading = True
        return self._generation

    def _schedule_load(self, generation: int, path: str) -> Future | None:
        if self._executor is not None:
            return self._executor.submit(self._load, generation, path)
        self._load(generation, path)
        return None

    def _load(self, generation: int, path: str) -> None:
        try:
            listing = self._store.list(path)
        except (RuntimeError, ValueError) as exc:
            self._apply_failure(generation, path, exc)
            return
        self._apply_listing(generation, path, listing)

    def _is_live(self, generation: int, path: str) -> bool:
        return not self._closed and generation == self._generation and path == self._current_path

    def _apply_listing(self, generation: int, path: str, listing: Listing) -> None:
        with self._lock:
            if not self._is_live(generation, path):
                logger.debug("Discarding stale listing for %r (generation %s)", path, generation)
                return
            self._listing = listing
            self._listing_path = path
            self._loading = False
            self._notify(path, listing)

    def _apply_failure(self, generation: int, path: str, exc: Exception) -> None:
        with self._lock:
            if not self._is_live(generation, path):
                logger.debug("Discarding stale listing failure for %r: %s", path, exc)
                return
            if self._listing_path != path:
                self._listing = Listing()
                self._listing_path = path
            self._loading = False
            self._notifications.push(f"Error loading files: {exc}", ERROR)
            self._notify(path, self._listing)

    def _notify(self, path: str, listing: Listing) -> None:
        # Called with the lock held: listeners see listings in generation order.
        for listener in list(self._listeners):
            listener(path, listing)

    def _read_last_path(self) -> str:
        try:
            return normalize_path(self._persistence.get(self._last_path_key))
        except RuntimeError as exc:
            logger.warning("Could not read last browsed path: %s", exc)
            return ""

    def _persist_path(self, path: str) -> None:
        try:
            self._persistence.set(self._last_path_key, path)
        except RuntimeError as exc:
            logger.warning("Could not remember browsed path %r: %s", path, exc)
