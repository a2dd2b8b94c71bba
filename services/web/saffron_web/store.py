"""Application store.

A single immutable `AppState` snapshot made of independent slices. Every
change replaces the snapshot, notifies subscribers and writes the slices in
PERSISTED_SLICES to the storage backend. The realtime slice holds a live
connection and is never written; `Store.load()` rebuilds it instead.
"""

import json
import logging
import os
import tempfile
import threading
from dataclasses import asdict, dataclass, field, replace
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from pydantic import TypeAdapter, ValidationError
from redis.exceptions import RedisError

from .realtime import RealtimeHandle

logger = logging.getLogger("saffron.web.store")

STORAGE_VERSION = 1


# --- Slices ---

@dataclass(frozen=True)
class AuthState:
    is_authenticated: bool = False
    token: Optional[str] = None
    admin_id: Optional[str] = None
    username: Optional[str] = None


@dataclass(frozen=True)
class Notification:
    message: str
    type: str = "info"


@dataclass(frozen=True)
class NotificationsState:
    messages: Tuple[Notification, ...] = ()


@dataclass(frozen=True)
class UiLoaderState:
    is_loading: bool = False


@dataclass(frozen=True)
class SearchState:
    search_query: str = ""


@dataclass(frozen=True)
class FiltersState:
    spice_level: str = ""
    recipe_category_id: str = ""


@dataclass(frozen=True)
class PaginationState:
    current_page: int = 1
    total_pages: int = 1
    limit: int = 10


@dataclass(frozen=True)
class RealtimeState:
    handle: Optional[RealtimeHandle] = None


@dataclass(frozen=True)
class AppState:
    auth: AuthState = field(default_factory=AuthState)
    notifications: NotificationsState = field(default_factory=NotificationsState)
    ui_loader: UiLoaderState = field(default_factory=UiLoaderState)
    search: SearchState = field(default_factory=SearchState)
    filters: FiltersState = field(default_factory=FiltersState)
    pagination: PaginationState = field(default_factory=PaginationState)
    realtime: RealtimeState = field(default_factory=RealtimeState)


PERSISTED_SLICES = ("auth", "notifications", "ui_loader", "search", "filters", "pagination")


# --- Serialization ---

_SLICE_ADAPTERS = {
    "auth": TypeAdapter(AuthState),
    "notifications": TypeAdapter(NotificationsState),
    "ui_loader": TypeAdapter(UiLoaderState),
    "search": TypeAdapter(SearchState),
    "filters": TypeAdapter(FiltersState),
    "pagination": TypeAdapter(PaginationState),
}


def dump_state(state: AppState) -> Dict[str, Any]:
    """Serialize the allow-listed slices."""
    slices = {name: asdict(getattr(state, name)) for name in PERSISTED_SLICES}
    return {"version": STORAGE_VERSION, "slices": slices}


def restore_state(data: Optional[Dict[str, Any]]) -> AppState:
    """Inverse of dump_state. Unknown or corrupt slices fall back to defaults."""
    state = AppState()
    if not data:
        return state
    if not isinstance(data, dict) or data.get("version") != STORAGE_VERSION:
        logger.warning("Ignoring persisted state with unknown version")
        return state

    slices = data.get("slices") or {}
    if not isinstance(slices, dict):
        logger.warning("Ignoring persisted state with malformed slices")
        return state

    restored = {}
    for name in PERSISTED_SLICES:
        raw = slices.get(name)
        if raw is None:
            continue
        try:
            restored[name] = _SLICE_ADAPTERS[name].validate_python(raw)
        except ValidationError as e:
            logger.warning(f"Discarding corrupt persisted slice {name!r}: {e.error_count()} errors")
    return replace(state, **restored)


# --- Storage backends ---

class MemoryStorage:
    def __init__(self):
        self.data: Optional[Dict[str, Any]] = None
        self.writes = 0

    def read(self) -> Optional[Dict[str, Any]]:
        return json.loads(json.dumps(self.data)) if self.data is not None else None

    def write(self, data: Dict[str, Any]) -> None:
        self.data = json.loads(json.dumps(data))
        self.writes += 1


class JsonFileStorage:
    def __init__(self, path):
        self.path = Path(path)

    def read(self) -> Optional[Dict[str, Any]]:
        if not self.path.exists():
            return None
        try:
            return json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read persisted state from {self.path}: {e}")
            return None

    def write(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp, self.path)
        except OSError:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise


# --- Store ---

Listener = Callable[[AppState], None]
RealtimeFactory = Callable[[str, str], RealtimeHandle]


class Store:
    def __init__(
        self,
        storage=None,
        *,
        state: Optional[AppState] = None,
        realtime_factory: Optional[RealtimeFactory] = None,
    ):
        self._storage = storage if storage is not None else MemoryStorage()
        self._state = state or AppState()
        self._realtime_factory = realtime_factory or RealtimeHandle.connect
        self._listeners: List[Listener] = []
        self._lock = threading.RLock()
        self._last_persisted = dump_state(self._state)

    @classmethod
    def load(
        cls,
        storage=None,
        *,
        realtime_url: Optional[str] = None,
        realtime_channel: str = "saffron:recipes",
        realtime_factory: Optional[RealtimeFactory] = None,
    ) -> "Store":
        """Build a store from persisted state and reconnect realtime if configured."""
        storage = storage if storage is not None else MemoryStorage()
        store = cls(storage, state=restore_state(storage.read()), realtime_factory=realtime_factory)
        if realtime_url:
            store.connect_realtime(realtime_url, realtime_channel)
        return store

    @property
    def state(self) -> AppState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe():
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _modify(self, build: Callable[[AppState], Dict[str, Any]]) -> AppState:
        """Apply the slices returned by `build(current_state)` atomically."""
        with self._lock:
            changes = build(self._state)
            if not changes:
                return self._state
            self._state = replace(self._state, **changes)
            snapshot = self._state
            payload = dump_state(snapshot)
            if payload != self._last_persisted:
                self._storage.write(payload)
                self._last_persisted = payload
            listeners = list(self._listeners)

        for listener in listeners:
            listener(snapshot)
        return snapshot

    def _update(self, **slices) -> AppState:
        return self._modify(lambda state: slices)

    # --- auth ---

    def set_auth(self, token: str, admin_id: str, username: str) -> None:
        self._update(auth=AuthState(True, token, admin_id, username))

    def clear_auth(self) -> None:
        self._update(auth=AuthState())

    # --- notifications ---

    def add_notification(self, message: str, type: str = "info") -> None:
        self._modify(lambda state: {"notifications": NotificationsState(
            state.notifications.messages + (Notification(message, type),)
        )})

    def remove_notification(self, index: int) -> None:
        def build(state):
            messages = state.notifications.messages
            if not 0 <= index < len(messages):
                return {}
            return {"notifications": NotificationsState(messages[:index] + messages[index + 1:])}

        self._modify(build)

    def clear_notifications(self) -> None:
        self._update(notifications=NotificationsState())

    # --- ui loader ---

    def set_loading(self, is_loading: bool) -> None:
        self._update(ui_loader=UiLoaderState(is_loading))

    # --- search / filters / pagination ---

    def set_search_query(self, search_query: str) -> None:
        self._update(search=SearchState(search_query))

    def set_filters(self, *, spice_level: Optional[str] = None, recipe_category_id: Optional[str] = None) -> None:
        def build(state):
            current = state.filters
            return {"filters": FiltersState(
                spice_level=current.spice_level if spice_level is None else spice_level,
                recipe_category_id=current.recipe_category_id if recipe_category_id is None else recipe_category_id,
            )}

        self._modify(build)

    def set_pagination(
        self,
        *,
        current_page: Optional[int] = None,
        total_pages: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> None:
        def build(state):
            current = state.pagination
            return {"pagination": PaginationState(
                current_page=current.current_page if current_page is None else current_page,
                total_pages=current.total_pages if total_pages is None else total_pages,
                limit=current.limit if limit is None else limit,
            )}

        self._modify(build)

    # --- realtime ---

    def connect_realtime(self, url: str, channel: str) -> Optional[RealtimeHandle]:
        self.disconnect_realtime()
        try:
            handle = self._realtime_factory(url, channel)
        except RedisError as e:
            logger.warning(f"Realtime connection to {url} failed: {e}")
            return None
        self._update(realtime=RealtimeState(handle))
        return handle

    def disconnect_realtime(self) -> None:
        handle = self._state.realtime.handle
        if handle is None:
            return
        handle.close()
        self._update(realtime=RealtimeState())
