"""Navigation and the explicit application context handed to every view."""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit

from .api import ApiClient
from .config import ClientSettings, settings as default_settings
from .store import JsonFileStorage, MemoryStorage, Store

logger = logging.getLogger("saffron.web.navigation")


@dataclass
class Location:
    path: str
    params: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def parse(cls, url: str) -> "Location":
        parts = urlsplit(url)
        return cls(path=parts.path or "/", params=dict(parse_qsl(parts.query)))

    @property
    def url(self) -> str:
        if not self.params:
            return self.path
        return f"{self.path}?{urlencode(self.params)}"


class Navigator:
    """In-memory history stack standing in for the browser location."""

    def __init__(self, initial: str = "/"):
        self.history: List[Location] = [Location.parse(initial)]
        self._listeners: List[Callable[[Location], None]] = []

    @property
    def current(self) -> Location:
        return self.history[-1]

    def navigate(self, path: str, params: Optional[Mapping[str, Any]] = None, *, replace: bool = False) -> Location:
        location = Location.parse(path)
        if params is not None:
            location.params = {k: str(v) for k, v in params.items()}
        if replace:
            self.history[-1] = location
        else:
            self.history.append(location)
        logger.debug(f"Navigated to {location.url}")
        for listener in list(self._listeners):
            listener(location)
        return location

    def back(self) -> Location:
        if len(self.history) > 1:
            self.history.pop()
        return self.current

    def listen(self, listener: Callable[[Location], None]) -> None:
        self._listeners.append(listener)


@dataclass
class AppContext:
    store: Store
    api: ApiClient
    navigator: Navigator = field(default_factory=Navigator)
    settings: ClientSettings = field(default_factory=lambda: default_settings)

    @classmethod
    def create(
        cls,
        *,
        client_settings: Optional[ClientSettings] = None,
        storage=None,
        http_client=None,
        realtime_factory=None,
        initial_path: str = "/",
    ) -> "AppContext":
        """Wire store, API client and navigator from settings."""
        cfg = client_settings or default_settings
        if storage is None:
            storage = JsonFileStorage(cfg.storage_path) if cfg.storage_path else MemoryStorage()

        store = Store.load(
            storage,
            realtime_url=cfg.realtime_url,
            realtime_channel=cfg.realtime_channel,
            realtime_factory=realtime_factory,
        )
        api = ApiClient(
            cfg.api_base_url,
            timeout=cfg.request_timeout,
            token_provider=lambda: store.state.auth.token,
            http_client=http_client,
        )
        return cls(store=store, api=api, navigator=Navigator(initial_path), settings=cfg)

    def close(self) -> None:
        self.store.disconnect_realtime()
        self.api.close()
