import threading
from typing import Callable, Optional, TypeVar

from .errors import ApiError

T = TypeVar("T")


class RequestScope:
    """Per-view request generation counter.

    Each request takes a ticket from `begin()`. Only the holder of the latest
    ticket may commit its result, so a response for a superseded request is
    dropped even if it arrives last. `cancel()` invalidates every in-flight
    ticket (used when the view closes).
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._generation = 0

    def begin(self) -> int:
        with self._lock:
            self._generation += 1
            return self._generation

    def is_current(self, ticket: int) -> bool:
        with self._lock:
            return ticket == self._generation

    def commit(self, ticket: int, apply: Callable[[], None]) -> bool:
        with self._lock:
            if ticket != self._generation:
                return False
            apply()
            return True

    def cancel(self) -> None:
        with self._lock:
            self._generation += 1

    def run(
        self,
        fetch: Callable[[], T],
        on_result: Callable[[T], None],
        on_error: Optional[Callable[[ApiError], None]] = None,
    ) -> bool:
        """Fetch and commit in one step. Returns False if the result was discarded."""
        ticket = self.begin()
        try:
            result = fetch()
        except ApiError as e:
            if on_error is None:
                raise
            return self.commit(ticket, lambda: on_error(e))
        return self.commit(ticket, lambda: on_result(result))
