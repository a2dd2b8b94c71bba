"""Realtime recipe change feed over Redis pub/sub.

The server publishes JSON events {"type", "recipe_id", "at"} to a channel;
a RealtimeHandle subscribes to it. Handles hold a live connection and are
never persisted: the store rebuilds one on load when a realtime URL is set.
"""

import json
import logging
from dataclasses import dataclass
from typing import List, Optional

from redis import Redis
from redis.exceptions import RedisError

logger = logging.getLogger("saffron.web.realtime")


@dataclass
class RecipeEvent:
    type: str
    recipe_id: str
    at: Optional[str] = None


class RealtimeHandle:
    def __init__(self, client: Redis, channel: str):
        self.channel = channel
        self._client = client
        self._pubsub = client.pubsub()
        self._pubsub.subscribe(channel)
        self.closed = False

    @classmethod
    def connect(cls, url: str, channel: str) -> "RealtimeHandle":
        return cls(Redis.from_url(url, decode_responses=True), channel)

    def poll(self, timeout: float = 0.0) -> Optional[RecipeEvent]:
        """Return the next recipe event, or None once the subscription is empty.

        Subscribe confirmations and malformed payloads are skipped.
        """
        if self.closed:
            return None
        while True:
            try:
                msg = self._pubsub.get_message(timeout=timeout)
            except RedisError as e:
                logger.warning(f"Realtime poll on {self.channel} failed: {e}")
                return None
            if msg is None:
                return None
            if msg.get("type") != "message":
                continue

            data = msg["data"]
            if isinstance(data, bytes):
                data = data.decode("utf-8")
            try:
                payload = json.loads(data)
                return RecipeEvent(type=payload["type"], recipe_id=payload["recipe_id"], at=payload.get("at"))
            except (ValueError, KeyError, TypeError) as e:
                logger.warning(f"Ignoring malformed realtime message on {self.channel}: {e}")

    def drain(self, timeout: float = 0.0) -> List[RecipeEvent]:
        events = []
        while True:
            event = self.poll(timeout)
            if event is None:
                return events
            events.append(event)

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        try:
            self._pubsub.unsubscribe()
            self._pubsub.close()
        except RedisError as e:
            logger.warning(f"Error closing realtime subscription: {e}")
