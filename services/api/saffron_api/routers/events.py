import asyncio
import json
import logging
from datetime import datetime, timezone
from typing import AsyncIterator, Awaitable, Callable

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import StreamingResponse
from redis.exceptions import RedisError

from ..realtime.recipe_bus import subscribe_recipes

router = APIRouter()
logger = logging.getLogger("saffron.events")

HEARTBEAT_SECONDS = 15.0


async def recipe_event_stream(
    pubsub,
    is_disconnected: Callable[[], Awaitable[bool]],
    *,
    poll_timeout: float = 1.0,
    heartbeat_seconds: float = HEARTBEAT_SECONDS,
) -> AsyncIterator[str]:
    """Relay recipe change events from Redis as Server-Sent Events."""
    loop = asyncio.get_running_loop()
    last_ping = loop.time()
    try:
        while True:
            if await is_disconnected():
                break

            try:
                msg = await pubsub.get_message(ignore_subscribe_messages=True, timeout=poll_timeout)
            except RedisError as e:
                logger.error(f"Redis PubSub Error: {e}")
                await asyncio.sleep(1)
                continue

            if msg:
                data = msg["data"]
                if isinstance(data, bytes):
                    data = data.decode("utf-8")
                yield f"event: recipe\ndata: {data}\n\n"

            now = loop.time()
            if now - last_ping > heartbeat_seconds:
                payload = json.dumps({"type": "heartbeat", "ts": datetime.now(timezone.utc).isoformat()})
                yield f"event: ping\ndata: {payload}\n\n"
                last_ping = now
    finally:
        await pubsub.unsubscribe()
        await pubsub.close()


@router.get("/events/recipes")
async def recipe_events(request: Request):
    """Server-Sent Events for recipe create/update/delete."""
    try:
        pubsub = await subscribe_recipes()
    except RedisError as e:
        logger.error(f"Cannot subscribe to recipe events: {e}")
        raise HTTPException(status_code=503, detail="Realtime events unavailable")
    return StreamingResponse(
        recipe_event_stream(pubsub, request.is_disconnected),
        media_type="text/event-stream",
    )
