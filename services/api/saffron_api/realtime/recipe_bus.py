import json
import logging
from datetime import datetime, timezone

from redis.exceptions import RedisError

from ..infra.redis_client import get_redis, get_sync_redis
from ..settings import settings

logger = logging.getLogger("saffron.events")

RECIPE_EVENT_TYPES = ("recipe_created", "recipe_updated", "recipe_deleted")


def channel_for_recipes() -> str:
    return settings.recipe_events_channel


def _payload(event_type: str, recipe_id: str) -> str:
    return json.dumps({
        "type": event_type,
        "recipe_id": recipe_id,
        "at": datetime.now(timezone.utc).isoformat(),
    })


def publish_recipe_event_sync(event_type: str, recipe_id: str) -> bool:
    """Publish a recipe change to subscribers. Returns False if Redis is unavailable."""
    if event_type not in RECIPE_EVENT_TYPES:
        raise ValueError(f"Unknown recipe event type: {event_type}")
    try:
        r = get_sync_redis()
        r.publish(channel_for_recipes(), _payload(event_type, recipe_id))
        return True
    except RedisError as e:
        logger.warning(f"Failed to publish {event_type} for recipe {recipe_id}: {e}")
        return False


async def subscribe_recipes():
    r = await get_redis()
    pubsub = r.pubsub()
    await pubsub.subscribe(channel_for_recipes())
    return pubsub
