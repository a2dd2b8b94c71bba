import json

from saffron_web.realtime import RealtimeHandle


def test_poll_parses_recipe_events(fake_redis):
    handle = RealtimeHandle(fake_redis, "saffron:recipes")
    fake_redis.publish("saffron:recipes", json.dumps({
        "type": "recipe_created", "recipe_id": "r1", "at": "2024-01-01T00:00:00+00:00",
    }))

    event = handle.poll()
    assert event.type == "recipe_created"
    assert event.recipe_id == "r1"
    assert event.at.startswith("2024-01-01")
    assert handle.poll() is None
    handle.close()


def test_other_channels_ignored(fake_redis):
    handle = RealtimeHandle(fake_redis, "saffron:recipes")
    fake_redis.publish("something:else", json.dumps({"type": "recipe_created", "recipe_id": "r1"}))
    assert handle.drain() == []
    handle.close()


def test_malformed_messages_skipped(fake_redis):
    handle = RealtimeHandle(fake_redis, "saffron:recipes")
    fake_redis.publish("saffron:recipes", "not json")
    fake_redis.publish("saffron:recipes", json.dumps({"type": "recipe_deleted", "recipe_id": "r2"}))

    event = handle.poll()
    assert event.recipe_id == "r2"
    assert handle.drain() == []
    handle.close()


def test_drain_returns_every_queued_event(fake_redis):
    handle = RealtimeHandle(fake_redis, "saffron:recipes")
    for recipe_id in ("r1", "r2", "r3"):
        fake_redis.publish("saffron:recipes", json.dumps({"type": "recipe_updated", "recipe_id": recipe_id}))
    fake_redis.publish("saffron:recipes", "{broken")
    fake_redis.publish("saffron:recipes", json.dumps({"type": "recipe_deleted", "recipe_id": "r4"}))

    events = handle.drain()
    assert [e.recipe_id for e in events] == ["r1", "r2", "r3", "r4"]
    assert events[-1].type == "recipe_deleted"
    assert handle.poll() is None
    handle.close()


def test_poll_on_empty_subscription(fake_redis):
    handle = RealtimeHandle(fake_redis, "saffron:recipes")
    assert handle.poll() is None
    assert handle.drain() == []
    handle.close()


def test_close_is_idempotent(fake_redis):
    handle = RealtimeHandle(fake_redis, "saffron:recipes")
    handle.close()
    handle.close()
    assert handle.closed is True
    assert handle.poll() is None
