import httpx
import pytest
import fakeredis

from saffron_web.config import ClientSettings
from saffron_web.context import AppContext
from saffron_web.store import MemoryStorage


class FakeApi:
    """Route table for httpx.MockTransport that records every request."""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def add(self, method, path, json=None, status=200, handler=None):
        if handler is None:
            def handler(request):
                return httpx.Response(status, json=json)
        self.routes[(method, path)] = handler

    def __call__(self, request):
        self.requests.append(request)
        path = request.url.path[len("/api"):]
        handler = self.routes.get((request.method, path))
        if handler is None:
            return httpx.Response(404, json={"detail": "Not Found"})
        return handler(request)

    def calls(self, method, path):
        return [r for r in self.requests if r.method == method and r.url.path == "/api" + path]


@pytest.fixture
def fake_api():
    return FakeApi()


@pytest.fixture
def client_settings():
    return ClientSettings(
        api_base_url="http://testserver/api",
        site_url="https://saffron.example",
        storage_path=None,
        realtime_url=None,
    )


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def http_client(fake_api, client_settings):
    client = httpx.Client(base_url=client_settings.api_base_url, transport=httpx.MockTransport(fake_api))
    yield client
    client.close()


@pytest.fixture
def context(client_settings, storage, http_client):
    ctx = AppContext.create(client_settings=client_settings, storage=storage, http_client=http_client)
    yield ctx
    ctx.close()


@pytest.fixture
def authed_context(context):
    context.store.set_auth("tok-123", "admin-1", "chef")
    return context


@pytest.fixture
def fake_redis():
    return fakeredis.FakeRedis(decode_responses=True)


@pytest.fixture
def summary_json():
    def _make(recipe_id, title=None, **fields):
        data = {
            "id": recipe_id,
            "title": title or f"Recipe {recipe_id}",
            "description": "Tasty",
            "recipe_category_id": None,
            "main_image_url": "",
            "cooking_time": 10,
            "preparation_time": 5,
            "spice_level": "mild",
            "difficulty": "easy",
            "created_at": "2024-01-01T00:00:00Z",
        }
        data.update(fields)
        return data

    return _make


@pytest.fixture
def page_json(summary_json):
    def _make(ids=(), *, page=1, limit=10, total=None, total_pages=None, has_more=False):
        items = [summary_json(i) for i in ids]
        total = len(items) if total is None else total
        if total_pages is None:
            total_pages = (total + limit - 1) // limit
        return {
            "items": items,
            "page": page,
            "limit": limit,
            "total": total,
            "total_pages": total_pages,
            "has_more": has_more,
        }

    return _make


@pytest.fixture
def recipe_json(summary_json):
    def _make(recipe_id, title=None, **fields):
        data = summary_json(recipe_id, title)
        data.update({
            "servings": 2,
            "additional_images": [],
            "video_url": "",
            "chef_tips": "",
            "nutritional_info": "",
            "status": "active",
            "updated_at": "2024-01-02T00:00:00Z",
            "ingredients": [{"id": "i1", "ingredient_name": "Rice", "measurement": "1 cup", "order_index": 1}],
            "steps": [{"id": "s1", "step_number": 1, "instruction": "Cook", "media_url": ""}],
        })
        data.update(fields)
        return data

    return _make


@pytest.fixture
def realtime_context(client_settings, storage, http_client, fake_redis):
    """Context whose store subscribes to recipe events on a fake Redis."""
    from saffron_web.realtime import RealtimeHandle

    cfg = client_settings.model_copy(update={"realtime_url": "redis://fake:6379/0"})
    ctx = AppContext.create(
        client_settings=cfg,
        storage=storage,
        http_client=http_client,
        realtime_factory=lambda url, channel: RealtimeHandle(fake_redis, channel),
    )
    yield ctx
    ctx.close()
