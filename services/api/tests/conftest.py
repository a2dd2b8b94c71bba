import os

# Must be set before saffron_api.settings is imported
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from saffron_api.main import app
from saffron_api.db import Base, get_db
from saffron_api.models import RecipeCategory
from saffron_api.ratelimit import limiter
from saffron_api.services.accounts import create_admin
from saffron_api.services.auth import issue_token

# --- Test Database Setup ---

SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool  # Important for in-memory to share connection across threads/sessions
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

ADMIN_PASSWORD = "s3cret-pass"


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def setup_database():
    """Create tables before each test, drop after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def reset_rate_limits():
    limiter.reset()
    yield


@pytest.fixture
def client():
    """Test client with DB override."""
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def db_session():
    """Direct database session for setup."""
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture
def admin(db_session):
    """Create a test admin account."""
    account = create_admin(db_session, username="chef", email="chef@example.com", password=ADMIN_PASSWORD)
    db_session.commit()
    db_session.refresh(account)
    return account


@pytest.fixture
def admin_password():
    return ADMIN_PASSWORD


@pytest.fixture
def auth_headers(admin):
    return {"Authorization": f"Bearer {issue_token(admin.id, admin.username)}"}


@pytest.fixture
def category(db_session):
    cat = RecipeCategory(name="Curries")
    db_session.add(cat)
    db_session.commit()
    db_session.refresh(cat)
    return cat


@pytest.fixture
def make_recipe(db_session):
    """Factory inserting a recipe directly into the test DB."""
    from datetime import datetime, timedelta, timezone
    from saffron_api.models import Recipe, RecipeIngredient, RecipeStep

    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    counter = {"n": 0}

    def _make(title, *, ingredients=(), steps=(), **fields):
        counter["n"] += 1
        fields.setdefault("description", f"{title} description")
        fields.setdefault("created_at", base + timedelta(minutes=counter["n"]))
        recipe = Recipe(title=title, **fields)
        recipe.ingredients = [
            RecipeIngredient(ingredient_name=name, measurement=m, order_index=i)
            for name, m, i in ingredients
        ]
        recipe.steps = [
            RecipeStep(step_number=n, instruction=text) for n, text in steps
        ]
        db_session.add(recipe)
        db_session.commit()
        db_session.refresh(recipe)
        return recipe

    return _make


@pytest.fixture
def client_dist(tmp_path, monkeypatch):
    """A fake pre-built client bundle."""
    from saffron_api.settings import settings

    (tmp_path / "index.html").write_text("<!doctype html><div id=\"root\"></div>", encoding="utf-8")
    (tmp_path / "assets").mkdir()
    (tmp_path / "assets" / "app.js").write_text("console.log('saffron');", encoding="utf-8")
    monkeypatch.setattr(settings, "client_dist_dir", str(tmp_path))
    return tmp_path


import fakeredis
import fakeredis.aioredis
from saffron_api.infra import redis_client

@pytest.fixture(autouse=True)
def mock_redis(monkeypatch):
    server = fakeredis.FakeServer()
    # Create fake clients sharing the same server
    async_redis = fakeredis.aioredis.FakeRedis(server=server, decode_responses=True)
    sync_redis = fakeredis.FakeRedis(server=server, decode_responses=True)

    # Force the clients into the infra module
    redis_client._redis_async = async_redis
    redis_client._redis_sync = sync_redis

    yield sync_redis

    # Cleanup
    redis_client._redis_async = None
    redis_client._redis_sync = None
