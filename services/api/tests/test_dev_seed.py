from saffron_api.models import AdminAccount, Recipe, RecipeIngredient, StaticPage


def test_seed_creates_demo_content(client, db_session):
    response = client.post("/api/dev/seed")
    assert response.status_code == 200

    data = response.json()
    assert data["categories_created"] == 3
    assert data["recipes_created"] == 3
    assert data["pages_created"] == 1

    assert db_session.query(Recipe).count() == 3
    assert db_session.get(StaticPage, "about") is not None

    lassi = db_session.query(Recipe).filter_by(title="Mango Lassi").one()
    assert [i.order_index for i in lassi.ingredients] == [1, 2, 3]

    listing = client.get("/api/recipes").json()
    assert listing["total"] == 3


def test_seed_is_idempotent(client, db_session):
    client.post("/api/dev/seed")
    ingredient_count = db_session.query(RecipeIngredient).count()

    second = client.post("/api/dev/seed").json()
    assert second["categories_created"] == 0
    assert second["recipes_created"] == 0
    assert second["pages_created"] == 0
    assert db_session.query(RecipeIngredient).count() == ingredient_count


def test_seed_bootstraps_admin_when_configured(client, db_session, monkeypatch):
    from saffron_api.settings import settings

    monkeypatch.setattr(settings, "admin_username", "owner")
    monkeypatch.setattr(settings, "admin_email", "owner@example.com")
    monkeypatch.setattr(settings, "admin_password", "bootstrap-pass")

    data = client.post("/api/dev/seed").json()
    assert data["admin_created"] is True
    assert db_session.query(AdminAccount).filter_by(username="owner").count() == 1

    login = client.post(
        "/api/admin/login", json={"username": "owner", "password": "bootstrap-pass"}
    )
    assert login.status_code == 200

    # Second run finds the account already present
    assert client.post("/api/dev/seed").json()["admin_created"] is False
