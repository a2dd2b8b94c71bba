from saffron_api.models import RecipeCategory, StaticPage


def test_categories_sorted_by_name(client, db_session):
    db_session.add_all([
        RecipeCategory(name="Street Food"),
        RecipeCategory(name="Breads"),
        RecipeCategory(name="Curries"),
    ])
    db_session.commit()

    response = client.get("/api/recipe_categories")
    assert response.status_code == 200
    assert [c["name"] for c in response.json()] == ["Breads", "Curries", "Street Food"]


def test_static_page_found(client, db_session):
    db_session.add(StaticPage(page_key="about", title="About", content="<p>Hello</p>"))
    db_session.commit()

    response = client.get("/api/static_pages/about")
    assert response.status_code == 200
    data = response.json()
    assert data["page_key"] == "about"
    assert data["content"] == "<p>Hello</p>"


def test_static_page_missing(client):
    response = client.get("/api/static_pages/terms")
    assert response.status_code == 404
