import httpx
import pytest

from saffron_web.listing import ListingQuery, RecipeListingView
from saffron_web.scope import RequestScope


# --- ListingQuery ---

def test_query_defaults_and_invalid_numbers():
    query = ListingQuery.from_query_params({"page": "abc", "limit": "-3", "sort": "random"})
    assert query == ListingQuery()
    assert query.page == 1
    assert query.limit == 10
    assert query.sort == "latest"


def test_query_parses_all_fields():
    query = ListingQuery.from_query_params({
        "page": "3", "limit": "5", "spice_level": "hot",
        "recipe_category_id": "cat-1", "search": "dal", "sort": "quickest",
    })
    assert query == ListingQuery(3, 5, "hot", "cat-1", "dal", "quickest")


def test_query_limit_clamped_to_server_maximum():
    assert ListingQuery.from_query_params({"limit": "500"}).limit == 100
    assert ListingQuery.from_query_params({"limit": "100"}).limit == 100


def test_oversized_limit_in_url_still_loads(context, fake_api, page_json):
    fake_api.add("GET", "/recipe_categories", json=[])
    fake_api.add("GET", "/recipes", json=page_json(["a"]))
    view = RecipeListingView(context, {"limit": "500"})
    view.load()

    assert view.error is None
    assert fake_api.calls("GET", "/recipes")[-1].url.params["limit"] == "100"


def test_to_query_params_drops_empty_values():
    params = ListingQuery(spice_level="mild").to_query_params()
    assert params == {"page": "1", "limit": "10", "spice_level": "mild", "sort": "latest"}
    assert "recipe_category_id" not in params
    assert "search" not in params


@pytest.mark.parametrize("field,value", [
    ("spice_level", "hot"),
    ("recipe_category_id", "cat-2"),
    ("search", "paneer"),
    ("sort", "most_popular"),
])
def test_filter_change_resets_page(field, value):
    query = ListingQuery(page=4)
    assert query.with_changes(**{field: value}).page == 1


def test_page_change_keeps_filters():
    query = ListingQuery(spice_level="hot", recipe_category_id="cat-1")
    moved = query.with_changes(page=2)
    assert moved.page == 2
    assert moved.spice_level == "hot"
    assert moved.recipe_category_id == "cat-1"


def test_unchanged_filter_keeps_page():
    query = ListingQuery(page=3, spice_level="hot")
    assert query.with_changes(spice_level="hot").page == 3


# --- RequestScope ---

def test_scope_only_latest_ticket_commits():
    scope = RequestScope()
    applied = []
    first = scope.begin()
    second = scope.begin()

    assert scope.commit(second, lambda: applied.append("second")) is True
    assert scope.commit(first, lambda: applied.append("first")) is False
    assert applied == ["second"]


def test_scope_cancel_invalidates_in_flight():
    scope = RequestScope()
    ticket = scope.begin()
    scope.cancel()
    assert scope.is_current(ticket) is False
    assert scope.commit(ticket, pytest.fail) is False


# --- RecipeListingView ---

@pytest.fixture
def listing(context, fake_api, page_json):
    fake_api.add("GET", "/recipe_categories", json=[{"id": "cat-1", "name": "Curries"}])
    fake_api.add("GET", "/recipes", json=page_json(["a", "b"]))
    return RecipeListingView(context, {"page": "2", "spice_level": "hot"})


def test_load_fetches_categories_and_recipes(listing, fake_api, context):
    listing.load()
    assert [c.name for c in listing.categories] == ["Curries"]
    assert [r.id for r in listing.recipes] == ["a", "b"]

    request = fake_api.calls("GET", "/recipes")[-1]
    assert dict(request.url.params) == {"page": "2", "limit": "10", "spice_level": "hot", "sort": "latest"}
    assert context.store.state.filters.spice_level == "hot"
    assert context.store.state.ui_loader.is_loading is False


def test_category_change_resets_page_and_updates_url(listing, fake_api, context):
    listing.load()

    listing.set_category("cat-1")
    assert listing.query.page == 1
    location = context.navigator.current
    assert location.path == "/recipes"
    assert location.params["recipe_category_id"] == "cat-1"
    assert location.params["page"] == "1"
    assert fake_api.calls("GET", "/recipes")[-1].url.params["recipe_category_id"] == "cat-1"

    # Back to "all" removes the parameter entirely
    listing.set_category("")
    assert "recipe_category_id" not in context.navigator.current.params
    assert "recipe_category_id" not in fake_api.calls("GET", "/recipes")[-1].url.params
    assert context.store.state.filters.recipe_category_id == ""


def test_every_change_refetches(listing, fake_api):
    listing.load()
    before = len(fake_api.calls("GET", "/recipes"))

    listing.set_search("tikka")
    listing.set_sort("quickest")
    listing.set_spice_level("")
    assert len(fake_api.calls("GET", "/recipes")) == before + 3

    # No-op change does not refetch
    listing.set_sort("quickest")
    assert len(fake_api.calls("GET", "/recipes")) == before + 3


def test_invalid_sort_rejected(listing):
    with pytest.raises(ValueError):
        listing.set_sort("alphabetical")


def test_pagination_uses_server_totals(context, fake_api, page_json):
    """A full last page does not suggest another page."""
    fake_api.add("GET", "/recipes", json=page_json(
        ["a", "b"], page=1, limit=2, total=2, total_pages=1, has_more=False
    ))
    view = RecipeListingView(context, {"limit": "2"})
    view.refresh()

    assert view.total_pages == 1
    assert view.next_page() is False
    assert context.store.state.pagination.total_pages == 1


def test_next_page_when_server_has_more(context, fake_api, page_json):
    fake_api.add("GET", "/recipes", json=page_json(
        ["a", "b"], page=1, limit=2, total=5, total_pages=3, has_more=True
    ))
    view = RecipeListingView(context, {"limit": "2", "search": "dal"})
    view.refresh()

    assert view.next_page() is not False
    assert view.query.page == 2
    assert view.query.search == "dal"
    assert context.navigator.current.params["page"] == "2"


def test_superseded_response_is_discarded(context, fake_api, page_json):
    view = RecipeListingView(context)

    def handler(request):
        if request.url.params.get("recipe_category_id") == "slow":
            # A newer query is issued while this one is still in flight
            view.set_category("fast")
            return httpx.Response(200, json=page_json(["stale"]))
        return httpx.Response(200, json=page_json(["fresh"]))

    fake_api.add("GET", "/recipes", handler=handler)

    assert view.set_category("slow") is False
    assert [r.id for r in view.recipes] == ["fresh"]
    assert view.query.recipe_category_id == "fast"
    assert context.store.state.ui_loader.is_loading is False


def test_response_after_close_is_discarded(context, fake_api, page_json):
    view = RecipeListingView(context)

    def handler(request):
        view.close()
        return httpx.Response(200, json=page_json(["late"]))

    fake_api.add("GET", "/recipes", handler=handler)
    assert view.refresh() is False
    assert view.recipes == []
    assert context.store.state.ui_loader.is_loading is False


def test_fetch_error_becomes_inline_message(context, fake_api):
    fake_api.add("GET", "/recipes", json={"detail": "boom"}, status=500)
    view = RecipeListingView(context)

    assert view.refresh() is True
    assert view.recipes == []
    assert view.error == "Failed to load recipes. Please try again."
    assert context.store.state.ui_loader.is_loading is False
