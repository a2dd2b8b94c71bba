"""Recipe listing: URL query sync and the listing view model.

The listing state lives in the URL. `ListingQuery` maps to and from query
params; any change to spice level, category, search or sort resets the page
to 1, and empty values are dropped from the URL altogether. Each change
triggers a refetch through the view's RequestScope, so only the response for
the most recently issued query is ever applied.
"""

import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Mapping, Optional

from .errors import ApiError
from .models import RecipeCategory, RecipePage, RecipeSummary
from .scope import RequestScope

logger = logging.getLogger("saffron.web.listing")

SORT_OPTIONS = ("latest", "most_popular", "quickest")
DEFAULT_LIMIT = 10
MAX_LIMIT = 100

# Changing any of these starts over from page 1
FILTER_FIELDS = ("spice_level", "recipe_category_id", "search", "sort")


def _positive_int(value: Any, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


@dataclass(frozen=True)
class ListingQuery:
    page: int = 1
    limit: int = DEFAULT_LIMIT
    spice_level: str = ""
    recipe_category_id: str = ""
    search: str = ""
    sort: str = "latest"

    @classmethod
    def from_query_params(cls, params: Mapping[str, Any]) -> "ListingQuery":
        sort = str(params.get("sort") or "latest")
        return cls(
            page=_positive_int(params.get("page"), 1),
            limit=min(_positive_int(params.get("limit"), DEFAULT_LIMIT), MAX_LIMIT),
            spice_level=str(params.get("spice_level") or ""),
            recipe_category_id=str(params.get("recipe_category_id") or ""),
            search=str(params.get("search") or ""),
            sort=sort if sort in SORT_OPTIONS else "latest",
        )

    def to_query_params(self) -> Dict[str, str]:
        params = {
            "page": str(self.page),
            "limit": str(self.limit),
            "spice_level": self.spice_level,
            "recipe_category_id": self.recipe_category_id,
            "search": self.search,
            "sort": self.sort,
        }
        return {k: v for k, v in params.items() if v != ""}

    def with_changes(self, **changes) -> "ListingQuery":
        """Apply changes; a filter/search/sort change resets page to 1."""
        updated = replace(self, **changes)
        if "page" not in changes and any(getattr(updated, f) != getattr(self, f) for f in FILTER_FIELDS):
            updated = replace(updated, page=1)
        return updated


class RecipeListingView:
    """View model for /recipes."""

    path = "/recipes"

    def __init__(self, context, params: Optional[Mapping[str, Any]] = None):
        self.context = context
        self.query = ListingQuery.from_query_params(params or {})
        self.scope = RequestScope()

        self.recipes: List[RecipeSummary] = []
        self.categories: List[RecipeCategory] = []
        self.total = 0
        self.total_pages = 0
        self.has_more = False
        self.error: Optional[str] = None

    def load(self) -> None:
        try:
            self.categories = self.context.api.list_categories()
        except ApiError as e:
            logger.error(f"Failed to load categories: {e}")
        self._sync_store()
        self.refresh()

    def refresh(self) -> bool:
        """Fetch the current query. Returns False if a newer request superseded it."""
        query = self.query
        store = self.context.store
        ticket = self.scope.begin()
        store.set_loading(True)
        try:
            page = self.context.api.list_recipes(query.to_query_params())
        except ApiError as e:
            logger.error(f"Failed to load recipes for {query}: {e}")
            return self.scope.commit(ticket, lambda: self._apply_error())
        finally:
            if self.scope.is_current(ticket):
                store.set_loading(False)
        return self.scope.commit(ticket, lambda: self._apply_page(page))

    def _apply_page(self, page: RecipePage) -> None:
        self.recipes = list(page.items)
        self.total = page.total
        self.total_pages = page.total_pages
        self.has_more = page.has_more
        self.error = None
        self.context.store.set_pagination(
            current_page=page.page, total_pages=max(page.total_pages, 1), limit=page.limit
        )

    def _apply_error(self) -> None:
        self.recipes = []
        self.error = "Failed to load recipes. Please try again."

    def _sync_store(self) -> None:
        store = self.context.store
        store.set_filters(spice_level=self.query.spice_level, recipe_category_id=self.query.recipe_category_id)
        store.set_search_query(self.query.search)

    def update(self, **changes) -> bool:
        """Change the query, mirror it into the URL and refetch."""
        query = self.query.with_changes(**changes)
        if query == self.query:
            return False
        self.query = query
        self.context.navigator.navigate(self.path, query.to_query_params(), replace=True)
        self._sync_store()
        return self.refresh()

    def set_spice_level(self, spice_level: str) -> bool:
        return self.update(spice_level=spice_level)

    def set_category(self, recipe_category_id: str) -> bool:
        """An empty id means "all categories"."""
        return self.update(recipe_category_id=recipe_category_id)

    def set_search(self, search: str) -> bool:
        return self.update(search=search.strip())

    def set_sort(self, sort: str) -> bool:
        if sort not in SORT_OPTIONS:
            raise ValueError(f"Unknown sort option: {sort}")
        return self.update(sort=sort)

    def set_page(self, page: int) -> bool:
        return self.update(page=max(1, page))

    def next_page(self) -> bool:
        if not self.has_more:
            return False
        return self.set_page(self.query.page + 1)

    def previous_page(self) -> bool:
        if self.query.page <= 1:
            return False
        return self.set_page(self.query.page - 1)

    def close(self) -> None:
        self.scope.cancel()
        # Requests in flight can no longer clear the loader themselves
        self.context.store.set_loading(False)
