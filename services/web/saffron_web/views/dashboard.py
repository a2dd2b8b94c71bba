"""Admin dashboard: recipe counts and the most recent recipes."""

import logging
from typing import List, Tuple

from ..errors import ApiError, ApiResponseError
from ..models import AdminRecipeSummary, RecipeStats
from .base import View

logger = logging.getLogger("saffron.web.dashboard")

RECENT_LIMIT = 5


def session_expired(context) -> None:
    """Drop the stale token and send the admin back to the login page."""
    context.store.clear_auth()
    context.store.add_notification("Your session has expired. Please log in again.", "error")
    context.navigator.navigate("/admin/login")


class DashboardView(View):
    def __init__(self, context):
        super().__init__(context)
        self.stats = RecipeStats()
        self.recent: List[AdminRecipeSummary] = []

    def load(self) -> None:
        self.store.set_loading(True)
        try:
            self.scope.run(self._fetch, self._apply, self._fail)
        finally:
            self.store.set_loading(False)

    def _fetch(self) -> Tuple[List[AdminRecipeSummary], RecipeStats]:
        # Server returns newest first
        recent = self.api.admin_list_recipes(limit=RECENT_LIMIT)
        return recent, self.api.admin_recipe_stats()

    def _apply(self, result: Tuple[List[AdminRecipeSummary], RecipeStats]) -> None:
        self.recent, self.stats = result
        self.error = None

    def _fail(self, e: ApiError) -> None:
        logger.error(f"Failed to load dashboard: {e}")
        if isinstance(e, ApiResponseError) and e.is_unauthorized:
            session_expired(self.context)
            return
        self.error = "Failed to load dashboard data."

    def edit(self, recipe_id: str) -> None:
        self.context.navigator.navigate(f"/admin/recipes/{recipe_id}")

    def new_recipe(self) -> None:
        self.context.navigator.navigate("/admin/recipes/new")

    def apply_realtime_events(self) -> bool:
        handle = self.store.state.realtime.handle
        if handle is None or not handle.drain():
            return False
        self.load()
        return True
