"""Recipe detail view: recipe, related recipes and share links."""

import logging
from typing import Dict, List, Optional
from urllib.parse import quote

from ..errors import ApiError, ApiResponseError
from ..models import Recipe, RecipeSummary
from .base import View

logger = logging.getLogger("saffron.web.detail")

RELATED_LIMIT = 4


class RecipeDetailView(View):
    def __init__(self, context, recipe_id: str):
        super().__init__(context)
        self.recipe_id = recipe_id
        self.recipe: Optional[Recipe] = None
        self.related: List[RecipeSummary] = []
        self.deleted = False

    def load(self) -> None:
        self.store.set_loading(True)
        try:
            self.scope.run(lambda: self.api.get_recipe(self.recipe_id), self._apply, self._fail)
        finally:
            self.store.set_loading(False)
        if self.recipe is not None:
            self._load_related()

    def _apply(self, recipe: Recipe) -> None:
        self.recipe = recipe
        self.error = None

    def _fail(self, e: ApiError) -> None:
        logger.error(f"Failed to load recipe {self.recipe_id}: {e}")
        self.recipe = None
        if isinstance(e, ApiResponseError) and e.is_not_found:
            self.error = "Recipe not found."
        else:
            self.error = "Failed to load recipe details."

    def _load_related(self) -> None:
        # Related recipes are optional; failures only get logged
        try:
            self.related = self.api.related_recipes(self.recipe_id, limit=RELATED_LIMIT)
        except ApiError as e:
            logger.error(f"Error fetching related recipes: {e}")
            self.related = []

    @property
    def url(self) -> str:
        return f"{self.context.settings.site_url.rstrip('/')}/recipes/{self.recipe_id}"

    def share_links(self) -> Dict[str, str]:
        if self.recipe is None:
            return {}
        url = quote(self.url, safe="")
        title = quote(self.recipe.title, safe="")
        return {
            "facebook": f"https://www.facebook.com/sharer/sharer.php?u={url}",
            "twitter": f"https://twitter.com/intent/tweet?text={title}&url={url}",
            "whatsapp": f"https://api.whatsapp.com/send?text={quote(self.recipe.title + ' ' + self.url, safe='')}",
        }

    def apply_realtime_events(self) -> bool:
        """Reload when this recipe changed elsewhere. Returns True if anything applied."""
        handle = self.store.state.realtime.handle
        if handle is None:
            return False
        events = [e for e in handle.drain() if e.recipe_id == self.recipe_id]
        if not events:
            return False
        if events[-1].type == "recipe_deleted":
            self.deleted = True
            self.recipe = None
            self.error = "This recipe is no longer available."
        else:
            self.load()
        return True
