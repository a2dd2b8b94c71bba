import logging

from ..errors import ApiError
from .base import View

logger = logging.getLogger("saffron.web.landing")

FEATURED_LIMIT = 6

HERO_BANNER = {
    "intro_text": "Discover the flavours of home cooking, one recipe at a time.",
    "cta_label": "Explore Recipes",
    "cta_link": "/recipes",
}


class LandingView(View):
    def __init__(self, context):
        super().__init__(context)
        self.hero = dict(HERO_BANNER)
        self.featured = []

    def load(self) -> None:
        self.store.set_loading(True)
        try:
            self.scope.run(
                lambda: self.api.list_recipes({"limit": FEATURED_LIMIT, "sort": "latest"}),
                self._apply,
                self._fail,
            )
        finally:
            self.store.set_loading(False)

    def _apply(self, page) -> None:
        self.featured = list(page.items)
        self.error = None

    def _fail(self, e: ApiError) -> None:
        logger.error(f"Error fetching featured recipes: {e}")
        self.featured = []
        self.error = "Could not load featured recipes."
