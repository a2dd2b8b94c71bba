import logging

from ..errors import ApiError
from .base import View

logger = logging.getLogger("saffron.web.about")

PAGE_KEY = "about"


class AboutView(View):
    def __init__(self, context):
        super().__init__(context)
        self.page = None

    def load(self) -> None:
        self.scope.run(lambda: self.api.get_static_page(PAGE_KEY), self._apply, self._fail)

    def _apply(self, page) -> None:
        self.page = page
        self.error = None

    def _fail(self, e: ApiError) -> None:
        logger.error(f"Failed to load static page {PAGE_KEY!r}: {e}")
        self.error = "Failed to load content."
