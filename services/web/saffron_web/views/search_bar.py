from .base import View

LISTING_PATH = "/recipes"


class SearchBar(View):
    """Shared search box shown above public pages."""

    @property
    def query(self) -> str:
        return self.store.state.search.search_query

    def set_query(self, text: str) -> None:
        self.store.set_search_query(text)

    def submit(self) -> None:
        query = self.query.strip()
        params = {"search": query} if query else {}
        self.context.navigator.navigate(LISTING_PATH, params)
