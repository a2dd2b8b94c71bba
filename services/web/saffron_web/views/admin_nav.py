from .base import View

LOGIN_PATH = "/admin/login"

ADMIN_LINKS = (
    ("dashboard", "/admin/dashboard"),
    ("manage_recipes", "/admin/recipes/new"),
)


class AdminNav(View):
    """Admin chrome: section links and logout."""

    def __init__(self, context):
        super().__init__(context)
        self.links = ADMIN_LINKS

    @property
    def username(self):
        return self.store.state.auth.username

    @property
    def active_item(self):
        path = self.context.navigator.current.path
        for name, link in self.links:
            if path == link:
                return name
        return None

    def go(self, name: str) -> None:
        self.context.navigator.navigate(dict(self.links)[name])

    def logout(self) -> None:
        self.store.clear_auth()
        self.context.navigator.navigate(LOGIN_PATH)
