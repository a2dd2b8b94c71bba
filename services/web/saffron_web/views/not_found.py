from .base import View


class NotFoundView(View):
    def __init__(self, context, path: str = ""):
        super().__init__(context)
        self.path = path
        self.error = "Page not found."
