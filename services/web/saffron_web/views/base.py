from ..scope import RequestScope


class View:
    """Common plumbing for view models: context access and a request scope."""

    def __init__(self, context):
        self.context = context
        self.scope = RequestScope()
        self.error = None

    @property
    def store(self):
        return self.context.store

    @property
    def api(self):
        return self.context.api

    def load(self) -> None:
        pass

    def close(self) -> None:
        self.scope.cancel()
