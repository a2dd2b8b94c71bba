"""Client route table, layouts and the admin auth guard.

Public routes render inside the public layout (top nav, optional search bar,
footer); admin routes inside the admin layout (admin nav). Admin routes
other than the login page redirect to /admin/login while the store holds no
authentication. Unmatched paths resolve to the not-found route.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional

from .listing import RecipeListingView
from .views.about import AboutView
from .views.admin_login import AdminLoginView
from .views.admin_nav import AdminNav
from .views.contact import ContactView
from .views.dashboard import DashboardView
from .views.detail import RecipeDetailView
from .views.landing import LandingView
from .views.not_found import NotFoundView
from .views.recipe_editor import RecipeEditorView
from .views.search_bar import SearchBar

logger = logging.getLogger("saffron.web.router")

LOGIN_PATH = "/admin/login"

# Layout names
PUBLIC = "public"
PUBLIC_SEARCH = "public_search"
ADMIN = "admin"
BARE = "bare"


@dataclass(frozen=True)
class Route:
    name: str
    pattern: str
    layout: str
    build: Callable[..., Any]
    requires_auth: bool = False

    def match(self, path: str) -> Optional[Dict[str, str]]:
        regex = "^" + re.sub(r"\{(\w+)\}", r"(?P<\1>[^/]+)", self.pattern) + "/?$"
        m = re.match(regex, path)
        return m.groupdict() if m else None


ROUTES: List[Route] = [
    Route("landing", "/", PUBLIC_SEARCH, lambda ctx, params, **kw: LandingView(ctx)),
    Route("recipes", "/recipes", PUBLIC_SEARCH, lambda ctx, params, **kw: RecipeListingView(ctx, params)),
    Route("recipe_detail", "/recipes/{recipe_id}", PUBLIC,
          lambda ctx, params, recipe_id: RecipeDetailView(ctx, recipe_id)),
    Route("about", "/about", PUBLIC, lambda ctx, params, **kw: AboutView(ctx)),
    Route("contact", "/contact", PUBLIC, lambda ctx, params, **kw: ContactView(ctx)),
    Route("admin_login", LOGIN_PATH, BARE, lambda ctx, params, **kw: AdminLoginView(ctx)),
    Route("admin_dashboard", "/admin/dashboard", ADMIN,
          lambda ctx, params, **kw: DashboardView(ctx), requires_auth=True),
    # Must precede the {recipe_id} pattern
    Route("admin_recipe_new", "/admin/recipes/new", ADMIN,
          lambda ctx, params, **kw: RecipeEditorView(ctx), requires_auth=True),
    Route("admin_recipe_edit", "/admin/recipes/{recipe_id}", ADMIN,
          lambda ctx, params, recipe_id: RecipeEditorView(ctx, recipe_id), requires_auth=True),
]

NOT_FOUND = Route("not_found", "", PUBLIC, lambda ctx, params, path="": NotFoundView(ctx, path))


@dataclass
class Layout:
    name: str
    search_bar: Optional[SearchBar] = None
    admin_nav: Optional[AdminNav] = None


def build_layout(name: str, context) -> Layout:
    if name == PUBLIC_SEARCH:
        return Layout(name, search_bar=SearchBar(context))
    if name == ADMIN:
        return Layout(name, admin_nav=AdminNav(context))
    return Layout(name)


@dataclass
class Screen:
    """What the router produced for a location."""
    route: Route
    view: Any
    layout: Layout
    path_params: Dict[str, str] = field(default_factory=dict)
    redirected_from: Optional[str] = None


class Router:
    def __init__(self, context, routes: Optional[List[Route]] = None):
        self.context = context
        self.routes = routes if routes is not None else ROUTES
        self.screen: Optional[Screen] = None

    def resolve(self, path: str):
        """Return (route, path_params) for a path, or the not-found route."""
        for route in self.routes:
            params = route.match(path)
            if params is not None:
                return route, params
        return NOT_FOUND, {"path": path}

    def open(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        *,
        load: bool = True,
        replace: bool = False,
    ) -> Screen:
        """Navigate to `path`, build its view and (by default) load it."""
        location = self.context.navigator.navigate(path, params, replace=replace)
        route, path_params = self.resolve(location.path)

        redirected_from = None
        if route.requires_auth and not self.context.store.state.auth.is_authenticated:
            logger.info(f"Unauthenticated access to {location.path}, redirecting to login")
            redirected_from = location.path
            self.context.navigator.navigate(LOGIN_PATH, replace=True)
            route, path_params = self.resolve(LOGIN_PATH)

        if self.screen is not None:
            self.screen.view.close()

        view = route.build(self.context, self.context.navigator.current.params, **path_params)
        self.screen = Screen(
            route=route,
            view=view,
            layout=build_layout(route.layout, self.context),
            path_params=path_params,
            redirected_from=redirected_from,
        )
        if load:
            view.load()
        return self.screen

    def sync(self, load: bool = True) -> Screen:
        """Re-render the navigator's current location (after a view navigated)."""
        current = self.context.navigator.current
        return self.open(current.path, current.params, load=load, replace=True)
