import json

from saffron_web.router import Router
from saffron_web.views.admin_login import AdminLoginView
from saffron_web.views.admin_nav import AdminNav
from saffron_web.views.dashboard import DashboardView


LOGIN_OK = {"token": "saffron-v1:abc:def", "admin_id": "admin-1", "username": "chef"}


def test_login_stores_auth_and_navigates_to_dashboard(context, fake_api):
    fake_api.add("POST", "/admin/login", json=LOGIN_OK)
    view = AdminLoginView(context)
    view.form.identifier = "chef"
    view.form.password = "secret"

    assert view.submit() is True

    auth = context.store.state.auth
    assert auth.is_authenticated is True
    assert (auth.token, auth.admin_id, auth.username) == ("saffron-v1:abc:def", "admin-1", "chef")
    assert context.navigator.current.path == "/admin/dashboard"
    assert json.loads(fake_api.requests[0].content) == {"username": "chef", "password": "secret"}


def test_login_with_email_identifier(context, fake_api):
    fake_api.add("POST", "/admin/login", json=LOGIN_OK)
    view = AdminLoginView(context)
    view.form.identifier = "chef@example.com"
    view.form.password = "secret"
    view.submit()

    assert json.loads(fake_api.requests[0].content)["email"] == "chef@example.com"


def test_failed_login_shows_error(context, fake_api):
    fake_api.add("POST", "/admin/login", json={"detail": "Invalid credentials"}, status=401)
    view = AdminLoginView(context)
    view.form.identifier = "chef"
    view.form.password = "wrong"

    assert view.submit() is False
    assert view.error == "Login failed. Please check your credentials."
    assert context.store.state.auth.is_authenticated is False
    assert context.navigator.current.path == "/"


def test_empty_login_form_is_not_sent(context, fake_api):
    view = AdminLoginView(context)
    assert view.submit() is False
    assert fake_api.requests == []


def test_logout_clears_auth_and_navigates_to_login(authed_context):
    nav = AdminNav(authed_context)
    assert nav.username == "chef"

    nav.logout()

    auth = authed_context.store.state.auth
    assert auth.token is None
    assert auth.admin_id is None
    assert auth.username is None
    assert auth.is_authenticated is False
    assert authed_context.navigator.current.path == "/admin/login"


def test_logout_is_persisted(authed_context, storage):
    AdminNav(authed_context).logout()
    assert storage.data["slices"]["auth"]["token"] is None


def test_admin_requests_carry_bearer_token(authed_context, fake_api):
    fake_api.add("GET", "/admin/recipes", json=[])
    fake_api.add("GET", "/admin/recipe_stats", json={"total": 0, "active": 0, "archived": 0})
    DashboardView(authed_context).load()

    request = fake_api.calls("GET", "/admin/recipes")[0]
    assert request.headers["Authorization"] == "Bearer tok-123"


def test_expired_session_returns_to_login(authed_context, fake_api):
    fake_api.add("GET", "/admin/recipes", json={"detail": "Token has expired"}, status=401)
    router = Router(authed_context)

    screen = router.open("/admin/dashboard")
    assert screen.route.name == "admin_dashboard"

    store = authed_context.store
    assert store.state.auth.is_authenticated is False
    assert authed_context.navigator.current.path == "/admin/login"
    assert store.state.notifications.messages[-1].type == "error"


def test_full_login_flow_through_router(context, fake_api):
    fake_api.add("POST", "/admin/login", json=LOGIN_OK)
    fake_api.add("GET", "/admin/recipes", json=[])
    fake_api.add("GET", "/admin/recipe_stats", json={"total": 0, "active": 0, "archived": 0})
    router = Router(context)

    screen = router.open("/admin/dashboard")
    assert screen.route.name == "admin_login"
    assert screen.redirected_from == "/admin/dashboard"

    screen.view.form.identifier = "chef"
    screen.view.form.password = "secret"
    assert screen.view.submit() is True

    screen = router.sync()
    assert screen.route.name == "admin_dashboard"
    assert screen.layout.admin_nav is not None
