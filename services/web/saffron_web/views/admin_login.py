import logging

from ..errors import ApiError, ApiResponseError, FormValidationError
from ..forms import LoginForm
from .base import View

logger = logging.getLogger("saffron.web.auth")

DASHBOARD_PATH = "/admin/dashboard"


class AdminLoginView(View):
    def __init__(self, context):
        super().__init__(context)
        self.form = LoginForm()
        self.field_errors = {}
        self.is_loading = False

    def submit(self) -> bool:
        try:
            self.form.validate()
        except FormValidationError as e:
            self.field_errors = e.errors
            return False
        self.field_errors = {}
        self.error = None

        self.is_loading = True
        try:
            result = self.api.login(self.form.identifier.strip(), self.form.password)
        except ApiError as e:
            logger.error(f"Admin login failed: {e}")
            if isinstance(e, ApiResponseError) and e.status_code in (401, 422):
                self.error = "Login failed. Please check your credentials."
            elif isinstance(e, ApiResponseError) and e.status_code == 429:
                self.error = "Too many login attempts. Please wait and try again."
            else:
                self.error = "Login failed. Please try again later."
            return False
        finally:
            self.is_loading = False

        self.store.set_auth(result.token, result.admin_id, result.username)
        self.form.password = ""
        self.context.navigator.navigate(DASHBOARD_PATH)
        return True
