"""Admin recipe editor (create and edit)."""

import logging
from typing import Dict, Optional

from ..editor import RecipeDraft
from ..errors import ApiError, ApiResponseError, FormValidationError
from .base import View
from .dashboard import session_expired

logger = logging.getLogger("saffron.web.editor")

DASHBOARD_PATH = "/admin/dashboard"


class RecipeEditorView(View):
    def __init__(self, context, recipe_id: Optional[str] = None):
        super().__init__(context)
        self.recipe_id = recipe_id
        self.draft = RecipeDraft()
        self.categories = []
        self.field_errors: Dict[str, str] = {}
        self.is_loading = False

    @property
    def is_edit_mode(self) -> bool:
        return self.recipe_id is not None

    def load(self) -> None:
        try:
            self.categories = self.api.list_categories()
        except ApiError as e:
            logger.error(f"Failed to load categories: {e}")

        if not self.is_edit_mode:
            return
        self.is_loading = True
        try:
            self.scope.run(lambda: self.api.admin_get_recipe(self.recipe_id), self._apply, self._fail_load)
        finally:
            self.is_loading = False

    def _apply(self, recipe) -> None:
        self.draft = RecipeDraft.from_recipe(recipe)
        self.error = None

    def _fail_load(self, e: ApiError) -> None:
        logger.error(f"Error loading recipe {self.recipe_id}: {e}")
        if isinstance(e, ApiResponseError) and e.is_unauthorized:
            session_expired(self.context)
            return
        self.error = "Failed to load recipe."

    def _handle_write_error(self, e: ApiError, message: str) -> None:
        logger.error(f"{message} ({e})")
        if isinstance(e, ApiResponseError) and e.is_unauthorized:
            session_expired(self.context)
            return
        if isinstance(e, ApiResponseError) and e.status_code == 422:
            self.error = f"{message} {e.message}"
        else:
            self.error = message

    def submit(self) -> bool:
        try:
            self.draft.validate()
        except FormValidationError as e:
            self.field_errors = e.errors
            return False
        self.field_errors = {}
        self.error = None

        payload = self.draft.to_payload()
        self.is_loading = True
        try:
            if self.is_edit_mode:
                self.api.admin_update_recipe(self.recipe_id, payload)
                message = "Recipe updated successfully"
            else:
                created = self.api.admin_create_recipe(payload)
                self.recipe_id = created.id
                message = "Recipe created successfully"
        except ApiError as e:
            self._handle_write_error(e, "Failed to submit recipe.")
            return False
        finally:
            self.is_loading = False

        self.store.add_notification(message, "success")
        self.context.navigator.navigate(DASHBOARD_PATH)
        return True

    def delete(self, confirmed: bool = False) -> bool:
        """Delete the recipe. Nothing happens unless the caller confirmed."""
        if not confirmed or not self.is_edit_mode:
            return False

        self.is_loading = True
        try:
            self.api.admin_delete_recipe(self.recipe_id)
        except ApiError as e:
            self._handle_write_error(e, "Failed to delete recipe.")
            return False
        finally:
            self.is_loading = False

        self.store.add_notification("Recipe deleted successfully", "success")
        self.context.navigator.navigate(DASHBOARD_PATH)
        return True

    def cancel(self) -> None:
        self.context.navigator.navigate(DASHBOARD_PATH)
