"""Thin httpx wrapper around the Saffron REST API.

Every method returns parsed models and raises the `errors` taxonomy:
network failures become TransportError, non-2xx responses become
ApiResponseError. Admin methods attach `Authorization: Bearer <token>`
from the token provider (normally the store's auth slice).
"""

import logging
from typing import Any, Callable, Dict, List, Optional

import httpx

from .config import settings
from .errors import ApiResponseError, TransportError
from .models import (
    AdminRecipeSummary,
    ContactMessage,
    LoginResult,
    Recipe,
    RecipeCategory,
    RecipePage,
    RecipeStats,
    RecipeSummary,
    StaticPage,
)

logger = logging.getLogger("saffron.web.api")

TokenProvider = Callable[[], Optional[str]]


def _detail(response: httpx.Response) -> Any:
    try:
        body = response.json()
    except ValueError:
        return response.text or None
    if isinstance(body, dict):
        return body.get("detail", body.get("error"))
    return body


class ApiClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        token_provider: Optional[TokenProvider] = None,
        transport: Optional[httpx.BaseTransport] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        if http_client is None:
            http_client = httpx.Client(
                base_url=base_url or settings.api_base_url,
                timeout=timeout if timeout is not None else settings.request_timeout,
                transport=transport,
            )
        self._http = http_client
        self._token_provider = token_provider

    def close(self) -> None:
        self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        auth: bool = False,
    ) -> Any:
        headers = {}
        if auth:
            token = self._token_provider() if self._token_provider else None
            if token:
                headers["Authorization"] = f"Bearer {token}"

        # Relative to base_url so the /api prefix is kept
        url = path.lstrip("/")
        try:
            response = self._http.request(method, url, params=params, json=json, headers=headers)
        except httpx.TransportError as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise TransportError(f"{method} {path} failed: {e}") from e

        if response.is_error:
            raise ApiResponseError(response.status_code, _detail(response))
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # --- Public ---

    def health(self) -> Dict[str, Any]:
        return self._request("GET", "/health")

    def list_recipes(self, params: Optional[Dict[str, Any]] = None) -> RecipePage:
        return RecipePage.model_validate(self._request("GET", "/recipes", params=params))

    def get_recipe(self, recipe_id: str) -> Recipe:
        return Recipe.model_validate(self._request("GET", f"/recipes/{recipe_id}"))

    def related_recipes(self, recipe_id: str, limit: int = 4) -> List[RecipeSummary]:
        data = self._request("GET", f"/recipes/{recipe_id}/related", params={"limit": limit})
        return [RecipeSummary.model_validate(item) for item in data]

    def list_categories(self) -> List[RecipeCategory]:
        return [RecipeCategory.model_validate(c) for c in self._request("GET", "/recipe_categories")]

    def get_static_page(self, page_key: str) -> StaticPage:
        return StaticPage.model_validate(self._request("GET", f"/static_pages/{page_key}"))

    def send_contact_message(self, message: ContactMessage) -> Dict[str, Any]:
        return self._request("POST", "/contact/messages", json=message.model_dump())

    def login(self, identifier: str, password: str) -> LoginResult:
        """Log in with either a username or an email address."""
        key = "email" if "@" in identifier else "username"
        data = self._request("POST", "/admin/login", json={key: identifier, "password": password})
        return LoginResult.model_validate(data)

    # --- Admin ---

    def admin_list_recipes(
        self, *, limit: int = 100, offset: int = 0, status: Optional[str] = None
    ) -> List[AdminRecipeSummary]:
        params: Dict[str, Any] = {"limit": limit, "offset": offset}
        if status:
            params["status"] = status
        data = self._request("GET", "/admin/recipes", params=params, auth=True)
        return [AdminRecipeSummary.model_validate(r) for r in data]

    def admin_recipe_stats(self) -> RecipeStats:
        return RecipeStats.model_validate(self._request("GET", "/admin/recipe_stats", auth=True))

    def admin_get_recipe(self, recipe_id: str) -> Recipe:
        return Recipe.model_validate(self._request("GET", f"/admin/recipes/{recipe_id}", auth=True))

    def admin_create_recipe(self, payload: Dict[str, Any]) -> Recipe:
        return Recipe.model_validate(self._request("POST", "/admin/recipes", json=payload, auth=True))

    def admin_update_recipe(self, recipe_id: str, payload: Dict[str, Any]) -> Recipe:
        data = self._request("PUT", f"/admin/recipes/{recipe_id}", json=payload, auth=True)
        return Recipe.model_validate(data)

    def admin_delete_recipe(self, recipe_id: str) -> None:
        self._request("DELETE", f"/admin/recipes/{recipe_id}", auth=True)
