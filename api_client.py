"""HTTP client for the recipe box REST API."""

from typing import Any, Dict, List, Optional

import requests

from app_config import Settings
from constants import DEFAULT_HTTP_TIMEOUT


class ApiError(Exception):
    """Raised when the API answers with a non-2xx status."""

    def __init__(self, action: str, status_code: int):
        super().__init__(f"Failed to {action}: {status_code}")
        self.action = action
        self.status_code = status_code


class RecipeBoxClient:
    """One method per API endpoint. Not-found results come back as None."""

    def __init__(self, base_url: str, token: str, timeout: int = DEFAULT_HTTP_TIMEOUT):
        self.base_url = base_url.rstrip('/')
        self.token = token
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings, token: str) -> "RecipeBoxClient":
        return cls(settings.api_base_url, token)

    def _get_auth_headers(self) -> Dict[str, str]:
        """Get authorization headers for API requests."""
        return {
            'Accept': 'application/json',
            'Content-Type': 'application/json',
            'Authorization': f'Bearer {self.token}'
        }

    def _make_request(self, method: str, path: str, action: str,
                      data: Optional[Dict[str, Any]] = None) -> Any:
        response = requests.request(
            method,
            f"{self.base_url}{path}",
            headers=self._get_auth_headers(),
            json=data,
            timeout=self.timeout,
        )
        if not response.ok:
            raise ApiError(action, response.status_code)
        return response.json()

    # Recipes

    def create_recipe(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._make_request('POST', '/recipes', 'create recipe', data)

    def get_recipes(self) -> List[Dict[str, Any]]:
        return self._make_request('GET', '/recipes', 'fetch recipes')

    def get_recipe(self, recipe_id: str) -> Optional[Dict[str, Any]]:
        return self._make_request('GET', f'/recipes/{recipe_id}', 'fetch recipe')

    def update_recipe(self, recipe_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        return self._make_request('PUT', f'/recipes/{recipe_id}', 'update recipe', data)

    def delete_recipe(self, recipe_id: str) -> Optional[Dict[str, Any]]:
        return self._make_request('DELETE', f'/recipes/{recipe_id}', 'delete recipe')

    # Grocery lists

    def create_grocery_list(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._make_request('POST', '/grocery-lists', 'create grocery list', data)

    def get_grocery_lists(self) -> List[Dict[str, Any]]:
        return self._make_request('GET', '/grocery-lists', 'fetch grocery lists')

    def get_grocery_list(self, list_id: str) -> Optional[Dict[str, Any]]:
        return self._make_request('GET', f'/grocery-lists/{list_id}', 'fetch grocery list')

    def update_grocery_list(self, list_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        return self._make_request(
            'PUT', f'/grocery-lists/{list_id}', 'update grocery list', data
        )

    def delete_grocery_list(self, list_id: str) -> Optional[Dict[str, Any]]:
        return self._make_request('DELETE', f'/grocery-lists/{list_id}', 'delete grocery list')

    def add_grocery_item(self, list_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        return self._make_request(
            'POST', f'/grocery-lists/{list_id}/items', 'add grocery item', data
        )

    def update_grocery_item(self, list_id: str, item_id: str,
                            data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        return self._make_request(
            'PUT', f'/grocery-lists/{list_id}/items/{item_id}', 'update grocery item', data
        )

    def delete_grocery_item(self, list_id: str, item_id: str) -> Optional[Dict[str, Any]]:
        return self._make_request(
            'DELETE', f'/grocery-lists/{list_id}/items/{item_id}', 'delete grocery item'
        )
