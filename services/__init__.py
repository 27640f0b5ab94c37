"""
Service layer for the recipe box API.

This package contains the services the route handlers call, plus the
authentication service and the standardized JSON response builder.
"""

from .recipe_service import RecipeService
from .grocery_list_service import GroceryListService
from .auth_service import AuthService, AuthUser
from .api_response import APIResponse

__all__ = [
    'RecipeService',
    'GroceryListService',
    'AuthService',
    'AuthUser',
    'APIResponse',
]
