"""
Repository layer for the recipe box API.

Each repository exposes an owner-scoped, storage-agnostic contract with two
interchangeable backends: a SQLAlchemy store for the running service and an
in-memory store used as a deterministic test double.
"""

from .recipe_repository import RecipeRepository
from .grocery_list_repository import GroceryListRepository

__all__ = [
    'RecipeRepository',
    'GroceryListRepository',
]
