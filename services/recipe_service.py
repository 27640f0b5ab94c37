"""
Recipe service layer.
"""

from typing import List, Optional

from entities import Recipe, RecipeInput, RecipePatch
from logging_config import logger
from repositories import RecipeRepository


class RecipeService:
    """Service class for recipe operations. Delegates to the repository."""

    def __init__(self, repository: RecipeRepository):
        self.repository = repository

    def create(self, data: RecipeInput) -> Recipe:
        recipe = self.repository.save(data)
        logger.info(f"Recipe {recipe.id} created", recipe_type=recipe.type.value)
        return recipe

    def find_all(self, user_id: str) -> List[Recipe]:
        recipes = self.repository.find_all(user_id)
        logger.debug("Recipes listed", count=len(recipes))
        return recipes

    def find_one(self, recipe_id: str, user_id: str) -> Optional[Recipe]:
        recipe = self.repository.find_by_id(recipe_id, user_id)
        logger.debug(f"Recipe {recipe_id} read", found=recipe is not None)
        return recipe

    def update(
        self, recipe_id: str, user_id: str, patch: RecipePatch
    ) -> Optional[Recipe]:
        recipe = self.repository.update(recipe_id, user_id, patch)
        logger.info(
            f"Recipe {recipe_id} update",
            found=recipe is not None,
            fields=sorted(patch.changes()),
        )
        return recipe

    def delete(self, recipe_id: str, user_id: str) -> Optional[Recipe]:
        recipe = self.repository.delete_by_id(recipe_id, user_id)
        logger.info(f"Recipe {recipe_id} delete", found=recipe is not None)
        return recipe
