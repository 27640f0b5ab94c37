"""
Recipe persistence.

``RecipeRepository`` hides which store is active. ``RecipeRepository.create``
binds it to a SQLAlchemy session; ``RecipeRepository.create_null`` gives an
in-memory store for tests that behaves the same way.
"""

import copy
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence

from constants import RecipeType
from entities import Recipe, RecipeInput, RecipePatch
from models import RecipeRecord
from repositories.base import advance_timestamp, new_id, transaction, utcnow
from repositories.ownership import with_owned


class RecipeStore(ABC):
    """Storage contract every recipe backend implements."""

    @abstractmethod
    def find_all(self, user_id: str) -> List[Recipe]:
        ...

    @abstractmethod
    def find_by_id(self, recipe_id: str, user_id: str) -> Optional[Recipe]:
        ...

    @abstractmethod
    def save(self, data: RecipeInput) -> Recipe:
        ...

    @abstractmethod
    def update(self, recipe_id: str, user_id: str, patch: RecipePatch) -> Optional[Recipe]:
        ...

    @abstractmethod
    def delete_by_id(self, recipe_id: str, user_id: str) -> Optional[Recipe]:
        ...


class RecipeRepository:
    """Owner-scoped access to recipes, independent of the backing store."""

    def __init__(self, store: RecipeStore):
        self._store = store

    @classmethod
    def create(cls, session) -> "RecipeRepository":
        """Repository backed by the relational database."""
        return cls(SqlAlchemyRecipeStore(session))

    @classmethod
    def create_null(cls, recipes: Optional[Sequence[Recipe]] = None) -> "RecipeRepository":
        """Repository backed by process memory, optionally preseeded."""
        return cls(InMemoryRecipeStore(recipes or []))

    def find_all(self, user_id: str) -> List[Recipe]:
        return self._store.find_all(user_id)

    def find_by_id(self, recipe_id: str, user_id: str) -> Optional[Recipe]:
        return self._store.find_by_id(recipe_id, user_id)

    def save(self, data: RecipeInput) -> Recipe:
        return self._store.save(data)

    def update(self, recipe_id: str, user_id: str, patch: RecipePatch) -> Optional[Recipe]:
        return self._store.update(recipe_id, user_id, patch)

    def delete_by_id(self, recipe_id: str, user_id: str) -> Optional[Recipe]:
        return self._store.delete_by_id(recipe_id, user_id)


def _column_value(field_name: str, value: Any) -> Any:
    if field_name == "type":
        return RecipeType(value).value
    if field_name == "ingredients":
        return [ingredient.to_dict() for ingredient in value]
    if field_name == "instructions":
        return list(value)
    return value


class SqlAlchemyRecipeStore(RecipeStore):
    def __init__(self, session):
        self.session = session

    def _find_row(self, recipe_id: str, user_id: str) -> Optional[RecipeRecord]:
        return (
            self.session.query(RecipeRecord)
            .filter_by(id=recipe_id, user_id=user_id)
            .first()
        )

    def find_all(self, user_id: str) -> List[Recipe]:
        rows = (
            self.session.query(RecipeRecord)
            .filter_by(user_id=user_id)
            .order_by(RecipeRecord.created_at)
            .all()
        )
        return [row.to_entity() for row in rows]

    def find_by_id(self, recipe_id: str, user_id: str) -> Optional[Recipe]:
        row = self._find_row(recipe_id, user_id)
        return row.to_entity() if row else None

    def save(self, data: RecipeInput) -> Recipe:
        now = utcnow()
        row = RecipeRecord(
            id=new_id(),
            user_id=data.user_id,
            name=data.name,
            type=_column_value("type", data.type),
            ingredients=_column_value("ingredients", data.ingredients),
            instructions=_column_value("instructions", data.instructions),
            created_at=now,
            updated_at=now,
        )
        with transaction(self.session, "recipe creation"):
            self.session.add(row)
        return row.to_entity()

    def update(self, recipe_id: str, user_id: str, patch: RecipePatch) -> Optional[Recipe]:
        def apply(row: RecipeRecord) -> Recipe:
            with transaction(self.session, "recipe update"):
                for field_name, value in patch.changes().items():
                    setattr(row, field_name, _column_value(field_name, value))
                row.updated_at = advance_timestamp(row.updated_at)
            return row.to_entity()

        return with_owned(self._find_row, recipe_id, user_id, apply)

    def delete_by_id(self, recipe_id: str, user_id: str) -> Optional[Recipe]:
        def remove(row: RecipeRecord) -> Recipe:
            snapshot = row.to_entity()
            with transaction(self.session, "recipe deletion"):
                self.session.delete(row)
            return snapshot

        return with_owned(self._find_row, recipe_id, user_id, remove)


class InMemoryRecipeStore(RecipeStore):
    """Ordered, unsynchronized recipe store for tests. Returns copies only."""

    def __init__(self, recipes: Sequence[Recipe] = ()):
        self.recipes: List[Recipe] = [copy.deepcopy(recipe) for recipe in recipes]

    def _find(self, recipe_id: str, user_id: str) -> Optional[Recipe]:
        return next(
            (r for r in self.recipes if r.id == recipe_id and r.user_id == user_id),
            None,
        )

    def find_all(self, user_id: str) -> List[Recipe]:
        return [copy.deepcopy(r) for r in self.recipes if r.user_id == user_id]

    def find_by_id(self, recipe_id: str, user_id: str) -> Optional[Recipe]:
        recipe = self._find(recipe_id, user_id)
        return copy.deepcopy(recipe) if recipe else None

    def save(self, data: RecipeInput) -> Recipe:
        now = utcnow()
        recipe = Recipe(
            id=new_id(),
            user_id=data.user_id,
            name=data.name,
            type=RecipeType(data.type),
            ingredients=copy.deepcopy(list(data.ingredients)),
            instructions=list(data.instructions),
            created_at=now,
            updated_at=now,
        )
        self.recipes.append(recipe)
        return copy.deepcopy(recipe)

    def update(self, recipe_id: str, user_id: str, patch: RecipePatch) -> Optional[Recipe]:
        def apply(recipe: Recipe) -> Recipe:
            for field_name, value in patch.changes().items():
                if field_name == "type":
                    value = RecipeType(value)
                setattr(recipe, field_name, copy.deepcopy(value))
            recipe.updated_at = advance_timestamp(recipe.updated_at)
            return copy.deepcopy(recipe)

        return with_owned(self._find, recipe_id, user_id, apply)

    def delete_by_id(self, recipe_id: str, user_id: str) -> Optional[Recipe]:
        def remove(recipe: Recipe) -> Recipe:
            self.recipes = [r for r in self.recipes if r is not recipe]
            return recipe

        return with_owned(self._find, recipe_id, user_id, remove)
