"""
Domain entities shared by every repository backend.

Both the SQLAlchemy store and the in-memory store return these plain
dataclasses, so callers never see which backend produced a value.
"""

from dataclasses import dataclass, field, fields
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from constants import RecipeType


class _Unset(Enum):
    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"


# Marks a patch field the caller did not send. Distinct from None, which
# means "clear this value".
UNSET = _Unset.UNSET


def is_set(value: Any) -> bool:
    return value is not UNSET


def _iso(value: datetime) -> str:
    return value.isoformat(timespec="microseconds")


@dataclass
class Ingredient:
    name: str
    amount: float
    unit: str

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "amount": self.amount, "unit": self.unit}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Ingredient":
        return cls(name=data["name"], amount=data["amount"], unit=data["unit"])


@dataclass
class Recipe:
    id: str
    user_id: str
    name: str
    type: RecipeType
    ingredients: List[Ingredient]
    instructions: List[str]
    created_at: datetime
    updated_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "name": self.name,
            "type": RecipeType(self.type).value,
            "ingredients": [ingredient.to_dict() for ingredient in self.ingredients],
            "instructions": list(self.instructions),
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }


@dataclass
class GroceryItem:
    id: str
    list_id: str
    name: str
    quantity: Optional[str]
    checked: bool
    created_at: datetime
    updated_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "listId": self.list_id,
            "name": self.name,
            "quantity": self.quantity,
            "checked": self.checked,
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }


@dataclass
class GroceryListSummary:
    """A grocery list without its items, as returned by list-all reads."""

    id: str
    user_id: str
    name: str
    created_at: datetime
    updated_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "name": self.name,
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }


@dataclass
class GroceryList(GroceryListSummary):
    items: List[GroceryItem] = field(default_factory=list)

    def summary(self) -> GroceryListSummary:
        return GroceryListSummary(
            id=self.id,
            user_id=self.user_id,
            name=self.name,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["items"] = [item.to_dict() for item in self.items]
        return data


# Inputs


@dataclass
class RecipeInput:
    user_id: str
    name: str
    type: RecipeType
    ingredients: List[Ingredient] = field(default_factory=list)
    instructions: List[str] = field(default_factory=list)


@dataclass
class GroceryListInput:
    user_id: str
    name: str


@dataclass
class GroceryItemInput:
    name: str
    quantity: Optional[str] = None


# Patches: every field is UNSET unless the caller provided it


@dataclass
class Patch:
    def changes(self) -> Dict[str, Any]:
        """Return only the fields that were provided."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if is_set(getattr(self, f.name))
        }


@dataclass
class RecipePatch(Patch):
    name: Union[str, _Unset] = UNSET
    type: Union[RecipeType, _Unset] = UNSET
    ingredients: Union[List[Ingredient], _Unset] = UNSET
    instructions: Union[List[str], _Unset] = UNSET


@dataclass
class GroceryListPatch(Patch):
    name: Union[str, _Unset] = UNSET


@dataclass
class GroceryItemPatch(Patch):
    name: Union[str, _Unset] = UNSET
    quantity: Union[str, None, _Unset] = UNSET
    checked: Union[bool, _Unset] = UNSET
