"""
Request body schemas.

Create schemas turn a JSON body into a repository input; update schemas turn
it into a patch that only carries the keys the client actually sent.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from constants import RecipeType
from entities import (
    GroceryItemInput,
    GroceryItemPatch,
    GroceryListInput,
    GroceryListPatch,
    Ingredient,
    RecipeInput,
    RecipePatch,
)


def _reject_null(value: Any) -> Any:
    if value is None:
        raise ValueError("may not be null")
    return value


def format_validation_errors(error: ValidationError) -> Dict[str, str]:
    """Flatten pydantic errors into ``{"field.path": "message"}``."""
    formatted = {}
    for entry in error.errors():
        location = ".".join(str(part) for part in entry["loc"]) or "body"
        formatted[location] = entry["msg"]
    return formatted


class RequestSchema(BaseModel):
    # Ids, owners and timestamps are never taken from the client
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)


class IngredientSchema(RequestSchema):
    name: str = Field(..., min_length=1, json_schema_extra={"example": "flour"})
    amount: float = Field(..., json_schema_extra={"example": 2})
    unit: str = Field(..., json_schema_extra={"example": "cups"})

    def to_entity(self) -> Ingredient:
        return Ingredient(name=self.name, amount=self.amount, unit=self.unit)


class CreateRecipe(RequestSchema):
    name: str = Field(..., min_length=1, json_schema_extra={"example": "Pancakes"})
    type: RecipeType = Field(..., json_schema_extra={"example": "food"})
    ingredients: List[IngredientSchema] = Field(default_factory=list)
    instructions: List[str] = Field(
        default_factory=list, json_schema_extra={"example": ["Mix", "Cook"]}
    )

    def to_input(self, user_id: str) -> RecipeInput:
        return RecipeInput(
            user_id=user_id,
            name=self.name,
            type=self.type,
            ingredients=[ingredient.to_entity() for ingredient in self.ingredients],
            instructions=list(self.instructions),
        )


class UpdateRecipe(RequestSchema):
    name: Optional[str] = Field(None, min_length=1)
    type: Optional[RecipeType] = None
    ingredients: Optional[List[IngredientSchema]] = None
    instructions: Optional[List[str]] = None

    @field_validator("name", "type", "ingredients", "instructions")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        return _reject_null(value)

    def to_patch(self) -> RecipePatch:
        changes = {name: getattr(self, name) for name in self.model_fields_set}
        if "ingredients" in changes:
            changes["ingredients"] = [i.to_entity() for i in changes["ingredients"]]
        return RecipePatch(**changes)


class CreateGroceryList(RequestSchema):
    name: str = Field(..., min_length=1, json_schema_extra={"example": "Weekly Shopping"})

    def to_input(self, user_id: str) -> GroceryListInput:
        return GroceryListInput(user_id=user_id, name=self.name)


class UpdateGroceryList(RequestSchema):
    name: Optional[str] = Field(None, min_length=1)

    @field_validator("name")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        return _reject_null(value)

    def to_patch(self) -> GroceryListPatch:
        return GroceryListPatch(**{name: getattr(self, name) for name in self.model_fields_set})


class CreateGroceryItem(RequestSchema):
    name: str = Field(..., min_length=1, json_schema_extra={"example": "Milk"})
    quantity: Optional[str] = Field(None, json_schema_extra={"example": "1 gallon"})

    def to_input(self) -> GroceryItemInput:
        return GroceryItemInput(name=self.name, quantity=self.quantity)


class UpdateGroceryItem(RequestSchema):
    name: Optional[str] = Field(None, min_length=1)
    # null clears the quantity; leaving the key out keeps it
    quantity: Optional[str] = None
    checked: Optional[bool] = None

    @field_validator("name", "checked")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        return _reject_null(value)

    def to_patch(self) -> GroceryItemPatch:
        return GroceryItemPatch(**{name: getattr(self, name) for name in self.model_fields_set})
