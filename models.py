from datetime import timezone

from sqlalchemy.types import DateTime, TypeDecorator

from constants import RecipeType
from entities import GroceryItem, GroceryList, GroceryListSummary, Ingredient, Recipe
from extensions import db


class UTCDateTime(TypeDecorator):
    """Store datetimes as naive UTC and always load them timezone-aware."""

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


class RecipeRecord(db.Model):
    """Recipe owned by a user"""

    __tablename__ = "recipes"

    id = db.Column(db.String(36), primary_key=True)
    user_id = db.Column(db.String(255), nullable=False, index=True)
    name = db.Column(db.Text, nullable=False)
    type = db.Column(db.String(16), nullable=False)

    # JSON-encoded ordered lists
    ingredients = db.Column(db.JSON, nullable=False, default=list)
    instructions = db.Column(db.JSON, nullable=False, default=list)

    created_at = db.Column(UTCDateTime, nullable=False)
    updated_at = db.Column(UTCDateTime, nullable=False)

    def __repr__(self):
        return f"<Recipe #{self.id}: {self.name} ({self.user_id})>"

    def to_entity(self) -> Recipe:
        return Recipe(
            id=self.id,
            user_id=self.user_id,
            name=self.name,
            type=RecipeType(self.type),
            ingredients=[Ingredient.from_dict(data) for data in self.ingredients or []],
            instructions=list(self.instructions or []),
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class GroceryListRecord(db.Model):
    """Grocery list owned by a user"""

    __tablename__ = "grocery_lists"

    id = db.Column(db.String(36), primary_key=True)
    user_id = db.Column(db.String(255), nullable=False, index=True)
    name = db.Column(db.Text, nullable=False)
    created_at = db.Column(UTCDateTime, nullable=False)
    updated_at = db.Column(UTCDateTime, nullable=False)

    items = db.relationship(
        "GroceryItemRecord",
        back_populates="grocery_list",
        cascade="all, delete-orphan",
        order_by="GroceryItemRecord.created_at",
    )

    def __repr__(self):
        return f"<GroceryList #{self.id}: {self.name} ({self.user_id})>"

    def to_summary(self) -> GroceryListSummary:
        return GroceryListSummary(
            id=self.id,
            user_id=self.user_id,
            name=self.name,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    def to_entity(self) -> GroceryList:
        return GroceryList(
            id=self.id,
            user_id=self.user_id,
            name=self.name,
            created_at=self.created_at,
            updated_at=self.updated_at,
            items=[item.to_entity() for item in self.items],
        )


class GroceryItemRecord(db.Model):
    """Item on a grocery list"""

    __tablename__ = "grocery_items"

    id = db.Column(db.String(36), primary_key=True)
    list_id = db.Column(
        db.String(36),
        db.ForeignKey("grocery_lists.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = db.Column(db.Text, nullable=False)
    quantity = db.Column(db.Text, nullable=True)
    checked = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(UTCDateTime, nullable=False)
    updated_at = db.Column(UTCDateTime, nullable=False)

    grocery_list = db.relationship("GroceryListRecord", back_populates="items")

    def __repr__(self):
        return f"<GroceryItem #{self.id}: {self.name} (list {self.list_id})>"

    def to_entity(self) -> GroceryItem:
        return GroceryItem(
            id=self.id,
            list_id=self.list_id,
            name=self.name,
            quantity=self.quantity,
            checked=bool(self.checked),
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
