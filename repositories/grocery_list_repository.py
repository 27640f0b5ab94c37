"""
Grocery list persistence, including the items each list owns.

Items are only reachable through their list: every item operation first
resolves the list for the calling user, then the item inside that list.
"""

import copy
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from entities import (
    GroceryItem,
    GroceryItemInput,
    GroceryItemPatch,
    GroceryList,
    GroceryListInput,
    GroceryListPatch,
    GroceryListSummary,
)
from models import GroceryItemRecord, GroceryListRecord
from repositories.base import advance_timestamp, new_id, transaction, utcnow
from repositories.ownership import with_owned, with_owned_item


class GroceryListStore(ABC):
    """Storage contract every grocery list backend implements."""

    @abstractmethod
    def find_all(self, user_id: str) -> List[GroceryListSummary]:
        ...

    @abstractmethod
    def find_by_id(self, list_id: str, user_id: str) -> Optional[GroceryList]:
        ...

    @abstractmethod
    def save(self, data: GroceryListInput) -> GroceryList:
        ...

    @abstractmethod
    def update(
        self, list_id: str, user_id: str, patch: GroceryListPatch
    ) -> Optional[GroceryList]:
        ...

    @abstractmethod
    def delete_by_id(self, list_id: str, user_id: str) -> Optional[GroceryList]:
        ...

    @abstractmethod
    def add_item(
        self, list_id: str, user_id: str, data: GroceryItemInput
    ) -> Optional[GroceryItem]:
        ...

    @abstractmethod
    def update_item(
        self, list_id: str, item_id: str, user_id: str, patch: GroceryItemPatch
    ) -> Optional[GroceryItem]:
        ...

    @abstractmethod
    def delete_item(
        self, list_id: str, item_id: str, user_id: str
    ) -> Optional[GroceryItem]:
        ...


class GroceryListRepository:
    """Owner-scoped access to grocery lists and their items."""

    def __init__(self, store: GroceryListStore):
        self._store = store

    @classmethod
    def create(cls, session) -> "GroceryListRepository":
        """Repository backed by the relational database."""
        return cls(SqlAlchemyGroceryListStore(session))

    @classmethod
    def create_null(
        cls, lists: Optional[Sequence[GroceryList]] = None
    ) -> "GroceryListRepository":
        """Repository backed by process memory, optionally preseeded."""
        return cls(InMemoryGroceryListStore(lists or []))

    def find_all(self, user_id: str) -> List[GroceryListSummary]:
        return self._store.find_all(user_id)

    def find_by_id(self, list_id: str, user_id: str) -> Optional[GroceryList]:
        return self._store.find_by_id(list_id, user_id)

    def save(self, data: GroceryListInput) -> GroceryList:
        return self._store.save(data)

    def update(
        self, list_id: str, user_id: str, patch: GroceryListPatch
    ) -> Optional[GroceryList]:
        return self._store.update(list_id, user_id, patch)

    def delete_by_id(self, list_id: str, user_id: str) -> Optional[GroceryList]:
        return self._store.delete_by_id(list_id, user_id)

    def add_item(
        self, list_id: str, user_id: str, data: GroceryItemInput
    ) -> Optional[GroceryItem]:
        return self._store.add_item(list_id, user_id, data)

    def update_item(
        self, list_id: str, item_id: str, user_id: str, patch: GroceryItemPatch
    ) -> Optional[GroceryItem]:
        return self._store.update_item(list_id, item_id, user_id, patch)

    def delete_item(
        self, list_id: str, item_id: str, user_id: str
    ) -> Optional[GroceryItem]:
        return self._store.delete_item(list_id, item_id, user_id)


class SqlAlchemyGroceryListStore(GroceryListStore):
    def __init__(self, session):
        self.session = session

    def _find_row(self, list_id: str, user_id: str) -> Optional[GroceryListRecord]:
        return (
            self.session.query(GroceryListRecord)
            .filter_by(id=list_id, user_id=user_id)
            .first()
        )

    def _find_item_row(
        self, grocery_list: GroceryListRecord, item_id: str
    ) -> Optional[GroceryItemRecord]:
        return (
            self.session.query(GroceryItemRecord)
            .filter_by(id=item_id, list_id=grocery_list.id)
            .first()
        )

    def find_all(self, user_id: str) -> List[GroceryListSummary]:
        rows = (
            self.session.query(GroceryListRecord)
            .filter_by(user_id=user_id)
            .order_by(GroceryListRecord.created_at)
            .all()
        )
        return [row.to_summary() for row in rows]

    def find_by_id(self, list_id: str, user_id: str) -> Optional[GroceryList]:
        row = self._find_row(list_id, user_id)
        return row.to_entity() if row else None

    def save(self, data: GroceryListInput) -> GroceryList:
        now = utcnow()
        row = GroceryListRecord(
            id=new_id(),
            user_id=data.user_id,
            name=data.name,
            created_at=now,
            updated_at=now,
        )
        with transaction(self.session, "grocery list creation"):
            self.session.add(row)
        return row.to_entity()

    def update(
        self, list_id: str, user_id: str, patch: GroceryListPatch
    ) -> Optional[GroceryList]:
        def apply(row: GroceryListRecord) -> GroceryList:
            with transaction(self.session, "grocery list update"):
                for field_name, value in patch.changes().items():
                    setattr(row, field_name, value)
                row.updated_at = advance_timestamp(row.updated_at)
            return row.to_entity()

        return with_owned(self._find_row, list_id, user_id, apply)

    def delete_by_id(self, list_id: str, user_id: str) -> Optional[GroceryList]:
        def remove(row: GroceryListRecord) -> GroceryList:
            snapshot = row.to_entity()
            with transaction(self.session, "grocery list deletion"):
                self.session.delete(row)
            return snapshot

        return with_owned(self._find_row, list_id, user_id, remove)

    def add_item(
        self, list_id: str, user_id: str, data: GroceryItemInput
    ) -> Optional[GroceryItem]:
        def add(row: GroceryListRecord) -> GroceryItem:
            now = utcnow()
            item = GroceryItemRecord(
                id=new_id(),
                list_id=row.id,
                name=data.name,
                quantity=data.quantity,
                checked=False,
                created_at=now,
                updated_at=now,
            )
            with transaction(self.session, "grocery item creation"):
                row.items.append(item)
            return item.to_entity()

        return with_owned(self._find_row, list_id, user_id, add)

    def update_item(
        self, list_id: str, item_id: str, user_id: str, patch: GroceryItemPatch
    ) -> Optional[GroceryItem]:
        def apply(row: GroceryListRecord, item: GroceryItemRecord) -> GroceryItem:
            with transaction(self.session, "grocery item update"):
                for field_name, value in patch.changes().items():
                    setattr(item, field_name, value)
                item.updated_at = advance_timestamp(item.updated_at)
            return item.to_entity()

        return with_owned_item(
            self._find_row, self._find_item_row, list_id, item_id, user_id, apply
        )

    def delete_item(
        self, list_id: str, item_id: str, user_id: str
    ) -> Optional[GroceryItem]:
        def remove(row: GroceryListRecord, item: GroceryItemRecord) -> GroceryItem:
            snapshot = item.to_entity()
            with transaction(self.session, "grocery item deletion"):
                row.items.remove(item)
            return snapshot

        return with_owned_item(
            self._find_row, self._find_item_row, list_id, item_id, user_id, remove
        )


class InMemoryGroceryListStore(GroceryListStore):
    """Ordered, unsynchronized grocery list store for tests. Returns copies only."""

    def __init__(self, lists: Sequence[GroceryList] = ()):
        self.lists: List[GroceryList] = [copy.deepcopy(grocery_list) for grocery_list in lists]

    def _find(self, list_id: str, user_id: str) -> Optional[GroceryList]:
        return next(
            (grocery_list for grocery_list in self.lists
             if grocery_list.id == list_id and grocery_list.user_id == user_id),
            None,
        )

    @staticmethod
    def _find_item(grocery_list: GroceryList, item_id: str) -> Optional[GroceryItem]:
        return next((i for i in grocery_list.items if i.id == item_id), None)

    def find_all(self, user_id: str) -> List[GroceryListSummary]:
        return [
            grocery_list.summary()
            for grocery_list in self.lists
            if grocery_list.user_id == user_id
        ]

    def find_by_id(self, list_id: str, user_id: str) -> Optional[GroceryList]:
        grocery_list = self._find(list_id, user_id)
        return copy.deepcopy(grocery_list) if grocery_list else None

    def save(self, data: GroceryListInput) -> GroceryList:
        now = utcnow()
        grocery_list = GroceryList(
            id=new_id(),
            user_id=data.user_id,
            name=data.name,
            created_at=now,
            updated_at=now,
            items=[],
        )
        self.lists.append(grocery_list)
        return copy.deepcopy(grocery_list)

    def update(
        self, list_id: str, user_id: str, patch: GroceryListPatch
    ) -> Optional[GroceryList]:
        def apply(grocery_list: GroceryList) -> GroceryList:
            for field_name, value in patch.changes().items():
                setattr(grocery_list, field_name, value)
            grocery_list.updated_at = advance_timestamp(grocery_list.updated_at)
            return copy.deepcopy(grocery_list)

        return with_owned(self._find, list_id, user_id, apply)

    def delete_by_id(self, list_id: str, user_id: str) -> Optional[GroceryList]:
        def remove(grocery_list: GroceryList) -> GroceryList:
            self.lists = [kept for kept in self.lists if kept is not grocery_list]
            return grocery_list

        return with_owned(self._find, list_id, user_id, remove)

    def add_item(
        self, list_id: str, user_id: str, data: GroceryItemInput
    ) -> Optional[GroceryItem]:
        def add(grocery_list: GroceryList) -> GroceryItem:
            now = utcnow()
            item = GroceryItem(
                id=new_id(),
                list_id=grocery_list.id,
                name=data.name,
                quantity=data.quantity,
                checked=False,
                created_at=now,
                updated_at=now,
            )
            grocery_list.items.append(item)
            return copy.deepcopy(item)

        return with_owned(self._find, list_id, user_id, add)

    def update_item(
        self, list_id: str, item_id: str, user_id: str, patch: GroceryItemPatch
    ) -> Optional[GroceryItem]:
        def apply(grocery_list: GroceryList, item: GroceryItem) -> GroceryItem:
            for field_name, value in patch.changes().items():
                setattr(item, field_name, value)
            item.updated_at = advance_timestamp(item.updated_at)
            return copy.deepcopy(item)

        return with_owned_item(
            self._find, self._find_item, list_id, item_id, user_id, apply
        )

    def delete_item(
        self, list_id: str, item_id: str, user_id: str
    ) -> Optional[GroceryItem]:
        def remove(grocery_list: GroceryList, item: GroceryItem) -> GroceryItem:
            grocery_list.items = [i for i in grocery_list.items if i is not item]
            return item

        return with_owned_item(
            self._find, self._find_item, list_id, item_id, user_id, remove
        )
