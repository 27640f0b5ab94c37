"""
Grocery list service layer for grocery lists and their items.
"""

from typing import List, Optional

from entities import (
    GroceryItem,
    GroceryItemInput,
    GroceryItemPatch,
    GroceryList,
    GroceryListInput,
    GroceryListPatch,
    GroceryListSummary,
)
from logging_config import logger
from repositories import GroceryListRepository


class GroceryListService:
    """Service class for grocery list operations. Delegates to the repository."""

    def __init__(self, repository: GroceryListRepository):
        self.repository = repository

    def create(self, data: GroceryListInput) -> GroceryList:
        grocery_list = self.repository.save(data)
        logger.info(f"Grocery list {grocery_list.id} created")
        return grocery_list

    def find_all(self, user_id: str) -> List[GroceryListSummary]:
        summaries = self.repository.find_all(user_id)
        logger.debug("Grocery lists listed", count=len(summaries))
        return summaries

    def find_one(self, list_id: str, user_id: str) -> Optional[GroceryList]:
        grocery_list = self.repository.find_by_id(list_id, user_id)
        logger.debug(f"Grocery list {list_id} read", found=grocery_list is not None)
        return grocery_list

    def update(
        self, list_id: str, user_id: str, patch: GroceryListPatch
    ) -> Optional[GroceryList]:
        grocery_list = self.repository.update(list_id, user_id, patch)
        logger.info(f"Grocery list {list_id} update", found=grocery_list is not None)
        return grocery_list

    def delete(self, list_id: str, user_id: str) -> Optional[GroceryList]:
        grocery_list = self.repository.delete_by_id(list_id, user_id)
        logger.info(f"Grocery list {list_id} delete", found=grocery_list is not None)
        return grocery_list

    def add_item(
        self, list_id: str, user_id: str, data: GroceryItemInput
    ) -> Optional[GroceryItem]:
        item = self.repository.add_item(list_id, user_id, data)
        logger.info(f"Grocery list {list_id} add item", found=item is not None)
        return item

    def update_item(
        self, list_id: str, item_id: str, user_id: str, patch: GroceryItemPatch
    ) -> Optional[GroceryItem]:
        item = self.repository.update_item(list_id, item_id, user_id, patch)
        logger.info(
            f"Grocery item {item_id} update",
            list_id=list_id,
            found=item is not None,
            fields=sorted(patch.changes()),
        )
        return item

    def delete_item(
        self, list_id: str, item_id: str, user_id: str
    ) -> Optional[GroceryItem]:
        item = self.repository.delete_item(list_id, item_id, user_id)
        logger.info(
            f"Grocery item {item_id} delete", list_id=list_id, found=item is not None
        )
        return item
