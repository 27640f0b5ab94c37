"""
Owner scoping policy shared by the durable and in-memory stores.

Neither backend can filter a mutation by owner on its own, so every
update/delete first resolves the target through an owner-aware lookup.
Keeping that rule here means both stores refuse exactly the same calls.
"""

from typing import Callable, Optional, TypeVar

from logging_config import logger

T = TypeVar("T")
P = TypeVar("P")
ItemT = TypeVar("ItemT")
R = TypeVar("R")


def with_owned(
    lookup: Callable[[str, str], Optional[T]],
    entity_id: str,
    user_id: str,
    action: Callable[[T], R],
) -> Optional[R]:
    """
    Run ``action`` on the entity ``lookup`` finds for ``entity_id`` and ``user_id``.

    Returns None without calling ``action`` when the lookup finds nothing,
    whether the id is unknown or belongs to someone else.
    """
    found = lookup(entity_id, user_id)
    if found is None:
        logger.debug(f"No entity {entity_id} owned by {user_id}; skipping")
        return None
    return action(found)


def with_owned_item(
    lookup_parent: Callable[[str, str], Optional[P]],
    lookup_item: Callable[[P, str], Optional[ItemT]],
    parent_id: str,
    item_id: str,
    user_id: str,
    action: Callable[[P, ItemT], R],
) -> Optional[R]:
    """
    Two-stage guard for items addressed through their parent.

    The parent must resolve for ``user_id`` and the item must resolve inside
    that parent before ``action`` runs.
    """

    def resolve_item(parent: P) -> Optional[R]:
        item = lookup_item(parent, item_id)
        if item is None:
            logger.debug(f"No item {item_id} in {parent_id}; skipping")
            return None
        return action(parent, item)

    return with_owned(lookup_parent, parent_id, user_id, resolve_item)
