"""
Grocery list routes blueprint.

Handles grocery list CRUD and item management for the authenticated user.
"""

from http import HTTPStatus

from flask import Blueprint

from schemas import (
    CreateGroceryItem,
    CreateGroceryList,
    UpdateGroceryItem,
    UpdateGroceryList,
)
from services.api_response import APIResponse
from utils import current_user_id, get_service, json_body, require_auth

grocery_bp = Blueprint("grocery", __name__, url_prefix="/grocery-lists")


@grocery_bp.route("", methods=["POST"])
@require_auth
def create_grocery_list():
    """
    Create an empty grocery list owned by the caller.

    Returns:
        201 with the stored list
    """
    data = CreateGroceryList.model_validate(json_body())
    grocery_list = get_service("grocery_lists").create(data.to_input(current_user_id()))
    return APIResponse.entity(grocery_list, HTTPStatus.CREATED)


@grocery_bp.route("", methods=["GET"])
@require_auth
def list_grocery_lists():
    """List the caller's grocery lists, without their items."""
    return APIResponse.entity(get_service("grocery_lists").find_all(current_user_id()))


@grocery_bp.route("/<list_id>", methods=["GET"])
@require_auth
def get_grocery_list(list_id: str):
    """Get one grocery list with its items, or null."""
    return APIResponse.entity(
        get_service("grocery_lists").find_one(list_id, current_user_id())
    )


@grocery_bp.route("/<list_id>", methods=["PUT"])
@require_auth
def update_grocery_list(list_id: str):
    """Rename a grocery list."""
    patch = UpdateGroceryList.model_validate(json_body()).to_patch()
    return APIResponse.entity(
        get_service("grocery_lists").update(list_id, current_user_id(), patch)
    )


@grocery_bp.route("/<list_id>", methods=["DELETE"])
@require_auth
def delete_grocery_list(list_id: str):
    """Delete a grocery list together with its items."""
    return APIResponse.entity(
        get_service("grocery_lists").delete(list_id, current_user_id())
    )


@grocery_bp.route("/<list_id>/items", methods=["POST"])
@require_auth
def add_grocery_item(list_id: str):
    """
    Add an item to one of the caller's lists.

    Args:
        list_id: Grocery list ID

    Returns:
        201 with the new item, or 200 with null when the list is not found
    """
    data = CreateGroceryItem.model_validate(json_body())
    item = get_service("grocery_lists").add_item(list_id, current_user_id(), data.to_input())
    if item is None:
        return APIResponse.entity(None)
    return APIResponse.entity(item, HTTPStatus.CREATED)


@grocery_bp.route("/<list_id>/items/<item_id>", methods=["PUT"])
@require_auth
def update_grocery_item(list_id: str, item_id: str):
    """
    Apply the provided fields to an item.

    Sending ``"quantity": null`` clears the quantity; leaving the key out
    keeps the current one.
    """
    patch = UpdateGroceryItem.model_validate(json_body()).to_patch()
    return APIResponse.entity(
        get_service("grocery_lists").update_item(list_id, item_id, current_user_id(), patch)
    )


@grocery_bp.route("/<list_id>/items/<item_id>", methods=["DELETE"])
@require_auth
def delete_grocery_item(list_id: str, item_id: str):
    """Remove an item from a list and return it, or null."""
    return APIResponse.entity(
        get_service("grocery_lists").delete_item(list_id, item_id, current_user_id())
    )
