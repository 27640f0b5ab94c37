"""
Recipe routes blueprint.

Handles recipe CRUD for the authenticated user.
"""

from http import HTTPStatus

from flask import Blueprint

from schemas import CreateRecipe, UpdateRecipe
from services.api_response import APIResponse
from utils import current_user_id, get_service, json_body, require_auth

recipes_bp = Blueprint("recipes", __name__, url_prefix="/recipes")


@recipes_bp.route("", methods=["POST"])
@require_auth
def create_recipe():
    """
    Create a recipe owned by the caller.

    Returns:
        201 with the stored recipe
    """
    data = CreateRecipe.model_validate(json_body())
    recipe = get_service("recipes").create(data.to_input(current_user_id()))
    return APIResponse.entity(recipe, HTTPStatus.CREATED)


@recipes_bp.route("", methods=["GET"])
@require_auth
def list_recipes():
    """List the caller's recipes in creation order."""
    return APIResponse.entity(get_service("recipes").find_all(current_user_id()))


@recipes_bp.route("/<recipe_id>", methods=["GET"])
@require_auth
def get_recipe(recipe_id: str):
    """Get one recipe, or null when the caller does not own it."""
    return APIResponse.entity(
        get_service("recipes").find_one(recipe_id, current_user_id())
    )


@recipes_bp.route("/<recipe_id>", methods=["PUT"])
@require_auth
def update_recipe(recipe_id: str):
    """
    Apply the provided fields to a recipe.

    Args:
        recipe_id: Recipe ID

    Returns:
        The updated recipe, or null when not found
    """
    patch = UpdateRecipe.model_validate(json_body()).to_patch()
    return APIResponse.entity(
        get_service("recipes").update(recipe_id, current_user_id(), patch)
    )


@recipes_bp.route("/<recipe_id>", methods=["DELETE"])
@require_auth
def delete_recipe(recipe_id: str):
    """Delete a recipe and return what was removed, or null."""
    return APIResponse.entity(
        get_service("recipes").delete(recipe_id, current_user_id())
    )
