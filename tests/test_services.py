"""
Unit tests for service layer.

Tests RecipeService, GroceryListService and the standardized API responses.
"""

import pytest

from constants import RecipeType
from entities import GroceryItemPatch, GroceryListPatch, RecipePatch
from repositories import GroceryListRepository, RecipeRepository
from services.api_response import APIResponse, to_json
from services.grocery_list_service import GroceryListService
from services.recipe_service import RecipeService


@pytest.fixture
def recipe_service():
    return RecipeService(RecipeRepository.create_null())


@pytest.fixture
def grocery_list_service():
    return GroceryListService(GroceryListRepository.create_null())


@pytest.mark.service
class TestRecipeService:
    """Tests for RecipeService delegation."""

    def test_create_and_find(self, recipe_service, pancakes_input):
        recipe = recipe_service.create(pancakes_input)

        assert recipe_service.find_one(recipe.id, 'user-1') == recipe
        assert recipe_service.find_all('user-1') == [recipe]

    def test_update(self, recipe_service, pancakes_input):
        recipe = recipe_service.create(pancakes_input)

        updated = recipe_service.update(recipe.id, 'user-1', RecipePatch(type=RecipeType.DRINK))

        assert updated.type == RecipeType.DRINK

    def test_update_missing(self, recipe_service):
        assert recipe_service.update('missing', 'user-1', RecipePatch(name='X')) is None

    def test_delete(self, recipe_service, pancakes_input):
        recipe = recipe_service.create(pancakes_input)

        assert recipe_service.delete(recipe.id, 'user-1') == recipe
        assert recipe_service.find_one(recipe.id, 'user-1') is None

    def test_owner_scoping(self, recipe_service, pancakes_input):
        recipe = recipe_service.create(pancakes_input)

        assert recipe_service.find_one(recipe.id, 'user-2') is None
        assert recipe_service.delete(recipe.id, 'user-2') is None


@pytest.mark.service
class TestGroceryListService:
    """Tests for GroceryListService delegation."""

    def test_list_lifecycle(self, grocery_list_service, weekly_shopping_input):
        grocery_list = grocery_list_service.create(weekly_shopping_input)

        renamed = grocery_list_service.update(
            grocery_list.id, 'user-1', GroceryListPatch(name='Monthly')
        )

        assert renamed.name == 'Monthly'
        assert [s.name for s in grocery_list_service.find_all('user-1')] == ['Monthly']
        assert grocery_list_service.delete(grocery_list.id, 'user-1').name == 'Monthly'
        assert grocery_list_service.find_one(grocery_list.id, 'user-1') is None

    def test_item_lifecycle(self, grocery_list_service, weekly_shopping_input, milk_input):
        grocery_list = grocery_list_service.create(weekly_shopping_input)

        item = grocery_list_service.add_item(grocery_list.id, 'user-1', milk_input)
        checked = grocery_list_service.update_item(
            grocery_list.id, item.id, 'user-1', GroceryItemPatch(checked=True)
        )
        removed = grocery_list_service.delete_item(grocery_list.id, item.id, 'user-1')

        assert checked.checked is True
        assert removed == checked
        assert grocery_list_service.find_one(grocery_list.id, 'user-1').items == []

    def test_add_item_missing_list(self, grocery_list_service, milk_input):
        assert grocery_list_service.add_item('missing', 'user-1', milk_input) is None


@pytest.mark.service
class TestAPIResponse:
    """Tests for standardized API responses."""

    def test_entity_response(self, app, recipe_service, pancakes_input):
        """Test serializing an entity with camelCase keys."""
        recipe = recipe_service.create(pancakes_input)
        with app.app_context():
            response, status_code = APIResponse.entity(recipe, 201)

            payload = response.get_json()

        assert status_code == 201
        assert payload['id'] == recipe.id
        assert payload['userId'] == 'user-1'
        assert payload['type'] == 'food'
        assert payload['ingredients'] == [{'name': 'flour', 'amount': 2, 'unit': 'cups'}]
        assert payload['createdAt'] == recipe.created_at.isoformat(timespec='microseconds')

    def test_missing_entity_is_null(self, app):
        """Not-found results render as a 200 with a null body."""
        with app.app_context():
            response, status_code = APIResponse.entity(None)

            assert status_code == 200
            assert response.get_json() is None

    def test_to_json_list(self, recipe_service, pancakes_input):
        recipe = recipe_service.create(pancakes_input)

        assert to_json([recipe]) == [recipe.to_dict()]
        assert to_json([]) == []

    def test_error_response(self, app):
        """Test creating an error response."""
        with app.app_context():
            response, status_code = APIResponse.error(
                error='Operation failed',
                status_code=400
            )

            payload = response.get_json()

            assert status_code == 400
            assert payload['success'] is False
            assert payload['error'] == 'Operation failed'
            assert 'details' not in payload

    def test_validation_error_response(self, app):
        """Test creating a validation error response."""
        errors = {'name': 'String should have at least 1 character'}
        with app.app_context():
            response, status_code = APIResponse.validation_error(errors)

            payload = response.get_json()

            assert status_code == 422
            assert payload['success'] is False
            assert payload['error'] == 'Validation failed'
            assert payload['details']['validation_errors'] == errors

    def test_unauthorized_response(self, app):
        with app.app_context():
            response, status_code = APIResponse.unauthorized('Unauthorized')

            assert status_code == 401
            assert response.get_json()['error'] == 'Unauthorized'

    def test_server_error_response(self, app):
        with app.app_context():
            response, status_code = APIResponse.server_error()

            assert status_code == 500
            assert response.get_json() == {
                'success': False,
                'error': 'An internal server error occurred',
            }
