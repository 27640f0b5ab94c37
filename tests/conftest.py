"""
Pytest configuration and fixtures for recipe box tests.

This module provides shared fixtures for testing including:
- Application and test clients wired to in-memory repositories
- A SQLAlchemy-backed application on in-memory SQLite
- Repository fixtures parametrized over both stores
- Sample data fixtures
"""

import pytest

from app import create_app
from app_config import Settings
from constants import RecipeType
from entities import GroceryItemInput, GroceryListInput, Ingredient, RecipeInput
from extensions import db
from repositories import GroceryListRepository, RecipeRepository
from services import AuthService

USER_ID = 'user-1'
OTHER_USER_ID = 'user-2'


@pytest.fixture
def settings():
    """Settings for an isolated test run."""
    return Settings(
        env='testing',
        secret_key='test-secret-key',
        database_url='sqlite:///:memory:',
    )


@pytest.fixture
def recipe_repository():
    return RecipeRepository.create_null()


@pytest.fixture
def grocery_list_repository():
    return GroceryListRepository.create_null()


@pytest.fixture
def app(settings, recipe_repository, grocery_list_repository):
    """Application whose repositories live in memory, authenticated as user-1."""
    return create_app(
        'testing',
        settings=settings,
        recipe_repository=recipe_repository,
        grocery_list_repository=grocery_list_repository,
        auth_service=AuthService.create_null(user_id=USER_ID),
    )


@pytest.fixture
def client(app):
    """Create a test client for making requests."""
    return app.test_client()


@pytest.fixture
def other_client(settings, recipe_repository, grocery_list_repository):
    """Client for a second user sharing the same repositories."""
    other_app = create_app(
        'testing',
        settings=settings,
        recipe_repository=recipe_repository,
        grocery_list_repository=grocery_list_repository,
        auth_service=AuthService.create_null(user_id=OTHER_USER_ID),
    )
    return other_app.test_client()


@pytest.fixture
def auth_headers():
    return {'Authorization': 'Bearer test-token'}


@pytest.fixture
def db_app(settings):
    """Application backed by the SQLAlchemy stores on in-memory SQLite."""
    test_app = create_app(
        'testing',
        settings=settings,
        auth_service=AuthService.create_null(user_id=USER_ID),
    )
    with test_app.app_context():
        db.create_all()
        yield test_app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def db_client(db_app):
    return db_app.test_client()


@pytest.fixture
def db_session(db_app):
    """Database session for a test."""
    return db.session


@pytest.fixture(params=['memory', 'sqlalchemy'])
def recipe_repo(request):
    """The same recipe repository contract over each store."""
    if request.param == 'memory':
        return RecipeRepository.create_null()
    return RecipeRepository.create(request.getfixturevalue('db_session'))


@pytest.fixture(params=['memory', 'sqlalchemy'])
def grocery_repo(request):
    """The same grocery list repository contract over each store."""
    if request.param == 'memory':
        return GroceryListRepository.create_null()
    return GroceryListRepository.create(request.getfixturevalue('db_session'))


@pytest.fixture
def pancakes_input():
    return RecipeInput(
        user_id=USER_ID,
        name='Pancakes',
        type=RecipeType.FOOD,
        ingredients=[Ingredient(name='flour', amount=2, unit='cups')],
        instructions=['Mix', 'Cook'],
    )


@pytest.fixture
def weekly_shopping_input():
    return GroceryListInput(user_id=USER_ID, name='Weekly Shopping')


@pytest.fixture
def milk_input():
    return GroceryItemInput(name='Milk', quantity='1 gallon')


@pytest.fixture
def pancakes_payload():
    """Recipe request body as a browser client sends it."""
    return {
        'name': 'Pancakes',
        'type': 'food',
        'ingredients': [{'name': 'flour', 'amount': 2, 'unit': 'cups'}],
        'instructions': ['Mix', 'Cook'],
    }
