"""
Routes package for the recipe box API.

This package contains all route blueprints organized by functionality:
- main: Health check
- recipes: Recipe CRUD operations
- grocery: Grocery list and item management
"""

from flask import Flask
from .main import main_bp
from .recipes import recipes_bp
from .grocery import grocery_bp


def register_blueprints(app: Flask) -> None:
    """
    Register all blueprints with the Flask application.

    Args:
        app: Flask application instance
    """
    app.register_blueprint(main_bp)
    app.register_blueprint(recipes_bp)
    app.register_blueprint(grocery_bp)
