import uuid

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from flask import Flask, g, request
from pydantic import ValidationError

from app_config import Settings, config
from constants import EXTENSION_KEY, REQUEST_ID_HEADER, ErrorMessages
from extensions import db, init_extensions
from logging_config import logger
from repositories import GroceryListRepository, RecipeRepository
from routes import register_blueprints
from schemas import format_validation_errors
from services import APIResponse, AuthService, GroceryListService, RecipeService


def create_app(
    config_name=None,
    settings=None,
    recipe_repository=None,
    grocery_list_repository=None,
    auth_service=None,
):
    """
    Build the API application.

    Repositories and the auth service can be injected; anything left out is
    built from ``settings``.
    """
    settings = settings or Settings.from_env()
    config_name = config_name or settings.env
    if config_name not in config:
        config_name = 'default'

    if auth_service is None:
        if not settings.clerk_secret_key:
            raise RuntimeError(ErrorMessages.CLERK_SECRET_REQUIRED)
        auth_service = AuthService.create(settings.clerk_secret_key, settings.clerk_api_url)

    app = Flask(__name__)
    app.config.from_object(config[config_name])
    app.config['SQLALCHEMY_DATABASE_URI'] = settings.database_url
    app.config['SECRET_KEY'] = settings.secret_key

    init_extensions(app, settings)

    # Initialize database
    if not app.config.get('TESTING', False):
        with app.app_context():
            db.create_all()

    if recipe_repository is None:
        recipe_repository = RecipeRepository.create(db.session)
    if grocery_list_repository is None:
        grocery_list_repository = GroceryListRepository.create(db.session)

    app.extensions[EXTENSION_KEY] = {
        "auth": auth_service,
        "recipes": RecipeService(recipe_repository),
        "grocery_lists": GroceryListService(grocery_list_repository),
    }

    register_blueprints(app)
    register_request_hooks(app)
    register_error_handlers(app)

    logger.info("Application created", env=config_name)
    return app


def register_request_hooks(app):
    @app.before_request
    def assign_request_id():
        """Tag the request so every log line can be correlated."""
        g.request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex

    @app.after_request
    def echo_request_id(response):
        request_id = g.get("request_id")
        if request_id:
            response.headers[REQUEST_ID_HEADER] = request_id
        return response


def register_error_handlers(app):
    @app.errorhandler(ValidationError)
    def handle_validation_error(error):
        errors = format_validation_errors(error)
        logger.info("Request validation failed", fields=sorted(errors))
        return APIResponse.validation_error(errors, ErrorMessages.VALIDATION_FAILED)

    @app.errorhandler(404)
    def handle_not_found(error):
        return APIResponse.not_found(message=ErrorMessages.ROUTE_NOT_FOUND)

    @app.errorhandler(405)
    def handle_method_not_allowed(error):
        return APIResponse.error(ErrorMessages.METHOD_NOT_ALLOWED, 405)

    @app.errorhandler(429)
    def handle_rate_limited(error):
        logger.warning("Rate limit exceeded", limit=str(error.description))
        return APIResponse.error(ErrorMessages.RATE_LIMITED, 429)

    @app.errorhandler(500)
    def handle_server_error(error):
        original = getattr(error, "original_exception", None) or error
        logger.error(
            "Unhandled error",
            error_type=type(original).__name__,
            exc_info=original,
        )
        return APIResponse.server_error(ErrorMessages.SERVER_ERROR)


if __name__ == '__main__':
    settings = Settings.from_env()
    app = create_app(settings=settings)
    app.run(host='0.0.0.0', port=settings.port)
