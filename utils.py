"""Utility functions for the Flask application."""

from functools import wraps
from typing import Any, Optional

from flask import current_app, g, request

from constants import EXTENSION_KEY, ErrorMessages
from services.api_response import APIResponse


def get_service(name: str) -> Any:
    """Return a service registered by the app factory ("auth", "recipes", "grocery_lists")."""
    return current_app.extensions[EXTENSION_KEY][name]


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Extract the token from an ``Authorization: Bearer <token>`` header value."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def require_auth(func):
    """Resolve the bearer token to a user id, or answer 401"""
    @wraps(func)
    def wrapper(*args, **kwargs):
        token = bearer_token(request.headers.get("Authorization"))
        user = get_service("auth").verify_token(token) if token else None
        if user is None:
            return APIResponse.unauthorized(ErrorMessages.UNAUTHENTICATED)
        g.user_id = user.user_id
        return func(*args, **kwargs)
    return wrapper


def current_user_id() -> str:
    """User id resolved by ``require_auth`` for this request."""
    return g.user_id


def json_body() -> Any:
    """Request JSON, or an empty object when the body is missing or not JSON."""
    payload = request.get_json(silent=True)
    return {} if payload is None else payload
