"""
Standardized API response handling for JSON endpoints.
"""

from typing import Any, Dict, Optional
from flask import jsonify
from http import HTTPStatus


def to_json(result: Any) -> Any:
    """Convert entities (or lists of them) into JSON-ready values. None stays None."""
    if result is None:
        return None
    if isinstance(result, (list, tuple)):
        return [to_json(entry) for entry in result]
    return result.to_dict()


class APIResponse:
    """Standardized API response builder for consistent JSON responses."""

    @staticmethod
    def entity(
        result: Any,
        status_code: int = HTTPStatus.OK,
    ):
        """
        Create a response whose body is the serialized result.

        A missing entity is rendered as a JSON ``null`` body with the given
        status, never as a 404.

        Args:
            result: Entity, list of entities, or None
            status_code: HTTP status code (default: 200)

        Returns:
            Flask JSON response
        """
        return jsonify(to_json(result)), status_code

    @staticmethod
    def error(
        error: str,
        status_code: int = HTTPStatus.BAD_REQUEST,
        details: Optional[Dict[str, Any]] = None,
    ):
        """
        Create an error API response.

        Args:
            error: Error message
            status_code: HTTP status code (default: 400)
            details: Additional error details (optional)

        Returns:
            Flask JSON response with standardized error format
        """
        response = {
            "success": False,
            "error": error,
        }

        if details:
            response["details"] = details

        return jsonify(response), status_code

    @staticmethod
    def validation_error(
        errors: Dict[str, str],
        message: str = "Validation failed",
    ):
        """
        Create a validation error response.

        Args:
            errors: Dictionary of field names to error messages
            message: General validation error message

        Returns:
            Flask JSON response with validation errors
        """
        return APIResponse.error(
            error=message,
            status_code=HTTPStatus.UNPROCESSABLE_ENTITY,
            details={"validation_errors": errors},
        )

    @staticmethod
    def not_found(
        resource: str = "Resource",
        message: Optional[str] = None,
    ):
        """
        Create a not found error response (unknown routes only).

        Args:
            resource: Name of the resource that wasn't found
            message: Custom error message (optional)

        Returns:
            Flask JSON response for 404 error
        """
        error_message = message or f"{resource} not found"
        return APIResponse.error(
            error=error_message,
            status_code=HTTPStatus.NOT_FOUND,
        )

    @staticmethod
    def unauthorized(
        message: str = "Unauthorized access",
    ):
        """
        Create an unauthorized error response.

        Args:
            message: Error message

        Returns:
            Flask JSON response for 401 error
        """
        return APIResponse.error(
            error=message,
            status_code=HTTPStatus.UNAUTHORIZED,
        )

    @staticmethod
    def server_error(
        message: str = "An internal server error occurred",
    ):
        """
        Create a server error response.

        Args:
            message: Error message

        Returns:
            Flask JSON response for 500 error
        """
        return APIResponse.error(
            error=message,
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
        )
