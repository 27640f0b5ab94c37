"""Application-wide constants to avoid magic strings and promote DRY principle."""

from enum import Enum


class RecipeType(str, Enum):
    """Valid recipe types."""

    FOOD = "food"
    DRINK = "drink"


class ErrorMessages:
    """Standard error messages for consistency."""

    # Authentication errors
    UNAUTHENTICATED = "Unauthorized"
    CLERK_SECRET_REQUIRED = "CLERK_SECRET_KEY environment variable is required"

    # Request errors
    VALIDATION_FAILED = "Validation failed"
    ROUTE_NOT_FOUND = "Route not found"
    METHOD_NOT_ALLOWED = "Method not allowed"
    RATE_LIMITED = "Too many requests"
    SERVER_ERROR = "An internal server error occurred"


# Key under which the app factory registers services in app.extensions
EXTENSION_KEY = "recipe_box"

# Identity provider
CLERK_API_URL = "https://api.clerk.com/v1"
CLERK_JWT_ALGORITHMS = ["RS256"]
CLERK_CLOCK_SKEW_SECONDS = 5

# HTTP
# Per client address
DEFAULT_RATE_LIMITS = ["120 per minute", "3000 per hour"]
REQUEST_ID_HEADER = "X-Request-ID"
DEFAULT_HTTP_TIMEOUT = 10
