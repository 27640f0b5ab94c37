"""
Bearer token verification.

``AuthService.create`` verifies identity-provider session tokens;
``AuthService.create_null`` returns a fixed identity (or refuses every
token) so tests never touch the network.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional

import jwt
import requests

from constants import (
    CLERK_API_URL,
    CLERK_CLOCK_SKEW_SECONDS,
    CLERK_JWT_ALGORITHMS,
    DEFAULT_HTTP_TIMEOUT,
)
from logging_config import logger


@dataclass(frozen=True)
class AuthUser:
    user_id: str


class TokenVerifier(ABC):
    @abstractmethod
    def verify_token(self, token: str) -> Optional[AuthUser]:
        """Resolve ``token`` to a user, or None when it is not acceptable."""


class AuthService:
    """Resolves opaque bearer tokens to an ``AuthUser``."""

    def __init__(self, verifier: TokenVerifier):
        self._verifier = verifier

    @classmethod
    def create(cls, secret_key: str, api_url: str = CLERK_API_URL) -> "AuthService":
        return cls(ClerkTokenVerifier(secret_key, api_url=api_url))

    @classmethod
    def create_null(
        cls, user_id: str = "test-user", authenticated: bool = True
    ) -> "AuthService":
        return cls(StubTokenVerifier(user_id if authenticated else None))

    def verify_token(self, token: str) -> Optional[AuthUser]:
        return self._verifier.verify_token(token)


class ClerkTokenVerifier(TokenVerifier):
    """Verifies RS256 session tokens against the identity provider's JWKS."""

    def __init__(
        self,
        secret_key: str,
        api_url: str = CLERK_API_URL,
        timeout: int = DEFAULT_HTTP_TIMEOUT,
    ):
        self.secret_key = secret_key
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout

    def _fetch_jwks(self) -> Dict[str, Any]:
        response = requests.get(
            f"{self.api_url}/jwks",
            headers={
                "Accept": "application/json",
                "Authorization": f"Bearer {self.secret_key}",
            },
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()

    def _signing_key(self, token: str):
        kid = jwt.get_unverified_header(token).get("kid")
        for jwk in self._fetch_jwks().get("keys", []):
            if jwk.get("kid") == kid:
                return jwt.PyJWK(jwk).key
        raise jwt.InvalidTokenError(f"No signing key matches kid {kid!r}")

    def verify_token(self, token: str) -> Optional[AuthUser]:
        # Every failure (expired, malformed, unknown key, network) means
        # "unauthenticated"; only the exception type is logged.
        try:
            claims = jwt.decode(
                token,
                key=self._signing_key(token),
                algorithms=CLERK_JWT_ALGORITHMS,
                leeway=CLERK_CLOCK_SKEW_SECONDS,
                options={"require": ["sub", "exp"]},
            )
            return AuthUser(user_id=claims["sub"])
        except Exception as e:
            logger.info(f"Token verification failed: {type(e).__name__}")
            return None


class StubTokenVerifier(TokenVerifier):
    def __init__(self, user_id: Optional[str]):
        self.user_id = user_id

    def verify_token(self, token: str) -> Optional[AuthUser]:
        if self.user_id is None:
            return None
        return AuthUser(user_id=self.user_id)
