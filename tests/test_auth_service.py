"""
Unit tests for bearer token verification.

The identity provider is never contacted: its JWKS endpoint is replaced by
a fake ``requests.get`` serving a locally generated RSA key.
"""

import json
from datetime import datetime, timedelta, timezone

import jwt
import pytest
import requests
from cryptography.hazmat.primitives.asymmetric import rsa
from jwt.algorithms import RSAAlgorithm

from services.auth_service import AuthService, AuthUser, ClerkTokenVerifier

KID = 'test-key'
SECRET = 'sk_test_123'
API_URL = 'https://clerk.example.test/v1'


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def json(self):
        return self.payload


@pytest.fixture(scope='module')
def private_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture
def jwks(private_key):
    jwk = json.loads(RSAAlgorithm.to_jwk(private_key.public_key()))
    jwk.update({'kid': KID, 'use': 'sig', 'alg': 'RS256'})
    return {'keys': [jwk]}


@pytest.fixture
def jwks_requests(monkeypatch, jwks):
    """Serve ``jwks`` from the fake endpoint and record every call."""
    calls = []

    def fake_get(url, headers=None, timeout=None):
        calls.append({'url': url, 'headers': headers, 'timeout': timeout})
        return FakeResponse(jwks)

    monkeypatch.setattr(requests, 'get', fake_get)
    return calls


def make_token(private_key, sub='user_123', expires_in=300, kid=KID, **claims):
    payload = {'sub': sub, 'exp': datetime.now(timezone.utc) + timedelta(seconds=expires_in)}
    payload.update(claims)
    if sub is None:
        del payload['sub']
    return jwt.encode(payload, private_key, algorithm='RS256', headers={'kid': kid})


@pytest.fixture
def auth_service():
    return AuthService.create(SECRET, api_url=API_URL)


@pytest.mark.unit
class TestClerkTokenVerifier:
    """Tests for identity-provider session tokens."""

    def test_valid_token(self, auth_service, private_key, jwks_requests):
        user = auth_service.verify_token(make_token(private_key))

        assert user == AuthUser(user_id='user_123')

    def test_jwks_fetched_with_secret(self, auth_service, private_key, jwks_requests):
        auth_service.verify_token(make_token(private_key))

        assert jwks_requests[0]['url'] == f"{API_URL}/jwks"
        assert jwks_requests[0]['headers']['Authorization'] == f"Bearer {SECRET}"
        assert jwks_requests[0]['timeout'] == 10

    def test_expired_token(self, auth_service, private_key, jwks_requests):
        assert auth_service.verify_token(make_token(private_key, expires_in=-60)) is None

    def test_malformed_token(self, auth_service, jwks_requests):
        assert auth_service.verify_token('not-a-jwt') is None

    def test_unknown_signing_key(self, auth_service, private_key, jwks_requests):
        assert auth_service.verify_token(make_token(private_key, kid='rotated')) is None

    def test_token_signed_by_another_key(self, auth_service, jwks_requests):
        stranger = rsa.generate_private_key(public_exponent=65537, key_size=2048)

        assert auth_service.verify_token(make_token(stranger)) is None

    def test_token_without_subject(self, auth_service, private_key, jwks_requests):
        assert auth_service.verify_token(make_token(private_key, sub=None)) is None

    def test_network_error(self, monkeypatch, auth_service, private_key):
        def unreachable(*args, **kwargs):
            raise requests.ConnectionError('connection refused')

        monkeypatch.setattr(requests, 'get', unreachable)

        assert auth_service.verify_token(make_token(private_key)) is None

    def test_jwks_endpoint_error(self, monkeypatch, auth_service, private_key):
        monkeypatch.setattr(requests, 'get', lambda *a, **kw: FakeResponse({}, 503))

        assert auth_service.verify_token(make_token(private_key)) is None

    def test_api_url_trailing_slash(self):
        verifier = ClerkTokenVerifier(SECRET, api_url=f"{API_URL}/")

        assert verifier.api_url == API_URL


@pytest.mark.unit
class TestNullAuthService:
    """Tests for the stub used by the test suite."""

    def test_returns_configured_user(self):
        service = AuthService.create_null(user_id='user-9')

        assert service.verify_token('anything') == AuthUser(user_id='user-9')

    def test_default_user(self):
        assert AuthService.create_null().verify_token('x').user_id == 'test-user'

    def test_unauthenticated(self):
        service = AuthService.create_null(authenticated=False)

        assert service.verify_token('anything') is None
