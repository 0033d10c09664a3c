"""Shared fixtures."""
import pytest
from datetime import datetime, timedelta, timezone

import jwt
from httpx import AsyncClient, ASGITransport

from tokenauth.config import Config
from tokenauth.auth.jwt_handler import TokenIssuer, TokenValidator
from tokenauth.main import create_app

ACCESS_SECRET = "test-access-secret-0123456789abcdef"
REFRESH_SECRET = "test-refresh-secret-0123456789abcdef"
OTHER_SECRET = "someone-elses-secret-0123456789abcdef"


def _make_token(secret: str, expires_in: timedelta = timedelta(minutes=5), **claims) -> str:
    """Sign arbitrary claims, for tokens the issuer would never produce."""
    now = datetime.now(timezone.utc)
    payload = {"iat": now, "exp": now + expires_in}
    payload.update(claims)
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture
def make_token():
    """Factory for hand-built tokens."""
    return _make_token


@pytest.fixture
def test_config():
    """Config with distinct test signing keys."""
    return Config(
        access_token_secret=ACCESS_SECRET,
        refresh_token_secret=REFRESH_SECRET,
        access_token_expiry_minutes=5,
        refresh_token_expiry_minutes=15,
    )


@pytest.fixture
def issuer(test_config):
    return TokenIssuer(test_config)


@pytest.fixture
def validator(test_config):
    return TokenValidator(test_config)


@pytest.fixture
def app(test_config):
    return create_app(test_config)


@pytest.fixture
def client(app):
    """HTTP client bound to the app; use with ``async with``."""
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
