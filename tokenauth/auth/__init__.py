"""Authentication module."""
from .credentials import User, new_salt, calculate_pass_hash, verify_pass_hash
from .errors import (
    TokenError,
    InvalidSignatureError,
    TokenExpiredError,
    MalformedTokenError,
    TokenSigningError,
    MissingFieldError,
    APIError,
    AuthorizationError,
)
from .jwt_handler import TokenClaims, TokenPair, TokenIssuer, TokenValidator
from .middleware import AuthMiddleware, require_access_token

__all__ = [
    "User",
    "new_salt",
    "calculate_pass_hash",
    "verify_pass_hash",
    "TokenError",
    "InvalidSignatureError",
    "TokenExpiredError",
    "MalformedTokenError",
    "TokenSigningError",
    "MissingFieldError",
    "APIError",
    "AuthorizationError",
    "TokenClaims",
    "TokenPair",
    "TokenIssuer",
    "TokenValidator",
    "AuthMiddleware",
    "require_access_token",
]
