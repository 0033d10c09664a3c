"""HTTP access token middleware."""
from typing import Optional

from fastapi import Header, Request

from tokenauth.auth.errors import (
    AuthorizationError,
    InvalidSignatureError,
    MalformedTokenError,
    TokenExpiredError,
)
from tokenauth.auth.jwt_handler import TokenClaims, TokenValidator
from tokenauth.utils.logger import get_logger

logger = get_logger(__name__)

BEARER_PREFIX = "Bearer "


class AuthMiddleware:
    """Gates protected routes behind a valid access token."""

    def __init__(self, validator: TokenValidator):
        self.validator = validator

    def authenticate(self, authorization: Optional[str]) -> TokenClaims:
        """Check the ``Authorization`` header of a request.
        
        Args:
            authorization: Raw header value, None if absent.
            
        Returns:
            Claims of the verified access token.
            
        Raises:
            AuthorizationError: With the HTTP status and message to send back.
        """
        if not authorization:
            logger.error("Authorization token was not provided")
            raise AuthorizationError(401, "Authorization Token is required")

        parts = authorization.split(BEARER_PREFIX)
        if len(parts) != 2:
            logger.error("Incorrect format of authorization token")
            raise AuthorizationError(400, "Incorrect Format of Authorization Token")
        token = parts[1].strip()

        try:
            claims = self.validator.validate_access_token(token)
        except InvalidSignatureError:
            logger.error("Invalid token signature")
            raise AuthorizationError(401, "Invalid Token")
        except TokenExpiredError:
            logger.error("Access token has expired")
            raise AuthorizationError(401, "Invalid Token")
        except MalformedTokenError as e:
            logger.error(f"Malformed access token: {e}")
            raise AuthorizationError(400, "Bad Request")

        logger.debug(f"Authenticated subject {claims.subject}")
        return claims


def require_access_token(
    request: Request,
    authorization: Optional[str] = Header(None),
) -> TokenClaims:
    """FastAPI dependency guarding a route with ``AuthMiddleware``."""
    middleware: AuthMiddleware = request.app.state.auth_middleware
    return middleware.authenticate(authorization)
