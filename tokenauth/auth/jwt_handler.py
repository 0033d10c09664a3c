"""JWT token handling."""
import jwt
from datetime import datetime, timedelta, timezone
from typing import Optional
from dataclasses import dataclass

from tokenauth.config import Config
from tokenauth.auth.errors import (
    InvalidSignatureError,
    MalformedTokenError,
    TokenExpiredError,
    TokenSigningError,
)
from tokenauth.utils.logger import get_logger

logger = get_logger(__name__)

# Claims that must be present in every token this service accepts
REQUIRED_CLAIMS = ["exp", "sub"]


@dataclass
class TokenClaims:
    """Decoded token claims."""
    subject: str
    expires_at: datetime
    issued_at: Optional[datetime] = None
    username: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: dict) -> "TokenClaims":
        """Create from a decoded JWT payload."""
        iat = payload.get("iat")
        return cls(
            subject=payload["sub"],
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            issued_at=datetime.fromtimestamp(iat, tz=timezone.utc) if iat is not None else None,
            username=payload.get("Username"),
        )


@dataclass
class TokenPair:
    """Access and refresh tokens minted together."""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class TokenIssuer:
    """Signs access and refresh tokens with their respective keys."""

    def __init__(self, config: Config):
        self.config = config

    def _sign(self, payload: dict, key: str) -> str:
        try:
            return jwt.encode(payload, key, algorithm=self.config.jwt_algorithm)
        except (jwt.PyJWTError, TypeError, ValueError) as e:
            logger.error(f"Failed to sign token for subject {payload.get('sub')}: {e}")
            raise TokenSigningError(f"Could not sign token: {e}") from e

    def generate_access_token(self, username: str, subject: str) -> str:
        """Create a short-lived access token.
        
        Args:
            username: User's name, carried in the ``Username`` claim.
            subject: Stable user identifier, carried in ``sub``.
            
        Returns:
            Encoded JWT access token.
            
        Raises:
            TokenSigningError: If the token cannot be signed.
        """
        now = datetime.now(timezone.utc)
        payload = {
            "Username": username,
            "sub": subject,
            "iat": now,
            "exp": now + timedelta(minutes=self.config.access_token_expiry_minutes),
        }
        return self._sign(payload, self.config.access_token_secret)

    def generate_token(self, username: str, subject: str) -> TokenPair:
        """Create an access token and a refresh token for the same subject.
        
        The access token is built first; if it fails the refresh token is
        never attempted.
        
        Args:
            username: User's name.
            subject: Stable user identifier.
            
        Returns:
            The token pair.
            
        Raises:
            TokenSigningError: If either token cannot be signed.
        """
        access_token = self.generate_access_token(username, subject)

        # Refresh token, used only to get a new access token
        now = datetime.now(timezone.utc)
        payload = {
            "sub": subject,
            "iat": now,
            "exp": now + timedelta(minutes=self.config.refresh_token_expiry_minutes),
        }
        refresh_token = self._sign(payload, self.config.refresh_token_secret)

        logger.debug(f"Issued token pair for subject {subject}")
        return TokenPair(access_token=access_token, refresh_token=refresh_token)


class TokenValidator:
    """Verifies signature and expiry of tokens issued by ``TokenIssuer``."""

    def __init__(self, config: Config):
        self.config = config

    def _decode(self, token: str, key: str) -> TokenClaims:
        try:
            payload = jwt.decode(
                token,
                key,
                algorithms=[self.config.jwt_algorithm],
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.InvalidSignatureError as e:
            raise InvalidSignatureError("Invalid token signature") from e
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise MalformedTokenError(f"Invalid token: {e}") from e

        try:
            return TokenClaims.from_payload(payload)
        except (ValueError, OverflowError, OSError) as e:
            raise MalformedTokenError(f"Invalid token timestamp: {e}") from e

    def validate_access_token(self, token: str) -> TokenClaims:
        """Verify an access token.
        
        Args:
            token: The JWT access token.
            
        Returns:
            Decoded claims.
            
        Raises:
            InvalidSignatureError: If the token was not signed with the access key.
            TokenExpiredError: If the token has expired.
            MalformedTokenError: For any other decoding failure.
        """
        return self._decode(token, self.config.access_token_secret)

    def validate_refresh_token(self, token: str) -> str:
        """Verify a refresh token and return its subject.
        
        Args:
            token: The JWT refresh token.
            
        Returns:
            Subject identifier, used to mint a new access token.
            
        Raises:
            InvalidSignatureError: If the token was not signed with the refresh key.
            TokenExpiredError: If the token has expired.
            MalformedTokenError: For any other decoding failure.
        """
        try:
            claims = self._decode(token, self.config.refresh_token_secret)
        except InvalidSignatureError:
            logger.error("Invalid refresh token signature")
            raise
        except TokenExpiredError:
            logger.error("Refresh token has expired")
            raise
        except MalformedTokenError as e:
            logger.error(f"Malformed refresh token: {e}")
            raise
        return claims.subject
