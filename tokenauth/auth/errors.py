"""Authentication error types."""


class TokenError(Exception):
    """Token validation error."""
    pass


class InvalidSignatureError(TokenError):
    """Token signature does not match the signing key."""
    pass


class TokenExpiredError(TokenError):
    """Token signature is valid but its expiry time has passed."""
    pass


class MalformedTokenError(TokenError):
    """Token could not be decoded or lacks a required claim."""
    pass


class TokenSigningError(TokenError):
    """Token could not be signed. Indicates bad key material, not bad input."""
    pass


class UserExistsError(ValueError):
    """Username is already registered."""
    pass


class InvalidCredentialsError(ValueError):
    """Username or password did not match."""
    pass


class MissingFieldError(ValueError):
    """A required user field is empty."""

    def __init__(self, field: str):
        super().__init__(f"Error missing {field}")
        self.field = field


class APIError(Exception):
    """Error rendered to HTTP clients as ``{"status": ..., "message": ...}``."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message

    def to_dict(self) -> dict:
        """Convert to response body."""
        return {"status": self.status_code, "message": self.message}


class AuthorizationError(APIError):
    """Request rejected by the access token middleware."""
    pass
