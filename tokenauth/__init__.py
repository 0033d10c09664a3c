"""Access/refresh token issuance and validation for web service accounts."""

__version__ = "1.0.0"
