"""Application configuration."""
import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


class ConfigError(ValueError):
    """Configuration is missing or unusable."""
    pass


@dataclass(frozen=True)
class Config:
    """Application configuration loaded from environment variables."""
    
    # JWT signing keys, one per token type
    access_token_secret: str = os.getenv("ACCESS_TOKEN_SECRET", "")
    refresh_token_secret: str = os.getenv("REFRESH_TOKEN_SECRET", "")
    jwt_algorithm: str = "HS256"
    access_token_expiry_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRY_MINUTES", "5"))
    refresh_token_expiry_minutes: int = int(os.getenv("REFRESH_TOKEN_EXPIRY_MINUTES", "15"))
    
    # Server
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8080"))
    
    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    def validate(self) -> "Config":
        """Check that the configuration can be used to sign tokens.
        
        Returns:
            The same config, for chaining.
            
        Raises:
            ConfigError: If a signing key is missing, the keys are shared,
                or a token lifetime is not positive.
        """
        if not self.access_token_secret:
            raise ConfigError("ACCESS_TOKEN_SECRET is not set")
        if not self.refresh_token_secret:
            raise ConfigError("REFRESH_TOKEN_SECRET is not set")
        if self.access_token_secret == self.refresh_token_secret:
            raise ConfigError("Access and refresh tokens must use different secrets")
        if self.access_token_expiry_minutes <= 0:
            raise ConfigError("Access token expiry must be positive")
        if self.refresh_token_expiry_minutes <= 0:
            raise ConfigError("Refresh token expiry must be positive")
        return self


config = Config()
