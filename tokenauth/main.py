"""FastAPI application exposing registration, login, refresh and protected user routes."""
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from tokenauth import __version__
from tokenauth.config import Config, config as default_config
from tokenauth.auth.credentials import User
from tokenauth.auth.errors import (
    APIError,
    InvalidCredentialsError,
    InvalidSignatureError,
    MalformedTokenError,
    MissingFieldError,
    TokenExpiredError,
    TokenSigningError,
    UserExistsError,
)
from tokenauth.auth.jwt_handler import TokenClaims, TokenIssuer, TokenValidator
from tokenauth.auth.middleware import AuthMiddleware, require_access_token
from tokenauth.state.user_store import UserStore
from tokenauth.utils.logger import get_logger, set_log_level

logger = get_logger(__name__)


# Pydantic models for HTTP API
class RegisterRequest(BaseModel):
    username: str = ""
    password: str = ""
    email: str = ""
    firstname: str = ""
    lastname: str = ""


class LoginRequest(BaseModel):
    username: str = ""
    password: str = ""


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class RefreshRequest(BaseModel):
    refresh_token: str = ""


class RefreshResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class UserResponse(BaseModel):
    id: str
    username: str
    email: str
    firstname: str
    lastname: str

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(**user.to_response())


def _issuer(request: Request) -> TokenIssuer:
    return request.app.state.issuer


def _validator(request: Request) -> TokenValidator:
    return request.app.state.validator


def _users(request: Request) -> UserStore:
    return request.app.state.user_store


def create_app(config: Optional[Config] = None, user_store: Optional[UserStore] = None) -> FastAPI:
    """Build the application.
    
    Args:
        config: Signing keys and token lifetimes. Defaults to the
            environment-loaded config.
        user_store: Backing user store. Defaults to a fresh in-memory store.
        
    Returns:
        The configured FastAPI app.
        
    Raises:
        ConfigError: If the config cannot be used to sign tokens.
    """
    config = (config or default_config).validate()
    set_log_level(config.log_level)

    app = FastAPI(
        title="Token Auth Service",
        description="Access/refresh token issuance and validation",
        version=__version__,
    )
    validator = TokenValidator(config)
    app.state.issuer = TokenIssuer(config)
    app.state.validator = validator
    app.state.auth_middleware = AuthMiddleware(validator)
    app.state.user_store = user_store or UserStore()

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.error(f"Invalid request body for {request.url.path}: {exc.errors()}")
        return JSONResponse(status_code=400, content={"status": 400, "message": "Bad Request"})

    @app.exception_handler(TokenSigningError)
    async def signing_error_handler(request: Request, exc: TokenSigningError) -> JSONResponse:
        logger.exception("Token signing failed")
        return JSONResponse(
            status_code=500,
            content={"status": 500, "message": "Internal Server Error"},
        )

    # Health check
    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    # Auth endpoints
    @app.post("/api/register", response_model=UserResponse, status_code=201)
    async def register(body: RegisterRequest, users: UserStore = Depends(_users)):
        """Register a new user."""
        try:
            user = await users.register(
                body.username,
                body.password,
                email=body.email,
                first_name=body.firstname,
                last_name=body.lastname,
            )
        except (MissingFieldError, UserExistsError) as e:
            logger.error(f"Registration rejected: {e}")
            raise APIError(400, str(e))
        return UserResponse.from_user(user)

    @app.post("/api/login", response_model=TokenResponse)
    async def login(
        body: LoginRequest,
        users: UserStore = Depends(_users),
        issuer: TokenIssuer = Depends(_issuer),
    ):
        """Login and get tokens."""
        try:
            user = await users.login(body.username, body.password)
        except InvalidCredentialsError as e:
            raise APIError(401, str(e))
        tokens = issuer.generate_token(user.username, user.id)
        return TokenResponse(
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token,
        )

    @app.post("/api/refresh", response_model=RefreshResponse)
    async def refresh_token(
        body: RefreshRequest,
        users: UserStore = Depends(_users),
        issuer: TokenIssuer = Depends(_issuer),
        validator: TokenValidator = Depends(_validator),
    ):
        """Exchange a refresh token for a new access token."""
        if not body.refresh_token.strip():
            logger.error("Refresh token was not provided")
            raise APIError(400, "Refresh Token is required")

        try:
            subject = validator.validate_refresh_token(body.refresh_token.strip())
        except (InvalidSignatureError, TokenExpiredError):
            raise APIError(401, "Invalid Token")
        except MalformedTokenError:
            raise APIError(400, "Bad Request")

        user = await users.get_by_id(subject)
        if user is None:
            logger.error(f"Refresh token subject {subject} has no user")
            raise APIError(404, "User not found")

        return RefreshResponse(access_token=issuer.generate_access_token(user.username, user.id))

    # Protected endpoints
    @app.get("/api/users/me", response_model=UserResponse)
    async def current_user(
        claims: TokenClaims = Depends(require_access_token),
        users: UserStore = Depends(_users),
    ):
        """Get the user the access token was issued to."""
        user = await users.get_by_id(claims.subject)
        if user is None:
            raise APIError(404, "User not found")
        return UserResponse.from_user(user)

    @app.get(
        "/api/users/{user_id}",
        response_model=UserResponse,
        dependencies=[Depends(require_access_token)],
    )
    async def get_user(user_id: str, users: UserStore = Depends(_users)):
        """Get a user by identifier."""
        user = await users.get_by_id(user_id)
        if user is None:
            raise APIError(404, "User not found")
        return UserResponse.from_user(user)

    logger.info("Token auth application created")
    return app
