"""In-memory user store."""
from typing import Optional

from tokenauth.auth.credentials import User
from tokenauth.auth.errors import InvalidCredentialsError, UserExistsError
from tokenauth.utils.logger import get_logger

logger = get_logger(__name__)


class UserStore:
    """User persistence and password checks, held in process memory.
    
    Stands in for an external database; all access happens on the event
    loop so no locking is needed.
    """

    def __init__(self):
        self._users: dict[str, User] = {}  # id -> user
        self._by_username: dict[str, str] = {}  # lowercased username -> id

    async def register(
        self,
        username: str,
        password: str,
        email: str = "",
        first_name: str = "",
        last_name: str = "",
    ) -> User:
        """Register a new user.
        
        Args:
            username: Unique username.
            password: Plain text password.
            email: Email address.
            first_name: Given name.
            last_name: Family name.
            
        Returns:
            The stored user, with hashed password.
            
        Raises:
            MissingFieldError: If a required field is empty.
            UserExistsError: If the username already exists.
        """
        user = User(
            first_name=first_name,
            last_name=last_name,
            email=email,
            username=username,
            password=password,
        )
        user.validate()

        if username.lower() in self._by_username:
            raise UserExistsError(f"Username '{username}' already exists")

        user.set_password(password)
        self._users[user.id] = user
        self._by_username[username.lower()] = user.id

        logger.info(f"Registered new user: {username}")
        return user

    async def login(self, username: str, password: str) -> User:
        """Check a user's credentials.
        
        Args:
            username: The user's name.
            password: Plain text password.
            
        Returns:
            The authenticated user.
            
        Raises:
            InvalidCredentialsError: If credentials are invalid.
        """
        user = await self.get_by_username(username)
        if user is None or not user.check_password(password):
            logger.warning(f"Failed login attempt for {username}")
            raise InvalidCredentialsError("Invalid username or password")

        logger.info(f"User logged in: {username}")
        return user

    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get a user by identifier."""
        return self._users.get(user_id)

    async def get_by_username(self, username: str) -> Optional[User]:
        """Get a user by username, case-insensitively."""
        user_id = self._by_username.get(username.lower())
        if user_id is None:
            return None
        return self._users.get(user_id)
