"""User record validation and salted password hashing."""
import hashlib
import hmac
import secrets
import uuid
from dataclasses import dataclass, field

from tokenauth.auth.errors import MissingFieldError

SALT_BYTES = 20


def new_salt() -> str:
    """Generate a fresh per-user salt.
    
    Drawn from the operating system CSPRNG and rendered as 40 hex
    characters.
    
    Returns:
        Hex encoded salt.
    """
    return secrets.token_hex(SALT_BYTES)


def calculate_pass_hash(password: str, salt: str) -> str:
    """Hash a password with its salt.
    
    Args:
        password: Plain text password.
        salt: The user's salt, hashed before the password.
        
    Returns:
        Hex digest of sha1(salt + password).
    """
    h = hashlib.sha1()
    h.update(salt.encode("utf-8", errors="surrogatepass"))
    h.update(password.encode("utf-8", errors="surrogatepass"))
    return h.hexdigest()


def verify_pass_hash(password: str, salt: str, pass_hash: str) -> bool:
    """Verify a password against a stored salted hash.
    
    Args:
        password: Plain text password to verify.
        salt: The user's salt.
        pass_hash: Previously calculated hash.
        
    Returns:
        True if password matches, False otherwise.
    """
    return hmac.compare_digest(calculate_pass_hash(password, salt), pass_hash)


@dataclass
class User:
    """User record."""
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    username: str = ""
    password: str = ""
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    salt: str = field(default="", repr=False)

    def validate(self) -> None:
        """Check that all required fields are present.
        
        Raises:
            MissingFieldError: Naming the first empty field, checked in the
                order FirstName, LastName, Username, Password.
        """
        if not self.first_name:
            raise MissingFieldError("FirstName")
        if not self.last_name:
            raise MissingFieldError("LastName")
        if not self.username:
            raise MissingFieldError("Username")
        if not self.password:
            raise MissingFieldError("Password")

    def new_salt(self) -> None:
        """Assign a fresh salt to this user."""
        self.salt = new_salt()

    def set_password(self, password: str) -> None:
        """Salt and hash a plain text password into this record."""
        self.new_salt()
        self.password = calculate_pass_hash(password, self.salt)

    def check_password(self, password: str) -> bool:
        """Check a plain text password against the stored hash."""
        return verify_pass_hash(password, self.salt, self.password)

    def to_response(self) -> dict:
        """Public view of the user, without password or salt."""
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "firstname": self.first_name,
            "lastname": self.last_name,
        }
