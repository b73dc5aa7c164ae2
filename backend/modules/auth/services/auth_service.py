"""
Registration and login for shop users.

Orchestrates the credential service and the ``users`` table: registration
validates and stores a new user, login checks a password, and both return a
freshly issued bearer token together with the public user fields.
"""

import logging
from typing import Optional, Tuple

from email_validator import EmailNotValidError, validate_email
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.auth import CredentialService
from core.exceptions import AuthenticationError, ConflictError, ValidationError
from core.password_security import BCRYPT_MAX_PASSWORD_BYTES, PasswordValueError
from ..models.user_models import User, UserRole

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6

# Same message for unknown email and wrong password so callers cannot
# probe which addresses are registered.
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


class AuthService:
    """User registration and authentication"""

    def __init__(self, db: Session, credentials: CredentialService):
        self.db = db
        self.credentials = credentials

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def register(
        self,
        email: str,
        password: str,
        name: str,
        role: Optional[UserRole] = None,
    ) -> Tuple[User, str]:
        """Create a user and issue their first token."""
        if not email or not password or not name:
            raise ValidationError("Email, password, and name are required")

        try:
            validate_email(email, check_deliverability=False)
        except EmailNotValidError:
            raise ValidationError("Invalid email format")

        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
            )

        if "\x00" in password:
            raise ValidationError("Password must not contain NUL characters")

        if len(password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ValidationError(
                f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes long"
            )

        if self.get_user_by_email(email):
            raise ConflictError("User with this email already exists")

        try:
            hashed_password = self.credentials.hash_password(password)
        except PasswordValueError:
            raise ValidationError("Password cannot be used")

        user = User(
            email=email,
            password=hashed_password,
            name=name,
            role=role or UserRole.USER,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration for the same email
            self.db.rollback()
            raise ConflictError("User with this email already exists")
        self.db.refresh(user)

        logger.info(f"Registered user {user.id} with role {user.role.value}")
        return user, self._issue_token(user)

    def login(self, email: str, password: str) -> Tuple[User, str]:
        """Check credentials and issue a new token."""
        if not email or not password:
            raise ValidationError("Email and password are required")

        user = self.get_user_by_email(email)
        if not user or not self.credentials.verify_password(password, user.password):
            logger.warning("Failed login attempt")
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE, error_code="INVALID_CREDENTIALS")

        if self.credentials.needs_rehash(user.password):
            user.password = self.credentials.hash_password(password)
            self.db.commit()

        logger.info(f"User {user.id} logged in")
        return user, self._issue_token(user)

    def _issue_token(self, user: User) -> str:
        return self.credentials.issue_token(str(user.id), user.email, user.role.value)
