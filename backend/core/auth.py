"""
Authentication and access control for the Sweet Shop API.

Provides the credential service (password hashing plus JWT issuance and
verification) and the FastAPI dependencies that authenticate bearer tokens
and gate admin-only routes.

Tokens are stateless: the role they carry is trusted until the token
expires, so a role change only takes effect after the user logs in again.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
import logging

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from .auth_context import AuthContextData, get_auth_context, set_auth_context
from .config import Settings
from .exceptions import AuthenticationError, AuthorizationError, InvalidTokenError
from .password_security import PasswordHasher
from modules.auth.models.user_models import UserRole

logger = logging.getLogger(__name__)

BEARER_SCHEME = "Bearer"

security = HTTPBearer(auto_error=False)


class TokenClaims(BaseModel):
    """Identity asserted by a verified token."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    email: str
    role: UserRole
    issued_at: datetime
    expires_at: datetime


class CredentialService:
    """Hashes passwords and issues/verifies signed bearer tokens."""

    def __init__(self, settings: Settings):
        self.secret_key = settings.jwt_secret_key
        self.algorithm = settings.jwt_algorithm
        self.token_lifetime = timedelta(hours=settings.jwt_expire_hours)
        self.leeway_seconds = settings.jwt_leeway_seconds
        self.passwords = PasswordHasher(rounds=settings.bcrypt_rounds)

    def hash_password(self, password: str) -> str:
        return self.passwords.hash_password(password)

    def verify_password(self, password: str, hashed_password: str) -> bool:
        return self.passwords.verify_password(password, hashed_password)

    def needs_rehash(self, hashed_password: str) -> bool:
        return self.passwords.needs_rehash(hashed_password)

    def issue_token(
        self,
        user_id: str,
        email: str,
        role: str,
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        """Create a signed token binding the user id, email and role."""
        issued_at = datetime.now(timezone.utc)
        expire = issued_at + (expires_delta if expires_delta is not None else self.token_lifetime)

        to_encode = {
            "sub": str(user_id),
            "userId": str(user_id),
            "email": email,
            "role": UserRole(role).value,
            "iat": issued_at,
            "exp": expire,
        }
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify_token(self, token: str) -> TokenClaims:
        """
        Verify and decode a token.

        Args:
            token: Encoded JWT taken from the Authorization header

        Returns:
            TokenClaims for the user the token was issued to

        Raises:
            InvalidTokenError: bad signature, expired, or malformed token. The
                reason is logged but never returned to the caller.
        """
        jwt_options = {
            "verify_signature": True,
            "verify_exp": True,
            "verify_iat": True,
            "require_exp": True,
            "require_iat": True,
            "require_sub": True,
            "leeway": self.leeway_seconds,
        }

        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options=jwt_options,
            )
        except ExpiredSignatureError:
            logger.warning("Token has expired")
            raise InvalidTokenError()
        except JWTError as e:
            logger.warning(f"JWT verification failed: {e}")
            raise InvalidTokenError()

        user_id = payload.get("userId")
        if user_id is None or user_id != payload.get("sub"):
            logger.warning("Token subject missing or inconsistent")
            raise InvalidTokenError()

        try:
            return TokenClaims(
                user_id=user_id,
                email=payload.get("email"),
                role=payload.get("role"),
                issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )
        except (PydanticValidationError, TypeError, ValueError, OverflowError) as e:
            logger.warning(f"Token claims malformed: {e}")
            raise InvalidTokenError()


def get_credential_service(request: Request) -> CredentialService:
    """Credential service built by the application factory."""
    return request.app.state.credentials


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    credential_service: CredentialService = Depends(get_credential_service),
) -> AuthContextData:
    """Authenticate the bearer token and attach the caller's identity."""
    if (
        credentials is None
        or credentials.scheme != BEARER_SCHEME
        or not credentials.credentials
    ):
        raise AuthenticationError("No token provided")

    claims = credential_service.verify_token(credentials.credentials)

    context = AuthContextData(
        user_id=claims.user_id,
        email=claims.email,
        role=claims.role.value,
    )
    set_auth_context(context)
    request.state.user = context
    return context


def authorize(context: Optional[AuthContextData], role: UserRole) -> AuthContextData:
    """Reject callers without an identity (401) or without ``role`` (403)."""
    if context is None:
        raise AuthenticationError("Unauthorized")
    if not context.has_role(role.value):
        raise AuthorizationError(f"{role.value.capitalize()} access required")
    return context


class RoleRequirement:
    """Dependency that authenticates the caller, then enforces a role."""

    def __init__(self, role: UserRole):
        self.role = role

    async def __call__(
        self, context: AuthContextData = Depends(get_current_user)
    ) -> AuthContextData:
        return authorize(context, self.role)


require_admin = RoleRequirement(UserRole.ADMIN)


def current_identity() -> Optional[AuthContextData]:
    """Identity of the caller for the request being processed, if any."""
    return get_auth_context()
