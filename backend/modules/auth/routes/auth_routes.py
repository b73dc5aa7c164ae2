"""
Authentication routes for the Sweet Shop API.

Registration and login return a bearer token that clients send as
``Authorization: Bearer <token>`` on every protected call.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from core.auth import CredentialService, get_credential_service, get_current_user
from core.auth_context import AuthContextData
from core.database import get_db
from ..schemas.auth_schemas import (
    AuthResponse,
    IdentityResponse,
    LoginRequest,
    RegisterRequest,
    UserPublic,
)
from ..services.auth_service import AuthService


router = APIRouter(prefix="/api/auth", tags=["Authentication"])


def get_auth_service(
    db: Session = Depends(get_db),
    credentials: CredentialService = Depends(get_credential_service),
) -> AuthService:
    """Dependency to get auth service instance"""
    return AuthService(db, credentials)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Register a new user and return a token.

    ## Request Body
    - **email**: Unique email address
    - **password**: At least 6 characters
    - **name**: Display name
    - **role**: Optional, `user` (default) or `admin`
    """
    user, token = auth_service.register(
        email=payload.email,
        password=payload.password,
        name=payload.name,
        role=payload.role,
    )
    return AuthResponse(
        message="User registered successfully",
        token=token,
        user=UserPublic.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    payload: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Authenticate with email and password and return a token."""
    user, token = auth_service.login(payload.email, payload.password)
    return AuthResponse(
        message="Login successful",
        token=token,
        user=UserPublic.model_validate(user),
    )


@router.get("/me", response_model=IdentityResponse)
async def read_current_identity(current_user: AuthContextData = Depends(get_current_user)):
    """Return the identity asserted by the caller's token."""
    return IdentityResponse(
        user_id=current_user.user_id,
        email=current_user.email,
        role=current_user.role,
    )
