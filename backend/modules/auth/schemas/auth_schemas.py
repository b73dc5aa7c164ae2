# backend/modules/auth/schemas/auth_schemas.py

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from ..models.user_models import UserRole


class RegisterRequest(BaseModel):
    email: str
    password: str
    name: str
    role: Optional[UserRole] = None


class LoginRequest(BaseModel):
    email: str
    password: str


class UserPublic(BaseModel):
    """User fields safe to return to clients (never the password hash)"""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    name: str
    role: UserRole


class AuthResponse(BaseModel):
    message: str
    token: str
    user: UserPublic


class IdentityResponse(BaseModel):
    """Identity carried by the caller's token"""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId")
    email: str
    role: UserRole
