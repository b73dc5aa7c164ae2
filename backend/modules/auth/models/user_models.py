# backend/modules/auth/models/user_models.py

from enum import Enum

from sqlalchemy import Column, String, Enum as SQLEnum

from core.database import Base
from core.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class UserRole(str, Enum):
    """Coarse-grained authorization roles"""
    USER = "user"
    ADMIN = "admin"


class User(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Registered shop user"""
    __tablename__ = "users"

    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)  # bcrypt hash only
    name = Column(String(100), nullable=False)
    role = Column(
        SQLEnum(UserRole, values_callable=lambda roles: [r.value for r in roles]),
        nullable=False,
        default=UserRole.USER,
    )

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
