# backend/tests/factories/auth.py

from factory import Faker, Sequence, LazyFunction

from core.password_security import PasswordHasher
from modules.auth.models import User, UserRole
from .base import BaseFactory

DEFAULT_PASSWORD = "sugar-rush-42"

# Minimum bcrypt cost keeps the suite fast
_hasher = PasswordHasher(rounds=4)


class UserFactory(BaseFactory):
    """Factory for creating users."""

    class Meta:
        model = User

    email = Sequence(lambda n: f"customer{n}@sweetshop.com")
    name = Faker("name")
    password = LazyFunction(lambda: _hasher.hash_password(DEFAULT_PASSWORD))
    role = UserRole.USER


class AdminFactory(UserFactory):
    """Factory for creating admin users."""

    email = Sequence(lambda n: f"admin{n}@sweetshop.com")
    role = UserRole.ADMIN
