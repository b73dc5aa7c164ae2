# backend/tests/factories/__init__.py

"""
Shared test factories for the Sweet Shop backend.
"""

from .base import BaseFactory
from .auth import AdminFactory, UserFactory, DEFAULT_PASSWORD
from .sweets import SweetFactory

__all__ = [
    'BaseFactory',
    'UserFactory',
    'AdminFactory',
    'DEFAULT_PASSWORD',
    'SweetFactory',
]
