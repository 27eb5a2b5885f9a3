"""
Developer domain: record shape, argument coercion and storage
"""

from .coercion import coerce_developer
from .models import Developer
from .repository import DeveloperRepository

__all__ = ["Developer", "DeveloperRepository", "coerce_developer"]
