"""
Wrapped Backend - ORM Models
==============================

Importing this package registers every model with `Base.metadata`, which
relationship resolution, `Database.create_all` and Alembic all depend on.
"""

from wrapped.models.user import User
from wrapped.models.wrap import Wrap, WrapItem

__all__ = ["User", "Wrap", "WrapItem"]
