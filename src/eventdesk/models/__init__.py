"""
ORM Models package.

Usage:
    from eventdesk.models import Base, StoredCollection, Role
"""

from eventdesk.models.base import Base, TimestampMixin
from eventdesk.models.enums import Role
from eventdesk.models.collection import StoredCollection

__all__ = [
    "Base",
    "TimestampMixin",
    "Role",
    "StoredCollection",
]
