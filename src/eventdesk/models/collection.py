"""
Stored collection ORM model.

Each row holds one serialized collection (events, users, current user)
keyed by its collection name.
"""

from sqlalchemy import Column, String, Text

from eventdesk.models.base import Base, TimestampMixin


class StoredCollection(TimestampMixin, Base):
    """One named blob of serialized records."""

    __tablename__ = "stored_collections"

    name = Column(String(100), primary_key=True)
    payload = Column(Text, nullable=False)
