"""Database models for the scheduler."""
from sqlalchemy import Column, String, Text

from sightwords.models.base import Base, TimestampMixin


class StoredBlob(Base, TimestampMixin):
    """Opaque key-value record holding a serialized document."""

    __tablename__ = "stored_blobs"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)
