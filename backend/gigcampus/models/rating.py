"""
User Rating Model - SQLAlchemy ORM model for the rating ledger

One row per user holding the whole UserRatingData document as JSON.
Writes replace the document wholesale, there is no per-field schema
to migrate.
"""

from sqlalchemy import Column, String, JSON, DateTime
from sqlalchemy.sql import func
from gigcampus.database import Base


class UserRatingRecord(Base):
    """
    Persisted rating ledger for one user.

    Attributes:
        user_id: Identity-provider user id (primary key)
        data: Serialized UserRatingData (skills, history, counters)
    """

    __tablename__ = "user_ratings"

    user_id = Column(String(255), primary_key=True)
    data = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
