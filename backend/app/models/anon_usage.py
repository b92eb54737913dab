"""
AnonUsage model tracking submissions made without an account.
One row per anonymous key; used_count never goes above 1.
"""
from sqlalchemy import Column, String, Integer, DateTime

from app.models.base import Base, utcnow


class AnonUsage(Base):
    """Usage counter for an anonymous session key."""

    __tablename__ = "anon_usage"

    anon_key = Column(String(255), primary_key=True)  # Opaque, caller-supplied token
    used_count = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self):
        return f"<AnonUsage(anon_key={self.anon_key}, used_count={self.used_count})>"
