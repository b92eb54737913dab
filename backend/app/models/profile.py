"""
Profile model with plan and monthly usage counters.
Counters are valid for month_key (YYYY-MM) and reset when the month changes.
"""
from sqlalchemy import Column, String, Integer, DateTime, JSON

from app.models.base import Base, utcnow


class Profile(Base):
    """Registered user's plan and usage for the current accounting month."""

    __tablename__ = "profiles"

    user_id = Column(String(128), primary_key=True)
    plan = Column(String(32), nullable=False, default="free")  # free | plus | premium

    # Monthly tracking
    dreams_used_month = Column(Integer, nullable=False, default=0)
    images_used_month = Column(Integer, nullable=False, default=0)  # Tracked, not enforced yet
    month_key = Column(String(7), nullable=False)  # e.g., "2024-01"

    prefs = Column(JSON, nullable=False, default=dict)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self):
        return (
            f"<Profile(user_id={self.user_id}, plan={self.plan}, "
            f"dreams_used_month={self.dreams_used_month}, month_key={self.month_key})>"
        )
