"""
Dream model storing each accepted submission and its interpretation.
Only the result column matching mode_selected is filled.
"""
from sqlalchemy import Column, String, Text, DateTime, Index, func
import enum

from app.models.base import Base, generate_uuid


class DreamMode(str, enum.Enum):
    """Interpretation style requested by the caller."""
    TRADITIONAL = "traditional"
    INTERNAL = "internal"


class Dream(Base):
    """Accepted dream submission. user_id is null for anonymous callers."""

    __tablename__ = "dreams"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(128), nullable=True)
    dream_text = Column(Text, nullable=False)
    mode_selected = Column(String(16), nullable=False)

    result_traditional = Column(Text, nullable=True)
    result_internal = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        Index("idx_dreams_user_id", "user_id"),
    )

    def __repr__(self):
        return f"<Dream(id={self.id}, user_id={self.user_id}, mode={self.mode_selected})>"
