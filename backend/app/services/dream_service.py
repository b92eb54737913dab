"""
Dream service for persisting accepted submissions.
"""
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.dream import Dream, DreamMode
from app.services.usage_service import raise_store_error


class DreamService:
    """Service for dream records."""

    @staticmethod
    async def create_dream(
        db: AsyncSession,
        dream_text: str,
        mode: DreamMode,
        interpretation: str,
        user_id: Optional[str] = None
    ) -> Dream:
        """
        Insert a dream with the interpretation stored in the column for its mode.

        Args:
            db: Database session
            dream_text: Trimmed, non-empty dream text
            mode: Selected interpretation mode
            interpretation: Interpretation text for that mode
            user_id: Registered user ID, None for anonymous submissions

        Returns:
            The stored Dream with id and created_at assigned

        Raises:
            StoreOperationError: If the insert fails
        """
        dream = Dream(
            user_id=user_id,
            dream_text=dream_text,
            mode_selected=mode.value,
            result_traditional=interpretation if mode == DreamMode.TRADITIONAL else None,
            result_internal=interpretation if mode == DreamMode.INTERNAL else None,
        )
        try:
            db.add(dream)
            await db.commit()
            # created_at is assigned by the store
            await db.refresh(dream)
        except SQLAlchemyError as e:
            await raise_store_error(db, "dream insert", e)
        return dream
