"""
Submission service: validates a dream submission, applies the usage quota,
interprets the dream and stores it.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.ai.base import DreamInterpreter
from app.exceptions import InvalidSubmission
from app.models.dream import Dream, DreamMode
from app.schemas.dream import DreamSubmissionRequest, DreamSubmissionResponse
from app.services.dream_service import DreamService
from app.services.usage_service import UsageService


@dataclass(frozen=True)
class ValidSubmission:
    """Submission that passed input validation."""
    dream_text: str
    mode: DreamMode
    user_id: Optional[str]
    anon_key: Optional[str]

    @property
    def identity(self) -> str:
        return "registered" if self.user_id else "anonymous"


class SubmissionService:
    """Service for the usage-gated submission flow."""

    @staticmethod
    def validate(request: DreamSubmissionRequest) -> ValidSubmission:
        """
        Validate the raw payload without touching the store.

        Raises:
            InvalidSubmission: If dreamText is empty, mode is unknown, or an
                anonymous caller sent no anonKey
        """
        dream_text = (request.dream_text or "").strip()
        if not dream_text:
            raise InvalidSubmission("dreamText is required")

        try:
            mode = DreamMode(request.mode or DreamMode.TRADITIONAL.value)
        except ValueError:
            raise InvalidSubmission("mode must be 'traditional' or 'internal'")

        if not request.user_id and not request.anon_key:
            # Without a key anonymous usage cannot be tracked
            raise InvalidSubmission("anonKey is required when userId is not provided")

        return ValidSubmission(
            dream_text=dream_text,
            mode=mode,
            user_id=request.user_id,
            anon_key=request.anon_key,
        )

    @staticmethod
    async def submit(
        db: AsyncSession,
        submission: ValidSubmission,
        interpreter: DreamInterpreter,
        now: Optional[datetime] = None
    ) -> Dream:
        """
        Consume quota, interpret and store a validated submission.

        The quota write commits before the dream insert. If the insert fails
        the consumed usage is not given back.

        Args:
            db: Database session
            submission: Validated submission
            interpreter: Interpreter producing the text for the selected mode
            now: Clock override for monthly accounting

        Returns:
            The stored Dream

        Raises:
            QuotaExceeded: If the caller has no usage left
            StoreOperationError: If any store operation fails
        """
        if submission.user_id:
            await UsageService.consume_monthly(db, submission.user_id, now=now)
        else:
            await UsageService.consume_anonymous(db, submission.anon_key)

        interpretation = interpreter.interpret(submission.dream_text, submission.mode)

        return await DreamService.create_dream(
            db,
            dream_text=submission.dream_text,
            mode=submission.mode,
            interpretation=interpretation,
            user_id=submission.user_id,
        )

    @staticmethod
    def build_response(dream: Dream) -> DreamSubmissionResponse:
        """Shape the stored dream into the success payload."""
        mode = DreamMode(dream.mode_selected)
        interpretation = dream.result_traditional if mode == DreamMode.TRADITIONAL else dream.result_internal
        return DreamSubmissionResponse(
            ok=True,
            dream_id=dream.id,
            created_at=dream.created_at,
            mode_selected=mode,
            interpretation=interpretation,
        )
