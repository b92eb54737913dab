"""
Usage service enforcing submission quotas.

Anonymous callers get a single submission per anonymous key, ever.
Registered callers get a monthly allowance depending on their plan; counters
are reset when the accounting month changes.

Every check is a plain read followed by a write of the computed value and each
write commits on its own. Two concurrent requests for the same key or user can
both pass the check before either write lands.
"""
import logging
from datetime import datetime
from typing import NoReturn, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import AnonymousLimitReached, MonthlyLimitReached, StoreOperationError
from app.models.anon_usage import AnonUsage
from app.models.base import utcnow
from app.models.profile import Profile
from app.services.plans import DEFAULT_PLAN, current_month_key, get_plan_limits, normalize_plan_name
from app.utils.logging import log_month_rollover

logger = logging.getLogger(__name__)


def store_error_detail(exc: SQLAlchemyError) -> str:
    """Underlying driver message when there is one, the SQLAlchemy message otherwise."""
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


async def raise_store_error(db: AsyncSession, operation: str, exc: SQLAlchemyError) -> NoReturn:
    """Roll back the failed statement and raise it as a StoreOperationError."""
    await db.rollback()
    raise StoreOperationError(operation, store_error_detail(exc)) from exc


class UsageService:
    """Service for quota checks and usage accounting."""

    # Submissions allowed per anonymous key
    ANONYMOUS_ALLOWANCE = 1

    @staticmethod
    async def consume_anonymous(db: AsyncSession, anon_key: str) -> int:
        """
        Consume the single submission of an anonymous key.

        Args:
            db: Database session
            anon_key: Caller-supplied anonymous session key

        Returns:
            used_count after the submission was recorded

        Raises:
            AnonymousLimitReached: If the key already used its submission
            StoreOperationError: If a read or write fails
        """
        try:
            result = await db.execute(
                select(AnonUsage).where(AnonUsage.anon_key == anon_key)
            )
            row = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            await raise_store_error(db, "anon_usage read", e)

        used_count = row.used_count if row is not None else 0
        if used_count >= UsageService.ANONYMOUS_ALLOWANCE:
            raise AnonymousLimitReached()

        if row is None:
            try:
                db.add(AnonUsage(anon_key=anon_key, used_count=1))
                await db.commit()
            except SQLAlchemyError as e:
                await raise_store_error(db, "anon_usage insert", e)
            return 1

        try:
            row.used_count = used_count + 1
            row.updated_at = utcnow()
            await db.commit()
        except SQLAlchemyError as e:
            await raise_store_error(db, "anon_usage update", e)
        return used_count + 1

    @staticmethod
    async def get_or_create_profile(db: AsyncSession, user_id: str, month_key: str) -> Profile:
        """
        Get the user's profile, creating a free-plan profile on first sight.

        Raises:
            StoreOperationError: If the read or the insert fails
        """
        try:
            result = await db.execute(
                select(Profile).where(Profile.user_id == user_id)
            )
            profile = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            await raise_store_error(db, "profiles read", e)

        if profile is not None:
            return profile

        profile = Profile(
            user_id=user_id,
            plan=DEFAULT_PLAN.value,
            dreams_used_month=0,
            images_used_month=0,
            month_key=month_key,
            prefs={},
        )
        try:
            db.add(profile)
            await db.commit()
        except SQLAlchemyError as e:
            await raise_store_error(db, "profiles insert", e)
        logger.info(
            f"Profile created for user {user_id}",
            extra={"event": "profile_created", "user_id": user_id, "month_key": month_key}
        )
        return profile

    @staticmethod
    async def reset_month_if_needed(db: AsyncSession, profile: Profile, month_key: str) -> bool:
        """
        Reset monthly counters when the profile belongs to an earlier month.
        The reset is persisted before returning.

        Returns:
            True if counters were reset
        """
        if profile.month_key == month_key:
            return False

        previous_month = profile.month_key
        try:
            profile.dreams_used_month = 0
            profile.images_used_month = 0
            profile.month_key = month_key
            profile.updated_at = utcnow()
            await db.commit()
        except SQLAlchemyError as e:
            await raise_store_error(db, "profiles reset", e)

        log_month_rollover(logger, user_id=profile.user_id, previous_month=previous_month, month_key=month_key)
        return True

    @staticmethod
    async def consume_monthly(db: AsyncSession, user_id: str, now: Optional[datetime] = None) -> Profile:
        """
        Consume one dream from the user's monthly allowance.

        Args:
            db: Database session
            user_id: Registered user ID
            now: Clock override (defaults to current UTC time)

        Returns:
            Profile after the increment

        Raises:
            MonthlyLimitReached: If the plan's allowance is used up
            StoreOperationError: If a read or write fails
        """
        month_key = current_month_key(now)

        profile = await UsageService.get_or_create_profile(db, user_id, month_key)
        await UsageService.reset_month_if_needed(db, profile, month_key)

        plan = normalize_plan_name(profile.plan)
        limits = get_plan_limits(plan)
        used = profile.dreams_used_month or 0

        if used >= limits.dreams:
            raise MonthlyLimitReached(plan=plan, limit=limits.dreams)

        try:
            profile.dreams_used_month = used + 1
            profile.updated_at = utcnow()
            await db.commit()
        except SQLAlchemyError as e:
            await raise_store_error(db, "profiles increment", e)
        return profile
