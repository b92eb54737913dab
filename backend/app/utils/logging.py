"""
Production logging utility for structured JSON logging.

Provides event-specific logging functions with mandatory fields:
- timestamp (ISO8601)
- level
- service
- event

Optional fields (included when applicable):
- user_id
- dream_id
- duration_ms

Usage:
    from app.utils.logging import configure_logging, log_dream_submitted

    configure_logging('dream-api', 'INFO')
    log_dream_submitted(logger, dream_id='123', mode='traditional', identity='anonymous')
"""
import logging
import sys
from typing import Optional, Dict, Any
from pythonjsonlogger import jsonlogger


class StructuredLogger:
    """Structured JSON logger with mandatory fields."""

    _service_name = None
    _configured = False

    @classmethod
    def configure(cls, service_name: str, log_level: str = "INFO"):
        """
        Configure structured JSON logging for the application.

        Args:
            service_name: Service identifier
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        """
        if cls._configured:
            return

        cls._service_name = service_name

        root_logger = logging.getLogger()
        root_logger.handlers = []

        formatter = jsonlogger.JsonFormatter(
            '%(timestamp)s %(levelname)s %(name)s %(message)s',
            timestamp=True,
            json_ensure_ascii=False
        )

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(formatter)

        root_logger.addHandler(handler)
        root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

        # Add service name to all log records via filter
        class ServiceFilter(logging.Filter):
            def filter(self, record):
                record.service = cls._service_name
                return True

        handler.addFilter(ServiceFilter())
        cls._configured = True


def _build_log_extra(
    event: str,
    user_id: Optional[str] = None,
    dream_id: Optional[str] = None,
    duration_ms: Optional[float] = None,
    **kwargs
) -> Dict[str, Any]:
    """
    Build extra fields for structured logging.

    Args:
        event: Event name (mandatory)
        user_id: Optional user ID
        dream_id: Optional dream ID
        duration_ms: Optional duration in milliseconds
        **kwargs: Additional fields

    Returns:
        Dictionary of extra fields
    """
    extra = {
        "event": event,
        **kwargs
    }

    if user_id:
        extra["user_id"] = user_id
    if dream_id:
        extra["dream_id"] = dream_id
    if duration_ms is not None:
        extra["duration_ms"] = round(duration_ms, 2)

    return extra


def log_dream_submitted(
    logger: logging.Logger,
    dream_id: str,
    mode: str,
    identity: str,
    user_id: Optional[str] = None,
    duration_ms: Optional[float] = None,
    **kwargs
):
    """
    Log an accepted dream submission.

    Args:
        logger: Logger instance
        dream_id: Stored dream ID (required)
        mode: Selected interpretation mode (required)
        identity: "anonymous" or "registered" (required)
        user_id: Optional user ID
        duration_ms: Optional duration in milliseconds
    """
    extra = _build_log_extra(
        event="dream_submitted",
        user_id=user_id,
        dream_id=dream_id,
        duration_ms=duration_ms,
        mode=mode,
        identity=identity,
        **kwargs
    )
    logger.info(f"Dream submitted: {dream_id}", extra=extra)


def log_quota_rejected(
    logger: logging.Logger,
    identity: str,
    reason: str,
    user_id: Optional[str] = None,
    plan: Optional[str] = None,
    limit: Optional[int] = None,
    **kwargs
):
    """Log a submission rejected because the caller has no usage left."""
    extra = _build_log_extra(
        event="quota_rejected",
        user_id=user_id,
        identity=identity,
        reason=reason,
        **kwargs
    )
    if plan:
        extra["plan"] = plan
    if limit is not None:
        extra["limit"] = limit

    logger.info(f"Submission rejected: {reason}", extra=extra)


def log_store_failure(
    logger: logging.Logger,
    operation: str,
    error: str,
    user_id: Optional[str] = None,
    duration_ms: Optional[float] = None,
    include_traceback: bool = True,
    **kwargs
):
    """
    Log a failed store read or write.

    Args:
        logger: Logger instance
        operation: Failed operation, e.g. "dream insert" (required)
        error: Underlying error message (required)
        user_id: Optional user ID
        duration_ms: Optional duration in milliseconds
        include_traceback: Whether to include stack trace
    """
    extra = _build_log_extra(
        event="store_failure",
        user_id=user_id,
        duration_ms=duration_ms,
        operation=operation,
        error=str(error),
        **kwargs
    )

    message = f"Store failure: {operation} - {error}"
    if include_traceback and sys.exc_info()[0] is not None:
        logger.error(message, extra=extra, exc_info=sys.exc_info())
    else:
        logger.error(message, extra=extra)


def log_month_rollover(
    logger: logging.Logger,
    user_id: str,
    previous_month: Optional[str],
    month_key: str,
    **kwargs
):
    """Log a monthly usage reset for a profile."""
    extra = _build_log_extra(
        event="month_rollover",
        user_id=user_id,
        previous_month=previous_month,
        month_key=month_key,
        **kwargs
    )
    logger.info(f"Monthly usage reset for user {user_id}: {previous_month} -> {month_key}", extra=extra)


def configure_logging(service_name: str, log_level: str = "INFO"):
    """Configure logging (alias for StructuredLogger.configure)."""
    StructuredLogger.configure(service_name, log_level)
