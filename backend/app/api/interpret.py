"""
Dream interpretation endpoint.
Accepts a dream, applies the usage quota, stores it and returns the interpretation.
GET is accepted alongside POST for early testing and can be turned off with
ALLOW_GET_SUBMISSIONS=false.
"""
import logging
import time
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.ai.factory import get_interpreter
from app.config import settings
from app.database import get_db
from app.exceptions import QuotaExceeded, ServerFault, StoreOperationError, SubmissionError
from app.schemas.dream import DreamSubmissionRequest, DreamSubmissionResponse, ErrorResponse
from app.services.submission_service import SubmissionService
from app.utils.logging import log_dream_submitted, log_quota_rejected, log_store_failure
from app.utils.metrics import dreams_submitted_total, quota_rejections_total, store_failures_total

logger = logging.getLogger(__name__)

router = APIRouter()


async def read_submission_payload(request: Request) -> Dict[str, Any]:
    """
    Raw payload: query parameters for GET, JSON object body for POST.
    Form-encoded POST bodies are read as fields. Any other POST body that is
    not a JSON object counts as an empty payload.
    """
    if request.method == "GET":
        return dict(request.query_params)
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/x-www-form-urlencoded"):
        form = await request.form()
        return dict(form)
    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


@router.api_route(
    "",
    methods=["GET", "POST"],
    response_model=DreamSubmissionResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing or invalid input"},
        403: {"model": ErrorResponse, "description": "Usage quota exhausted"},
        405: {"model": ErrorResponse, "description": "Method not allowed"},
        500: {"model": ErrorResponse, "description": "Store or server failure"},
    },
)
async def interpret_dream(
    request: Request,
    db: AsyncSession = Depends(get_db)
):
    """
    Submit a dream for interpretation.

    Anonymous callers (no userId) must send an anonKey and get one submission.
    Registered callers are limited per month according to their plan.
    """
    if request.method == "GET" and not settings.allow_get_submissions:
        raise StarletteHTTPException(status_code=status.HTTP_405_METHOD_NOT_ALLOWED)

    start_time = time.time()
    payload = DreamSubmissionRequest.model_validate(await read_submission_payload(request))
    submission = SubmissionService.validate(payload)

    try:
        interpreter = get_interpreter()
        dream = await SubmissionService.submit(db, submission, interpreter)
    except QuotaExceeded as e:
        quota_rejections_total.labels(identity=submission.identity).inc()
        log_quota_rejected(
            logger,
            identity=submission.identity,
            reason=e.error,
            user_id=submission.user_id,
            plan=getattr(e, "plan", None),
            limit=getattr(e, "limit", None),
        )
        raise
    except StoreOperationError as e:
        store_failures_total.labels(operation=e.operation).inc()
        log_store_failure(
            logger,
            operation=e.operation,
            error=e.detail,
            user_id=submission.user_id,
            duration_ms=(time.time() - start_time) * 1000,
        )
        raise
    except SubmissionError:
        raise
    except Exception as e:
        logger.error(
            f"Dream submission failed: {str(e)}",
            extra={
                "event": "dream_submission_failed",
                "user_id": submission.user_id,
                "error": str(e)
            },
            exc_info=True
        )
        raise ServerFault(str(e)) from e

    dreams_submitted_total.labels(mode=submission.mode.value, identity=submission.identity).inc()
    log_dream_submitted(
        logger,
        dream_id=dream.id,
        mode=submission.mode.value,
        identity=submission.identity,
        user_id=submission.user_id,
        duration_ms=(time.time() - start_time) * 1000,
    )

    return SubmissionService.build_response(dream)
