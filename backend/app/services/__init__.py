"""
Business logic services.
"""
from app.services.usage_service import UsageService
from app.services.dream_service import DreamService
from app.services.submission_service import SubmissionService

__all__ = [
    "UsageService",
    "DreamService",
    "SubmissionService",
]
