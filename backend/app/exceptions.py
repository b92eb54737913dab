"""
Failure taxonomy for dream submissions.
Each error knows its HTTP status and the JSON body returned to the caller.
"""
from typing import Any, Dict


class StoreConfigurationError(RuntimeError):
    """Raised when the store URL or service key is not configured."""


class SubmissionError(Exception):
    """Base class for classified submission failures."""

    status_code = 500

    def __init__(self, error: str):
        super().__init__(error)
        self.error = error

    def to_payload(self) -> Dict[str, Any]:
        return {"error": self.error}


class InvalidSubmission(SubmissionError):
    """Missing or invalid input field (400)."""

    status_code = 400


class QuotaExceeded(SubmissionError):
    """Expected business outcome: the caller has no usage left (403)."""

    status_code = 403

    def __init__(self, error: str, message: str):
        super().__init__(error)
        self.message = message

    def to_payload(self) -> Dict[str, Any]:
        return {"error": self.error, "message": self.message}


class AnonymousLimitReached(QuotaExceeded):
    """The anonymous key already used its single submission."""

    def __init__(self):
        super().__init__(
            "Free limit reached",
            "You have used your free dream interpretation. Create an account to continue."
        )


class MonthlyLimitReached(QuotaExceeded):
    """A registered user hit the monthly allowance of their plan."""

    def __init__(self, plan: str, limit: int):
        super().__init__(
            "Monthly limit reached",
            f"You have used all of this month's dream interpretations ({limit}). "
            f"Upgrade to Plus or Premium to continue."
        )
        self.plan = plan
        self.limit = limit

    def to_payload(self) -> Dict[str, Any]:
        payload = super().to_payload()
        payload["plan"] = self.plan
        payload["limit"] = self.limit
        return payload


class ServerFault(SubmissionError):
    """Server-side failure reported with the underlying message (500)."""

    status_code = 500

    def __init__(self, detail: str, error: str = "Server error"):
        super().__init__(error)
        self.detail = detail

    def to_payload(self) -> Dict[str, Any]:
        return {"error": self.error, "detail": self.detail}


class StoreOperationError(ServerFault):
    """A read or write against the store failed."""

    def __init__(self, operation: str, detail: str):
        super().__init__(detail, error=f"{operation} failed")
        self.operation = operation
