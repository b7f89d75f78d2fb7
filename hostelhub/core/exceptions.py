"""
Typed errors raised by the HostelHub engines.

Services raise these instead of HTTPException so the rules stay testable
without a request; ``hostelhub.main`` maps each one to a status code.

Usage:
    from hostelhub.core.exceptions import NotFoundError

    issue = db.get(Issue, issue_id)
    if issue is None:
        raise NotFoundError("Issue not found")
"""
from typing import Any, Dict, Optional


class HostelHubError(Exception):
    """Base exception for all HostelHub errors"""

    status_code = 500

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Any] = None,
    ):
        self.message = message
        self.code = code
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.code, "message": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(HostelHubError):
    """Malformed or out-of-range input; details holds the field errors"""

    status_code = 400

    def __init__(self, message: str = "Invalid input data", details: Optional[Any] = None):
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class UnauthorizedError(HostelHubError):
    """No usable identity on the request"""

    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message, code="UNAUTHORIZED")


class ForbiddenError(HostelHubError):
    """Identity present but role or ownership is insufficient"""

    status_code = 403

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message, code="FORBIDDEN")


class NotFoundError(HostelHubError):
    status_code = 404

    def __init__(self, message: str = "Not found"):
        super().__init__(message, code="NOT_FOUND")


class ConflictError(HostelHubError):
    """A state-dependent precondition failed (double claim, reaction race)"""

    status_code = 409

    def __init__(self, message: str = "Conflict"):
        super().__init__(message, code="CONFLICT")


class ExternalServiceError(HostelHubError):
    """A third-party call (the LLM) failed or returned garbage"""

    status_code = 502

    def __init__(self, message: str = "External service failed", details: Optional[Any] = None):
        super().__init__(message, code="EXTERNAL_SERVICE_ERROR", details=details)
