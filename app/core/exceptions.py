"""
Exceptions raised by the Jobly data layer.

Each error carries the HTTP status it corresponds to, so a transport
placed in front of the data layer can translate it without a lookup table.
"""

from typing import Optional


class JoblyError(Exception):
    """Base exception for all Jobly errors."""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None, details: Optional[dict] = None):
        """
        Args:
            message: Human-readable error message
            status_code: Overrides the class default status
            details: Optional dictionary with additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        """Error body in the shape the API returns: {"error": {...}}"""
        body = {"message": self.message, "status": self.status_code}
        if self.details:
            body["details"] = self.details
        return {"error": body}


class BadRequestError(JoblyError):
    """Caller supplied empty, malformed, or conflicting input."""

    status_code = 400


class NotFoundError(JoblyError):
    """A requested company or job does not exist."""

    status_code = 404
