"""
Base domain exceptions.
"""

from typing import Any, Optional


class EditeurException(Exception):
    """Base exception for all Editeur domain errors."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class MalformedInputError(EditeurException):
    """Raised when a request field fails validation before any external call."""

    def __init__(self, field: str, reason: str):
        message = f"Invalid {field}: {reason}"
        super().__init__(
            message,
            code="MALFORMED_INPUT",
            details={"field": field, "reason": reason},
        )
        self.field = field
        self.reason = reason
