# ==============================================================================
# CUSTOM EXCEPTIONS - Catalog Error Hierarchy
# ==============================================================================
# Every error carries its HTTP status and a machine-readable code
# Serialized by the handlers in ``catalog_api.main``
# ==============================================================================

from __future__ import annotations

from typing import Any, Dict, Optional


class AppException(Exception):
    """
    Base exception for all catalog errors.

    Subclasses set ``error_code`` and ``status_code`` as class attributes;
    instances only carry the message and optional details.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable error identifier
        status_code: HTTP status code to return
        details: Additional context dictionary

    Example:
        >>> raise NotFoundError("Product with ID 7 not found", "Product", 7)
    """

    error_code: str = "INTERNAL_ERROR"
    status_code: int = 500
    default_message: str = "An unexpected error occurred"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Response body: ``{"success": False, "error": {...}}``."""
        return {
            "success": False,
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            },
        }

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"status_code={self.status_code})"
        )


# ==============================================================================
# DATABASE EXCEPTIONS
# ==============================================================================

class DatabaseError(AppException):
    """
    The database cannot be reached or initialized.

    Query failures raised by the driver are not wrapped.
    """

    error_code = "DATABASE_ERROR"
    status_code = 503
    default_message = "Database operation failed"


# ==============================================================================
# RESOURCE EXCEPTIONS
# ==============================================================================

class NotFoundError(AppException):
    """
    A product, category or component row does not exist.

    Attributes:
        resource_type: Kind of resource, e.g. ``"Product"``
        resource_id: Requested identifier
    """

    error_code = "NOT_FOUND"
    status_code = 404
    default_message = "Resource not found"

    def __init__(
        self,
        message: Optional[str] = None,
        resource_type: Optional[str] = None,
        resource_id: Optional[Any] = None,
    ) -> None:
        details: Dict[str, Any] = {}
        if resource_type:
            details["resource_type"] = resource_type
        if resource_id is not None:
            details["resource_id"] = str(resource_id)
        super().__init__(message, details)
        self.resource_type = resource_type
        self.resource_id = resource_id


class AlreadyExistsError(AppException):
    """A unique catalog field (SKU, slug) is already taken."""

    error_code = "ALREADY_EXISTS"
    status_code = 409
    default_message = "Resource already exists"

    def __init__(
        self,
        message: Optional[str] = None,
        resource_type: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = dict(details or {})
        if resource_type:
            details["resource_type"] = resource_type
        super().__init__(message, details)


# ==============================================================================
# REQUEST EXCEPTIONS
# ==============================================================================

class ValidationError(AppException):
    """
    Caller input failed validation.

    Raised for malformed ``include`` parameters: forbidden characters,
    too many relations, bad path syntax or too deep nesting. The
    offending input is reported under ``details.validation_errors``.
    """

    error_code = "VALIDATION_ERROR"
    status_code = 400
    default_message = "Validation error"

    def __init__(
        self,
        message: Optional[str] = None,
        errors: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.errors = errors or {}
        super().__init__(message, {"validation_errors": self.errors})


class BadRequestError(AppException):
    error_code = "BAD_REQUEST"
    status_code = 400
    default_message = "Bad request"
