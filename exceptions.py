"""
Custom exception hierarchy for the equipment rental storefront backend.

All application errors inherit from StorefrontError so route handlers and the
global exception handler can turn them into consistent JSON responses.

Exception Hierarchy:
    StorefrontError (base)
    ├── ValidationError
    ├── ConfigurationError
    ├── ResourceNotFoundError
    └── ExternalServiceError
        └── InventoryIndexError

Usage:
    from exceptions import ValidationError, ResourceNotFoundError

    raise ValidationError("Search criteria is required in request body")
    raise ResourceNotFoundError("No machine found", detail={"cat_class": "X"})
"""

from typing import Optional, Dict, Any


class StorefrontError(Exception):
    """
    Base exception for all storefront application errors.

    Attributes:
        message: Human-readable error message
        detail: Optional dict with additional error context
        status_code: Suggested HTTP status code (for API errors)
    """

    def __init__(
        self,
        message: str,
        *,
        detail: Optional[Dict[str, Any]] = None,
        status_code: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.detail = detail
        self.status_code = status_code

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a dictionary for JSON serialization."""
        result: Dict[str, Any] = {
            "error": self.message,
            "type": self.__class__.__name__,
        }
        if self.detail:
            result["detail"] = self.detail
        return result


class ValidationError(StorefrontError):
    """
    Raised when request input is missing or malformed.

    Examples:
        raise ValidationError("Search criteria is required in request body")
    """

    def __init__(self, message: str, *, detail: Optional[Dict[str, Any]] = None):
        super().__init__(message, detail=detail, status_code=400)


class ConfigurationError(StorefrontError):
    """
    Raised when a required setting (e.g. the inventory API key) is absent.

    The public message is intentionally generic.
    """

    def __init__(self, message: str = "Service not configured", *, detail: Optional[Dict[str, Any]] = None):
        super().__init__(message, detail=detail, status_code=500)


class ResourceNotFoundError(StorefrontError):
    """
    Raised when a requested machine or page does not exist.

    Examples:
        raise ResourceNotFoundError("No machine found matching criteria")
        raise ResourceNotFoundError("Page not found", detail={"path": "foo/bar"})
    """

    def __init__(self, message: str, *, detail: Optional[Dict[str, Any]] = None):
        super().__init__(message, detail=detail, status_code=404)


class ExternalServiceError(StorefrontError):
    """Base exception for external service failures."""

    def __init__(
        self,
        message: str,
        *,
        detail: Optional[Dict[str, Any]] = None,
        service_name: Optional[str] = None,
    ):
        if service_name and detail is None:
            detail = {"service": service_name}
        elif service_name and detail:
            detail["service"] = service_name

        super().__init__(message, detail=detail, status_code=502)


class InventoryIndexError(ExternalServiceError):
    """
    Raised when the hosted inventory search index fails.

    Examples:
        raise InventoryIndexError("Search failed with status 503", status=503)
    """

    def __init__(
        self,
        message: str,
        *,
        detail: Optional[Dict[str, Any]] = None,
        status: Optional[int] = None,
    ):
        if status is not None:
            detail = dict(detail or {})
            detail["status"] = status

        super().__init__(message, detail=detail, service_name="inventory_index")
        self.status = status
