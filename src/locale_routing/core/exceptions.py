"""Exception hierarchy for locale negotiation.

All custom exceptions inherit from AppException, which provides:
- Consistent error response format
- HTTP status codes
- Machine-readable error codes
- Optional details dict for additional context

``locale_routing.handlers.app_exception_handler`` converts these to JSON
responses. Route resolution failures are not wrapped: Starlette's
``NoMatchFound`` propagates unchanged.
"""

from typing import Any


class AppException(Exception):
    """Base exception for all locale-routing errors."""

    def __init__(
        self,
        message: str,
        error_code: str,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dict for JSON serialization."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class InvalidLocaleError(AppException):
    """Requested locale is not one of the configured available locales."""

    def __init__(self, locale: str, available: list[str] | None = None):
        details: dict[str, Any] = {"locale": locale}
        if available is not None:
            details["available_locales"] = list(available)
        super().__init__(
            f"Locale not found: {locale}",
            "LOCALE_NOT_FOUND",
            404,
            details,
        )
