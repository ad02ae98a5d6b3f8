"""Domain error classes.

Protocol-agnostic errors raised by the filter/pagination core.
The HTTP entrypoint translates them to status codes and JSON bodies.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain errors.

    Carries a machine-readable error code, a human-readable message and
    arbitrary context that protocol adapters may surface to the caller.
    """

    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, **context: Any) -> None:
        """Create a domain error.

        Args:
            message: Human-readable error message
            **context: Additional context (e.g. page number, upstream status)
        """
        self.message = message
        self.context = context
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to structured format for protocol translation."""
        return {
            "message": self.message,
            "code": self.error_code,
            **self.context,
        }


class ValidationError(DomainError):
    """Business rule validation error.

    Examples:
        - min_price > max_price
        - min_rating > max_rating
        - Price bound that is not a Decimal

    Protocol mappings:
        - REST: 422 Unprocessable Entity
    """

    error_code: str = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str | None = None,
        errors: list[dict[str, str]] | None = None,
        **context: Any,
    ) -> None:
        """Create a validation error.

        Args:
            message: Overall validation error message (optional if errors provided)
            errors: List of field-specific errors, each with 'field' and 'message'
                   Example: [{"field": "min_price", "message": "Must be <= max_price"}]
            **context: Additional context
        """
        self.errors: list[dict[str, str]] | None
        if errors:
            self.errors = errors
            msg = message or "Validation failed"
        else:
            self.errors = None
            msg = message or "Validation error"

        super().__init__(msg, **context)

    def to_dict(self) -> dict[str, Any]:
        if self.errors:
            return {
                "message": self.message,
                "code": self.error_code,
                "errors": self.errors,
                **self.context,
            }
        return super().to_dict()


class FetchError(DomainError):
    """Upstream catalog could not be read.

    Raised when the catalog service is unreachable, answers with a non-success
    status, or returns a body that cannot be decoded into a catalog page.
    Never retried by the core: the caller retries the same request with the
    continuation state it already holds.

    Protocol mappings:
        - REST: 502 Bad Gateway
    """

    error_code: str = "UPSTREAM_ERROR"

    def __init__(self, message: str, page_number: int | None = None, **context: Any) -> None:
        super().__init__(message, page_number=page_number, **context)


class MalformedStateError(DomainError):
    """Caller-supplied continuation state cannot be resumed from.

    Raised for unknown versions, marker sequences with gaps, or markers
    recorded under a different page size. The pagination engine recovers
    by restarting from output page 1, so this never reaches the caller.
    """

    error_code: str = "MALFORMED_STATE"
