"""Domain exceptions for the Agora community platform.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of transport concerns. Whatever outer layer
embeds the core maps them to responses using error_code (see
ERROR_KIND_STATUS).
"""

from typing import Any


class AgoraException(Exception):
    """Base exception for all Agora application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Outer layers map these to
    responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id, rule).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return a serializable representation (error, message, details)."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(AgoraException):
    """Raised when input validation fails (e.g. invalid id format or role name)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthorizationException(AgoraException):
    """Raised when a policy gate rejects the operation.

    The rule that was violated is always recorded in details["rule"] so
    rejections stay observable after the fact.
    """

    def __init__(
        self,
        rule: str,
        message: str = "Permission denied",
        **details_extra: Any,
    ) -> None:
        """Initialize with the violated rule and a message naming it.

        Args:
            rule: Machine-readable rule identifier (e.g. 'delete_requires_admin').
            message: Human-readable description of the violated rule.
            **details_extra: Optional keys merged into details (e.g. community_id).
        """
        super().__init__(
            message,
            "PERMISSION_DENIED",
            {"rule": rule, **details_extra},
        )

    @property
    def rule(self) -> str:
        return self.details["rule"]


class ResourceNotFoundException(AgoraException):
    """Raised when a referenced community, user, post or subscription is missing."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'community', 'post').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class SubscriptionConflictException(AgoraException):
    """Raised when a write would break the one-subscription-per-user-per-community rule."""

    def __init__(self, user_id: str, community_id: str) -> None:
        super().__init__(
            "already subscribed",
            "SUBSCRIPTION_CONFLICT",
            {"user_id": user_id, "community_id": community_id},
        )


class FacadeCallException(AgoraException):
    """Raised when a cross-module facade call fails for infrastructure reasons.

    Opaque to callers: it never represents a domain decision and is not
    retried by the engines.
    """

    def __init__(self, facade: str, operation: str, reason: str) -> None:
        """Initialize with the failing facade, operation, and reason.

        Args:
            facade: Facade name (e.g. 'communities').
            operation: Facade method that failed (e.g. 'is_private').
            reason: Short description of the underlying failure.
        """
        super().__init__(
            f"{facade}.{operation} failed",
            "INTERNAL_ERROR",
            {"facade": facade, "operation": operation, "reason": reason},
        )


class UnsupportedOperationException(AgoraException):
    """Raised for operations deliberately not offered (e.g. in-place role changes)."""

    def __init__(self, operation: str, message: str) -> None:
        super().__init__(message, "UNSUPPORTED_OPERATION", {"operation": operation})


class SqlNotConfiguredException(AgoraException):
    """Raised when an operation requires Postgres but the backend is not configured."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )


# Transport-neutral status per error_code for whichever outer layer embeds the core.
ERROR_KIND_STATUS: dict[str, int] = {
    "RESOURCE_NOT_FOUND": 404,
    "PERMISSION_DENIED": 403,
    "SUBSCRIPTION_CONFLICT": 409,
    "VALIDATION_ERROR": 400,
    "UNSUPPORTED_OPERATION": 501,
    "SERVICE_UNAVAILABLE": 503,
    "INTERNAL_ERROR": 500,
}
