"""Domain exceptions for the rostering application.

All domain errors derive from RosterException and carry a machine-readable
error_code plus optional details. The API layer maps error_code to an HTTP
status in app.core.exception_handlers.
"""

from typing import Any


class RosterException(Exception):
    """Base exception for all rostering domain errors."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with message, optional error code, and details.

        Args:
            message: Human-readable error message.
            error_code: Machine-readable code; defaults to class name.
            details: Optional extra context (e.g. field name, resource id).
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable error body."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(RosterException):
    """Malformed input (end before start, missing required field)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Validation error description.
            field: Optional name of the invalid field.
        """
        super().__init__(
            message,
            "VALIDATION_ERROR",
            {"field": field} if field else {},
        )


class AuthenticationException(RosterException):
    """Raised when credentials or a bearer token are invalid."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(RosterException):
    """Caller's tenant or role does not permit the operation."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional resource and action for context.

        Args:
            resource: Resource type (e.g. roster, staff).
            action: Action attempted (e.g. create, publish).
            message: Error message.
        """
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(RosterException):
    """Referenced resource does not exist or is outside the caller's tenant."""

    def __init__(
        self,
        resource_type: str,
        resource_id: str,
        message: str | None = None,
    ) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Kind of resource (e.g. roster, shift, staff).
            resource_id: Identifier that was not found.
            message: Optional override for the default message.
        """
        super().__init__(
            message or f"{resource_type.capitalize()} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class InvalidStateException(RosterException):
    """Operation forbidden by the resource's current lifecycle state."""

    def __init__(
        self,
        message: str,
        resource_type: str | None = None,
        resource_id: str | None = None,
    ) -> None:
        details: dict[str, Any] = {}
        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id
        super().__init__(message, "INVALID_STATE", details)


class ConflictException(RosterException):
    """Base for conflicts with existing data."""


class ShiftConflictException(ConflictException):
    """Shift overlaps another shift of the same staff member or falls outside availability."""

    OVERLAP = "overlap"
    AVAILABILITY = "availability"

    def __init__(
        self,
        message: str,
        kind: str,
        staff_id: str | None = None,
        conflicts: list[dict[str, Any]] | None = None,
    ) -> None:
        """Initialize with conflict kind and optional conflicting periods.

        Args:
            message: Human-readable message.
            kind: "overlap" or "availability".
            staff_id: Staff member the shift was proposed for.
            conflicts: Conflicting shifts (id, start_time, end_time) or batch indexes.
        """
        details: dict[str, Any] = {"kind": kind}
        if staff_id:
            details["staff_id"] = staff_id
        if conflicts:
            details["conflicts"] = conflicts
        self.kind = kind
        super().__init__(message, "SHIFT_CONFLICT", details)


class RosterOverlapException(ConflictException):
    """Live roster date range overlaps another live roster of the tenant."""

    def __init__(self, overlapping_roster_id: str) -> None:
        super().__init__(
            "Roster dates overlap with existing roster",
            "ROSTER_OVERLAP",
            {"roster_id": overlapping_roster_id},
        )


class CompanyAlreadyExistsException(ConflictException):
    """Raised when a company with the same domain already exists."""

    def __init__(self, domain: str) -> None:
        super().__init__(
            f"Company with domain '{domain}' already exists",
            "COMPANY_ALREADY_EXISTS",
            {"domain": domain},
        )


class StaffAlreadyExistsException(ConflictException):
    """Raised when a staff email is already used within the tenant."""

    def __init__(self, email: str) -> None:
        super().__init__(
            "Staff member already exists with this email",
            "STAFF_ALREADY_EXISTS",
            {"email": email},
        )


class UserAlreadyExistsException(ConflictException):
    """Raised when a user email is already used within the tenant."""

    def __init__(self, email: str) -> None:
        super().__init__(
            "User already exists with this email",
            "USER_ALREADY_EXISTS",
            {"email": email},
        )


class LimitExceededException(RosterException):
    """Company capacity limit reached (users, managers)."""

    def __init__(self, limit_name: str, limit: int) -> None:
        label = limit_name.replace("_", " ")
        super().__init__(
            f"Company has reached its {label} of {limit}",
            "LIMIT_EXCEEDED",
            {"limit_name": limit_name, "limit": limit},
        )


class SqlNotConfiguredException(RosterException):
    """Raised when a database session is requested but DATABASE_URL is not set."""

    def __init__(self) -> None:
        super().__init__(
            "SQL database not configured; set DATABASE_URL",
            "SQL_NOT_CONFIGURED",
        )
