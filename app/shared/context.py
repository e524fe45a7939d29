"""Request context management using contextvars.

Async-safe storage for request-scoped values used by logging: the request ID
(set by RequestIDMiddleware) and the authenticated caller (set by the auth
dependency).

Usage:
    set_request_id("abc123")
    set_current_user(user_id="user123", tenant_id="tenant456")
    snapshot = get_request_context()
"""

from contextvars import ContextVar
from dataclasses import dataclass

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)
_current_user_id: ContextVar[str | None] = ContextVar("current_user_id", default=None)
_current_tenant_id: ContextVar[str | None] = ContextVar(
    "current_tenant_id", default=None
)


@dataclass(frozen=True)
class RequestContext:
    """Immutable snapshot of the current request context."""

    request_id: str | None
    user_id: str | None
    tenant_id: str | None


def set_request_id(request_id: str | None) -> None:
    _request_id.set(request_id)


def get_request_id() -> str | None:
    return _request_id.get()


def set_current_user(user_id: str, tenant_id: str) -> None:
    """Record the authenticated caller for this request.

    Raises:
        ValueError: If user_id or tenant_id is empty.
    """
    if not user_id or not tenant_id:
        raise ValueError("user_id and tenant_id are required")
    _current_user_id.set(user_id)
    _current_tenant_id.set(tenant_id)


def clear_request_context() -> None:
    """Reset all request-scoped values."""
    _request_id.set(None)
    _current_user_id.set(None)
    _current_tenant_id.set(None)


def get_request_context() -> RequestContext:
    """Return a snapshot of the current request context."""
    return RequestContext(
        request_id=_request_id.get(),
        user_id=_current_user_id.get(),
        tenant_id=_current_tenant_id.get(),
    )
