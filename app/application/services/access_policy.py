"""Access policy: the single allow/deny rule for (role, action, resource tenant, caller tenant).

Actions are permission tokens of the form "resource:action" (e.g. roster:publish).
A role grants an action through an exact token, "resource:*", or "*:*".
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from app.domain.enums import RoleName

# Seeded per tenant; stored on the role row and editable only by migrations/seeds.
DEFAULT_ROLE_PERMISSIONS: dict[str, tuple[str, ...]] = {
    RoleName.ADMIN.value: ("*:*",),
    RoleName.OWNER.value: (
        "company:read",
        "company:update",
        "user:*",
        "staff:*",
        "roster:*",
        "shift:*",
        "analytics:read",
        "notification:*",
        "location:*",
    ),
    RoleName.MANAGER.value: (
        "company:read",
        "user:read",
        "user:create",
        "staff:read",
        "staff:create",
        "staff:update",
        "roster:*",
        "shift:*",
        "analytics:read",
        "notification:*",
        "location:read",
        "location:create",
        "location:update",
        "location:assign",
        "location:stats",
    ),
    RoleName.STAFF.value: (
        "company:read",
        "staff:read",
        "roster:read",
        "notification:*",
        "location:read",
    ),
}

# Actions reserved for the admin role of the platform operator's tenant.
PLATFORM_ACTIONS: frozenset[str] = frozenset(
    {
        "company:create",
        "company:list",
        "company:deactivate",
        "company:manage_users",
    }
)

CROSS_TENANT_DENIED = "Access denied: User does not belong to this company"


@dataclass(frozen=True)
class PolicyDecision:
    """Outcome of a policy evaluation. Truthy when allowed."""

    allowed: bool
    reason: str = ""

    def __bool__(self) -> bool:
        return self.allowed


def permission_grants(permissions: Iterable[str], action: str) -> bool:
    """Return True if permissions contain action, "resource:*" or "*:*"."""
    granted = set(permissions)
    if action in granted or "*:*" in granted:
        return True
    resource, _, _ = action.partition(":")
    return f"{resource}:*" in granted


class AccessPolicy:
    """Centralized authorization rule consumed by every service and endpoint.

    Cross-tenant access is always denied, except for the admin role of the
    platform operator's tenant (identified by platform_tenant_id).
    """

    def __init__(
        self,
        platform_tenant_id: str | None = None,
        role_permissions: Mapping[str, Iterable[str]] | None = None,
    ) -> None:
        self.platform_tenant_id = platform_tenant_id
        source = role_permissions if role_permissions is not None else DEFAULT_ROLE_PERMISSIONS
        self.role_permissions = {name: frozenset(tokens) for name, tokens in source.items()}

    def is_platform_admin(self, role: str, caller_tenant_id: str) -> bool:
        return (
            role == RoleName.ADMIN.value
            and self.platform_tenant_id is not None
            and caller_tenant_id == self.platform_tenant_id
        )

    def check_tenant(
        self, role: str, resource_tenant_id: str, caller_tenant_id: str
    ) -> PolicyDecision:
        """Allow same-tenant access, or any tenant for the platform admin."""
        if resource_tenant_id == caller_tenant_id:
            return PolicyDecision(True)
        if self.is_platform_admin(role, caller_tenant_id):
            return PolicyDecision(True)
        return PolicyDecision(False, CROSS_TENANT_DENIED)

    def evaluate(
        self,
        role: str,
        action: str,
        resource_tenant_id: str,
        caller_tenant_id: str,
        permissions: Iterable[str] | None = None,
    ) -> PolicyDecision:
        """Decide whether role may perform action on a resource of resource_tenant_id.

        Args:
            role: Caller's role name.
            action: Permission token "resource:action".
            resource_tenant_id: Tenant owning the target resource.
            caller_tenant_id: Tenant of the authenticated caller.
            permissions: Role's stored tokens; defaults to the seeded set for role.

        Returns:
            PolicyDecision with a human-readable reason when denied.
        """
        tenant_decision = self.check_tenant(role, resource_tenant_id, caller_tenant_id)
        if not tenant_decision:
            return tenant_decision
        if action in PLATFORM_ACTIONS and not self.is_platform_admin(role, caller_tenant_id):
            return PolicyDecision(False, "Platform administrator access required")
        tokens = (
            permissions
            if permissions is not None
            else self.role_permissions.get(role, frozenset())
        )
        if not permission_grants(tokens, action):
            return PolicyDecision(
                False, f"Insufficient permissions: {action} is not granted to role {role}"
            )
        return PolicyDecision(True)

    def evaluate_roles(
        self,
        role: str,
        allowed_roles: Iterable[str],
        resource_tenant_id: str,
        caller_tenant_id: str,
    ) -> PolicyDecision:
        """Decide by explicit role allow-list instead of permission tokens."""
        tenant_decision = self.check_tenant(role, resource_tenant_id, caller_tenant_id)
        if not tenant_decision:
            return tenant_decision
        allowed = list(allowed_roles)
        if role not in allowed:
            return PolicyDecision(
                False, f"Insufficient permissions: {', '.join(allowed)} access required"
            )
        return PolicyDecision(True)
