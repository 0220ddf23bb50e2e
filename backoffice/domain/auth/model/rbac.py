"""RBACTable: the role/permission table and the built-in default.

Contains the RBACTable container and the DEFAULT_RBAC_TABLE constant, the
single source of truth for "which role may do what" unless a YAML table is
configured.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from backoffice.domain.auth.model.permission import Permission
from backoffice.domain.auth.model.role import Role
from backoffice.domain.shared.error import ConfigurationError

logger = logging.getLogger(__name__)


class RBACTable:
    """Immutable permission and role table, loaded once at process start.

    Construction validates the table: ids are unique and every permission a
    role grants is defined. Effective permission sets are precomputed for
    both the explicit and the level-inheritance interpretation.
    """

    def __init__(self, permissions: Iterable[Permission], roles: Iterable[Role]) -> None:
        self._permissions: tuple[Permission, ...] = tuple(permissions)
        self._roles: tuple[Role, ...] = tuple(roles)

        self._permissions_by_id: dict[str, Permission] = {}
        for permission in self._permissions:
            if permission.id in self._permissions_by_id:
                raise ConfigurationError(f"Duplicate permission id: {permission.id}")
            self._permissions_by_id[permission.id] = permission

        self._roles_by_id: dict[str, Role] = {}
        for role in self._roles:
            if role.id in self._roles_by_id:
                raise ConfigurationError(f"Duplicate role id: {role.id}")
            undefined = role.permissions - self._permissions_by_id.keys()
            if undefined:
                raise ConfigurationError(
                    f"Role {role.id} grants undefined permissions: {sorted(undefined)}"
                )
            self._roles_by_id[role.id] = role

        self._inherited: dict[str, frozenset[str]] = {
            role.id: role.permissions.union(
                *(lower.permissions for lower in self._roles if lower.level < role.level)
            )
            for role in self._roles
        }

    @property
    def permissions(self) -> tuple[Permission, ...]:
        return self._permissions

    @property
    def roles(self) -> tuple[Role, ...]:
        return self._roles

    def roles_by_level(self) -> list[Role]:
        """Roles sorted from most to least privileged."""
        return sorted(self._roles, key=lambda r: r.level, reverse=True)

    def role(self, role_id: str | None) -> Role | None:
        if role_id is None:
            return None
        return self._roles_by_id.get(role_id)

    def permission(self, permission_id: str) -> Permission | None:
        return self._permissions_by_id.get(permission_id)

    def effective_permissions(self, role_id: str, inherit_by_level: bool = False) -> frozenset[str]:
        """Permission ids a role grants; empty for an unknown role."""
        role = self._roles_by_id.get(role_id)
        if role is None:
            return frozenset()
        if inherit_by_level:
            return self._inherited[role_id]
        return role.permissions

    def __len__(self) -> int:
        return len(self._roles)

    def __repr__(self) -> str:
        return f"RBACTable(permissions={len(self._permissions)}, roles={[r.id for r in self._roles]})"


# =============================================================================
# Built-in table
# =============================================================================

PERMISSIONS: tuple[Permission, ...] = (
    # Dashboard
    Permission.define("dashboard.view", "View Dashboard", "Access dashboard"),
    # Inventory
    Permission.define("inventory.view", "View Inventory", "View inventory items"),
    Permission.define("inventory.create", "Create Inventory", "Create new inventory items"),
    Permission.define("inventory.edit", "Edit Inventory", "Edit existing inventory items"),
    Permission.define("inventory.delete", "Delete Inventory", "Delete inventory items"),
    # Users
    Permission.define("users.view", "View Users", "View user list"),
    Permission.define("users.create", "Create Users", "Create new users"),
    Permission.define("users.edit", "Edit Users", "Edit user information"),
    Permission.define("users.delete", "Delete Users", "Delete users"),
    Permission.define("users.manage_roles", "Manage User Roles", "Assign and manage user roles"),
    # Tournaments
    Permission.define("tournaments.view", "View Tournaments", "View tournament list"),
    Permission.define("tournaments.create", "Create Tournaments", "Create new tournaments"),
    Permission.define("tournaments.edit", "Edit Tournaments", "Edit tournament details"),
    Permission.define("tournaments.delete", "Delete Tournaments", "Delete tournaments"),
    Permission.define(
        "tournaments.manage_participants",
        "Manage Participants",
        "Manage tournament participants",
    ),
    # Newsletter
    Permission.define("newsletter.view", "View Newsletter", "View newsletter campaigns"),
    Permission.define("newsletter.create", "Create Newsletter", "Create newsletter campaigns"),
    Permission.define("newsletter.send", "Send Newsletter", "Send newsletter campaigns"),
    # Point of sale
    Permission.define("pos.view", "View POS", "Access point of sale terminal"),
    Permission.define("pos.create", "Create Sales", "Create new sales transactions"),
    Permission.define("pos.refund", "Process Refunds", "Process refunds and returns"),
    Permission.define("pos.reports", "View POS Reports", "Access sales reports and analytics"),
    Permission.define("pos.void", "Void Transactions", "Void transactions"),
    # Customers
    Permission.define("customers.view", "View Customers", "View customer information"),
    Permission.define("customers.create", "Create Customers", "Add new customers"),
    Permission.define("customers.edit", "Edit Customers", "Edit customer information"),
    Permission.define("customers.delete", "Delete Customers", "Delete customer records"),
    # Sales management
    Permission.define("sales.view", "View Sales", "View sales transactions and history"),
    Permission.define("sales.refund", "Process Refunds", "Process refunds and returns for sales"),
    Permission.define("sales.void", "Void Sales", "Void sales transactions"),
    Permission.define("sales.export", "Export Sales", "Export sales data and reports"),
    # System
    Permission.define("system.settings", "System Settings", "Access system settings"),
    Permission.define("system.logs", "View Logs", "Access system logs"),
)

ROLES: tuple[Role, ...] = (
    Role(
        id="super_admin",
        name="Super Admin",
        description="Full system access",
        level=100,
        permissions=frozenset(p.id for p in PERMISSIONS),
    ),
    Role(
        id="admin",
        name="Admin",
        description="Administrative access",
        level=80,
        permissions=frozenset(
            {
                "dashboard.view",
                "inventory.view", "inventory.create", "inventory.edit", "inventory.delete",
                "users.view", "users.create", "users.edit",
                "tournaments.view", "tournaments.create", "tournaments.edit",
                "tournaments.delete", "tournaments.manage_participants",
                "newsletter.view", "newsletter.create", "newsletter.send",
                "pos.view", "pos.create", "pos.refund", "pos.reports", "pos.void",
                "customers.view", "customers.create", "customers.edit", "customers.delete",
                "sales.view", "sales.refund", "sales.void", "sales.export",
                "system.settings",
            }
        ),
    ),
    Role(
        id="manager",
        name="Manager",
        description="Management access",
        level=60,
        permissions=frozenset(
            {
                "dashboard.view",
                "inventory.view", "inventory.create", "inventory.edit",
                "users.view",
                "tournaments.view", "tournaments.create", "tournaments.edit",
                "tournaments.manage_participants",
                "newsletter.view", "newsletter.create", "newsletter.send",
                "pos.view", "pos.create", "pos.refund", "pos.reports",
                "customers.view", "customers.create", "customers.edit",
                "sales.view", "sales.refund", "sales.export",
            }
        ),
    ),
    Role(
        id="editor",
        name="Editor",
        description="Content editing access",
        level=40,
        permissions=frozenset(
            {
                "dashboard.view",
                "inventory.view", "inventory.create", "inventory.edit",
                "tournaments.view", "tournaments.create", "tournaments.edit",
                "newsletter.view", "newsletter.create",
                "pos.view", "pos.create",
                "customers.view", "customers.create",
                "sales.view",
            }
        ),
    ),
    Role(
        id="viewer",
        name="Viewer",
        description="Read-only access",
        level=20,
        permissions=frozenset(
            {
                "dashboard.view",
                "inventory.view",
                "tournaments.view",
                "newsletter.view",
                "pos.view",
                "customers.view",
                "sales.view",
            }
        ),
    ),
)

DEFAULT_RBAC_TABLE = RBACTable(PERMISSIONS, ROLES)
