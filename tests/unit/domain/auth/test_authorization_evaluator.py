"""Tests for AuthorizationEvaluator over the built-in role table."""

import pytest

from backoffice.domain.auth.model.identity import Anonymous
from backoffice.domain.auth.model.permission import Permission
from backoffice.domain.auth.model.rbac import DEFAULT_RBAC_TABLE, PERMISSIONS, ROLES, RBACTable
from backoffice.domain.auth.model.role import Role
from backoffice.domain.auth.service.authorization import AuthorizationEvaluator
from tests.unit.factories import make_actor


def _make_evaluator(inherit_by_level: bool = False) -> AuthorizationEvaluator:
    return AuthorizationEvaluator(rbac=DEFAULT_RBAC_TABLE, inherit_by_level=inherit_by_level)


class TestHasPermission:
    @pytest.mark.parametrize("role", ROLES, ids=lambda r: r.id)
    def test_grants_exactly_the_role_permission_set(self, role) -> None:
        authz = _make_evaluator()
        actor = make_actor(role.id)
        for permission in PERMISSIONS:
            assert authz.has_permission(actor, permission.id) == (permission.id in role.permissions)

    def test_viewer_cannot_delete_inventory(self) -> None:
        assert _make_evaluator().has_permission(make_actor("viewer"), "inventory.delete") is False

    def test_viewer_any_of_delete_or_view(self) -> None:
        authz = _make_evaluator()
        assert authz.has_any_permission(
            make_actor("viewer"), ["inventory.delete", "inventory.view"]
        )

    def test_unknown_role_is_denied_everything(self) -> None:
        authz = _make_evaluator()
        actor = make_actor("janitor")
        assert not any(authz.has_permission(actor, p.id) for p in PERMISSIONS)

    def test_missing_actor_is_denied(self) -> None:
        authz = _make_evaluator()
        assert authz.has_permission(None, "dashboard.view") is False
        assert authz.has_permission(Anonymous(), "dashboard.view") is False

    def test_actor_without_role_is_denied(self) -> None:
        assert _make_evaluator().has_permission(make_actor(None), "dashboard.view") is False

    def test_undefined_permission_is_denied(self) -> None:
        assert _make_evaluator().has_permission(make_actor("super_admin"), "nope.nope") is False

    def test_super_admin_has_everything(self) -> None:
        authz = _make_evaluator()
        actor = make_actor("super_admin")
        assert authz.has_all_permissions(actor, [p.id for p in PERMISSIONS])


class TestHasAllPermissions:
    def test_all_requires_every_permission(self) -> None:
        authz = _make_evaluator()
        actor = make_actor("editor")
        assert authz.has_all_permissions(actor, ["pos.view", "pos.create"])
        assert not authz.has_all_permissions(actor, ["pos.view", "pos.refund"])

    def test_any_with_no_match(self) -> None:
        authz = _make_evaluator()
        assert not authz.has_any_permission(make_actor("viewer"), ["users.delete", "pos.void"])


class TestHasRole:
    def test_exact_match(self) -> None:
        authz = _make_evaluator()
        assert authz.has_role(make_actor("manager"), "manager")

    def test_no_hierarchy_comparison(self) -> None:
        authz = _make_evaluator()
        assert not authz.has_role(make_actor("super_admin"), "viewer")

    def test_missing_actor(self) -> None:
        assert not _make_evaluator().has_role(None, "viewer")


class TestResolveRole:
    def test_known_role(self) -> None:
        role = _make_evaluator().resolve_role(make_actor("admin"))
        assert role is not None
        assert role.level == 80

    def test_unknown_role(self) -> None:
        assert _make_evaluator().resolve_role(make_actor("janitor")) is None


class TestGetPermissions:
    def test_table_order(self) -> None:
        permissions = _make_evaluator().get_permissions(make_actor("viewer"))
        assert [p.id for p in permissions] == [
            "dashboard.view",
            "inventory.view",
            "tournaments.view",
            "newsletter.view",
            "pos.view",
            "customers.view",
            "sales.view",
        ]

    def test_unresolvable_role_is_empty(self) -> None:
        assert _make_evaluator().get_permissions(make_actor("janitor")) == []


def _make_tiered_table() -> RBACTable:
    permissions = [
        Permission.define("reports.view", "View Reports"),
        Permission.define("reports.export", "Export Reports"),
        Permission.define("stock.count", "Count Stock"),
    ]
    roles = [
        Role(id="clerk", name="Clerk", level=10, permissions=frozenset({"stock.count"})),
        Role(id="lead", name="Lead", level=50, permissions=frozenset({"reports.view"})),
        Role(id="owner", name="Owner", level=90, permissions=frozenset({"reports.export"})),
    ]
    return RBACTable(permissions, roles)


class TestInheritByLevel:
    def test_built_in_table_is_nested(self) -> None:
        # Each tier already lists the permissions of the tiers below it
        explicit = _make_evaluator()
        inherited = _make_evaluator(inherit_by_level=True)
        for role in ROLES:
            actor = make_actor(role.id)
            assert explicit.get_permissions(actor) == inherited.get_permissions(actor)

    def test_off_by_default(self) -> None:
        authz = AuthorizationEvaluator(rbac=_make_tiered_table())
        assert not authz.has_permission(make_actor("owner"), "stock.count")
        assert not authz.has_permission(make_actor("lead"), "stock.count")

    def test_higher_role_gains_lower_role_permissions(self) -> None:
        authz = AuthorizationEvaluator(rbac=_make_tiered_table(), inherit_by_level=True)
        owner = make_actor("owner")
        assert authz.has_all_permissions(owner, ["reports.export", "reports.view", "stock.count"])
        assert authz.has_permission(make_actor("lead"), "stock.count")

    def test_lower_role_gains_nothing(self) -> None:
        authz = AuthorizationEvaluator(rbac=_make_tiered_table(), inherit_by_level=True)
        assert not authz.has_permission(make_actor("clerk"), "reports.view")
