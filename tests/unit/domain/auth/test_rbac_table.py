import pytest
from pydantic import ValidationError as PydanticValidationError

from backoffice.domain.auth.model.permission import Permission
from backoffice.domain.auth.model.rbac import DEFAULT_RBAC_TABLE, RBACTable
from backoffice.domain.auth.model.role import Role
from backoffice.domain.shared.error import ConfigurationError


def _make_role(role_id: str = "clerk", level: int = 10, *permissions: str) -> Role:
    return Role(id=role_id, name=role_id.title(), level=level, permissions=frozenset(permissions))


class TestPermission:
    def test_define_derives_resource_and_action(self) -> None:
        p = Permission.define("inventory.delete", "Delete Inventory")
        assert (p.resource, p.action) == ("inventory", "delete")

    def test_id_must_match_parts(self) -> None:
        with pytest.raises(PydanticValidationError):
            Permission(id="inventory.delete", name="x", resource="inventory", action="view")

    def test_id_must_be_resource_dot_action(self) -> None:
        with pytest.raises(PydanticValidationError):
            Permission.define("inventory", "Inventory")


class TestBuiltInTable:
    def test_five_tiers_by_level(self) -> None:
        assert [(r.id, r.level) for r in DEFAULT_RBAC_TABLE.roles_by_level()] == [
            ("super_admin", 100),
            ("admin", 80),
            ("manager", 60),
            ("editor", 40),
            ("viewer", 20),
        ]

    def test_super_admin_grants_every_permission(self) -> None:
        super_admin = DEFAULT_RBAC_TABLE.role("super_admin")
        assert super_admin is not None
        assert super_admin.permissions == {p.id for p in DEFAULT_RBAC_TABLE.permissions}

    def test_admin_lacks_system_logs(self) -> None:
        admin = DEFAULT_RBAC_TABLE.role("admin")
        assert admin is not None
        assert not admin.grants("system.logs")
        assert admin.grants("system.settings")

    def test_lookup_helpers(self) -> None:
        assert DEFAULT_RBAC_TABLE.role(None) is None
        assert DEFAULT_RBAC_TABLE.role("janitor") is None
        assert DEFAULT_RBAC_TABLE.permission("pos.void") is not None
        assert DEFAULT_RBAC_TABLE.effective_permissions("janitor") == frozenset()
        assert len(DEFAULT_RBAC_TABLE) == 5


class TestTableValidation:
    def test_duplicate_permission(self) -> None:
        p = Permission.define("stock.count", "Count")
        with pytest.raises(ConfigurationError, match="Duplicate permission"):
            RBACTable([p, p], [])

    def test_duplicate_role(self) -> None:
        with pytest.raises(ConfigurationError, match="Duplicate role"):
            RBACTable([], [_make_role(), _make_role()])

    def test_undefined_permission_reference(self) -> None:
        with pytest.raises(ConfigurationError, match="undefined permissions"):
            RBACTable([], [_make_role("clerk", 10, "stock.count")])
