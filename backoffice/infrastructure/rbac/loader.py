"""Load an RBAC table from a YAML file.

Expected layout::

    permissions:
      - id: inventory.view
        name: View Inventory
        description: View inventory items
    roles:
      - id: viewer
        name: Viewer
        level: 20
        permissions: [inventory.view]
      - id: super_admin
        name: Super Admin
        level: 100
        permissions: "*"   # every permission in the file

Resource and action are derived from each permission id.
"""

import logging
from pathlib import Path
from typing import Any

import yaml

from backoffice.domain.auth.model.permission import Permission
from backoffice.domain.auth.model.rbac import DEFAULT_RBAC_TABLE, RBACTable
from backoffice.domain.auth.model.role import Role
from backoffice.domain.shared.error import ConfigurationError

logger = logging.getLogger(__name__)

ALL_PERMISSIONS = "*"


def _parse_permission(raw: dict[str, Any]) -> Permission:
    permission_id = str(raw["id"])
    return Permission.define(
        permission_id,
        name=str(raw.get("name", permission_id)),
        description=str(raw.get("description", "")),
    )


def _parse_role(raw: dict[str, Any], all_ids: frozenset[str]) -> Role:
    granted = raw.get("permissions") or []
    if granted == ALL_PERMISSIONS or granted == [ALL_PERMISSIONS]:
        permissions = all_ids
    else:
        permissions = frozenset(str(p) for p in granted)
    return Role(
        id=str(raw["id"]),
        name=str(raw.get("name", raw["id"])),
        description=str(raw.get("description", "")),
        level=int(raw["level"]),
        permissions=permissions,
    )


def parse_rbac_table(data: dict[str, Any]) -> RBACTable:
    """Build a validated RBACTable from already-parsed YAML data."""
    if not isinstance(data, dict):
        raise ConfigurationError("RBAC table must be a mapping with 'permissions' and 'roles'")
    try:
        permissions = [_parse_permission(p) for p in data.get("permissions") or []]
        all_ids = frozenset(p.id for p in permissions)
        roles = [_parse_role(r, all_ids) for r in data.get("roles") or []]
    except (KeyError, TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid RBAC table: {e}") from e
    return RBACTable(permissions, roles)


def load_rbac_table(path: str | Path) -> RBACTable:
    """Read and validate the RBAC table at ``path``.

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid
    """
    path = Path(path).expanduser()
    if not path.exists():
        raise ConfigurationError(f"RBAC file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ConfigurationError(f"RBAC file is not valid YAML: {path}: {e}") from e

    table = parse_rbac_table(data or {})
    logger.info("Loaded RBAC table from %s: %r", path, table)
    return table


def resolve_rbac_table(rbac_file: str | None) -> RBACTable:
    """The configured table, or the built-in one when no file is set."""
    if rbac_file:
        return load_rbac_table(rbac_file)
    logger.debug("Using built-in RBAC table: %r", DEFAULT_RBAC_TABLE)
    return DEFAULT_RBAC_TABLE
