"""Authorization evaluator: allow/deny decisions over the RBAC table."""

import logging
from collections.abc import Iterable

from backoffice.domain.auth.model.actor import Actor
from backoffice.domain.auth.model.identity import Identity
from backoffice.domain.auth.model.permission import Permission
from backoffice.domain.auth.model.rbac import RBACTable
from backoffice.domain.auth.model.role import Role
from backoffice.domain.shared.service import Service

logger = logging.getLogger(__name__)


class AuthorizationEvaluator(Service):
    """Answers "may this actor do X?" from a static role/permission table.

    Every check fails closed: a missing or anonymous identity, an actor
    without a role, or a role absent from the table is denied. Denials are
    ordinary outcomes, reported as ``False`` and never raised.

    With ``inherit_by_level`` a role also grants every permission of each
    role with a strictly lower level. Off by default, so a role's permission
    set is exactly what the table lists.
    """

    rbac: RBACTable
    inherit_by_level: bool = False

    def resolve_role(self, actor: Identity | None) -> Role | None:
        """Look up the actor's role, or None if it cannot be resolved."""
        if not isinstance(actor, Actor) or not actor.role:
            return None
        return self.rbac.role(actor.role)

    def has_permission(self, actor: Identity | None, permission_id: str) -> bool:
        role = self.resolve_role(actor)
        if role is None:
            logger.debug("Permission denied: unresolved role, permission=%s", permission_id)
            return False
        granted = permission_id in self.rbac.effective_permissions(role.id, self.inherit_by_level)
        if not granted:
            logger.debug("Permission denied: role=%s permission=%s", role.id, permission_id)
        return granted

    def has_role(self, actor: Identity | None, role_id: str) -> bool:
        """Exact match on the role identifier; no hierarchy comparison."""
        return isinstance(actor, Actor) and actor.role == role_id

    def has_any_permission(self, actor: Identity | None, permission_ids: Iterable[str]) -> bool:
        return any(self.has_permission(actor, p) for p in permission_ids)

    def has_all_permissions(self, actor: Identity | None, permission_ids: Iterable[str]) -> bool:
        return all(self.has_permission(actor, p) for p in permission_ids)

    def get_permissions(self, actor: Identity | None) -> list[Permission]:
        """Permission records granted to the actor, in table order."""
        role = self.resolve_role(actor)
        if role is None:
            return []
        granted = self.rbac.effective_permissions(role.id, self.inherit_by_level)
        return [p for p in self.rbac.permissions if p.id in granted]
