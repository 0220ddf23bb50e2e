"""Query: permissions of the current actor (drives navigation visibility)."""

from backoffice.domain.auth.model.actor import Actor
from backoffice.domain.auth.model.identity import Identity
from backoffice.domain.auth.model.permission import Permission
from backoffice.domain.auth.service.authorization import AuthorizationEvaluator
from backoffice.domain.shared.authorization.gate import public
from backoffice.domain.shared.query import Query, QueryHandler, Result


class GetActorPermissions(Query):
    pass


class ActorPermissions(Result):
    authenticated: bool
    role: str | None
    permissions: list[Permission]


class GetActorPermissionsHandler(QueryHandler[GetActorPermissions, ActorPermissions]):
    __auth__ = public()
    identity: Identity
    authz: AuthorizationEvaluator

    async def run(self, query: GetActorPermissions) -> ActorPermissions:
        role = self.authz.resolve_role(self.identity)
        return ActorPermissions(
            authenticated=isinstance(self.identity, Actor),
            role=role.id if role else None,
            permissions=self.authz.get_permissions(self.identity),
        )
