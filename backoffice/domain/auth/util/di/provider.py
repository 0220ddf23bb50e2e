"""DI provider for auth domain."""

import logging

from dishka import from_context, provide

from backoffice.config import Config
from backoffice.domain.auth.command.session import LoginHandler, LogoutHandler
from backoffice.domain.auth.model.identity import Anonymous, Identity
from backoffice.domain.auth.model.rbac import RBACTable
from backoffice.domain.auth.model.session import SessionToken
from backoffice.domain.auth.port.session_store import SessionStore
from backoffice.domain.auth.query.get_permissions import GetActorPermissionsHandler
from backoffice.domain.auth.service.authorization import AuthorizationEvaluator
from backoffice.domain.auth.service.session import SessionService
from backoffice.util.di.base import Provider
from backoffice.util.di.scope import Scope

logger = logging.getLogger(__name__)


class AuthProvider(Provider):
    """DI provider for auth domain services and handlers."""

    token = from_context(provides=SessionToken, scope=Scope.UOW)

    # Command Handlers
    login_handler = provide(LoginHandler, scope=Scope.UOW)
    logout_handler = provide(LogoutHandler, scope=Scope.UOW)

    # Query Handlers
    get_actor_permissions_handler = provide(GetActorPermissionsHandler, scope=Scope.UOW)

    @provide(scope=Scope.APP)
    def get_authorization_evaluator(self, config: Config, rbac: RBACTable) -> AuthorizationEvaluator:
        return AuthorizationEvaluator(rbac=rbac, inherit_by_level=config.auth.inherit_by_level)

    @provide(scope=Scope.UOW)
    def get_session_service(self, session_store: SessionStore) -> SessionService:
        return SessionService(session_store=session_store)

    @provide(scope=Scope.UOW)
    async def get_identity(self, token: SessionToken, session_service: SessionService) -> Identity:
        """Resolve Identity from the session token.

        Returns Anonymous for a missing or unknown token, the session's Actor otherwise.
        """
        actor = await session_service.current(token)
        if actor is None:
            return Anonymous()
        logger.debug("Identity resolved: actor=%s role=%s", actor.id, actor.role)
        return actor
