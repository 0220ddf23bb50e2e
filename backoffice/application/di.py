import logging

from dishka import AsyncContainer, from_context, make_async_container

from backoffice.config import Config
from backoffice.domain.auth.model.rbac import RBACTable
from backoffice.domain.auth.model.session import SessionToken
from backoffice.domain.auth.util.di import AuthProvider
from backoffice.domain.catalog.util.di import CatalogProvider
from backoffice.domain.pos.util.di import PosProvider
from backoffice.domain.report.util.di import ReportProvider
from backoffice.domain.shared.authorization.startup import validate_all_handlers
from backoffice.infrastructure.di import RepositoryProvider
from backoffice.infrastructure.http.di import HttpRepositoryProvider  # noqa: F401  # registers subclass
from backoffice.infrastructure.memory.di import (  # noqa: F401  # registers subclass
    InMemoryRepositoryProvider,
    SessionStateProvider,
)
from backoffice.infrastructure.rbac.loader import resolve_rbac_table
from backoffice.util.di.base import Provider, get_provider
from backoffice.util.di.scope import Scope

logger = logging.getLogger(__name__)


class ContextProvider(Provider):
    config = from_context(provides=Config, scope=Scope.APP)
    rbac = from_context(provides=RBACTable, scope=Scope.APP)


def create_container(config: Config | None = None) -> AsyncContainer:
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    # Loaded once per process; immutable afterwards
    rbac = resolve_rbac_table(config.auth.rbac_file)

    # Fail fast on handlers without a gate or gates naming unknown permissions
    validate_all_handlers(known_permissions={p.id for p in rbac.permissions})

    repository_provider = get_provider(RepositoryProvider, use_mock=config.api.use_mock)
    logger.info("Repository provider: %s", repository_provider.__name__)

    return make_async_container(
        ContextProvider(),
        repository_provider(),
        SessionStateProvider(),
        AuthProvider(),
        CatalogProvider(),
        PosProvider(),
        ReportProvider(),
        context={Config: config, RBACTable: rbac},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )


def uow_context(token: str | None = None) -> dict:
    """Context for entering a unit of work on behalf of a session token.

    Usage::

        async with container(scope=Scope.UOW, context=uow_context(token)) as uow:
            handler = await uow.get(AddToCartHandler)
    """
    return {SessionToken: SessionToken(token or "")}
