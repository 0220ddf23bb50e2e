"""Provider base class and selection between in-memory and REST implementations."""

from __future__ import annotations

from typing import ClassVar, Literal

from dishka import Provider as DishkaProvider

# Components with an in-memory (mock) and a REST (production) provider
Component = Literal["repository"]


class Provider(DishkaProvider):
    """Base for backoffice providers.

    A swappable component declares ``__mock_component__`` on an abstract
    provider; each implementation subclasses it and sets ``__is_mock__``.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False


def get_provider(base: type[Provider], use_mock: bool = False) -> type[Provider]:
    """Pick the provider class to install for ``base``.

    A provider without subclasses is used as is. Otherwise the subclass whose
    ``__is_mock__`` equals ``use_mock`` is returned, so ``api.use_mock``
    switches every repository between seeded memory and the REST API.

    Raises:
        ConfigurationError: If no subclass matches
    """
    from backoffice.domain.shared.error import ConfigurationError

    implementations = base.__subclasses__()
    if not implementations:
        return base

    for impl in implementations:
        if getattr(impl, "__is_mock__", False) == use_mock:
            return impl

    kind = "in-memory" if use_mock else "REST"
    component = getattr(base, "__mock_component__", None) or base.__name__
    raise ConfigurationError(f"No {kind} implementation registered for {component}")
