"""Base for backoffice domain services (checkout, sessions, catalog, reports)."""

from dataclasses import dataclass
from typing import dataclass_transform


@dataclass_transform()
class _ServiceMeta(type):
    """Turns every Service subclass into a dataclass, so dishka can build it from its fields."""

    def __new__(mcs, name: str, bases: tuple, namespace: dict):
        cls = super().__new__(mcs, name, bases, namespace)
        if not any(isinstance(b, mcs) for b in bases):
            return cls
        return dataclass(cls)


class Service(metaclass=_ServiceMeta):
    """A domain service: ports and settings as fields, behavior as async methods.

    Example::

        class CheckoutService(Service):
            item_repo: ItemRepository
            tax_rate: Decimal = DEFAULT_TAX_RATE
    """
