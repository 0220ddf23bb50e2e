from abc import abstractmethod
from typing import Protocol

from backoffice.domain.pos.model.sale import Sale
from backoffice.domain.shared.port import Port


class SaleRepository(Port, Protocol):
    """Record of completed sales."""

    @abstractmethod
    async def save(self, sale: Sale) -> None: ...

    @abstractmethod
    async def list_all(self) -> list[Sale]: ...
