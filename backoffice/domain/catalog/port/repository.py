from abc import abstractmethod
from typing import Protocol

from backoffice.domain.catalog.model.item import Item
from backoffice.domain.shared.port import Port


class ItemRepository(Port, Protocol):
    """Read/write access to catalog items held by the inventory store."""

    @abstractmethod
    async def get(self, item_id: str) -> Item | None: ...

    @abstractmethod
    async def list_all(self) -> list[Item]: ...

    @abstractmethod
    async def save(self, item: Item) -> None: ...
