from abc import abstractmethod
from typing import Protocol

from backoffice.domain.pos.model.transaction import Transaction
from backoffice.domain.shared.port import Port


class TransactionRepository(Port, Protocol):
    """Holds open (not yet completed or cancelled) transactions."""

    @abstractmethod
    async def get(self, transaction_id: str) -> Transaction | None: ...

    @abstractmethod
    async def save(self, transaction: Transaction) -> None: ...

    @abstractmethod
    async def delete(self, transaction_id: str) -> bool: ...
