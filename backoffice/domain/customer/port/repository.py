from abc import abstractmethod
from typing import Protocol

from backoffice.domain.customer.model.customer import Customer
from backoffice.domain.shared.port import Port


class CustomerRepository(Port, Protocol):
    @abstractmethod
    async def get(self, customer_id: str) -> Customer | None: ...

    @abstractmethod
    async def list_all(self) -> list[Customer]: ...

    @abstractmethod
    async def save(self, customer: Customer) -> None: ...
