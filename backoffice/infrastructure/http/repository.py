"""HTTP adapters for the repository ports, backed by the dashboard REST API."""

import logging
from collections.abc import Callable
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel

from backoffice.domain.auth.model.user import User
from backoffice.domain.auth.port.user_directory import UserDirectory
from backoffice.domain.catalog.model.item import Item
from backoffice.domain.catalog.port.repository import ItemRepository
from backoffice.domain.customer.model.customer import Customer
from backoffice.domain.customer.port.repository import CustomerRepository
from backoffice.domain.pos.model.sale import Sale
from backoffice.domain.pos.port.sale_repository import SaleRepository
from backoffice.domain.shared.error import ExternalServiceError, ValidationError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)
T = TypeVar("T")

# Statuses that mean "no such record" rather than a failed request
_NOT_FOUND = (404,)

# /auth answers bad credentials with a client error, not a failure
_REJECTED_LOGIN = (400, 401, 403, 404)


def normalize_collection(data: Any) -> list[Any]:
    """Accept a JSON list, or an object keyed by numeric strings ("0", "1", ...)."""
    if isinstance(data, list):
        return data
    if isinstance(data, dict) and all(key.isdigit() for key in data):
        return list(data.values())
    return []


class _RestResource:
    """Shared request/response handling for one REST collection."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def _request(
        self,
        method: str,
        url: str,
        passthrough: tuple[int, ...] = _NOT_FOUND,
        **kwargs: Any,
    ) -> httpx.Response:
        try:
            response = await self._client.request(method, url, **kwargs)
            if response.status_code not in passthrough:
                response.raise_for_status()
            return response
        except httpx.HTTPError as e:
            logger.warning("API request failed: %s %s: %s", method, url, e)
            raise ExternalServiceError(f"API request failed: {method} {url}: {e}") from e

    @staticmethod
    def _decode(response: httpx.Response, parse: Callable[[Any], T]) -> T:
        """Parse the JSON body; a body that is not JSON or not the expected shape is an API failure."""
        request = response.request
        try:
            return parse(response.json())
        except (ValueError, TypeError, KeyError, AttributeError, ValidationError) as e:
            # pydantic's ValidationError and JSONDecodeError are both ValueErrors
            logger.warning("Malformed API response: %s %s: %s", request.method, request.url, e)
            raise ExternalServiceError(
                f"Malformed API response: {request.method} {request.url.path}: {e}"
            ) from e

    async def _get_one(self, url: str, model: type[M]) -> M | None:
        response = await self._request("GET", url)
        if response.status_code == 404:
            return None
        return self._decode(response, model.model_validate)

    async def _get_many(self, url: str, model: type[M]) -> list[M]:
        response = await self._request("GET", url)
        if response.status_code == 404:
            return []
        return self._decode(
            response,
            lambda body: [model.model_validate(row) for row in normalize_collection(body)],
        )

    async def _send(self, method: str, url: str, record: BaseModel) -> None:
        response = await self._request(
            method, url, json=record.model_dump(mode="json", by_alias=True)
        )
        if response.status_code == 404:
            raise ExternalServiceError(f"API resource not found: {method} {url}")


class HttpItemRepository(_RestResource, ItemRepository):
    async def get(self, item_id: str) -> Item | None:
        return await self._get_one(f"/items/{item_id}", Item)

    async def list_all(self) -> list[Item]:
        return await self._get_many("/items", Item)

    async def save(self, item: Item) -> None:
        await self._send("PUT", f"/items/{item.id}", item)


class HttpCustomerRepository(_RestResource, CustomerRepository):
    async def get(self, customer_id: str) -> Customer | None:
        return await self._get_one(f"/customers/{customer_id}", Customer)

    async def list_all(self) -> list[Customer]:
        return await self._get_many("/customers", Customer)

    async def save(self, customer: Customer) -> None:
        await self._send("PUT", f"/customers/{customer.id}", customer)


class HttpSaleRepository(_RestResource, SaleRepository):
    async def save(self, sale: Sale) -> None:
        await self._send("POST", "/sales", sale)

    async def list_all(self) -> list[Sale]:
        return await self._get_many("/sales", Sale)


def _parse_auth_response(body: Any) -> User | None:
    if not body.get("success", True) or not body.get("user"):
        return None
    return User.model_validate(body["user"])


class HttpUserDirectory(_RestResource, UserDirectory):
    """Credentials are checked by ``POST /auth``; its ``user`` carries the role."""

    async def authenticate(self, email: str, password: str) -> User | None:
        response = await self._request(
            "POST",
            "/auth",
            passthrough=_REJECTED_LOGIN,
            json={"email": email, "password": password},
        )
        if response.status_code in _REJECTED_LOGIN:
            logger.debug("Login rejected by API: status=%d", response.status_code)
            return None
        return self._decode(response, _parse_auth_response)
