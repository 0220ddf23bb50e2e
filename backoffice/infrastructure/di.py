"""Repository provider selection.

``RepositoryProvider`` is a mockable component: the in-memory and HTTP
implementations subclass it, and ``get_provider`` picks one by ``api.use_mock``.
"""

from backoffice.util.di.base import Provider


class RepositoryProvider(Provider):
    """Provides ItemRepository, CustomerRepository, SaleRepository and UserDirectory."""

    __mock_component__ = "repository"
