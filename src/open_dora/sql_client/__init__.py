"""Query clients for the DevLake database."""

from .client import QueryClient, SQLClient
from .mock_client import MockClient, MockDataReturn

__all__ = ["MockClient", "MockDataReturn", "QueryClient", "SQLClient"]
