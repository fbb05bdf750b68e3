"""Common interface of the deployment frequency services."""

from abc import ABC, abstractmethod

from ..models import Response, ServiceParameters
from ..sql_client.client import QueryClient


class DeploymentFrequencyService(ABC):
    """Serves one family of deployment frequency metrics."""

    def __init__(self, client: QueryClient):
        self.client = client

    @abstractmethod
    def serve_request(self, params: ServiceParameters) -> Response:
        """
        Serve a metric request.

        Raises:
            QueryExecutionError: If a query fails; ``response`` holds the
                empty response for the requested aggregation
        """
        pass
