"""Selection of the service serving a metric type."""

from ..models import TypeQuery
from ..sql_client.client import QueryClient
from .base import DeploymentFrequencyService
from .df_service import DfService
from .df_total_service import DfTotalService


def get_service(type_query: TypeQuery, client: QueryClient) -> DeploymentFrequencyService:
    """Create the service for ``type_query`` backed by ``client``."""
    if type_query in (TypeQuery.DF_COUNT, TypeQuery.DF_AVERAGE):
        return DfService(client)
    elif type_query == TypeQuery.DF_TOTAL:
        return DfTotalService(client)
    else:
        raise ValueError(f"Unknown type query: {type_query}")
