"""Deployment count and average series served straight from SQL."""

from typing import Dict, Tuple

from ..errors import InvalidParameterError, QueryExecutionError
from ..logging import get_logger
from ..models import Aggregation, Response, ServiceParameters, TypeQuery
from ..sql_client import sql_queries
from .base import DeploymentFrequencyService

logger = get_logger(__name__)

_DEPLOYMENT_SQL: Dict[Aggregation, str] = {
    Aggregation.WEEKLY: sql_queries.WEEKLY_DEPLOYMENT_SQL,
    Aggregation.MONTHLY: sql_queries.MONTHLY_DEPLOYMENT_SQL,
    Aggregation.QUARTERLY: sql_queries.QUARTERLY_DEPLOYMENT_SQL,
}

_SELECT_SQL: Dict[TypeQuery, str] = {
    TypeQuery.DF_COUNT: sql_queries.COUNT_SQL,
    TypeQuery.DF_AVERAGE: sql_queries.AVERAGE_SQL,
}

QUERIES: Dict[Tuple[TypeQuery, Aggregation], str] = {
    (type_query, aggregation): deployment_sql + select_sql
    for type_query, select_sql in _SELECT_SQL.items()
    for aggregation, deployment_sql in _DEPLOYMENT_SQL.items()
}


class DfService(DeploymentFrequencyService):
    """Serves ``df_count`` and ``df_average`` with a single query per request."""

    def serve_request(self, params: ServiceParameters) -> Response:
        """Run the query for the type and aggregation and return its rows unchanged."""
        query = QUERIES.get((params.type_query, params.aggregation))
        if query is None:
            raise InvalidParameterError(f"{params.type_query.value} is not served by {type(self).__name__}")

        logger.info(f"Serving {params.type_query.value} ({params.aggregation.value}) for project {params.project or '*'}")
        try:
            data_points = self.client.execute_query(query, params.bind_params())
        except QueryExecutionError as e:
            logger.warning(f"{params.type_query.value} {params.aggregation.value} query failed: {e}")
            e.response = Response.empty(params.aggregation)
            raise

        return Response(aggregation=params.aggregation, data_points=data_points)
