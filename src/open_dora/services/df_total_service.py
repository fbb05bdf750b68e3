"""Total deployment series derived from the weekly and monthly counts."""

from typing import List

import pandas as pd

from ..errors import QueryExecutionError
from ..logging import get_logger
from ..models import Aggregation, DataPoint, Response, ServiceParameters
from ..sql_client import sql_queries
from .base import DeploymentFrequencyService

logger = get_logger(__name__)

WEEKLY_TOTAL_SQL = sql_queries.WEEKLY_DEPLOYMENT_SQL + sql_queries.COUNT_SQL
MONTHLY_TOTAL_SQL = sql_queries.MONTHLY_DEPLOYMENT_SQL + sql_queries.COUNT_SQL


class DfTotalService(DeploymentFrequencyService):
    """
    Serves ``df_total``.

    Weekly and monthly counts are always both queried, weekly first. A
    failing weekly query stops the request before the monthly one runs.
    Quarterly totals are rolled up from the monthly series.
    """

    def serve_request(self, params: ServiceParameters) -> Response:
        """Query both series and return the one matching the aggregation."""
        logger.info(f"Serving df_total ({params.aggregation.value}) for project {params.project or '*'}")
        bind_params = params.bind_params()

        try:
            weekly = self.client.execute_query(WEEKLY_TOTAL_SQL, bind_params)
            monthly = self.client.execute_query(MONTHLY_TOTAL_SQL, bind_params)
        except QueryExecutionError as e:
            logger.warning(f"df_total {params.aggregation.value} query failed: {e}")
            e.response = Response.empty(params.aggregation)
            raise

        if params.aggregation == Aggregation.WEEKLY:
            data_points = weekly
        elif params.aggregation == Aggregation.MONTHLY:
            data_points = monthly
        else:
            data_points = quarterly_from_monthly(monthly)

        return Response(aggregation=params.aggregation, data_points=data_points)


def quarterly_from_monthly(monthly: List[DataPoint]) -> List[DataPoint]:
    """
    Sum monthly points ("23/04") into quarter buckets ("2023-04-01").

    Quarters keep the order in which they first appear in the monthly series.
    """
    if not monthly:
        return []

    df = pd.DataFrame([point.to_dict() for point in monthly])
    months = pd.to_datetime(df["key"], format="%y/%m")
    df["quarter"] = months.dt.to_period("Q").dt.start_time.dt.strftime("%Y-%m-%d")
    totals = df.groupby("quarter", sort=False)["value"].sum()

    return [DataPoint(key=quarter, value=_as_python_number(value)) for quarter, value in totals.items()]


def _as_python_number(value):
    """Convert numpy scalars back to plain int or float."""
    value = value.item() if hasattr(value, "item") else value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value
