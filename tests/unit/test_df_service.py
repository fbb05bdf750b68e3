"""Unit tests for the count and average deployment frequency service."""

import pytest

from open_dora.errors import InvalidParameterError, QueryExecutionError
from open_dora.models import Aggregation, DataPoint, Response, ServiceParameters, TypeQuery
from open_dora.services import DfService
from open_dora.sql_client import MockClient, MockDataReturn
from open_dora.sql_client import sql_queries

WEEKLY = [DataPoint("202338", 0), DataPoint("202337", 1), DataPoint("202336", 2)]
MONTHLY = [DataPoint("23/04", 6), DataPoint("23/03", 5), DataPoint("23/02", 4)]
QUARTERLY = [DataPoint("2024-01-01", 6), DataPoint("2023-10-01", 5), DataPoint("2023-07-01", 4)]
AVERAGE_WEEKLY = [DataPoint("202338", 0.75), DataPoint("202337", 1.5), DataPoint("202336", 2)]
AVERAGE_MONTHLY = [DataPoint("23/04", 5.25), DataPoint("23/03", 4.5), DataPoint("23/02", 4)]
AVERAGE_QUARTERLY = [DataPoint("2024-01-01", 5.25), DataPoint("2023-10-01", 4.5), DataPoint("2023-07-01", 4)]

W, M, Q = sql_queries.WEEKLY_DEPLOYMENT_SQL, sql_queries.MONTHLY_DEPLOYMENT_SQL, sql_queries.QUARTERLY_DEPLOYMENT_SQL
COUNT, AVERAGE = sql_queries.COUNT_SQL, sql_queries.AVERAGE_SQL

DATA_MOCK_MAP = {
    W + COUNT: MockDataReturn(data=WEEKLY),
    M + COUNT: MockDataReturn(data=MONTHLY),
    Q + COUNT: MockDataReturn(data=QUARTERLY),
    W + AVERAGE: MockDataReturn(data=AVERAGE_WEEKLY),
    M + AVERAGE: MockDataReturn(data=AVERAGE_MONTHLY),
    Q + AVERAGE: MockDataReturn(data=AVERAGE_QUARTERLY),
}

ERROR_MOCK_MAP = {
    W + COUNT: MockDataReturn(error="error from weekly query"),
    M + COUNT: MockDataReturn(error="error from monthly query"),
    Q + COUNT: MockDataReturn(error="error from quarterly query"),
    W + AVERAGE: MockDataReturn(error="error from weekly average query"),
    M + AVERAGE: MockDataReturn(error="error from monthly average query"),
    Q + AVERAGE: MockDataReturn(error="error from quarterly average query"),
}


@pytest.mark.unit
class TestDfService:
    """Test DfService.serve_request."""

    @pytest.mark.parametrize("type_query,aggregation,expected_error", [
        (TypeQuery.DF_COUNT, Aggregation.WEEKLY, "error from weekly query"),
        (TypeQuery.DF_COUNT, Aggregation.MONTHLY, "error from monthly query"),
        (TypeQuery.DF_COUNT, Aggregation.QUARTERLY, "error from quarterly query"),
        (TypeQuery.DF_AVERAGE, Aggregation.WEEKLY, "error from weekly average query"),
        (TypeQuery.DF_AVERAGE, Aggregation.MONTHLY, "error from monthly average query"),
        (TypeQuery.DF_AVERAGE, Aggregation.QUARTERLY, "error from quarterly average query"),
    ])
    def test_database_error(self, type_query, aggregation, expected_error):
        """Test that a query error propagates unchanged with an empty response."""
        service = DfService(MockClient(mock_data_map=ERROR_MOCK_MAP))
        params = ServiceParameters(type_query=type_query, aggregation=aggregation)

        with pytest.raises(QueryExecutionError) as exc_info:
            service.serve_request(params)

        assert str(exc_info.value) == expected_error
        assert exc_info.value.response == Response(aggregation=aggregation, data_points=None)

    @pytest.mark.parametrize("type_query,aggregation,expected_points", [
        (TypeQuery.DF_COUNT, Aggregation.WEEKLY, WEEKLY),
        (TypeQuery.DF_COUNT, Aggregation.MONTHLY, MONTHLY),
        (TypeQuery.DF_COUNT, Aggregation.QUARTERLY, QUARTERLY),
        (TypeQuery.DF_AVERAGE, Aggregation.WEEKLY, AVERAGE_WEEKLY),
        (TypeQuery.DF_AVERAGE, Aggregation.MONTHLY, AVERAGE_MONTHLY),
        (TypeQuery.DF_AVERAGE, Aggregation.QUARTERLY, AVERAGE_QUARTERLY),
    ])
    def test_returns_data_points(self, type_query, aggregation, expected_points):
        """Test that rows are returned exactly as the query produced them."""
        service = DfService(MockClient(mock_data_map=DATA_MOCK_MAP))
        params = ServiceParameters(type_query=type_query, aggregation=aggregation)

        response = service.serve_request(params)

        assert response == Response(aggregation=aggregation, data_points=expected_points)

    def test_executes_single_query(self):
        """Test that exactly one statement is executed per request."""
        client = MockClient(mock_data_map=DATA_MOCK_MAP)
        service = DfService(client)

        service.serve_request(ServiceParameters(TypeQuery.DF_AVERAGE, Aggregation.MONTHLY))

        assert client.executed == [M + AVERAGE]

    def test_repeated_requests_are_identical(self):
        """Test that identical requests give identical responses."""
        service = DfService(MockClient(mock_data_map=DATA_MOCK_MAP))
        params = ServiceParameters(TypeQuery.DF_COUNT, Aggregation.WEEKLY)

        assert service.serve_request(params) == service.serve_request(params)

    def test_passes_filters_as_bind_params(self):
        """Test that project and range filters reach the client."""
        received = {}

        class RecordingClient(MockClient):
            def execute_query(self, sql, bind_params=None):
                received.update(bind_params)
                return super().execute_query(sql, bind_params)

        service = DfService(RecordingClient(mock_data_map=DATA_MOCK_MAP))
        service.serve_request(ServiceParameters(
            TypeQuery.DF_COUNT, Aggregation.WEEKLY, project="payments", from_timestamp=100, to_timestamp=200,
        ))

        assert received == {"project": "payments", "from_timestamp": 100, "to_timestamp": 200}

    def test_total_not_served(self):
        """Test that df_total is rejected."""
        service = DfService(MockClient(mock_data_map=DATA_MOCK_MAP))

        with pytest.raises(InvalidParameterError, match="df_total is not served by DfService"):
            service.serve_request(ServiceParameters(TypeQuery.DF_TOTAL, Aggregation.WEEKLY))
