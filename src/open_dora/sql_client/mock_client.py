"""In-memory query client for tests and local development."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..errors import QueryExecutionError
from ..models import DataPoint
from .client import QueryClient


@dataclass
class MockDataReturn:
    """Canned result for one SQL statement: data points or an error message."""
    data: Optional[List[DataPoint]] = None
    error: Optional[str] = None


@dataclass
class MockClient(QueryClient):
    """Query client answering from a map keyed by exact SQL text."""

    mock_data_map: Dict[str, MockDataReturn] = field(default_factory=dict)
    executed: List[str] = field(default_factory=list)

    def execute_query(self, sql: str, bind_params: Optional[dict] = None) -> List[DataPoint]:
        """Return the canned result for ``sql``, recording the call."""
        self.executed.append(sql)
        result = self.mock_data_map.get(sql)
        if result is None:
            raise QueryExecutionError("no mock data for query")
        if result.error is not None:
            raise QueryExecutionError(result.error)
        return list(result.data or [])
