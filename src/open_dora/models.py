"""Data models for the open-dora service."""

import json
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Union

from .errors import InvalidParameterError


class TypeQuery(Enum):
    """Deployment frequency metric requested by the caller."""
    DF_COUNT = "df_count"
    DF_AVERAGE = "df_average"
    DF_TOTAL = "df_total"


class Aggregation(Enum):
    """Time bucket granularity of a series."""
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"


def _choices(enum_cls) -> str:
    return ", ".join(member.value for member in enum_cls)


@dataclass
class DataPoint:
    """A single bucket of a deployment frequency series."""

    key: str  # "202338" (year-week), "23/04" (month) or "2024-01-01" (quarter)
    value: Union[int, float]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {"key": self.key, "value": self.value}

    @classmethod
    def from_dict(cls, data: dict) -> "DataPoint":
        """Create from dictionary."""
        return cls(key=data["key"], value=data["value"])


@dataclass
class ServiceParameters:
    """Decoded parameters of a metric request."""

    type_query: TypeQuery
    aggregation: Aggregation = Aggregation.WEEKLY
    project: Optional[str] = None
    from_timestamp: int = 0  # unix seconds, 0 means unbounded
    to_timestamp: int = 0  # unix seconds, 0 means unbounded

    def bind_params(self) -> dict:
        """Bind parameters shared by every deployment query."""
        return {
            "project": self.project or "",
            "from_timestamp": self.from_timestamp,
            "to_timestamp": self.to_timestamp,
        }

    def to_dict(self) -> dict:
        """Convert to dictionary using the request argument names."""
        return {
            "type": self.type_query.value,
            "aggregation": self.aggregation.value,
            "project": self.project,
            "from": self.from_timestamp,
            "to": self.to_timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ServiceParameters":
        """
        Decode raw request arguments.

        Args:
            data: Mapping with ``type`` and optional ``aggregation``,
                ``project``, ``from`` and ``to`` entries

        Raises:
            InvalidParameterError: If a value is missing or not recognised
        """
        try:
            type_query = TypeQuery(data.get("type"))
        except ValueError:
            raise InvalidParameterError(
                f"type should be provided as one of: {_choices(TypeQuery)}"
            )

        try:
            aggregation = Aggregation(data.get("aggregation") or Aggregation.WEEKLY.value)
        except ValueError:
            raise InvalidParameterError(
                f"aggregation should be provided as one of: {_choices(Aggregation)}"
            )

        bounds = {}
        for name in ("from", "to"):
            raw = data.get(name)
            if raw in (None, ""):
                bounds[name] = 0
                continue
            try:
                bounds[name] = int(raw)
            except (TypeError, ValueError):
                raise InvalidParameterError(f"{name} should be a unix timestamp, got {raw!r}")

        return cls(
            type_query=type_query,
            aggregation=aggregation,
            project=data.get("project") or None,
            from_timestamp=bounds["from"],
            to_timestamp=bounds["to"],
        )


@dataclass
class Response:
    """Series returned for a metric request."""

    aggregation: Aggregation
    data_points: Optional[List[DataPoint]] = None

    @classmethod
    def empty(cls, aggregation: Aggregation) -> "Response":
        """Response carried alongside an error: no data points."""
        return cls(aggregation=aggregation, data_points=None)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "aggregation": self.aggregation.value,
            "dataPoints": (
                [point.to_dict() for point in self.data_points]
                if self.data_points is not None
                else None
            ),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Response":
        """Create from dictionary."""
        points = data.get("dataPoints")
        return cls(
            aggregation=Aggregation(data["aggregation"]),
            data_points=[DataPoint.from_dict(p) for p in points] if points is not None else None,
        )

    def to_json(self) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=2)
