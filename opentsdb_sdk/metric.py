"""
Metric data points as accepted by the OpenTSDB /api/put endpoint.
"""
import numbers
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

import pytz


def current_timestamp() -> int:
    """Current UTC time in epoch seconds."""
    return int(datetime.now(pytz.UTC).timestamp())


@dataclass(frozen=True)
class OpenTsdbMetric:
    """
    A single time-series data point.

    Instances are immutable and compare by value, so they can be collected in a
    set before being sent. Tags are copied into a read-only mapping.
    """
    metric: str
    timestamp: int
    value: Union[int, float]
    tags: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if not isinstance(self.metric, str) or not self.metric:
            raise ValueError("Metric name must be a non-empty string")
        if isinstance(self.timestamp, bool) or not isinstance(self.timestamp, int):
            raise ValueError(f"Timestamp must be an integer, got {self.timestamp!r}")
        if isinstance(self.value, bool) or not isinstance(self.value, numbers.Real):
            raise ValueError(f"Value must be numeric, got {self.value!r}")
        if not isinstance(self.tags, Mapping):
            raise ValueError(f"Tags must be a mapping, got {self.tags!r}")
        for key, tag_value in self.tags.items():
            if not isinstance(key, str) or not isinstance(tag_value, str):
                raise ValueError(f"Tags must map strings to strings, got {key!r}: {tag_value!r}")
        object.__setattr__(self, 'tags', MappingProxyType(dict(self.tags)))

    def __hash__(self):
        return hash((self.metric, self.timestamp, self.value, frozenset(self.tags.items())))

    @classmethod
    def named(
        cls,
        name: str,
        value: Union[int, float],
        tags: Optional[Mapping[str, str]] = None,
        timestamp: Optional[int] = None
    ) -> 'OpenTsdbMetric':
        """
        Create a metric, stamping it with the current time if no timestamp is given.

        Args:
            name (str): Metric name
            value (int | float): Measured value
            tags (dict, optional): Tag key/value pairs
            timestamp (int, optional): Epoch timestamp. Defaults to now, in seconds.

        Returns:
            OpenTsdbMetric: The new metric
        """
        return cls(
            metric=name,
            timestamp=timestamp if timestamp is not None else current_timestamp(),
            value=value,
            tags=tags or {}
        )

    def to_dict(self) -> Dict[str, Any]:
        """JSON representation used in the request body."""
        return {
            'metric': self.metric,
            'timestamp': self.timestamp,
            'value': self.value,
            'tags': dict(self.tags),
        }
