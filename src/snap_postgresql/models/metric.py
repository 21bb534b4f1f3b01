"""Metric record as delivered by the host on each publish cycle."""

from typing import Any

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, field_validator

from snap_postgresql.encoding.namespace import encode_namespace
from snap_postgresql.encoding.values import MetricValue, to_metric_value


class Metric(BaseModel):
    """A single timestamped, namespaced observation with a typed value.

    Attributes:
        namespace: Ordered namespace path segments (e.g. ``("intel", "cpu", "load")``).
        timestamp: When the observation was taken.
        tags: Free-form string tags attached by the collector.
        unit: Unit of measurement, if any.
        data: The raw metric value.
        data_type: Concrete type the producer declared for ``data``
            (e.g. ``"uint64"`` or ``"[]float64"``), if any.
    """

    model_config = ConfigDict(frozen=True)

    namespace: tuple[str, ...] = Field(min_length=1)
    timestamp: AwareDatetime
    tags: dict[str, str] = Field(default_factory=dict)
    unit: str = ""
    data: Any = None
    data_type: str | None = None

    @field_validator("namespace", mode="before")
    @classmethod
    def unwrap_namespace_elements(cls, v: Any) -> Any:
        """Accept namespace elements given as ``{"Value": ...}`` objects."""
        if not isinstance(v, (list, tuple)):
            return v
        segments = []
        for element in v:
            if isinstance(element, dict):
                element = element.get("Value", element.get("value"))
            segments.append(element)
        return segments

    @property
    def key(self) -> str:
        """The dotted namespace stored as the row key."""
        return encode_namespace(self.namespace)

    def metric_value(self) -> MetricValue:
        """Classify ``data`` into a supported value variant.

        Raises:
            UnsupportedTypeError: If ``data`` is not a supported type.

        """
        return to_metric_value(self.data, self.data_type)
