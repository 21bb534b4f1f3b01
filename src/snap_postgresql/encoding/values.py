"""Canonical string encoding of metric values.

Metric values arrive dynamically typed. Before they are stored they are
classified into a closed set of variants, each of which knows how to render
itself as text for the ``value_column``:

- scalars: ``IntValue``, ``UIntValue``, ``FloatValue``, ``BoolValue``,
  ``StringValue``
- homogeneous sequences: ``IntSeq``, ``UIntSeq``, ``FloatSeq``, ``StringSeq``

Anything outside that set raises ``UnsupportedTypeError``.
"""

import math
from dataclasses import dataclass
from typing import Any, Union

from snap_postgresql.config.constants import (
    ERR_MSG_VALUE_OUT_OF_RANGE,
    FALSE_STRING,
    NAN_STRING,
    NEG_INF_STRING,
    POS_INF_STRING,
    SEQUENCE_SEPARATOR,
    TRUE_STRING,
)
from snap_postgresql.errors import UnsupportedTypeError


@dataclass(frozen=True)
class IntValue:
    value: int

    def encode(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class UIntValue:
    value: int

    def encode(self) -> str:
        return str(self.value)


def _format_float(value: float) -> str:
    if math.isnan(value):
        return NAN_STRING
    if math.isinf(value):
        return POS_INF_STRING if value > 0 else NEG_INF_STRING
    return str(value)


@dataclass(frozen=True)
class FloatValue:
    value: float

    def encode(self) -> str:
        return _format_float(self.value)


@dataclass(frozen=True)
class BoolValue:
    value: bool

    def encode(self) -> str:
        return TRUE_STRING if self.value else FALSE_STRING


@dataclass(frozen=True)
class StringValue:
    value: str

    def encode(self) -> str:
        return self.value


@dataclass(frozen=True)
class IntSeq:
    values: tuple[int, ...]

    def encode(self) -> str:
        return SEQUENCE_SEPARATOR.join(str(v) for v in self.values)


@dataclass(frozen=True)
class UIntSeq:
    values: tuple[int, ...]

    def encode(self) -> str:
        return SEQUENCE_SEPARATOR.join(str(v) for v in self.values)


@dataclass(frozen=True)
class FloatSeq:
    values: tuple[float, ...]

    def encode(self) -> str:
        return SEQUENCE_SEPARATOR.join(_format_float(v) for v in self.values)


@dataclass(frozen=True)
class StringSeq:
    """Sequence of strings, joined as-is (no quoting, no brackets)."""

    values: tuple[str, ...]

    def encode(self) -> str:
        return SEQUENCE_SEPARATOR.join(self.values)


MetricValue = Union[
    IntValue, UIntValue, FloatValue, BoolValue, StringValue,
    IntSeq, UIntSeq, FloatSeq, StringSeq,
]

_VARIANTS = (
    IntValue, UIntValue, FloatValue, BoolValue, StringValue,
    IntSeq, UIntSeq, FloatSeq, StringSeq,
)

# Concrete type names a producer may declare, mapped to (kind, bit width).
_SCALAR_TYPES = {
    "int": ("int", 64),
    "int8": ("int", 8),
    "int16": ("int", 16),
    "int32": ("int", 32),
    "int64": ("int", 64),
    "uint": ("uint", 64),
    "uint8": ("uint", 8),
    "uint16": ("uint", 16),
    "uint32": ("uint", 32),
    "uint64": ("uint", 64),
    "float32": ("float", 32),
    "float64": ("float", 64),
    "bool": ("bool", 0),
    "string": ("string", 0),
}
_SEQUENCE_PREFIX = "[]"


def _is_int(obj: Any) -> bool:
    return isinstance(obj, int) and not isinstance(obj, bool)


def _is_number(obj: Any) -> bool:
    return _is_int(obj) or isinstance(obj, float)


def _check_range(obj: int, kind: str, bits: int, data_type: str) -> int:
    if kind == "uint":
        low, high = 0, 2 ** bits - 1
    else:
        low, high = -(2 ** (bits - 1)), 2 ** (bits - 1) - 1
    if not low <= obj <= high:
        raise UnsupportedTypeError(
            data_type,
            ERR_MSG_VALUE_OUT_OF_RANGE.format(value=obj, data_type=data_type),
        )
    return obj


def _coerce_scalar(obj: Any, kind: str, bits: int, data_type: str) -> Any:
    """Check one scalar against a declared kind and return the stored value.

    Raises:
        UnsupportedTypeError: If ``obj`` does not match ``kind``.

    """
    if kind in ("int", "uint") and _is_int(obj):
        return _check_range(obj, kind, bits, data_type)
    if kind == "float" and _is_number(obj):
        return float(obj)
    if kind == "bool" and isinstance(obj, bool):
        return obj
    if kind == "string" and isinstance(obj, str):
        return obj
    raise UnsupportedTypeError(type(obj).__name__)


def _from_declared_type(obj: Any, data_type: str) -> MetricValue:
    is_sequence = data_type.startswith(_SEQUENCE_PREFIX)
    scalar_name = data_type[len(_SEQUENCE_PREFIX):] if is_sequence else data_type
    if scalar_name not in _SCALAR_TYPES or (is_sequence and scalar_name == "bool"):
        raise UnsupportedTypeError(data_type)
    kind, bits = _SCALAR_TYPES[scalar_name]

    if not is_sequence:
        value = _coerce_scalar(obj, kind, bits, data_type)
        scalar_variants = {
            "int": IntValue,
            "uint": UIntValue,
            "float": FloatValue,
            "bool": BoolValue,
            "string": StringValue,
        }
        return scalar_variants[kind](value)

    if not isinstance(obj, (list, tuple)):
        raise UnsupportedTypeError(type(obj).__name__)
    values = tuple(_coerce_scalar(item, kind, bits, data_type) for item in obj)
    sequence_variants = {
        "int": IntSeq,
        "uint": UIntSeq,
        "float": FloatSeq,
        "string": StringSeq,
    }
    return sequence_variants[kind](values)


def _infer_sequence(obj: list | tuple) -> MetricValue:
    items = tuple(obj)
    if all(isinstance(item, str) for item in items):
        # An empty sequence lands here and encodes as "".
        return StringSeq(items)
    if all(_is_int(item) for item in items):
        return IntSeq(items)
    if all(_is_number(item) for item in items):
        return FloatSeq(tuple(float(item) for item in items))
    raise UnsupportedTypeError(type(obj).__name__)


def to_metric_value(obj: Any, data_type: str | None = None) -> MetricValue:
    """Classify a dynamically typed value into one of the supported variants.

    Args:
        obj (Any): The raw metric value.
        data_type (str | None): Optional concrete type declared by the
            producer (e.g. ``"uint8"`` or ``"[]float64"``). When given, the
            value must match it.

    Returns:
        MetricValue: The variant wrapping ``obj``.

    Raises:
        UnsupportedTypeError: If the value (or declared type) is outside the
            supported set.

    """
    if isinstance(obj, _VARIANTS):
        return obj
    if data_type:
        return _from_declared_type(obj, data_type)

    if isinstance(obj, bool):
        return BoolValue(obj)
    if _is_int(obj):
        return IntValue(obj)
    if isinstance(obj, float):
        return FloatValue(obj)
    if isinstance(obj, str):
        return StringValue(obj)
    if isinstance(obj, (list, tuple)):
        return _infer_sequence(obj)
    raise UnsupportedTypeError(type(obj).__name__)


def encode(obj: Any, data_type: str | None = None) -> str:
    """Return the canonical string stored for a metric value.

    Args:
        obj (Any): A raw metric value or an already classified variant.
        data_type (str | None): Optional declared concrete type.

    Returns:
        str: The text written to ``value_column``.

    Raises:
        UnsupportedTypeError: If the value cannot be encoded.

    """
    return to_metric_value(obj, data_type).encode()
