"""Interpretation of raw tag value bytes."""

from __future__ import annotations

from typing import Union

from spaten.core.constants import (
    DOUBLE_VALUE_STRUCT,
    INT_VALUE_STRUCT,
    NUMERIC_VALUE_SIZE,
)
from spaten.core.exceptions import ValueDecodeError
from spaten.core.models import Value, ValueType


def _coerce_type(value_type: Union[ValueType, int]) -> ValueType:
    try:
        return ValueType(value_type)
    except ValueError:
        raise ValueDecodeError(f"Unknown tag value type: {value_type!r}") from None


def _require_numeric_size(raw: bytes, value_type: ValueType) -> None:
    if len(raw) != NUMERIC_VALUE_SIZE:
        raise ValueDecodeError(
            f"{value_type.name} value must be {NUMERIC_VALUE_SIZE} bytes, "
            f"got {len(raw)}"
        )


def decode_value(raw: bytes, value_type: Union[ValueType, int]) -> Value:
    """
    Decode raw tag bytes according to their declared type.

    STRING values are decoded as UTF-8, replacing invalid sequences.
    INT and DOUBLE values must be exactly 8 little-endian bytes.

    Raises:
        ValueDecodeError: On unknown type or wrongly sized numeric value
    """
    vtype = _coerce_type(value_type)
    raw = bytes(raw)

    if vtype is ValueType.STRING:
        return Value.string(raw.decode("utf-8", errors="replace"))

    _require_numeric_size(raw, vtype)
    if vtype is ValueType.INT:
        (number,) = INT_VALUE_STRUCT.unpack(raw)
        return Value.integer(number)

    (real,) = DOUBLE_VALUE_STRUCT.unpack(raw)
    return Value.double(real)


__all__ = ["decode_value"]
