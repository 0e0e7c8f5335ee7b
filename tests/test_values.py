"""Tests for tag value typing."""
import math
import struct
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from spaten.core.exceptions import FormatError, ValueDecodeError  # noqa: E402
from spaten.core.models import Value, ValueType  # noqa: E402
from spaten.core.values import decode_value  # noqa: E402

I64_MIN = -(2**63)
I64_MAX = 2**63 - 1


@pytest.mark.unit
def test_string_value():
    value = decode_value("A street".encode("utf-8"), ValueType.STRING)
    assert value == Value.string("A street")
    assert value.is_string


@pytest.mark.unit
def test_string_value_non_ascii():
    value = decode_value("Kölner Straße".encode("utf-8"), ValueType.STRING)
    assert value.value == "Kölner Straße"


@pytest.mark.unit
def test_string_value_invalid_utf8_is_lossy():
    value = decode_value(b"\xff\xfe", ValueType.STRING)
    assert value.type is ValueType.STRING
    assert "�" in value.value


@pytest.mark.unit
def test_empty_string_value():
    assert decode_value(b"", ValueType.STRING) == Value.string("")


@pytest.mark.unit
@pytest.mark.parametrize("number", [I64_MIN, -1, 0, 42, I64_MAX])
def test_int_round_trip(number):
    value = decode_value(struct.pack("<q", number), ValueType.INT)
    assert value == Value.integer(number)
    assert value.is_integer


@pytest.mark.unit
@pytest.mark.parametrize(
    "number", [0.0, -0.0, -12.5, 51.2345, math.inf, -math.inf, math.nan]
)
def test_double_round_trip_bit_exact(number):
    raw = struct.pack("<d", number)
    value = decode_value(raw, ValueType.DOUBLE)
    assert value.is_float
    assert struct.pack("<d", value.value) == raw


@pytest.mark.unit
def test_accepts_plain_int_type_tag():
    assert decode_value(struct.pack("<q", 7), 1) == Value.integer(7)


@pytest.mark.unit
@pytest.mark.parametrize("value_type", [ValueType.INT, ValueType.DOUBLE])
@pytest.mark.parametrize("size", [0, 4, 7, 9])
def test_numeric_value_wrong_size(value_type, size):
    with pytest.raises(ValueDecodeError, match="must be 8 bytes"):
        decode_value(b"\x01" * size, value_type)


@pytest.mark.unit
@pytest.mark.parametrize("value_type", [3, -1, 255])
def test_unknown_value_type(value_type):
    with pytest.raises(FormatError, match="Unknown tag value type"):
        decode_value(b"\x00" * 8, value_type)


@pytest.mark.unit
def test_value_repr_matches_debug_format():
    assert repr(Value.string("A street")) == '"A street"'
    assert repr(Value.integer(42)) == "42"
    assert repr(Value.double(1.5)) == "1.5"
    assert str(Value.string("A street")) == "A street"


@pytest.mark.unit
@pytest.mark.parametrize(
    "number, expected",
    [
        (42.0, "42"),
        (-0.5, "-0.5"),
        (1e20, "100000000000000000000"),
        (1e-7, "0.0000001"),
        (float("nan"), "NaN"),
        (float("inf"), "inf"),
        (float("-inf"), "-inf"),
    ],
)
def test_double_repr_is_positional(number, expected):
    assert repr(Value.double(number)) == expected


@pytest.mark.unit
def test_value_is_immutable():
    value = Value.integer(1)
    with pytest.raises(AttributeError):
        value.value = 2  # type: ignore[misc]
