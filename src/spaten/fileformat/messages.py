"""
Decoder for the protobuf messages carried in SPATEN block bodies.

Matches the proto3 schema:
    message Body {
        Meta meta = 1;
        repeated Feature feature = 2;
    }
    message Meta {
        repeated Tag tags = 1;
    }
    message Feature {
        enum GeomType { UNKNOWN = 0; POINT = 1; LINE = 2; POLYGON = 3; }
        GeomType geomtype = 1;
        bytes geom = 2;
        double left = 3;
        double right = 4;
        double top = 5;
        double bottom = 6;
        repeated Tag tags = 7;
    }
    message Tag {
        enum ValueType { STRING = 0; INT = 1; DOUBLE = 2; }
        string key = 1;
        bytes value = 2;
        ValueType type = 3;
    }

Only decoding is supported. Unknown fields are skipped.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterator, List, Tuple, Union

from spaten.core.exceptions import MessageDecodeError

WIRE_VARINT = 0
WIRE_FIXED64 = 1
WIRE_LENGTH_DELIMITED = 2
WIRE_FIXED32 = 5

_MAX_VARINT_BYTES = 10
_DOUBLE = struct.Struct("<d")

FieldValue = Union[int, bytes]


class GeomType(IntEnum):
    UNKNOWN = 0
    POINT = 1
    LINE = 2
    POLYGON = 3


@dataclass
class Tag:
    key: str = ""
    value: bytes = b""
    type: int = 0


@dataclass
class Meta:
    tags: List[Tag] = field(default_factory=list)


@dataclass
class FeatureRecord:
    geomtype: int = GeomType.UNKNOWN
    geom: bytes = b""
    left: float = 0.0
    right: float = 0.0
    top: float = 0.0
    bottom: float = 0.0
    tags: List[Tag] = field(default_factory=list)

    @property
    def bbox(self) -> Tuple[float, float, float, float]:
        """(left, bottom, right, top)"""
        return (self.left, self.bottom, self.right, self.top)


@dataclass
class Body:
    meta: Meta = field(default_factory=Meta)
    feature: List[FeatureRecord] = field(default_factory=list)


def _decode_varint(buf: bytes, pos: int) -> Tuple[int, int]:
    """Decode a varint from buf starting at pos. Returns (value, new_pos)."""
    result = 0
    shift = 0
    for _ in range(_MAX_VARINT_BYTES):
        if pos >= len(buf):
            raise MessageDecodeError("Truncated varint")
        b = buf[pos]
        pos += 1
        result |= (b & 0x7F) << shift
        if (b & 0x80) == 0:
            return result, pos
        shift += 7
    raise MessageDecodeError("Varint longer than 10 bytes")


def _as_int64(val: int) -> int:
    # proto3 enums and int64 use two's complement in varint encoding
    val &= 0xFFFFFFFFFFFFFFFF
    if val > 0x7FFFFFFFFFFFFFFF:
        val -= 0x10000000000000000
    return val


def _take(buf: bytes, pos: int, length: int) -> Tuple[bytes, int]:
    end = pos + length
    if end > len(buf):
        raise MessageDecodeError(
            f"Field length {length} at offset {pos} exceeds buffer of {len(buf)} bytes"
        )
    return bytes(buf[pos:end]), end


def _iter_fields(buf: bytes) -> Iterator[Tuple[int, int, FieldValue]]:
    """Yield (field_number, wire_type, raw value) for every field in buf."""
    pos = 0
    end = len(buf)

    while pos < end:
        key, pos = _decode_varint(buf, pos)
        field_number = key >> 3
        wire_type = key & 0x07
        if field_number == 0:
            raise MessageDecodeError(f"Invalid field number 0 at offset {pos}")

        value: FieldValue
        if wire_type == WIRE_VARINT:
            value, pos = _decode_varint(buf, pos)
        elif wire_type == WIRE_LENGTH_DELIMITED:
            length, pos = _decode_varint(buf, pos)
            value, pos = _take(buf, pos, length)
        elif wire_type == WIRE_FIXED64:
            value, pos = _take(buf, pos, 8)
        elif wire_type == WIRE_FIXED32:
            value, pos = _take(buf, pos, 4)
        else:
            raise MessageDecodeError(
                f"Unsupported wire type {wire_type} at field {field_number}"
            )

        yield field_number, wire_type, value


def _expect(
    message: str, field_number: int, wire_type: int, expected: int
) -> None:
    if wire_type != expected:
        raise MessageDecodeError(
            f"{message}.{field_number}: wire type {wire_type}, expected {expected}"
        )


def _decode_tag(buf: bytes) -> Tag:
    tag = Tag()
    for field_number, wire_type, value in _iter_fields(buf):
        if field_number == 1:
            _expect("Tag", field_number, wire_type, WIRE_LENGTH_DELIMITED)
            try:
                tag.key = value.decode("utf-8")  # type: ignore[union-attr]
            except UnicodeDecodeError as exc:
                raise MessageDecodeError(f"Tag key is not valid UTF-8: {exc}") from exc
        elif field_number == 2:
            _expect("Tag", field_number, wire_type, WIRE_LENGTH_DELIMITED)
            tag.value = value  # type: ignore[assignment]
        elif field_number == 3:
            _expect("Tag", field_number, wire_type, WIRE_VARINT)
            tag.type = _as_int64(value)  # type: ignore[arg-type]
    return tag


def _decode_meta(buf: bytes, meta: Meta) -> None:
    for field_number, wire_type, value in _iter_fields(buf):
        if field_number == 1:
            _expect("Meta", field_number, wire_type, WIRE_LENGTH_DELIMITED)
            meta.tags.append(_decode_tag(value))  # type: ignore[arg-type]


_BBOX_FIELDS = {3: "left", 4: "right", 5: "top", 6: "bottom"}


def _decode_feature(buf: bytes) -> FeatureRecord:
    record = FeatureRecord()
    for field_number, wire_type, value in _iter_fields(buf):
        if field_number == 1:
            _expect("Feature", field_number, wire_type, WIRE_VARINT)
            record.geomtype = _as_int64(value)  # type: ignore[arg-type]
        elif field_number == 2:
            _expect("Feature", field_number, wire_type, WIRE_LENGTH_DELIMITED)
            record.geom = value  # type: ignore[assignment]
        elif field_number in _BBOX_FIELDS:
            _expect("Feature", field_number, wire_type, WIRE_FIXED64)
            (coord,) = _DOUBLE.unpack(value)  # type: ignore[arg-type]
            setattr(record, _BBOX_FIELDS[field_number], coord)
        elif field_number == 7:
            _expect("Feature", field_number, wire_type, WIRE_LENGTH_DELIMITED)
            record.tags.append(_decode_tag(value))  # type: ignore[arg-type]
    return record


def decode_body(buf: bytes) -> Body:
    """
    Decode a block body message.

    Raises:
        MessageDecodeError: If buf is not a well-formed Body message
    """
    body = Body()
    for field_number, wire_type, value in _iter_fields(buf):
        if field_number == 1:
            _expect("Body", field_number, wire_type, WIRE_LENGTH_DELIMITED)
            # repeated occurrences of a singular message field are merged
            _decode_meta(value, body.meta)  # type: ignore[arg-type]
        elif field_number == 2:
            _expect("Body", field_number, wire_type, WIRE_LENGTH_DELIMITED)
            body.feature.append(_decode_feature(value))  # type: ignore[arg-type]
    return body


def decode_feature_records(buf: bytes) -> List[FeatureRecord]:
    """Decode a block body and return only its feature records, in order."""
    return decode_body(buf).feature


__all__ = [
    "GeomType",
    "Tag",
    "Meta",
    "FeatureRecord",
    "Body",
    "decode_body",
    "decode_feature_records",
]
