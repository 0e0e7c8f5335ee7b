"""Turns a decoded block body into typed Feature records."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Sequence, Tuple

from spaten.core.exceptions import (
    FormatError,
    GeometryDecodeError,
    MessageDecodeError,
)
from spaten.core.models import Feature, Value
from spaten.core.values import decode_value
from spaten.fileformat.messages import FeatureRecord, decode_feature_records
from spaten.geometry.wkb import decode_wkb

# bytes -> ordered feature records exposing .geom and .tags (key, value, type)
MessageDecoder = Callable[[bytes], Sequence[FeatureRecord]]
# WKB bytes -> geometry
GeometryDecoder = Callable[[bytes], Any]


def _decode_records(block: bytes, message_decoder: MessageDecoder) -> List[Any]:
    try:
        return list(message_decoder(block))
    except FormatError:
        raise
    except (ValueError, TypeError, IndexError, KeyError, AttributeError) as exc:
        raise MessageDecodeError(f"Malformed block message: {exc}") from exc


def _record_fields(record: Any) -> Tuple[bytes, List[Tuple[str, bytes, int]]]:
    try:
        return record.geom, [(tag.key, tag.value, tag.type) for tag in record.tags]
    except (AttributeError, TypeError) as exc:
        raise MessageDecodeError(f"Malformed feature record: {exc}") from exc


def _decode_geometry(data: bytes, geometry_decoder: GeometryDecoder) -> Any:
    try:
        return geometry_decoder(data)
    except FormatError:
        raise
    except (ValueError, TypeError) as exc:
        raise GeometryDecodeError(f"Invalid WKB geometry: {exc}") from exc


def translate(
    block: bytes,
    message_decoder: MessageDecoder = decode_feature_records,
    geometry_decoder: GeometryDecoder = decode_wkb,
) -> List[Feature]:
    """
    Decode every feature record of a block body.

    Record order is preserved. When a key repeats within a record the later
    value wins.

    Args:
        block: Raw block body as returned by read_block
        message_decoder: Parses the body into feature records
        geometry_decoder: Parses WKB bytes into a geometry

    Returns:
        Features in record order (empty for a block without records)

    Raises:
        FormatError: On malformed message, geometry or tag value
    """
    records = _decode_records(block, message_decoder)
    features: List[Feature] = []

    for record in records:
        geom, raw_tags = _record_fields(record)
        geometry = _decode_geometry(geom, geometry_decoder)

        tags: Dict[str, Value] = {}
        for key, raw, value_type in raw_tags:
            tags[key] = decode_value(raw, value_type)

        features.append(Feature(geometry=geometry, tags=tags))

    return features


def read_body(block: bytes) -> List[Feature]:
    """Translate a block body with the default message and WKB decoders."""
    return translate(block)


__all__ = ["MessageDecoder", "GeometryDecoder", "translate", "read_body"]
