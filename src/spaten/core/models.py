"""
SPATEN data models and structures.
"""

import math
from dataclasses import dataclass, field
from decimal import Decimal
from enum import IntEnum
from typing import Any, Dict, Union


def _format_double(number: float) -> str:
    """Shortest positional form: 42.0 -> 42, 1e20 -> 100000000000000000000."""
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "inf" if number > 0 else "-inf"
    text = format(Decimal(repr(number)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


class ValueType(IntEnum):
    """Declared type of a tag value, as stored in the block message."""

    STRING = 0
    INT = 1
    DOUBLE = 2


@dataclass(frozen=True)
class Value:
    """
    Typed tag value.

    Attributes:
        type: Which of the fixed value kinds this is
        value: The decoded Python value (str, int or float)
    """

    type: ValueType
    value: Union[str, int, float]

    @classmethod
    def string(cls, value: str) -> "Value":
        return cls(ValueType.STRING, value)

    @classmethod
    def integer(cls, value: int) -> "Value":
        return cls(ValueType.INT, value)

    @classmethod
    def double(cls, value: float) -> "Value":
        return cls(ValueType.DOUBLE, value)

    @property
    def is_string(self) -> bool:
        return self.type is ValueType.STRING

    @property
    def is_integer(self) -> bool:
        return self.type is ValueType.INT

    @property
    def is_float(self) -> bool:
        return self.type is ValueType.DOUBLE

    def __repr__(self) -> str:
        if self.type is ValueType.STRING:
            return f'"{self.value}"'
        if self.type is ValueType.DOUBLE:
            return _format_double(float(self.value))
        return repr(self.value)

    def __str__(self) -> str:
        return str(self.value)


@dataclass
class Feature:
    """
    A single decoded feature.

    Attributes:
        geometry: Geometry decoded from the feature's WKB bytes
        tags: Tag key to typed value (keys unique)
    """

    geometry: Any
    tags: Dict[str, Value] = field(default_factory=dict)

    @property
    def properties(self) -> Dict[str, Union[str, int, float]]:
        """Tags as plain Python values."""
        return {key: tag.value for key, tag in self.tags.items()}

    def __repr__(self) -> str:
        geom_type = getattr(self.geometry, "geom_type", type(self.geometry).__name__)
        return f"Feature(geometry={geom_type}, tags={self.tags!r})"


@dataclass(frozen=True)
class BlockHeader:
    """
    Parsed header of a non-terminating block.
    """

    body_length: int
    flags: int = 0
    compression: int = 0
    message_type: int = 0

    def __repr__(self) -> str:
        return (
            f"BlockHeader(body_length={self.body_length}, "
            f"flags={self.flags:#06x}, "
            f"compression={self.compression}, "
            f"message_type={self.message_type})"
        )


@dataclass
class ReadStats:
    """
    Running totals for one pass over a SPATEN stream.
    """

    blocks: int = 0
    features: int = 0
    body_bytes: int = 0

    def __repr__(self) -> str:
        return (
            f"ReadStats(blocks={self.blocks}, "
            f"features={self.features}, "
            f"body={self._human_size(self.body_bytes)})"
        )

    @staticmethod
    def _human_size(size_bytes: float) -> str:
        """Format bytes as human-readable string."""
        for unit in ["B", "KB", "MB", "GB", "TB"]:
            if size_bytes < 1024:
                return f"{size_bytes:.1f}{unit}"
            size_bytes /= 1024
        return f"{size_bytes:.1f}PB"
