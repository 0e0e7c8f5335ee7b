"""SPATEN core functionality."""

from .exceptions import FormatError, SpatenError, SpatenIOError
from .framing import read_block, read_block_header, validate_header
from .iterator import FeatureIterator, IteratorState
from .models import BlockHeader, Feature, ReadStats, Value, ValueType
from .reader import SpatenReader, open_features
from .translator import read_body, translate
from .values import decode_value

__all__ = [
    "FeatureIterator",
    "IteratorState",
    "SpatenReader",
    "open_features",
    "validate_header",
    "read_block_header",
    "read_block",
    "translate",
    "read_body",
    "decode_value",
    "Feature",
    "Value",
    "ValueType",
    "BlockHeader",
    "ReadStats",
    "SpatenError",
    "SpatenIOError",
    "FormatError",
]
