"""SPATEN - streaming decoder for the SPATEN geospatial container format."""

__version__ = "0.1.0"

from .core import (  # noqa: E402
    Feature,
    FeatureIterator,
    FormatError,
    SpatenError,
    SpatenIOError,
    SpatenReader,
    Value,
    ValueType,
    open_features,
)

__all__ = [
    "FeatureIterator",
    "SpatenReader",
    "open_features",
    "Feature",
    "Value",
    "ValueType",
    "SpatenError",
    "SpatenIOError",
    "FormatError",
]
