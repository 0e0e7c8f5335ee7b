"""Block body message schema."""

from .messages import (
    Body,
    FeatureRecord,
    GeomType,
    Meta,
    Tag,
    decode_body,
    decode_feature_records,
)

__all__ = [
    "Body",
    "FeatureRecord",
    "GeomType",
    "Meta",
    "Tag",
    "decode_body",
    "decode_feature_records",
]
