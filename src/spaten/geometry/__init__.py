"""Geometry decoding."""

from .wkb import decode_wkb

__all__ = ["decode_wkb"]
