"""
Monitoring utilities for SPATEN.
"""

from spaten.monitoring.metrics import (
    BLOCK_BYTES_READ,
    BLOCK_DECODE_DURATION,
    BLOCKS_READ,
    DECODE_ERRORS,
    FEATURES_DECODED,
)

__all__ = [
    "BLOCKS_READ",
    "BLOCK_BYTES_READ",
    "FEATURES_DECODED",
    "DECODE_ERRORS",
    "BLOCK_DECODE_DURATION",
]
