"""Prometheus metrics for SPATEN decoding."""

from prometheus_client import Counter, Histogram

# Counters
BLOCKS_READ = Counter("spaten_blocks_read_total", "Number of blocks read")
BLOCK_BYTES_READ = Counter(
    "spaten_block_bytes_read_total", "Total block body bytes read"
)
FEATURES_DECODED = Counter(
    "spaten_features_decoded_total", "Number of features decoded"
)
DECODE_ERRORS = Counter(
    "spaten_decode_errors_total",
    "Errors raised while reading or decoding blocks",
    ["kind"],
)

# Histograms
BLOCK_DECODE_DURATION = Histogram(
    "spaten_block_decode_duration_seconds",
    "Duration of translating one block into features",
)

__all__ = [
    "BLOCKS_READ",
    "BLOCK_BYTES_READ",
    "FEATURES_DECODED",
    "DECODE_ERRORS",
    "BLOCK_DECODE_DURATION",
]
