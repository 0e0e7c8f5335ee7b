"""Lazy, block-at-a-time iteration over the features of a SPATEN stream."""

from __future__ import annotations

import time
from collections import deque
from enum import Enum
from typing import BinaryIO, Deque, Iterator, Optional

import structlog

from spaten.core.exceptions import SpatenError
from spaten.core.framing import read_block, validate_header
from spaten.core.models import Feature, ReadStats
from spaten.core.translator import GeometryDecoder, MessageDecoder, translate
from spaten.fileformat.messages import decode_feature_records
from spaten.geometry.wkb import decode_wkb
from spaten.monitoring.metrics import (
    BLOCK_BYTES_READ,
    BLOCK_DECODE_DURATION,
    BLOCKS_READ,
    DECODE_ERRORS,
    FEATURES_DECODED,
)

logger = structlog.get_logger(__name__)


class IteratorState(Enum):
    STREAMING = "streaming"
    EXHAUSTED = "exhausted"


class FeatureIterator:
    """
    Streams features out of a SPATEN file one block at a time.

    The header is validated on construction. Only the current block's features
    are held in memory. The stream is read from but never closed.

    Usage:
        with open("nrw-motorway.spaten", "rb") as f:
            for feature in FeatureIterator(f):
                print(feature.tags)
    """

    def __init__(
        self,
        stream: BinaryIO,
        *,
        max_block_size: Optional[int] = None,
        message_decoder: MessageDecoder = decode_feature_records,
        geometry_decoder: GeometryDecoder = decode_wkb,
    ) -> None:
        validate_header(stream)
        self._stream = stream
        self._max_block_size = max_block_size
        self._message_decoder = message_decoder
        self._geometry_decoder = geometry_decoder
        self._queue: Deque[Feature] = deque()
        self._state = IteratorState.STREAMING
        self._stats = ReadStats()

    @property
    def state(self) -> IteratorState:
        return self._state

    @property
    def exhausted(self) -> bool:
        return self._state is IteratorState.EXHAUSTED

    @property
    def stats(self) -> ReadStats:
        return self._stats

    def __iter__(self) -> Iterator[Feature]:
        return self

    def __next__(self) -> Feature:
        while not self._queue:
            if self._state is IteratorState.EXHAUSTED:
                raise StopIteration
            self._fill_queue()
        return self._queue.popleft()

    def _fill_queue(self) -> None:
        """Read the next block into the queue, or switch to EXHAUSTED."""
        try:
            block = read_block(self._stream, self._max_block_size)
            if block is None:
                self._state = IteratorState.EXHAUSTED
                logger.debug(
                    "stream_exhausted",
                    blocks=self._stats.blocks,
                    features=self._stats.features,
                    body_bytes=self._stats.body_bytes,
                )
                return

            started = time.perf_counter()
            features = translate(block, self._message_decoder, self._geometry_decoder)
            BLOCK_DECODE_DURATION.observe(time.perf_counter() - started)
        except SpatenError as exc:
            # block boundaries after a failure can't be trusted
            self._state = IteratorState.EXHAUSTED
            DECODE_ERRORS.labels(kind=type(exc).__name__).inc()
            logger.warning(
                "block_decode_failed",
                block_index=self._stats.blocks,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise

        self._stats.blocks += 1
        self._stats.body_bytes += len(block)
        self._stats.features += len(features)
        BLOCKS_READ.inc()
        BLOCK_BYTES_READ.inc(len(block))
        FEATURES_DECODED.inc(len(features))

        self._queue = deque(features)


__all__ = ["FeatureIterator", "IteratorState"]
