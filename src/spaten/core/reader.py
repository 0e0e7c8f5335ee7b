"""SpatenReader for reading SPATEN files from disk."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, BinaryIO, Iterator, Optional

import structlog

from spaten.config.config import ReaderConfig
from spaten.core.iterator import FeatureIterator
from spaten.core.models import Feature, ReadStats

logger = structlog.get_logger(__name__)


class SpatenReader:
    """
    Reader for SPATEN files.

    Opens the file and validates its header immediately. Features are
    streamed through a single forward-only FeatureIterator.
    """

    def __init__(self, path: str, config: Optional[ReaderConfig] = None) -> None:
        self.path = path
        self.config = config or ReaderConfig()
        self._f: BinaryIO = open(path, "rb")
        logger.info(
            "opening_spaten_file",
            path=path,
            max_block_size=self.config.max_block_size,
        )
        try:
            self._features = FeatureIterator(
                self._f, max_block_size=self.config.max_block_size
            )
        except Exception:
            self._f.close()
            raise

    def features(self) -> FeatureIterator:
        """Return the feature iterator. It can be consumed only once."""
        return self._features

    def __iter__(self) -> Iterator[Feature]:
        return self._features

    @property
    def stats(self) -> ReadStats:
        return self._features.stats

    @property
    def closed(self) -> bool:
        return self._f.closed

    def close(self) -> None:
        if not self._f.closed:
            self._f.close()

    def __enter__(self) -> "SpatenReader":
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Any,
    ) -> None:
        self.close()


@contextmanager
def open_features(
    path: str, config: Optional[ReaderConfig] = None
) -> Iterator[FeatureIterator]:
    """Open a SPATEN file and yield its feature iterator; the file is closed on exit."""
    with SpatenReader(path, config=config) as reader:
        yield reader.features()


__all__ = ["SpatenReader", "open_features"]
