"""Container framing: file header and length-delimited blocks."""

from __future__ import annotations

from typing import BinaryIO, Optional

import structlog

from spaten.core.constants import (
    BLOCK_FIELDS_SIZE,
    BLOCK_FIELDS_STRUCT,
    BODY_LENGTH_SIZE,
    BODY_LENGTH_STRUCT,
    COMPRESSION_NONE,
    FILE_HEADER_SIZE,
    FILE_HEADER_STRUCT,
    FILE_MAGIC,
    FILE_VERSION,
    FLAGS_NONE,
    MESSAGE_TYPE_BODY,
)
from spaten.core.exceptions import (
    BlockTooLargeError,
    InvalidHeaderError,
    ReservedFlagsError,
    SpatenIOError,
    UnsupportedCompressionError,
    UnsupportedMessageTypeError,
)
from spaten.core.models import BlockHeader

logger = structlog.get_logger(__name__)


def read_exact(stream: BinaryIO, size: int, what: str) -> bytes:
    """
    Read exactly ``size`` bytes from ``stream``.

    Partial reads are retried until EOF.

    Raises:
        SpatenIOError: If the stream fails or ends before ``size`` bytes
    """
    chunks: list[bytes] = []
    remaining = size
    while remaining > 0:
        try:
            chunk = stream.read(remaining)
        except OSError as exc:
            raise SpatenIOError(f"Couldn't read {what}: {exc}") from exc
        if not chunk:
            got = size - remaining
            raise SpatenIOError(
                f"Unexpected end of stream reading {what}: got {got} of {size} bytes"
            )
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def validate_header(stream: BinaryIO) -> None:
    """
    Read and check the 8-byte SPATEN file header.

    Raises:
        SpatenIOError: If fewer than 8 bytes are available
        InvalidHeaderError: If magic or version don't match
    """
    raw = read_exact(stream, FILE_HEADER_SIZE, "file header")
    magic, version = FILE_HEADER_STRUCT.unpack(raw)

    if magic != FILE_MAGIC:
        raise InvalidHeaderError(
            f"Invalid SPATEN magic: {magic!r} (expected {FILE_MAGIC!r})"
        )
    if version != FILE_VERSION:
        raise InvalidHeaderError(
            f"Unsupported SPATEN version: {version!r} (expected {FILE_VERSION!r})"
        )


def read_block_header(stream: BinaryIO) -> Optional[BlockHeader]:
    """
    Read one block header.

    Returns None for the end-of-stream sentinel (a zero body length), in which
    case nothing past the 4 length bytes is consumed.

    Raises:
        SpatenIOError: On short reads
        ReservedFlagsError: If flags are non-zero
        UnsupportedCompressionError: If compression is non-zero
        UnsupportedMessageTypeError: If message type is non-zero
    """
    (body_length,) = BODY_LENGTH_STRUCT.unpack(
        read_exact(stream, BODY_LENGTH_SIZE, "body length")
    )
    if body_length == 0:
        return None

    flags, compression, message_type = BLOCK_FIELDS_STRUCT.unpack(
        read_exact(stream, BLOCK_FIELDS_SIZE, "block header")
    )

    if flags != FLAGS_NONE:
        raise ReservedFlagsError(f"Reserved block flags must be zero, got {flags:#06x}")
    if compression != COMPRESSION_NONE:
        raise UnsupportedCompressionError(
            f"Unsupported compression method: {compression}"
        )
    if message_type != MESSAGE_TYPE_BODY:
        raise UnsupportedMessageTypeError(f"Unknown message type: {message_type}")

    return BlockHeader(
        body_length=body_length,
        flags=flags,
        compression=compression,
        message_type=message_type,
    )


def read_block(
    stream: BinaryIO, max_block_size: Optional[int] = None
) -> Optional[bytes]:
    """
    Read the next block body.

    Args:
        stream: Binary stream positioned at a block header
        max_block_size: Reject bodies larger than this many bytes (None = no limit)

    Returns:
        The body bytes, or None once the terminator has been read

    Raises:
        SpatenIOError: On short reads
        FormatError: On invalid header fields or oversized body
    """
    header = read_block_header(stream)
    if header is None:
        logger.debug("end_of_stream")
        return None

    if max_block_size is not None and header.body_length > max_block_size:
        raise BlockTooLargeError(
            f"Block body of {header.body_length} bytes exceeds limit of "
            f"{max_block_size} bytes"
        )

    body = read_exact(stream, header.body_length, "block body")
    logger.debug("block_read", body_length=header.body_length)
    return body


__all__ = ["read_exact", "validate_header", "read_block_header", "read_block"]
