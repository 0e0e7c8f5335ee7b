"""Exceptions raised while decoding SPATEN streams."""


class SpatenError(Exception):
    """Base exception for all SPATEN decoding errors."""

    pass


class SpatenIOError(SpatenError, IOError):
    """Raised on short reads or when the underlying stream fails."""

    pass


class FormatError(SpatenError, ValueError):
    """Raised when the bytes do not follow the SPATEN format."""

    pass


class InvalidHeaderError(FormatError):
    """Raised when the file magic or version does not match."""

    pass


class ReservedFlagsError(FormatError):
    """Raised when a block header carries non-zero reserved flags."""

    pass


class UnsupportedCompressionError(FormatError):
    """Raised when a block declares a compression method."""

    pass


class UnsupportedMessageTypeError(FormatError):
    """Raised when a block declares an unknown payload kind."""

    pass


class BlockTooLargeError(FormatError):
    """Raised when a block body exceeds the configured size limit."""

    pass


class MessageDecodeError(FormatError):
    """Raised when a block body is not a valid serialized message."""

    pass


class GeometryDecodeError(FormatError):
    """Raised when feature geometry bytes are not valid WKB."""

    pass


class ValueDecodeError(FormatError):
    """Raised when a tag value cannot be interpreted with its declared type."""

    pass
