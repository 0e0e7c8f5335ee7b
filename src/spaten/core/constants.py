"""
SPATEN format constants, magic numbers and struct layouts.
"""
import struct

# Magic numbers
FILE_MAGIC = b"SPAT"
FILE_VERSION = b"\0\0\0\0"

# Struct formats
# File header: magic(4) + version(4) = 8 bytes
FILE_HEADER_STRUCT = struct.Struct("<4s4s")

# Block length prefix: bodylen(u32). A value of 0 terminates the stream.
BODY_LENGTH_STRUCT = struct.Struct("<I")

# Block header remainder: flags(2) + compression(1) + message_type(1) = 4 bytes
# Only present when bodylen != 0.
BLOCK_FIELDS_STRUCT = struct.Struct("<HBB")

# Tag values for INT and DOUBLE: 8 bytes little endian
INT_VALUE_STRUCT = struct.Struct("<q")
DOUBLE_VALUE_STRUCT = struct.Struct("<d")

# Sizes
FILE_HEADER_SIZE = FILE_HEADER_STRUCT.size  # 8 bytes
BODY_LENGTH_SIZE = BODY_LENGTH_STRUCT.size  # 4 bytes
BLOCK_FIELDS_SIZE = BLOCK_FIELDS_STRUCT.size  # 4 bytes
NUMERIC_VALUE_SIZE = 8

# Block header reserved values (anything else is rejected)
FLAGS_NONE = 0
COMPRESSION_NONE = 0
MESSAGE_TYPE_BODY = 0

# Largest body length the u32 prefix can express
MAX_BODY_LENGTH = 0xFFFFFFFF
