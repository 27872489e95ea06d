from snappy_codec_adapter.codec import (
    CompressionCodec,
    CompressionInputStream,
    CompressionOutputStream,
    Compressor,
    Decompressor,
    HandleCapability,
)
from snappy_codec_adapter.errors import (
    CodecError,
    CorruptStreamError,
    HandleMismatchError,
    UnsupportedCodecOperation,
)
from snappy_codec_adapter.handles import InertCompressor, InertDecompressor, is_stream_only
from snappy_codec_adapter.snappy_codec import SnappyCodec

__all__ = [
    "CodecError",
    "CompressionCodec",
    "CompressionInputStream",
    "CompressionOutputStream",
    "Compressor",
    "CorruptStreamError",
    "Decompressor",
    "HandleCapability",
    "HandleMismatchError",
    "InertCompressor",
    "InertDecompressor",
    "SnappyCodec",
    "UnsupportedCodecOperation",
    "is_stream_only",
]
