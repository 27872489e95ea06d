from __future__ import annotations

import logging
from typing import Optional

from snappy_codec_adapter.codec import Compressor, Decompressor
from snappy_codec_adapter.decorators import (
    SnappyCompressionInputStream,
    SnappyCompressionOutputStream,
)
from snappy_codec_adapter.errors import HandleMismatchError
from snappy_codec_adapter.handles import InertCompressor, InertDecompressor
from snappy_codec_adapter.streams import MAX_BLOCK_SIZE, check_block_size
from snappy_codec_adapter.types import BinarySink, BinarySource, Configuration

logger = logging.getLogger(__name__)

BLOCK_SIZE_KEY = "io.compression.codec.snappy.blocksize"


class SnappyCodec:
    """
    Compression codec that exposes snappy framed streams to a host framework.

    Compression only happens inside the stream decorators. The compressor and
    decompressor handed out by this codec are inert: they satisfy the host's
    pooling, and each one fails on the first attempt to process data.
    """

    DEFAULT_EXTENSION = ".snappy"

    def __init__(
        self,
        compressor: Optional[InertCompressor] = None,
        decompressor: Optional[InertDecompressor] = None,
        block_size: int = MAX_BLOCK_SIZE,
    ) -> None:
        self.block_size = check_block_size(block_size)
        # NOTE: stream creation only accepts these exact handles back
        self._compressor = compressor if compressor is not None else InertCompressor()
        self._decompressor = decompressor if decompressor is not None else InertDecompressor()
        logger.debug("Initialized snappy codec (block_size=%d)", self.block_size)

    @classmethod
    def from_conf(cls, conf: Configuration) -> SnappyCodec:
        """Builds a codec from a host configuration mapping."""
        return cls(block_size=int(conf.get(BLOCK_SIZE_KEY, MAX_BLOCK_SIZE)))

    def create_output_stream(
        self, sink: BinarySink, compressor: Optional[Compressor] = None
    ) -> SnappyCompressionOutputStream:
        if compressor is not None and compressor is not self._compressor:
            raise HandleMismatchError(
                f"compressor {compressor!r} was not created by this codec"
            )
        return SnappyCompressionOutputStream(sink, block_size=self.block_size)

    def create_input_stream(
        self, source: BinarySource, decompressor: Optional[Decompressor] = None
    ) -> SnappyCompressionInputStream:
        if decompressor is not None and decompressor is not self._decompressor:
            raise HandleMismatchError(
                f"decompressor {decompressor!r} was not created by this codec"
            )
        return SnappyCompressionInputStream(source)

    def create_compressor(self) -> InertCompressor:
        return self._compressor

    def create_decompressor(self) -> InertDecompressor:
        return self._decompressor

    def get_compressor_type(self) -> type[InertCompressor]:
        return type(self._compressor)

    def get_decompressor_type(self) -> type[InertDecompressor]:
        return type(self._decompressor)

    def get_default_extension(self) -> str:
        return self.DEFAULT_EXTENSION

    def supports_buffer_pump(self) -> bool:
        return False
