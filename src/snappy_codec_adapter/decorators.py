from __future__ import annotations

import logging
from typing import Optional

from snappy_codec_adapter.codec import CompressionInputStream, CompressionOutputStream
from snappy_codec_adapter.streams import MAX_BLOCK_SIZE, wrap_input, wrap_output
from snappy_codec_adapter.types import BinarySink, BinarySource, Buffer

logger = logging.getLogger(__name__)


def _window(b: Buffer, off: int, length: Optional[int]) -> memoryview:
    view = memoryview(b).cast("B")
    end = view.nbytes if length is None else off + length
    if off < 0 or end < off or end > view.nbytes:
        raise IndexError(f"invalid window off={off} length={length} for {view.nbytes} bytes")
    return view[off:end]


class SnappyCompressionOutputStream(CompressionOutputStream):
    """
    Writes through a snappy compressing stream.

    The wrapped stream only appends, so ``reset_state`` cannot rewind; it
    flushes what has been written so far instead.
    """

    def __init__(self, sink: BinarySink, block_size: int = MAX_BLOCK_SIZE) -> None:
        super().__init__(wrap_output(sink, block_size=block_size))
        logger.debug("Created snappy output stream (block_size=%d)", block_size)

    def write(self, b: Buffer, off: int = 0, length: Optional[int] = None) -> None:
        self.out.write(_window(b, off, length))

    def write_byte(self, value: int) -> None:
        self.out.write(bytes((value & 0xFF,)))

    def finish(self) -> None:
        self.out.flush()

    def reset_state(self) -> None:
        self.out.flush()


class SnappyCompressionInputStream(CompressionInputStream):
    """
    Reads through a snappy decompressing stream.
    """

    def __init__(self, source: BinarySource) -> None:
        super().__init__(wrap_input(source))
        logger.debug("Created snappy input stream")

    def read(self, size: int = -1) -> bytes:
        return self.in_.read(size)

    def readinto(self, buffer: bytearray, off: int = 0, length: Optional[int] = None) -> int:
        return self.in_.readinto(_window(buffer, off, length))

    def read_byte(self) -> Optional[int]:
        data = self.in_.read(1)
        return data[0] if data else None

    def reset_state(self) -> None:
        # Each compressed segment gets its own stream, so there is nothing to clear.
        pass
