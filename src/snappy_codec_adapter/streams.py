"""
Snappy framed streams built on ``cramjam.snappy``.

Output is written in the snappy framing format
(https://github.com/google/snappy/blob/main/framing_format.txt): every block
of input becomes a self-contained framed segment, so a stream is a
concatenation of segments, each starting with the stream identifier chunk.
"""
from __future__ import annotations

import logging
from typing import Optional

import cramjam

from snappy_codec_adapter.errors import CorruptStreamError
from snappy_codec_adapter.types import BinarySink, BinarySource, Buffer

logger = logging.getLogger(__name__)

MAX_BLOCK_SIZE = 65536
STREAM_IDENTIFIER = b"\xff\x06\x00\x00sNaPpY"

CHUNK_HEADER_SIZE = 4
CHUNK_COMPRESSED = 0x00
CHUNK_UNCOMPRESSED = 0x01
CHUNK_SKIPPABLE_MIN = 0x80
CHUNK_STREAM_IDENTIFIER = 0xFF


def check_block_size(block_size: int) -> int:
    if not 1 <= block_size <= MAX_BLOCK_SIZE:
        raise ValueError(
            f"block_size must be between 1 and {MAX_BLOCK_SIZE}, got {block_size}"
        )
    return block_size


class SnappyOutputStream:
    """
    Compressing stream over a raw sink.

    Input is buffered until a full block is available; ``flush`` emits the
    partial block. The sink is never closed by this stream.
    """

    def __init__(self, sink: BinarySink, block_size: int = MAX_BLOCK_SIZE) -> None:
        self._sink = sink
        self.block_size = check_block_size(block_size)
        self._buffer = bytearray()
        self.closed = False

    def write(self, data: Buffer) -> int:
        self._check_open()
        view = memoryview(data).cast("B")
        self._buffer += view
        while len(self._buffer) >= self.block_size:
            block = self._buffer[: self.block_size]
            del self._buffer[: self.block_size]
            self._write_block(block)
        return view.nbytes

    def flush(self) -> None:
        self._check_open()
        if self._buffer:
            # a failed write is not retried
            block, self._buffer = self._buffer, bytearray()
            self._write_block(block)
        sink_flush = getattr(self._sink, "flush", None)
        if sink_flush is not None:
            sink_flush()

    def close(self) -> None:
        if self.closed:
            return
        try:
            self.flush()
        finally:
            self.closed = True
            self._buffer = bytearray()

    def _write_block(self, block: bytearray) -> None:
        segment = bytes(cramjam.snappy.compress(bytes(block)))
        logger.debug("Writing snappy segment: %d -> %d bytes", len(block), len(segment))
        self._sink.write(segment)

    def _check_open(self) -> None:
        if self.closed:
            raise ValueError("I/O operation on closed snappy stream")


class SnappyInputStream:
    """
    Decompressing stream over a raw source.

    Nothing is read from the source until the first read call, so a stream
    can be opened over a buffer that is filled later.
    """

    def __init__(self, source: BinarySource) -> None:
        self._source = source
        self._pending = b""
        self._pos = 0
        self._seen_identifier = False
        self._eof = False
        self.closed = False

    def read(self, size: Optional[int] = -1) -> bytes:
        self._check_open()
        if size is None or size < 0:
            parts = [self._take(self._available())]
            while self._fill():
                parts.append(self._take(self._available()))
            return b"".join(parts)

        out = bytearray()
        while len(out) < size:
            if not self._available() and not self._fill():
                break
            out += self._take(size - len(out))
        return bytes(out)

    def readinto(self, buffer: Buffer) -> int:
        self._check_open()
        view = memoryview(buffer).cast("B")
        if not view.nbytes:
            return 0
        if not self._available() and not self._fill():
            return 0
        data = self._take(view.nbytes)
        view[: len(data)] = data
        return len(data)

    def close(self) -> None:
        self.closed = True
        self._pending = b""
        self._pos = 0

    def _available(self) -> int:
        return len(self._pending) - self._pos

    def _take(self, size: int) -> bytes:
        data = self._pending[self._pos : self._pos + size]
        self._pos += len(data)
        return data

    def _fill(self) -> bool:
        """Decodes chunks until one yields data. Returns False at end of stream."""
        while not self._eof:
            header = self._read_exact(CHUNK_HEADER_SIZE, allow_eof=True)
            if not header:
                self._eof = True
                break

            chunk_type = header[0]
            body = self._read_exact(int.from_bytes(header[1:], "little"))

            if chunk_type == CHUNK_STREAM_IDENTIFIER:
                if body != STREAM_IDENTIFIER[CHUNK_HEADER_SIZE:]:
                    raise CorruptStreamError("invalid snappy stream identifier")
                self._seen_identifier = True
                continue

            if not self._seen_identifier:
                raise CorruptStreamError("stream does not start with a snappy stream identifier")

            if chunk_type in (CHUNK_COMPRESSED, CHUNK_UNCOMPRESSED):
                # cramjam decodes whole framed streams, CRC check included
                data = bytes(cramjam.snappy.decompress(STREAM_IDENTIFIER + header + body))
                if data:
                    self._pending = data
                    self._pos = 0
                    return True
                continue

            if chunk_type >= CHUNK_SKIPPABLE_MIN:
                logger.debug("Skipping snappy chunk 0x%02x (%d bytes)", chunk_type, len(body))
                continue

            raise CorruptStreamError(f"unsupported unskippable chunk type 0x{chunk_type:02x}")

        return False

    def _read_exact(self, size: int, allow_eof: bool = False) -> bytes:
        data = bytearray()
        while len(data) < size:
            piece = self._source.read(size - len(data))
            if not piece:
                break
            data += piece

        if len(data) == size:
            return bytes(data)
        if allow_eof and not data:
            return b""
        raise CorruptStreamError(
            f"truncated snappy stream: expected {size} bytes, got {len(data)}"
        )

    def _check_open(self) -> None:
        if self.closed:
            raise ValueError("I/O operation on closed snappy stream")


def wrap_output(sink: BinarySink, block_size: int = MAX_BLOCK_SIZE) -> SnappyOutputStream:
    return SnappyOutputStream(sink, block_size=block_size)


def wrap_input(source: BinarySource) -> SnappyInputStream:
    return SnappyInputStream(source)
