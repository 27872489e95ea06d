from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from typing import Any, Optional, Protocol, runtime_checkable

from snappy_codec_adapter.types import BinarySink, BinarySource, Buffer, Configuration


class HandleCapability(enum.Enum):
    """What a pooled compressor/decompressor handle can actually do."""

    BUFFER_PUMP = "buffer-pump"
    # Allocatable and poolable, but every data operation fails.
    STREAM_ONLY = "stream-only"


@runtime_checkable
class Compressor(Protocol):
    """
    Interface definition for a pooled buffer-pump compressor.
    The host framework feeds input with ``set_input`` and drains it with ``compress``.
    """
    capability: HandleCapability

    def set_input(self, b: Buffer, off: int = 0, length: Optional[int] = None) -> None: ...
    def needs_input(self) -> bool: ...
    def set_dictionary(self, b: Optional[Buffer], off: int = 0, length: Optional[int] = None) -> None: ...
    def get_bytes_read(self) -> int: ...
    def get_bytes_written(self) -> int: ...
    def finish(self) -> None: ...
    def finished(self) -> bool: ...
    def compress(self, b: bytearray, off: int = 0, length: Optional[int] = None) -> int: ...
    def reset(self) -> None: ...
    def end(self) -> None: ...
    def reinit(self, conf: Optional[Configuration] = None) -> None: ...


@runtime_checkable
class Decompressor(Protocol):
    """
    Interface definition for a pooled buffer-pump decompressor.
    """
    capability: HandleCapability

    def set_input(self, b: Buffer, off: int = 0, length: Optional[int] = None) -> None: ...
    def needs_input(self) -> bool: ...
    def set_dictionary(self, b: Optional[Buffer], off: int = 0, length: Optional[int] = None) -> None: ...
    def needs_dictionary(self) -> bool: ...
    def finished(self) -> bool: ...
    def decompress(self, b: bytearray, off: int = 0, length: Optional[int] = None) -> int: ...
    def get_remaining(self) -> int: ...
    def reset(self) -> None: ...
    def end(self) -> None: ...
    def reinit(self, conf: Optional[Configuration] = None) -> None: ...


class CompressionOutputStream(ABC):
    """
    Base class for compressing stream decorators.

    ``out`` is the wrapped compressing stream, owned exclusively by the
    decorator. The raw sink underneath it belongs to the caller and is never
    closed here.
    """

    def __init__(self, out: Any) -> None:
        self.out = out
        self.closed = False

    @abstractmethod
    def write(self, b: Buffer, off: int = 0, length: Optional[int] = None) -> None:
        """Writes ``length`` bytes of ``b`` starting at ``off``."""
        raise NotImplementedError

    @abstractmethod
    def write_byte(self, value: int) -> None:
        """Writes a single byte."""
        raise NotImplementedError

    @abstractmethod
    def finish(self) -> None:
        """Writes all pending compressed data to the raw sink without closing it."""
        raise NotImplementedError

    @abstractmethod
    def reset_state(self) -> None:
        """Prepares the stream for a new segment of input."""
        raise NotImplementedError

    def flush(self) -> None:
        self.out.flush()

    def close(self) -> None:
        if self.closed:
            return
        try:
            self.finish()
        finally:
            self.closed = True
            self.out.close()

    def __enter__(self) -> CompressionOutputStream:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


class CompressionInputStream(ABC):
    """
    Base class for decompressing stream decorators.

    ``in_`` is the wrapped decompressing stream, owned exclusively by the
    decorator. The raw source belongs to the caller.
    """

    def __init__(self, in_: Any) -> None:
        self.in_ = in_
        self.closed = False

    @abstractmethod
    def read(self, size: int = -1) -> bytes:
        """Reads up to ``size`` decompressed bytes; ``b""`` at end of stream."""
        raise NotImplementedError

    @abstractmethod
    def readinto(self, buffer: bytearray, off: int = 0, length: Optional[int] = None) -> int:
        """Reads into ``buffer[off:off + length]``; returns 0 at end of stream."""
        raise NotImplementedError

    @abstractmethod
    def read_byte(self) -> Optional[int]:
        """Reads a single byte, or ``None`` at end of stream."""
        raise NotImplementedError

    @abstractmethod
    def reset_state(self) -> None:
        """Prepares the stream for a new segment of compressed input."""
        raise NotImplementedError

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self.in_.close()

    def __enter__(self) -> CompressionInputStream:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


@runtime_checkable
class CompressionCodec(Protocol):
    """
    The factory surface a host framework discovers and instantiates.
    """

    def create_output_stream(
        self, sink: BinarySink, compressor: Optional[Compressor] = None
    ) -> CompressionOutputStream: ...

    def create_input_stream(
        self, source: BinarySource, decompressor: Optional[Decompressor] = None
    ) -> CompressionInputStream: ...

    def create_compressor(self) -> Compressor: ...
    def create_decompressor(self) -> Decompressor: ...
    def get_compressor_type(self) -> type[Compressor]: ...
    def get_decompressor_type(self) -> type[Decompressor]: ...
    def get_default_extension(self) -> str: ...
