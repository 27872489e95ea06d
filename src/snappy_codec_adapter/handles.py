"""
Stand-in compressor/decompressor handles.

Host frameworks often take a handle from their pool before opening a stream,
whether or not the stream uses it. These handles can be allocated, pooled
and reset freely; they only fail once something tries to pump data through
them.
"""
from __future__ import annotations

from typing import Any, ClassVar, NoReturn, Optional

from snappy_codec_adapter.codec import HandleCapability
from snappy_codec_adapter.errors import UnsupportedCodecOperation
from snappy_codec_adapter.types import Buffer, Configuration


class _InertHandle:
    __slots__ = ()

    NAME: ClassVar[str] = ""
    capability: ClassVar[HandleCapability] = HandleCapability.STREAM_ONLY

    def _unsupported(self, operation: str) -> NoReturn:
        raise UnsupportedCodecOperation(self.NAME, operation)

    def reset(self) -> None:
        # nothing to be reset
        pass

    def reinit(self, conf: Optional[Configuration] = None) -> None:
        pass

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.capability.value}>"


class InertCompressor(_InertHandle):
    __slots__ = ()

    NAME = "Snappy Compressor"

    def set_input(self, b: Buffer, off: int = 0, length: Optional[int] = None) -> None:
        self._unsupported("set_input")

    def needs_input(self) -> bool:
        self._unsupported("needs_input")

    def set_dictionary(self, b: Optional[Buffer], off: int = 0, length: Optional[int] = None) -> None:
        self._unsupported("set_dictionary")

    def get_bytes_read(self) -> int:
        self._unsupported("get_bytes_read")

    def get_bytes_written(self) -> int:
        self._unsupported("get_bytes_written")

    def finish(self) -> None:
        self._unsupported("finish")

    def finished(self) -> bool:
        self._unsupported("finished")

    def compress(self, b: bytearray, off: int = 0, length: Optional[int] = None) -> int:
        self._unsupported("compress")

    def end(self) -> None:
        self._unsupported("end")


class InertDecompressor(_InertHandle):
    __slots__ = ()

    NAME = "Snappy Decompressor"

    def set_input(self, b: Buffer, off: int = 0, length: Optional[int] = None) -> None:
        self._unsupported("set_input")

    def needs_input(self) -> bool:
        self._unsupported("needs_input")

    def set_dictionary(self, b: Optional[Buffer], off: int = 0, length: Optional[int] = None) -> None:
        self._unsupported("set_dictionary")

    def needs_dictionary(self) -> bool:
        self._unsupported("needs_dictionary")

    def finished(self) -> bool:
        self._unsupported("finished")

    def decompress(self, b: bytearray, off: int = 0, length: Optional[int] = None) -> int:
        self._unsupported("decompress")

    def get_remaining(self) -> int:
        self._unsupported("get_remaining")

    def end(self) -> None:
        self._unsupported("end")


def is_stream_only(handle: Any) -> bool:
    """True if ``handle`` cannot be used to pump buffers directly."""
    return getattr(handle, "capability", None) is HandleCapability.STREAM_ONLY
