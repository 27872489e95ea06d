class CodecError(Exception):
    """Base class for errors raised by the snappy codec adapter."""


class UnsupportedCodecOperation(CodecError, NotImplementedError):
    """
    Raised by the inert compressor/decompressor handles.

    The snappy codec only works through its stream decorators; a handle
    obtained from ``create_compressor``/``create_decompressor`` cannot pump
    buffers.
    """

    def __init__(self, handle_name: str, operation: str) -> None:
        super().__init__(f"{handle_name} is not supported (attempted {operation})")
        self.handle_name = handle_name
        self.operation = operation


class HandleMismatchError(CodecError, ValueError):
    """A handle passed to a stream factory was not issued by that codec."""


class CorruptStreamError(CodecError, OSError):
    """The framed snappy stream is malformed or truncated."""
