from collections.abc import Mapping
from typing import Any, Optional, Protocol, Union

# Raw transport types
Buffer = Union[bytes, bytearray, memoryview]
Configuration = Mapping[str, Any]


class BinarySink(Protocol):
    def write(self, data: bytes) -> Optional[int]: ...


class BinarySource(Protocol):
    def read(self, size: int = -1) -> bytes: ...
