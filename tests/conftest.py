import io

import pytest

from snappy_codec_adapter import SnappyCodec


class MockSink:
    """Raw sink that records every write and flush."""

    def __init__(self):
        self.writes = []
        self.flushes = 0
        self.closed = False

    def write(self, data):
        self.writes.append(bytes(data))
        return len(data)

    def flush(self):
        self.flushes += 1

    def close(self):
        self.closed = True

    def getvalue(self):
        return b"".join(self.writes)


class TrickleSource:
    """Raw source that hands out at most ``step`` bytes per read."""

    def __init__(self, data, step=3):
        self._data = io.BytesIO(data)
        self.step = step
        self.reads = 0

    def read(self, size=-1):
        self.reads += 1
        if size < 0 or size > self.step:
            size = self.step
        return self._data.read(size)


class FailingSink:
    def write(self, data):
        raise OSError("disk full")

    def flush(self):
        pass


@pytest.fixture
def codec():
    return SnappyCodec()


@pytest.fixture
def sink():
    return MockSink()


def compress_with(codec, data):
    sink = MockSink()
    with codec.create_output_stream(sink) as out:
        out.write(data)
    return sink.getvalue()
