import io
from importlib.metadata import entry_points

import pytest

from snappy_codec_adapter import (
    CompressionCodec,
    HandleMismatchError,
    InertCompressor,
    InertDecompressor,
    SnappyCodec,
    UnsupportedCodecOperation,
)
from snappy_codec_adapter.decorators import (
    SnappyCompressionInputStream,
    SnappyCompressionOutputStream,
)
from snappy_codec_adapter.snappy_codec import BLOCK_SIZE_KEY

from conftest import MockSink, compress_with


def test_codec_satisfies_protocol(codec):
    assert isinstance(codec, CompressionCodec)


def test_default_extension_is_stable(codec):
    assert codec.get_default_extension() == ".snappy"
    assert codec.get_default_extension() == SnappyCodec().get_default_extension()


def test_handles_are_shared_per_codec(codec):
    assert codec.create_compressor() is codec.create_compressor()
    assert codec.create_decompressor() is codec.create_decompressor()
    assert codec.get_compressor_type() is InertCompressor
    assert codec.get_decompressor_type() is InertDecompressor
    assert not codec.supports_buffer_pump()


def test_injected_handles_are_used():
    compressor = InertCompressor()
    decompressor = InertDecompressor()
    codec = SnappyCodec(compressor=compressor, decompressor=decompressor)

    assert codec.create_compressor() is compressor
    assert codec.create_decompressor() is decompressor


def test_round_trip_abc(codec):
    """Scenario: write "abc", finish, read it back followed by end of stream."""
    sink = MockSink()
    out = codec.create_output_stream(sink)
    assert isinstance(out, SnappyCompressionOutputStream)
    out.write(b"abc")
    out.finish()

    stream = codec.create_input_stream(io.BytesIO(sink.getvalue()))
    assert isinstance(stream, SnappyCompressionInputStream)
    assert stream.read(3) == b"abc"
    assert stream.read() == b""


def test_output_stream_with_own_handle_matches_plain(codec):
    payload = b"Hello, World!" * 10
    plain = compress_with(codec, payload)

    sink = MockSink()
    with codec.create_output_stream(sink, codec.create_compressor()) as out:
        out.write(payload)

    assert sink.getvalue() == plain


def test_input_stream_with_own_handle(codec):
    compressed = compress_with(codec, b"Hello, World!")

    stream = codec.create_input_stream(io.BytesIO(compressed), codec.create_decompressor())

    assert stream.read() == b"Hello, World!"


def test_foreign_handles_are_rejected(codec):
    other = SnappyCodec()

    with pytest.raises(HandleMismatchError):
        codec.create_output_stream(MockSink(), other.create_compressor())
    with pytest.raises(HandleMismatchError):
        codec.create_input_stream(io.BytesIO(b""), other.create_decompressor())
    with pytest.raises(HandleMismatchError):
        codec.create_output_stream(MockSink(), object())


def test_pooled_handle_fails_only_when_used(codec):
    """A pooled handle can be fetched and reset; it only fails when asked to process data."""
    decompressor = codec.create_decompressor()
    decompressor.reset()
    compressed = compress_with(codec, b"payload")

    with codec.create_input_stream(io.BytesIO(compressed), decompressor) as stream:
        assert stream.read() == b"payload"

    decompressor.reset()
    with pytest.raises(UnsupportedCodecOperation):
        decompressor.set_input(compressed)


def test_block_size_from_conf():
    codec = SnappyCodec.from_conf({BLOCK_SIZE_KEY: "16"})
    sink = MockSink()

    out = codec.create_output_stream(sink)
    out.write(b"x" * 40)

    assert codec.block_size == 16
    assert len(sink.writes) == 2


def test_block_size_default_from_empty_conf():
    assert SnappyCodec.from_conf({}).block_size == 65536


def test_invalid_block_size():
    with pytest.raises(ValueError):
        SnappyCodec(block_size=0)


def test_small_blocks_round_trip():
    codec = SnappyCodec(block_size=7)
    payload = b"chunk1" * 100 + b"chunk2" * 100

    compressed = compress_with(codec, payload)

    assert codec.create_input_stream(io.BytesIO(compressed)).read() == payload


def test_registered_entry_point():
    eps = entry_points()
    if hasattr(eps, "select"):
        group = eps.select(group="snappy_codec_adapter.codecs")
    else:
        group = eps.get("snappy_codec_adapter.codecs", [])

    loaded = {ep.name: ep.load() for ep in group}

    assert loaded["snappy"] is SnappyCodec
