#!/usr/bin/env python3
"""ストリーム分割のテスト"""
import gzip
import io
import math
import os
import zlib

import pytest

from s3_stream_uploader.models.config import MEGABYTE
from s3_stream_uploader.models.errors import StreamReadError
from s3_stream_uploader.utils.stream_utils import iter_chunks, read_chunk
from conftest import FailingStream


class TrickleStream(io.RawIOBase):
    """パイプのように少しずつしか返さないストリーム"""

    def __init__(self, data: bytes, step: int):
        self.data = data
        self.step = step
        self.position = 0

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        n = min(len(buffer), self.step, len(self.data) - self.position)
        buffer[:n] = self.data[self.position:self.position + n]
        self.position += n
        return n


def test_twelve_megabytes_in_five_megabyte_parts():
    data = b"\x00" * (12 * MEGABYTE)
    sizes = [len(chunk) for chunk in iter_chunks(io.BytesIO(data), 5 * MEGABYTE)]
    assert sizes == [5 * MEGABYTE, 5 * MEGABYTE, 2 * MEGABYTE]


@pytest.mark.parametrize("size, part_size", [(1, 1), (10, 3), (9, 3), (1000, 7), (5, 100)])
def test_part_count_is_ceiling(size, part_size):
    data = bytes(range(256)) * (size // 256 + 1)
    data = data[:size]
    chunks = list(iter_chunks(io.BytesIO(data), part_size))

    assert len(chunks) == math.ceil(size / part_size)
    assert all(len(chunk) <= part_size for chunk in chunks)
    assert b"".join(chunks) == data


def test_empty_stream_yields_nothing():
    assert list(iter_chunks(io.BytesIO(b""), 10)) == []


def test_short_reads_are_accumulated():
    data = b"abcdefghij" * 10
    chunks = list(iter_chunks(TrickleStream(data, step=3), 25))
    assert [len(chunk) for chunk in chunks] == [25, 25, 25, 25]
    assert b"".join(chunks) == data


def test_chunks_are_lazy():
    stream = io.BytesIO(b"a" * 30)
    chunks = iter_chunks(stream, 10)
    assert stream.tell() == 0
    assert next(chunks) == b"a" * 10
    assert stream.tell() == 10


def test_read_error_is_stream_read_error():
    chunks = iter_chunks(FailingStream(fail_after=15), 10)
    assert next(chunks) == b"x" * 10
    with pytest.raises(StreamReadError, match="connection reset by peer") as excinfo:
        next(chunks)
    assert isinstance(excinfo.value.cause, OSError)


def test_truncated_gzip_is_stream_read_error():
    """途中で切れたgzipのEOFErrorも読み込みエラーとして扱う"""
    blob = gzip.compress(os.urandom(5000))
    stream = gzip.GzipFile(fileobj=io.BytesIO(blob[:len(blob) // 2]))

    chunks = iter_chunks(stream, 1024)
    assert len(next(chunks)) == 1024
    with pytest.raises(StreamReadError) as excinfo:
        list(chunks)
    assert isinstance(excinfo.value.cause, EOFError)


def test_decompressor_error_is_stream_read_error():
    class CorruptStream(io.RawIOBase):
        def readable(self) -> bool:
            return True

        def readinto(self, buffer) -> int:
            raise zlib.error("invalid stored block lengths")

    with pytest.raises(StreamReadError, match="invalid stored block lengths") as excinfo:
        read_chunk(CorruptStream(), 10)
    assert isinstance(excinfo.value.cause, zlib.error)


def test_text_stream_is_rejected():
    with pytest.raises(StreamReadError, match="binary mode"):
        read_chunk(io.StringIO("hello"), 10)


def test_invalid_part_size():
    with pytest.raises(ValueError):
        list(iter_chunks(io.BytesIO(b"x"), 0))
