import io

import pytest

from qrprint.chunker import Chunk, count_chunks, iter_chunks, make_label
from qrprint.config import MAX_CHUNK


class TrickleStream(io.RawIOBase):
    """Raw stream that returns at most `step` bytes per read."""

    def __init__(self, data, step):
        self._data = data
        self._pos = 0
        self._step = step

    def readable(self):
        return True

    def readinto(self, b):
        n = min(self._step, len(b), len(self._data) - self._pos)
        b[:n] = self._data[self._pos:self._pos + n]
        self._pos += n
        return n


class FailingStream(io.RawIOBase):
    def __init__(self, fail_after):
        self._calls = 0
        self._fail_after = fail_after

    def readable(self):
        return True

    def readinto(self, b):
        self._calls += 1
        if self._calls > self._fail_after:
            raise OSError("device error")
        b[:1] = b"x"
        return 1


def test_make_label():
    assert make_label(0, 10) == "SEG0-10"
    assert make_label(12, MAX_CHUNK) == "SEG12-2300"


def test_make_label_rejects_negative():
    with pytest.raises(ValueError):
        make_label(-1, 5)
    with pytest.raises(ValueError):
        make_label(0, -5)


def test_empty_stream_yields_nothing():
    assert list(iter_chunks(io.BytesIO(b""))) == []


def test_short_input_is_one_chunk():
    chunks = list(iter_chunks(io.BytesIO(b"HELLO WRLD")))
    assert chunks == [Chunk(index=0, data=b"HELLO WRLD", label="SEG0-10")]


def test_one_byte_past_bound_gives_two_chunks():
    data = bytes(range(256)) * 9  # 2304 bytes
    data = data[:MAX_CHUNK + 1]
    chunks = list(iter_chunks(io.BytesIO(data)))

    assert [len(c) for c in chunks] == [MAX_CHUNK, 1]
    assert [c.label for c in chunks] == [f"SEG0-{MAX_CHUNK}", "SEG1-1"]
    assert b"".join(c.data for c in chunks) == data


@pytest.mark.parametrize("length", [1, 6, 7, 13, 21, 22])
def test_chunk_count_matches_ceiling(length):
    data = bytes(length)
    chunks = list(iter_chunks(io.BytesIO(data), chunk_size=7))
    assert len(chunks) == count_chunks(length, 7)
    assert [c.index for c in chunks] == list(range(len(chunks)))
    assert all(len(c) <= 7 for c in chunks)


def test_count_chunks_zero():
    assert count_chunks(0) == 0


def test_chunks_do_not_share_read_buffer():
    chunks = iter_chunks(io.BytesIO(b"aaabbbc"), chunk_size=3)
    first = next(chunks)
    rest = list(chunks)
    assert first.data == b"aaa"
    assert [c.data for c in rest] == [b"bbb", b"c"]


def test_short_reads_still_fill_chunks():
    data = bytes(range(100))
    chunks = list(iter_chunks(TrickleStream(data, step=3), chunk_size=40))
    assert [len(c) for c in chunks] == [40, 40, 20]
    assert b"".join(c.data for c in chunks) == data


def test_read_error_propagates():
    chunks = iter_chunks(FailingStream(fail_after=2), chunk_size=4)
    with pytest.raises(OSError):
        list(chunks)


def test_rejects_bad_chunk_size():
    with pytest.raises(ValueError):
        list(iter_chunks(io.BytesIO(b"x"), chunk_size=0))
