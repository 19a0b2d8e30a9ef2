"""
Split a binary stream into bounded, labelled chunks.

Each chunk becomes one symbol. The label travels inside the symbol as an
alphanumeric segment and also names the bitmap written for the chunk.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import BinaryIO, Iterator

from .config import MAX_CHUNK


logger = logging.getLogger(__name__)

# Characters representable in QR alphanumeric mode
ALPHANUMERIC_RE = re.compile(r"^[0-9A-Z $%*+\-./:]*\Z")


@dataclass(frozen=True)
class Chunk:
    """
    One slice of the input stream.

    Attributes
    ----------
    index : int
        Zero-based sequence number of the chunk.
    data : bytes
        Bytes read for this chunk, at most the configured chunk size.
    label : str
        ``SEG<index>-<length>``.
    """

    index: int
    data: bytes
    label: str

    def __len__(self) -> int:
        return len(self.data)


def make_label(index: int, length: int) -> str:
    """
    Build the label for a chunk.

    Raises
    ------
    ValueError
        If `index` or `length` is negative, or the label falls outside
        the alphanumeric alphabet.
    """
    if index < 0 or length < 0:
        raise ValueError(f"chunk index and length must be non-negative; got {index}, {length}")
    label = f"SEG{index}-{length}"
    if not ALPHANUMERIC_RE.match(label):
        raise ValueError(f"label {label!r} is not alphanumeric-encodable")
    return label


def count_chunks(length: int, chunk_size: int = MAX_CHUNK) -> int:
    """Number of chunks ``iter_chunks`` yields for `length` input bytes."""
    return -(-length // chunk_size)


def _fill(stream: BinaryIO, view: memoryview) -> int:
    # readinto may return short counts before EOF; keep reading until the
    # buffer is full or the stream reports zero bytes.
    total = 0
    while total < len(view):
        n = stream.readinto(view[total:])
        if not n:
            break
        total += n
    return total


def iter_chunks(stream: BinaryIO, chunk_size: int = MAX_CHUNK) -> Iterator[Chunk]:
    """
    Lazily partition a readable binary stream into chunks.

    A single read buffer of `chunk_size` bytes is reused for every read;
    each yielded chunk owns a copy of exactly the bytes read. Iteration
    stops at the first zero-length read, and no chunk is produced for it.

    Parameters
    ----------
    stream : binary file object
        Open stream supporting ``readinto``.
    chunk_size : int, optional
        Maximum bytes per chunk. The default is ``MAX_CHUNK``.

    Yields
    ------
    Chunk
        Chunks in stream order, indexed from zero.

    Raises
    ------
    ValueError
        If `chunk_size` is not positive.
    OSError
        Propagated from the stream. A failed read ends the whole run
        rather than being mistaken for end of input.
    """
    if chunk_size <= 0:
        raise ValueError("'chunk_size' must be a positive integer")

    buffer = bytearray(chunk_size)
    view = memoryview(buffer)
    index = 0
    try:
        while True:
            n = _fill(stream, view)
            logger.debug("read %d bytes", n)
            if n == 0:
                return
            yield Chunk(index=index, data=bytes(view[:n]), label=make_label(index, n))
            index += 1
    finally:
        view.release()
