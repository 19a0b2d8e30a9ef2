"""
Build the ordered segment list for one chunk.

A chunk always becomes two segments: the raw bytes in byte mode followed by
the label in alphanumeric mode. The order is fixed; it decides how the data
region of the symbol is laid out, so changing it changes every output image.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from .encoder import Encoder


class Mode(enum.Enum):
    BINARY = "binary"
    CONSTRAINED_TEXT = "alphanumeric"


class CapacityExceededError(ValueError):
    """Segment data cannot fit in any symbol."""


@dataclass
class Segment:
    """
    One mode-tagged unit of data handed to the encoder.

    Attributes
    ----------
    mode : Mode
        Encoding mode.
    payload : bytes or str
        Source data, unmodified.
    buffer : bytearray
        Scratch storage holding the serialized data bits, sized by the
        encoder for this mode and length.
    bit_length : int
        Number of meaningful bits in `buffer`.
    """

    mode: Mode
    payload: Union[bytes, str]
    buffer: bytearray
    bit_length: int = 0

    def __len__(self) -> int:
        return len(self.payload)


def _allocate(encoder: "Encoder", mode: Mode, length: int) -> bytearray:
    size = encoder.segment_buffer_size(mode, length)
    if size <= 0 and length > 0:
        raise CapacityExceededError(
            f"{mode.value} segment of length {length} exceeds encoder limits"
        )
    return bytearray(size)


def build_segments(data: bytes, label: str, encoder: "Encoder") -> list[Segment]:
    """
    Construct the byte-mode payload segment and alphanumeric label segment.

    Parameters
    ----------
    data : bytes
        Chunk bytes, encoded verbatim.
    label : str
        Chunk label; must use the alphanumeric alphabet.
    encoder : Encoder
        Provides buffer sizing and segment construction.

    Returns
    -------
    list of Segment
        ``[binary_segment, label_segment]``.

    Raises
    ------
    CapacityExceededError
        If the encoder reports a zero buffer size for non-empty input.
    ValueError
        If the label is not alphanumeric-encodable.
    """
    segments = []
    for mode, payload in ((Mode.BINARY, bytes(data)), (Mode.CONSTRAINED_TEXT, label)):
        buffer = _allocate(encoder, mode, len(payload))
        segments.append(encoder.make_segment(mode, payload, buffer))
    return segments


def release_segments(segments: list[Segment]) -> None:
    """Empty the scratch buffers held by `segments`."""
    for segment in segments:
        segment.buffer.clear()
        segment.bit_length = 0
