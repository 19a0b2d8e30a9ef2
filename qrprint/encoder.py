"""
Encoder capability and its ``qrcodegen``-backed implementation.

The pipeline only needs three things from a symbol encoder: how much scratch
space a segment needs, how to turn a payload into a segment, and how to pack
an ordered list of segments into a symbol. ``Encoder`` names that contract;
``QRCodeEncoder`` fulfils it with the qrcodegen library, which owns version
selection, error-correction codewords and mask choice.
"""

from __future__ import annotations

from typing import Optional, Protocol, Sequence, Union

from qrcodegen import DataTooLongError, QrCode, QrSegment

from .chunker import ALPHANUMERIC_RE
from .segments import CapacityExceededError, Mode, Segment
from .symbol import Symbol


__all__ = ["Encoder", "QRCodeEncoder", "CapacityExceededError", "ECC"]

# Fixed error-correction policy for every symbol
ECC = QrCode.Ecc.LOW

# Largest segment the length field arithmetic supports
MAX_SEGMENT_BITS = 32767

_QR_MODES = {
    Mode.BINARY: QrSegment.Mode.BYTE,
    Mode.CONSTRAINED_TEXT: QrSegment.Mode.ALPHANUMERIC,
}


class Encoder(Protocol):
    """Symbol encoder used by the pipeline."""

    def segment_buffer_size(self, mode: Mode, length: int) -> int:
        """Bytes of scratch space needed for a segment; 0 if impossible."""
        ...

    def make_segment(
        self, mode: Mode, payload: Union[bytes, str], buffer: bytearray
    ) -> Segment:
        """Serialize `payload` into `buffer` and wrap it as a segment."""
        ...

    def encode_segments(
        self, segments: Sequence[Segment], ecc: QrCode.Ecc = ECC
    ) -> Optional[Symbol]:
        """Pack `segments` in order; None if they do not fit."""
        ...


def segment_bit_length(mode: Mode, length: int) -> int:
    """
    Number of data bits a segment occupies, excluding its header.

    Returns -1 when the segment is too long to be encoded.
    """
    if length < 0:
        return -1
    if mode is Mode.BINARY:
        bits = length * 8
    elif mode is Mode.CONSTRAINED_TEXT:
        bits = (length // 2) * 11 + (length % 2) * 6
    else:
        raise ValueError(f"unsupported segment mode: {mode!r}")
    if bits > MAX_SEGMENT_BITS:
        return -1
    return bits


def pack_bits(bits: Sequence[int], buffer: bytearray) -> None:
    """Write `bits` MSB-first into `buffer`, which must be large enough."""
    for i, bit in enumerate(bits):
        if bit:
            buffer[i >> 3] |= 0x80 >> (i & 7)


def unpack_bits(buffer: bytearray, count: int) -> list[int]:
    """Read the first `count` bits of `buffer`, MSB-first."""
    return [(buffer[i >> 3] >> (7 - (i & 7))) & 1 for i in range(count)]


class QRCodeEncoder:
    """
    ``Encoder`` implementation on top of :mod:`qrcodegen`.

    A segment's scratch buffer holds its packed data bits, and that buffer
    is the only thing ``encode_segments`` reads: each segment is rebuilt as
    a ``qrcodegen.QrSegment`` from the buffer and its bit length. Symbols
    use the smallest version that fits at the requested error-correction
    level.
    """

    def segment_buffer_size(self, mode: Mode, length: int) -> int:
        """
        Scratch bytes needed for a segment of `length` characters.

        Returns
        -------
        int
            ``ceil(bits / 8)``, or 0 if the segment cannot be encoded.
        """
        bits = segment_bit_length(mode, length)
        if bits < 0:
            return 0
        return (bits + 7) // 8

    def make_segment(
        self, mode: Mode, payload: Union[bytes, str], buffer: bytearray
    ) -> Segment:
        """
        Serialize `payload` into `buffer` and wrap both in a Segment.

        Parameters
        ----------
        mode : Mode
            Segment mode.
        payload : bytes or str
            Bytes for ``Mode.BINARY``; alphanumeric text for
            ``Mode.CONSTRAINED_TEXT``.
        buffer : bytearray
            Caller-owned scratch storage of at least
            ``segment_buffer_size(mode, len(payload))`` bytes.

        Returns
        -------
        Segment
            Segment whose `buffer` holds the data bits.

        Raises
        ------
        ValueError
            If `buffer` is too small, or a text payload is not
            alphanumeric-encodable.
        CapacityExceededError
            If the payload is too long for any segment.
        TypeError
            If the payload type does not match the mode.
        """
        if mode is Mode.BINARY:
            if not isinstance(payload, (bytes, bytearray)):
                raise TypeError("binary segments take bytes")
            source = QrSegment.make_bytes(bytes(payload))
        elif mode is Mode.CONSTRAINED_TEXT:
            if not isinstance(payload, str):
                raise TypeError("alphanumeric segments take str")
            if not ALPHANUMERIC_RE.match(payload):
                raise ValueError(f"{payload!r} is not alphanumeric-encodable")
            source = QrSegment.make_alphanumeric(payload)
        else:
            raise ValueError(f"unsupported segment mode: {mode!r}")

        required = self.segment_buffer_size(mode, len(payload))
        if len(payload) > 0 and required == 0:
            raise CapacityExceededError(
                f"{mode.value} segment of length {len(payload)} exceeds encoder limits"
            )
        if len(buffer) < required:
            raise ValueError(
                f"segment buffer too small: {len(buffer)} < {required} bytes"
            )

        bits = source.get_data()
        buffer[:required] = bytes(required)
        pack_bits(bits, buffer)

        return Segment(mode=mode, payload=payload, buffer=buffer, bit_length=len(bits))

    def encode_segments(
        self, segments: Sequence[Segment], ecc: QrCode.Ecc = ECC
    ) -> Optional[Symbol]:
        """
        Pack `segments`, in order, into one symbol.

        Returns
        -------
        Symbol or None
            The symbol, or None if the data exceeds the capacity of the
            largest version at `ecc`.

        Raises
        ------
        ValueError
            If a segment's buffer does not hold the bits its payload
            needs, for instance after ``release_segments``.
        """
        qr_segments = []
        for segment in segments:
            expected = segment_bit_length(segment.mode, len(segment.payload))
            if segment.bit_length != expected or len(segment.buffer) * 8 < expected:
                raise ValueError(
                    f"{segment.mode.value} segment buffer does not hold its "
                    f"{expected} data bits"
                )
            qr_segments.append(QrSegment(
                _QR_MODES[segment.mode],
                len(segment.payload),
                unpack_bits(segment.buffer, segment.bit_length),
            ))

        try:
            qr = QrCode.encode_segments(qr_segments, ecc)
        except DataTooLongError:
            return None

        size = qr.get_size()
        return Symbol([[qr.get_module(x, y) for x in range(size)] for y in range(size)])
