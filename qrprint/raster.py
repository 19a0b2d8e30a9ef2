"""
Uncompressed 24-bit bitmap output for symbols.

The bitmap is the symbol plus its quiet zone, each module drawn as a
``scale`` x ``scale`` block of black or white pixels. Pixel rows are stored
bottom-up in blue-green-red order and padded with zero bytes to a multiple
of four, as the DIB format requires.

Functions
---------
render_bgr
    Render a symbol to a top-down BGR NumPy array.
encode_bmp
    Serialize a symbol to bitmap file bytes.
write_bmp
    Encode a symbol and write it to disk.
render_pil
    Render a symbol as an RGB PIL image for previews.

Classes
-------
BitmapHeader
    File and info header fields, packed little-endian.
"""

from __future__ import annotations

import struct
from pathlib import Path
from typing import NamedTuple

import numpy as np
from PIL import Image

from .config import BORDER, SCALE
from .symbol import Symbol


BMP_MAGIC = b"BM"
INFO_HEADER_SIZE = 40
HEADER_SIZE = 54  # 14-byte file header + 40-byte info header

# magic, bfSize, bfReserved, bfOffBits, then the BITMAPINFOHEADER
_HEADER_FORMAT = "<2sIII" "IiiHHIIiiII"

BGR = tuple[int, int, int]
DARK_BGR: BGR = (0, 0, 0)
LIGHT_BGR: BGR = (255, 255, 255)


class BitmapHeader(NamedTuple):
    """
    Fixed-size bitmap header.

    Field order matches the on-disk layout after the ``BM`` magic.
    """

    file_size: int
    reserved: int
    data_offset: int
    info_size: int
    width: int
    height: int
    planes: int
    bits_per_pixel: int
    compression: int
    image_size: int
    x_resolution: int
    y_resolution: int
    colors_used: int
    colors_important: int

    @classmethod
    def for_image(cls, width: int, height: int) -> "BitmapHeader":
        """Header for an uncompressed 24-bit image of the given size."""
        image_size = (width * 3 + row_padding(width)) * height
        return cls(
            file_size=image_size + HEADER_SIZE,
            reserved=0,
            data_offset=HEADER_SIZE,
            info_size=INFO_HEADER_SIZE,
            width=width,
            height=height,
            planes=1,
            bits_per_pixel=24,
            compression=0,
            image_size=image_size,
            x_resolution=0,
            y_resolution=0,
            colors_used=0,
            colors_important=0,
        )

    def pack(self) -> bytes:
        """Serialize to ``HEADER_SIZE`` little-endian bytes, ``BM`` first."""
        return struct.pack(_HEADER_FORMAT, BMP_MAGIC, *self)

    @classmethod
    def unpack(cls, data: bytes) -> "BitmapHeader":
        """
        Parse the first ``HEADER_SIZE`` bytes of a bitmap file.

        Raises
        ------
        ValueError
            If `data` is too short or does not start with ``BM``.
        """
        if len(data) < HEADER_SIZE:
            raise ValueError(
                f"bitmap header needs {HEADER_SIZE} bytes; got {len(data)}"
            )
        magic, *fields = struct.unpack(_HEADER_FORMAT, bytes(data[:HEADER_SIZE]))
        if magic != BMP_MAGIC:
            raise ValueError(f"not a bitmap: magic {magic!r}")
        return cls(*fields)


def row_padding(width: int) -> int:
    """Zero bytes appended to a ``width``-pixel row to reach a multiple of 4."""
    return (4 - (width * 3) % 4) % 4


def image_size(symbol: Symbol, border: int = BORDER, scale: int = SCALE) -> int:
    """Width (and height) in pixels of the bitmap for `symbol`."""
    return (symbol.size + 2 * border) * scale


def render_bgr(
    symbol: Symbol,
    *,
    border: int = BORDER,
    scale: int = SCALE,
) -> np.ndarray:
    """
    Render `symbol` to a BGR pixel array.

    Parameters
    ----------
    symbol : Symbol
        Symbol to draw.
    border : int, optional
        Quiet zone width in modules. The default is 4.
    scale : int, optional
        Pixels per module side. The default is 2.

    Returns
    -------
    numpy.ndarray
        Array of shape (H, W, 3), dtype uint8, with row 0 at the top of
        the image and channels in (B, G, R) order.
    """
    size = image_size(symbol, border, scale)
    ys, xs = np.indices((size, size))
    dark = symbol.modules_at(xs // scale - border, ys // scale - border)

    img = np.empty((size, size, 3), dtype=np.uint8)
    img[...] = LIGHT_BGR
    img[dark] = DARK_BGR
    return img


def encode_bmp(
    symbol: Symbol,
    *,
    border: int = BORDER,
    scale: int = SCALE,
) -> bytes:
    """
    Serialize `symbol` as a complete bitmap file.

    Returns
    -------
    bytes
        ``HEADER_SIZE`` header bytes followed by the padded pixel rows,
        bottom row first.
    """
    pixels = render_bgr(symbol, border=border, scale=scale)
    height, width = pixels.shape[:2]
    header = BitmapHeader.for_image(width, height)

    # Bottom-up storage order, one flat byte row per image row
    rows = pixels[::-1].reshape(height, width * 3)
    padding = row_padding(width)
    if padding:
        rows = np.pad(rows, ((0, 0), (0, padding)), mode="constant", constant_values=0)

    return header.pack() + rows.tobytes()


def write_bmp(
    path: str | Path,
    symbol: Symbol,
    *,
    border: int = BORDER,
    scale: int = SCALE,
) -> Path:
    """
    Write `symbol` as a bitmap file at `path`.

    The file is fully written and closed before returning.

    Returns
    -------
    pathlib.Path
        The path written.

    Raises
    ------
    OSError
        If the file cannot be created or written.
    """
    path = Path(path)
    data = encode_bmp(symbol, border=border, scale=scale)
    with open(path, "wb") as fh:
        fh.write(data)
    return path


def render_pil(
    symbol: Symbol,
    *,
    border: int = BORDER,
    scale: int = SCALE,
) -> Image.Image:
    """Render `symbol` as an RGB PIL image with the same geometry as the bitmap."""
    bgr = render_bgr(symbol, border=border, scale=scale)
    return Image.fromarray(np.ascontiguousarray(bgr[..., ::-1]))
