"""
Read written bitmaps back and decode them with OpenCV.

OpenCV is optional and required only for decoding. If unavailable,
``decode_image`` raises RuntimeError.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import numpy as np
from PIL import Image


def load_bitmap(path: str | Path) -> np.ndarray:
    """
    Load an image file as an RGB array.

    Returns
    -------
    numpy.ndarray
        Array of shape (H, W, 3) with dtype uint8, top row first.
    """
    with Image.open(path) as img:
        return np.asarray(img.convert("RGB"), dtype=np.uint8)


def decode_image(
    image: np.ndarray,
    *,
    upscale: int = 4,
) -> tuple[Optional[str], bool]:
    """
    Decode a symbol image using OpenCV's QRCodeDetector.

    Parameters
    ----------
    image : numpy.ndarray
        RGB image of shape (H, W, 3).
    upscale : int, optional
        Nearest-neighbour enlargement applied before detection. Bitmaps
        drawn at two pixels per module are too small for the detector to
        locate reliably. The default is 4.

    Returns
    -------
    tuple of (str or None, bool)
        ``(decoded_text, ok)``; ``(None, False)`` if nothing decoded.

    Raises
    ------
    RuntimeError
        If OpenCV (cv2) is not installed.
    ValueError
        If `image` does not have shape (H, W, 3) or `upscale` < 1.
    """
    try:
        import cv2
    except ImportError as exc:
        raise RuntimeError(
            "decode_image requires OpenCV (cv2) to be installed."
        ) from exc

    img = np.asarray(image)
    if img.ndim != 3 or img.shape[2] != 3:
        raise ValueError("image must be (H, W, 3)")
    if upscale < 1:
        raise ValueError("'upscale' must be >= 1")

    rgb = img.astype(np.uint8, copy=False)
    if upscale > 1:
        rgb = np.kron(rgb, np.ones((upscale, upscale, 1), dtype=np.uint8))

    bgr = cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR)
    detector = cv2.QRCodeDetector()
    data, points, _ = detector.detectAndDecode(bgr)

    if points is None or not data:
        return None, False

    return data, True


def validate_bitmap(path: str | Path, expected: str) -> bool:
    """True if the bitmap at `path` decodes to exactly `expected`."""
    decoded, ok = decode_image(load_bitmap(path))
    return bool(ok and decoded == expected)
