"""
Pipeline configuration.

Classes
-------
PipelineConfig
    Immutable settings shared by the chunker and the renderers.

Notes
-----
The error-correction level is not configurable; every symbol is encoded at
the low level fixed in ``qrprint.encoder.ECC``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


MAX_CHUNK = 2300  # bytes per symbol; fits version 40 at low ECC with a label
BORDER = 4  # quiet zone, in modules
SCALE = 2  # pixels per module side


@dataclass(frozen=True)
class PipelineConfig:
    """
    Immutable configuration for turning a file into symbol bitmaps.

    Parameters
    ----------
    chunk_size : int, optional
        Maximum number of input bytes carried by one symbol. The default
        is ``MAX_CHUNK`` (2300).
    border : int, optional
        Width, in modules, of the quiet zone drawn around each symbol in
        both the console and raster output. The default is 4.
    scale : int, optional
        Pixels per module side in the raster output. The default is 2.
    output_dir : str or pathlib.Path, optional
        Directory that receives the per-chunk bitmaps. The default is the
        current directory.
    extension : str, optional
        File extension of the bitmaps, without the dot. The default is
        'bmp'.

    Raises
    ------
    ValueError
        If `chunk_size` or `scale` is not positive, or `border` is
        negative.
    """

    chunk_size: int = MAX_CHUNK
    border: int = BORDER
    scale: int = SCALE
    output_dir: str | Path = "."
    extension: str = "bmp"

    def __post_init__(self) -> None:
        if self.chunk_size <= 0:
            raise ValueError("'chunk_size' must be a positive integer")
        if self.border < 0:
            raise ValueError("'border' must be non-negative")
        if self.scale <= 0:
            raise ValueError("'scale' must be a positive integer")

    def output_path(self, label: str) -> Path:
        """
        Bitmap path for a chunk label.

        Returns
        -------
        pathlib.Path
            ``output_dir / "<label>.<extension>"``.
        """
        return Path(self.output_dir) / f"{label}.{self.extension}"
