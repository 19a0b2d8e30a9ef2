"""
qrprint: encode a binary file as a series of QR code bitmaps.

The input is split into chunks of at most 2300 bytes. Each chunk is packed
into one QR code together with its label (``SEG<index>-<length>``), printed
to the terminal, and written as ``<label>.bmp``.

Functions
---------
iter_chunks
    Lazily split a binary stream into labelled chunks.
build_segments
    Build the byte-mode payload and alphanumeric label segments.
print_symbol
    Print a symbol as a text grid.
write_bmp
    Write a symbol as an uncompressed 24-bit bitmap.
run, encode_file
    Process a whole stream or file, one chunk at a time.

Classes
-------
PipelineConfig
    Immutable pipeline settings.
QRCodeEncoder
    Encoder backed by the qrcodegen library.
Symbol
    Immutable boolean module matrix.
"""

from .chunker import Chunk, count_chunks, iter_chunks, make_label
from .config import BORDER, MAX_CHUNK, SCALE, PipelineConfig
from .console import ConsoleWriteError, print_symbol, render_text
from .encoder import ECC, Encoder, QRCodeEncoder
from .pipeline import ChunkResult, ChunkStatus, RunSummary, encode_file, process_chunk, run
from .raster import BitmapHeader, encode_bmp, render_bgr, write_bmp
from .segments import CapacityExceededError, Mode, Segment, build_segments
from .symbol import Symbol

__version__ = "1.0.0"
__all__ = [
    "Chunk", "count_chunks", "iter_chunks", "make_label",
    "BORDER", "MAX_CHUNK", "SCALE", "PipelineConfig",
    "ConsoleWriteError", "print_symbol", "render_text",
    "ECC", "Encoder", "QRCodeEncoder",
    "ChunkResult", "ChunkStatus", "RunSummary", "encode_file", "process_chunk", "run",
    "BitmapHeader", "encode_bmp", "render_bgr", "write_bmp",
    "CapacityExceededError", "Mode", "Segment", "build_segments",
    "Symbol",
]
