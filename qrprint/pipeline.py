"""
Chunk-at-a-time pipeline: read, segment, encode, print, write.

Chunks are processed strictly one after another. A chunk that cannot be
encoded or written is reported as a failed ``ChunkResult`` and the run moves
on to the next chunk; only problems with the input stream itself stop it.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Optional, TextIO

from .chunker import Chunk, iter_chunks
from .config import PipelineConfig
from .console import print_symbol
from .encoder import ECC, Encoder, QRCodeEncoder
from .raster import write_bmp
from .segments import CapacityExceededError, build_segments, release_segments


logger = logging.getLogger(__name__)


class ChunkStatus(enum.Enum):
    OK = "ok"
    CAPACITY_EXCEEDED = "capacity exceeded"
    WRITE_FAILED = "write failed"


@dataclass(frozen=True)
class ChunkResult:
    """
    Outcome of processing one chunk.

    Attributes
    ----------
    index : int
        Chunk sequence number.
    label : str
        Chunk label.
    length : int
        Number of payload bytes.
    status : ChunkStatus
        OK, or the reason the chunk produced no bitmap.
    path : pathlib.Path or None
        Bitmap written (OK) or attempted (WRITE_FAILED).
    symbol_size : int or None
        Side length of the encoded symbol, when encoding succeeded.
    error : str or None
        Human-readable failure detail.
    """

    index: int
    label: str
    length: int
    status: ChunkStatus
    path: Optional[Path] = None
    symbol_size: Optional[int] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is ChunkStatus.OK


@dataclass
class RunSummary:
    """
    Per-chunk results of one run, in chunk order.

    Attributes
    ----------
    results : list of ChunkResult
        One entry per chunk read.
    ok_count, failed_count : int
        Number of chunks that did and did not produce a bitmap.
    """

    results: list[ChunkResult] = field(default_factory=list)

    @property
    def ok_count(self) -> int:
        return sum(1 for r in self.results if r.ok)

    @property
    def failed_count(self) -> int:
        return len(self.results) - self.ok_count


def _failed(chunk: Chunk, status: ChunkStatus, error: str, **kwargs) -> ChunkResult:
    logger.warning("%s: %s (%s)", chunk.label, status.value, error)
    return ChunkResult(
        index=chunk.index,
        label=chunk.label,
        length=len(chunk),
        status=status,
        error=error,
        **kwargs,
    )


def process_chunk(
    chunk: Chunk,
    config: PipelineConfig,
    encoder: Encoder,
    console: Optional[TextIO] = None,
) -> ChunkResult:
    """
    Encode one chunk, print it and write its bitmap.

    Parameters
    ----------
    chunk : Chunk
        Chunk to process.
    config : PipelineConfig
        Geometry and output location.
    encoder : Encoder
        Symbol encoder.
    console : text stream, optional
        Destination for the text rendering. The default is standard
        output.

    Returns
    -------
    ChunkResult
        OK with the written path, or a tagged failure.
    """
    try:
        segments = build_segments(chunk.data, chunk.label, encoder)
    except CapacityExceededError as exc:
        return _failed(chunk, ChunkStatus.CAPACITY_EXCEEDED, str(exc))

    try:
        symbol = encoder.encode_segments(segments, ECC)
    finally:
        release_segments(segments)

    if symbol is None:
        return _failed(
            chunk,
            ChunkStatus.CAPACITY_EXCEEDED,
            f"{len(chunk)} bytes plus label do not fit at low ECC",
        )

    print_symbol(symbol, stream=console, border=config.border)

    path = config.output_path(chunk.label)
    try:
        write_bmp(path, symbol, border=config.border, scale=config.scale)
    except OSError as exc:
        return _failed(
            chunk, ChunkStatus.WRITE_FAILED, str(exc),
            path=path, symbol_size=symbol.size,
        )

    logger.info("%s: wrote %s (%d modules)", chunk.label, path, symbol.size)
    return ChunkResult(
        index=chunk.index,
        label=chunk.label,
        length=len(chunk),
        status=ChunkStatus.OK,
        path=path,
        symbol_size=symbol.size,
    )


def run(
    stream: BinaryIO,
    config: Optional[PipelineConfig] = None,
    encoder: Optional[Encoder] = None,
    console: Optional[TextIO] = None,
) -> RunSummary:
    """
    Process every chunk of `stream` in order.

    Raises
    ------
    ConsoleWriteError
        If the text rendering cannot be written.
    OSError
        If reading `stream` fails.
    """
    config = config or PipelineConfig()
    encoder = encoder or QRCodeEncoder()

    summary = RunSummary()
    for chunk in iter_chunks(stream, config.chunk_size):
        summary.results.append(process_chunk(chunk, config, encoder, console))
    return summary


def encode_file(
    path: str | Path,
    config: Optional[PipelineConfig] = None,
    encoder: Optional[Encoder] = None,
    console: Optional[TextIO] = None,
) -> RunSummary:
    """Open `path` for binary reading and ``run`` the pipeline over it."""
    with open(path, "rb") as fh:
        return run(fh, config=config, encoder=encoder, console=console)
