"""
Command-line entry point: ``qrprint <filename>``.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from .console import ConsoleWriteError
from .pipeline import run


logger = logging.getLogger("qrprint")


def setup_logging(level: int = logging.INFO) -> None:
    """Send log records to standard error as ``[LEVEL] message``."""
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s", stream=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    """Argument parser taking exactly one positional ``filename``."""
    parser = argparse.ArgumentParser(
        prog="qrprint",
        description="Encode a file as a series of QR code bitmaps, one per chunk.",
    )
    parser.add_argument("filename", help="File to encode")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Run the command line tool.

    Returns
    -------
    int
        0 on completion (even if some chunks were skipped); 1 if the input
        file cannot be opened, a read fails part way, or standard output
        is closed. Argument errors exit through argparse with status 2.
    """
    args = build_parser().parse_args(argv)
    setup_logging()

    try:
        fh = open(args.filename, "rb")
    except OSError as exc:
        logger.error("Error! opening file %s: %s", args.filename, exc)
        return 1

    with fh:
        try:
            summary = run(fh)
        except ConsoleWriteError as exc:
            logger.error("%s", exc)
            return 1
        except OSError as exc:
            logger.error("reading %s failed: %s", args.filename, exc)
            return 1

    logger.info(
        "%d chunk(s) written, %d skipped",
        summary.ok_count,
        summary.failed_count,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
