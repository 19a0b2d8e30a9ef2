"""
Text rendering of symbols for terminal inspection.
"""

from __future__ import annotations

import sys
from typing import Iterator, Optional, TextIO

from .config import BORDER
from .symbol import Symbol


DARK = "##"
LIGHT = "  "


class ConsoleWriteError(OSError):
    """The text rendering could not be written, e.g. a closed pipe."""


def iter_rows(symbol: Symbol, border: int = BORDER) -> Iterator[str]:
    """
    Yield the text rows of `symbol`, each ending in a newline.

    The grid spans ``symbol.size + 2 * border`` modules in each direction;
    the quiet zone comes from the symbol reading light outside its grid.
    A final blank line follows the grid.
    """
    for y in range(-border, symbol.size + border):
        yield "".join(
            DARK if symbol.get_module(x, y) else LIGHT
            for x in range(-border, symbol.size + border)
        ) + "\n"
    yield "\n"


def render_text(symbol: Symbol, border: int = BORDER) -> str:
    """Whole text rendering of `symbol` as one string."""
    return "".join(iter_rows(symbol, border=border))


def print_symbol(
    symbol: Symbol,
    stream: Optional[TextIO] = None,
    border: int = BORDER,
) -> None:
    """
    Write the text rendering of `symbol` one row at a time.

    Parameters
    ----------
    symbol : Symbol
        Symbol to print.
    stream : text stream, optional
        Destination. The default is standard output.
    border : int, optional
        Quiet zone width in modules. The default is 4.

    Raises
    ------
    ConsoleWriteError
        If writing to `stream` fails.
    """
    if stream is None:
        stream = sys.stdout
    try:
        for row in iter_rows(symbol, border=border):
            stream.write(row)
    except OSError as exc:
        raise ConsoleWriteError(f"writing symbol to console failed: {exc}") from exc
