"""
Completed barcode symbol backed by a boolean module matrix.
"""

from __future__ import annotations

import numpy as np


class Symbol:
    """
    Immutable square grid of modules produced by an encoder.

    Parameters
    ----------
    matrix : array_like
        Square 2D array of booleans. True indicates a dark module. The
        data is copied and the stored copy is read-only.

    Raises
    ------
    ValueError
        If `matrix` is not a non-empty square 2D array.

    Notes
    -----
    Coordinates are ``(x, y)`` with ``x`` the column and ``y`` the row,
    counted from the top-left module. Any coordinate outside the grid
    reads as a light module, which is what lets renderers draw the quiet
    zone without special-casing it.
    """

    def __init__(self, matrix) -> None:
        arr = np.array(matrix, dtype=bool)
        if arr.ndim != 2 or arr.shape[0] != arr.shape[1] or arr.shape[0] == 0:
            raise ValueError(
                f"symbol matrix must be a non-empty square 2D array; got shape {arr.shape}"
            )
        arr.setflags(write=False)
        self._matrix = arr

    @property
    def size(self) -> int:
        """Side length of the symbol, in modules."""
        return self._matrix.shape[0]

    @property
    def matrix(self) -> np.ndarray:
        """Read-only boolean module matrix of shape (size, size)."""
        return self._matrix

    def get_module(self, x: int, y: int) -> bool:
        """Return True if the module at ``(x, y)`` is dark."""
        if 0 <= x < self.size and 0 <= y < self.size:
            return bool(self._matrix[y, x])
        return False

    def modules_at(self, xs, ys) -> np.ndarray:
        """
        Vectorized ``get_module``.

        Parameters
        ----------
        xs, ys : array_like of int
            Broadcastable column and row coordinates.

        Returns
        -------
        numpy.ndarray
            Boolean array of the broadcast shape; out-of-range
            coordinates are False.
        """
        xs, ys = np.broadcast_arrays(np.asarray(xs), np.asarray(ys))
        inside = (xs >= 0) & (xs < self.size) & (ys >= 0) & (ys < self.size)
        out = np.zeros(xs.shape, dtype=bool)
        out[inside] = self._matrix[ys[inside], xs[inside]]
        return out

    def __eq__(self, other) -> bool:
        if not isinstance(other, Symbol):
            return NotImplemented
        return np.array_equal(self._matrix, other._matrix)

    __hash__ = None

    def __repr__(self) -> str:
        return f"Symbol(size={self.size})"
