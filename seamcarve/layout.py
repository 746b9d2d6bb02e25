"""
Buffer layout for seam carving.

Column removal and row removal are the same algorithm under a transposition.
The solver walks "virtual rows" (one seam pixel per virtual row) and shortens
"virtual columns". This module owns the mapping from those virtual coordinates
to offsets in a row-major pixel buffer, so the orientation logic and bounds
live in one place.
"""

from enum import Enum
from typing import Tuple

import torch


class Orientation(Enum):
    """Which image axis a carve shortens."""

    COLUMNS = 'columns'  # vertical seams, width shrinks
    ROWS = 'rows'        # horizontal seams, height shrinks


def virtual_extent(width: int, height: int,
                   orientation: Orientation) -> Tuple[int, int]:
    """Return (virtual rows, virtual columns) for an image of the given size."""
    if orientation is Orientation.COLUMNS:
        return height, width
    if orientation is Orientation.ROWS:
        return width, height
    raise ValueError(f"Invalid orientation: {orientation!r}")


class GridLayout:
    """
    Two-dimensional accessor over a flat, strided pixel buffer.

    Args:
        rows: Number of virtual rows (seam length)
        cols: Number of virtual columns (axis being shortened)
        stride: Pixel slots per image row in the backing buffer
        orientation: Orientation.COLUMNS or Orientation.ROWS
    """

    def __init__(self, rows: int, cols: int, stride: int,
                 orientation: Orientation):
        if orientation not in (Orientation.COLUMNS, Orientation.ROWS):
            raise ValueError(f"Invalid orientation: {orientation!r}")
        self.rows = rows
        self.cols = cols
        self.stride = stride
        self.orientation = orientation

    @classmethod
    def for_image(cls, width: int, height: int, stride: int,
                  orientation: Orientation):
        rows, cols = virtual_extent(width, height, orientation)
        return cls(rows, cols, stride, orientation)

    def offset(self, row: int, col: int) -> int:
        """Flat buffer offset of virtual cell (row, col)."""
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(
                f"Cell ({row}, {col}) outside {self.rows}x{self.cols} grid")
        if self.orientation is Orientation.COLUMNS:
            return row * self.stride + col
        return col * self.stride + row

    def offsets(self) -> torch.Tensor:
        """Offsets of every cell as a (rows, cols) long tensor."""
        r = torch.arange(self.rows, dtype=torch.long).unsqueeze(1)
        c = torch.arange(self.cols, dtype=torch.long).unsqueeze(0)
        if self.orientation is Orientation.COLUMNS:
            return r * self.stride + c
        return c * self.stride + r

    def __repr__(self):
        return (f"GridLayout(rows={self.rows}, cols={self.cols}, "
                f"stride={self.stride}, orientation={self.orientation.value})")
