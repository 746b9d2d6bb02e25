"""
Seam removal by dynamic programming.

One solver handles both orientations: it walks virtual rows (the seam
direction) and shortens virtual columns, with GridLayout translating
virtual cells to buffer offsets.

Removing many seams in one call is the common case, so the solver avoids
redoing work between seams:
1. Seams are removed logically from a virtual index map; pixels stay put.
2. After each removal only the band of cells whose minimal path could have
   changed is relaxed again. The rest of the DP table stays valid.
3. Pixels and energy are compacted into place once, after the last seam.
"""

import logging
from typing import List

import torch

from .image import PixelBuffer
from .layout import GridLayout, Orientation

logger = logging.getLogger(__name__)

# Predecessor offsets in the order they are tested. On equal cost the first
# one wins, so seams prefer to continue straight.
_PREV_OFFSETS = torch.tensor([0, -1, 1], dtype=torch.long)


class SeamSolver:
    """
    Removes lowest-energy seams from a PixelBuffer in place.

    Energy is read from the buffer and not recomputed while carving; it is
    compacted along with the pixels.

    Per-cell DP state is kept in flat tensors indexed by cell id:
        _energy[cell]  - energy of the pixel
        _cost[cell]    - minimal path cost from virtual row 0 to the cell
        _origin[cell]  - offset of the pixel in the image buffer
        _prev[cell]    - column offset (-1, 0, +1) to the best predecessor
    and _table[row, col] maps a virtual cell to its cell id.

    Attributes:
        seams: Every removed seam, as the virtual column per virtual row at
            the time it was removed
        removed_offsets: Buffer offsets of every removed seam's pixels,
            relative to the buffer as it was when carve() started
    """

    def __init__(self, image: PixelBuffer,
                 orientation: Orientation = Orientation.COLUMNS):
        self.image = image
        self.orientation = orientation
        self.seams: List[torch.Tensor] = []
        self.removed_offsets: List[torch.Tensor] = []
        self._rows = 0
        self._cols = 0
        self._table = None
        self._origin = None
        self._energy = None
        self._cost = None
        self._prev = None

    def carve(self, how_many: int) -> int:
        """
        Remove how_many seams, shortening the image by that many columns
        (or rows).

        Args:
            how_many: Number of seams. Values <= 0 do nothing.

        Returns:
            Number of seams removed
        """
        if how_many <= 0:
            return 0
        extent = self.image.extent(self.orientation)
        if how_many > extent - 1:
            raise ValueError(
                f"Cannot remove {how_many} {self.orientation.value} "
                f"from an image with {extent}")

        self._build()
        for r in range(self._rows):
            self._relax(r, 0, self._cols - 1)

        for i in range(how_many):
            seam = self._find_seam()
            self._remove_seam(seam)
            if i + 1 < how_many:
                self._resolve_band(seam)

        self._compact()
        logger.debug("Removed %d %s, %d left", how_many,
                     self.orientation.value,
                     self.image.extent(self.orientation))
        return how_many

    def _build(self):
        layout = self.image.layout(self.orientation)
        self._rows, self._cols = layout.rows, layout.cols
        n_cells = self._rows * self._cols

        self._origin = layout.offsets().reshape(-1)
        self._energy = self.image.energy[self._origin].to(torch.float64)
        self._cost = torch.zeros(n_cells, dtype=torch.float64)
        self._prev = torch.zeros(n_cells, dtype=torch.long)
        self._table = torch.arange(n_cells, dtype=torch.long).reshape(
            self._rows, self._cols)

    def _relax(self, row: int, lo: int, hi: int):
        """Recompute cost and predecessor for columns [lo, hi] of a row."""
        cells = self._table[row, lo:hi + 1]
        if row == 0:
            self._cost[cells] = self._energy[cells]
            self._prev[cells] = 0
            return

        p_lo = max(lo - 1, 0)
        p_hi = min(hi + 1, self._cols - 1)
        # Previous row's costs, padded with inf on both sides so every
        # column has three candidates. Column c sits at above[c - p_lo + 1].
        above = torch.full((p_hi - p_lo + 3,), float('inf'),
                           dtype=torch.float64)
        above[1:-1] = self._cost[self._table[row - 1, p_lo:p_hi + 1]]

        idx = torch.arange(lo, hi + 1) - p_lo + 1
        candidates = torch.stack([above[idx], above[idx - 1], above[idx + 1]])
        # argmin returns the first minimum, which gives the tie-break order
        choice = torch.argmin(candidates, dim=0)
        best = candidates.gather(0, choice.unsqueeze(0)).squeeze(0)

        self._cost[cells] = self._energy[cells] + best
        self._prev[cells] = _PREV_OFFSETS[choice]

    def _find_seam(self) -> torch.Tensor:
        """
        Back-track the cheapest seam.

        The seam ends at the leftmost column with minimal cost in the last
        virtual row.

        Returns:
            Virtual column per virtual row (rows,)
        """
        last = self._cost[self._table[-1, :self._cols]]
        col = int(torch.argmin(last))

        seam = torch.empty(self._rows, dtype=torch.long)
        seam[-1] = col
        for r in range(self._rows - 1, 0, -1):
            col += int(self._prev[self._table[r, col]])
            seam[r - 1] = col
        return seam

    def _remove_seam(self, seam: torch.Tensor):
        """Drop the seam's cells from the index map, shifting each row left."""
        rows, n = self._rows, self._cols
        table = self._table[:, :n]

        self.seams.append(seam)
        self.removed_offsets.append(
            self._origin[table[torch.arange(rows), seam]])

        keep = torch.arange(n - 1).unsqueeze(0).expand(rows, n - 1)
        keep = keep + (keep >= seam.unsqueeze(1)).long()
        self._table[:, :n - 1] = table.gather(1, keep)
        self._cols = n - 1

    def _resolve_band(self, seam: torch.Tensor):
        """
        Relax the cells invalidated by removing seam.

        A cell needs relaxing when its predecessor window now straddles the
        removed seam, or when one of its predecessors was relaxed. On row r
        the first set is [min(s[r], s[r-1] - 1), max(s[r-1], s[r] - 1)];
        the second widens the previous row's band by one on each side.

        Args:
            seam: The removed seam, in columns from before the removal
        """
        n = self._cols
        lo = hi = None
        for r in range(1, self._rows):
            above, here = int(seam[r - 1]), int(seam[r])
            s_lo, s_hi = min(here, above - 1), max(above, here - 1)
            if lo is None:
                lo, hi = s_lo, s_hi
            else:
                lo, hi = min(lo - 1, s_lo), max(hi + 1, s_hi)
            lo, hi = max(lo, 0), min(hi, n - 1)
            self._relax(r, lo, hi)

    def _compact(self):
        """Move surviving pixels and energy into their final positions."""
        rows, n = self._rows, self._cols
        src = self._origin[self._table[:, :n]].reshape(-1)
        dst = GridLayout(rows, n, self.image.stride,
                         self.orientation).offsets().reshape(-1)

        self.image.pixels[dst] = self.image.pixels[src]
        self.image.energy[dst] = self.image.energy[src]
        self.image.set_extent(self.orientation, n)

        self._table = self._origin = None
        self._energy = self._cost = self._prev = None


def carve_columns(image: PixelBuffer, how_many: int) -> int:
    """Remove how_many vertical seams, shrinking the width."""
    return SeamSolver(image, Orientation.COLUMNS).carve(how_many)


def carve_rows(image: PixelBuffer, how_many: int) -> int:
    """Remove how_many horizontal seams, shrinking the height."""
    return SeamSolver(image, Orientation.ROWS).carve(how_many)
