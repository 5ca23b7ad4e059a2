"""Layout statistics — cell counts for the editor and the validator.

Counts are recomputed on every call from a compact NumPy matrix of type
codes.  Grids top out at 50x50, so there is nothing worth caching.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from plotgrid.layout.cell import CellType, PlotCell, PlotStatus

if TYPE_CHECKING:
    from plotgrid.layout.grid import Grid

TYPE_CODES: dict[CellType, int] = {
    CellType.EMPTY: 0,
    CellType.PLOT: 1,
    CellType.ROAD: 2,
    CellType.AMENITY: 3,
}


@dataclass(frozen=True)
class LayoutSummary:
    """Headline figures for a layout.

    ``plots + roads + amenities + empty == total`` always holds.

    Attributes:
        plots: Number of plot cells.
        roads: Number of road cells.
        amenities: Number of amenity cells.
        empty: Number of empty cells.
        total: ``rows * cols``.
    """

    plots: int
    roads: int
    amenities: int
    empty: int
    total: int


def type_matrix(grid: Grid) -> NDArray[np.int8]:
    """Return a ``(rows, cols)`` array of cell type codes.

    Codes follow ``TYPE_CODES``.
    """
    return np.array(
        [[TYPE_CODES[cell.type] for cell in row] for row in grid.cells],
        dtype=np.int8,
    ).reshape(grid.rows, grid.cols)


def count_cells_of_type(grid: Grid, cell_type: CellType) -> int:
    """Count cells whose type is exactly ``cell_type``."""
    return int(np.count_nonzero(type_matrix(grid) == TYPE_CODES[cell_type]))


def summary(grid: Grid) -> LayoutSummary:
    """Compute plot, road, amenity and empty counts for ``grid``."""
    counts = np.bincount(type_matrix(grid).ravel(), minlength=len(TYPE_CODES))
    plots = int(counts[TYPE_CODES[CellType.PLOT]])
    roads = int(counts[TYPE_CODES[CellType.ROAD]])
    amenities = int(counts[TYPE_CODES[CellType.AMENITY]])
    total = grid.rows * grid.cols
    return LayoutSummary(
        plots=plots,
        roads=roads,
        amenities=amenities,
        empty=total - plots - roads - amenities,
        total=total,
    )


def status_counts(grid: Grid) -> dict[PlotStatus, int]:
    """Count plots per sales status (every status present, possibly 0)."""
    counts = dict.fromkeys(PlotStatus, 0)
    for cell in grid.iter_cells():
        if isinstance(cell, PlotCell):
            counts[cell.status] += 1
    return counts


def plots_without_road_access(grid: Grid) -> list[PlotCell]:
    """Return plots with no road among their four direct neighbours.

    Informational only; publishability is decided by the validator.
    """
    return [
        cell
        for cell in grid.iter_cells()
        if isinstance(cell, PlotCell)
        and not any(
            n.type is CellType.ROAD for n in grid.neighbours(cell.row, cell.col)
        )
    ]
