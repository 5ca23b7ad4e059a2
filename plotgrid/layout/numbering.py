"""Plot numbering — user-facing identifiers for plot cells.

Plot numbers are handed out once, when a plot is painted, and then left
alone: buyers and sales records refer to them.  ``number_plots`` is the
explicit renumbering tool and is never run behind the user's back.
"""

from __future__ import annotations

import dataclasses
import logging
from collections import Counter
from typing import TYPE_CHECKING

from plotgrid.layout.cell import PlotCell

if TYPE_CHECKING:
    from plotgrid.layout.grid import Grid

logger = logging.getLogger(__name__)


def number_plots(grid: Grid) -> int:
    """Renumber every plot in row-major order, starting at 1.

    Non-plot cells are skipped and do not consume a number, so the
    top-left-most plot is always plot 1.

    Args:
        grid: Grid to renumber in place.

    Returns:
        How many plots were numbered.
    """
    counter = 1
    for row in grid.cells:
        for c, cell in enumerate(row):
            if isinstance(cell, PlotCell):
                if cell.plot_number != counter:
                    row[c] = dataclasses.replace(cell, plot_number=counter)
                counter += 1
    logger.debug("Renumbered %d plots on %dx%d grid", counter - 1, grid.rows, grid.cols)
    return counter - 1


def next_plot_number(grid: Grid) -> int:
    """Return one more than the highest plot number in use (1 if none)."""
    highest = max(
        (
            cell.plot_number
            for cell in grid.iter_cells()
            if isinstance(cell, PlotCell) and cell.plot_number is not None
        ),
        default=0,
    )
    return highest + 1


def duplicate_plot_numbers(grid: Grid) -> list[int]:
    """Return plot numbers used by more than one plot, ascending."""
    counts = Counter(
        cell.plot_number
        for cell in grid.iter_cells()
        if isinstance(cell, PlotCell) and cell.plot_number is not None
    )
    return sorted(number for number, n in counts.items() if n > 1)
