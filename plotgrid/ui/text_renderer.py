"""Plain-text rendering of a layout for the terminal.

Each cell becomes a fixed-width token: plots show their number (or
``P`` when unnumbered), roads ``=``, amenities ``A`` and empty ground
``.``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from plotgrid.layout.cell import CellType, PlotCell, PlotStatus
from plotgrid.layout.stats import plots_without_road_access, status_counts, summary

if TYPE_CHECKING:
    from plotgrid.layout.cell import Cell
    from plotgrid.layout.grid import Grid
    from plotgrid.storage.documents import LayoutDocument

_GLYPHS: dict[CellType, str] = {
    CellType.EMPTY: ".",
    CellType.PLOT: "P",
    CellType.ROAD: "=",
    CellType.AMENITY: "A",
}

# Suffix marking plots that are no longer for sale
_STATUS_MARKS: dict[PlotStatus, str] = {
    PlotStatus.AVAILABLE: "",
    PlotStatus.RESERVED: "r",
    PlotStatus.SOLD: "s",
}


def _token(cell: Cell, *, show_numbers: bool) -> str:
    if isinstance(cell, PlotCell):
        body = str(cell.plot_number) if show_numbers and cell.plot_number else "P"
        return body + _STATUS_MARKS[cell.status]
    return _GLYPHS[cell.type]


def render_grid(grid: Grid, *, show_numbers: bool = True) -> str:
    """Return the grid as lines of space-separated, right-aligned tokens.

    Args:
        grid: The layout to draw.
        show_numbers: Print plot numbers instead of ``P``.
    """
    tokens = [[_token(cell, show_numbers=show_numbers) for cell in row] for row in grid.cells]
    width = max(len(token) for row in tokens for token in row)
    return "\n".join(" ".join(token.rjust(width) for token in row) for row in tokens)


def render_document(document: LayoutDocument) -> str:
    """Return a header, the grid, its headline counts and any road-access gaps."""
    stats = summary(document.grid)
    statuses = status_counts(document.grid)
    lines = [
        f"{document.name} ({document.kind.value}, {document.grid.rows}x{document.grid.cols})",
    ]
    if document.description:
        lines.append(document.description)
    lines.append("")
    lines.append(render_grid(document.grid))
    lines.append("")
    lines.append(
        f"plots={stats.plots} roads={stats.roads} amenities={stats.amenities} "
        f"empty={stats.empty} total={stats.total}",
    )
    lines.append(
        "  ".join(f"{status.value}={count}" for status, count in statuses.items()),
    )
    lines.extend(render_road_gaps(document.grid))
    return "\n".join(lines)


def render_road_gaps(grid: Grid) -> list[str]:
    """Describe each plot that has no road among its four neighbours."""
    lines = []
    for cell in plots_without_road_access(grid):
        label = f"plot {cell.plot_number}" if cell.plot_number is not None else "plot"
        lines.append(f"{label} at ({cell.row}, {cell.col}) has no road access")
    return lines
