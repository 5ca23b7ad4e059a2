"""Grid — the rectangular site plan.

The Grid owns a ``rows x cols`` matrix of cells and keeps its shape
honest: every cell sits at the index matching its own ``(row, col)``.
All edits go through the grid, which replaces the affected cell.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any

from plotgrid.layout.cell import (
    Cell,
    CellType,
    EmptyCell,
    PlotCell,
    PlotStatus,
    set_type,
)
from plotgrid.layout.errors import (
    DimensionOutOfRange,
    InvalidCellUpdate,
    OutOfBounds,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

MIN_DIMENSION = 1
MAX_DIMENSION = 50

# Fields that travel with a type change into the listed variant
_TRANSITION_FIELDS: dict[CellType, tuple[str, ...]] = {
    CellType.PLOT: ("size", "price", "status", "plot_number", "description"),
    CellType.AMENITY: ("description",),
    CellType.EMPTY: (),
    CellType.ROAD: (),
}


def check_dimensions(
    rows: int,
    cols: int,
    *,
    low: int = MIN_DIMENSION,
    high: int = MAX_DIMENSION,
) -> None:
    """Reject grid dimensions outside ``[low, high]``.

    Raises:
        DimensionOutOfRange: If either dimension is out of range or not
            an integer.
    """
    for value in (rows, cols):
        if isinstance(value, bool) or not isinstance(value, int):
            raise DimensionOutOfRange(rows, cols, low, high)
        if not low <= value <= high:
            raise DimensionOutOfRange(rows, cols, low, high)


def _empty_matrix(rows: int, cols: int) -> list[list[Cell]]:
    return [[EmptyCell(row=r, col=c) for c in range(cols)] for r in range(rows)]


@dataclass
class Grid:
    """A rows x cols matrix of typed cells.

    Attributes:
        rows: Number of rows (1-50).
        cols: Number of columns (1-50).
        cells: 2D list of cells indexed as ``cells[row][col]``.
    """

    rows: int
    cols: int
    cells: list[list[Cell]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Check the dimensions and fill the grid with empty cells."""
        check_dimensions(self.rows, self.cols)
        self.cells = _empty_matrix(self.rows, self.cols)

    @classmethod
    def initialize(cls, rows: int, cols: int) -> Grid:
        """Return a fresh all-empty grid of ``rows x cols``."""
        return cls(rows=rows, cols=cols)

    @classmethod
    def from_cells(cls, cells: list[list[Cell]]) -> Grid:
        """Build a grid around an existing cell matrix.

        Args:
            cells: Row-major matrix; every row must have the same length
                and every cell must carry its own index.

        Raises:
            DimensionOutOfRange: If the matrix size is out of range.
            InvalidCellUpdate: If the matrix is ragged or a cell's
                position does not match its index.
        """
        rows = len(cells)
        cols = len(cells[0]) if cells else 0
        grid = cls(rows=rows, cols=cols)
        for r, row in enumerate(cells):
            if len(row) != cols:
                msg = f"row {r} has {len(row)} cells, expected {cols}"
                raise InvalidCellUpdate(msg)
            for c, cell in enumerate(row):
                if (cell.row, cell.col) != (r, c):
                    msg = f"cell at index ({r}, {c}) claims ({cell.row}, {cell.col})"
                    raise InvalidCellUpdate(msg)
        grid.cells = [list(row) for row in cells]
        return grid

    def reset(self, rows: int, cols: int) -> None:
        """Rebuild the grid at new dimensions, discarding all content.

        Raises:
            DimensionOutOfRange: If the new size is out of range.  The
                grid is left unchanged.
        """
        check_dimensions(rows, cols)
        self.rows = rows
        self.cols = cols
        self.cells = _empty_matrix(rows, cols)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def cell_at(self, row: int, col: int) -> Cell:
        """Return the cell at ``(row, col)``.

        Raises:
            OutOfBounds: If the coordinates are outside the grid.
        """
        if not self.in_bounds(row, col):
            raise OutOfBounds(row, col, self.rows, self.cols)
        return self.cells[row][col]

    def iter_cells(self) -> Iterator[Cell]:
        """Yield every cell in row-major order."""
        for row in self.cells:
            yield from row

    def update_cell(self, row: int, col: int, /, **changes: Any) -> Cell:
        """Merge ``changes`` into the cell at ``(row, col)``.

        A ``type`` entry converts the cell first (see
        :func:`plotgrid.layout.cell.set_type`); the remaining entries
        are merged into the converted cell.  Fields not mentioned keep
        their current values.

        Args:
            row: Row index.
            col: Column index.
            **changes: Cell fields to change.

        Returns:
            The new cell now stored at ``(row, col)``.

        Raises:
            OutOfBounds: If the coordinates are outside the grid.
            InvalidCellUpdate: If a field does not exist on the resulting
                cell variant or has an invalid value.
        """
        cell = self.cell_at(row, col)
        if "row" in changes or "col" in changes:
            msg = "a cell's position is fixed by the grid"
            raise InvalidCellUpdate(msg)
        if isinstance(changes.get("status"), str):
            changes["status"] = PlotStatus.parse(changes["status"])

        new_type = changes.pop("type", None)
        if new_type is not None:
            new_type = CellType.parse(new_type)
            if new_type is not cell.type:
                carried = {
                    key: changes.pop(key)
                    for key in _TRANSITION_FIELDS[new_type]
                    if key in changes
                }
                cell = set_type(cell, new_type, **carried)

        if changes:
            try:
                cell = dataclasses.replace(cell, **changes)
            except TypeError as exc:
                msg = (
                    f"({row}, {col}): {cell.type.value} cell does not accept "
                    f"{sorted(changes)}"
                )
                raise InvalidCellUpdate(msg) from exc

        self.cells[row][col] = cell
        return cell

    def set_plot_status(
        self,
        row: int,
        col: int,
        status: PlotStatus,
        *,
        owner_id: str | None = None,
        purchase_date: datetime | None = None,
    ) -> PlotCell:
        """Change the sales status of the plot at ``(row, col)``.

        Marking a plot available clears its owner and purchase date.

        Raises:
            OutOfBounds: If the coordinates are outside the grid.
            InvalidCellUpdate: If the cell is not a plot.
        """
        cell = self.cell_at(row, col)
        if not isinstance(cell, PlotCell):
            msg = f"({row}, {col}) is a {cell.type.value} cell, not a plot"
            raise InvalidCellUpdate(msg)
        if status is PlotStatus.AVAILABLE:
            owner_id = None
            purchase_date = None
        updated = dataclasses.replace(
            cell,
            status=status,
            owner_id=owner_id,
            purchase_date=purchase_date,
        )
        self.cells[row][col] = updated
        return updated

    def neighbours(
        self,
        row: int,
        col: int,
        *,
        include_diagonals: bool = False,
    ) -> list[Cell]:
        """Return the in-bounds cells adjacent to ``(row, col)``.

        Args:
            row: Row index.
            col: Column index.
            include_diagonals: If True, return up to 8 neighbours;
                otherwise 4.
        """
        offsets = [(-1, 0), (1, 0), (0, -1), (0, 1)]
        if include_diagonals:
            offsets += [(-1, -1), (-1, 1), (1, -1), (1, 1)]

        result: list[Cell] = []
        for dr, dc in offsets:
            nr, nc = row + dr, col + dc
            if self.in_bounds(nr, nc):
                result.append(self.cells[nr][nc])
        return result

    def copy(self) -> Grid:
        """Return an independent grid with the same cells."""
        return Grid.from_cells([list(row) for row in self.cells])
