"""Cell — a single addressable unit of a site layout.

A cell is one of four variants (empty, plot, road, amenity).  Only the
plot variant carries sale data and only plot and amenity cells carry a
description, so a road with a price simply cannot be built.  Cells are
frozen: the owning ``Grid`` swaps in a new cell on every change.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import ClassVar

from plotgrid.layout.errors import InvalidCellUpdate


class CellType(Enum):
    """What occupies a cell on the site plan."""

    EMPTY = "empty"
    PLOT = "plot"
    ROAD = "road"
    AMENITY = "amenity"

    @classmethod
    def parse(cls, value: CellType | str) -> CellType:
        """Convert a value or name such as ``"road"``; reject unknown names."""
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"unknown cell type {value!r}"
            raise InvalidCellUpdate(msg) from exc


class PlotStatus(Enum):
    """Sales state of a plot."""

    AVAILABLE = "available"
    RESERVED = "reserved"
    SOLD = "sold"

    @classmethod
    def parse(cls, value: PlotStatus | str) -> PlotStatus:
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"unknown plot status {value!r}"
            raise InvalidCellUpdate(msg) from exc


@dataclass(frozen=True)
class EmptyCell:
    """Unused ground.

    Attributes:
        row: Row index in the owning grid.
        col: Column index in the owning grid.
    """

    type: ClassVar[CellType] = CellType.EMPTY

    row: int
    col: int


@dataclass(frozen=True)
class RoadCell:
    """Access road."""

    type: ClassVar[CellType] = CellType.ROAD

    row: int
    col: int


@dataclass(frozen=True)
class AmenityCell:
    """Shared facility such as a park or temple.

    Attributes:
        row: Row index in the owning grid.
        col: Column index in the owning grid.
        description: Free-text label shown on the plan.
    """

    type: ClassVar[CellType] = CellType.AMENITY

    row: int
    col: int
    description: str | None = None


@dataclass(frozen=True)
class PlotCell:
    """A sellable unit of land.

    Attributes:
        row: Row index in the owning grid.
        col: Column index in the owning grid.
        size: Area in square feet (> 0).
        price: Asking or sale price (>= 0).
        status: Current sales state.
        plot_number: User-facing identifier, unique within the grid.
            ``None`` until one is assigned.
        description: Optional free-text note.
        owner_id: Identifier of the buyer once reserved or sold.
        purchase_date: When the plot was bought.
    """

    type: ClassVar[CellType] = CellType.PLOT

    row: int
    col: int
    size: float
    price: float
    status: PlotStatus = PlotStatus.AVAILABLE
    plot_number: int | None = None
    description: str | None = None
    owner_id: str | None = None
    purchase_date: datetime | None = None

    def __post_init__(self) -> None:
        if not (self.size > 0 and math.isfinite(self.size)):
            msg = f"plot size must be a positive number, got {self.size}"
            raise InvalidCellUpdate(msg)
        if not (self.price >= 0 and math.isfinite(self.price)):
            msg = f"plot price must be a non-negative number, got {self.price}"
            raise InvalidCellUpdate(msg)
        if self.plot_number is not None and self.plot_number < 1:
            msg = f"plot number must be positive, got {self.plot_number}"
            raise InvalidCellUpdate(msg)


Cell = EmptyCell | PlotCell | RoadCell | AmenityCell

_SIMPLE_VARIANTS: dict[CellType, type[EmptyCell] | type[RoadCell]] = {
    CellType.EMPTY: EmptyCell,
    CellType.ROAD: RoadCell,
}


def cell_from_type(cell_type: CellType, row: int, col: int) -> Cell:
    """Build a bare cell of ``cell_type`` at ``(row, col)``.

    Plot cells need a size and a price, so they cannot be built here.

    Raises:
        InvalidCellUpdate: If ``cell_type`` is ``PLOT``.
    """
    if cell_type is CellType.AMENITY:
        return AmenityCell(row=row, col=col)
    if cell_type is CellType.PLOT:
        msg = "plot cells require a size and a price"
        raise InvalidCellUpdate(msg)
    return _SIMPLE_VARIANTS[cell_type](row=row, col=col)


def set_type(
    cell: Cell,
    new_type: CellType,
    *,
    size: float | None = None,
    price: float | None = None,
    status: PlotStatus = PlotStatus.AVAILABLE,
    plot_number: int | None = None,
    description: str | None = None,
) -> Cell:
    """Return a copy of ``cell`` converted to ``new_type``.

    The position is kept.  Converting into a plot requires ``size`` and
    ``price``; converting out of a plot drops every plot-only field.
    An amenity may take a ``description``.

    Args:
        cell: The cell to convert.
        new_type: Target variant.
        size: Plot area, required when ``new_type`` is ``PLOT``.
        price: Plot price, required when ``new_type`` is ``PLOT``.
        status: Initial plot status.
        plot_number: Plot identifier to assign.
        description: Label for plot or amenity cells.

    Raises:
        InvalidCellUpdate: If plot data is missing or invalid.
    """
    if new_type is CellType.PLOT:
        if size is None or price is None:
            msg = f"({cell.row}, {cell.col}): a plot needs both size and price"
            raise InvalidCellUpdate(msg)
        return PlotCell(
            row=cell.row,
            col=cell.col,
            size=size,
            price=price,
            status=status,
            plot_number=plot_number,
            description=description,
        )
    if new_type is CellType.AMENITY:
        return AmenityCell(row=cell.row, col=cell.col, description=description)
    return cell_from_type(new_type, cell.row, cell.col)
