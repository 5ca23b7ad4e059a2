"""Layout documents and their stored shape.

A ``LayoutDocument`` is a named grid plus bookkeeping (owner, creation
and update times).  Templates and projects share the shape.  The codec
here turns documents into plain dicts using the camelCase keys of the
document store and back again, checking the grid invariants on the way
in.  Optional fields that are unset are left out rather than stored as
null.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from plotgrid.layout.cell import (
    AmenityCell,
    Cell,
    CellType,
    PlotCell,
    PlotStatus,
    cell_from_type,
)
from plotgrid.layout.errors import InvalidCellUpdate
from plotgrid.layout.grid import Grid


class LayoutKind(Enum):
    """Which collection a document belongs to."""

    TEMPLATE = "template"
    PROJECT = "project"


@dataclass
class LayoutDocument:
    """A persisted project or template layout.

    Attributes:
        name: Display name (must be non-blank to save).
        grid: The embedded layout.
        created_by: Identifier of the user who created it.
        description: Optional free text.
        kind: Template or project.
        id: Store identifier, None until first saved.
        created_at: When the document was first saved.
        updated_at: When the document was last saved.
        location: Site location (projects only).
        starting_price: Default plot price (projects only).
    """

    name: str
    grid: Grid
    created_by: str = ""
    description: str | None = None
    kind: LayoutKind = LayoutKind.TEMPLATE
    id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    location: str | None = None
    starting_price: float | None = None


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _format_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


def _parse_timestamp(value: Any) -> datetime | None:
    # YAML may already hand back a datetime for unquoted timestamps
    if value is None:
        return None
    parsed = value if isinstance(value, datetime) else datetime.fromisoformat(str(value))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _drop_none(data: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


def cell_to_dict(cell: Cell) -> dict[str, Any]:
    """Encode one cell."""
    data: dict[str, Any] = {"row": cell.row, "col": cell.col, "type": cell.type.value}
    if isinstance(cell, PlotCell):
        data.update(
            _drop_none(
                {
                    "plotNumber": cell.plot_number,
                    "size": cell.size,
                    "price": cell.price,
                    "status": cell.status.value,
                    "description": cell.description,
                    "ownerId": cell.owner_id,
                    "purchaseDate": (
                        _format_timestamp(cell.purchase_date)
                        if cell.purchase_date is not None
                        else None
                    ),
                },
            ),
        )
    elif isinstance(cell, AmenityCell) and cell.description is not None:
        data["description"] = cell.description
    return data


def cell_from_dict(data: dict[str, Any]) -> Cell:
    """Decode one cell.

    Keys that do not belong to the cell's variant are ignored, so older
    documents that stored a status on every cell still load.

    Raises:
        InvalidCellUpdate: If the type is unknown or plot data is
            missing or invalid.
    """
    try:
        row = int(data["row"])
        col = int(data["col"])
        cell_type = CellType(data.get("type", CellType.EMPTY.value))
    except (KeyError, TypeError, ValueError) as exc:
        msg = f"malformed cell {data!r}"
        raise InvalidCellUpdate(msg) from exc

    if cell_type is CellType.PLOT:
        if data.get("size") is None or data.get("price") is None:
            msg = f"plot at ({row}, {col}) is missing size or price"
            raise InvalidCellUpdate(msg)
        plot_number = data.get("plotNumber")
        return PlotCell(
            row=row,
            col=col,
            size=float(data["size"]),
            price=float(data["price"]),
            status=PlotStatus.parse(data.get("status", PlotStatus.AVAILABLE.value)),
            plot_number=int(plot_number) if plot_number is not None else None,
            description=data.get("description"),
            owner_id=data.get("ownerId"),
            purchase_date=_parse_timestamp(data.get("purchaseDate")),
        )
    if cell_type is CellType.AMENITY:
        return AmenityCell(row=row, col=col, description=data.get("description"))
    return cell_from_type(cell_type, row, col)


def grid_to_cells_payload(grid: Grid) -> dict[str, Any]:
    """Encode a grid as ``{"gridSize": ..., "gridCells": ...}``."""
    return {
        "gridSize": {"rows": grid.rows, "cols": grid.cols},
        "gridCells": [[cell_to_dict(cell) for cell in row] for row in grid.cells],
    }


def grid_from_payload(grid_size: dict[str, Any], grid_cells: list[list[dict]]) -> Grid:
    """Rebuild a grid from its stored size and cell matrix.

    Raises:
        DimensionOutOfRange: If the stored size is out of range.
        InvalidCellUpdate: If the cell matrix does not match the stored
            size or a cell is malformed.
    """
    rows = int(grid_size["rows"])
    cols = int(grid_size["cols"])
    if len(grid_cells) != rows:
        msg = f"gridCells has {len(grid_cells)} rows, gridSize says {rows}"
        raise InvalidCellUpdate(msg)
    grid = Grid.from_cells([[cell_from_dict(c) for c in row] for row in grid_cells])
    if grid.cols != cols:
        msg = f"gridCells has {grid.cols} columns, gridSize says {cols}"
        raise InvalidCellUpdate(msg)
    return grid


def document_to_dict(document: LayoutDocument) -> dict[str, Any]:
    """Encode a document for storage, omitting unset optional fields."""
    data = _drop_none(
        {
            "id": document.id,
            "kind": document.kind.value,
            "name": document.name,
            "description": document.description,
            "createdBy": document.created_by,
            "createdAt": (
                _format_timestamp(document.created_at)
                if document.created_at is not None
                else None
            ),
            "updatedAt": (
                _format_timestamp(document.updated_at)
                if document.updated_at is not None
                else None
            ),
            "location": document.location,
            "startingPrice": document.starting_price,
        },
    )
    data.update(grid_to_cells_payload(document.grid))
    return data


def document_from_dict(data: dict[str, Any]) -> LayoutDocument:
    """Decode a stored document.

    Raises:
        LayoutError: If the embedded grid is invalid.
        KeyError: If ``name``, ``gridSize`` or ``gridCells`` is missing.
    """
    starting_price = data.get("startingPrice")
    return LayoutDocument(
        id=data.get("id"),
        kind=LayoutKind(data.get("kind", LayoutKind.TEMPLATE.value)),
        name=data["name"],
        description=data.get("description"),
        created_by=data.get("createdBy", ""),
        created_at=_parse_timestamp(data.get("createdAt")),
        updated_at=_parse_timestamp(data.get("updatedAt")),
        location=data.get("location"),
        starting_price=float(starting_price) if starting_price is not None else None,
        grid=grid_from_payload(data["gridSize"], data["gridCells"]),
    )
