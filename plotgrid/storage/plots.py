"""Plot records — one flat record per plot of a project.

A project keeps its whole grid embedded; ``extract_plots`` flattens its
plots into records carrying the project id, a resolved number and price
and an address label.  The CLI prints them with ``plots``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any

from plotgrid.layout.cell import PlotCell, PlotStatus
from plotgrid.layout.numbering import next_plot_number

if TYPE_CHECKING:
    from plotgrid.layout.grid import Grid


@dataclass(frozen=True)
class PlotRecord:
    """One plot of a project, flattened out of the grid.

    Attributes:
        project_id: Owning project.
        plot_number: User-facing plot identifier.
        row: Grid row of the plot.
        col: Grid column of the plot.
        size: Area in square feet.
        price: Price of the plot.
        status: Sales state.
        owner_id: Buyer, if any.
        purchase_date: Purchase time, if sold.
        address: Human-readable postal label.
    """

    project_id: str
    plot_number: int
    row: int
    col: int
    size: float
    price: float
    status: PlotStatus = PlotStatus.AVAILABLE
    owner_id: str | None = None
    purchase_date: datetime | None = None
    address: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Encode with the document store's camelCase keys."""
        data: dict[str, Any] = {
            "projectId": self.project_id,
            "plotNumber": self.plot_number,
            "row": self.row,
            "col": self.col,
            "size": self.size,
            "price": self.price,
            "status": self.status.value,
            "type": "plot",
        }
        if self.owner_id is not None:
            data["ownerId"] = self.owner_id
        if self.purchase_date is not None:
            data["purchaseDate"] = self.purchase_date.isoformat()
        if self.address is not None:
            data["address"] = self.address
        return data


def extract_plots(
    project_id: str,
    grid: Grid,
    *,
    default_price: float = 0.0,
    project_name: str = "",
    location: str = "",
) -> list[PlotRecord]:
    """Flatten the plot cells of ``grid`` into records, row-major.

    A plot without a number gets the next number above every number in
    use, in scan order, so records never share a number.  A plot priced
    at zero falls back to ``default_price``.

    Args:
        project_id: Identifier of the owning project.
        grid: The project layout.
        default_price: Price for plots that have none.
        project_name: Used to build the address label.
        location: Used to build the address label.
    """
    records: list[PlotRecord] = []
    spare = next_plot_number(grid)
    for cell in grid.iter_cells():
        if not isinstance(cell, PlotCell):
            continue
        number = cell.plot_number
        if number is None:
            number = spare
            spare += 1
        address = None
        if project_name:
            address = ", ".join(
                part for part in (f"Plot {number}", project_name, location) if part
            )
        records.append(
            PlotRecord(
                project_id=project_id,
                plot_number=number,
                row=cell.row,
                col=cell.col,
                size=cell.size,
                price=cell.price or default_price,
                status=cell.status,
                owner_id=cell.owner_id,
                purchase_date=cell.purchase_date,
                address=address,
            ),
        )
    return records
