"""Tests for plotgrid.layout.cell."""

import dataclasses

import pytest

from plotgrid.layout.cell import (
    AmenityCell,
    CellType,
    EmptyCell,
    PlotCell,
    PlotStatus,
    RoadCell,
    cell_from_type,
    set_type,
)
from plotgrid.layout.errors import InvalidCellUpdate


class TestCellVariants:
    """Tests for the individual cell dataclasses."""

    def test_types(self) -> None:
        assert EmptyCell(row=0, col=0).type is CellType.EMPTY
        assert RoadCell(row=0, col=0).type is CellType.ROAD
        assert AmenityCell(row=0, col=0).type is CellType.AMENITY
        assert PlotCell(row=0, col=0, size=10, price=0).type is CellType.PLOT

    def test_plot_defaults(self) -> None:
        plot = PlotCell(row=1, col=2, size=1200, price=500000)
        assert plot.status is PlotStatus.AVAILABLE
        assert plot.plot_number is None
        assert plot.owner_id is None

    def test_road_has_no_price(self) -> None:
        with pytest.raises(TypeError):
            RoadCell(row=0, col=0, price=10)  # type: ignore[call-arg]

    def test_cells_are_frozen(self) -> None:
        cell = EmptyCell(row=0, col=0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            cell.row = 3  # type: ignore[misc]

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"size": 0, "price": 1},
            {"size": -5, "price": 1},
            {"size": 10, "price": -1},
            {"size": 10, "price": 1, "plot_number": 0},
            {"size": float("nan"), "price": 1},
            {"size": float("inf"), "price": 1},
            {"size": 10, "price": float("nan")},
            {"size": 10, "price": float("inf")},
        ],
    )
    def test_plot_rejects_invalid_values(self, kwargs: dict) -> None:
        with pytest.raises(InvalidCellUpdate):
            PlotCell(row=0, col=0, **kwargs)

    def test_parse_unknown_names(self) -> None:
        assert CellType.parse("road") is CellType.ROAD
        with pytest.raises(InvalidCellUpdate):
            CellType.parse("lake")
        with pytest.raises(InvalidCellUpdate):
            PlotStatus.parse("pending")


class TestSetType:
    """Tests for cell type transitions."""

    def test_into_plot_requires_size_and_price(self) -> None:
        with pytest.raises(InvalidCellUpdate):
            set_type(EmptyCell(row=0, col=0), CellType.PLOT, size=100)

    def test_into_plot_defaults_to_available(self) -> None:
        plot = set_type(EmptyCell(row=2, col=1), CellType.PLOT, size=100, price=50)
        assert isinstance(plot, PlotCell)
        assert plot.status is PlotStatus.AVAILABLE
        assert (plot.row, plot.col) == (2, 1)

    def test_out_of_plot_drops_plot_fields(self) -> None:
        plot = PlotCell(row=0, col=0, size=100, price=50, plot_number=3, owner_id="c1")
        road = set_type(plot, CellType.ROAD)
        assert road == RoadCell(row=0, col=0)
        assert not hasattr(road, "price")

    def test_into_amenity_with_description(self) -> None:
        amenity = set_type(EmptyCell(row=0, col=0), CellType.AMENITY, description="Park")
        assert amenity == AmenityCell(row=0, col=0, description="Park")

    def test_cell_from_type_refuses_plot(self) -> None:
        with pytest.raises(InvalidCellUpdate):
            cell_from_type(CellType.PLOT, 0, 0)

    def test_cell_from_type_amenity(self) -> None:
        assert cell_from_type(CellType.AMENITY, 1, 1) == AmenityCell(row=1, col=1)
