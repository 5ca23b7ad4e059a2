"""Tests for plotgrid.layout.grid."""

from datetime import datetime, timezone

import pytest

from plotgrid.layout.cell import (
    AmenityCell,
    CellType,
    EmptyCell,
    PlotCell,
    PlotStatus,
    RoadCell,
)
from plotgrid.layout.errors import DimensionOutOfRange, InvalidCellUpdate, OutOfBounds
from plotgrid.layout.grid import Grid, check_dimensions


class TestGridShape:
    """Tests for construction and dimensional invariants."""

    @pytest.mark.parametrize(("rows", "cols"), [(1, 1), (3, 7), (50, 1), (50, 50)])
    def test_dimensions(self, rows: int, cols: int) -> None:
        grid = Grid.initialize(rows, cols)
        assert len(grid.cells) == rows
        assert all(len(row) == cols for row in grid.cells)
        for r, row in enumerate(grid.cells):
            for c, cell in enumerate(row):
                assert (cell.row, cell.col) == (r, c)
                assert isinstance(cell, EmptyCell)

    @pytest.mark.parametrize(("rows", "cols"), [(51, 10), (0, 5), (5, 0), (10, 51), (-1, 3)])
    def test_out_of_range_rejected(self, rows: int, cols: int) -> None:
        with pytest.raises(DimensionOutOfRange):
            Grid.initialize(rows, cols)

    def test_non_integer_rejected(self) -> None:
        with pytest.raises(DimensionOutOfRange):
            check_dimensions(2.5, 3)  # type: ignore[arg-type]

    def test_dimension_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            Grid(rows=51, cols=10)

    def test_reset_discards_content(self, minimal_grid: Grid) -> None:
        minimal_grid.reset(4, 2)
        assert (minimal_grid.rows, minimal_grid.cols) == (4, 2)
        assert len(minimal_grid.cells) == 4
        assert all(isinstance(cell, EmptyCell) for cell in minimal_grid.iter_cells())

    def test_reset_same_size_discards_content(self, minimal_grid: Grid) -> None:
        minimal_grid.reset(3, 3)
        assert isinstance(minimal_grid.cell_at(0, 0), EmptyCell)
        assert isinstance(minimal_grid.cell_at(1, 1), EmptyCell)

    def test_reset_out_of_range_keeps_grid(self, minimal_grid: Grid) -> None:
        with pytest.raises(DimensionOutOfRange):
            minimal_grid.reset(60, 3)
        assert minimal_grid.rows == 3
        assert isinstance(minimal_grid.cell_at(0, 0), PlotCell)

    def test_from_cells_rejects_misplaced_cell(self) -> None:
        cells = [[EmptyCell(row=0, col=0), EmptyCell(row=0, col=0)]]
        with pytest.raises(InvalidCellUpdate):
            Grid.from_cells(cells)

    def test_from_cells_rejects_ragged(self) -> None:
        cells = [
            [EmptyCell(row=0, col=0), EmptyCell(row=0, col=1)],
            [EmptyCell(row=1, col=0)],
        ]
        with pytest.raises(InvalidCellUpdate):
            Grid.from_cells(cells)


class TestCellAccess:
    """Tests for lookup and iteration."""

    def test_cell_at_valid(self, small_grid: Grid) -> None:
        cell = small_grid.cell_at(2, 1)
        assert (cell.row, cell.col) == (2, 1)

    def test_cell_at_out_of_bounds(self, small_grid: Grid) -> None:
        with pytest.raises(OutOfBounds):
            small_grid.cell_at(3, 0)

    def test_iter_cells_row_major(self, small_grid: Grid) -> None:
        positions = [(c.row, c.col) for c in small_grid.iter_cells()]
        assert positions[:4] == [(0, 0), (0, 1), (0, 2), (1, 0)]
        assert len(positions) == 9

    def test_neighbours_corner(self, small_grid: Grid) -> None:
        assert len(small_grid.neighbours(0, 0)) == 2
        assert len(small_grid.neighbours(0, 0, include_diagonals=True)) == 3

    def test_neighbours_center(self, small_grid: Grid) -> None:
        assert len(small_grid.neighbours(1, 1)) == 4
        assert len(small_grid.neighbours(1, 1, include_diagonals=True)) == 8


class TestUpdateCell:
    """Tests for merging partial updates into cells."""

    def test_type_change_to_road(self, small_grid: Grid) -> None:
        cell = small_grid.update_cell(0, 1, type=CellType.ROAD)
        assert cell == RoadCell(row=0, col=1)
        assert small_grid.cell_at(0, 1) is cell

    def test_type_accepts_string(self, small_grid: Grid) -> None:
        small_grid.update_cell(0, 0, type="amenity", description="Park")
        assert small_grid.cell_at(0, 0) == AmenityCell(row=0, col=0, description="Park")

    def test_partial_update_preserves_fields(self, minimal_grid: Grid) -> None:
        minimal_grid.update_cell(0, 0, plot_number=7)
        cell = minimal_grid.cell_at(0, 0)
        assert isinstance(cell, PlotCell)
        assert cell.plot_number == 7
        assert cell.size == 1200
        assert cell.price == 500000

    def test_status_string_coerced(self, minimal_grid: Grid) -> None:
        cell = minimal_grid.update_cell(0, 0, status="reserved")
        assert cell.status is PlotStatus.RESERVED

    def test_plot_to_empty_clears_plot_data(self, minimal_grid: Grid) -> None:
        cell = minimal_grid.update_cell(0, 0, type=CellType.EMPTY)
        assert cell == EmptyCell(row=0, col=0)

    def test_price_on_road_rejected(self, minimal_grid: Grid) -> None:
        with pytest.raises(InvalidCellUpdate):
            minimal_grid.update_cell(1, 1, price=100)
        assert minimal_grid.cell_at(1, 1) == RoadCell(row=1, col=1)

    def test_position_cannot_change(self, minimal_grid: Grid) -> None:
        with pytest.raises(InvalidCellUpdate):
            minimal_grid.update_cell(0, 0, row=2)
        with pytest.raises(InvalidCellUpdate):
            minimal_grid.update_cell(0, 0, col=1)
        assert minimal_grid.cell_at(0, 0).type is CellType.PLOT

    def test_unknown_names_rejected(self, minimal_grid: Grid) -> None:
        with pytest.raises(InvalidCellUpdate):
            minimal_grid.update_cell(0, 1, type="lake")
        with pytest.raises(InvalidCellUpdate):
            minimal_grid.update_cell(0, 0, status="pending")
        assert minimal_grid.cell_at(0, 1) == EmptyCell(row=0, col=1)

    def test_nan_size_rejected(self, minimal_grid: Grid) -> None:
        with pytest.raises(InvalidCellUpdate):
            minimal_grid.update_cell(0, 0, size=float("nan"))
        assert minimal_grid.cell_at(0, 0).size == 1200

    def test_out_of_bounds_leaves_state(self, minimal_grid: Grid) -> None:
        before = [list(row) for row in minimal_grid.cells]
        with pytest.raises(OutOfBounds):
            minimal_grid.update_cell(5, 5, type=CellType.ROAD)
        assert minimal_grid.cells == before

    def test_out_of_bounds_is_index_error(self, small_grid: Grid) -> None:
        with pytest.raises(IndexError):
            small_grid.update_cell(-1, 0, type=CellType.ROAD)


class TestPlotStatus:
    """Tests for plot sales status changes."""

    def test_mark_sold(self, minimal_grid: Grid) -> None:
        when = datetime(2024, 5, 1, tzinfo=timezone.utc)
        cell = minimal_grid.set_plot_status(
            0,
            0,
            PlotStatus.SOLD,
            owner_id="client-3",
            purchase_date=when,
        )
        assert cell.status is PlotStatus.SOLD
        assert cell.owner_id == "client-3"
        assert cell.purchase_date == when

    def test_available_clears_owner(self, minimal_grid: Grid) -> None:
        minimal_grid.set_plot_status(0, 0, PlotStatus.SOLD, owner_id="client-3")
        cell = minimal_grid.set_plot_status(0, 0, PlotStatus.AVAILABLE, owner_id="x")
        assert cell.owner_id is None
        assert cell.purchase_date is None

    def test_non_plot_rejected(self, minimal_grid: Grid) -> None:
        with pytest.raises(InvalidCellUpdate):
            minimal_grid.set_plot_status(1, 1, PlotStatus.SOLD)


class TestCopy:
    """Tests for grid copies."""

    def test_copy_is_independent(self, minimal_grid: Grid) -> None:
        clone = minimal_grid.copy()
        clone.update_cell(2, 2, type=CellType.ROAD)
        assert isinstance(minimal_grid.cell_at(2, 2), EmptyCell)
        assert clone.cell_at(0, 0) == minimal_grid.cell_at(0, 0)
