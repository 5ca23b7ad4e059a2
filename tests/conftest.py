"""Shared fixtures for the plotgrid test suite."""

from __future__ import annotations

import pytest

from plotgrid.editor.config import LayoutConfig
from plotgrid.layout.cell import CellType
from plotgrid.layout.grid import Grid
from plotgrid.storage.store import InMemoryLayoutStore


@pytest.fixture
def small_grid() -> Grid:
    """An empty 3x3 grid."""
    return Grid(rows=3, cols=3)


@pytest.fixture
def minimal_grid() -> Grid:
    """A 3x3 grid with one plot at (0, 0) and one road at (1, 1)."""
    grid = Grid(rows=3, cols=3)
    grid.update_cell(0, 0, type=CellType.PLOT, size=1200, price=500000)
    grid.update_cell(1, 1, type=CellType.ROAD)
    return grid


@pytest.fixture
def default_config() -> LayoutConfig:
    """Default editor config (no YAML file needed)."""
    return LayoutConfig()


@pytest.fixture
def memory_store() -> InMemoryLayoutStore:
    """An empty in-memory templates store."""
    return InMemoryLayoutStore(collection="templates")
