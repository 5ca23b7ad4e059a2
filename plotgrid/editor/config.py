"""Config — load editor settings from YAML files.

Grid limits, default sizes and prices for newly painted plots, and the
store location live in YAML and are parsed into a typed dataclass here.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from plotgrid.layout.grid import MAX_DIMENSION, MIN_DIMENSION


@dataclass
class LayoutConfig:
    """Editor configuration.

    Attributes:
        min_dimension: Smallest accepted rows/cols value.
        max_dimension: Largest accepted rows/cols value.
        default_rows: Rows of a new layout.
        default_cols: Columns of a new layout.
        default_plot_size: Size (sq ft) given to a freshly painted plot.
        default_plot_price: Price given to a freshly painted plot.
        store_root: Directory of the YAML document store.
        log_level: Logging level name for the CLI.
    """

    min_dimension: int = MIN_DIMENSION
    max_dimension: int = MAX_DIMENSION
    default_rows: int = 10
    default_cols: int = 10
    default_plot_size: float = 1000.0
    default_plot_price: float = 0.0
    store_root: str = "data"
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        # The grid itself never accepts more than 1..50
        self.min_dimension = max(MIN_DIMENSION, self.min_dimension)
        self.max_dimension = min(MAX_DIMENSION, self.max_dimension)
        if self.min_dimension > self.max_dimension:
            msg = (
                f"min_dimension {self.min_dimension} exceeds "
                f"max_dimension {self.max_dimension}"
            )
            raise ValueError(msg)

    @classmethod
    def from_yaml(cls, path: str | Path) -> LayoutConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated LayoutConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
        """
        path = Path(path)
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}

        return cls(
            min_dimension=data.get("min_dimension", cls.min_dimension),
            max_dimension=data.get("max_dimension", cls.max_dimension),
            default_rows=data.get("default_rows", cls.default_rows),
            default_cols=data.get("default_cols", cls.default_cols),
            default_plot_size=data.get(
                "default_plot_size",
                cls.default_plot_size,
            ),
            default_plot_price=data.get(
                "default_plot_price",
                cls.default_plot_price,
            ),
            store_root=data.get("store_root", cls.store_root),
            log_level=data.get("log_level", cls.log_level),
        )
