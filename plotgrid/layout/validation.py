"""Layout validation — may this layout be saved as a project or template?

Validation is pure and never raises for a well-formed grid: it returns a
``ValidationResult`` listing every broken rule, in rule order.  Callers
that want an exception use ``ValidationResult.raise_for_failure``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from plotgrid.layout.cell import CellType
from plotgrid.layout.errors import ValidationFailure
from plotgrid.layout.numbering import duplicate_plot_numbers
from plotgrid.layout.stats import count_cells_of_type

if TYPE_CHECKING:
    from plotgrid.layout.grid import Grid

MISSING_NAME = "missing template/project name"
NO_PLOTS = "layout must contain at least one plot"
NO_ROADS = "layout must contain at least one road for access"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a layout.

    Attributes:
        reasons: Every broken rule, in rule order.  Empty when valid.
    """

    reasons: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.reasons

    @property
    def reason(self) -> str | None:
        """The first broken rule, or None when valid."""
        return self.reasons[0] if self.reasons else None

    def raise_for_failure(self) -> None:
        """Raise ``ValidationFailure`` unless the layout is valid."""
        if not self.ok:
            raise ValidationFailure(self)


def validate_layout(name: str, grid: Grid) -> ValidationResult:
    """Check a named layout against the publishability rules.

    Rules, in order:

    1. ``name`` is not blank.
    2. At least one plot.
    3. At least one road, since a plot nobody can reach cannot be sold.
    4. No two plots share a plot number.

    Args:
        name: Name of the owning project or template.
        grid: The layout to check.

    Returns:
        A result whose ``reasons`` lists each broken rule.
    """
    reasons: list[str] = []
    if not (name or "").strip():
        reasons.append(MISSING_NAME)
    if count_cells_of_type(grid, CellType.PLOT) < 1:
        reasons.append(NO_PLOTS)
    if count_cells_of_type(grid, CellType.ROAD) < 1:
        reasons.append(NO_ROADS)
    duplicates = duplicate_plot_numbers(grid)
    if duplicates:
        reasons.append(
            "duplicate plot numbers: " + ", ".join(str(n) for n in duplicates),
        )
    return ValidationResult(reasons=tuple(reasons))
