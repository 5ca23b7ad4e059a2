"""Errors — the failure taxonomy of the layout model.

Every error derives from ``LayoutError`` so callers (the CLI in
particular) can catch the whole family in one place.  Where a builtin
exception already describes the condition it is mixed in, so code that
only knows about ``ValueError`` or ``IndexError`` keeps working.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from plotgrid.layout.validation import ValidationResult


class LayoutError(Exception):
    """Base class for all layout-model errors."""


class DimensionOutOfRange(LayoutError, ValueError):
    """Requested rows/cols fall outside the permitted range."""

    def __init__(self, rows: int, cols: int, low: int, high: int) -> None:
        super().__init__(
            f"grid size {rows}x{cols} outside permitted range [{low}, {high}]",
        )
        self.rows = rows
        self.cols = cols


class OutOfBounds(LayoutError, IndexError):
    """A cell address lies outside the current grid."""

    def __init__(self, row: int, col: int, rows: int, cols: int) -> None:
        super().__init__(f"({row}, {col}) out of bounds for {rows}x{cols}")
        self.row = row
        self.col = col


class InvalidCellUpdate(LayoutError, ValueError):
    """A cell change that the target cell variant cannot hold."""


class ValidationFailure(LayoutError):
    """A layout failed the publishability rules.

    Attributes:
        result: The full validation result, including every reason.
    """

    def __init__(self, result: ValidationResult) -> None:
        super().__init__(result.reason)
        self.result = result


class PersistenceFailure(LayoutError):
    """The document store could not complete an operation."""


class DocumentNotFound(PersistenceFailure):
    """No document exists under the requested identifier."""

    def __init__(self, document_id: str) -> None:
        super().__init__(f"no layout document with id {document_id!r}")
        self.document_id = document_id
