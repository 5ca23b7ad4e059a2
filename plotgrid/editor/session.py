"""LayoutSession — one user's edit of a project or template layout.

The session owns everything an editing screen needs: the grid, the
document metadata and the identifier of the stored document once there
is one.  Nothing is shared between sessions.  Saving always goes through
the validator first.

Painting a plot hands out the next free plot number and never renumbers
existing plots; renumbering is an explicit action (``renumber``).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from plotgrid.editor.config import LayoutConfig
from plotgrid.layout.cell import Cell, CellType, PlotCell
from plotgrid.layout.errors import DocumentNotFound, InvalidCellUpdate
from plotgrid.layout.grid import Grid, check_dimensions
from plotgrid.layout.numbering import next_plot_number, number_plots
from plotgrid.layout.stats import LayoutSummary, summary
from plotgrid.layout.validation import ValidationResult, validate_layout
from plotgrid.storage.documents import LayoutDocument, LayoutKind

if TYPE_CHECKING:
    from plotgrid.storage.store import LayoutStore

logger = logging.getLogger(__name__)


@dataclass
class LayoutSession:
    """State of a single layout editing session.

    Attributes:
        config: Editor settings (limits and plot defaults).
        grid: The layout being edited.
        kind: Whether this is a template or a project.
        name: Document name.
        description: Optional description.
        created_by: Identifier of the editing user.
        document_id: Store identifier; None until saved or loaded.
        location: Site location (projects only).
        starting_price: Default plot price (projects only).
    """

    config: LayoutConfig = field(default_factory=LayoutConfig)
    grid: Grid | None = None
    kind: LayoutKind = LayoutKind.TEMPLATE
    name: str = ""
    description: str | None = None
    created_by: str = ""
    document_id: str | None = None
    location: str | None = None
    starting_price: float | None = None

    def __post_init__(self) -> None:
        """Start from an empty grid of the configured default size."""
        if self.grid is None:
            self.grid = Grid(rows=self.config.default_rows, cols=self.config.default_cols)

    # -- Construction ---------------------------------------------------------

    @classmethod
    def new(
        cls,
        config: LayoutConfig | None = None,
        *,
        kind: LayoutKind = LayoutKind.TEMPLATE,
        created_by: str = "",
        rows: int | None = None,
        cols: int | None = None,
    ) -> LayoutSession:
        """Start a blank session.

        Args:
            config: Editor settings; defaults if omitted.
            kind: Template or project.
            created_by: Identifier of the editing user.
            rows: Initial rows (config default if omitted).
            cols: Initial columns (config default if omitted).

        Raises:
            DimensionOutOfRange: If the size is outside the configured
                limits.
        """
        config = config or LayoutConfig()
        rows = config.default_rows if rows is None else rows
        cols = config.default_cols if cols is None else cols
        check_dimensions(rows, cols, low=config.min_dimension, high=config.max_dimension)
        return cls(
            config=config,
            grid=Grid(rows=rows, cols=cols),
            kind=kind,
            created_by=created_by,
        )

    @classmethod
    def load(
        cls,
        store: LayoutStore,
        document_id: str,
        config: LayoutConfig | None = None,
    ) -> LayoutSession:
        """Open a stored document for editing.

        Raises:
            DocumentNotFound: If the store has no such document.
        """
        document = store.load(document_id)
        if document is None:
            raise DocumentNotFound(document_id)
        logger.info("Loaded %s %r (%s)", document.kind.value, document.name, document_id)
        return cls.from_document(document, config)

    @classmethod
    def from_document(
        cls,
        document: LayoutDocument,
        config: LayoutConfig | None = None,
    ) -> LayoutSession:
        """Resume editing ``document``; the session takes over its grid."""
        return cls(
            config=config or LayoutConfig(),
            grid=document.grid,
            kind=document.kind,
            name=document.name,
            description=document.description,
            created_by=document.created_by,
            document_id=document.id,
            location=document.location,
            starting_price=document.starting_price,
        )

    @classmethod
    def from_template(
        cls,
        template: LayoutDocument,
        config: LayoutConfig | None = None,
        *,
        created_by: str = "",
    ) -> LayoutSession:
        """Start a new project session laid out like ``template``.

        The template's grid is copied, so editing the project never
        touches the template.
        """
        return cls(
            config=config or LayoutConfig(),
            grid=template.grid.copy(),
            kind=LayoutKind.PROJECT,
            description=template.description,
            created_by=created_by,
        )

    # -- Editing --------------------------------------------------------------

    def resize(self, rows: int, cols: int) -> None:
        """Change the grid size.  All cell content is discarded.

        Raises:
            DimensionOutOfRange: If the size is outside the configured
                limits; the grid is left untouched.
        """
        check_dimensions(
            rows,
            cols,
            low=self.config.min_dimension,
            high=self.config.max_dimension,
        )
        self.grid.reset(rows, cols)
        logger.info("Reset layout to %dx%d", rows, cols)

    def paint(self, row: int, col: int, cell_type: CellType | str) -> Cell:
        """Set the type of the cell at ``(row, col)``.

        A new plot gets the next free plot number and the default size
        and price.  Painting a plot over a plot leaves it as it is.

        Returns:
            The cell now at ``(row, col)``.

        Raises:
            OutOfBounds: If the coordinates are outside the grid.
        """
        cell_type = CellType.parse(cell_type)
        current = self.grid.cell_at(row, col)
        if current.type is cell_type:
            return current
        if cell_type is CellType.PLOT:
            return self.grid.update_cell(
                row,
                col,
                type=cell_type,
                size=self.config.default_plot_size,
                price=self._default_price(),
                plot_number=next_plot_number(self.grid),
            )
        return self.grid.update_cell(row, col, type=cell_type)

    def edit_plot(
        self,
        row: int,
        col: int,
        *,
        plot_number: int | None = None,
        size: float | None = None,
        price: float | None = None,
        description: str | None = None,
    ) -> PlotCell:
        """Change the details of the plot at ``(row, col)``.

        Only the arguments given are changed.

        Raises:
            OutOfBounds: If the coordinates are outside the grid.
            InvalidCellUpdate: If the cell is not a plot or a value is
                invalid.
        """
        changes = {
            key: value
            for key, value in (
                ("plot_number", plot_number),
                ("size", size),
                ("price", price),
                ("description", description),
            )
            if value is not None
        }
        current = self.grid.cell_at(row, col)
        if not isinstance(current, PlotCell):
            msg = f"({row}, {col}) is a {current.type.value} cell, not a plot"
            raise InvalidCellUpdate(msg)
        return self.grid.update_cell(row, col, **changes)

    def renumber(self) -> int:
        """Renumber all plots row-major from 1; return the plot count."""
        count = number_plots(self.grid)
        logger.info("Renumbered %d plots", count)
        return count

    # -- Checks and persistence ------------------------------------------------

    def summary(self) -> LayoutSummary:
        return summary(self.grid)

    def validate(self) -> ValidationResult:
        return validate_layout(self.name, self.grid)

    def to_document(self) -> LayoutDocument:
        """Snapshot the session as a document (grid is copied)."""
        return LayoutDocument(
            id=self.document_id,
            kind=self.kind,
            name=self.name.strip(),
            description=self.description,
            created_by=self.created_by,
            grid=self.grid.copy(),
            location=self.location,
            starting_price=self.starting_price,
        )

    def save(self, store: LayoutStore) -> str:
        """Validate, then create or overwrite the stored document.

        Returns:
            The document identifier, also kept in ``document_id``.

        Raises:
            ValidationFailure: If the layout breaks a rule; nothing is
                written.
            PersistenceFailure: If the store fails.
        """
        result = self.validate()
        if not result.ok:
            logger.warning("Refusing to save %r: %s", self.name, result.reason)
        result.raise_for_failure()
        self.document_id = store.save(self.to_document(), existing_id=self.document_id)
        return self.document_id

    def _default_price(self) -> float:
        if self.starting_price is not None:
            return self.starting_price
        return self.config.default_plot_price
