"""Entry point for ``python -m plotgrid``.

Layouts are edited in a local draft file (``new``, ``open``, ``paint``,
``plot``, ``resize``, ``renumber``, ``show``, ``check``) and published to
the YAML document store with ``save``, which refuses layouts that fail
validation.  ``list``, ``delete`` and ``plots`` work on the store.
"""

from __future__ import annotations

import argparse
import logging
import pathlib
import sys

import yaml

from plotgrid.editor.config import LayoutConfig
from plotgrid.editor.drafts import read_draft, write_draft
from plotgrid.editor.session import LayoutSession
from plotgrid.layout.errors import DocumentNotFound, LayoutError, ValidationFailure
from plotgrid.storage.documents import LayoutKind
from plotgrid.storage.plots import extract_plots
from plotgrid.storage.store import YamlLayoutStore
from plotgrid.ui.text_renderer import render_document, render_road_gaps

logger = logging.getLogger("plotgrid")

_DEFAULT_CONFIG = (
    pathlib.Path(__file__).resolve().parent.parent / "config" / "default.yaml"
)

_COLLECTIONS: dict[str, LayoutKind] = {
    "templates": LayoutKind.TEMPLATE,
    "projects": LayoutKind.PROJECT,
}
_COLLECTION_OF = {kind: name for name, kind in _COLLECTIONS.items()}


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one sub-command per action."""
    parser = argparse.ArgumentParser(
        prog="plotgrid",
        description="plotgrid - site layout templates and projects",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=_DEFAULT_CONFIG,
        help="Path to YAML config file (default: config/default.yaml)",
    )
    parser.add_argument(
        "--store",
        type=pathlib.Path,
        default=None,
        help="Document store directory (default: store_root from config)",
    )
    parser.add_argument(
        "--collection",
        choices=sorted(_COLLECTIONS),
        default="templates",
        help="Collection to work on (default: templates)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log at DEBUG level",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # Store commands
    sub.add_parser("list", help="List stored layouts, newest first")
    delete = sub.add_parser("delete", help="Delete a stored layout")
    delete.add_argument("id")
    plots = sub.add_parser("plots", help="Print the plot records of a stored layout")
    plots.add_argument("id")

    # Draft commands
    new = sub.add_parser("new", help="Start a new draft")
    new.add_argument("draft", type=pathlib.Path)
    new.add_argument("--name", default="")
    new.add_argument("--description", default=None)
    new.add_argument("--rows", type=int, default=None)
    new.add_argument("--cols", type=int, default=None)
    new.add_argument("--created-by", default="")
    new.add_argument("--starting-price", type=float, default=None)
    new.add_argument(
        "--from-template",
        default=None,
        metavar="TEMPLATE_ID",
        help="Start a project draft from a stored template",
    )

    open_ = sub.add_parser("open", help="Copy a stored layout into a draft")
    open_.add_argument("id")
    open_.add_argument("draft", type=pathlib.Path)

    paint = sub.add_parser("paint", help="Set the type of one cell")
    paint.add_argument("draft", type=pathlib.Path)
    paint.add_argument("row", type=int)
    paint.add_argument("col", type=int)
    paint.add_argument("type", choices=["empty", "plot", "road", "amenity"])

    plot = sub.add_parser("plot", help="Edit the details of one plot")
    plot.add_argument("draft", type=pathlib.Path)
    plot.add_argument("row", type=int)
    plot.add_argument("col", type=int)
    plot.add_argument("--number", type=int, default=None)
    plot.add_argument("--size", type=float, default=None)
    plot.add_argument("--price", type=float, default=None)
    plot.add_argument("--description", default=None)

    resize = sub.add_parser("resize", help="Reset the draft to a new size")
    resize.add_argument("draft", type=pathlib.Path)
    resize.add_argument("rows", type=int)
    resize.add_argument("cols", type=int)

    for name, text in (
        ("renumber", "Renumber plots row-major from 1"),
        ("show", "Draw a draft"),
        ("check", "Validate a draft"),
        ("save", "Validate a draft and save it to the store"),
    ):
        cmd = sub.add_parser(name, help=text)
        cmd.add_argument("draft", type=pathlib.Path)
    return parser


def _new_session(
    args: argparse.Namespace,
    config: LayoutConfig,
    root: pathlib.Path,
) -> LayoutSession:
    if args.from_template is not None:
        templates = YamlLayoutStore(root, collection="templates")
        session = LayoutSession.from_template(
            templates.get(args.from_template),
            config,
            created_by=args.created_by,
        )
    else:
        session = LayoutSession.new(
            config,
            kind=_COLLECTIONS[args.collection],
            created_by=args.created_by,
            rows=args.rows,
            cols=args.cols,
        )
    session.name = args.name
    if args.description is not None:
        session.description = args.description
    session.starting_price = args.starting_price
    return session


def _run_store_command(args: argparse.Namespace, store: YamlLayoutStore, config: LayoutConfig) -> int:
    if args.command == "list":
        for document in store.list():
            created = document.created_at.isoformat() if document.created_at else "-"
            print(f"{document.id}  {created}  {document.name}")
    elif args.command == "delete":
        if not store.delete(args.id):
            raise DocumentNotFound(args.id)
    elif args.command == "plots":
        document = store.get(args.id)
        for record in extract_plots(
            args.id,
            document.grid,
            default_price=document.starting_price or config.default_plot_price,
            project_name=document.name,
            location=document.location or "",
        ):
            print(yaml.safe_dump([record.to_dict()], sort_keys=False), end="")
    return 0


def run(args: argparse.Namespace, config: LayoutConfig) -> int:
    """Execute one parsed command; return the process exit status."""
    root = args.store if args.store is not None else pathlib.Path(config.store_root)
    store = YamlLayoutStore(root, collection=args.collection)

    if args.command in ("list", "delete", "plots"):
        return _run_store_command(args, store, config)

    if args.command == "new":
        write_draft(_new_session(args, config, root), args.draft)
        return 0
    if args.command == "open":
        write_draft(LayoutSession.load(store, args.id, config), args.draft)
        return 0

    session = read_draft(args.draft, config)

    if args.command == "show":
        print(render_document(session.to_document()))
        return 0
    if args.command == "check":
        for line in render_road_gaps(session.grid):
            print(f"warning: {line}", file=sys.stderr)
        result = session.validate()
        if result.ok:
            print("ok")
            return 0
        for reason in result.reasons:
            print(reason, file=sys.stderr)
        return 1
    if args.command == "save":
        # A draft is saved to the collection of its own kind
        target = YamlLayoutStore(root, collection=_COLLECTION_OF[session.kind])
        try:
            print(session.save(target))
        except ValidationFailure as exc:
            for reason in exc.result.reasons:
                print(reason, file=sys.stderr)
            return 1
    elif args.command == "paint":
        session.paint(args.row, args.col, args.type)
    elif args.command == "plot":
        session.edit_plot(
            args.row,
            args.col,
            plot_number=args.number,
            size=args.size,
            price=args.price,
            description=args.description,
        )
    elif args.command == "resize":
        session.resize(args.rows, args.cols)
    elif args.command == "renumber":
        session.renumber()

    write_draft(session, args.draft)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Parse CLI args, load config, run the command."""
    args = build_parser().parse_args(argv)
    config = LayoutConfig.from_yaml(args.config) if args.config.exists() else LayoutConfig()
    level = logging.DEBUG if args.verbose else getattr(logging, config.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )
    try:
        return run(args, config)
    except LayoutError as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
