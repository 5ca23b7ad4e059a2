"""Draft files — an editing session kept on disk between CLI calls.

A draft is the session's document written to a single YAML file.  It
may be incomplete (no name, no road yet); validation happens only when
the draft is saved to a store.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from plotgrid.editor.config import LayoutConfig
from plotgrid.editor.session import LayoutSession
from plotgrid.layout.errors import LayoutError, PersistenceFailure
from plotgrid.storage.documents import document_from_dict, document_to_dict

logger = logging.getLogger(__name__)


def write_draft(session: LayoutSession, path: str | Path) -> Path:
    """Write ``session`` to ``path`` as YAML.

    Raises:
        PersistenceFailure: If the file cannot be written.
    """
    path = Path(path)
    try:
        with path.open("w") as f:
            yaml.safe_dump(document_to_dict(session.to_document()), f, sort_keys=False)
    except (OSError, yaml.YAMLError) as exc:
        msg = f"could not write draft {path}"
        raise PersistenceFailure(msg) from exc
    logger.debug("Wrote draft %s", path)
    return path


def read_draft(path: str | Path, config: LayoutConfig | None = None) -> LayoutSession:
    """Rebuild a session from a draft file.

    Raises:
        PersistenceFailure: If the file is missing, unreadable or does
            not hold a valid layout.
    """
    path = Path(path)
    try:
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}
        document = document_from_dict(data)
    except (OSError, yaml.YAMLError, LayoutError, KeyError, TypeError, ValueError) as exc:
        msg = f"could not read draft {path}: {exc}"
        raise PersistenceFailure(msg) from exc
    return LayoutSession.from_document(document, config)
