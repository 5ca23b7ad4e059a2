"""Layout stores — where project and template documents live.

``LayoutStore`` fixes the contract (save, load, delete, list) and does
the bookkeeping shared by every backend: identifiers, creation/update
timestamps and encoding through the document codec.  Backends only move
plain dicts around.  Writes are last-write-wins; there is no versioning.
"""

from __future__ import annotations

import dataclasses
import logging
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from plotgrid.layout.errors import DocumentNotFound, LayoutError, PersistenceFailure
from plotgrid.storage.documents import (
    LayoutDocument,
    document_from_dict,
    document_to_dict,
    utcnow,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


class LayoutStore(ABC):
    """Abstract document store for one collection of layouts.

    Attributes:
        collection: Collection name, e.g. ``"templates"`` or
            ``"projects"``.
    """

    def __init__(self, collection: str = "templates") -> None:
        self.collection = collection

    # -- Backend hooks --------------------------------------------------------

    @abstractmethod
    def _read(self, document_id: str) -> dict[str, Any] | None:
        """Return the raw stored dict, or None if absent."""

    @abstractmethod
    def _write(self, document_id: str, data: dict[str, Any]) -> None:
        """Store ``data`` under ``document_id``, replacing any previous."""

    @abstractmethod
    def _remove(self, document_id: str) -> bool:
        """Remove a document; return False if it did not exist."""

    @abstractmethod
    def _iter(self) -> Iterator[dict[str, Any]]:
        """Yield every raw stored dict."""

    # -- Public contract ------------------------------------------------------

    def save(self, document: LayoutDocument, existing_id: str | None = None) -> str:
        """Create a document, or overwrite the one at ``existing_id``.

        On create a new identifier and ``created_at`` are assigned; on
        overwrite the stored ``created_at`` is kept.  ``updated_at`` is
        always refreshed.  The identifier and timestamps are written
        back onto ``document``.

        Returns:
            The document identifier.

        Raises:
            DocumentNotFound: If ``existing_id`` names no document.
            PersistenceFailure: If the backend fails.
        """
        now = utcnow()
        if existing_id is not None:
            previous = self._read(existing_id)
            if previous is None:
                raise DocumentNotFound(existing_id)
            stamped = dataclasses.replace(
                document,
                id=existing_id,
                created_at=self._decode(previous).created_at or now,
                updated_at=now,
            )
        else:
            stamped = dataclasses.replace(
                document,
                id=uuid.uuid4().hex,
                created_at=now,
                updated_at=now,
            )

        self._write(stamped.id, document_to_dict(stamped))
        # Only a stored document gets its id and timestamps
        document.id = stamped.id
        document.created_at = stamped.created_at
        document.updated_at = stamped.updated_at
        logger.info(
            "%s %s %r in %s",
            "Updated" if existing_id is not None else "Created",
            document.kind.value,
            document.name,
            self.collection,
        )
        return document.id

    def load(self, document_id: str) -> LayoutDocument | None:
        """Return the document at ``document_id``, or None if absent."""
        data = self._read(document_id)
        if data is None:
            logger.debug("No document %s in %s", document_id, self.collection)
            return None
        return self._decode(data)

    def get(self, document_id: str) -> LayoutDocument:
        """Like ``load`` but raise ``DocumentNotFound`` when absent."""
        document = self.load(document_id)
        if document is None:
            raise DocumentNotFound(document_id)
        return document

    def delete(self, document_id: str) -> bool:
        """Delete a document; return False if it did not exist."""
        removed = self._remove(document_id)
        if removed:
            logger.info("Deleted %s from %s", document_id, self.collection)
        return removed

    def list(self) -> list[LayoutDocument]:
        """Return every document, newest ``created_at`` first."""
        documents = [self._decode(data) for data in self._iter()]
        documents.sort(key=lambda d: d.created_at or _OLDEST, reverse=True)
        return documents

    def _decode(self, data: dict[str, Any]) -> LayoutDocument:
        try:
            return document_from_dict(data)
        except (LayoutError, KeyError, TypeError, ValueError) as exc:
            logger.error("Corrupt document in %s: %s", self.collection, exc)
            msg = f"stored document {data.get('id')!r} is invalid: {exc}"
            raise PersistenceFailure(msg) from exc


class InMemoryLayoutStore(LayoutStore):
    """Store documents in a dict; handy for tests and dry runs."""

    def __init__(self, collection: str = "templates") -> None:
        super().__init__(collection)
        self._documents: dict[str, dict[str, Any]] = {}

    def _read(self, document_id: str) -> dict[str, Any] | None:
        return self._documents.get(document_id)

    def _write(self, document_id: str, data: dict[str, Any]) -> None:
        self._documents[document_id] = data

    def _remove(self, document_id: str) -> bool:
        return self._documents.pop(document_id, None) is not None

    def _iter(self) -> Iterator[dict[str, Any]]:
        yield from list(self._documents.values())


class YamlLayoutStore(LayoutStore):
    """Store each document as ``<root>/<collection>/<id>.yaml``.

    Attributes:
        root: Base directory holding one sub-directory per collection.
    """

    def __init__(self, root: str | Path, collection: str = "templates") -> None:
        super().__init__(collection)
        self.root = Path(root)

    @property
    def directory(self) -> Path:
        return self.root / self.collection

    def _path(self, document_id: str) -> Path:
        # Identifiers are file names; refuse anything that could escape
        unsafe = "/" in document_id or "\\" in document_id
        if not document_id or unsafe or document_id.startswith("."):
            msg = f"invalid document id {document_id!r}"
            raise PersistenceFailure(msg)
        return self.directory / f"{document_id}.yaml"

    def _load_file(self, path: Path) -> dict[str, Any]:
        try:
            with path.open("r") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as exc:
            logger.error("Failed to read %s: %s", path, exc)
            msg = f"could not read {path}"
            raise PersistenceFailure(msg) from exc
        if not isinstance(data, dict):
            msg = f"{path} does not hold a mapping"
            raise PersistenceFailure(msg)
        return data

    def _read(self, document_id: str) -> dict[str, Any] | None:
        path = self._path(document_id)
        if not path.exists():
            return None
        return self._load_file(path)

    def _write(self, document_id: str, data: dict[str, Any]) -> None:
        path = self._path(document_id)
        tmp = path.with_suffix(".yaml.tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with tmp.open("w") as f:
                yaml.safe_dump(data, f, sort_keys=False)
            tmp.replace(path)
        except (OSError, yaml.YAMLError) as exc:
            logger.error("Failed to write %s: %s", path, exc)
            msg = f"could not write {path}"
            raise PersistenceFailure(msg) from exc

    def _remove(self, document_id: str) -> bool:
        path = self._path(document_id)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as exc:
            logger.error("Failed to delete %s: %s", path, exc)
            msg = f"could not delete {path}"
            raise PersistenceFailure(msg) from exc
        return True

    def _iter(self) -> Iterator[dict[str, Any]]:
        if not self.directory.is_dir():
            return
        for path in sorted(self.directory.glob("*.yaml")):
            yield self._load_file(path)
