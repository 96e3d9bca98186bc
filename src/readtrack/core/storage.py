"""Storage backends for the reading tracker document.

A backend persists one JSON document of the form
``{"users": [...], "books": [...]}``. It is loaded in full and saved in
full; there are no partial writes.

Backends:
- JsonFileStorage: a JSON file on disk (default: data/db.json)
- MemoryStorage: an in-process document, for tests and tooling
"""

from __future__ import annotations

import copy
import json
import os
import stat
import tempfile
from pathlib import Path
from typing import Any, Protocol

import structlog

logger = structlog.get_logger(__name__)

COLLECTIONS = ("users", "books")


class StorageUnavailable(Exception):
    """Raised when the document cannot be read or written."""

    def __init__(self, location: str, reason: str):
        self.location = location
        self.reason = reason
        super().__init__(f"Storage '{location}' unavailable: {reason}")


class Storage(Protocol):
    """Whole-document load/save handle."""

    def load(self) -> dict[str, Any]: ...

    def save(self, document: dict[str, Any]) -> None: ...


def empty_document() -> dict[str, Any]:
    """Create a document with empty collections."""
    return {name: [] for name in COLLECTIONS}


def _normalize(document: Any, location: str) -> dict[str, Any]:
    """Ensure both collections exist. Unknown top-level keys are kept."""
    if not isinstance(document, dict):
        raise StorageUnavailable(location, "document is not a JSON object")
    for name in COLLECTIONS:
        if document.get(name) is None:
            document[name] = []
        elif not isinstance(document[name], list):
            raise StorageUnavailable(location, f"'{name}' is not a list")
    return document


class JsonFileStorage:
    """Document stored as a JSON file.

    Missing files are initialized with empty collections on first load.
    Saves write a temp file next to the target and rename it over the
    target, so readers never see a half-written document.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def load(self) -> dict[str, Any]:
        if not self.path.exists():
            document = empty_document()
            self.save(document)
            logger.info("storage_initialized", path=str(self.path))
            return document

        try:
            with open(self.path, encoding="utf-8") as f:
                document = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error("storage_load_failed", path=str(self.path), error=str(e))
            raise StorageUnavailable(str(self.path), f"invalid document: {e}") from e
        except OSError as e:
            logger.error("storage_load_failed", path=str(self.path), error=str(e))
            raise StorageUnavailable(str(self.path), str(e)) from e

        return _normalize(document, str(self.path))

    def save(self, document: dict[str, Any]) -> None:
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2, ensure_ascii=False)
            # mkstemp creates 0600; keep the mode of the file being replaced
            if self.path.exists():
                os.chmod(tmp_name, stat.S_IMODE(self.path.stat().st_mode))
            os.replace(tmp_name, self.path)
        except OSError as e:
            logger.error("storage_save_failed", path=str(self.path), error=str(e))
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageUnavailable(str(self.path), str(e)) from e

        logger.debug("storage_saved", path=str(self.path))


class MemoryStorage:
    """Document kept in memory. Copies on every load and save."""

    def __init__(self, document: dict[str, Any] | None = None):
        self._document = _normalize(
            copy.deepcopy(document) if document is not None else empty_document(),
            "memory",
        )
        self.saves = 0

    def load(self) -> dict[str, Any]:
        return copy.deepcopy(self._document)

    def save(self, document: dict[str, Any]) -> None:
        self._document = copy.deepcopy(document)
        self.saves += 1
