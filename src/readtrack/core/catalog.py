"""Catalog seeding.

Loads book reference data from a JSON or YAML file and writes it into the
record store. The file holds either a list of book objects or a mapping
with a ``books`` list.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import structlog
import yaml

from readtrack.core.record_store import RecordStore
from readtrack.core.records import BookRecord

logger = structlog.get_logger(__name__)


class CatalogError(Exception):
    """Raised when a catalog file cannot be loaded."""


def _parse(path: Path, text: str) -> Any:
    if path.suffix.lower() in (".yaml", ".yml"):
        return yaml.safe_load(text)
    return json.loads(text)


def load_catalog(path: Path) -> list[BookRecord]:
    """Load book records from a catalog file.

    Args:
        path: Path to a .json, .yaml or .yml file

    Returns:
        List of BookRecord in file order

    Raises:
        CatalogError: If the file is missing, malformed, or a book has no id
    """
    if not path.exists():
        raise CatalogError(f"Catalog file not found: {path}")

    try:
        data = _parse(path, path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise CatalogError(f"Invalid catalog file {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("books")
    if not isinstance(data, list):
        raise CatalogError(f"Catalog {path} must contain a list of books")

    books = []
    for i, entry in enumerate(data):
        if not isinstance(entry, dict) or not entry.get("id"):
            raise CatalogError(f"Catalog entry {i} has no id")
        books.append(BookRecord.from_dict(entry))

    logger.info("catalog_loaded", path=str(path), count=len(books))
    return books


def seed_catalog(store: RecordStore, path: Path) -> int:
    """Replace the store's catalog with the books in ``path``."""
    books = load_catalog(path)
    return store.replace_books(books)
