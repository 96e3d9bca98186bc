"""Record store for students and the book catalog.

Responsibilities:
- Find, create (on login), update and delete student records
- Serve read-only snapshots of the book catalog
- Persist the whole document through an injected Storage backend

Every operation re-reads the document from storage; nothing cached in
process is trusted across calls. Mutations hold a store-wide lock for the
whole load-mutate-save sequence, so two mutations in the same process never
overwrite each other. Separate processes sharing one file get no such
guarantee.
"""

from __future__ import annotations

import threading
from typing import Any

import structlog

from readtrack.core.records import (
    DEFAULT_STUDENT_NAME,
    BookRecord,
    ReadingProgress,
    StudentRecord,
)
from readtrack.core.storage import Storage, StorageUnavailable

logger = structlog.get_logger(__name__)

__all__ = [
    "RecordStore",
    "RecordStoreError",
    "StorageUnavailable",
    "UserNotFound",
]


class RecordStoreError(Exception):
    """Base error for record store operations."""


class UserNotFound(RecordStoreError):
    """Raised when no student record exists for an id."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"User '{user_id}' not found")


def _is_record(entry: Any) -> bool:
    """Stored entries must be objects with an id; anything else is skipped."""
    return isinstance(entry, dict) and entry.get("id") not in (None, "")


def _valid_entries(entries: list[Any], collection: str) -> list[dict[str, Any]]:
    valid = [e for e in entries if _is_record(e)]
    if len(valid) != len(entries):
        logger.warning(
            "malformed_entries_skipped",
            collection=collection,
            skipped=len(entries) - len(valid),
        )
    return valid


def _find_index(users: list[Any], user_id: str) -> int:
    for i, user in enumerate(users):
        if _is_record(user) and str(user["id"]) == user_id:
            return i
    return -1


class RecordStore:
    """Student/book store over a whole-document Storage backend."""

    def __init__(self, storage: Storage, default_name: str = DEFAULT_STUDENT_NAME):
        self.storage = storage
        self.default_name = default_name
        self._write_lock = threading.RLock()

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def load_all(self) -> dict[str, Any]:
        """Load the full document.

        Raises:
            StorageUnavailable: If the backend cannot be read or written.
        """
        return self.storage.load()

    def list_users(self) -> list[StudentRecord]:
        document = self.load_all()
        users = _valid_entries(document["users"], "users")
        return [StudentRecord.from_dict(u) for u in users]

    def list_books(self) -> list[BookRecord]:
        document = self.load_all()
        books = _valid_entries(document["books"], "books")
        return [BookRecord.from_dict(b) for b in books]

    def find_user(self, user_id: str) -> StudentRecord:
        """Get a student by id.

        Raises:
            UserNotFound: If no record has this id.
        """
        users = self.load_all()["users"]
        idx = _find_index(users, user_id)
        if idx == -1:
            raise UserNotFound(user_id)
        return StudentRecord.from_dict(users[idx])

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def create_user_if_absent(
        self, user_id: str, name: str | None = None
    ) -> StudentRecord:
        """Return the student with ``user_id``, creating it if missing.

        An existing record is returned as stored; ``name`` is ignored for it.
        New records start with empty progress and ``name`` or the default
        name when ``name`` is empty.
        """
        with self._write_lock:
            document = self.load_all()
            users = document["users"]
            idx = _find_index(users, user_id)
            if idx != -1:
                logger.info("login_existing", user_id=user_id)
                return StudentRecord.from_dict(users[idx])

            record = StudentRecord(
                id=user_id,
                name=name or self.default_name,
                progress=ReadingProgress(),
            )
            users.append(record.to_dict())
            self.storage.save(document)

        logger.info("login_created", user_id=user_id, name=record.name)
        return record

    def update_progress(
        self, user_id: str, partial: dict[str, Any]
    ) -> StudentRecord:
        """Shallow-merge ``partial`` into the student's progress.

        Top-level keys of ``partial`` replace the stored ones; absent keys
        are kept. Nested maps such as ``details`` are replaced, not merged.

        Raises:
            UserNotFound: If no record has this id.
        """
        with self._write_lock:
            document = self.load_all()
            users = document["users"]
            idx = _find_index(users, user_id)
            if idx == -1:
                raise UserNotFound(user_id)

            record = StudentRecord.from_dict(users[idx])
            record.progress = record.progress.merged(partial)
            users[idx] = record.to_dict()
            self.storage.save(document)

        logger.info("progress_updated", user_id=user_id, fields=sorted(partial))
        return record

    def update_name(self, user_id: str, name: str | None) -> StudentRecord:
        """Replace the student's name when ``name`` is non-empty.

        Raises:
            UserNotFound: If no record has this id.
        """
        with self._write_lock:
            document = self.load_all()
            users = document["users"]
            idx = _find_index(users, user_id)
            if idx == -1:
                raise UserNotFound(user_id)

            record = StudentRecord.from_dict(users[idx])
            if name:
                record.name = name
            users[idx] = record.to_dict()
            self.storage.save(document)

        logger.info("name_updated", user_id=user_id, changed=bool(name))
        return record

    def delete_user(self, user_id: str) -> None:
        """Remove a student.

        Raises:
            UserNotFound: If no record has this id.
        """
        with self._write_lock:
            document = self.load_all()
            users = document["users"]
            idx = _find_index(users, user_id)
            if idx == -1:
                raise UserNotFound(user_id)

            users.pop(idx)
            self.storage.save(document)

        logger.info("user_deleted", user_id=user_id)

    def replace_books(self, books: list[BookRecord]) -> int:
        """Overwrite the catalog. Used by catalog seeding only.

        Returns:
            Number of books stored.
        """
        with self._write_lock:
            document = self.load_all()
            document["books"] = [b.to_dict() for b in books]
            self.storage.save(document)

        logger.info("catalog_replaced", count=len(books))
        return len(books)
