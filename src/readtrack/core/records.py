"""Record types persisted in the reading tracker document.

The document layout is:
    {"users": [StudentRecord...], "books": [BookRecord...]}

Records keep the camelCase keys of the stored document in their
``to_dict``/``from_dict`` round trip; attribute names are snake_case.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any

DEFAULT_STUDENT_NAME = "Anonymous"

_PROGRESS_KEYS = ("booksRead", "lastRead", "details")
_BOOK_KEYS = ("id", "title", "author", "coverUrl", "totalPages", "genre")


@dataclass
class ReadingProgress:
    """Reading progress of a single student.

    ``details`` maps book id -> per-book progress object. The store never
    interprets it; readers only look at ``currentPage``.
    """

    books_read: int = 0
    last_read: Any = None
    details: dict[str, Any] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = {
            "booksRead": self.books_read,
            "lastRead": self.last_read,
            "details": copy.deepcopy(self.details),
        }
        data.update(copy.deepcopy(self.extra))
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ReadingProgress:
        """Build from a stored progress object."""
        if not isinstance(data, dict):
            data = {}
        details = data.get("details")
        return cls(
            books_read=data.get("booksRead", 0),
            last_read=data.get("lastRead"),
            details=copy.deepcopy(details) if isinstance(details, dict) else {},
            extra={
                k: copy.deepcopy(v) for k, v in data.items() if k not in _PROGRESS_KEYS
            },
        )

    def merged(self, partial: dict[str, Any]) -> ReadingProgress:
        """Return a new progress with top-level fields of ``partial`` replaced.

        One level deep only: a partial ``details`` replaces the whole map.
        """
        return ReadingProgress.from_dict({**self.to_dict(), **partial})


@dataclass
class StudentRecord:
    """A student, keyed by the university id supplied at login."""

    id: str
    name: str = DEFAULT_STUDENT_NAME
    progress: ReadingProgress = field(default_factory=ReadingProgress)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "progress": self.progress.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StudentRecord:
        return cls(
            id=str(data["id"]),
            name=str(data.get("name") or DEFAULT_STUDENT_NAME),
            progress=ReadingProgress.from_dict(data.get("progress")),
        )


@dataclass
class BookRecord:
    """Catalog entry. Provisioned externally, read-only to the API."""

    id: str
    title: str = ""
    author: str = ""
    cover_url: str = ""
    total_pages: int = 0
    genre: str = ""
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "coverUrl": self.cover_url,
            "totalPages": self.total_pages,
            "genre": self.genre,
        }
        data.update(copy.deepcopy(self.extra))
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BookRecord:
        return cls(
            id=str(data["id"]),
            title=data.get("title", ""),
            author=data.get("author", ""),
            cover_url=data.get("coverUrl", ""),
            total_pages=data.get("totalPages", 0),
            genre=data.get("genre", ""),
            extra={k: copy.deepcopy(v) for k, v in data.items() if k not in _BOOK_KEYS},
        )
