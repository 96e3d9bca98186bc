"""Leaderboard ranking and shelf helpers.

Pages read are summed from ``progress.details[*].currentPage``. Entries
whose progress object is not a mapping, or whose page is missing or not a
number, count as 0. Dangling book ids are counted like any other.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from readtrack.core.records import BookRecord, StudentRecord


@dataclass
class LeaderboardEntry:
    """A ranked student."""

    rank: int
    user_id: str
    name: str
    total_pages_read: int

    def to_dict(self) -> dict:
        return {
            "rank": self.rank,
            "id": self.user_id,
            "name": self.name,
            "totalPagesRead": self.total_pages_read,
        }


def _current_page(book_progress: object) -> int:
    if not isinstance(book_progress, dict):
        return 0
    page = book_progress.get("currentPage")
    # bool is an int subclass
    if isinstance(page, bool) or not isinstance(page, (int, float)):
        return 0
    return int(page)


def total_pages_read(record: StudentRecord) -> int:
    """Sum current pages over every book on the student's shelf."""
    return sum(_current_page(p) for p in record.progress.details.values())


def rank_students(records: Iterable[StudentRecord]) -> list[LeaderboardEntry]:
    """Rank students by total pages read, descending.

    The sort is stable: ties keep their input order and get distinct ranks.
    """
    totals = [(r, total_pages_read(r)) for r in records]
    totals.sort(key=lambda item: item[1], reverse=True)
    return [
        LeaderboardEntry(
            rank=i,
            user_id=record.id,
            name=record.name,
            total_pages_read=total,
        )
        for i, (record, total) in enumerate(totals, start=1)
    ]


def shelf_book_ids(record: StudentRecord) -> list[str]:
    """Book ids the student has progress for."""
    return list(record.progress.details.keys())


def available_books(
    books: Iterable[BookRecord], shelf_ids: Iterable[str]
) -> list[BookRecord]:
    """Catalog entries not yet on the shelf, in catalog order."""
    on_shelf = set(shelf_ids)
    return [b for b in books if b.id not in on_shelf]
