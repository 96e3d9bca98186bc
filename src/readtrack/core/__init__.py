"""Core modules for the reading tracker.

Includes:
- records: StudentRecord, ReadingProgress, BookRecord
- storage: whole-document storage backends
- record_store: student/book operations
- leaderboard: ranking by pages read
- catalog: catalog seeding
"""

from readtrack.core.record_store import RecordStore, UserNotFound
from readtrack.core.records import BookRecord, ReadingProgress, StudentRecord
from readtrack.core.storage import JsonFileStorage, MemoryStorage, StorageUnavailable

__all__ = [
    "BookRecord",
    "JsonFileStorage",
    "MemoryStorage",
    "ReadingProgress",
    "RecordStore",
    "StorageUnavailable",
    "StudentRecord",
    "UserNotFound",
]
