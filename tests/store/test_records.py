"""Tests for record types."""

from readtrack.core.records import BookRecord, ReadingProgress, StudentRecord


class TestReadingProgress:
    """Tests for ReadingProgress."""

    def test_defaults(self):
        assert ReadingProgress().to_dict() == {
            "booksRead": 0,
            "lastRead": None,
            "details": {},
        }

    def test_from_missing_progress(self):
        """A record stored without progress gets the defaults."""
        record = StudentRecord.from_dict({"id": "u1", "name": "Sara"})
        assert record.progress == ReadingProgress()

    def test_merged_does_not_mutate(self):
        progress = ReadingProgress(books_read=1, details={"b1": {"currentPage": 3}})
        merged = progress.merged({"booksRead": 2})
        assert progress.books_read == 1
        assert merged.books_read == 2
        assert merged.details == {"b1": {"currentPage": 3}}

    def test_merged_null_last_read(self):
        """An explicit null replaces the stored value."""
        merged = ReadingProgress(last_read="b1").merged({"lastRead": None})
        assert merged.last_read is None


class TestBookRecord:
    """Tests for BookRecord."""

    def test_round_trip_keeps_unknown_keys(self):
        data = {
            "id": "b1",
            "title": "T",
            "author": "A",
            "coverUrl": "c",
            "totalPages": 10,
            "genre": "g",
            "isbn": "123",
        }
        assert BookRecord.from_dict(data).to_dict() == data

    def test_numeric_id_is_stringified(self):
        assert BookRecord.from_dict({"id": 7}).id == "7"
