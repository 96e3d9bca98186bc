"""Tests for RecordStore operations."""

import pytest

from readtrack.core.record_store import RecordStore, UserNotFound
from readtrack.core.storage import MemoryStorage


class TestCreateUserIfAbsent:
    """Tests for login-time creation."""

    def test_creates_with_empty_progress(self, store):
        """New users start with zeroed progress."""
        record = store.create_user_if_absent("u1", "Sara")
        assert record.to_dict() == {
            "id": "u1",
            "name": "Sara",
            "progress": {"booksRead": 0, "lastRead": None, "details": {}},
        }

    def test_default_name_when_omitted(self, store):
        """Missing name falls back to the placeholder."""
        assert store.create_user_if_absent("u1").name == "Anonymous"

    def test_default_name_when_empty(self, store):
        """Empty name falls back to the placeholder."""
        assert store.create_user_if_absent("u1", "").name == "Anonymous"

    def test_custom_default_name(self, memory_storage):
        """Default name comes from the store."""
        store = RecordStore(memory_storage, default_name="Reader")
        assert store.create_user_if_absent("u1").name == "Reader"

    def test_idempotent(self, store):
        """Repeated login returns the same record without duplicating."""
        first = store.create_user_if_absent("u1", "Sara")
        second = store.create_user_if_absent("u1", "Someone Else")
        assert second == first
        assert len(store.list_users()) == 1

    def test_existing_record_not_rewritten(self, memory_storage):
        """Repeated login does not persist anything."""
        store = RecordStore(memory_storage)
        store.create_user_if_absent("u1", "Sara")
        saves = memory_storage.saves
        store.create_user_if_absent("u1", "Sara")
        assert memory_storage.saves == saves

    def test_find_after_create(self, store):
        """find_user returns the created id and name."""
        store.create_user_if_absent("u7", "Omar")
        record = store.find_user("u7")
        assert record.id == "u7"
        assert record.name == "Omar"


class TestFindUser:
    """Tests for find_user."""

    def test_missing_raises(self, store):
        """Unknown id raises UserNotFound."""
        with pytest.raises(UserNotFound) as exc_info:
            store.find_user("nope")
        assert exc_info.value.user_id == "nope"


class TestUpdateProgress:
    """Tests for shallow progress merge."""

    @pytest.fixture
    def reading_store(self):
        storage = MemoryStorage(
            {
                "users": [
                    {
                        "id": "u1",
                        "name": "Sara",
                        "progress": {
                            "booksRead": 2,
                            "lastRead": "b1",
                            "details": {"b1": {"currentPage": 10}},
                        },
                    }
                ],
                "books": [],
            }
        )
        return RecordStore(storage)

    def test_replaces_only_given_fields(self, reading_store):
        """Fields absent from the update are preserved."""
        record = reading_store.update_progress("u1", {"booksRead": 3})
        assert record.progress.to_dict() == {
            "booksRead": 3,
            "lastRead": "b1",
            "details": {"b1": {"currentPage": 10}},
        }

    def test_details_replaced_wholesale(self, reading_store):
        """Merge is one level deep: details is replaced, not merged."""
        record = reading_store.update_progress(
            "u1", {"details": {"b2": {"currentPage": 5}}}
        )
        assert record.progress.details == {"b2": {"currentPage": 5}}
        assert record.progress.books_read == 2

    def test_empty_update_keeps_progress(self, reading_store):
        """An empty update changes nothing."""
        record = reading_store.update_progress("u1", {})
        assert record.progress.books_read == 2
        assert record.progress.last_read == "b1"

    def test_unknown_fields_kept(self, reading_store):
        """Extra top-level fields are stored and returned."""
        record = reading_store.update_progress("u1", {"streak": 4})
        assert record.progress.to_dict()["streak"] == 4
        assert reading_store.find_user("u1").progress.to_dict()["streak"] == 4

    def test_persisted(self, reading_store):
        """Update is visible on the next read."""
        reading_store.update_progress("u1", {"lastRead": "b9"})
        assert reading_store.find_user("u1").progress.last_read == "b9"

    def test_missing_user(self, reading_store):
        """Unknown id raises UserNotFound."""
        with pytest.raises(UserNotFound):
            reading_store.update_progress("u2", {"booksRead": 1})


class TestUpdateName:
    """Tests for update_name."""

    def test_replaces_name(self, store):
        store.create_user_if_absent("u1", "Sara")
        assert store.update_name("u1", "Sarah").name == "Sarah"
        assert store.find_user("u1").name == "Sarah"

    @pytest.mark.parametrize("name", [None, ""])
    def test_falsy_name_keeps_current(self, store, name):
        """Empty or missing name leaves the name unchanged."""
        store.create_user_if_absent("u1", "Sara")
        assert store.update_name("u1", name).name == "Sara"

    def test_missing_user(self, store):
        with pytest.raises(UserNotFound):
            store.update_name("u1", "Sara")


class TestDeleteUser:
    """Tests for delete_user."""

    def test_removes_record(self, store):
        store.create_user_if_absent("u1", "Sara")
        store.create_user_if_absent("u2", "Omar")
        store.delete_user("u1")
        assert [u.id for u in store.list_users()] == ["u2"]

    def test_missing_user(self, store):
        """Deleting an unknown id never succeeds."""
        with pytest.raises(UserNotFound):
            store.delete_user("ghost")


class TestBooks:
    """Tests for catalog reads and replacement."""

    def test_list_books(self, store):
        books = store.list_books()
        assert [b.id for b in books] == ["b1", "b2"]
        assert books[1].total_pages == 443

    def test_replace_books(self, store):
        """replace_books overwrites the catalog and leaves users alone."""
        store.create_user_if_absent("u1")
        books = store.list_books()[:1]
        assert store.replace_books(books) == 1
        assert [b.id for b in store.list_books()] == ["b1"]
        assert len(store.list_users()) == 1


class TestLoadAll:
    """Tests for load_all."""

    def test_snapshot_is_detached(self, store):
        """Mutating a snapshot does not touch the store."""
        document = store.load_all()
        document["users"].append({"id": "x"})
        assert store.list_users() == []


class TestConcurrentWrites:
    """Mutations from several threads share one document."""

    def test_no_lost_updates(self, file_store):
        """Every concurrent login survives in the file."""
        from concurrent.futures import ThreadPoolExecutor

        ids = [f"u{i}" for i in range(20)]
        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(file_store.create_user_if_absent, ids))

        assert sorted(u.id for u in file_store.list_users()) == sorted(ids)


class TestMalformedEntries:
    """Stored entries without an id, or that are not objects."""

    @pytest.fixture
    def messy_storage(self):
        return MemoryStorage(
            {
                "users": [
                    {"name": "no id"},
                    "not an object",
                    {"id": "u1", "name": "Sara", "progress": 5},
                    {"id": 4412345, "name": None},
                ],
                "books": [{"title": "no id"}, 7, {"id": "b1", "title": "Dune"}],
            }
        )

    def test_list_users_skips_malformed(self, messy_storage):
        users = RecordStore(messy_storage).list_users()
        assert [u.id for u in users] == ["u1", "4412345"]
        assert users[0].progress.to_dict() == {
            "booksRead": 0,
            "lastRead": None,
            "details": {},
        }
        assert users[1].name == "Anonymous"

    def test_list_books_skips_malformed(self, messy_storage):
        books = RecordStore(messy_storage).list_books()
        assert [b.id for b in books] == ["b1"]

    def test_numeric_stored_id_found(self, messy_storage):
        assert RecordStore(messy_storage).find_user("4412345").id == "4412345"

    def test_mutation_keeps_malformed_entries(self, messy_storage):
        """Entries the store cannot read are written back untouched."""
        RecordStore(messy_storage).create_user_if_absent("u2", "Omar")
        users = messy_storage.load()["users"]
        assert users[:2] == [{"name": "no id"}, "not an object"]
        assert users[-1]["id"] == "u2"
