import pytest

from core import SnapshotError, StoreUnavailableError, TableTest
from formats import snapshot
from infrastructure import MemoryStore, SnapshotRepository, SqliteStore


@pytest.fixture()
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture()
def repo(store) -> SnapshotRepository:
    return SnapshotRepository(store)


class TestSnapshotRepository:

    def test_save_uses_canonical_title(self, repo, store, forest_test):
        key = repo.save(forest_test)
        assert key == "SNKTEST_Alice_Forest_2"
        assert store.get(key) == snapshot.to_json(forest_test)

    def test_save_load_round_trip(self, repo, forest_test):
        forest_test.delete_by_id(1)
        key = repo.save(forest_test)
        assert repo.load(key) == forest_test

    def test_load_into_replaces(self, repo, forest_test):
        key = repo.save(forest_test)
        target = TableTest()
        target.append("stale")
        assert repo.load(key, into=target) is target
        assert target == forest_test

    def test_load_missing(self, repo):
        with pytest.raises(KeyError):
            repo.load("SNKTEST_nobody__1")

    def test_load_corrupt(self, repo, store):
        store.set("SNKTEST_bad", "{broken")
        with pytest.raises(SnapshotError):
            repo.load("SNKTEST_bad")

    def test_list_keys_filters_foreign_entries(self, repo, store, forest_test):
        store.set("theme", "dark")
        store.set("other_SNKTEST", "x")
        repo.save(forest_test)
        forest_test.set_attempt_number(3)
        repo.save(forest_test)
        assert repo.list_keys() == ["SNKTEST_Alice_Forest_2", "SNKTEST_Alice_Forest_3"]

    def test_exists_and_delete(self, repo, forest_test):
        key = repo.save(forest_test)
        assert repo.exists(key)
        repo.delete(key)
        assert not repo.exists(key)

    def test_resave_overwrites(self, repo, forest_test):
        key = repo.save(forest_test)
        forest_test.update_line(1, target="Les oiseaux chantaient.")
        repo.save(forest_test)
        assert repo.load(key).pairs()[1] == ("Birds sang.", "Les oiseaux chantaient.")

    def test_unavailable_store(self, forest_test):
        repo = SnapshotRepository(MemoryStore(available=False))
        with pytest.raises(StoreUnavailableError):
            repo.save(forest_test)

    def test_sqlite_backend(self, tmp_path, forest_test):
        with SqliteStore(str(tmp_path / "tests.db")) as store:
            repo = SnapshotRepository(store)
            key = repo.save(forest_test)
            assert repo.load(key) == forest_test
            assert repo.list_keys() == [key]
