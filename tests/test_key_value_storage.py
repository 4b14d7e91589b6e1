from formatos.adapters.sqlite_key_value import InMemoryKeyValueStore, SQLiteKeyValueStore
from formatos.services.navigation_service import NavigationService
from formatos.settings import LAST_PATH_KEY


def test_sqlite_key_value_round_trip(tmp_path) -> None:
    store = SQLiteKeyValueStore(str(tmp_path / "test.db"))

    assert store.get("missing") is None
    store.set("k", "v1")
    store.set("k", "v2")

    assert store.get("k") == "v2"
    assert [(key, value) for key, value, _ in store.items()] == [("k", "v2")]


def test_sqlite_values_survive_reopen(tmp_path) -> None:
    db_path = str(tmp_path / "test.db")
    SQLiteKeyValueStore(db_path).set(LAST_PATH_KEY, "docs/2024")

    assert SQLiteKeyValueStore(db_path).get(LAST_PATH_KEY) == "docs/2024"


def test_last_path_restored_across_sessions(tmp_path, store, notifications) -> None:
    db_path = str(tmp_path / "test.db")
    first = NavigationService(store, SQLiteKeyValueStore(db_path), notifications)
    first.start()
    first.navigate_into_folder("docs")
    first.navigate_into_folder("2024")
    first.close()

    second = NavigationService(store, SQLiteKeyValueStore(db_path), notifications)
    second.start()

    assert second.current_path == "docs/2024"


def test_in_memory_store() -> None:
    store = InMemoryKeyValueStore({"a": "1"})
    store.set("b", "2")
    assert store.get("a") == "1"
    assert store.get("b") == "2"
    assert store.get("c") is None
