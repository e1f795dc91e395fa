import pytest

from wealthwise.config import Config, StorageConfig
from wealthwise.storage import (
    FileKeyValueStore,
    InMemoryKeyValueStore,
    StorageConfigError,
    StorageError,
    build_key_value_store,
)


def test_in_memory_store_get_set_delete():
    kv = InMemoryKeyValueStore()
    assert kv.get("k") is None

    kv.set("k", b"value")
    assert kv.get("k") == b"value"

    kv.delete("k")
    assert kv.get("k") is None
    # Deleting a missing key is a no-op.
    kv.delete("k")


def test_file_store_persists_bytes(tmp_path):
    kv = FileKeyValueStore(tmp_path / "store")
    assert kv.get("user_1") is None

    kv.set("user_1", b"[]")
    assert (tmp_path / "store" / "user_1").read_bytes() == b"[]"

    # A fresh instance over the same directory sees the data.
    assert FileKeyValueStore(tmp_path / "store").get("user_1") == b"[]"

    kv.delete("user_1")
    assert kv.get("user_1") is None
    kv.delete("user_1")


def test_file_store_keeps_path_like_keys_inside_root(tmp_path):
    kv = FileKeyValueStore(tmp_path / "store")

    kv.set("../escape", b"x")
    kv.set("wealthwise_data_john doe+work@example.com", b"[]")

    assert not (tmp_path / "escape").exists()
    assert sorted(p.name for p in (tmp_path / "store").iterdir()) == [
        "..%2Fescape",
        "wealthwise_data_john%20doe%2Bwork%40example.com",
    ]
    assert kv.get("../escape") == b"x"
    assert kv.get("wealthwise_data_john doe+work@example.com") == b"[]"


@pytest.mark.parametrize("key", ["", ".", ".."])
def test_file_store_rejects_directory_keys(tmp_path, key):
    kv = FileKeyValueStore(tmp_path)
    with pytest.raises(StorageError):
        kv.get(key)


def test_build_memory_backend_is_shared_per_namespace(tmp_path):
    cfg = Config(storage=StorageConfig(backend="memory", path=tmp_path / "ns"))
    first = build_key_value_store(cfg)
    first.set("k", b"1")

    assert build_key_value_store(cfg).get("k") == b"1"

    other = Config(storage=StorageConfig(backend="memory", path=tmp_path / "other"))
    assert build_key_value_store(other).get("k") is None


def test_build_file_backend(tmp_path):
    cfg = Config(storage=StorageConfig(backend="file", path=tmp_path / "files"))
    kv = build_key_value_store(cfg)
    assert isinstance(kv, FileKeyValueStore)
    assert kv.root == tmp_path / "files"


def test_build_unknown_backend_raises():
    cfg = Config(storage=StorageConfig(backend="redis"))
    with pytest.raises(StorageConfigError) as excinfo:
        build_key_value_store(cfg)
    assert "Unsupported storage backend" in str(excinfo.value)
