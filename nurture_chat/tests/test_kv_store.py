import tempfile
from pathlib import Path

import pytest

from nurture_chat.domain.exceptions import StoreReadError, StoreWriteError
from nurture_chat.infrastructure.storage.kv_store import FileKeyValueStore, InMemoryKeyValueStore


def test_file_store_get_set():
    with tempfile.TemporaryDirectory() as d:
        root = Path(d) / ".storage"
        store = FileKeyValueStore(root=root)
        assert store.get_item("messages") is None
        store.set_item("messages", "[1]")
        store.set_item("messages", "[1, 2]")
        assert store.get_item("messages") == "[1, 2]"
        assert (root / "messages.json").exists()
        # 临时文件不应残留
        assert list(root.glob("*.tmp")) == []


def test_file_store_rejects_path_like_keys():
    with tempfile.TemporaryDirectory() as d:
        store = FileKeyValueStore(root=d)
        with pytest.raises(ValueError):
            store.get_item("../escape")


def test_file_store_read_error(monkeypatch):
    with tempfile.TemporaryDirectory() as d:
        store = FileKeyValueStore(root=d)
        store.set_item("messages", "[]")

        def boom(self, *a, **kw):
            raise OSError("disk gone")

        monkeypatch.setattr(Path, "read_text", boom)
        with pytest.raises(StoreReadError) as ei:
            store.get_item("messages")
        assert ei.value.code == "STORE_READ_ERROR"


def test_file_store_write_error(monkeypatch):
    with tempfile.TemporaryDirectory() as d:
        store = FileKeyValueStore(root=d)

        def boom(*a, **kw):
            raise OSError("read-only")

        monkeypatch.setattr("nurture_chat.infrastructure.storage.kv_store.os.replace", boom)
        with pytest.raises(StoreWriteError):
            store.set_item("messages", "[]")
        assert list(Path(d).glob("*.tmp")) == []


def test_memory_store():
    store = InMemoryKeyValueStore({"a": "1"})
    assert store.get_item("a") == "1"
    assert store.get_item("b") is None
    store.set_item("b", "2")
    assert store.get_item("b") == "2"
