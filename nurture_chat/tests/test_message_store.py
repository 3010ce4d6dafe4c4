import json
import tempfile
from pathlib import Path

from nurture_chat.domain.exceptions import StoreReadError, StoreWriteError
from nurture_chat.domain.models import Author, Conversation, Message
from nurture_chat.infrastructure.storage.kv_store import FileKeyValueStore, InMemoryKeyValueStore
from nurture_chat.infrastructure.storage.message_store import KeyValueMessageStore


def _conversation():
    return Conversation(
        messages=[
            Message(id=1, text="¿Puedo comer queso fresco?", author=Author.USER),
            Message(id=2, text="Sí, si está pasteurizado.", author=Author.ASSISTANT),
        ]
    )


def test_empty_store_loads_empty_conversation():
    store = KeyValueMessageStore(InMemoryKeyValueStore(), key="messages")
    conv = store.load()
    assert len(conv) == 0


def test_save_then_load_round_trip_on_disk():
    with tempfile.TemporaryDirectory() as d:
        root = Path(d) / ".storage"
        conv = _conversation()
        assert KeyValueMessageStore(FileKeyValueStore(root=root), key="messages").save(conv) is True

        fresh = KeyValueMessageStore(FileKeyValueStore(root=root), key="messages").load()
        assert fresh.messages == conv.messages


def test_saved_payload_uses_boolean_author_flag():
    backend = InMemoryKeyValueStore()
    KeyValueMessageStore(backend, key="messages").save(_conversation())
    data = json.loads(backend.get_item("messages"))
    assert data == [
        {"id": 1, "text": "¿Puedo comer queso fresco?", "user": True},
        {"id": 2, "text": "Sí, si está pasteurizado.", "user": False},
    ]


def test_corrupt_json_loads_empty():
    backend = InMemoryKeyValueStore({"messages": "{not json"})
    assert len(KeyValueMessageStore(backend, key="messages").load()) == 0


def test_wrong_shape_loads_empty():
    backend = InMemoryKeyValueStore({"messages": json.dumps({"id": 1})})
    assert len(KeyValueMessageStore(backend, key="messages").load()) == 0
    backend.set_item("messages", json.dumps([{"id": 1, "text": "x"}]))
    assert len(KeyValueMessageStore(backend, key="messages").load()) == 0


def test_backend_read_failure_loads_empty():
    class BrokenBackend:
        def get_item(self, key):
            raise StoreReadError(code="STORE_READ_ERROR", message="io")

        def set_item(self, key, value):
            pass

    assert len(KeyValueMessageStore(BrokenBackend(), key="messages").load()) == 0


def test_backend_write_failure_returns_false():
    class BrokenBackend:
        def get_item(self, key):
            return None

        def set_item(self, key, value):
            raise StoreWriteError(code="STORE_WRITE_ERROR", message="disk full")

    assert KeyValueMessageStore(BrokenBackend(), key="messages").save(_conversation()) is False


def test_deeply_nested_history_loads_empty():
    backend = InMemoryKeyValueStore({"messages": "[" * 200000 + "]" * 200000})
    assert len(KeyValueMessageStore(backend, key="messages").load()) == 0


def test_float_ids_rejected():
    raw = json.dumps([
        {"id": 1.2, "text": "a", "user": True},
        {"id": 1.7, "text": "b", "user": False},
    ])
    backend = InMemoryKeyValueStore({"messages": raw})
    assert len(KeyValueMessageStore(backend, key="messages").load()) == 0


def test_non_increasing_ids_rejected():
    raw = json.dumps([
        {"id": 5, "text": "a", "user": True},
        {"id": 5, "text": "b", "user": False},
    ])
    backend = InMemoryKeyValueStore({"messages": raw})
    assert len(KeyValueMessageStore(backend, key="messages").load()) == 0


def test_empty_text_rejected():
    raw = json.dumps([{"id": 1, "text": "", "user": True}])
    backend = InMemoryKeyValueStore({"messages": raw})
    assert len(KeyValueMessageStore(backend, key="messages").load()) == 0
