import threading

from nurture_chat.domain.models import Author, Conversation, Message
from nurture_chat.infrastructure.storage.snapshot_writer import SnapshotWriter


class RecordingStore:
    def __init__(self, gate=None):
        self.saved = []
        self.active = 0
        self.max_active = 0
        self._gate = gate
        self._lock = threading.Lock()

    def load(self):
        return Conversation()

    def save(self, conversation):
        with self._lock:
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        if self._gate is not None:
            self._gate.wait(timeout=2)
        self.saved.append([m.id for m in conversation.messages])
        with self._lock:
            self.active -= 1
        return True


def test_snapshots_written_in_order_one_at_a_time():
    gate = threading.Event()
    store = RecordingStore(gate=gate)
    writer = SnapshotWriter(store)
    conv = Conversation()
    for i in range(1, 4):
        conv.append(Message(id=i, text=str(i), author=Author.USER))
        writer.submit(conv)
    gate.set()
    assert writer.flush(timeout=5)
    writer.close()
    assert store.saved == [[1], [1, 2], [1, 2, 3]]
    assert store.max_active == 1


def test_submit_copies_conversation():
    gate = threading.Event()
    store = RecordingStore(gate=gate)
    writer = SnapshotWriter(store)
    conv = Conversation()
    conv.append(Message(id=1, text="a", author=Author.USER))
    writer.submit(conv)
    conv.append(Message(id=2, text="b", author=Author.ASSISTANT))
    gate.set()
    writer.flush(timeout=5)
    writer.close()
    assert store.saved == [[1]]


def test_flush_without_pending_is_true():
    writer = SnapshotWriter(RecordingStore())
    assert writer.flush() is True
    writer.close()
