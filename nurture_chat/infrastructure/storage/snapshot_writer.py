"""后台快照写入器。

所有保存请求放进单线程的 ThreadPoolExecutor，按提交顺序逐个执行，
旧快照不会覆盖新快照；调用方提交后立即返回，不等待存储完成。
"""

from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import List, Optional

from nurture_chat.domain.conversation import MessageStore
from nurture_chat.domain.models import Conversation
from nurture_chat.infrastructure.logging.logger import logger


class SnapshotWriter:
    def __init__(self, store: MessageStore):
        self._store = store
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="snapshot-writer")
        self._pending: List[Future] = []

    def submit(self, conversation: Conversation) -> Future:
        # 拷贝一份，后续追加不影响已排队的快照
        snapshot = Conversation(messages=list(conversation.messages))
        future = self._executor.submit(self._store.save, snapshot)
        future.add_done_callback(self._on_done)
        self._pending = [f for f in self._pending if not f.done()]
        self._pending.append(future)
        return future

    def flush(self, timeout: Optional[float] = None) -> bool:
        """等待已提交的快照写完，返回是否全部在超时内完成。"""

        pending = list(self._pending)
        if not pending:
            return True
        _, not_done = wait(pending, timeout=timeout)
        return not not_done

    def close(self) -> None:
        self._executor.shutdown(wait=True)

    @staticmethod
    def _on_done(future: Future) -> None:
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            logger.error("Snapshot write crashed", extra={"extra": {"error": repr(exc)}})
