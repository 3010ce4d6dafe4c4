"""会话历史的持久化适配器。

整个会话以 JSON 数组的形式写在一个固定键下（默认 "messages"），
每次写入都是完整快照覆盖，没有增量写。
"""

import json

from nurture_chat.config.settings import settings
from nurture_chat.domain.conversation import KeyValueBackend
from nurture_chat.domain.exceptions import StoreReadError, StoreWriteError
from nurture_chat.domain.models import Conversation, Message
from nurture_chat.infrastructure.logging.logger import logger


class KeyValueMessageStore:
    def __init__(self, backend: KeyValueBackend, key: str | None = None):
        self._backend = backend
        self._key = key or settings.storage_key

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> Conversation:
        """读取会话历史。

        键不存在时返回空会话；读取失败或反序列化失败同样返回空会话并记录日志，
        损坏的历史不能阻塞启动。
        """

        try:
            raw = self._backend.get_item(self._key)
        except StoreReadError as e:
            self._log_failure("Failed to load messages", e.code, e.message)
            return Conversation()
        if raw is None:
            return Conversation()
        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError(f"expected a JSON array, got {type(data).__name__}")
            conversation = Conversation()
            for item in data:
                # append 会拒绝不递增的 ID
                conversation.append(Message.from_storage(item))
        except (ValueError, RecursionError) as e:
            # json.JSONDecodeError 也是 ValueError；嵌套过深的数组会触发 RecursionError
            self._log_failure("Failed to load messages", "STORE_READ_ERROR", str(e))
            return Conversation()
        return conversation

    def save(self, conversation: Conversation) -> bool:
        """整体覆盖写入，失败只记录日志并返回 False。"""

        payload = json.dumps(conversation.to_storage(), ensure_ascii=False)
        try:
            self._backend.set_item(self._key, payload)
        except StoreWriteError as e:
            self._log_failure("Failed to save messages", e.code, e.message)
            return False
        return True

    def _log_failure(self, msg: str, code: str, detail: str) -> None:
        logger.error(msg, extra={"extra": {"key": self._key, "code": code, "error": detail}})
