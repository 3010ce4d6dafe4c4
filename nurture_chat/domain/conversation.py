"""存储相关协议。

KeyValueBackend 是不透明的字符串键值存储（移动端对应 AsyncStorage），
MessageStore 在其上提供整个会话的快照读写。
"""

from typing import Optional, Protocol

from .models import Conversation


class KeyValueBackend(Protocol):
    def get_item(self, key: str) -> Optional[str]:
        """返回键对应的字符串，键不存在时返回 None。失败时抛出 StoreReadError。"""

        ...

    def set_item(self, key: str, value: str) -> None:
        """覆盖写入。失败时抛出 StoreWriteError。"""

        ...


class MessageStore(Protocol):
    def load(self) -> Conversation:
        """读取会话；键缺失或数据损坏时返回空会话，不抛异常。"""

        ...

    def save(self, conversation: Conversation) -> bool:
        """整体覆盖写入会话，返回是否成功，失败只记录日志。"""

        ...
