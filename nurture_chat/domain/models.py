"""会话领域模型。

- Author: 消息作者（user / assistant）。
- Message: 唯一的领域实体，只追加、不修改。
- Conversation: 按创建顺序排列的消息序列（最早的在前）。
- MessageIdGenerator: 生成严格递增的消息 ID。

存储格式沿用移动端的 JSON 结构 {"id": int, "text": str, "user": bool}，
作者用布尔值编码：True 为用户，False 为助手。
"""

import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple


class Author(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    """一条聊天消息。

    - id: 毫秒级时间戳，同时作为列表 key 与隐式时间戳，严格递增。
    - text: 展示文本。
    - author: 作者。
    """

    id: int
    text: str
    author: Author

    @property
    def is_user(self) -> bool:
        return self.author is Author.USER

    def to_storage(self) -> Dict[str, Any]:
        return {"id": self.id, "text": self.text, "user": self.is_user}

    @classmethod
    def from_storage(cls, data: Dict[str, Any]) -> "Message":
        """从存储结构还原消息，字段缺失或类型不符时抛出 ValueError。"""

        if not isinstance(data, dict):
            raise ValueError(f"message entry must be an object, got {type(data).__name__}")
        msg_id = data.get("id")
        text = data.get("text")
        user = data.get("user")
        # bool 是 int 的子类，这里要单独排除
        if isinstance(msg_id, bool) or not isinstance(msg_id, int):
            raise ValueError(f"invalid message id: {msg_id!r}")
        if not isinstance(text, str) or not text:
            raise ValueError(f"invalid message text: {text!r}")
        if not isinstance(user, bool):
            raise ValueError(f"invalid user flag: {user!r}")
        return cls(id=msg_id, text=text, author=Author.USER if user else Author.ASSISTANT)


@dataclass
class Conversation:
    """内存中的完整会话历史。"""

    messages: List[Message] = field(default_factory=list)

    def append(self, message: Message) -> None:
        last = self.last_id
        if last is not None and message.id <= last:
            raise ValueError(f"message id {message.id} must be greater than {last}")
        self.messages.append(message)

    @property
    def last_id(self) -> Optional[int]:
        return self.messages[-1].id if self.messages else None

    @property
    def max_id(self) -> Optional[int]:
        return max((m.id for m in self.messages), default=None)

    def snapshot(self) -> Tuple[Message, ...]:
        return tuple(self.messages)

    def to_storage(self) -> List[Dict[str, Any]]:
        return [m.to_storage() for m in self.messages]

    def __len__(self) -> int:
        return len(self.messages)


def _now_ms() -> int:
    return int(time.time() * 1000)


class MessageIdGenerator:
    """基于毫秒时间戳的 ID 生成器。

    同一毫秒内连续生成（或系统时钟回拨）时，返回 last + 1，
    保证 ID 在会话生命周期内严格递增。
    """

    def __init__(self, last_id: Optional[int] = None, clock: Callable[[], int] = _now_ms):
        self._last = last_id
        self._clock = clock
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._lock:
            candidate = self._clock()
            if self._last is not None and candidate <= self._last:
                candidate = self._last + 1
            self._last = candidate
            return candidate
