"""会话控制器。

持有内存中的会话与输入缓冲区，驱动一轮对话的完整流程：

1. 校验输入（去掉首尾空白后为空则什么都不做）。
2. 乐观追加用户消息，后台保存快照，清空输入。
3. 构造提示词并调用补全客户端（整轮唯一的等待点）。
4. 成功则追加助手回复，失败则追加固定致歉文本；再次保存快照。

同一时刻只允许一轮在途，避免助手回复与下一轮用户消息交错。
"""

import threading
import time
from dataclasses import dataclass
from typing import Literal, Optional, Tuple

from nurture_chat.domain.conversation import MessageStore
from nurture_chat.domain.exceptions import CompletionError, RemoteError
from nurture_chat.domain.models import Author, Message, MessageIdGenerator
from nurture_chat.infrastructure.logging.logger import logger
from nurture_chat.infrastructure.storage.snapshot_writer import SnapshotWriter
from nurture_chat.prompts import build_prompt
from nurture_chat.providers.base import CompletionClient


APOLOGY_TEXT = "Lo siento, no pude procesar tu solicitud. Por favor, intenta de nuevo."

ControllerState = Literal["idle", "awaiting_completion"]


@dataclass
class TurnResult:
    """一轮对话的结果。failed 为 True 时 assistant_message 是致歉文本。"""

    user_message: Message
    assistant_message: Message
    failed: bool = False


class ConversationController:
    def __init__(
        self,
        store: MessageStore,
        client: CompletionClient,
        writer: Optional[SnapshotWriter] = None,
    ):
        self._client = client
        self._writer = writer or SnapshotWriter(store)
        self._conversation = store.load()
        self._ids = MessageIdGenerator(last_id=self._conversation.max_id)
        self._input_text = ""
        self._state: ControllerState = "idle"
        self._turn_lock = threading.Lock()
        logger.info(
            "Conversation hydrated",
            extra={"extra": {"messages": len(self._conversation), "provider": getattr(client, "name", None)}},
        )

    @property
    def messages(self) -> Tuple[Message, ...]:
        return self._conversation.snapshot()

    @property
    def input_text(self) -> str:
        return self._input_text

    def set_input(self, text: str) -> None:
        self._input_text = text

    @property
    def state(self) -> ControllerState:
        return self._state

    @property
    def is_busy(self) -> bool:
        return self._state != "idle"

    def send_message(self) -> Optional[TurnResult]:
        """发送输入缓冲区中的内容，执行一整轮对话。

        Returns:
            TurnResult；输入为空或已有一轮在途时返回 None，此时会话与输入缓冲区均不变。
        """
        text = self._input_text
        if text.strip() == "":
            return None
        if not self._turn_lock.acquire(blocking=False):
            logger.warning("Send ignored, a turn is already in flight")
            return None
        try:
            self._state = "awaiting_completion"
            user_message = self._append(Author.USER, text)
            self._input_text = ""
            self._writer.submit(self._conversation)

            prompt = build_prompt(text)
            start_time = time.time()
            failed = False
            try:
                reply = self._client.complete(prompt)
            except CompletionError as e:
                failed = True
                reply = APOLOGY_TEXT
                logger.error(
                    "Completion failed",
                    extra={"extra": {
                        "error_type": type(e).__name__,
                        "code": e.code,
                        "error": e.message,
                        "http_status": e.http_status if isinstance(e, RemoteError) else None,
                        "elapsed_ms": int((time.time() - start_time) * 1000),
                    }},
                )
            else:
                logger.info(
                    "Completion succeeded",
                    extra={"extra": {"elapsed_ms": int((time.time() - start_time) * 1000)}},
                )

            assistant_message = self._append(Author.ASSISTANT, reply)
            self._writer.submit(self._conversation)
            return TurnResult(user_message=user_message, assistant_message=assistant_message, failed=failed)
        finally:
            self._state = "idle"
            self._turn_lock.release()

    def flush(self, timeout: Optional[float] = None) -> bool:
        """等待排队中的快照写入完成。"""

        return self._writer.flush(timeout)

    def close(self) -> None:
        self._writer.flush()
        self._writer.close()

    def _append(self, author: Author, text: str) -> Message:
        message = Message(id=self._ids.next_id(), text=text, author=author)
        self._conversation.append(message)
        return message
