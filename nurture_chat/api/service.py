"""对外 API 服务模块。

提供简化的函数接口供展示层调用。
"""

from typing import Optional, Dict, Any

from nurture_chat.config.settings import settings
from nurture_chat.agents.chat_controller import ConversationController
from nurture_chat.domain.models import Message
from nurture_chat.infrastructure.storage.kv_store import FileKeyValueStore
from nurture_chat.infrastructure.storage.message_store import KeyValueMessageStore
from nurture_chat.providers import create_completion_client


_controller: Optional[ConversationController] = None


def get_default_controller() -> ConversationController:
    """获取默认的会话控制器（单例）。

    首次调用时从存储恢复历史；未配置 API 密钥时抛出 ConfigurationError。
    """
    global _controller
    if _controller is None:
        store = KeyValueMessageStore(FileKeyValueStore(root=settings.storage_root), key=settings.storage_key)
        _controller = ConversationController(store=store, client=create_completion_client())
    return _controller


def reset_default_controller() -> None:
    """关闭并丢弃默认控制器，之后的调用会重新创建。"""
    global _controller
    if _controller is not None:
        _controller.close()
    _controller = None


def send_message(text: str) -> Optional[Dict[str, Any]]:
    """发送一条用户消息并等待本轮结束。

    假定只有一个调用方在驱动默认控制器；重叠的轮次由控制器自身拒绝。

    Args:
        text: 用户输入

    Returns:
        包含用户消息、助手消息与失败标记的字典；输入为空或已有一轮在途时返回 None
    """
    controller = get_default_controller()
    controller.set_input(text)
    result = controller.send_message()
    if result is None:
        return None
    return {
        "user_message": _to_dict(result.user_message),
        "assistant_message": _to_dict(result.assistant_message),
        "failed": result.failed,
    }


def list_messages() -> list[Dict[str, Any]]:
    """列出当前会话的全部消息，结构与存储格式一致。"""
    return [_to_dict(m) for m in get_default_controller().messages]


def _to_dict(message: Message) -> Dict[str, Any]:
    return message.to_storage()
