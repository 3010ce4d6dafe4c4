"""Nurture Chat 顶层包。

孕期与婴儿护理问答助手的核心实现，包括配置加载、会话模型、
本地持久化、提示词构造、补全接口适配与会话控制器。
"""

from nurture_chat.agents.chat_controller import ConversationController, TurnResult
from nurture_chat.domain.models import Author, Conversation, Message

__all__ = ["Author", "Conversation", "ConversationController", "Message", "TurnResult"]
