"""LLM Provider 集成层。

该包下的模块负责：
- 定义补全客户端抽象接口 (base)。
- 维护 Provider 与模型配置 (registry)。
- 提供具体实现 (openai_client)。
"""

from typing import Optional

from nurture_chat.config.settings import settings
from nurture_chat.providers.base import CompletionClient
from nurture_chat.providers.openai_client import OpenAIClient
from nurture_chat.providers.registry import get_provider_config


def create_completion_client(name: Optional[str] = None) -> CompletionClient:
    """根据名称创建补全客户端，默认 openai。未知名称抛出 KeyError。"""

    cfg = get_provider_config(name or "openai")
    return OpenAIClient(settings, provider_config=cfg)
