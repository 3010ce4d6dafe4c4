"""OpenAI chat/completions 适配器。

本模块负责：

1. 把提示词包装为单轮请求：{"model": ..., "messages": [{"role": "user", "content": prompt}]}。
2. 以 Bearer 密钥调用 {base_url}/chat/completions，只尝试一次，不重试、不流式。
3. 把网络错误、非 2xx 响应、结构不符的响应分别映射为
   UnreachableError、RemoteError、MalformedResponseError。
"""

from typing import Any

import httpx

from nurture_chat.domain.exceptions import (
    ConfigurationError,
    MalformedResponseError,
    RemoteError,
    UnreachableError,
)
from nurture_chat.providers.registry import OPENAI_CONFIG, ModelConfig, ProviderConfig


class OpenAIClient:
    """OpenAI 提供方客户端实现。"""

    name = "openai"

    def __init__(self, settings, model: str | None = None, provider_config: ProviderConfig = OPENAI_CONFIG):
        # 缺少密钥时在构造阶段就失败，避免启动后每轮都只得到致歉文本
        if not getattr(settings, "openai_api_key", None):
            raise ConfigurationError(code="MISSING_API_KEY", message="OPENAI_API_KEY not set")
        self._settings = settings
        self._provider_config = provider_config
        logical = model or getattr(settings, "default_model", None) or "chat"
        try:
            self._model_cfg: ModelConfig = provider_config.models[logical]
        except KeyError:
            raise ConfigurationError(code="UNKNOWN_MODEL", message=f"Unknown model: {logical!r}")

    @property
    def model(self) -> str:
        return self._model_cfg.provider_model

    def complete(self, prompt: str) -> str:
        payload = self._build_payload(prompt)
        try:
            with httpx.Client(timeout=self._settings.http_timeout, trust_env=False) as client:
                base = getattr(self._settings, "openai_base_url", None) or self._provider_config.base_url
                resp = client.post(
                    f"{base.rstrip('/')}/chat/completions",
                    json=payload,
                    headers={
                        "Authorization": f"Bearer {self._settings.openai_api_key}",
                        "Content-Type": "application/json",
                    },
                )
        except httpx.RequestError as e:
            raise UnreachableError(code="UNREACHABLE", message=str(e))
        if resp.status_code < 200 or resp.status_code >= 300:
            raise RemoteError(
                code="REMOTE_ERROR",
                message=self._error_message(resp),
                http_status=resp.status_code,
            )
        try:
            data = resp.json()
        except (ValueError, RecursionError) as e:
            raise MalformedResponseError(code="MALFORMED_RESPONSE", message=f"invalid JSON: {e}")
        return self._extract_reply(data)

    def _build_payload(self, prompt: str) -> dict:
        return {
            "model": self._model_cfg.provider_model,
            "messages": [{"role": "user", "content": prompt}],
        }

    @staticmethod
    def _error_message(resp: Any) -> str:
        """优先取错误体里的 error.message，否则返回通用的状态码描述。"""

        fallback = f"HTTP status {resp.status_code}"
        try:
            data = resp.json()
        except (ValueError, RecursionError):
            return fallback
        if isinstance(data, dict):
            error = data.get("error")
            if isinstance(error, dict) and isinstance(error.get("message"), str) and error["message"]:
                return error["message"]
        return fallback

    @staticmethod
    def _extract_reply(data: Any) -> str:
        """取 choices[0].message.content，结构不符时抛 MalformedResponseError。"""

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise MalformedResponseError(
                code="MALFORMED_RESPONSE",
                message=f"missing choices[0].message.content: {e!r}",
            )
        if not isinstance(content, str) or not content:
            raise MalformedResponseError(
                code="MALFORMED_RESPONSE",
                message=f"empty or non-string reply content: {content!r}",
            )
        return content
