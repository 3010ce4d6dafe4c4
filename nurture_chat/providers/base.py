"""Provider 抽象接口。

会话控制器不直接依赖具体厂商的 HTTP 调用，而是依赖此协议：

- 每个厂商实现一个 CompletionClient（如 OpenAIClient）。
- 负责：把提示词转成具体 API 请求，并从响应 JSON 中取出回复文本。
"""

from typing import Protocol


class CompletionClient(Protocol):
    """补全客户端协议。

    实现者需要提供：
    - name: Provider 名称，用于日志。
    - complete(prompt): 执行一次请求，返回回复文本；
      失败时抛出 UnreachableError / RemoteError / MalformedResponseError 之一。
    """

    name: str

    def complete(self, prompt: str) -> str:
        ...
