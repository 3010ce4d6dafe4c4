"""领域层模型与协议。

包含：
- models: Message / Conversation 等会话模型。
- conversation: 键值存储与消息存储协议。
- exceptions: 业务异常类型定义。
"""
