"""统一业务异常模型。

所有跨模块抛出的业务级错误都继承自 BusinessError：

- 存储层错误（StoreReadError / StoreWriteError）由存储适配器就地吸收。
- 补全调用错误（CompletionError 及其子类）由会话控制器吸收并替换为固定致歉文本。
- 配置错误（ConfigurationError）直接向上抛出，在启动时暴露。
"""


class BusinessError(Exception):
    """业务异常基类。

    Attributes:
        code: 机器可读错误码（如 "STORE_READ_ERROR"）。
        message: 错误详情，仅用于日志，不直接展示给终端用户。
        http_status: 关联的 HTTP 状态码（如有）。
        extra: 其他补充字段。
    """

    def __init__(self, code: str, message: str, http_status: int = 400, **extra):
        self.code = code
        self.message = message
        self.http_status = http_status
        self.extra = extra
        super().__init__(message)


class StoreReadError(BusinessError):
    """读取持久化数据失败（键缺失以外的错误，例如文件损坏、权限问题）。"""


class StoreWriteError(BusinessError):
    """写入持久化数据失败。"""


class CompletionError(BusinessError):
    """补全接口调用失败的基类。"""


class UnreachableError(CompletionError):
    """网络层错误，没有拿到任何响应（DNS 失败、连接超时等）。"""


class RemoteError(CompletionError):
    """远端返回非 2xx 状态码。"""


class MalformedResponseError(CompletionError):
    """响应不是合法 JSON，或缺少 choices[0].message.content。"""


class ConfigurationError(BusinessError):
    """配置缺失或无效，例如未设置 API 密钥。"""
