from __future__ import annotations


class ConfigError(ValueError):
    """
    配置错误：缺少凭据、格式串非法、配置项非法。

    只在构造阶段抛出，属于致命错误，需要运维修正后重启。
    """


class FetchError(RuntimeError):
    """单次轮询内的拉取失败；由 Poll Driver 吸收并降级为占位文本。"""


class TransportError(FetchError):
    pass


class RemoteError(FetchError):
    def __init__(self, status: int, message: str) -> None:
        super().__init__(f"remote error: status={status} message={message}")
        self.status = status
        self.message = message


class ParseError(FetchError):
    pass
