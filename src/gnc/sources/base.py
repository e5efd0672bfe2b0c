from __future__ import annotations

from typing import Iterator, Mapping, Protocol

from ..http_utils import HttpResponse
from ..models import Notification


class HttpGetter(Protocol):
    def get(self, url: str, *, headers: Mapping[str, str] | None = None) -> HttpResponse: ...


class NotificationSource(Protocol):
    """
    通知数据源接口：每次调用 notifications() 都从头开始一次新的分页遍历。

    约定：
    - 遍历是惰性的，调用 notifications() 本身不发请求
    - 遍历中的第一个错误以 FetchError 抛出，之后迭代器即结束
    """

    def key(self) -> str: ...

    def notifications(self) -> Iterator[Notification]: ...
