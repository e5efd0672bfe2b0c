from __future__ import annotations

import json
import re
import ssl
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True, slots=True)
class HttpResponse:
    status: int
    url: str
    headers: Mapping[str, str]
    body: bytes

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def header(self, name: str) -> str | None:
        wanted = name.lower()
        for k, v in self.headers.items():
            if k.lower() == wanted:
                return v
        return None

    def text(self, encoding: str = "utf-8") -> str:
        return self.body.decode(encoding, errors="replace")

    def json(self) -> Any:
        return json.loads(self.body.decode("utf-8"))


class HttpClient:
    """
    轻量 HTTP 客户端（仅依赖标准库），用于拉取通知列表。

    约定：
    - 每个请求有独立超时（默认 5 秒）
    - 非 2xx 响应不抛异常，照常返回 HttpResponse，由调用方解析错误体
    - 不做重试：重试节奏由外部调度器负责
    - 网络层异常（超时、连接失败、协议错误）原样抛出
    """

    def __init__(
        self,
        *,
        timeout_seconds: float = 5.0,
        user_agent: str = "github-notification-counter/0",
    ) -> None:
        self._timeout_seconds = timeout_seconds
        self._user_agent = user_agent
        self._ssl_context = ssl.create_default_context()

    def get(self, url: str, *, headers: Mapping[str, str] | None = None) -> HttpResponse:
        request_headers = {"User-Agent": self._user_agent}
        if headers:
            request_headers.update(dict(headers))

        req = urllib.request.Request(url=url, headers=request_headers, method="GET")
        try:
            with urllib.request.urlopen(req, timeout=self._timeout_seconds, context=self._ssl_context) as resp:
                return HttpResponse(
                    status=getattr(resp, "status", 200),
                    url=resp.geturl(),
                    headers={k: v for k, v in resp.headers.items()},
                    body=resp.read(),
                )
        except urllib.error.HTTPError as e:
            body = e.fp.read() if e.fp is not None else b""
            return HttpResponse(
                status=e.code,
                url=e.filename or url,
                headers={k: v for k, v in e.headers.items()} if e.headers else {},
                body=body or b"",
            )


_LINK_RE = re.compile(r'<(?P<url>https?://[^>\s]+)>\s*;\s*rel="?(?P<rel>\w+)"?')


def parse_link_header(link_value: str | None) -> dict[str, str]:
    """
    解析 RFC5988 Link 头，返回 rel -> url 映射。

    示例：
    <https://...>; rel="next", <https://...>; rel="last"

    格式不合法的片段直接跳过；同一 rel 出现多次时以最后一次为准。
    """
    result: dict[str, str] = {}
    if not link_value:
        return result
    for m in _LINK_RE.finditer(link_value):
        result[m.group("rel")] = m.group("url")
    return result
