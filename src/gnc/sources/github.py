from __future__ import annotations

import http.client
import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Iterator, Mapping

from ..errors import ParseError, RemoteError, TransportError
from ..http_utils import HttpResponse, parse_link_header
from ..models import Notification, Page
from .base import HttpGetter


logger = logging.getLogger(__name__)


def _body_prefix(resp: HttpResponse, limit: int = 200) -> str:
    return resp.text()[:limit]


def _remote_error(resp: HttpResponse) -> RemoteError:
    message: str | None = None
    try:
        data = resp.json()
    except ValueError:
        data = None
    if isinstance(data, dict) and isinstance(data.get("message"), str):
        message = data["message"]
    return RemoteError(resp.status, message if message is not None else _body_prefix(resp))


def _parse_page(resp: HttpResponse, next_url: str | None) -> Page:
    try:
        data = resp.json()
    except ValueError as e:
        raise ParseError(
            f"GitHub notifications invalid JSON: status={resp.status} url={resp.url} body_prefix={_body_prefix(resp)!r}"
        ) from e
    if not isinstance(data, list):
        raise ParseError(f"GitHub notifications expected list, got {type(data)}: {resp.url}")

    items: list[Notification] = []
    for it in data:
        if not isinstance(it, dict) or not isinstance(it.get("reason"), str):
            raise ParseError(f"GitHub notification without string 'reason': {resp.url}")
        items.append(Notification(reason=it["reason"], raw=it))
    return Page(items=tuple(items), next_url=next_url)


class NotificationPages:
    """
    通知列表的惰性分页迭代器。

    行为：
    - 当前页还有未消费的条目时直接返回
    - 否则若 cursor 非空，请求 cursor 指向的页，并用 Link 头中的 next 更新 cursor
    - 空页会被跳过，直到拿到条目或 cursor 耗尽
    - 请求失败（含非法 URL）统一包装为 FetchError 抛出；任何异常抛出后迭代器即结束（fail-stop，不在遍历中重试）
    """

    def __init__(self, http: HttpGetter, start_url: str, headers: Mapping[str, str]) -> None:
        self._http = http
        self._headers = dict(headers)
        self._buffer: deque[Notification] = deque()
        self.cursor: str | None = start_url
        self.pages_fetched = 0
        self.failed = False

    def __iter__(self) -> Iterator[Notification]:
        return self

    def __next__(self) -> Notification:
        if self._buffer:
            return self._buffer.popleft()
        while self.cursor and not self.failed:
            url = self.cursor
            try:
                page = self._fetch_page(url)
            except BaseException:
                self.failed = True
                self.cursor = None
                raise
            self.pages_fetched += 1
            self.cursor = page.next_url
            logger.debug(
                "page fetched: index=%d items=%d has_next=%s",
                self.pages_fetched,
                len(page.items),
                page.next_url is not None,
            )
            if page.items:
                self._buffer.extend(page.items)
                return self._buffer.popleft()
        raise StopIteration

    def _fetch_page(self, url: str) -> Page:
        try:
            resp = self._http.get(url, headers=self._headers)
        except (OSError, ValueError, http.client.HTTPException) as e:
            raise TransportError(f"{type(e).__name__}: {e}") from e

        if not resp.ok:
            raise _remote_error(resp)

        links = parse_link_header(resp.header("Link"))
        return _parse_page(resp, links.get("next"))


@dataclass(slots=True)
class GitHubNotificationsSource:
    """
    GitHub 当前用户的通知列表（/notifications）。

    每次 notifications() 都从 {api_server}/notifications 重新开始，不复用上一轮的 cursor。
    """

    api_server: str
    token: str = field(repr=False)
    http: HttpGetter = field(repr=False)

    def key(self) -> str:
        return f"github:{self.api_server}:notifications"

    def base_url(self) -> str:
        return f"{self.api_server.rstrip('/')}/notifications"

    def _headers(self) -> Mapping[str, str]:
        return {
            "Accept": "application/vnd.github+json",
            "Authorization": f"token {self.token}",
        }

    def notifications(self) -> NotificationPages:
        return NotificationPages(self.http, self.base_url(), self._headers())

