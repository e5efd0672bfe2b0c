from __future__ import annotations

import enum
import logging
import time
import uuid
from dataclasses import dataclass
from typing import Any, Mapping

from .aggregate import aggregate_reasons
from .config import BlockConfig
from .errors import ConfigError, FetchError, RemoteError
from .http_utils import HttpClient
from .render.bridge import CountsRenderer
from .render.widget import TextWidget
from .sources.base import HttpGetter
from .sources.github import GitHubNotificationsSource, NotificationPages


logger = logging.getLogger(__name__)

SENTINEL_TEXT = "N/A"


class PollState(enum.Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    AGGREGATING = "aggregating"
    RENDERING = "rendering"
    DISPLAYING = "displaying"


@dataclass(slots=True)
class PollReport:
    ok: bool
    text: str
    total: int | None
    pages_fetched: int
    duration_ms: int
    error: str | None


class GitHubBlock:
    """
    Poll Driver：一次轮询内完成 拉取 -> 聚合 -> 渲染 -> 显示。

    约定：
    - 构造阶段的 ConfigError（缺少凭据、格式串非法）直接抛出，block 不会启用
    - 轮询阶段的任何错误都不向调度器传播，只把显示降级为 "N/A"，下一轮从头重试
    - 同一实例同一时刻最多只有一轮轮询在执行（由外部调度器保证）
    """

    def __init__(
        self,
        config: BlockConfig,
        *,
        http: HttpGetter | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        token = config.resolve_token(environ)
        if not token:
            raise ConfigError(f"missing {config.token_env} environment variable")

        self.config = config
        self.id = uuid.uuid4().hex
        self.update_interval = config.interval_seconds
        self.renderer = CountsRenderer(config.format)
        self.text = TextWidget(icon="github", text=SENTINEL_TEXT, instance=self.id)
        self.source = GitHubNotificationsSource(
            api_server=config.api_server,
            token=token,
            http=http if http is not None else HttpClient(timeout_seconds=config.timeout_seconds),
        )
        self.state = PollState.IDLE
        self.last_error: str | None = None

    def _enter(self, state: PollState) -> None:
        logger.debug("block %s: %s -> %s", self.id, self.state.value, state.value)
        self.state = state

    def poll_once(self) -> PollReport:
        start_t = time.monotonic()
        pages: NotificationPages | None = None
        try:
            self._enter(PollState.FETCHING)
            pages = self.source.notifications()
            self._enter(PollState.AGGREGATING)
            counts = aggregate_reasons(pages)
            self._enter(PollState.RENDERING)
            text = self.renderer.render(counts)
        except FetchError as e:
            if isinstance(e, RemoteError):
                logger.warning(
                    "notifications poll failed: source_key=%s status=%d message=%s",
                    self.source.key(),
                    e.status,
                    e.message,
                )
            else:
                logger.warning("notifications poll failed: source_key=%s error=%s", self.source.key(), e)
            return self._fallback(start_t, pages, f"{type(e).__name__}: {e}")
        except Exception as e:  # noqa: BLE001
            logger.exception("notifications poll crashed: source_key=%s", self.source.key())
            return self._fallback(start_t, pages, f"{type(e).__name__}: {e}")

        self._enter(PollState.DISPLAYING)
        self.text.set_text(text)
        self.last_error = None
        self._enter(PollState.IDLE)
        return PollReport(
            ok=True,
            text=text,
            total=counts.total,
            pages_fetched=pages.pages_fetched,
            duration_ms=int((time.monotonic() - start_t) * 1000),
            error=None,
        )

    def _fallback(self, start_t: float, pages: NotificationPages | None, error: str) -> PollReport:
        self._enter(PollState.DISPLAYING)
        self.text.set_text(SENTINEL_TEXT)
        self.last_error = error
        self._enter(PollState.IDLE)
        return PollReport(
            ok=False,
            text=SENTINEL_TEXT,
            total=None,
            pages_fetched=pages.pages_fetched if pages is not None else 0,
            duration_ms=int((time.monotonic() - start_t) * 1000),
            error=error,
        )

    def update(self) -> float:
        """执行一轮轮询，返回距下一轮的秒数（调度器契约）。"""
        self.poll_once()
        return self.update_interval

    def view(self) -> list[TextWidget]:
        return [self.text]

    def click(self, event: Mapping[str, Any]) -> None:  # noqa: ARG002
        return None
