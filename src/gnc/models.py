from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping


# https://docs.github.com/en/rest/activity/notifications#about-notification-reasons
NOTIFICATION_REASONS: tuple[str, ...] = (
    "assign",
    "author",
    "comment",
    "invitation",
    "manual",
    "mention",
    "review_requested",
    "security_alert",
    "state_change",
    "subscribed",
    "team_mention",
)


@dataclass(frozen=True, slots=True)
class Notification:
    """
    单条远端通知。

    reason 是远端定义的开放集合，未知取值照常接受，不做枚举校验。
    """

    reason: str
    raw: Mapping[str, Any] | None = None


@dataclass(frozen=True, slots=True)
class Page:
    items: tuple[Notification, ...]
    next_url: str | None


@dataclass(slots=True)
class AggregateCounts:
    """
    按 reason 聚合的计数。

    不变式：
    - total 恒等于 by_reason 各桶之和
    - 只有出现过的 reason 才会有桶（没有预置的 0 桶）
    """

    by_reason: dict[str, int] = field(default_factory=dict)
    total: int = 0

    def add(self, reason: str) -> None:
        self.by_reason[reason] = self.by_reason.get(reason, 0) + 1
        self.total += 1

    def get(self, name: str, default: int = 0) -> int:
        if name == "total":
            return self.total
        return self.by_reason.get(name, default)

    def as_dict(self) -> Mapping[str, int]:
        """只读快照；远端若真的返回名为 total 的 reason，以汇总值为准。"""
        snapshot = dict(self.by_reason)
        snapshot["total"] = self.total
        return MappingProxyType(snapshot)
