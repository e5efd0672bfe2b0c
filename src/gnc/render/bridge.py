from __future__ import annotations

from ..models import NOTIFICATION_REASONS, AggregateCounts
from .template import FormatTemplate


PLACEHOLDERS: tuple[str, ...] = ("total",) + NOTIFICATION_REASONS


def placeholder_values(counts: AggregateCounts) -> dict[str, str]:
    """
    把聚合结果映射为固定占位符集合；未出现过的 reason 记为 "0"。

    不在占位符集合内的 reason 只计入 total，不会出现在模板里。
    """
    return {name: str(counts.get(name, 0)) for name in PLACEHOLDERS}


class CountsRenderer:
    def __init__(self, fmt: str) -> None:
        self.template = FormatTemplate(fmt, allowed=PLACEHOLDERS)

    def render(self, counts: AggregateCounts) -> str:
        return self.template.render(placeholder_values(counts))
