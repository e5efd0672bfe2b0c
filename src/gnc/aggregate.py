from __future__ import annotations

from typing import Iterable

from .models import AggregateCounts, Notification


def aggregate_reasons(items: Iterable[Notification]) -> AggregateCounts:
    """
    按 reason 折叠通知流，从 {total: 0} 开始。

    迭代过程中抛出的异常原样向上传播：出错时本轮的部分结果作废，不做部分渲染。
    """
    counts = AggregateCounts()
    for item in items:
        counts.add(item.reason)
    return counts
