"""
GitHub Notification Counter (gnc)

按固定间隔轮询 GitHub 通知列表，沿 Link 头逐页拉取，按 reason 聚合计数，
再通过格式串渲染成状态栏上的一段文本；轮询失败时显示 "N/A"。
"""

from .block import GitHubBlock, PollReport
from .config import BlockConfig
from .models import AggregateCounts, Notification

__all__ = [
    "AggregateCounts",
    "BlockConfig",
    "GitHubBlock",
    "Notification",
    "PollReport",
]
