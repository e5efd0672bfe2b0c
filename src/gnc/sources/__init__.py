from .base import HttpGetter, NotificationSource
from .github import GitHubNotificationsSource, NotificationPages

__all__ = [
    "GitHubNotificationsSource",
    "HttpGetter",
    "NotificationPages",
    "NotificationSource",
]
