from collections import Counter

import pytest

from fakes import FakeHttp, json_response
from gnc.aggregate import aggregate_reasons
from gnc.errors import TransportError
from gnc.models import AggregateCounts, Notification
from gnc.sources.github import GitHubNotificationsSource


def test_empty_stream_has_only_total() -> None:
    counts = aggregate_reasons([])
    assert counts.total == 0
    assert counts.by_reason == {}
    assert dict(counts.as_dict()) == {"total": 0}


def test_two_page_example() -> None:
    base = "https://api.github.com/notifications"
    page2 = base + "?page=2"
    http = FakeHttp(
        responses={
            base: json_response(base, [{"reason": "mention"}, {"reason": "mention"}], next_url=page2),
            page2: json_response(page2, [{"reason": "author"}]),
        }
    )
    src = GitHubNotificationsSource(api_server="https://api.github.com", token="t", http=http)

    counts = aggregate_reasons(src.notifications())

    assert dict(counts.as_dict()) == {"total": 3, "mention": 2, "author": 1}


@pytest.mark.parametrize(
    "reasons",
    [
        ["mention"],
        ["assign", "author", "assign", "ci_activity", "assign"],
        ["subscribed"] * 7 + ["team_mention"] * 2,
    ],
)
def test_total_equals_sum_of_buckets(reasons: list[str]) -> None:
    counts = aggregate_reasons(Notification(reason=r) for r in reasons)
    assert counts.total == len(reasons) == sum(counts.by_reason.values())
    assert counts.by_reason == dict(Counter(reasons))


def test_error_stops_folding_and_propagates() -> None:
    seen: list[str] = []

    def items():
        for r in ("mention", "author"):
            seen.append(r)
            yield Notification(reason=r)
        raise TransportError("connection reset")

    with pytest.raises(TransportError):
        aggregate_reasons(items())
    assert seen == ["mention", "author"]


def test_snapshot_is_read_only() -> None:
    counts = AggregateCounts()
    counts.add("mention")
    snapshot = counts.as_dict()
    with pytest.raises(TypeError):
        snapshot["mention"] = 5  # type: ignore[index]
    assert counts.get("mention") == 1
    assert counts.get("author") == 0
    assert counts.get("total") == 1
