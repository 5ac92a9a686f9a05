"""Dashboard aggregates over enriched commits."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from datetime import datetime

from .enrich import EnrichedCommit
from .impact import round_half_up


def _in_window(
    commits: Iterable[EnrichedCommit],
    start: datetime | None,
    end: datetime | None,
) -> list[EnrichedCommit]:
    # The window only applies when both ends are given
    if start is None or end is None:
        return list(commits)
    return [item for item in commits if start <= item.commit.committed_at <= end]


def type_distribution(
    commits: Iterable[EnrichedCommit],
    start: datetime | None = None,
    end: datetime | None = None,
) -> list[dict[str, object]]:
    """Count commits per type, most frequent first.

    Returns:
        A list of ``{type, label, count, color}`` entries
    """
    counts = Counter(item.parsed.type for item in _in_window(commits, start, end))

    return [
        {
            "type": commit_type.value,
            "label": commit_type.label,
            "count": count,
            "color": commit_type.color,
        }
        for commit_type, count in counts.most_common()
    ]


def summary_stats(
    commits: Iterable[EnrichedCommit],
    start: datetime | None = None,
    end: datetime | None = None,
) -> dict[str, object]:
    """Total commits, average impact score and total lines changed."""
    selected = _in_window(commits, start, end)
    total = len(selected)
    average = sum(item.impact_score for item in selected) / total if total else 0.0

    return {
        "total_commits": total,
        "average_impact": round_half_up(average, 2),
        "lines_changed": sum(item.commit.lines_changed for item in selected),
    }
