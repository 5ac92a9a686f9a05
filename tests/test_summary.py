from datetime import datetime, timezone

from commit_impact.enrich import enrich_commit
from commit_impact.github import CommitData
from commit_impact.summary import summary_stats, type_distribution


def make_enriched(message, day, additions=10, deletions=0):
    commit = CommitData(
        sha=str(day),
        message=message,
        author_name="Octo Cat",
        author_email="octocat@example.com",
        committed_at=datetime(2024, 1, day, 12, tzinfo=timezone.utc),
        additions=additions,
        deletions=deletions,
    )
    return enrich_commit(commit)


def test_type_distribution_orders_by_count():
    enriched = [
        make_enriched("docs: readme", 1),
        make_enriched("fix: one", 2),
        make_enriched("fix: two", 3),
        make_enriched("feat: thing", 4),
    ]

    distribution = type_distribution(enriched)

    assert distribution[0] == {
        "type": "fix",
        "label": "Bug Fix",
        "count": 2,
        "color": "#dc2626",
    }
    # Ties keep the order in which types were first seen
    assert [d["type"] for d in distribution] == ["fix", "docs", "feat"]


def test_summary_stats():
    enriched = [
        make_enriched("fix: one", 1, 10, 5),
        make_enriched("chore: two", 2, 20, 0),
    ]

    stats = summary_stats(enriched)

    assert stats["total_commits"] == 2
    assert stats["lines_changed"] == 35
    expected = (enriched[0].impact_score + enriched[1].impact_score) / 2
    assert abs(stats["average_impact"] - expected) < 0.006


def test_summary_stats_empty():
    assert summary_stats([]) == {"total_commits": 0, "average_impact": 0.0, "lines_changed": 0}


def test_date_window_requires_both_ends():
    enriched = [make_enriched("fix: a", 1), make_enriched("fix: b", 5), make_enriched("fix: c", 9)]
    start = datetime(2024, 1, 5, tzinfo=timezone.utc)
    end = datetime(2024, 1, 9, 12, tzinfo=timezone.utc)

    assert summary_stats(enriched, start, end)["total_commits"] == 2
    assert summary_stats(enriched, start, None)["total_commits"] == 3
    assert type_distribution(enriched, start, end)[0]["count"] == 2
