from datetime import datetime, timezone

import pytest
from commit_impact.enrich import enrich_commit, enrich_history, repository_average_lines
from commit_impact.github import CommitData, FileChange
from commit_impact.models import CommitType


def make_commit(message, additions=0, deletions=0, files=0, hour=12):
    return CommitData(
        sha="a" * 40,
        message=message,
        author_name="Octo Cat",
        author_email="octocat@example.com",
        committed_at=datetime(2024, 1, 15, hour, 0, tzinfo=timezone.utc),
        additions=additions,
        deletions=deletions,
        files=[FileChange(filename=f"file{i}.py") for i in range(files)],
    )


def test_enrich_conventional_commit():
    enriched = enrich_commit(make_commit("feat(auth): add OAuth login #123", 100, 20, 5, hour=10))

    assert enriched.parsed.type is CommitType.FEAT
    assert enriched.impact_score == 11.2
    assert enriched.to_record() == {
        "commit_type": "feat",
        "scope": "auth",
        "external_refs": [{"type": "github", "id": "#123"}],
        "is_merge": False,
        "impact_score": 11.2,
    }


def test_enrich_merge_commit():
    enriched = enrich_commit(make_commit("Merge branch 'feature' into main", 200, 50, 10))

    record = enriched.to_record()
    assert record["is_merge"] is True
    assert record["commit_type"] == "other"
    assert record["external_refs"] is None
    assert enriched.impact_score > 0


def test_enrich_inferred_commit():
    enriched = enrich_commit(make_commit("Fix bug in user registration", 20, 5, 2))
    assert enriched.parsed.type is CommitType.FIX
    assert not enriched.parsed.is_conventional


def test_large_commit_against_small_average():
    enriched = enrich_commit(make_commit("feat: large feature", 500, 100, 20), 60.0)
    assert enriched.impact_score > 5
    assert enriched.breakdown["lines_changed"].raw_score == 2.0


def test_repository_average_lines():
    commits = [make_commit("a", 100, 0), make_commit("b", 0, 100)]
    assert repository_average_lines(commits) == 100.0
    assert repository_average_lines([]) is None


def test_enrich_history_uses_prior_commits_only():
    commits = [
        make_commit("feat: first", 100, 0),
        make_commit("feat: second", 20, 0),
        make_commit("feat: third", 60, 0),
    ]

    enriched = enrich_history(commits)

    # First: 100 / 50 (default); second: 20 / 100; third: 60 / 60
    assert [e.breakdown["lines_changed"].raw_score for e in enriched] == [2.0, 0.2, 1.0]


def test_enrich_history_empty():
    assert enrich_history([]) == []


def test_committed_hour_comes_from_timestamp():
    late = enrich_commit(make_commit("feat: x", hour=2))
    peak = enrich_commit(make_commit("feat: x", hour=14))

    assert late.breakdown["focus_time"].raw_score == pytest.approx(0.8)
    assert peak.breakdown["focus_time"].raw_score == pytest.approx(1.2)


def test_enrich_history_counts_prior_commits():
    prior = [make_commit("feat: first", 100, 0), make_commit("feat: second", 20, 0)]

    enriched = enrich_history([make_commit("feat: third", 60, 0)], prior)

    # 60 / mean(100, 20)
    assert len(enriched) == 1
    assert enriched[0].breakdown["lines_changed"].raw_score == 1.0
