"""Commit enrichment: parse the message and score the commit."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from .github import CommitData
from .impact import FactorScore, ImpactScoreCalculator
from .models import ParsedCommitData
from .parser import parse_commit_message


@dataclass(frozen=True)
class EnrichedCommit:
    """A commit together with its parsed message and impact score."""

    commit: CommitData
    parsed: ParsedCommitData
    impact_score: float
    breakdown: dict[str, FactorScore]

    def to_record(self) -> dict[str, object]:
        """Fields written back onto the stored commit."""
        return {**self.parsed.to_record(), "impact_score": self.impact_score}


def enrich_commit(
    commit: CommitData,
    repository_avg_lines: float | None = None,
) -> EnrichedCommit:
    """Parse a commit's message and calculate its impact score.

    Args:
        commit: The commit to enrich
        repository_avg_lines: Mean lines changed per commit in the repository

    Returns:
        The enriched commit
    """
    parsed = parse_commit_message(commit.message)
    calculator = ImpactScoreCalculator(
        parsed=parsed,
        additions=commit.additions,
        deletions=commit.deletions,
        files_changed=commit.files_changed,
        committed_hour=commit.committed_at.hour,
        repository_avg_lines=repository_avg_lines,
    )

    return EnrichedCommit(
        commit=commit,
        parsed=parsed,
        impact_score=calculator.score(),
        breakdown=calculator.breakdown(),
    )


def repository_average_lines(commits: Sequence[CommitData]) -> float | None:
    """Mean of additions + deletions, or None when there are no commits."""
    if not commits:
        return None
    return sum(commit.lines_changed for commit in commits) / len(commits)


def enrich_history(
    commits: Iterable[CommitData],
    prior: Iterable[CommitData] = (),
) -> list[EnrichedCommit]:
    """Enrich commits in order, scoring each against the ones before it.

    The first commit of a repository has no history and uses the default
    baseline.

    Args:
        commits: Commits to enrich, oldest first
        prior: Older commits that are not enriched but count towards the
            running average
    """
    enriched = []
    count = 0
    total_lines = 0

    for commit in prior:
        count += 1
        total_lines += commit.lines_changed

    for commit in commits:
        average = total_lines / count if count else None
        enriched.append(enrich_commit(commit, average))
        count += 1
        total_lines += commit.lines_changed

    return enriched
