"""Commit impact scoring.

The impact score is a weighted sum of six factors, multiplied by 10:

    lines_changed (20%)  min((additions + deletions) / repo_avg, 2.0)
    files_touched (15%)  min(files_changed / 5, 1.5)
    commit_type   (25%)  the commit type weight (feat=1.0 ... chore=0.3)
    merge_commit  (20%)  merge=1.5, regular=0.5
    external_refs (10%)  has refs=1.0, no refs=0.5
    focus_time    (10%)  9-17h=1.2, 23-5h=0.8, otherwise 1.0

Scores are not capped at 10; the maximum is 13.25.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from .models import ParsedCommitData

WEIGHTS: dict[str, float] = {
    "lines_changed": 0.20,
    "files_touched": 0.15,
    "commit_type": 0.25,
    "merge_commit": 0.20,
    "external_refs": 0.10,
    "focus_time": 0.10,
}

# Used when the repository has no commit history yet
DEFAULT_AVG_LINES = 50

MAX_LINES_FACTOR = 2.0
FILES_PER_UNIT = 5
MAX_FILES_FACTOR = 1.5

PEAK_HOURS_START = 9
PEAK_HOURS_END = 17
LATE_NIGHT_START = 23
LATE_NIGHT_END = 5


@dataclass(frozen=True)
class FactorScore:
    """One factor's contribution, rounded for display."""

    weight: float
    raw_score: float
    weighted_score: float


def round_half_up(value: float, digits: int) -> float:
    """Round half away from zero on the shortest decimal form of ``value``.

    ``round()`` rounds halves to even and works on the binary value, so
    ``round(1.005, 2)`` is ``1.0``; this returns ``1.01``.
    """
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


class ImpactScoreCalculator:
    """Calculates the impact score of a single commit."""

    def __init__(
        self,
        parsed: ParsedCommitData,
        additions: int,
        deletions: int,
        files_changed: int,
        committed_hour: int,
        repository_avg_lines: float | None = None,
    ) -> None:
        """Initialize the calculator.

        Args:
            parsed: Result of parsing the commit message
            additions: Lines added
            deletions: Lines deleted
            files_changed: Number of files touched
            committed_hour: Hour of day (0-23) in the commit's own timezone
            repository_avg_lines: Mean lines changed per commit in the
                repository, or None when it has no history;
                non-finite or non-positive values count as None
        """
        self.parsed = parsed
        self.additions = max(additions, 0)
        self.deletions = max(deletions, 0)
        self.files_changed = max(files_changed, 0)
        self.committed_hour = committed_hour
        self.repository_avg_lines = repository_avg_lines

    def score(self) -> float:
        """Calculate the impact score, rounded to 2 decimals."""
        total = sum(WEIGHTS[name] * value for name, value in self.factors().items())
        return round_half_up(total * 10, 2)

    def factors(self) -> dict[str, float]:
        """Unweighted value of every factor."""
        return {
            "lines_changed": self._lines_changed_factor(),
            "files_touched": self._files_touched_factor(),
            "commit_type": self.parsed.type.weight,
            "merge_commit": 1.5 if self.parsed.is_merge else 0.5,
            "external_refs": 1.0 if self.parsed.has_external_refs else 0.5,
            "focus_time": self._focus_time_factor(),
        }

    def breakdown(self) -> dict[str, FactorScore]:
        """Per-factor weight, raw score and weighted contribution."""
        return {
            name: FactorScore(
                weight=WEIGHTS[name],
                raw_score=round_half_up(value, 2),
                weighted_score=round_half_up(WEIGHTS[name] * value, 4),
            )
            for name, value in self.factors().items()
        }

    def _lines_changed_factor(self) -> float:
        avg_lines = self.repository_avg_lines
        if avg_lines is None or not math.isfinite(avg_lines) or avg_lines <= 0:
            avg_lines = DEFAULT_AVG_LINES

        return min((self.additions + self.deletions) / avg_lines, MAX_LINES_FACTOR)

    def _files_touched_factor(self) -> float:
        return min(self.files_changed / FILES_PER_UNIT, MAX_FILES_FACTOR)

    def _focus_time_factor(self) -> float:
        hour = self.committed_hour

        if PEAK_HOURS_START <= hour < PEAK_HOURS_END:
            return 1.2

        if hour >= LATE_NIGHT_START or hour < LATE_NIGHT_END:
            return 0.8

        return 1.0


def calculate_impact_score(
    parsed: ParsedCommitData,
    additions: int,
    deletions: int,
    files_changed: int,
    committed_hour: int,
    repository_avg_lines: float | None = None,
) -> float:
    """Calculate the impact score of a commit.

    See ``ImpactScoreCalculator`` for the arguments.
    """
    return ImpactScoreCalculator(
        parsed,
        additions,
        deletions,
        files_changed,
        committed_hour,
        repository_avg_lines,
    ).score()
