"""Keyword-based commit type inference for non-conventional messages.

Two tiers are tried in order. Phrase patterns are literal substrings that
identify a type with high confidence; the first one found wins. Otherwise
every type is scored by its keywords and the highest total wins.

Both tables are ordered: earlier types win ties, and earlier keywords within
a type are worth more.
"""

from __future__ import annotations

import re
from re import Pattern

from .models import CommitType
from .text import ascii_lower

PHRASE_PATTERNS: tuple[tuple[CommitType, tuple[str, ...]], ...] = (
    (CommitType.FIX, ("fix for", "fixes #", "fixed #", "bug fix", "quick fix")),
    (CommitType.FEAT, ("add support", "added support", "new feature", "now supports")),
    (
        CommitType.DOCS,
        ("update readme", "update docs", "add documentation", "update documentation"),
    ),
    (CommitType.REFACTOR, ("clean up", "code cleanup", "move to", "extract to")),
    (
        CommitType.CHORE,
        ("update dependency", "update dependencies", "bump version", "version bump"),
    ),
)

KEYWORD_MAP: tuple[tuple[CommitType, tuple[str, ...]], ...] = (
    (
        CommitType.FIX,
        (
            "fix",
            "bug",
            "patch",
            "hotfix",
            "resolve",
            "issue",
            "error",
            "crash",
            "broken",
            "repair",
            "correct",
            "defect",
        ),
    ),
    (
        CommitType.FEAT,
        (
            "add",
            "feature",
            "implement",
            "new",
            "create",
            "introduce",
            "support",
            "enable",
            "allow",
        ),
    ),
    (
        CommitType.DOCS,
        (
            "doc",
            "documentation",
            "readme",
            "comment",
            "changelog",
            "license",
            "contributing",
            "wiki",
            "guide",
            "tutorial",
        ),
    ),
    (
        CommitType.TEST,
        (
            "test",
            "spec",
            "coverage",
            "assertion",
            "mock",
            "stub",
            "fixture",
            "e2e",
            "integration test",
            "unit test",
        ),
    ),
    (
        CommitType.REFACTOR,
        (
            "refactor",
            "restructure",
            "reorganize",
            "rewrite",
            "simplify",
            "extract",
            "rename",
            "move",
            "split",
            "clean up",
            "cleanup",
        ),
    ),
    (
        CommitType.PERF,
        (
            "perf",
            "performance",
            "optim",
            "speed",
            "fast",
            "slow",
            "cache",
            "memory",
            "lazy",
            "eager",
        ),
    ),
    (
        CommitType.STYLE,
        (
            "style",
            "format",
            "lint",
            "prettier",
            "whitespace",
            "indent",
            "spacing",
            "psr",
            "coding standard",
        ),
    ),
    (
        CommitType.CI,
        (
            "ci",
            "pipeline",
            "workflow",
            "github action",
            "travis",
            "jenkins",
            "circleci",
            "gitlab ci",
            "deploy",
            "deployment",
        ),
    ),
    (
        CommitType.BUILD,
        (
            "build",
            "compile",
            "webpack",
            "vite",
            "bundle",
            "rollup",
            "esbuild",
            "npm",
            "yarn",
            "pnpm",
            "composer",
        ),
    ),
    (
        CommitType.CHORE,
        (
            "chore",
            "update",
            "upgrade",
            "bump",
            "dependency",
            "deps",
            "package",
            "version",
            "remove",
            "delete",
            "clean",
        ),
    ),
    (CommitType.REVERT, ("revert", "rollback", "undo", "restore")),
)

PHRASE_CONFIDENCE = 0.9
MIN_CONFIDENCE = 0.4
MAX_KEYWORD_CONFIDENCE = 0.8

# Single words match at a leading word boundary, so "fix" also matches "fixed".
_KEYWORD_PATTERNS: dict[str, Pattern[str]] = {
    keyword: re.compile(r"\b" + re.escape(keyword), re.ASCII)
    for _, keywords in KEYWORD_MAP
    for keyword in keywords
    if " " not in keyword
}


def categorize_commit(message: str) -> CommitType:
    """Infer the commit type of a message that is not a conventional commit.

    Args:
        message: The full commit message

    Returns:
        The inferred type, OTHER when nothing matches
    """
    lower_message = ascii_lower(message)

    phrase_type = _match_phrase_patterns(lower_message)
    if phrase_type is not None:
        return phrase_type

    keyword_type = _match_keywords(lower_message)
    if keyword_type is not None:
        return keyword_type

    return CommitType.OTHER


def categorization_confidence(message: str) -> float:
    """Estimate how reliable ``categorize_commit`` is for a message.

    Args:
        message: The full commit message

    Returns:
        0.9 for a phrase match, otherwise 0.4 plus 0.1 per keyword found,
        capped at 0.8
    """
    lower_message = ascii_lower(message)

    if _match_phrase_patterns(lower_message) is not None:
        return PHRASE_CONFIDENCE

    match_count = sum(
        1 for _, keywords in KEYWORD_MAP for keyword in keywords if keyword in lower_message
    )

    return min(MAX_KEYWORD_CONFIDENCE, MIN_CONFIDENCE + match_count * 0.1)


def _match_phrase_patterns(lower_message: str) -> CommitType | None:
    for commit_type, phrases in PHRASE_PATTERNS:
        for phrase in phrases:
            if phrase in lower_message:
                return commit_type
    return None


def _match_keywords(lower_message: str) -> CommitType | None:
    best_type: CommitType | None = None
    best_score = 0

    for commit_type, keywords in KEYWORD_MAP:
        score = _score_keywords(lower_message, keywords)
        # Strictly greater: on a tie the earlier type keeps the lead
        if score > best_score:
            best_type = commit_type
            best_score = score

    return best_type


def _score_keywords(lower_message: str, keywords: tuple[str, ...]) -> int:
    score = 0
    count = len(keywords)

    for index, keyword in enumerate(keywords):
        rank = count - index
        if " " in keyword:
            # Phrases get double weight
            if keyword in lower_message:
                score += rank * 2
        elif _KEYWORD_PATTERNS[keyword].search(lower_message):
            position_bonus = 3 if lower_message.startswith(keyword) else 0
            score += rank + position_bonus

    return score
