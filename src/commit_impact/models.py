"""Commit types and parsed commit data."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class CommitType(Enum):
    """Conventional commit categories.

    See https://www.conventionalcommits.org/
    """

    FEAT = "feat"
    FIX = "fix"
    DOCS = "docs"
    STYLE = "style"
    REFACTOR = "refactor"
    PERF = "perf"
    TEST = "test"
    BUILD = "build"
    CI = "ci"
    CHORE = "chore"
    REVERT = "revert"
    OTHER = "other"

    @property
    def label(self) -> str:
        """Display name for the commit type."""
        return _LABELS[self]

    @property
    def weight(self) -> float:
        """Weight used by the impact score (higher is more impactful)."""
        return _WEIGHTS[self]

    @property
    def emoji(self) -> str:
        return _EMOJI[self]

    @property
    def color(self) -> str:
        """Hex chart color."""
        return _COLORS[self]

    @classmethod
    def from_string(cls, value: str) -> CommitType:
        """Parse a commit type case-insensitively, falling back to OTHER."""
        try:
            return cls(value.lower())
        except ValueError:
            return cls.OTHER

    @classmethod
    def options(cls) -> dict[str, str]:
        """Map of value to display name, for select inputs."""
        return {member.value: member.label for member in cls}


_LABELS: dict[CommitType, str] = {
    CommitType.FEAT: "Feature",
    CommitType.FIX: "Bug Fix",
    CommitType.DOCS: "Documentation",
    CommitType.STYLE: "Code Style",
    CommitType.REFACTOR: "Refactor",
    CommitType.PERF: "Performance",
    CommitType.TEST: "Test",
    CommitType.BUILD: "Build",
    CommitType.CI: "CI/CD",
    CommitType.CHORE: "Chore",
    CommitType.REVERT: "Revert",
    CommitType.OTHER: "Other",
}

_WEIGHTS: dict[CommitType, float] = {
    CommitType.FEAT: 1.0,
    CommitType.FIX: 0.8,
    CommitType.REFACTOR: 0.7,
    CommitType.PERF: 0.7,
    CommitType.TEST: 0.6,
    CommitType.DOCS: 0.5,
    CommitType.BUILD: 0.4,
    CommitType.CI: 0.4,
    CommitType.STYLE: 0.3,
    CommitType.CHORE: 0.3,
    CommitType.REVERT: 0.5,
    CommitType.OTHER: 0.5,
}

_EMOJI: dict[CommitType, str] = {
    CommitType.FEAT: "✨",
    CommitType.FIX: "\U0001f41b",
    CommitType.DOCS: "\U0001f4dd",
    CommitType.STYLE: "\U0001f484",
    CommitType.REFACTOR: "♻",
    CommitType.PERF: "⚡",
    CommitType.TEST: "\U0001f9ea",
    CommitType.BUILD: "\U0001f4e6",
    CommitType.CI: "\U0001f477",
    CommitType.CHORE: "\U0001f9f9",
    CommitType.REVERT: "⏪",
    CommitType.OTHER: "\U0001f4ac",
}

_COLORS: dict[CommitType, str] = {
    CommitType.FEAT: "#16a34a",
    CommitType.FIX: "#dc2626",
    CommitType.DOCS: "#2563eb",
    CommitType.STYLE: "#db2777",
    CommitType.REFACTOR: "#ca8a04",
    CommitType.PERF: "#9333ea",
    CommitType.TEST: "#0891b2",
    CommitType.BUILD: "#ea580c",
    CommitType.CI: "#4f46e5",
    CommitType.CHORE: "#4b5563",
    CommitType.REVERT: "#d97706",
    CommitType.OTHER: "#64748b",
}


@dataclass(frozen=True)
class ExternalReference:
    """An issue or ticket reference found in a commit message."""

    kind: str  # github, jira or linear
    id: str

    def to_dict(self) -> dict[str, str]:
        return {"type": self.kind, "id": self.id}


@dataclass(frozen=True)
class ParsedCommitData:
    """Structured result of parsing one commit message.

    Use the ``conventional``, ``inferred`` and ``merge`` constructors rather
    than building instances directly; they keep ``is_merge`` and
    ``is_conventional`` mutually exclusive and only allow a breaking change
    on conventional commits.
    """

    type: CommitType
    scope: str | None
    description: str
    external_refs: tuple[ExternalReference, ...]
    is_breaking_change: bool
    is_conventional: bool
    is_merge: bool

    @classmethod
    def conventional(
        cls,
        type: CommitType,
        scope: str | None,
        description: str,
        external_refs: tuple[ExternalReference, ...] = (),
        is_breaking_change: bool = False,
    ) -> ParsedCommitData:
        return cls(
            type=type,
            scope=scope,
            description=description,
            external_refs=tuple(external_refs),
            is_breaking_change=is_breaking_change,
            is_conventional=True,
            is_merge=False,
        )

    @classmethod
    def inferred(
        cls,
        type: CommitType,
        description: str,
        external_refs: tuple[ExternalReference, ...] = (),
    ) -> ParsedCommitData:
        return cls(
            type=type,
            scope=None,
            description=description,
            external_refs=tuple(external_refs),
            is_breaking_change=False,
            is_conventional=False,
            is_merge=False,
        )

    @classmethod
    def merge(
        cls,
        description: str,
        external_refs: tuple[ExternalReference, ...] = (),
    ) -> ParsedCommitData:
        return cls(
            type=CommitType.OTHER,
            scope=None,
            description=description,
            external_refs=tuple(external_refs),
            is_breaking_change=False,
            is_conventional=False,
            is_merge=True,
        )

    @property
    def has_external_refs(self) -> bool:
        return len(self.external_refs) > 0

    def refs_by_kind(self, kind: str) -> list[ExternalReference]:
        """Return the references of one kind, in order of appearance."""
        return [ref for ref in self.external_refs if ref.kind == kind]

    def to_record(self) -> dict[str, object]:
        """Fields stored on the commit record."""
        return {
            "commit_type": self.type.value,
            "scope": self.scope,
            "external_refs": [ref.to_dict() for ref in self.external_refs] or None,
            "is_merge": self.is_merge,
        }
