"""Conventional Commits title parsing."""

from __future__ import annotations

import re
from dataclasses import dataclass

from .models import CommitType
from .text import ascii_strip

# type(scope)!: description
CONVENTIONAL_PATTERN = re.compile(
    r"^(?P<type>\w+)(?:\((?P<scope>[^)]*)\))?(?P<breaking>!)?:\s*(?P<description>.+)$",
    re.ASCII,
)


@dataclass(frozen=True)
class ConventionalTitle:
    """The parts of a title that follows the Conventional Commits grammar."""

    type: CommitType
    scope: str | None
    breaking: bool
    description: str


def parse_conventional_title(title: str) -> ConventionalTitle | None:
    """Apply the Conventional Commits grammar to a commit title.

    An unknown type word still matches and is typed as OTHER.

    Args:
        title: The first line of the commit message, already trimmed

    Returns:
        The parsed title, or None if the grammar does not apply
    """
    match = CONVENTIONAL_PATTERN.fullmatch(title)
    if match is None:
        return None

    return ConventionalTitle(
        type=CommitType.from_string(match.group("type")),
        scope=match.group("scope") or None,
        breaking=match.group("breaking") is not None,
        description=ascii_strip(match.group("description")),
    )
