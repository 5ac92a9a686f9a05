"""Commit message parsing.

Merge commits are detected first, then the Conventional Commits grammar is
tried on the title, and anything else falls back to keyword inference.
"""

from .categorizer import categorize_commit
from .conventional import parse_conventional_title
from .models import ParsedCommitData
from .references import extract_external_refs
from .text import ascii_lower, ascii_strip

MERGE_PREFIXES = ("merge ", "merge branch", "merge pull request")


def parse_commit_message(message: str) -> ParsedCommitData:
    """Parse a commit message into its type, scope and references.

    Only the title decides the type and scope; references are collected
    from the whole message.

    Args:
        message: The full commit message

    Returns:
        The parsed commit data
    """
    title = get_title(message)
    external_refs = extract_external_refs(message)

    if is_merge_commit(message):
        return ParsedCommitData.merge(description=title, external_refs=external_refs)

    conventional = parse_conventional_title(title)
    if conventional is not None:
        return ParsedCommitData.conventional(
            type=conventional.type,
            scope=conventional.scope,
            description=conventional.description,
            external_refs=external_refs,
            is_breaking_change=conventional.breaking,
        )

    return ParsedCommitData.inferred(
        type=categorize_commit(message),
        description=title,
        external_refs=external_refs,
    )


def get_title(message: str) -> str:
    """Get the first line of a commit message, trimmed."""
    return ascii_strip(message.split("\n", 1)[0])


def is_merge_commit(message: str) -> bool:
    return ascii_lower(message).startswith(MERGE_PREFIXES)
