"""Issue and ticket reference extraction."""

import re
from collections.abc import Callable
from re import Pattern

from .models import ExternalReference

# (kind, pattern, normalizer), applied in this order over the whole message.
# JIRA keys are uppercase and Linear keys lowercase, so a token can only
# match one of the two.
_REFERENCE_PATTERNS: list[tuple[str, Pattern[str], Callable[[str], str]]] = [
    ("github", re.compile(r"#(\d+)\b", re.ASCII), lambda match: "#" + match),
    ("jira", re.compile(r"\b([A-Z]{2,}-\d+)\b", re.ASCII), lambda match: match),
    ("linear", re.compile(r"\b([a-z]{2,4}-\d+)\b", re.ASCII), lambda match: match.upper()),
]


def extract_external_refs(message: str) -> tuple[ExternalReference, ...]:
    """Find GitHub, JIRA and Linear references in a commit message.

    Duplicates collapse to their first appearance.

    Args:
        message: The full commit message (title and body)

    Returns:
        References in order of discovery
    """
    refs: list[ExternalReference] = []
    seen: set[str] = set()

    for kind, pattern, normalize in _REFERENCE_PATTERNS:
        for match in pattern.findall(message):
            ref_id = normalize(match)
            key = f"{kind}:{ref_id.upper()}"
            if key in seen:
                continue
            seen.add(key)
            refs.append(ExternalReference(kind=kind, id=ref_id))

    return tuple(refs)
