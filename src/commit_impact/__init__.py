"""Commit classification and impact scoring for developer analytics."""

__version__ = "1.0.0"

from .impact import ImpactScoreCalculator, calculate_impact_score
from .models import CommitType, ExternalReference, ParsedCommitData
from .parser import parse_commit_message

__all__ = [
    "CommitType",
    "ExternalReference",
    "ImpactScoreCalculator",
    "ParsedCommitData",
    "calculate_impact_score",
    "parse_commit_message",
    "__version__",
]
