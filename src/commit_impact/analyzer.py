"""CommitAnalyzer: enrich commits from local history or push events and report them."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from .enrich import EnrichedCommit, enrich_commit, enrich_history
from .git import GitRepo
from .github import CommitData, GitHubClient, GitHubError, PayloadError, PushEvent
from .impact import FactorScore
from .summary import summary_stats, type_distribution


@dataclass
class AnalyzeOptions:
    """Options for the commit analyzer."""

    repo: str | None = None
    branch: str | None = None
    max_commits: int | None = None

    fetch: bool = False
    github_token: str | None = None
    repository_avg_lines: float | None = None

    verbose: bool = False
    quiet: bool = False


def load_push_event(path: str | Path) -> PushEvent:
    """Read a push-event payload from a JSON file.

    Raises:
        PayloadError: If the file cannot be read or is not a push payload
    """
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        raise PayloadError(f"Cannot read payload {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise PayloadError(f"Payload {path} is not valid JSON: {e}") from e

    return PushEvent.from_webhook(payload)


class CommitAnalyzer:
    """Enriches commits with their type and impact score."""

    def __init__(
        self,
        options: AnalyzeOptions | None = None,
        console: Console | None = None,
    ) -> None:
        """Initialize the analyzer.

        Args:
            options: Analyze options
            console: Console for status output (defaults to stdout)
        """
        self.options = options or AnalyzeOptions()
        self.console = console or Console(quiet=self.options.quiet)
        self.repo = GitRepo(self.options.repo)

    def analyze_repository(self) -> list[EnrichedCommit]:
        """Enrich the local git history, oldest commit first."""
        self.repo.check_repository()

        branch = self.options.branch or self.repo.get_current_branch()
        self.console.print(f"[blue]Analyzing branch: {branch}[/]")

        # Commits older than the --max-commits window still count towards
        # the running average
        history = self.repo.get_commits(branch=self.options.branch)
        if not history:
            self.console.print("[yellow]No commits found to analyze.[/]")
            return []

        max_commits = self.options.max_commits
        split = max(len(history) - max_commits, 0) if max_commits else 0
        prior, commits = history[:split], history[split:]

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=self.console,
            disable=self.options.quiet,
            transient=True,
        ) as progress:
            progress.add_task(f"Scoring {len(commits)} commits...", total=None)
            return enrich_history(commits, prior)

    def analyze_push_event(self, event: PushEvent) -> list[EnrichedCommit]:
        """Enrich the distinct commits of a push event."""
        if not event.has_commits:
            self.console.print(
                f"[yellow]Nothing to process for {event.repository.full_name} ({event.ref}).[/]"
            )
            return []

        commits = event.distinct_commits()
        self.console.print(
            f"[blue]Processing {len(commits)} commit(s) pushed to "
            f"{event.repository.full_name}:{event.branch}[/]"
        )

        if self.options.fetch:
            commits = self._fetch_full_commits(event, commits)

        return [enrich_commit(commit, self.options.repository_avg_lines) for commit in commits]

    def _fetch_full_commits(self, event: PushEvent, commits: list[CommitData]) -> list[CommitData]:
        """Replace webhook commits with API data that carries line statistics."""
        owner, name = event.repository.owner_and_name
        fetched = []

        with GitHubClient(token=self.options.github_token) as client:
            for commit in commits:
                try:
                    fetched.append(client.get_commit(owner, name, commit.sha))
                except GitHubError as e:
                    self.console.print(f"[yellow]⚠ {commit.sha[:8]}: {e}; using webhook data[/]")
                    fetched.append(commit)

        return fetched

    def report(self, enriched: list[EnrichedCommit]) -> None:
        """Print the per-commit table, summary and type distribution."""
        if not enriched:
            return

        table = Table(title="Commits", show_lines=False)
        table.add_column("Commit", style="dim")
        table.add_column("Type")
        table.add_column("Scope")
        table.add_column("Description", overflow="fold")
        table.add_column("Refs")
        table.add_column("Score", justify="right")

        for item in enriched:
            parsed = item.parsed
            kind = f"{parsed.type.emoji} {parsed.type.label}"
            if parsed.is_merge:
                kind += " (merge)"
            elif parsed.is_breaking_change:
                kind += " [red]![/]"
            table.add_row(
                item.commit.sha[:8],
                kind,
                escape(parsed.scope or ""),
                escape(parsed.description),
                ", ".join(ref.id for ref in parsed.external_refs),
                f"{item.impact_score:.2f}",
            )

        self.console.print(table)

        if self.options.verbose:
            for item in enriched:
                self.console.print(
                    render_breakdown(item.breakdown, title=f"Breakdown {item.commit.sha[:8]}")
                )

        stats = summary_stats(enriched)
        self.console.print("\n[cyan]📊 Summary:[/]")
        self.console.print(f"[blue]  • Total commits: {stats['total_commits']}[/]")
        self.console.print(f"[green]  • Average impact: {stats['average_impact']:.2f}[/]")
        self.console.print(f"[yellow]  • Lines changed: {stats['lines_changed']}[/]")

        self.console.print("\n[cyan]🗂  Commit types:[/]")
        for entry in type_distribution(enriched):
            self.console.print(f"  • {entry['label']}: {entry['count']}")


def render_breakdown(breakdown: dict[str, FactorScore], title: str = "Breakdown") -> Table:
    """Build a table of the impact score factors."""
    table = Table(title=title)
    table.add_column("Factor")
    table.add_column("Weight", justify="right")
    table.add_column("Score", justify="right")
    table.add_column("Weighted", justify="right")

    for name, factor in breakdown.items():
        table.add_row(
            name,
            f"{factor.weight:.2f}",
            f"{factor.raw_score:.2f}",
            f"{factor.weighted_score:.4f}",
        )

    return table


def to_json_records(enriched: list[EnrichedCommit]) -> list[dict[str, Any]]:
    """Serializable records for ``--json`` output."""
    return [
        {
            "sha": item.commit.sha,
            "committed_at": item.commit.committed_at.isoformat(),
            "additions": item.commit.additions,
            "deletions": item.commit.deletions,
            "files_changed": item.commit.files_changed,
            "description": item.parsed.description,
            "is_conventional": item.parsed.is_conventional,
            "is_breaking_change": item.parsed.is_breaking_change,
            **item.to_record(),
        }
        for item in enriched
    ]


__all__ = [
    "AnalyzeOptions",
    "CommitAnalyzer",
    "load_push_event",
    "render_breakdown",
    "to_json_records",
]
