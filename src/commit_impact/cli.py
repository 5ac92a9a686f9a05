"""CLI interface for commit-impact."""

from __future__ import annotations

import json
import sys
from collections.abc import Callable
from typing import Any

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .analyzer import (
    AnalyzeOptions,
    CommitAnalyzer,
    load_push_event,
    render_breakdown,
    to_json_records,
)
from .categorizer import categorization_confidence
from .impact import ImpactScoreCalculator
from .parser import parse_commit_message

console = Console()
error_console = Console(stderr=True)


def _read_message(message: str) -> str:
    """Use stdin when the message argument is "-"."""
    if message == "-":
        return click.get_text_stream("stdin").read()
    return message


def _run(action: Callable[[], None], verbose: bool = False) -> None:
    """Run a command body, reporting any error and exiting with status 1."""
    try:
        action()
    except Exception as e:
        if verbose:
            error_console.print_exception()
        else:
            error_console.print(f"\n[red]❌ Error: {escape(str(e))}[/]")
        sys.exit(1)


def _echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


def _parsed_fields(message: str) -> dict[str, Any]:
    parsed = parse_commit_message(message)
    fields: dict[str, Any] = {
        "type": parsed.type.value,
        "label": parsed.type.label,
        "scope": parsed.scope,
        "description": parsed.description,
        "external_refs": [ref.to_dict() for ref in parsed.external_refs],
        "is_breaking_change": parsed.is_breaking_change,
        "is_conventional": parsed.is_conventional,
        "is_merge": parsed.is_merge,
    }
    if not parsed.is_conventional and not parsed.is_merge:
        fields["confidence"] = categorization_confidence(message)
    return fields


@click.group()
@click.version_option(__version__)
def main() -> None:
    """Classify commits and score their impact.

    \b
    Examples:
      # Parse a single message
      commit-impact parse "feat(auth): add OAuth login #123"

      # Score a commit
      commit-impact score "fix: crash on login" --additions 12 --deletions 3 --files 2 --hour 14

      # Analyze the last 50 commits of the current repository
      commit-impact analyze --max-commits 50

      # Enrich the commits of a push-event payload, refreshing stats from GitHub
      commit-impact push-event payload.json --fetch
    """


@main.command()
@click.argument("message")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
def parse(message: str, as_json: bool) -> None:
    """Parse a commit MESSAGE ("-" reads it from stdin)."""

    def action() -> None:
        fields = _parsed_fields(_read_message(message))
        if as_json:
            _echo_json(fields)
            return

        table = Table(show_header=False)
        table.add_column("Field", style="cyan")
        table.add_column("Value")
        for name, value in fields.items():
            if name == "external_refs":
                value = ", ".join(f"{ref['type']}:{ref['id']}" for ref in value)
            table.add_row(name, escape("" if value is None else str(value)))
        console.print(table)

    _run(action)


@main.command()
@click.argument("message")
@click.option("-a", "--additions", type=click.IntRange(min=0), default=0, help="Lines added")
@click.option("-d", "--deletions", type=click.IntRange(min=0), default=0, help="Lines deleted")
@click.option(
    "-f", "--files", "files_changed", type=click.IntRange(min=0), default=0, help="Files changed"
)
@click.option(
    "--hour",
    type=click.IntRange(0, 23),
    default=12,
    help="Hour of day the commit was made (0-23)",
)
@click.option(
    "--repo-avg",
    type=float,
    help="Average lines changed per commit in the repository",
)
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
def score(
    message: str,
    additions: int,
    deletions: int,
    files_changed: int,
    hour: int,
    repo_avg: float | None,
    as_json: bool,
) -> None:
    """Calculate the impact score of a commit MESSAGE ("-" reads it from stdin)."""

    def action() -> None:
        calculator = ImpactScoreCalculator(
            parsed=parse_commit_message(_read_message(message)),
            additions=additions,
            deletions=deletions,
            files_changed=files_changed,
            committed_hour=hour,
            repository_avg_lines=repo_avg,
        )
        impact_score = calculator.score()
        breakdown = calculator.breakdown()

        if as_json:
            _echo_json(
                {
                    "impact_score": impact_score,
                    "breakdown": {
                        name: {
                            "weight": factor.weight,
                            "score": factor.raw_score,
                            "weighted": factor.weighted_score,
                        }
                        for name, factor in breakdown.items()
                    },
                }
            )
            return

        console.print(render_breakdown(breakdown))
        console.print(f"[bold green]Impact score: {impact_score:.2f}[/]")

    _run(action)


@main.command()
@click.option("--repo", type=click.Path(file_okay=False), help="Repository path (defaults to cwd)")
@click.option("-b", "--branch", help="Branch to analyze (defaults to current branch)")
@click.option("--max-commits", type=click.IntRange(min=1), help="Analyze only the last N commits")
@click.option("--json", "as_json", is_flag=True, help="Print enriched commits as JSON")
@click.option("-v", "--verbose", is_flag=True, help="Show the score breakdown of every commit")
@click.option("-q", "--quiet", is_flag=True, help="Suppress informational output")
def analyze(
    repo: str | None,
    branch: str | None,
    max_commits: int | None,
    as_json: bool,
    verbose: bool,
    quiet: bool,
) -> None:
    """Classify and score the commits of a local git repository."""
    options = AnalyzeOptions(
        repo=repo,
        branch=branch,
        max_commits=max_commits,
        verbose=verbose,
        quiet=quiet,
    )

    def action() -> None:
        # Status goes to stderr so JSON output stays parseable
        analyzer = CommitAnalyzer(options, Console(stderr=as_json, quiet=quiet))
        enriched = analyzer.analyze_repository()
        if as_json:
            _echo_json(to_json_records(enriched))
        else:
            analyzer.report(enriched)

    _run(action, verbose)


@main.command("push-event")
@click.argument("payload", type=click.Path(exists=True, dir_okay=False))
@click.option("--fetch", is_flag=True, help="Fetch line statistics from the GitHub API")
@click.option("--token", help="GitHub token (defaults to GITHUB_TOKEN env var)")
@click.option(
    "--repo-avg",
    type=float,
    help="Average lines changed per commit in the repository",
)
@click.option("--json", "as_json", is_flag=True, help="Print enriched commits as JSON")
@click.option("-v", "--verbose", is_flag=True, help="Show the score breakdown of every commit")
@click.option("-q", "--quiet", is_flag=True, help="Suppress informational output")
def push_event(
    payload: str,
    fetch: bool,
    token: str | None,
    repo_avg: float | None,
    as_json: bool,
    verbose: bool,
    quiet: bool,
) -> None:
    """Classify and score the commits of a GitHub push-event PAYLOAD file."""
    options = AnalyzeOptions(
        fetch=fetch,
        github_token=token,
        repository_avg_lines=repo_avg,
        verbose=verbose,
        quiet=quiet,
    )

    def action() -> None:
        analyzer = CommitAnalyzer(options, Console(stderr=as_json, quiet=quiet))
        enriched = analyzer.analyze_push_event(load_push_event(payload))
        if as_json:
            _echo_json(to_json_records(enriched))
        else:
            analyzer.report(enriched)

    _run(action, verbose)


if __name__ == "__main__":
    main()
