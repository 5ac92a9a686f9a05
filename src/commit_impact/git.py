"""Git history reader using subprocess."""

from __future__ import annotations

import subprocess
from pathlib import Path

from .github import CommitData, FileChange, parse_timestamp

# Each commit starts with RECORD_SEP; the header ends with HEADER_END and is
# followed by its --numstat lines.
RECORD_SEP = "\x1e"
FIELD_SEP = "\x1f"
HEADER_END = "\x1d"

LOG_FORMAT = "%x1e%H%x1f%an%x1f%ae%x1f%aI%x1f%B%x1d"


class GitError(Exception):
    """Error during git operations."""

    pass


class GitRepo:
    """Wrapper for git operations using subprocess."""

    def __init__(self, path: str | Path | None = None) -> None:
        """Initialize git repository wrapper.

        Args:
            path: Path to the repository (defaults to current directory)
        """
        self.path = Path(path) if path else Path.cwd()

    def _run(self, *args: str, check: bool = True) -> subprocess.CompletedProcess[str]:
        """Run a git command.

        Raises:
            GitError: If command fails and check is True
        """
        cmd = ["git", *args]
        try:
            return subprocess.run(
                cmd,
                cwd=self.path,
                check=check,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except FileNotFoundError as e:
            raise GitError(f"Cannot run git in {self.path}: {e}") from e
        except subprocess.CalledProcessError as e:
            raise GitError(
                f"Command failed: {' '.join(cmd)}\nExit code: {e.returncode}\nStderr: {e.stderr}"
            ) from e

    def is_repository(self) -> bool:
        """Check if this is a valid git repository."""
        try:
            self._run("rev-parse", "--git-dir")
            return True
        except GitError:
            return False

    def check_repository(self) -> None:
        """Check if this is a valid git repository.

        Raises:
            GitError: If not a git repository
        """
        if not self.is_repository():
            raise GitError(f"Not a git repository: {self.path}")

    def get_current_branch(self) -> str:
        """Get the current branch name."""
        result = self._run("rev-parse", "--abbrev-ref", "HEAD")
        return result.stdout.strip()

    def get_commits(
        self,
        max_commits: int | None = None,
        branch: str | None = None,
    ) -> list[CommitData]:
        """Get commits with their line statistics.

        Args:
            max_commits: Only the most recent N commits
            branch: Branch or revision to read (defaults to HEAD)

        Returns:
            Commits, oldest first
        """
        args = ["log", "--reverse", "--numstat", "--no-color", f"--format={LOG_FORMAT}"]
        if max_commits and max_commits > 0:
            args.append(f"--max-count={max_commits}")
        args.append(branch or "HEAD")

        result = self._run(*args)
        return parse_log_output(result.stdout)


def parse_log_output(output: str) -> list[CommitData]:
    """Parse ``git log --numstat`` output written with ``LOG_FORMAT``."""
    commits = []

    for record in output.split(RECORD_SEP):
        if not record.strip():
            continue

        header, _, numstat = record.partition(HEADER_END)
        sha, author_name, author_email, date, message = header.split(FIELD_SEP, 4)
        files = [_parse_numstat_line(line) for line in numstat.splitlines() if line.strip()]

        commits.append(
            CommitData(
                sha=sha,
                message=message.strip(),
                author_name=author_name,
                author_email=author_email,
                committed_at=parse_timestamp(date),
                additions=sum(file.additions for file in files),
                deletions=sum(file.deletions for file in files),
                files=files,
            )
        )

    return commits


def _parse_numstat_line(line: str) -> FileChange:
    # Binary files report "-" for both counts
    added, deleted, path = line.split("\t", 2)
    additions = int(added) if added.isdigit() else 0
    deletions = int(deleted) if deleted.isdigit() else 0
    return FileChange(
        filename=path,
        additions=additions,
        deletions=deletions,
        changes=additions + deletions,
    )
