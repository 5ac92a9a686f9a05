"""GitHub push-event payloads and REST API access."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

import httpx


class GitHubError(Exception):
    """Error talking to the GitHub API."""

    pass


class PayloadError(Exception):
    """A webhook payload could not be read."""

    pass


def parse_timestamp(value: str | None) -> datetime:
    """Parse a GitHub ISO-8601 timestamp, keeping its UTC offset.

    Missing values default to the current time in UTC.
    """
    if not value:
        return datetime.now(timezone.utc)
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(value)
    except ValueError as e:
        raise PayloadError(f"Invalid timestamp: {value}") from e


@dataclass
class FileChange:
    """A file touched by a commit, as reported by the API."""

    filename: str
    status: str = "modified"
    additions: int = 0
    deletions: int = 0
    changes: int = 0


@dataclass
class CommitData:
    """A commit as received from a webhook, the API or local git."""

    sha: str
    message: str
    author_name: str
    author_email: str
    committed_at: datetime
    url: str = ""
    distinct: bool = True
    additions: int = 0
    deletions: int = 0
    files: list[FileChange] | None = None

    @classmethod
    def from_webhook(cls, data: dict[str, Any]) -> CommitData:
        """Create from a commit entry of a push-event payload.

        Push payloads carry no line statistics, so additions and deletions
        are zero and the file list is unknown.
        """
        author = data.get("author") or {}
        return cls(
            sha=data.get("id") or data.get("sha") or "",
            message=data.get("message") or "",
            author_name=author.get("name") or author.get("login") or "Unknown",
            author_email=author.get("email") or "",
            committed_at=parse_timestamp(data.get("timestamp")),
            url=data.get("url") or "",
            distinct=data.get("distinct", True),
        )

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> CommitData:
        """Create from a ``GET /repos/{owner}/{repo}/commits/{sha}`` response."""
        commit = data.get("commit") or {}
        author = commit.get("author") or {}
        stats = data.get("stats") or {}

        files = None
        if isinstance(data.get("files"), list):
            files = [
                FileChange(
                    filename=item.get("filename") or "",
                    status=item.get("status") or "modified",
                    additions=item.get("additions") or 0,
                    deletions=item.get("deletions") or 0,
                    changes=item.get("changes") or 0,
                )
                for item in data["files"]
            ]

        return cls(
            sha=data.get("sha") or "",
            message=commit.get("message") or "",
            author_name=author.get("name") or "Unknown",
            author_email=author.get("email") or "",
            committed_at=parse_timestamp(author.get("date")),
            url=data.get("html_url") or "",
            additions=stats.get("additions") or 0,
            deletions=stats.get("deletions") or 0,
            files=files,
        )

    @property
    def files_changed(self) -> int:
        return len(self.files) if self.files is not None else 0

    @property
    def lines_changed(self) -> int:
        return self.additions + self.deletions


@dataclass
class RepositoryData:
    """Repository section of a push-event payload."""

    id: str
    name: str
    full_name: str
    description: str | None = None
    default_branch: str = "main"
    language: str | None = None
    is_private: bool = False
    html_url: str = ""

    @classmethod
    def from_webhook(cls, data: dict[str, Any]) -> RepositoryData:
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name") or "",
            full_name=data.get("full_name") or "",
            description=data.get("description"),
            default_branch=data.get("default_branch") or "main",
            language=data.get("language"),
            is_private=data.get("private", False),
            html_url=data.get("html_url") or "",
        )

    @property
    def owner_and_name(self) -> tuple[str, str]:
        owner, _, name = self.full_name.partition("/")
        return owner, name


@dataclass
class PushEvent:
    """A GitHub push-event webhook payload."""

    ref: str
    before: str
    after: str
    repository: RepositoryData
    pusher_name: str = ""
    pusher_email: str = ""
    sender_login: str = ""
    sender_id: str = ""
    commits: list[CommitData] = field(default_factory=list)
    created: bool = False
    deleted: bool = False
    forced: bool = False

    @classmethod
    def from_webhook(cls, payload: dict[str, Any]) -> PushEvent:
        if not isinstance(payload, dict):
            raise PayloadError("Push event payload must be a JSON object")

        pusher = payload.get("pusher") or {}
        sender = payload.get("sender") or {}

        return cls(
            ref=payload.get("ref") or "",
            before=payload.get("before") or "",
            after=payload.get("after") or "",
            repository=RepositoryData.from_webhook(payload.get("repository") or {}),
            pusher_name=pusher.get("name") or "",
            pusher_email=pusher.get("email") or "",
            sender_login=sender.get("login") or "",
            sender_id=str(sender.get("id", "")),
            commits=[CommitData.from_webhook(item) for item in payload.get("commits") or []],
            created=payload.get("created", False),
            deleted=payload.get("deleted", False),
            forced=payload.get("forced", False),
        )

    @property
    def branch(self) -> str:
        """Branch name from the ref (refs/heads/main -> main)."""
        return self.ref.replace("refs/heads/", "", 1)

    @property
    def is_default_branch(self) -> bool:
        return self.branch == self.repository.default_branch

    @property
    def has_commits(self) -> bool:
        """Whether there is anything to process (branch deletions have nothing)."""
        return len(self.commits) > 0 and not self.deleted

    def distinct_commits(self) -> list[CommitData]:
        """Commits not previously pushed to the repository."""
        return [commit for commit in self.commits if commit.distinct]


class GitHubClient:
    """Minimal GitHub REST client for commit statistics."""

    BASE_URL = "https://api.github.com/"
    ENV_VAR_NAME = "GITHUB_TOKEN"

    def __init__(
        self,
        token: str | None = None,
        base_url: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            token: GitHub token (defaults to GITHUB_TOKEN env var)
            base_url: API base URL, for GitHub Enterprise
            transport: Custom httpx transport

        Raises:
            ValueError: If no token is provided or found in environment
        """
        self.token = token or os.environ.get(self.ENV_VAR_NAME)
        if not self.token:
            raise ValueError(
                "GitHub token is required. "
                f"Set {self.ENV_VAR_NAME} environment variable or pass it as an option."
            )
        self._client = httpx.Client(
            base_url=base_url or self.BASE_URL,
            headers={
                "Authorization": f"Bearer {self.token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
            },
            timeout=30.0,
            transport=transport,
        )

    def get_commit(self, owner: str, repo: str, sha: str) -> CommitData:
        """Fetch a commit with its line and file statistics.

        Raises:
            GitHubError: If the request fails
        """
        try:
            response = self._client.get(f"repos/{owner}/{repo}/commits/{sha}")
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise GitHubError(
                f"GitHub API returned {e.response.status_code} for commit {sha}"
            ) from e
        except httpx.HTTPError as e:
            raise GitHubError(f"GitHub API request failed for commit {sha}: {e}") from e

        return CommitData.from_api(response.json())

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
