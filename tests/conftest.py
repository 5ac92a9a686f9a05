import os
import shutil
import subprocess
from pathlib import Path

import pytest

GIT_ENV = {
    "GIT_AUTHOR_NAME": "Test Author",
    "GIT_AUTHOR_EMAIL": "author@example.com",
    "GIT_COMMITTER_NAME": "Test Author",
    "GIT_COMMITTER_EMAIL": "author@example.com",
    "GIT_CONFIG_GLOBAL": os.devnull,
    "GIT_CONFIG_NOSYSTEM": "1",
}


def _run_git(args, cwd: Path, date: str | None = None) -> subprocess.CompletedProcess[str]:
    env = {**os.environ, **GIT_ENV}
    if date:
        env["GIT_AUTHOR_DATE"] = date
        env["GIT_COMMITTER_DATE"] = date
    return subprocess.run(
        ["git", *args],
        cwd=str(cwd),
        env=env,
        text=True,
        capture_output=True,
        check=True,
    )


@pytest.fixture
def git_repo(tmp_path):
    """A small repository with three commits on branch main."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    repo = tmp_path / "repo"
    repo.mkdir()
    _run_git(["init", "-q", "-b", "main"], repo)

    (repo / "app.py").write_text("".join(f"line {i}\n" for i in range(40)), encoding="utf-8")
    _run_git(["add", "."], repo)
    _run_git(
        ["commit", "-q", "-m", "feat(app): add application skeleton"],
        repo,
        date="2024-01-15T10:00:00+01:00",
    )

    (repo / "app.py").write_text("".join(f"line {i}\n" for i in range(30)), encoding="utf-8")
    (repo / "logo.bin").write_bytes(b"\x00\x01\x02binary")
    _run_git(["add", "."], repo)
    _run_git(
        ["commit", "-q", "-m", "Fix crash on startup\n\nCloses #12 and PROJ-7"],
        repo,
        date="2024-01-16T02:30:00+01:00",
    )

    (repo / "README.md").write_text("# App\n", encoding="utf-8")
    _run_git(["add", "."], repo)
    _run_git(
        ["commit", "-q", "-m", "docs: add readme"],
        repo,
        date="2024-01-16T18:00:00+01:00",
    )

    return repo
