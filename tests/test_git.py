import pytest
from commit_impact.git import GitError, GitRepo, parse_log_output

LOG_OUTPUT = (
    "\x1eabc123\x1fOcto Cat\x1focto@example.com\x1f2024-01-15T10:00:00+01:00\x1f"
    "feat: add login\n\nBody text #5\n\x1d\n\n"
    "10\t2\tapp/login.py\n"
    "-\t-\tassets/logo.png\n"
    "\x1edef456\x1fHubot\x1fhubot@example.com\x1f2024-01-16T02:30:00Z\x1f"
    "Merge branch 'dev'\n\x1d\n"
)


def test_parse_log_output():
    commits = parse_log_output(LOG_OUTPUT)

    assert [c.sha for c in commits] == ["abc123", "def456"]

    first = commits[0]
    assert first.message == "feat: add login\n\nBody text #5"
    assert first.author_name == "Octo Cat"
    assert first.additions == 10
    assert first.deletions == 2
    assert first.files_changed == 2
    assert first.files[1].additions == 0
    assert first.committed_at.hour == 10

    merge = commits[1]
    assert merge.files == []
    assert merge.lines_changed == 0


def test_parse_empty_output():
    assert parse_log_output("") == []


def test_get_commits(git_repo):
    commits = GitRepo(git_repo).get_commits()

    assert [c.message.splitlines()[0] for c in commits] == [
        "feat(app): add application skeleton",
        "Fix crash on startup",
        "docs: add readme",
    ]
    assert commits[0].additions == 40
    assert commits[1].deletions == 10
    assert commits[1].files_changed == 2
    assert commits[1].committed_at.hour == 2


def test_get_commits_limits_to_most_recent(git_repo):
    commits = GitRepo(git_repo).get_commits(max_commits=2)
    assert [c.message for c in commits] == [
        "Fix crash on startup\n\nCloses #12 and PROJ-7",
        "docs: add readme",
    ]


def test_current_branch(git_repo):
    assert GitRepo(git_repo).get_current_branch() == "main"


def test_not_a_repository(tmp_path):
    repo = GitRepo(tmp_path)
    assert not repo.is_repository()
    with pytest.raises(GitError):
        repo.check_repository()
