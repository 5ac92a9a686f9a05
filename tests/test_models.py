import pytest
from commit_impact.models import CommitType, ExternalReference, ParsedCommitData


def test_from_string_is_case_insensitive():
    assert CommitType.from_string("FEAT") is CommitType.FEAT
    assert CommitType.from_string("Fix") is CommitType.FIX


@pytest.mark.parametrize("value", ["", "feature", "bugfix", "wip", "  feat"])
def test_from_string_falls_back_to_other(value):
    assert CommitType.from_string(value) is CommitType.OTHER


def test_weight_ordering():
    assert CommitType.FEAT.weight > CommitType.FIX.weight
    assert CommitType.FIX.weight > CommitType.REFACTOR.weight
    assert CommitType.REFACTOR.weight == CommitType.PERF.weight
    assert CommitType.PERF.weight > CommitType.TEST.weight
    assert CommitType.TEST.weight > CommitType.DOCS.weight
    assert CommitType.DOCS.weight > CommitType.CHORE.weight
    assert CommitType.CHORE.weight == CommitType.STYLE.weight


def test_weights_stay_in_range():
    for commit_type in CommitType:
        assert 0.3 <= commit_type.weight <= 1.0


def test_options_lists_every_type():
    options = CommitType.options()
    assert len(options) == 12
    assert options["ci"] == "CI/CD"
    assert options["fix"] == "Bug Fix"


def test_conventional_constructor():
    data = ParsedCommitData.conventional(
        type=CommitType.FEAT,
        scope="auth",
        description="add login",
        external_refs=(ExternalReference("github", "#123"),),
        is_breaking_change=True,
    )

    assert data.type is CommitType.FEAT
    assert data.scope == "auth"
    assert data.is_breaking_change
    assert data.is_conventional
    assert not data.is_merge


def test_inferred_constructor():
    data = ParsedCommitData.inferred(type=CommitType.FIX, description="fix login bug")

    assert data.scope is None
    assert not data.is_conventional
    assert not data.is_breaking_change
    assert not data.is_merge


def test_merge_constructor():
    data = ParsedCommitData.merge(
        description="Merge branch feature",
        external_refs=(ExternalReference("github", "#456"),),
    )

    assert data.type is CommitType.OTHER
    assert data.is_merge
    assert not data.is_conventional
    assert not data.is_breaking_change
    assert data.has_external_refs


def test_to_record():
    data = ParsedCommitData.conventional(
        type=CommitType.FEAT,
        scope="api",
        description="new endpoint",
        external_refs=(ExternalReference("github", "#123"),),
    )

    assert data.to_record() == {
        "commit_type": "feat",
        "scope": "api",
        "external_refs": [{"type": "github", "id": "#123"}],
        "is_merge": False,
    }


def test_to_record_stores_none_for_no_refs():
    data = ParsedCommitData.conventional(type=CommitType.FIX, scope=None, description="fix bug")
    assert data.to_record()["external_refs"] is None
    assert not data.has_external_refs


def test_refs_by_kind():
    data = ParsedCommitData.inferred(
        type=CommitType.FIX,
        description="fix",
        external_refs=(
            ExternalReference("github", "#1"),
            ExternalReference("jira", "PROJ-2"),
            ExternalReference("github", "#3"),
        ),
    )

    assert [ref.id for ref in data.refs_by_kind("github")] == ["#1", "#3"]
    assert data.refs_by_kind("linear") == []
