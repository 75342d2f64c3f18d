"""Tests for creating the review branch."""

import pytest

from gitreview.phases.materialize import Materializer, MaterializeError
from conftest import commit_file


def test_review_branch_holds_uncommitted_diff(git_ops, make_session, repo, temp_git_project):
    """Test the review branch: target's commit, source's content, nothing staged."""
    main_sha = repo.heads["main"].commit.hexsha
    session = make_session()

    status = Materializer(git_ops, session).materialize()

    assert git_ops.current_branch == "feat/x-review"
    assert repo.head.commit.hexsha == main_sha
    assert (temp_git_project / "a.txt").read_text() == "alpha\nalpha two\n"
    assert status.modified == ["a.txt"]
    assert status.staged == []
    assert session.applied_status is status


def test_dirty_paths_match_branch_delta(git_ops, make_session, repo, temp_git_project):
    """Test that exactly the files changed between the branches are dirty."""
    commit_file(repo, "b.txt", "", "Empty b")
    (temp_git_project / "a.txt").unlink()
    repo.index.remove(["a.txt"])
    repo.index.commit("Remove a")
    commit_file(repo, "docs/c.md", "# c\n", "Add c")

    status = Materializer(git_ops, make_session()).materialize()

    assert status.changed_paths == git_ops.changed_files("main", "feat/x")
    assert status.deleted == ["a.txt"]
    assert status.untracked == ["docs/c.md"]
    assert status.modified == ["b.txt"]


def test_no_differences(git_ops, make_session, repo):
    """Test that identical branches leave no review branch behind."""
    repo.git.checkout("-b", "feat/same", "main")
    session = make_session(from_branch="feat/same")

    assert Materializer(git_ops, session).materialize() is None

    assert git_ops.current_branch == "feat/same"
    assert not git_ops.branch_exists("feat/same-review")


def test_apply_failure_rolls_back(git_ops, make_session, repo, temp_git_project):
    """Test that a failed apply returns to the source branch and drops the review branch."""
    commit_file(repo, "c.txt", "from feat/x\n", "Add c")
    repo.git.checkout("main")
    # An untracked file in the way makes the new-file hunk fail
    (temp_git_project / "c.txt").write_text("in the way\n")

    with pytest.raises(MaterializeError, match="Failed to apply patch"):
        Materializer(git_ops, make_session()).materialize()

    assert git_ops.current_branch == "feat/x"
    assert not git_ops.branch_exists("feat/x-review")
    assert (temp_git_project / "c.txt").read_text() == "from feat/x\n"


def test_apply_failure_rollback_with_patched_apply(git_ops, make_session, monkeypatch):
    from gitreview.git import GitError

    def broken_apply(patch):
        raise GitError("Patch would not apply cleanly: conflict")

    monkeypatch.setattr(git_ops, "apply_patch", broken_apply)

    with pytest.raises(MaterializeError, match="conflict"):
        Materializer(git_ops, make_session()).materialize()

    assert git_ops.current_branch == "feat/x"
    assert not git_ops.branch_exists("feat/x-review")


def test_custom_suffix(git_ops, make_session):
    session = make_session(suffix="--wip")

    Materializer(git_ops, session).materialize()

    assert git_ops.current_branch == "feat/x--wip"


def test_nested_paths_with_noprefix_config(git_ops, make_session, repo, temp_git_project):
    """Test that diff.noprefix does not break applying changes in subdirectories."""
    commit_file(repo, "docs/c.md", "# c\n", "Add c")
    with repo.config_writer() as config:
        config.set_value("diff", "noprefix", "true")

    status = Materializer(git_ops, make_session()).materialize()

    assert git_ops.current_branch == "feat/x-review"
    assert status.untracked == ["docs/c.md"]
    assert status.modified == ["a.txt"]
