"""Tests for the review engine."""

import pytest

from gitreview.engine import EngineError, ReviewEngine, create_engine
from gitreview.git import GitError
from gitreview.models import ReviewOptions, ReviewPhase, ReviewSession


@pytest.fixture
def engine_for(git_ops):
    def _make(**option_kwargs):
        options = ReviewOptions(**option_kwargs)
        session = ReviewSession(options=options, original_branch=git_ops.current_branch)
        return ReviewEngine(git_ops, session)

    return _make


def test_review_branch_name():
    session = ReviewSession(options=ReviewOptions(suffix="-check"), original_branch="main")
    session.from_branch = "feat/x"

    assert session.review_branch == "feat/x-check"


def test_run_non_interactive(engine_for, git_ops):
    engine = engine_for(from_branch="feat/x", to_branch="main", interactive=False)

    assert engine.run()
    assert engine.session.phase == ReviewPhase.COMPLETE
    assert git_ops.current_branch == "feat/x-review"
    assert engine.session.applied_status.modified == ["a.txt"]


def test_run_missing_branch_fails(engine_for, git_ops):
    engine = engine_for(from_branch="feat/x", to_branch="ghost", interactive=False)

    assert not engine.run()
    assert engine.session.phase == ReviewPhase.FAILED
    assert git_ops.current_branch == "feat/x"


def test_run_apply_failure_rolls_back(engine_for, git_ops, monkeypatch):
    def broken_apply(patch):
        raise GitError("Patch would not apply cleanly")

    monkeypatch.setattr(git_ops, "apply_patch", broken_apply)
    engine = engine_for(from_branch="feat/x", to_branch="main", interactive=False)

    assert not engine.run()
    assert engine.session.phase == ReviewPhase.FAILED
    assert git_ops.current_branch == "feat/x"
    assert not git_ops.branch_exists("feat/x-review")


def test_run_aborted_is_success(engine_for, git_ops, repo, answers):
    repo.git.branch("feat/x-review", "main")
    answers(False)
    engine = engine_for(from_branch="feat/x", to_branch="main")

    assert engine.run()
    assert engine.session.phase == ReviewPhase.ABORTED


def test_create_engine_outside_repository(tmp_path):
    with pytest.raises(EngineError, match="Not a git repository"):
        create_engine(ReviewOptions(), repo_path=tmp_path)


def test_create_engine_records_original_branch(temp_git_project):
    engine = create_engine(ReviewOptions(), repo_path=temp_git_project)

    assert engine.session.original_branch == "feat/x"


def test_stash_reminder_names_source_when_started_on_review_branch(
    engine_for, git_ops, repo, temp_git_project, monkeypatch
):
    """Test that the reminder never points at the recreated review branch."""
    from gitreview import display

    reminders = []
    monkeypatch.setattr(display, "print_stash_reminder", reminders.append)
    repo.git.checkout("-b", "feat/x-review", "main")
    (temp_git_project / "b.txt").write_text("work in progress\n")
    engine = engine_for(from_branch="feat/x", to_branch="main", interactive=False)

    assert engine.run()
    assert git_ops.current_branch == "feat/x-review"
    assert reminders == ["feat/x"]


def test_stash_reminder_names_original_branch(engine_for, git_ops, temp_git_project, monkeypatch):
    from gitreview import display

    reminders = []
    monkeypatch.setattr(display, "print_stash_reminder", reminders.append)
    (temp_git_project / "b.txt").write_text("work in progress\n")
    engine = engine_for(from_branch="feat/x", to_branch="main", interactive=False)

    assert engine.run()
    assert reminders == ["feat/x"]
