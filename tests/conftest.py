"""Shared fixtures: real git repositories in temporary directories."""

import tempfile
from pathlib import Path

import pytest
from git import Repo

from gitreview import display
from gitreview.git import GitOperations
from gitreview.models import ReviewOptions, ReviewSession


def configure_identity(repo: Repo) -> None:
    with repo.config_writer() as config:
        config.set_value("user", "name", "Test User")
        config.set_value("user", "email", "test@example.com")
        config.set_value("commit", "gpgsign", "false")


def commit_file(repo: Repo, path: str, content: str, message: str) -> None:
    """Write a file and commit it."""
    file_path = Path(repo.working_tree_dir) / path
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(content)
    repo.index.add([path])
    repo.index.commit(message)


def push_from_other_clone(remote_dir: str, branch: str) -> None:
    """Advance `branch` on the remote from a separate clone."""
    with tempfile.TemporaryDirectory() as other_dir:
        other = Repo.clone_from(remote_dir, other_dir)
        configure_identity(other)
        other.git.checkout("-b", branch, f"origin/{branch}")
        commit_file(other, "other.txt", "someone else\n", "Someone else's work")
        other.git.push("origin", branch)


@pytest.fixture
def temp_git_project():
    """
    A repository with a `main` branch and a `feat/x` branch.

    feat/x modifies a.txt; feat/x is checked out and the tree is clean.
    """
    with tempfile.TemporaryDirectory() as temp_dir:
        project_path = Path(temp_dir)

        repo = Repo.init(project_path)
        configure_identity(repo)

        (project_path / "a.txt").write_text("alpha\n")
        (project_path / "b.txt").write_text("bravo\n")
        repo.index.add(["a.txt", "b.txt"])
        repo.index.commit("Initial commit")
        repo.git.branch("-M", "main")

        repo.git.checkout("-b", "feat/x")
        commit_file(repo, "a.txt", "alpha\nalpha two\n", "Change a")

        yield project_path


@pytest.fixture
def repo(temp_git_project):
    return Repo(temp_git_project)


@pytest.fixture
def git_ops(temp_git_project):
    return GitOperations(temp_git_project)


@pytest.fixture
def make_session(git_ops):
    """Build a ReviewSession with from/to already resolved."""

    def _make(from_branch="feat/x", to_branch="main", **option_overrides):
        options = ReviewOptions(
            from_branch=from_branch,
            to_branch=to_branch,
            **option_overrides,
        )
        session = ReviewSession(options=options, original_branch=git_ops.current_branch)
        session.from_branch = from_branch
        session.to_branch = to_branch
        return session

    return _make


@pytest.fixture
def answers(monkeypatch):
    """
    Script the answers to display.prompt_confirm.

    Usage: answers(True, False) - each confirmation consumes the next value.
    The list of asked messages is available as `answers.asked`.
    """

    class Answers:
        def __init__(self):
            self.queue = []
            self.asked = []

        def __call__(self, *values):
            self.queue.extend(values)
            return self

        def confirm(self, message, default=True):
            self.asked.append(message)
            if not self.queue:
                raise AssertionError(f"Unexpected confirmation: {message}")
            return self.queue.pop(0)

    scripted = Answers()
    monkeypatch.setattr(display, "prompt_confirm", scripted.confirm)
    monkeypatch.setattr(display, "wait_for_enter", lambda message: None)
    return scripted
