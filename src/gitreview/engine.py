"""Review engine: runs the phases of a review session in order."""

from pathlib import Path

from gitreview.git import GitOperations, GitError
from gitreview.models import ReviewOptions, ReviewPhase, ReviewSession
from gitreview.phases import BranchSelector, Preflight, Materializer, Finalizer
from gitreview.phases.materialize import MaterializeError
from gitreview.phases.preflight import PreflightError, ReviewAborted
from gitreview.phases.selection import SelectionError
from gitreview import display


class EngineError(Exception):
    """Engine operation failed."""

    pass


class ReviewEngine:
    """
    Orchestrates one review session:

        selection -> preflight -> materialize -> finalize (interactive, opt-in)

    Every step delegates to git and completes before the next one starts.
    """

    def __init__(self, git: GitOperations, session: ReviewSession):
        self.git = git
        self.session = session

        self.selector = BranchSelector(git, session)
        self.preflight = Preflight(git, session)
        self.materializer = Materializer(git, session)
        self.finalizer = Finalizer(git, session)

    def run(self) -> bool:
        """
        Run the review session.

        Returns True on success, on "no differences" and when the user
        cancels; False if any step failed.
        """
        try:
            self._run_selection()

            display.print_header(
                self.session.from_branch,
                self.session.to_branch,
                self.session.review_branch,
            )

            self.session.phase = ReviewPhase.PREFLIGHT
            self.preflight.run()

            self.session.phase = ReviewPhase.MATERIALIZE
            status = self.materializer.materialize()
            if status is None:
                self.session.phase = ReviewPhase.COMPLETE
                self._remind_stash()
                return True

            display.print_review_summary(self.session.review_branch, status)
            display.print_next_steps(self.session.from_branch)

            if self.session.interactive:
                self.session.phase = ReviewPhase.FINALIZE
                self.finalizer.run()
                if self.session.finalized:
                    display.print_done()

            self.session.phase = ReviewPhase.COMPLETE
            self._remind_stash()
            return True

        except ReviewAborted:
            self.session.phase = ReviewPhase.ABORTED
            display.print_info("Aborted")
            return True

        except (SelectionError, PreflightError, MaterializeError, GitError) as e:
            self.session.phase = ReviewPhase.FAILED
            display.print_error(str(e))
            return False

    def _run_selection(self) -> None:
        self.session.phase = ReviewPhase.SELECTION
        from_branch, to_branch = self.selector.select()
        self.session.from_branch = from_branch
        self.session.to_branch = to_branch

    def _remind_stash(self) -> None:
        if not self.session.stashed:
            return

        # A review branch the run started on has been recreated since
        branch = self.session.original_branch
        if branch == self.session.review_branch:
            branch = self.session.from_branch
        display.print_stash_reminder(branch)


def create_engine(
    options: ReviewOptions,
    repo_path: str | Path | None = None,
) -> ReviewEngine:
    """Create a review engine for the repository at repo_path (default: cwd)."""
    try:
        git = GitOperations(repo_path)
    except GitError as e:
        raise EngineError(str(e))

    session = ReviewSession(options=options, original_branch=git.current_branch)
    return ReviewEngine(git, session)
