"""Pre-flight validation before the review branch is created."""

from gitreview import display
from gitreview.git import GitOperations
from gitreview.models import ReviewSession


class PreflightError(Exception):
    """A pre-flight check failed."""

    pass


class ReviewAborted(Exception):
    """The user declined a confirmation."""

    pass


class Preflight:
    """Validate branches and prepare a clean working tree."""

    def __init__(self, git: GitOperations, session: ReviewSession):
        self.git = git
        self.session = session

    def run(self) -> None:
        """
        Run every check in order.

        All questions are asked before anything is changed, so a refusal
        at any point leaves the repository exactly as it was.
        """
        self.validate_branches()

        recreate = self.confirm_recreate()
        stash = self.confirm_stash()

        if stash:
            self._stash()
        if recreate:
            self._delete_review_branch()

    def validate_branches(self) -> None:
        """Both branches must resolve to existing refs."""
        for branch in (self.session.from_branch, self.session.to_branch):
            if not self.git.ref_exists(branch):
                raise PreflightError(f"Branch '{branch}' does not exist")

    def confirm_recreate(self) -> bool:
        """Returns True if an existing review branch must be deleted first."""
        review_branch = self.session.review_branch
        if not self.git.branch_exists(review_branch):
            return False

        if self.session.interactive:
            recreate = display.prompt_confirm(
                f"[yellow]Review branch '{review_branch}' already exists. Delete and recreate?[/yellow]",
                default=False,
            )
            if not recreate:
                raise ReviewAborted()

        return True

    def confirm_stash(self) -> bool:
        """Returns True if local changes must be stashed first."""
        status = self.git.status()
        if status.is_clean:
            return False

        if self.session.verbose:
            display.print_debug(f"{len(status.changed_paths)} uncommitted path(s)")

        if self.session.interactive:
            stash = display.prompt_confirm(
                "[yellow]You have uncommitted changes. Stash them and continue?[/yellow]",
                default=True,
            )
            if not stash:
                raise ReviewAborted()

        return True

    def _stash(self) -> None:
        message = f"git-review: stashed before creating {self.session.review_branch}"
        self.session.stashed = self.git.stash(message)
        if self.session.stashed:
            display.print_success("Changes stashed")

    def _delete_review_branch(self) -> None:
        review_branch = self.session.review_branch

        # git refuses to delete the checked-out branch
        if self.git.current_branch == review_branch:
            self.git.checkout_branch(self.session.from_branch)

        self.git.delete_branch(review_branch, force=True)
        display.print_success("Deleted existing review branch")
