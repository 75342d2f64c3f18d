"""Create the review branch holding the branch delta as uncommitted changes."""

from gitreview import display
from gitreview.git import GitOperations, GitError
from gitreview.models import ReviewSession, WorkingTreeStatus


class MaterializeError(Exception):
    """The review branch could not be populated."""

    pass


class Materializer:
    """Build the review branch from the target branch plus the `to..from` diff."""

    def __init__(self, git: GitOperations, session: ReviewSession):
        self.git = git
        self.session = session

    def materialize(self) -> WorkingTreeStatus | None:
        """
        Create the review branch and apply the diff without committing.

        Returns the resulting working tree status, or None when the two
        branches have no differences (the review branch is removed again).
        Raises MaterializeError after rolling back if the diff won't apply.
        """
        from_branch = self.session.from_branch
        to_branch = self.session.to_branch
        review_branch = self.session.review_branch

        display.print_step("Creating review branch...")
        self.git.checkout_branch(to_branch)
        self.git.create_and_checkout_branch(review_branch)

        display.print_step("Generating diff...")
        patch = self.git.get_raw_diff(to_branch, from_branch)
        if self.session.verbose:
            display.print_debug(f"git diff {to_branch}..{from_branch}: {len(patch)} bytes")

        if not patch.strip():
            display.print_warning(f"No differences found between {from_branch} and {to_branch}")
            self._discard_review_branch()
            return None

        display.print_step("Applying changes...")
        try:
            self.git.apply_patch(patch)
        except GitError as e:
            self._discard_review_branch(force=True)
            raise MaterializeError(f"Failed to apply patch\n{e}")

        status = self.git.status()
        self.session.applied_status = status
        if self.session.verbose:
            display.print_debug(
                f"{len(status.modified)} modified, {status.new_count} new, "
                f"{len(status.deleted)} deleted"
            )

        return status

    def _discard_review_branch(self, force: bool = False) -> None:
        """Return to the source branch and drop the review branch."""
        self.git.checkout_branch(self.session.from_branch, force=force)
        self.git.delete_branch(self.session.review_branch, force=True)
        if self.session.verbose:
            display.print_debug(f"deleted {self.session.review_branch}")
