"""Branch discovery and selection."""

from gitreview import display
from gitreview.git import GitOperations
from gitreview.models import ReviewSession


class SelectionError(Exception):
    """Branch selection failed."""

    pass


def default_target(branches: list[str]) -> str | None:
    """Suggested target branch: main, then master, then the first branch."""
    for name in ["main", "master"]:
        if name in branches:
            return name
    return branches[0] if branches else None


class BranchSelector:
    """Resolve the source and target branches of a review."""

    def __init__(self, git: GitOperations, session: ReviewSession):
        self.git = git
        self.session = session

    def discover(self) -> list[str]:
        """
        List every branch name visible locally or on a remote.

        Remotes are fetched first; a failed fetch is not an error, the
        locally known branches are still returned.
        """
        fetched = self.git.fetch_all()
        if self.session.verbose:
            display.print_debug("fetched remotes" if fetched else "fetch failed, using local refs")

        branches = self.git.list_branches()
        if self.session.verbose:
            display.print_debug(f"found {len(branches)} branches")

        return branches

    def select(self) -> tuple[str, str]:
        """
        Resolve (from, to).

        Explicit options win. Otherwise the user picks from the discovered
        branches, or the defaults are taken when not interactive. Existence
        is not checked here.
        """
        options = self.session.options
        from_branch = options.from_branch
        to_branch = options.to_branch

        if from_branch and to_branch:
            return from_branch, to_branch

        display.print_step("Fetching branches...")
        branches = self.discover()
        if not branches:
            raise SelectionError("No branches found")

        current = self.session.original_branch

        if not from_branch:
            if self.session.interactive:
                from_branch = display.prompt_branch(
                    branches, "Select source branch (FROM):", default=current
                )
            else:
                from_branch = current

        if not to_branch:
            suggested = default_target(branches)
            if self.session.interactive:
                to_branch = display.prompt_branch(
                    branches, "Select target branch (TO):", default=suggested
                )
            else:
                to_branch = suggested

        return from_branch, to_branch
