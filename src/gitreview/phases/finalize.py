"""Finalize: commit the staged review and replace the source branch with it."""

from typing import Callable

from gitreview import display
from gitreview.git import GitOperations, GitError
from gitreview.models import FinalizeState, ReviewSession


class Finalizer:
    """
    Linear state machine for the finalize sub-flow.

    Each state has one handler returning the next state. The flow only
    moves forward and stops at END or END_WITH_HINT.
    """

    def __init__(self, git: GitOperations, session: ReviewSession):
        self.git = git
        self.session = session
        self.state = FinalizeState.AWAIT_CONFIRM_WAIT
        self.commit_message = ""
        self.staged_count = 0

        self._handlers: dict[FinalizeState, Callable[[], FinalizeState]] = {
            FinalizeState.AWAIT_CONFIRM_WAIT: self._await_confirm_wait,
            FinalizeState.BLOCK_FOR_USER_INPUT: self._block_for_user_input,
            FinalizeState.CHECK_STAGED: self._check_staged,
            FinalizeState.AWAIT_CONFIRM_FINALIZE: self._await_confirm_finalize,
            FinalizeState.PROMPT_COMMIT_MESSAGE: self._prompt_commit_message,
            FinalizeState.COMMIT: self._commit,
            FinalizeState.SWITCH_TO_FROM: self._switch_to_from,
            FinalizeState.HARD_RESET_FROM_TO_REVIEW: self._hard_reset,
            FinalizeState.DELETE_REVIEW_BRANCH: self._delete_review_branch,
            FinalizeState.AWAIT_CONFIRM_PUSH: self._await_confirm_push,
            FinalizeState.PUSH: self._push,
        }

    def run(self) -> FinalizeState:
        """Drive the state machine to a terminal state and return it."""
        while not self.state.is_terminal:
            previous = self.state
            self.state = self._handlers[previous]()
            if self.session.verbose:
                display.print_debug(f"finalize: {previous.value} -> {self.state.value}")
        return self.state

    def _await_confirm_wait(self) -> FinalizeState:
        wait = display.prompt_confirm(
            "Wait for review and finalize changes (commit + replace branch)?",
            default=False,
        )
        return FinalizeState.BLOCK_FOR_USER_INPUT if wait else FinalizeState.END

    def _block_for_user_input(self) -> FinalizeState:
        display.wait_for_enter("Review your changes in the editor, then press Enter to continue...")
        return FinalizeState.CHECK_STAGED

    def _check_staged(self) -> FinalizeState:
        self.staged_count = len(self.git.status().staged)

        if self.staged_count == 0:
            display.print_no_staged_hint(self.session.from_branch, self.session.review_branch)
            return FinalizeState.END_WITH_HINT

        display.console.print()
        display.print_success(f"Found {self.staged_count} staged file(s)")
        return FinalizeState.AWAIT_CONFIRM_FINALIZE

    def _await_confirm_finalize(self) -> FinalizeState:
        finalize = display.prompt_confirm(
            f"Replace '{self.session.from_branch}' with reviewed changes?",
            default=True,
        )
        if not finalize:
            display.print_kept_on_review_hint(self.session.from_branch)
            return FinalizeState.END_WITH_HINT
        return FinalizeState.PROMPT_COMMIT_MESSAGE

    def _prompt_commit_message(self) -> FinalizeState:
        self.commit_message = display.prompt_commit_message()
        return FinalizeState.COMMIT

    def _commit(self) -> FinalizeState:
        display.console.print()
        display.print_step("Committing changes...")
        sha = self.git.commit(self.commit_message)
        display.print_success("Changes committed")
        if self.session.verbose:
            display.print_debug(f"commit {sha[:8]}")
        return FinalizeState.SWITCH_TO_FROM

    def _switch_to_from(self) -> FinalizeState:
        display.print_step("Replacing original branch...")
        # Unstaged leftovers on the review branch are discarded with it
        self.git.checkout_branch(self.session.from_branch, force=True)
        return FinalizeState.HARD_RESET_FROM_TO_REVIEW

    def _hard_reset(self) -> FinalizeState:
        self.git.reset_hard(self.session.review_branch)
        self.session.finalized = True
        display.print_success(f"Replaced '{self.session.from_branch}' with reviewed changes")
        return FinalizeState.DELETE_REVIEW_BRANCH

    def _delete_review_branch(self) -> FinalizeState:
        self.git.delete_branch(self.session.review_branch, force=True)
        display.print_success(f"Deleted review branch '{self.session.review_branch}'")
        return FinalizeState.AWAIT_CONFIRM_PUSH

    def _await_confirm_push(self) -> FinalizeState:
        push = display.prompt_confirm(
            "Push changes to remote? ([yellow]will use --force-with-lease[/yellow])",
            default=False,
        )
        return FinalizeState.PUSH if push else FinalizeState.END

    def _push(self) -> FinalizeState:
        display.console.print()
        display.print_step("Pushing to remote...")
        try:
            self.git.push_force_with_lease(self.session.from_branch)
            self.session.pushed = True
            display.print_success("Successfully pushed to remote")
        except GitError as e:
            display.print_push_failed(str(e))
        return FinalizeState.END
