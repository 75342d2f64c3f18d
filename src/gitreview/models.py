"""Data models for gitreview."""

from dataclasses import dataclass, field
from enum import Enum


DEFAULT_SUFFIX = "-review"
DEFAULT_COMMIT_MESSAGE = "Reviewed changes ready for PR"


class ReviewPhase(str, Enum):
    """Current phase of the review session."""

    INIT = "init"
    SELECTION = "selection"
    PREFLIGHT = "preflight"
    MATERIALIZE = "materialize"
    FINALIZE = "finalize"
    COMPLETE = "complete"
    ABORTED = "aborted"
    FAILED = "failed"


class FinalizeState(str, Enum):
    """States of the finalize sub-flow."""

    AWAIT_CONFIRM_WAIT = "await_confirm_wait"
    BLOCK_FOR_USER_INPUT = "block_for_user_input"
    CHECK_STAGED = "check_staged"
    AWAIT_CONFIRM_FINALIZE = "await_confirm_finalize"
    PROMPT_COMMIT_MESSAGE = "prompt_commit_message"
    COMMIT = "commit"
    SWITCH_TO_FROM = "switch_to_from"
    HARD_RESET_FROM_TO_REVIEW = "hard_reset_from_to_review"
    DELETE_REVIEW_BRANCH = "delete_review_branch"
    AWAIT_CONFIRM_PUSH = "await_confirm_push"
    PUSH = "push"
    END = "end"
    END_WITH_HINT = "end_with_hint"

    @property
    def is_terminal(self) -> bool:
        return self in (FinalizeState.END, FinalizeState.END_WITH_HINT)


@dataclass(frozen=True)
class ReviewOptions:
    """Options for a review run, fixed once parsed."""

    from_branch: str | None = None
    to_branch: str | None = None
    suffix: str = DEFAULT_SUFFIX
    interactive: bool = True
    verbose: bool = False


@dataclass
class WorkingTreeStatus:
    """Snapshot of the working tree, taken fresh at each decision point."""

    modified: list[str] = field(default_factory=list)
    created: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    untracked: list[str] = field(default_factory=list)
    staged: list[str] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not (
            self.modified or self.created or self.deleted or self.untracked or self.staged
        )

    @property
    def new_count(self) -> int:
        return len(self.created) + len(self.untracked)

    @property
    def total_changes(self) -> int:
        return len(self.modified) + len(self.created) + len(self.deleted) + len(self.untracked)

    @property
    def changed_paths(self) -> set[str]:
        """All paths touched in the index or working tree."""
        return set(self.modified + self.created + self.deleted + self.untracked + self.staged)


@dataclass
class ReviewSession:
    """Runtime state of a single review invocation."""

    options: ReviewOptions
    original_branch: str
    from_branch: str = ""
    to_branch: str = ""
    phase: ReviewPhase = ReviewPhase.INIT
    stashed: bool = False
    applied_status: WorkingTreeStatus | None = None
    finalized: bool = False
    pushed: bool = False

    @property
    def review_branch(self) -> str:
        """Name of the disposable review branch."""
        return f"{self.from_branch}{self.options.suffix}"

    @property
    def interactive(self) -> bool:
        return self.options.interactive

    @property
    def verbose(self) -> bool:
        return self.options.verbose
