"""Git operations for gitreview."""

import subprocess
from pathlib import Path

from git import Repo
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError

from gitreview.models import WorkingTreeStatus


class GitError(Exception):
    """Git operation failed."""

    pass


def _stderr(error: GitCommandError) -> str:
    """Best human-readable message from a failed git command."""
    stderr = error.stderr.strip() if isinstance(error.stderr, str) else ""
    if stderr.startswith("stderr:"):
        stderr = stderr[len("stderr:"):].strip().strip("'").strip()
    return stderr or str(error)


class GitOperations:
    """Git operations wrapper."""

    def __init__(self, repo_path: str | Path | None = None):
        path = Path(repo_path) if repo_path else Path.cwd()
        try:
            self.repo = Repo(path, search_parent_directories=True)
        except (InvalidGitRepositoryError, NoSuchPathError):
            raise GitError(f"Not a git repository: {path}")

        if self.repo.bare or self.repo.working_tree_dir is None:
            raise GitError(f"Repository has no working tree: {path}")

        self.repo_path = Path(self.repo.working_tree_dir)

    @property
    def current_branch(self) -> str:
        """Get the current branch name."""
        if self.repo.head.is_detached:
            return self.repo.head.commit.hexsha[:8]
        return self.repo.active_branch.name

    def fetch_all(self) -> bool:
        """Fetch every remote. Returns False if the fetch failed."""
        try:
            self.repo.git.fetch("--all", "--quiet")
            return True
        except GitCommandError:
            return False

    def list_branches(self) -> list[str]:
        """
        List local and remote branch names.

        Remote branches are reported without their remote prefix, symbolic
        HEAD references are skipped, and the result is sorted and unique.
        """
        try:
            output = self.repo.git.for_each_ref(
                "--format=%(refname)", "refs/heads", "refs/remotes"
            )
        except GitCommandError as e:
            raise GitError(f"Failed to list branches: {_stderr(e)}")

        remote_names = sorted((r.name for r in self.repo.remotes), key=len, reverse=True)
        branches = set()

        for refname in output.splitlines():
            refname = refname.strip()
            if refname.startswith("refs/heads/"):
                name = refname[len("refs/heads/"):]
            elif refname.startswith("refs/remotes/"):
                name = self._strip_remote(refname[len("refs/remotes/"):], remote_names)
            else:
                continue

            if name and name != "HEAD":
                branches.add(name)

        return sorted(branches)

    @staticmethod
    def _strip_remote(name: str, remote_names: list[str]) -> str:
        for remote in remote_names:
            if name.startswith(f"{remote}/"):
                return name[len(remote) + 1:]
        return name.split("/", 1)[1] if "/" in name else name

    def ref_exists(self, ref: str) -> bool:
        """Check if a ref resolves to a commit."""
        try:
            self.repo.git.rev_parse("--verify", "--quiet", f"{ref}^{{commit}}")
            return True
        except GitCommandError:
            return False

    def branch_exists(self, name: str) -> bool:
        """Check if a local branch exists."""
        return name in [h.name for h in self.repo.heads]

    def checkout_branch(self, name: str, force: bool = False) -> None:
        """Checkout a branch (or any ref git can resolve)."""
        args = ["--force", name] if force else [name]
        try:
            self.repo.git.checkout(*args)
        except GitCommandError as e:
            raise GitError(f"Failed to checkout {name}: {_stderr(e)}")

    def create_and_checkout_branch(self, name: str) -> None:
        """Create a new branch at HEAD and switch to it."""
        try:
            self.repo.git.checkout("-b", name)
        except GitCommandError as e:
            raise GitError(f"Failed to create branch {name}: {_stderr(e)}")

    def delete_branch(self, name: str, force: bool = False) -> None:
        """Delete a local branch."""
        try:
            self.repo.delete_head(name, force=force)
        except GitCommandError as e:
            raise GitError(f"Failed to delete branch {name}: {_stderr(e)}")

    def get_raw_diff(self, base: str, head: str) -> bytes:
        """Get the raw patch of everything in head that is not in base."""
        try:
            result = subprocess.run(
                [
                    "git", "diff", "--binary", "--no-color", "--no-ext-diff",
                    "--no-textconv", "--src-prefix=a/", "--dst-prefix=b/",
                    f"{base}..{head}",
                ],
                cwd=self.repo_path,
                capture_output=True,
                check=True,
            )
            return result.stdout

        except subprocess.CalledProcessError as e:
            raise GitError(f"Failed to get diff: {e.stderr.decode(errors='replace').strip()}")

    def changed_files(self, base: str, head: str) -> set[str]:
        """Paths that differ between two refs."""
        try:
            output = self.repo.git.diff("--name-only", f"{base}..{head}")
        except GitCommandError as e:
            raise GitError(f"Failed to get diff: {_stderr(e)}")
        return {line for line in output.splitlines() if line}

    def apply_patch(self, patch: bytes) -> None:
        """Apply a patch to the working tree without staging it."""
        result = subprocess.run(
            ["git", "apply", "--check"],
            cwd=self.repo_path,
            input=patch,
            capture_output=True,
        )
        if result.returncode != 0:
            raise GitError(
                f"Patch would not apply cleanly: {result.stderr.decode(errors='replace').strip()}"
            )

        try:
            subprocess.run(
                ["git", "apply"],
                cwd=self.repo_path,
                input=patch,
                capture_output=True,
                check=True,
            )
        except subprocess.CalledProcessError as e:
            raise GitError(f"Failed to apply patch: {e.stderr.decode(errors='replace').strip()}")

    def status(self) -> WorkingTreeStatus:
        """Take a snapshot of the index and working tree."""
        try:
            output = self.repo.git.status("--porcelain", "-z", "--untracked-files=all")
        except GitCommandError as e:
            raise GitError(f"Failed to read status: {_stderr(e)}")

        status = WorkingTreeStatus()
        entries = output.split("\0")

        i = 0
        while i < len(entries):
            entry = entries[i]
            i += 1
            if len(entry) < 4:
                continue

            x, y, path = entry[0], entry[1], entry[3:]
            if x in "RC":
                # Renames and copies carry the source path as the next entry
                i += 1

            if x == "?" and y == "?":
                status.untracked.append(path)
                continue
            if x == "!":
                continue

            if x not in " ?":
                status.staged.append(path)
            if x == "A":
                status.created.append(path)
            elif "D" in (x, y):
                status.deleted.append(path)
            else:
                status.modified.append(path)

        return status

    def stash(self, message: str) -> bool:
        """Stash local changes, untracked files included. Returns True if something was stashed."""
        try:
            result = self.repo.git.stash("push", "--include-untracked", "-m", message)
        except GitCommandError as e:
            raise GitError(f"Failed to stash changes: {_stderr(e)}")
        return "No local changes" not in result

    def commit(self, message: str) -> str:
        """Commit the staged changes and return the commit hash."""
        try:
            self.repo.git.commit("-m", message)
            return self.repo.head.commit.hexsha
        except GitCommandError as e:
            raise GitError(f"Failed to commit: {_stderr(e)}")

    def reset_hard(self, ref: str) -> None:
        """Hard reset to a ref."""
        try:
            self.repo.git.reset("--hard", ref)
        except GitCommandError as e:
            raise GitError(f"Failed to reset: {_stderr(e)}")

    def has_remote(self) -> bool:
        """Check if repo has a remote configured."""
        return len(self.repo.remotes) > 0

    def push_force_with_lease(self, branch: str) -> None:
        """Force push a branch, refusing if the remote moved since the last fetch."""
        args = ["--force-with-lease"]
        try:
            tracking = self.repo.heads[branch].tracking_branch()
        except IndexError:
            tracking = None

        if tracking is None:
            if not self.has_remote():
                raise GitError("No remote configured")
            remote = "origin" if "origin" in [r.name for r in self.repo.remotes] else self.repo.remotes[0].name
            args.extend(["--set-upstream", remote, branch])
        else:
            args.extend([tracking.remote_name, f"{branch}:{tracking.remote_head}"])

        try:
            self.repo.git.push(*args)
        except GitCommandError as e:
            raise GitError(f"Failed to push branch: {_stderr(e)}")

