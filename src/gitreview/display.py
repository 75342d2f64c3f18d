"""Rich terminal display for gitreview."""

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from gitreview.models import DEFAULT_COMMIT_MESSAGE, WorkingTreeStatus


console = Console()

RULE = "━" * 40


def print_header(from_branch: str, to_branch: str, review_branch: str) -> None:
    """Print the git-review header with the branches involved."""
    console.print()
    console.print(Panel("[bold]Git Review Tool[/bold]", style="blue", width=41))
    console.print()

    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("Label", style="dim")
    table.add_column("Value")
    table.add_row("From branch:", f"[green]{from_branch}[/green]")
    table.add_row("To branch:", f"[green]{to_branch}[/green]")
    table.add_row("Review branch:", f"[yellow]{review_branch}[/yellow]")
    console.print(table)
    console.print()


def print_branches(branches: list[str], title: str) -> None:
    """Print a numbered list of branches."""
    console.print()
    console.print(f"[bold]{title}[/bold]")

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Branch")
    for i, branch in enumerate(branches, 1):
        table.add_row(str(i), branch)

    console.print(table)


def prompt_branch(branches: list[str], title: str, default: str | None = None) -> str:
    """Prompt for a single branch out of the discovered set."""
    print_branches(branches, title)

    choices = [str(i) for i in range(1, len(branches) + 1)]
    kwargs = {}
    if default in branches:
        kwargs["default"] = str(branches.index(default) + 1)

    choice = Prompt.ask("Choose", choices=choices, show_choices=False, **kwargs)
    return branches[int(choice) - 1]


def prompt_confirm(message: str, default: bool = True) -> bool:
    """Simple yes/no confirmation."""
    return Confirm.ask(message, default=default)


def prompt_commit_message(default: str = DEFAULT_COMMIT_MESSAGE) -> str:
    """Ask for a commit message until a non-blank one is given."""
    while True:
        message = Prompt.ask("Enter commit message", default=default)
        if message and message.strip():
            return message.strip()
        print_error("Commit message cannot be empty")


def wait_for_enter(message: str) -> None:
    """Block until the user presses Enter."""
    console.input(f"[blue]{message}[/blue] ")


def print_step(message: str) -> None:
    """Print a progress step."""
    console.print(f"[blue]⚙ {message}[/blue]")


def print_review_summary(review_branch: str, status: WorkingTreeStatus) -> None:
    """Print the result of materializing the review branch."""
    console.print()
    console.print("[bold green]✓ Success![/bold green]")
    console.print()
    console.print(f"[dim]{RULE}[/dim]")
    console.print(f"[dim]Review branch:[/dim] [yellow]{review_branch}[/yellow]")
    console.print(
        f"[dim]Files changed:[/dim] [yellow]{status.total_changes}[/yellow] "
        f"[dim]({len(status.modified)} modified, {status.new_count} new, "
        f"{len(status.deleted)} deleted)[/dim]"
    )
    console.print(f"[dim]{RULE}[/dim]")
    console.print()


def print_next_steps(from_branch: str) -> None:
    """Print what to do with the review branch."""
    console.print("[bold blue]Next steps:[/bold blue]")
    console.print("[dim]  1.[/dim] Open your editor and review changes in Source Control")
    console.print("[dim]  2.[/dim] Stage only the files you want to include")
    console.print("[dim]  3.[/dim] Commit the staged changes")
    console.print("[dim]  4.[/dim] Push and create PR")
    console.print()

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Command", style="cyan")
    table.add_column("Description", style="dim")
    table.add_row("git status", "# See all changes")
    table.add_row("git diff <file>", "# View specific file changes")
    table.add_row("git checkout -- <file>", "# Discard changes to a file")
    table.add_row(f"git checkout {from_branch}", "# Return to original branch")

    console.print("[bold blue]Useful commands:[/bold blue]")
    console.print(table)
    console.print()


def print_no_staged_hint(from_branch: str, review_branch: str) -> None:
    """Explain how to continue when nothing was staged."""
    console.print()
    print_warning("No staged changes found.")
    console.print("[dim]You can stage changes with:[/dim] [cyan]git add <file>[/cyan]")
    console.print(
        "[dim]Or abort by running:[/dim] "
        f"[cyan]git checkout {from_branch} && git branch -D {review_branch}[/cyan]"
    )


def print_kept_on_review_hint(from_branch: str) -> None:
    """Explain how to finish by hand when finalize was declined."""
    console.print()
    console.print("[dim]Changes kept on review branch. You can:[/dim]")
    console.print('[cyan]  git commit -m "your message"[/cyan]')
    console.print(f"[cyan]  git checkout {from_branch}[/cyan]")


def print_push_failed(message: str) -> None:
    """Report a failed push with the manual fallback."""
    print_warning(f"Push failed: {message}")
    console.print()
    console.print("[dim]You can push manually with:[/dim]")
    console.print("[cyan]  git push --force-with-lease[/cyan]")


def print_stash_reminder(branch: str) -> None:
    """Remind the user that their earlier changes are stashed."""
    print_info(f"Your earlier changes are stashed. Restore them with: git checkout {branch} && git stash pop")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[bold red]✗ Error:[/bold red] {message}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[bold yellow]⚠ {message}[/bold yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[dim]{message}[/dim]")


def print_debug(message: str) -> None:
    """Print a verbose-mode detail line."""
    console.print(f"[dim italic]  · {message}[/dim italic]")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓ {message}[/green]")


def print_done() -> None:
    """Print the final message of a finalized review."""
    console.print()
    console.print("[bold green]✓ All done! Your branch is ready.[/bold green]")
    console.print()
