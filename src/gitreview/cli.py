"""CLI for gitreview."""

import sys

import rich_click as click
from rich.console import Console

from gitreview import __version__, display

# Configure rich-click for pretty help output
click.rich_click.USE_RICH_MARKUP = True
click.rich_click.USE_MARKDOWN = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.ERRORS_SUGGESTION = "Try running '--help' for more information."
click.rich_click.MAX_WIDTH = 100
click.rich_click.STYLE_OPTION = "bold cyan"
click.rich_click.STYLE_COMMAND = "bold green"
click.rich_click.STYLE_SWITCH = "bold yellow"
from gitreview.engine import create_engine, EngineError
from gitreview.models import DEFAULT_SUFFIX, ReviewOptions


console = Console()


@click.group(
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option(
    "--from", "from_branch", default=None, metavar="BRANCH",
    help="Source branch to compare from. Defaults to interactive selection, "
         "or the current branch with --no-interactive."
)
@click.option(
    "--to", "to_branch", default=None, metavar="BRANCH",
    help="Target branch to compare to. Defaults to interactive selection, "
         "or 'main' / 'master' with --no-interactive."
)
@click.option(
    "--suffix", default=DEFAULT_SUFFIX, metavar="TEXT", show_default=True,
    help="Suffix appended to the source branch name to form the review branch."
)
@click.option(
    "--interactive/--no-interactive", default=True,
    help="Ask before deleting an existing review branch or stashing changes. "
         "With --no-interactive both happen automatically and the finalize "
         "step is skipped."
)
@click.option(
    "--verbose", "-v", is_flag=True,
    help="Show each git operation and the finalize state transitions."
)
@click.version_option(__version__, "-V", "--version", prog_name="git-review")
@click.pass_context
def cli(ctx, from_branch, to_branch, suffix, interactive, verbose):
    """**git-review** - Interactive branch comparison before creating a PR.

    Creates a review branch from the **TO** branch and applies every change
    of **FROM** on top of it as *uncommitted* changes. Stage what you want to
    keep in your editor, then let git-review commit it and replace **FROM**
    with the reviewed result.

    **Examples:**

        git-review                              Pick both branches interactively

        git-review --from feat/x --to main      Compare explicit branches

        git-review --from feat/x --no-interactive

    **Workflow:**

        1. SELECT       Choose source and target branches

        2. PREFLIGHT    Check branches, recreate review branch, stash changes

        3. REVIEW       Create FROM-review with the diff left uncommitted

        4. FINALIZE     Commit staged files, reset FROM to them, optionally push
    """
    # If a subcommand is invoked, skip the main logic
    if ctx.invoked_subcommand is not None:
        return

    options = ReviewOptions(
        from_branch=from_branch,
        to_branch=to_branch,
        suffix=suffix,
        interactive=interactive,
        verbose=verbose,
    )

    try:
        engine = create_engine(options)
    except EngineError as e:
        display.print_error(str(e))
        sys.exit(1)

    success = engine.run()
    sys.exit(0 if success else 1)


@cli.command()
def version():
    """Show version and environment information.

    Displays the git-review version together with the GitPython and git
    versions it runs against.
    """
    import git as gitpython

    console.print(f"git-review version {__version__}")
    console.print()
    console.print(f"[green]✓[/green] GitPython: {gitpython.__version__}")

    git_version = ".".join(str(part) for part in gitpython.Git().version_info)
    console.print(f"[green]✓[/green] git: {git_version}")


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
