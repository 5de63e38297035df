"""CLI entry point for find-project.

Usage:
    find-project                  # Pick a project, attach to its tmux session
    find-project -r ~/work=2      # Search ~/work, two levels deep
    find-project --print          # Print the selected path instead
    find-project --list           # Print all candidate projects
"""

import logging
from pathlib import Path

import click

from find_project.core.config import DEFAULT_DEPTH, load_settings, parse_root
from find_project.core.errors import FindProjectError
from find_project.core.finder import FzfSelector
from find_project.core.launcher import run
from find_project.core.project import collect_projects
from find_project.core.tmux import TmuxSessionManager


def _configure_logging(verbose: bool) -> None:
    logger = logging.getLogger("find_project")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


@click.command()
@click.option(
    "-r",
    "--root",
    "roots",
    multiple=True,
    metavar="PATH[=DEPTH]",
    help=(
        "Directory to search for projects (repeatable). "
        "Replaces configured roots."
    ),
)
@click.option(
    "-d",
    "--depth",
    type=click.IntRange(min=1),
    default=DEFAULT_DEPTH,
    show_default=True,
    help="Depth of project directories below roots that don't give one",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="JSON config file to read instead of the default",
)
@click.option(
    "--finder",
    help="Fuzzy finder executable (default: fzf)",
)
@click.option("-q", "--query", default=None, help="Initial finder query")
@click.option(
    "--print",
    "print_only",
    is_flag=True,
    help="Print the selected project path instead of opening a session",
)
@click.option(
    "--list",
    "list_only",
    is_flag=True,
    help="Print candidate projects and exit",
)
@click.option("-v", "--verbose", is_flag=True, help="Log each step to stderr")
@click.version_option(package_name="find-project")
def main(
    roots: tuple[str, ...],
    depth: int,
    config_path: Path | None,
    finder: str | None,
    query: str | None,
    print_only: bool,
    list_only: bool,
    verbose: bool,
) -> None:
    """Fuzzy-find a project and open a tmux session for it.

    Projects are the directories found under the search roots. The chosen
    project gets a tmux session named after its directory: an existing
    session is attached to, otherwise one is created in the project
    directory first.

    Cancelling the finder exits quietly with status 0.
    """
    _configure_logging(verbose)

    try:
        try:
            search_roots = [parse_root(entry, depth) for entry in roots]
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="'--root'") from e

        settings = load_settings(
            roots=search_roots,
            config_path=config_path,
            finder=finder,
            default_depth=depth,
        )

        if list_only:
            for project in collect_projects(settings.roots):
                click.echo(str(project.path))
            return

        result = run(
            settings.roots,
            FzfSelector(settings.finder, settings.finder_args),
            TmuxSessionManager(socket=settings.tmux_socket),
            query=query,
            print_only=print_only,
        )
        if print_only and result is not None:
            click.echo(str(result))

    except FindProjectError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(e.exit_code)
    except KeyboardInterrupt:
        raise SystemExit(130)
