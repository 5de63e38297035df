"""The enumerate, select, launch pipeline.

Orchestration only: finding candidates, picking one and managing sessions
are delegated to the Selector and SessionManager passed in.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from find_project.core.config import SearchRoot
from find_project.core.errors import InvalidSelection
from find_project.core.finder import Selector
from find_project.core.project import collect_projects
from find_project.core.session import SessionTarget
from find_project.core.tmux import SessionManager, session_name_for

logger = logging.getLogger(__name__)


def launch(project_path: Path, sessions: SessionManager) -> SessionTarget:
    """Attach to the project's session, creating it first if needed.

    Args:
        project_path: Selected project directory.
        sessions: Session backend.

    Returns:
        The session that was attached to.

    Raises:
        InvalidSelection: If project_path is not an existing directory.
    """
    if not project_path.is_dir():
        raise InvalidSelection(project_path)

    name = session_name_for(project_path)
    created = False
    if sessions.exists(name):
        logger.debug("Session %s exists, attaching", name)
    else:
        logger.debug("Creating session %s in %s", name, project_path)
        sessions.create(name, cwd=project_path)
        created = True

    target = SessionTarget(name=name, path=project_path, created=created)
    sessions.attach(name)
    return target


def select_project(
    roots: Iterable[SearchRoot],
    selector: Selector,
    query: str | None = None,
) -> Path | None:
    """Enumerate projects and let the user pick one.

    Returns:
        The selected path, or None if the user cancelled.

    Raises:
        NoCandidatesFound: If there is nothing to choose from. The selector
            is not run in that case.
    """
    projects = collect_projects(roots)
    selection = selector.select((str(p.path) for p in projects), query=query)
    if selection is None:
        logger.debug("Selection cancelled")
        return None
    return Path(selection)


def run(
    roots: Iterable[SearchRoot],
    selector: Selector,
    sessions: SessionManager,
    query: str | None = None,
    print_only: bool = False,
) -> SessionTarget | Path | None:
    """Run the full pipeline.

    Args:
        roots: Search roots to enumerate.
        selector: Finder used to pick a project.
        sessions: Session backend.
        query: Initial finder query.
        print_only: Stop after selection and return the selected path
            instead of launching a session.

    Returns:
        The session attached to, the selected path when print_only is set,
        or None if the user cancelled selection.

    Raises:
        InvalidSelection: If the selected path is not an existing directory.
    """
    selected = select_project(roots, selector, query=query)
    if selected is None:
        return None
    if print_only:
        if not selected.is_dir():
            raise InvalidSelection(selected)
        return selected
    return launch(selected, sessions)
