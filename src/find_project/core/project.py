"""Project discovery for find-project.

Walks each search root down to its configured depth and yields the
directories found there as candidate projects.
"""

import logging
import os
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from find_project.core.config import SearchRoot
from find_project.core.errors import NoCandidatesFound

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Project:
    """A candidate project directory.

    Attributes:
        path: Directory path, as built from the search root.
        name: Final path component (e.g., "scope" for ~/src/ada/scope).
    """

    path: Path
    name: str

    @classmethod
    def from_path(cls, path: Path) -> "Project":
        return cls(path=path, name=path.name)


def _is_listable(path: Path) -> bool:
    """Check that path can be written to the finder as a single line.

    Names that aren't valid UTF-8 or that contain line breaks can't be
    passed through the finder's newline-delimited input.
    """
    text = str(path)
    if "\n" in text or "\r" in text:
        logger.debug("Skipping directory with a line break in its name: %r", text)
        return False
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        logger.debug("Skipping directory with a non UTF-8 name: %r", text)
        return False
    return True


def _subdirectories(path: Path) -> list[Path]:
    """List directories directly under path, sorted by name.

    Unreadable directories yield nothing rather than failing the scan.
    Directories whose names can't be shown in the finder are left out.
    """
    try:
        entries = list(os.scandir(path))
    except OSError as e:
        logger.debug("Skipping unreadable directory %s: %s", path, e)
        return []

    dirs = []
    for entry in entries:
        try:
            if entry.is_dir() and _is_listable(Path(entry.path)):
                dirs.append(Path(entry.path))
        except OSError:
            continue
    return sorted(dirs, key=lambda p: p.name)


def _walk(path: Path, depth: int) -> Iterator[Path]:
    for child in _subdirectories(path):
        if depth <= 1:
            yield child
        else:
            yield from _walk(child, depth - 1)


def iter_projects(roots: Iterable[SearchRoot]) -> Iterator[Project]:
    """Lazily yield candidate projects from each search root.

    Roots are visited in the order given. Within a root, projects come out in
    lexicographic order of their path components. A directory reachable from
    more than one root is yielded once, on first sight.

    Args:
        roots: Search roots to scan.

    Yields:
        Project for each directory found at the root's depth.
    """
    seen: set[Path] = set()
    for root in roots:
        if not root.path.is_dir():
            logger.debug("Search root %s is not a directory, skipping", root.path)
            continue
        logger.debug("Scanning %s (depth %d)", root.path, root.depth)
        for path in _walk(root.path, root.depth):
            key = path.resolve()
            if key in seen:
                continue
            seen.add(key)
            yield Project.from_path(path)


def collect_projects(roots: Iterable[SearchRoot]) -> list[Project]:
    """Collect all candidate projects.

    Raises:
        NoCandidatesFound: If no root yields any project.
    """
    roots = list(roots)
    projects = list(iter_projects(roots))
    if not projects:
        raise NoCandidatesFound(roots)
    logger.debug("Found %d projects", len(projects))
    return projects
