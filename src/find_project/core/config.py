"""Configuration for find-project.

Search roots are read from, in increasing precedence:

- the built-in default (~/src, two levels deep), used only when nothing
  else names a root
- $XDG_CONFIG_HOME/find_project/config.json and find_project.conf
- the FIND_PROJECT_ROOTS environment variable
- --root options on the command line
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import orjson

from find_project.core.errors import ConfigError

logger = logging.getLogger(__name__)

PROJECT_NAME = "find_project"

ROOTS_ENV = "FIND_PROJECT_ROOTS"
FINDER_ENV = "FIND_PROJECT_FINDER"
TMUX_SOCKET_ENV = "FIND_PROJECT_TMUX_SOCKET"

DEFAULT_DEPTH = 1
DEFAULT_FINDER = "fzf"


@dataclass(frozen=True)
class SearchRoot:
    """A directory to scan for projects.

    Attributes:
        path: Directory to scan.
        depth: How many levels below path the project directories sit.
            1 means the immediate subdirectories are projects.
    """

    path: Path
    depth: int = DEFAULT_DEPTH

    def __post_init__(self) -> None:
        if self.depth < 1:
            raise ValueError(f"Invalid depth: {self.depth}. Must be >= 1")


@dataclass
class Settings:
    """Everything the pipeline needs, resolved once at startup."""

    roots: list[SearchRoot] = field(default_factory=list)
    finder: str = DEFAULT_FINDER
    finder_args: list[str] = field(default_factory=list)
    tmux_socket: str | None = None


def default_root() -> SearchRoot:
    """The root used when no config names one: ~/src with owner/repo layout."""
    return SearchRoot(Path.home() / "src", depth=2)


def expand_path(raw: str) -> Path:
    """Expand ~ and environment variables in a user-supplied path."""
    return Path(os.path.expandvars(os.path.expanduser(raw.strip())))


def parse_root(entry: str, default_depth: int = DEFAULT_DEPTH) -> SearchRoot:
    """Parse a "PATH" or "PATH=DEPTH" root specification.

    A suffix that isn't a number is treated as part of the path.

    Raises:
        ValueError: If the depth is less than 1.
    """
    path, sep, depth = entry.rpartition("=")
    if not sep or not depth.strip().isdigit():
        return SearchRoot(expand_path(entry), default_depth)
    return SearchRoot(expand_path(path), int(depth))


def get_config_dir() -> Path:
    """Get the directory holding find-project's config files."""
    base = os.environ.get("XDG_CONFIG_HOME")
    config_home = Path(base) if base else Path.home() / ".config"
    return config_home / PROJECT_NAME


def get_config_path() -> Path:
    """Get the path to the JSON config file."""
    return get_config_dir() / "config.json"


def get_legacy_config_path() -> Path:
    """Get the path to the plain "<path> <depth>" config file."""
    return get_config_dir() / f"{PROJECT_NAME}.conf"


def read_config(path: Path | None = None) -> dict:
    """Read the JSON config, returning empty dict if not found.

    An explicitly given path must exist.

    Raises:
        ConfigError: If the file is unreadable or not a JSON object, or if
            path was given and doesn't exist.
    """
    config_path = path or get_config_path()
    if not config_path.exists():
        if path is not None:
            raise ConfigError(f"Config file not found: {config_path}")
        return {}
    try:
        content = config_path.read_bytes()
        config = orjson.loads(content) if content.strip() else {}
    except (orjson.JSONDecodeError, OSError) as e:
        raise ConfigError(f"Unable to read config {config_path}: {e}") from e
    if not isinstance(config, dict):
        raise ConfigError(f"Config {config_path} must contain a JSON object")
    return config


def read_legacy_roots(path: Path | None = None) -> list[SearchRoot]:
    """Read roots from the plain config file.

    Each line is "<path> <depth>". Lines that don't parse are skipped.
    """
    config_path = path or get_legacy_config_path()
    if not config_path.exists():
        return []
    try:
        lines = config_path.read_text().splitlines()
    except OSError as e:
        raise ConfigError(f"Unable to read config {config_path}: {e}") from e

    roots = []
    for line in lines:
        raw_path, _, depth = line.strip().rpartition(" ")
        if not raw_path or not depth.isdigit() or int(depth) < 1:
            if line.strip():
                logger.debug("Skipping config line %r", line)
            continue
        roots.append(SearchRoot(expand_path(raw_path), int(depth)))
    return roots


def roots_from_config(
    config: dict, default_depth: int = DEFAULT_DEPTH
) -> list[SearchRoot]:
    """Build search roots from the "roots" entry of a JSON config.

    Entries are either a path string or {"path": ..., "depth": ...}.
    """
    entries = config.get("roots", [])
    if not isinstance(entries, list):
        raise ConfigError("'roots' must be a list")

    roots = []
    for entry in entries:
        if isinstance(entry, str):
            roots.append(SearchRoot(expand_path(entry), default_depth))
        elif isinstance(entry, dict) and isinstance(entry.get("path"), str):
            depth = entry.get("depth", default_depth)
            if not isinstance(depth, int) or depth < 1:
                raise ConfigError(
                    f"Invalid depth for root {entry['path']}: {depth!r}"
                )
            roots.append(SearchRoot(expand_path(entry["path"]), depth))
        else:
            raise ConfigError(f"Invalid root entry: {entry!r}")
    return roots


def roots_from_env(default_depth: int = DEFAULT_DEPTH) -> list[SearchRoot]:
    """Build search roots from FIND_PROJECT_ROOTS.

    Entries are separated by os.pathsep and may carry a "=DEPTH" suffix.
    """
    value = os.environ.get(ROOTS_ENV, "")
    roots = []
    for entry in value.split(os.pathsep):
        if not entry.strip():
            continue
        try:
            roots.append(parse_root(entry, default_depth))
        except ValueError as e:
            raise ConfigError(f"{ROOTS_ENV}: {e}") from e
    return roots


def load_settings(
    roots: list[SearchRoot] | None = None,
    config_path: Path | None = None,
    finder: str | None = None,
    default_depth: int = DEFAULT_DEPTH,
) -> Settings:
    """Resolve settings from defaults, config files, environment and flags.

    Args:
        roots: Roots given on the command line. Replace all other sources.
        config_path: Explicit JSON config file. The plain config file is only
            consulted when this is not given.
        finder: Finder binary given on the command line.
        default_depth: Depth for roots that don't specify one.

    Returns:
        The resolved Settings.
    """
    config = read_config(config_path)

    if roots:
        resolved = list(roots)
    else:
        resolved = roots_from_env(default_depth)
        if not resolved:
            resolved = roots_from_config(config, default_depth)
            if config_path is None:
                resolved += read_legacy_roots()
        if not resolved and ROOTS_ENV not in os.environ and "roots" not in config:
            resolved = [default_root()]

    finder_args = config.get("finder_args", [])
    if not isinstance(finder_args, list) or not all(
        isinstance(arg, str) for arg in finder_args
    ):
        raise ConfigError("'finder_args' must be a list of strings")

    for key in ("finder", "tmux_socket"):
        if config.get(key) is not None and not isinstance(config[key], str):
            raise ConfigError(f"'{key}' must be a string")

    settings = Settings(
        roots=resolved,
        finder=(
            finder
            or os.environ.get(FINDER_ENV)
            or config.get("finder")
            or DEFAULT_FINDER
        ),
        finder_args=finder_args,
        tmux_socket=os.environ.get(TMUX_SOCKET_ENV) or config.get("tmux_socket"),
    )
    logger.debug("Resolved settings: %s", settings)
    return settings
