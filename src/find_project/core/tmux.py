"""tmux wrapper for find-project.

Provides the session manager used to create and attach to one tmux session
per project. Each project gets its own session, named after its directory.
"""

import logging
import os
import re
import subprocess
from pathlib import Path
from typing import Protocol

from find_project.core.errors import DependencyMissing, ExternalCommandFailed

logger = logging.getLogger(__name__)

# tmux uses "." and ":" to address windows and panes within a target
_UNSAFE_CHARS = re.compile(r"[.:]|\s+")


def session_name_for(path: Path | str) -> str:
    """Derive a tmux session name from a project path.

    Only the final path component is used. Surrounding whitespace is
    stripped, then every "." and ":" and every run of whitespace becomes
    "_". Everything else is kept as is.

    Args:
        path: Project path (e.g., "/home/ada/src/my.app")

    Returns:
        Safe tmux session name (e.g., "my_app")
    """
    name = Path(str(path).rstrip("/")).name.strip()
    return _UNSAFE_CHARS.sub("_", name) or "_"


def in_tmux() -> bool:
    """Check if we're running inside a tmux session.

    Returns:
        True if inside tmux, False otherwise.
    """
    return bool(os.environ.get("TMUX"))


class SessionManager(Protocol):
    """Backend that owns named terminal sessions."""

    def exists(self, name: str) -> bool: ...

    def create(self, name: str, cwd: Path) -> None: ...

    def attach(self, name: str) -> None: ...


class TmuxSessionManager:
    """SessionManager that drives the tmux binary.

    Args:
        socket: Optional tmux socket name. When set, all commands run against
            an isolated server (tmux -L <socket>).
        binary: tmux executable.
    """

    def __init__(self, socket: str | None = None, binary: str = "tmux") -> None:
        self.socket = socket
        self.binary = binary

    def _tmux_cmd(self, args: list[str]) -> list[str]:
        """Build a tmux command, optionally with a custom socket."""
        if self.socket:
            return [self.binary, "-L", self.socket] + args
        return [self.binary] + args

    def _run(
        self, args: list[str], interactive: bool = False
    ) -> subprocess.CompletedProcess:
        cmd = self._tmux_cmd(args)
        logger.debug("Running %s", cmd)
        try:
            if interactive:
                # attach needs the terminal on stdin/stdout
                return subprocess.run(cmd, stderr=subprocess.PIPE, text=True)
            return subprocess.run(cmd, capture_output=True, text=True)
        except FileNotFoundError as e:
            raise DependencyMissing(self.binary) from e
        except PermissionError as e:
            raise DependencyMissing(self.binary, "permission denied") from e

    def exists(self, name: str) -> bool:
        """Check if a tmux session with exactly this name exists.

        Args:
            name: Session name to check.

        Returns:
            True if session exists, False otherwise.
        """
        # "=" disables tmux's prefix matching of session names
        result = self._run(["has-session", "-t", f"={name}"])
        return result.returncode == 0

    def create(self, name: str, cwd: Path) -> None:
        """Create a new detached tmux session.

        Args:
            name: Session name.
            cwd: Working directory for the session's first window.

        Raises:
            ExternalCommandFailed: If tmux command fails.
        """
        result = self._run([
            "new-session",
            "-d",  # Detached
            "-s",
            name,  # Session name
            "-c",
            str(cwd),  # Working directory
        ])
        if result.returncode != 0:
            raise ExternalCommandFailed(
                "tmux new-session", result.returncode, result.stderr
            )

    def attach(self, name: str) -> None:
        """Attach the terminal to a session.

        Inside tmux the current client is switched to the session instead,
        since attaching would nest tmux.

        Raises:
            ExternalCommandFailed: If tmux command fails.
        """
        if in_tmux():
            action = "switch-client"
            result = self._run([action, "-t", f"={name}"])
        else:
            action = "attach-session"
            result = self._run([action, "-t", f"={name}"], interactive=True)
        if result.returncode != 0:
            raise ExternalCommandFailed(
                f"tmux {action}", result.returncode, result.stderr or ""
            )
