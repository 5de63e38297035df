"""Test helpers: tmux availability checks and Selector/SessionManager doubles."""

import subprocess
import sys
from collections.abc import Callable, Iterable
from pathlib import Path

import pytest


def tmux_works() -> bool:
    """Check if tmux can actually start a server and create sessions.

    CI environments may have tmux installed but not be able to run it
    properly (no PTY, etc.).
    """
    test_socket = "find-project-tmux-check"
    try:
        result = subprocess.run(
            ["tmux", "-L", test_socket, "new-session", "-d", "-s", "check"],
            capture_output=True,
            text=True,
        )
    except FileNotFoundError:
        return False
    if result.returncode != 0:
        print(
            f"\ntmux session creation failed (rc={result.returncode}): "
            f"{result.stderr.strip()}",
            file=sys.stderr,
        )
        return False

    subprocess.run(["tmux", "-L", test_socket, "kill-server"], capture_output=True)
    return True


# Cache the result to avoid running the check multiple times
_tmux_works_cached: bool | None = None


def get_tmux_works() -> bool:
    """Get cached result of tmux_works check."""
    global _tmux_works_cached
    if _tmux_works_cached is None:
        _tmux_works_cached = tmux_works()
    return _tmux_works_cached


# Skip marker for tests requiring a working tmux environment
requires_tmux = pytest.mark.skipif(
    not get_tmux_works(),
    reason="tmux not available or cannot start sessions in this environment",
)


class FakeSelector:
    """Selector stub that records what it was offered.

    Args:
        response: The selection to return, None to simulate cancellation,
            or a callable picking from the offered candidates.
    """

    def __init__(self, response: str | None | Callable[[list[str]], str | None] = None):
        self.response = response
        self.calls: list[tuple[list[str], str | None]] = []

    def select(self, candidates: Iterable[str], query: str | None = None) -> str | None:
        offered = list(candidates)
        self.calls.append((offered, query))
        if callable(self.response):
            return self.response(offered)
        return self.response


class FakeSessionManager:
    """SessionManager stub that records every call in order."""

    def __init__(self, existing: Iterable[str] = ()):
        self.sessions = set(existing)
        self.calls: list[tuple] = []

    def exists(self, name: str) -> bool:
        self.calls.append(("exists", name))
        return name in self.sessions

    def create(self, name: str, cwd: Path) -> None:
        self.calls.append(("create", name, cwd))
        self.sessions.add(name)

    def attach(self, name: str) -> None:
        self.calls.append(("attach", name))

    def actions(self) -> list[str]:
        return [call[0] for call in self.calls]


