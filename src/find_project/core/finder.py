"""Interactive project selection through an external fuzzy finder."""

import logging
import subprocess
from collections.abc import Iterable, Sequence
from typing import Protocol

from find_project.core.errors import DependencyMissing, ExternalCommandFailed

logger = logging.getLogger(__name__)

# fzf exit statuses
FZF_NO_MATCH = 1
FZF_INTERRUPTED = 130

CANCEL_STATUSES = {FZF_NO_MATCH, FZF_INTERRUPTED}


class Selector(Protocol):
    """Something that lets the user pick one of several candidates."""

    def select(
        self, candidates: Iterable[str], query: str | None = None
    ) -> str | None:
        """Return the chosen candidate, or None if the user cancelled."""
        ...


class FzfSelector:
    """Selector backed by fzf (or any tool with the same stdin/stdout contract).

    Candidates are written newline-delimited to the finder's stdin and the
    chosen line is read back from its stdout. The finder draws on the
    terminal, so stderr is left attached to ours.
    """

    def __init__(self, binary: str = "fzf", args: Sequence[str] = ()) -> None:
        self.binary = binary
        self.args = list(args)

    def command(self, query: str | None = None) -> list[str]:
        cmd = [self.binary, *self.args]
        if query:
            cmd += ["--query", query]
        return cmd

    def select(
        self, candidates: Iterable[str], query: str | None = None
    ) -> str | None:
        """Run the finder and return the selected line.

        Args:
            candidates: Lines to choose from. Must not contain newlines.
            query: Initial query to pre-fill.

        Returns:
            The selected line, or None if the user cancelled.

        Raises:
            DependencyMissing: If the finder binary can't be executed.
            ExternalCommandFailed: If the finder exits with an error status.
        """
        cmd = self.command(query)
        stdin = "".join(f"{line}\n" for line in candidates)
        logger.debug("Running %s", cmd)
        try:
            result = subprocess.run(
                cmd,
                input=stdin,
                stdout=subprocess.PIPE,
                text=True,
            )
        except FileNotFoundError as e:
            raise DependencyMissing(self.binary) from e
        except PermissionError as e:
            raise DependencyMissing(self.binary, "permission denied") from e

        logger.debug("%s exited with status %d", self.binary, result.returncode)
        selection = result.stdout.rstrip("\r\n") if result.stdout else ""

        if result.returncode in CANCEL_STATUSES:
            return None
        if result.returncode != 0:
            raise ExternalCommandFailed(
                self.binary, result.returncode, result.stderr or ""
            )
        if not selection:
            return None
        # Only the first line counts if the finder was run with --multi
        return selection.splitlines()[0]
