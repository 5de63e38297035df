"""Errors raised by find-project.

Each error maps to a distinct process exit status so scripts wrapping the
tool can tell the failing step apart.
"""


class FindProjectError(Exception):
    """Base class for all find-project failures."""

    exit_code = 1


class ConfigError(FindProjectError):
    """Raised when a config file exists but cannot be read or parsed."""

    exit_code = 7


class NoCandidatesFound(FindProjectError):
    """Raised when no search root yields a single project directory."""

    exit_code = 3

    def __init__(self, roots: list | None = None) -> None:
        self.roots = list(roots or [])
        if self.roots:
            searched = ", ".join(str(root.path) for root in self.roots)
            message = f"No projects found under: {searched}"
        else:
            message = "No search roots configured"
        super().__init__(message)


class DependencyMissing(FindProjectError):
    """Raised when an external binary is missing or not executable."""

    exit_code = 4

    def __init__(self, binary: str, reason: str = "") -> None:
        self.binary = binary
        message = f"'{binary}' is not installed or not executable"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class ExternalCommandFailed(FindProjectError):
    """Raised when an external command exits with an unexpected status."""

    exit_code = 5

    def __init__(self, command: str, returncode: int, stderr: str = "") -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        message = f"{command} failed with exit status {returncode}"
        if stderr.strip():
            message = f"{message}: {stderr.strip()}"
        super().__init__(message)


class InvalidSelection(FindProjectError):
    """Raised when the selected path is not an existing directory."""

    exit_code = 6

    def __init__(self, path) -> None:
        self.path = path
        super().__init__(f"Selected project no longer exists: {path}")
