"""SessionTarget dataclass for find-project."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class SessionTarget:
    """The tmux session a launch ended up in.

    Attributes:
        name: tmux session name, derived from the project directory
        path: Project directory the session is rooted at
        created: True if the session was created by this launch
    """

    name: str
    path: Path
    created: bool
