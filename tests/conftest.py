"""Shared pytest fixtures for find-project tests."""

import subprocess
from pathlib import Path

import pytest

from tests.helpers import FakeSessionManager


@pytest.fixture
def worker_id(request):
    """Get the pytest-xdist worker ID, or 'master' if not running in parallel."""
    if hasattr(request.config, "workerinput"):
        return request.config.workerinput["workerid"]
    return "master"


@pytest.fixture
def tmux_socket(worker_id):
    """An isolated tmux server socket, killed before and after the test.

    Without socket isolation, tests could kill the developer's real sessions.
    """
    socket = f"find-project-test-{worker_id}"
    subprocess.run(["tmux", "-L", socket, "kill-server"], capture_output=True)
    yield socket
    subprocess.run(["tmux", "-L", socket, "kill-server"], capture_output=True)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep the user's config, roots and tmux out of every test."""
    config_home = tmp_path / "xdg-config"
    config_home.mkdir()
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    for name in (
        "FIND_PROJECT_ROOTS",
        "FIND_PROJECT_FINDER",
        "FIND_PROJECT_TMUX_SOCKET",
        "TMUX",
    ):
        monkeypatch.delenv(name, raising=False)
    return config_home


@pytest.fixture
def make_tree(tmp_path):
    """Create directories under a fresh root and return the root.

    Example:
        root = make_tree("ada/scope", "ada/mx", "bob/site")
    """

    def _make(*relpaths: str, root: str = "root") -> Path:
        base = tmp_path / root
        base.mkdir(exist_ok=True)
        for rel in relpaths:
            (base / rel).mkdir(parents=True, exist_ok=True)
        return base

    return _make


@pytest.fixture
def fake_sessions():
    return FakeSessionManager()
