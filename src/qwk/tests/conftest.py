"""
Shared pytest configuration for qwk tests.

Every test gets its own home directory under tmp_path; configuration is
passed explicitly, so nothing here touches the real environment.
"""

import pytest
from typing import List, Sequence, Tuple

from qwk.config import QwkConfig
from qwk.storage import AliasStore, AgentStore


class RecordingRunner:
    """Agent runner that records calls instead of spawning processes."""
    
    def __init__(self, exit_code: int = 0):
        self.exit_code = exit_code
        self.calls: List[Tuple[str, List[str]]] = []
    
    def __call__(self, program: str, args: Sequence[str]) -> int:
        self.calls.append((program, list(args)))
        return self.exit_code


@pytest.fixture
def home_dir(tmp_path):
    """A fake home directory."""
    home = tmp_path / "home"
    home.mkdir()
    return home


@pytest.fixture
def config(home_dir):
    """Configuration rooted at the fake home directory."""
    return QwkConfig(home=home_dir, shell="/bin/bash")


@pytest.fixture
def alias_store(config):
    return AliasStore(config)


@pytest.fixture
def agent_store(config):
    return AgentStore(config)


@pytest.fixture
def runner():
    return RecordingRunner()


@pytest.fixture
def environ(home_dir):
    """Environment mapping for qwk.main.main with first-run already done."""
    marker = home_dir / ".config" / "qwk" / ".first_run_complete"
    marker.parent.mkdir(parents=True, exist_ok=True)
    marker.touch()
    return {"HOME": str(home_dir), "SHELL": "/bin/bash"}


def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
