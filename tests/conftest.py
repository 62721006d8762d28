"""
Pytest configuration and fixtures for reposync tests.
"""

import sys
import tempfile
from pathlib import Path
from typing import Callable, Generator
from unittest.mock import Mock

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def make_result() -> Callable[..., "CommandResult"]:
    """Factory for command results."""
    from reposync.platform.base import CommandResult

    def _make(returncode: int = 0, stdout: str = "", stderr: str = "") -> CommandResult:
        return CommandResult(returncode=returncode, stdout=stdout, stderr=stderr, command=["mock"])

    return _make


@pytest.fixture
def mock_runner(make_result: Callable[..., "CommandResult"]) -> Mock:
    """Create a mock command runner whose commands all succeed silently."""
    from reposync.platform.base import CommandRunner

    runner = Mock(spec=CommandRunner)
    runner.run.return_value = make_result()
    return runner


@pytest.fixture
def transport() -> "TransportConfig":
    """Default transport configuration."""
    from reposync.core.config import TransportConfig

    return TransportConfig()


@pytest.fixture
def sample_config(temp_dir: Path) -> "ReposyncConfig":
    """Create a sample configuration for testing."""
    from reposync.core.config import ReposyncConfig

    config = ReposyncConfig()
    config.logging.log_directory = temp_dir / "logs"
    config.logging.console_enabled = False
    return config


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
