import os

import pytest
from typer.testing import CliRunner

from layercache import main as cli_main
from layercache.core.clock import ManualClock
from layercache.infrastructure.cli.display import ConsoleDisplay
from layercache.infrastructure.config import settings


@pytest.fixture(scope="session")
def runner():
    """Provides a Typer CliRunner instance."""
    return CliRunner()


@pytest.fixture
def clock():
    """A clock that only advances when the test says so."""
    return ManualClock(start=1000.0)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keeps tests independent of the developer's environment and config files.

    Removes LAYERCACHE_* variables, points the loader at an empty temp dir
    and clears any test overrides afterwards.
    """
    for name in list(os.environ):
        if name.startswith(settings.ENV_PREFIX):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(settings, "_config", {})
    monkeypatch.setattr(settings, "_loaded", True)
    yield
    settings.clear_test_config()


@pytest.fixture
def mock_console_display(mocker):
    """Replaces the CLI's dependencies with a mocked ConsoleDisplay."""
    mock = mocker.MagicMock(spec=ConsoleDisplay)
    mocker.patch.object(cli_main, "create_dependencies", return_value={'ui': mock})
    cli_main._dependencies.clear()
    yield mock
    cli_main._dependencies.clear()
