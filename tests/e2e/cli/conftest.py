"""Fixtures for end-to-end tests of the ``orca`` command.

Each test gets a CliRunner, an isolated working directory, and a freshly
written application module whose dispatcher the commands can target.
"""

import logging
import sys
from dataclasses import dataclass
from pathlib import Path

import pytest
from click.testing import CliRunner

from tests.helpers.apps import write_app

# pylint: disable=redefined-outer-name


@dataclass(frozen=True)
class App:
    """An application module on disk."""

    directory: Path
    module: str

    def args(self, *extra: str) -> list[str]:
        """Group options pointing the CLI at this application's directory."""
        return ["--app-dir", str(self.directory), *extra]


@pytest.fixture(autouse=True)
def restore_logging_and_path(monkeypatch):
    """Undo the root-logger and import-path changes made by the CLI."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    levels = {
        name: logger.level
        for name, logger in logging.root.manager.loggerDict.items()
        if isinstance(logger, logging.Logger)
    }
    monkeypatch.setattr(sys, "path", list(sys.path))
    modules = set(sys.modules)
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    for name, logger in list(logging.root.manager.loggerDict.items()):
        if isinstance(logger, logging.Logger):
            logger.setLevel(levels.get(name, logging.NOTSET))
    for name in set(sys.modules) - modules:
        if name.startswith("orca_app_"):
            del sys.modules[name]


@pytest.fixture
def runner():
    """Return a Click CliRunner for invoking CLI commands in tests."""
    return CliRunner()


@pytest.fixture
def fs(runner):
    """Run the test inside an isolated filesystem."""
    with runner.isolated_filesystem():
        yield


@pytest.fixture
def app(tmp_path) -> App:
    """An application module with global, page, page.home and boom callbacks."""
    return App(tmp_path, write_app(tmp_path))


@pytest.fixture
def empty_app(tmp_path) -> App:
    """An application module whose dispatcher has no callbacks."""
    source = "from orca import Dispatcher\n\ndispatcher = Dispatcher()\n"
    return App(tmp_path, write_app(tmp_path, source))
