"""Global pytest fixtures for ORCA."""

from __future__ import annotations

import pytest

from orca import Dispatcher
from tests.helpers.recorder import CallRecorder


@pytest.fixture
def dispatcher() -> Dispatcher:
    """A fresh dispatcher with default keys."""
    return Dispatcher()


@pytest.fixture
def recorder() -> CallRecorder:
    """Recorder handing out named callbacks that log their calls."""
    return CallRecorder()
