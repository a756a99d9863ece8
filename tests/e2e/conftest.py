"""Default marks for tests under `tests/e2e/`."""

from pathlib import Path

import pytest

E2E_ROOT = Path(__file__).parent.resolve()


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Add default `e2e` marks to items in `tests/e2e/`."""
    for item in items:
        if E2E_ROOT in item.path.resolve().parents:
            if not any(marker.name == "e2e" for marker in item.iter_markers()):
                item.add_marker(pytest.mark.e2e)
