"""The ``orca`` command-line interface."""

from .main import orca

__all__ = ["orca"]
