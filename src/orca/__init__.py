"""ORCA

A hierarchical, priority-ordered, in-process callback dispatcher.
Callbacks are registered under dotted namespaces and run for a namespace
together with every callback registered beneath it.
"""

from orca.config import DispatcherOptions
from orca.dispatcher import Dispatcher, Registration
from orca.domain.errors import (
    InvalidCallbackError,
    InvalidNamespaceError,
    InvalidPriorityError,
    NamespaceConflictError,
    OrcaError,
)

__all__ = [
    "Dispatcher",
    "DispatcherOptions",
    "InvalidCallbackError",
    "InvalidNamespaceError",
    "InvalidPriorityError",
    "NamespaceConflictError",
    "OrcaError",
    "Registration",
    "__version__",
    "default_dispatcher",
]
__version__ = "0.1.0"

default_dispatcher = Dispatcher(DispatcherOptions.from_env())
"""Shared dispatcher for applications that need only one; keys come from the environment."""
