"""Configuration utilities for ORCA.

This module centralizes the dispatcher defaults and the environment variables
that override them.
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from orca.domain.tree import split_namespace

logger = logging.getLogger(__name__)

DEFAULT_GLOBAL_KEY = "*"
DEFAULT_ENTRY_KEY = "__orca"

GLOBAL_KEY_ENV = "ORCA_GLOBAL_KEY"  # pragma: no mutate
ENTRY_KEY_ENV = "ORCA_ENTRY_KEY"  # pragma: no mutate
TARGET_ENV = "ORCA_TARGET"  # pragma: no mutate


@dataclass(frozen=True)
class DispatcherOptions:
    """Keys a dispatcher uses to lay out its namespace tree.

    Attributes:
        global_key: Namespace run on every dispatch unless globals are disabled.
        entry_key: Reserved token that registered namespaces may not contain.

    Raises:
        ValueError: If the entry key is empty, the global key is not a valid
            namespace, or the global key contains the entry key.
    """

    global_key: str = DEFAULT_GLOBAL_KEY
    entry_key: str = DEFAULT_ENTRY_KEY

    def __post_init__(self) -> None:
        if not isinstance(self.entry_key, str) or not self.entry_key:
            raise ValueError(
                f"entry_key must be a non-empty string, got {self.entry_key!r}."
            )
        split_namespace(self.global_key)
        if self.entry_key in self.global_key:
            raise ValueError(
                f"global_key {self.global_key!r} contains entry_key {self.entry_key!r}."
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "DispatcherOptions":
        """Build options from ``ORCA_GLOBAL_KEY`` and ``ORCA_ENTRY_KEY``.

        Unset or empty variables fall back to the defaults. Values that do not
        form valid options are ignored with a warning, so a bad environment
        never prevents ORCA from loading.

        Args:
            environ: Mapping to read from; defaults to ``os.environ``.

        Returns:
            The resulting options.
        """
        env = os.environ if environ is None else environ
        try:
            return cls(
                global_key=env.get(GLOBAL_KEY_ENV) or DEFAULT_GLOBAL_KEY,
                entry_key=env.get(ENTRY_KEY_ENV) or DEFAULT_ENTRY_KEY,
            )
        except ValueError as e:
            logger.warning(
                "Ignoring %s/%s, using the default keys: %s", GLOBAL_KEY_ENV, ENTRY_KEY_ENV, e
            )
            return cls()
