"""Hierarchical, priority-ordered callback dispatcher."""

import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import TypeVar

from orca.config import DispatcherOptions
from orca.domain.errors import (
    InvalidCallbackError,
    InvalidNamespaceError,
    InvalidPriorityError,
    NamespaceConflictError,
)
from orca.domain.tree import (
    SEPARATOR,
    Callback,
    CallbackEntry,
    NamespaceNode,
    collect_priority_tables,
    iter_tables,
    split_namespace,
)

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[[], object])

# pylint: disable=too-few-public-methods


@dataclass(frozen=True)
class Registration:
    """A callback as stored in the tree, for introspection."""

    namespace: str
    priority: int
    entry: CallbackEntry


def callback_name(fn: Callable[..., object]) -> str:
    """Return a readable name for a callback, unwrapping `functools.partial`."""
    if hasattr(fn, "__name__"):
        return fn.__name__
    if hasattr(fn, "func") and hasattr(fn.func, "__name__"):
        return fn.func.__name__
    return repr(fn)


def _as_tuple(value: str | Iterable[str]) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    return tuple(value)


class Dispatcher:
    """Registers callbacks under dotted namespaces and runs them by namespace.

    Running a namespace runs every callback registered at that namespace and at
    any namespace below it. Within the priority table of a namespace, higher
    priorities run first and callbacks of equal priority run in registration
    order. The global namespace is run before everything else unless disabled.

    Args:
        options: Keys used to lay out the tree. Defaults to `DispatcherOptions()`.
        global_key: Overrides ``options.global_key``.
        entry_key: Overrides ``options.entry_key``.
        defaults: Tree the dispatcher starts with and returns to on `reset`.
            It is copied, so later changes to the passed tree have no effect.

    Note:
        Callbacks may register actions, run namespaces or reset the dispatcher.
        The callbacks of a namespace are fixed when its dispatch begins, so such
        changes apply to namespaces dispatched afterwards, never to the one
        currently running.
    """

    def __init__(
        self,
        options: DispatcherOptions | None = None,
        *,
        global_key: str | None = None,
        entry_key: str | None = None,
        defaults: NamespaceNode | None = None,
    ) -> None:
        options = options or DispatcherOptions()
        if global_key is not None or entry_key is not None:
            options = DispatcherOptions(
                global_key=options.global_key if global_key is None else global_key,
                entry_key=options.entry_key if entry_key is None else entry_key,
            )
        self._options = options
        self._defaults = defaults.clone() if defaults is not None else NamespaceNode()
        self._root = self._defaults.clone()
        self._depth = 0
        self._reported: BaseException | None = None

    @property
    def global_key(self) -> str:
        """Namespace run on every dispatch unless globals are disabled."""
        return self._options.global_key

    @property
    def entry_key(self) -> str:
        """Reserved token that registered namespaces may not contain."""
        return self._options.entry_key

    @property
    def options(self) -> DispatcherOptions:
        """The options this dispatcher was built with."""
        return self._options

    # --- Registration ---

    def register_action(
        self,
        namespace: str,
        func: Callback,
        *,
        priority: int = 0,
        excludes: str | Iterable[str] = (),
    ) -> None:
        """Register a callback under a namespace.

        Args:
            namespace: Dotted namespace, e.g. ``"foo.bar"``.
            func: Callable taking no arguments.
            priority: Higher priorities run first within the namespace.
            excludes: Namespace or namespaces which, when run, suppress this callback.

        Raises:
            NamespaceConflictError: If the namespace contains the entry key.
            InvalidNamespaceError: If the namespace has an empty segment.
            InvalidCallbackError: If ``func`` is not callable or an exclude is not a string.
            InvalidPriorityError: If ``priority`` is not an integer.
        """
        if not isinstance(namespace, str):
            raise InvalidNamespaceError(namespace, "namespace must be a string")
        if self.entry_key in namespace:
            raise NamespaceConflictError(namespace, self.entry_key)
        if not callable(func):
            raise InvalidCallbackError(func)
        segments = split_namespace(namespace)
        if isinstance(priority, bool) or not isinstance(priority, int):
            raise InvalidPriorityError(priority)
        excluded = _as_tuple(excludes)
        if not all(isinstance(name, str) for name in excluded):
            raise InvalidCallbackError(excludes, "Excludes must be namespace strings.")

        entry = CallbackEntry(func=func, excludes=excluded)
        self._root.ensure(segments).ensure_table().append(priority, entry)
        logger.debug(
            "Registered callback %s under %s (priority=%d, excludes=%s)",
            callback_name(func),
            namespace,
            priority,
            list(excluded),
        )

    def register_global_action(
        self,
        func: Callback,
        *,
        priority: int = 0,
        excludes: str | Iterable[str] = (),
    ) -> None:
        """Register a callback under the global namespace.

        See `register_action` for arguments and errors.
        """
        self.register_action(self.global_key, func, priority=priority, excludes=excludes)

    def action(
        self, namespace: str, *, priority: int = 0, excludes: str | Iterable[str] = ()
    ) -> Callable[[F], F]:
        """Decorator form of `register_action`; returns the function unchanged."""

        def decorator(func: F) -> F:
            self.register_action(namespace, func, priority=priority, excludes=excludes)
            return func

        return decorator

    def global_action(
        self, *, priority: int = 0, excludes: str | Iterable[str] = ()
    ) -> Callable[[F], F]:
        """Decorator form of `register_global_action`; returns the function unchanged."""
        return self.action(self.global_key, priority=priority, excludes=excludes)

    # --- Lifecycle ---

    def reset(self) -> None:
        """Replace the tree with a copy of the one the dispatcher was built with."""
        self._root = self._defaults.clone()
        logger.debug("Dispatcher reset to its default callbacks")

    def snapshot(self) -> NamespaceNode:
        """Return an independent copy of the current tree.

        The copy can seed the ``defaults`` of another dispatcher.
        """
        return self._root.clone()

    def registrations(self) -> Iterator[Registration]:
        """Yield every registered callback in tree order, highest priority first."""
        for segments, table in iter_tables(self._root):
            namespace = SEPARATOR.join(segments)
            for priority, entries in table.ordered():
                for entry in entries:
                    yield Registration(namespace, priority, entry)

    # --- Dispatch ---

    def run(
        self, namespaces: str | Iterable[str] = (), *, run_globals: bool = True
    ) -> None:
        """Run the callbacks of the given namespaces and all their descendants.

        Each distinct namespace is dispatched once, in order of first
        appearance. A callback is skipped when one of its excludes is among
        the namespaces being run, the global namespace included.

        Args:
            namespaces: Namespace or namespaces to run.
            run_globals: Run the global namespace first.

        Raises:
            Exception: Whatever a callback raises; remaining callbacks are not run.
        """
        called = list(_as_tuple(namespaces))
        if run_globals:
            called.insert(0, self.global_key)
        logger.debug("Running namespaces %s", called)

        self._depth += 1
        try:
            for namespace in dict.fromkeys(called):
                self._dispatch_namespace(namespace, called)
        finally:
            self._depth -= 1
            if not self._depth:
                self._reported = None

    def _dispatch_namespace(self, namespace: str, called: list[str]) -> None:
        node = self._root.find(namespace.split(SEPARATOR))
        if node is None:
            logger.debug("No callbacks registered under %s", namespace)
            return

        plan = [table.ordered() for table in collect_priority_tables(node)]
        for levels in plan:
            for priority, entries in levels:
                for entry in entries:
                    if entry.is_excluded(called):
                        logger.debug(
                            "Skipping callback %s in %s: excluded by %s",
                            callback_name(entry.func),
                            namespace,
                            [name for name in entry.excludes if name in called],
                        )
                        continue
                    self._invoke(entry, namespace, priority)

    def _invoke(self, entry: CallbackEntry, namespace: str, priority: int) -> None:
        name = callback_name(entry.func)
        logger.debug("Running callback %s for %s (priority=%d)", name, namespace, priority)
        try:
            entry.func()
        except Exception as e:  # pylint: disable=broad-except
            # Nested runs re-raise through every outer callback; log once.
            if e is not self._reported:
                logger.exception(
                    "Exception running callback %s for %s", name, namespace
                )
                self._reported = e
            raise
