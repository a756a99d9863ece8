"""Typed namespace tree used by the dispatcher.

The tree mirrors the dotted namespaces callbacks are registered under:
``"a.b"`` lives in child ``"a"`` and then child ``"b"`` of the root. Each
`NamespaceNode` keeps its child namespaces in insertion order and holds its
own callbacks in a separate `PriorityTable`. The node also remembers where
among its children that table was created, so a walk of the tree visits
tables and namespaces in the order they were first added.

Collecting the tables of a subtree walks that structure with an explicit
stack, so running ``"foo"`` reaches the callbacks of ``"foo"``,
``"foo.bar"``, ``"foo.bar.baz"`` and so on, however deep the tree is.
"""

from __future__ import annotations

from collections.abc import Callable, Collection, Iterator, Sequence
from dataclasses import dataclass, field
from typing import TypeAlias

from orca.domain.errors import InvalidNamespaceError

Callback: TypeAlias = Callable[[], object]

SEPARATOR = "."


@dataclass(frozen=True)
class CallbackEntry:
    """A registered callback and the namespaces that suppress it.

    Attributes:
        func: Callable invoked with no arguments; its return value is ignored.
        excludes: Namespaces which, when among those being run, skip this entry.
    """

    func: Callback
    excludes: tuple[str, ...] = ()

    def is_excluded(self, called: Collection[str]) -> bool:
        """Return True if any exclude is among the called namespaces."""
        return any(name in called for name in self.excludes)


@dataclass
class PriorityTable:
    """Callback entries of one namespace grouped by integer priority."""

    levels: dict[int, list[CallbackEntry]] = field(default_factory=dict)

    def append(self, priority: int, entry: CallbackEntry) -> None:
        """Append an entry at the end of its priority level."""
        self.levels.setdefault(priority, []).append(entry)

    def ordered(self) -> list[tuple[int, tuple[CallbackEntry, ...]]]:
        """Return levels from highest to lowest priority.

        Each level is copied, so appending to the table while iterating the
        result does not change it.
        """
        return [
            (priority, tuple(self.levels[priority]))
            for priority in sorted(self.levels, reverse=True)
        ]

    def clone(self) -> PriorityTable:
        """Return a copy that shares no mutable state with this table."""
        return PriorityTable(
            {priority: list(entries) for priority, entries in self.levels.items()}
        )

    def __len__(self) -> int:
        return sum(len(entries) for entries in self.levels.values())


@dataclass
class NamespaceNode:
    """A namespace, its own callbacks and its child namespaces.

    Attributes:
        children: Child namespaces, in insertion order.
        table: Callbacks registered at this namespace, or None if there are none.
        table_index: Number of children that existed when ``table`` was
            created; the table is visited before the child at that position.
    """

    children: dict[str, NamespaceNode] = field(default_factory=dict)
    table: PriorityTable | None = None
    table_index: int = 0

    # --- Lookup ---

    def find(self, segments: Sequence[str]) -> NamespaceNode | None:
        """Return the descendant namespace at ``segments``, or None if missing."""
        node = self
        for segment in segments:
            child = node.children.get(segment)
            if child is None:
                return None
            node = child
        return node

    def layout(self) -> list[tuple[str | None, NamespaceNode | PriorityTable]]:
        """Return ``(segment, child)`` pairs with the own table in its place.

        The own table is reported with a None segment.
        """
        items: list[tuple[str | None, NamespaceNode | PriorityTable]] = list(
            self.children.items()
        )
        if self.table is not None:
            items.insert(self.table_index, (None, self.table))
        return items

    # --- Mutation ---

    def ensure(self, segments: Sequence[str]) -> NamespaceNode:
        """Return the descendant namespace at ``segments``, creating nodes as needed."""
        node = self
        for segment in segments:
            child = node.children.get(segment)
            if child is None:
                child = node.children[segment] = NamespaceNode()
            node = child
        return node

    def ensure_table(self) -> PriorityTable:
        """Return this namespace's priority table, creating it if needed."""
        if self.table is None:
            self.table = PriorityTable()
            self.table_index = len(self.children)
        return self.table

    # --- Copying ---

    def clone(self) -> NamespaceNode:
        """Return a deep copy of the tree structure.

        Callback entries are immutable and therefore shared.
        """
        root = NamespaceNode()
        stack = [(self, root)]
        while stack:
            source, target = stack.pop()
            if source.table is not None:
                target.table = source.table.clone()
            target.table_index = source.table_index
            for segment, child in source.children.items():
                copy = target.children[segment] = NamespaceNode()
                stack.append((child, copy))
        return root


def split_namespace(namespace: str) -> list[str]:
    """Split a dotted namespace into its segments.

    Args:
        namespace: Dotted path such as ``"foo.bar"``.

    Returns:
        The non-empty segments of the namespace.

    Raises:
        InvalidNamespaceError: If the namespace is not a string or has an empty segment.
    """
    if not isinstance(namespace, str):
        raise InvalidNamespaceError(namespace, "namespace must be a string")
    segments = namespace.split(SEPARATOR)
    if not all(segments):
        raise InvalidNamespaceError(namespace)
    return segments


def collect_priority_tables(node: NamespaceNode | None) -> list[PriorityTable]:
    """Collect every priority table at or below ``node``.

    The subtree is walked depth-first, visiting each node's own table and
    child namespaces in the order they were added, so the result is in
    document order of the tree.

    Args:
        node: Root of the subtree to search; None yields an empty list.

    Returns:
        The priority tables found, in traversal order.
    """
    return [table for _, table in iter_tables(node)] if node is not None else []


def iter_tables(
    node: NamespaceNode, path: tuple[str, ...] = ()
) -> Iterator[tuple[tuple[str, ...], PriorityTable]]:
    """Yield ``(segments, table)`` for every table in the tree, in document order."""
    stack: list[tuple[tuple[str, ...], NamespaceNode | PriorityTable]] = [(path, node)]
    while stack:
        segments, item = stack.pop()
        if isinstance(item, PriorityTable):
            yield segments, item
            continue
        for segment, child in reversed(item.layout()):
            stack.append((segments if segment is None else (*segments, segment), child))
