"""Domain-layer error definitions."""

# ============================================================================
#                           General errors
# ============================================================================


class OrcaError(Exception):
    """Base class for all ORCA errors."""


# ============================================================================
#                           Registration errors
# ============================================================================


class InvalidNamespaceError(OrcaError, ValueError):
    """Raised when a namespace is not a dotted path of non-empty segments."""

    def __init__(self, namespace: object, reason: str = "empty segment") -> None:
        super().__init__(f"Invalid namespace {namespace!r}: {reason}.")
        self.namespace = namespace


class NamespaceConflictError(InvalidNamespaceError):
    """Raised when a namespace contains the reserved entry key."""

    def __init__(self, namespace: str, entry_key: str) -> None:
        super().__init__(namespace, f"matches reserved entry key {entry_key!r}")
        self.entry_key = entry_key


class InvalidCallbackError(OrcaError, TypeError):
    """Raised when a registered callback (or one of its excludes) has the wrong type."""

    def __init__(self, value: object, message: str | None = None) -> None:
        super().__init__(
            message
            or f"Registered callback must be callable, got {type(value).__name__}."
        )
        self.value = value


class InvalidPriorityError(OrcaError, TypeError):
    """Raised when a priority is not an integer."""

    def __init__(self, priority: object) -> None:
        super().__init__(
            f"Priority must be an integer, got {type(priority).__name__}."
        )
        self.priority = priority


# ============================================================================
#                           Entrypoint errors
# ============================================================================


class TargetLoadError(OrcaError):
    """Raised when a ``module:attribute`` dispatcher target cannot be loaded."""

    def __init__(self, target: str, reason: str) -> None:
        super().__init__(f"Cannot load dispatcher target '{target}': {reason}")
        self.target = target
