"""Errors raised when an exploration cannot be started."""


class ExplorationError(ValueError):
    """Base class for invalid exploration requests."""


class EmptyStartSet(ExplorationError):
    """Raised when no starting vertices are supplied."""

    def __init__(self) -> None:
        super().__init__("Missing a starting node for the search.")


class UnknownStart(ExplorationError):
    """Raised when a starting vertex is not present in the graph."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"invalid starting node: {name}")


class InvalidWorkerCount(ExplorationError):
    """Raised when the number of parallel workers is lower than 1."""

    def __init__(self, n_workers: int) -> None:
        self.n_workers = n_workers
        super().__init__(
            f"The number of parallel workers cannot be lower than 1 (got {n_workers})."
        )


class GraphParseError(ExplorationError):
    """Raised when a DOT document cannot be turned into a graph."""

    def __init__(self, message: str, *, path: str | None = None) -> None:
        self.path = path
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)
