"""Exception taxonomy shared by the graph, bicluster, and algorithm layers."""


class ConfigurationError(ValueError):
    """Raised when algorithm or generator parameters are out of range."""


class ParseError(ValueError):
    """Raised when a graph or bicluster file line cannot be parsed.

    Carries the 1-based line number of the offending line (None when the
    input had no line structure).
    """

    def __init__(self, message: str, lineno: int | None = None) -> None:
        if lineno is not None:
            message = f"line {lineno}: {message}"
        super().__init__(message)
        self.lineno = lineno


class NodeIndexError(IndexError):
    """Raised when an edge or cluster references a node outside the graph."""


class MappingError(KeyError):
    """Raised when an external label cannot be resolved to a node index."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable.
        return str(self.args[0]) if self.args else ""


class GraphGenerationError(RuntimeError):
    """Raised when a planted-block graph cannot be synthesized."""
