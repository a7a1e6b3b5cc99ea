"""Assertify exception hierarchy.

Centralised base classes so callers can catch a single root type and the
CLI can tell expected failures apart from programming errors.
"""


class AssertifyError(Exception):
    """Root of all assertify exceptions."""


class SnapshotError(AssertifyError):
    """Errors while generating a snapshot of an object graph."""


class IntrospectionError(SnapshotError):
    """Accessors of a value could not be enumerated or its type could not be read."""


class DepthLimitExceededError(SnapshotError):
    """The object graph is deeper than the configured maximum depth."""

    def __init__(self, path: str, max_depth: int) -> None:
        super().__init__(f"Maximum depth {max_depth} exceeded at {path}")
        self.path = path
        self.max_depth = max_depth


class ConfigurationError(AssertifyError):
    """Invalid generator configuration."""


class ResourceReadError(AssertifyError):
    """A line-oriented resource could not be read."""


class JoinError(AssertifyError):
    """A key extractor failed while grouping or joining."""
