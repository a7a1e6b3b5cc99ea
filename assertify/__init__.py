"""Generate regression-test assertions from live object graphs.

Quick start:
    import assertify

    print(assertify.configure().include_null().assertify(order, "order"))
"""

from assertify.accessors import AccessorDescriptor, AccessorProvider
from assertify.config import SnapshotConfig
from assertify.exceptions import (
    AssertifyError,
    ConfigurationError,
    DepthLimitExceededError,
    IntrospectionError,
    JoinError,
    ResourceReadError,
    SnapshotError,
)
from assertify.generator import Assertifier, configure
from assertify.kinds import ValueKind, classify

__version__ = "0.1.0"

__all__ = [
    "AccessorDescriptor",
    "AccessorProvider",
    "Assertifier",
    "AssertifyError",
    "ConfigurationError",
    "DepthLimitExceededError",
    "IntrospectionError",
    "JoinError",
    "ResourceReadError",
    "SnapshotConfig",
    "SnapshotError",
    "ValueKind",
    "classify",
    "configure",
]
