"""Fluent snapshot generator.

Example:
    order = load_order(42)
    assertify.configure().include_null().ignore(Session).print_assertions(order, "order")

prints something like::

    assert order is not None
    assert len(cast(list, order.lines)) == 1
    assert cast(int, cast(OrderLine, cast(list, order.lines)[0]).quantity) == 3
    assert order.status == Status.OPEN
    assert order.voucher is None
"""

import sys
from typing import Any, Iterable, Optional, TextIO

from assertify.accessors import AccessorProvider
from assertify.config import DIALECTS, SnapshotConfig
from assertify.engine import TraversalContext, snapshot
from assertify.exceptions import ConfigurationError


class Assertifier:
    """Configurable generator of regression assertions.

    Each option returns the same instance so calls can be chained. Options
    only affect traversals started after them.
    """

    def __init__(self, config: Optional[SnapshotConfig] = None) -> None:
        self._config = config or SnapshotConfig()

    @property
    def config(self) -> SnapshotConfig:
        return self._config

    def include_null(self) -> "Assertifier":
        """Assert ``is None`` for accessors returning None."""
        self._config = self._config.with_options(include_null=True)
        return self

    def include_empty_lists(self) -> "Assertifier":
        """Assert that empty sequences are still empty."""
        self._config = self._config.with_options(include_empty_lists=True)
        return self

    def include_ids(self) -> "Assertifier":
        """Keep identifier-like accessors.

        Ids are left out by default: generated keys change between runs
        against a non-empty database and would make the assertions flaky.
        """
        self._config = self._config.with_options(include_ids=True)
        return self

    def ignore(self, *types: type) -> "Assertifier":
        """Skip instances of the given types entirely."""
        for cls in types:
            if not isinstance(cls, type):
                raise ConfigurationError(f"ignore() expects types, got {cls!r}")
        self._config = self._config.with_options(
            ignored_types=self._config.ignored_types | frozenset(types)
        )
        return self

    def ignore_modules(self, *prefixes: str) -> "Assertifier":
        """Treat values whose type lives under these modules as framework internals."""
        existing = self._config.ignored_module_prefixes
        added = tuple(p for p in dict.fromkeys(prefixes) if p not in existing)
        self._config = self._config.with_options(
            ignored_module_prefixes=self._config.ignored_module_prefixes + added
        )
        return self

    def describe_type(self, cls: type, names: Iterable[str]) -> "Assertifier":
        """Read instances of exactly ``cls`` through ``names`` only, in that order.

        Describing the same type again replaces the earlier names.
        """
        if not isinstance(cls, type):
            raise ConfigurationError(f"describe_type() expects a type, got {cls!r}")
        if isinstance(names, str):
            raise ConfigurationError("describe_type() expects a list of names, got a string")
        names = tuple(names)
        for name in names:
            if not isinstance(name, str) or not name.isidentifier():
                raise ConfigurationError(f"Invalid accessor name {name!r} for {cls.__qualname__}")
        tables = tuple(entry for entry in self._config.type_accessors if entry[0] is not cls)
        self._config = self._config.with_options(type_accessors=tables + ((cls, names),))
        return self

    def use_provider(self, provider: AccessorProvider) -> "Assertifier":
        """Consult ``provider`` ahead of the built-in accessor providers.

        The most recently added provider is asked first.
        """
        if not isinstance(provider, AccessorProvider):
            raise ConfigurationError(
                f"use_provider() expects claims() and accessors(), got {provider!r}"
            )
        self._config = self._config.with_options(
            accessor_providers=(provider,) + self._config.accessor_providers
        )
        return self

    def max_depth(self, depth: int) -> "Assertifier":
        """Fail instead of descending deeper than ``depth`` levels."""
        if isinstance(depth, bool) or not isinstance(depth, int) or depth < 0:
            raise ConfigurationError(f"max_depth must be a non-negative int, got {depth!r}")
        self._config = self._config.with_options(max_depth=depth)
        return self

    def dialect(self, name: str) -> "Assertifier":
        """Choose between bare ``assert`` statements and ``self.assert*`` calls."""
        if name not in DIALECTS:
            raise ConfigurationError(
                f"Unknown dialect {name!r}, expected one of {', '.join(DIALECTS)}"
            )
        self._config = self._config.with_options(dialect=name)
        return self

    def snapshot(self, obj: Any, name: str) -> TraversalContext:
        """Traverse ``obj`` and return the raw traversal result."""
        return snapshot(obj, name, self._config)

    def assertify(self, obj: Any, name: str) -> str:
        """Generate assertions characterizing ``obj``.

        Args:
            obj: Any object
            name: Name of the object in the calling test

        Returns:
            Assertion source, one statement per line

        Raises:
            SnapshotError: If the object graph cannot be introspected or
                is deeper than the configured limit
        """
        return self.snapshot(obj, name).render()

    def print_assertions(self, obj: Any, name: str, stream: Optional[TextIO] = None) -> None:
        """Write the generated assertions to ``stream`` (stdout by default)."""
        (stream or sys.stdout).write(self.assertify(obj, name))


def configure() -> Assertifier:
    """Return a fresh generator with the default policy."""
    return Assertifier()
