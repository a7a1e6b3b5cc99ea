"""Traversal engine.

Walks an object graph depth-first and records one assertion per observable
terminal value. Composite values are expanded through their accessors,
sequences through their elements.

Cycle handling:
    Composite values and sequences other than tuples are remembered by
    identity the first time they are reached; reaching the same instance
    again (self references, diamonds) yields no further output. Terminal
    values are never remembered, so two fields that happen to hold equal
    text, numbers, enum members or booleans are both asserted.
"""

import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from assertify import emitters
from assertify.accessors import AccessorDescriptor, discover_accessors
from assertify.config import LINE_TERMINATOR, SnapshotConfig
from assertify.emitters import AssertionLine
from assertify.exceptions import DepthLimitExceededError, IntrospectionError
from assertify.kinds import ValueKind, classify
from assertify.paths import PathBuilder
from assertify.result import try_result

logger = logging.getLogger(__name__)


@dataclass
class TraversalContext:
    """State of one traversal; created per call and discarded afterwards.

    Attributes:
        config: Inclusion policy snapshot, read-only for the whole traversal
        lines: Assertions emitted so far, in traversal order
        skipped_accessors: Accessors whose invocation raised
    """

    config: SnapshotConfig
    lines: List[AssertionLine] = field(default_factory=list)
    skipped_accessors: int = 0
    # id() -> value; holding the value keeps its id from being reused
    _visited: Dict[int, Any] = field(default_factory=dict, repr=False)

    def has_visited(self, value: Any) -> bool:
        return id(value) in self._visited

    def mark_visited(self, value: Any) -> None:
        self._visited[id(value)] = value

    @property
    def visited_count(self) -> int:
        return len(self._visited)

    def emit(self, line: AssertionLine) -> None:
        self.lines.append(line)

    def render(self) -> str:
        render_line = emitters.renderer_for(self.config.dialect)
        if not self.lines:
            return ""
        return LINE_TERMINATOR.join(render_line(line) for line in self.lines) + LINE_TERMINATOR


def is_tracked(value: Any, kind: ValueKind) -> bool:
    """True if ``value`` is remembered by identity in the visited set.

    Tuples are left out: CPython shares empty and constant tuples between
    unrelated fields, and a cycle cannot pass through tuples alone.
    """
    return kind.is_tracked and not isinstance(value, tuple)


def _check_depth(context: TraversalContext, path: str, depth: int) -> None:
    if depth > context.config.max_depth:
        raise DepthLimitExceededError(path, context.config.max_depth)


def is_skipped(value: Any, config: SnapshotConfig) -> bool:
    """True if a composite value must not be expanded at all."""
    if inspect.ismodule(value) or inspect.isclass(value) or inspect.isroutine(value):
        return True
    cls = type(value)
    if config.is_ignored_type(cls):
        return True
    return config.is_foreign_module(getattr(cls, "__module__", None) or "")


def traverse(
    context: TraversalContext,
    value: Any,
    path: str,
    accessor: Optional[AccessorDescriptor] = None,
    is_root: bool = False,
    depth: int = 0,
) -> None:
    """Emit the assertions describing ``value`` into ``context``.

    Args:
        context: Traversal state receiving the assertions
        value: Value to describe
        path: Path of the owner of ``accessor``, or of ``value`` itself
            when no accessor is given
        accessor: Accessor that produced ``value``
        is_root: Emit the unconditional not-None check first
        depth: Nesting level of ``value`` below the root

    Raises:
        DepthLimitExceededError: If a sequence or composite deeper than the
            configured limit has to be expanded
        IntrospectionError: If a composite or sequence cannot be enumerated
    """
    config = context.config
    kind = classify(value)
    path = PathBuilder.for_accessor(path, accessor, value, kind)

    if is_root:
        context.emit(emitters.not_null(path))

    if value is not None and context.has_visited(value):
        return
    if is_tracked(value, kind):
        context.mark_visited(value)

    if kind is ValueKind.NULL:
        if config.include_null:
            context.emit(emitters.null(path))
    elif kind is ValueKind.TEMPORAL:
        pass
    elif kind is ValueKind.SEQUENCE:
        _traverse_sequence(context, value, path, depth)
    elif kind is ValueKind.COMPOSITE:
        _traverse_composite(context, value, path, depth)
    else:
        context.emit(emitters.value_assertion(value, kind, path))


def _traverse_sequence(context: TraversalContext, sequence: Any, path: str, depth: int) -> None:
    try:
        elements = list(sequence)
    except Exception as e:
        raise IntrospectionError(
            f"Cannot enumerate elements of {type(sequence).__qualname__} at {path}: {e}"
        ) from e

    if elements:
        _check_depth(context, path, depth)

    if elements or context.config.include_empty_lists:
        context.emit(emitters.equals(str(len(elements)), PathBuilder.for_size(path)))

    for index, element in enumerate(elements):
        element_path = PathBuilder.for_element(path, index, element)
        traverse(context, element, element_path, depth=depth + 1)


def _traverse_composite(context: TraversalContext, value: Any, path: str, depth: int) -> None:
    if is_skipped(value, context.config):
        logger.debug("Skipping %s at %s", type(value).__qualname__, path)
        return

    accessors = discover_accessors(value, context.config)
    if accessors:
        _check_depth(context, path, depth)

    for accessor in accessors:
        result = try_result(accessor.invoke)
        if result.is_err():
            # Failing accessors count as absent, not as None
            context.skipped_accessors += 1
            logger.debug("Accessor %r at %s raised %r, skipped", accessor.name, path, result.error)
            continue
        traverse(context, result.unwrap(), path, accessor, depth=depth + 1)


def snapshot(value: Any, name: str, config: SnapshotConfig) -> TraversalContext:
    """Run one full traversal from a root value.

    Returns:
        The finished context holding every emitted assertion
    """
    context = TraversalContext(config=config)
    traverse(context, value, PathBuilder.root(name), is_root=True)
    logger.info(
        "Generated %d assertions for %s (%d objects visited, %d accessors skipped)",
        len(context.lines),
        name,
        context.visited_count,
        context.skipped_accessors,
    )
    return context
