"""Assertion lines and their rendering into test source."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional

from assertify.config import DIALECTS, PYTEST_DIALECT, UNITTEST_DIALECT
from assertify.exceptions import ConfigurationError
from assertify.kinds import ValueKind, classify


class AssertionType(Enum):
    NOT_NULL = "not_null"
    NULL = "null"
    EQUALS = "equals"
    IS = "is"  # identity comparison, used for booleans


@dataclass(frozen=True)
class AssertionLine:
    """A single emitted statement.

    Attributes:
        assertion: Which comparison the line performs
        path: Path expression on the actual side
        expected: Literal source on the expected side (None for nullity checks)
    """

    assertion: AssertionType
    path: str
    expected: Optional[str] = None


def literal(value: Any, kind: ValueKind) -> str:
    """Python source reconstructing a terminal value."""
    if kind in (ValueKind.INTEGER32, ValueKind.INTEGER64):
        return repr(int(value))
    if kind is ValueKind.TEXT:
        return repr(str(value))
    if kind is ValueKind.ENUMERATED:
        return f"{type(value).__name__}.{value.name}"
    if kind is ValueKind.BOOLEAN:
        return "True" if value else "False"
    raise ValueError(f"No literal form for {kind.value} values")


# Key kinds that can be spelled as a subscript literal
KEY_KINDS = frozenset(
    {
        ValueKind.INTEGER32,
        ValueKind.INTEGER64,
        ValueKind.TEXT,
        ValueKind.ENUMERATED,
        ValueKind.BOOLEAN,
    }
)


def key_literal(key: Any) -> Optional[str]:
    """Python source of a mapping key, or None if it has no literal form."""
    kind = classify(key)
    if kind is ValueKind.NULL:
        return "None"
    if kind in KEY_KINDS:
        return literal(key, kind)
    return None


def not_null(path: str) -> AssertionLine:
    return AssertionLine(AssertionType.NOT_NULL, path)


def null(path: str) -> AssertionLine:
    return AssertionLine(AssertionType.NULL, path)


def equals(expected: str, path: str) -> AssertionLine:
    return AssertionLine(AssertionType.EQUALS, path, expected)


def value_assertion(value: Any, kind: ValueKind, path: str) -> AssertionLine:
    """Assertion pinning a terminal value at ``path``."""
    if kind is ValueKind.BOOLEAN:
        return AssertionLine(AssertionType.IS, path, literal(value, kind))
    return equals(literal(value, kind), path)


def render_pytest(line: AssertionLine) -> str:
    if line.assertion is AssertionType.NOT_NULL:
        return f"assert {line.path} is not None"
    if line.assertion is AssertionType.NULL:
        return f"assert {line.path} is None"
    if line.assertion is AssertionType.IS:
        return f"assert {line.path} is {line.expected}"
    return f"assert {line.path} == {line.expected}"


def render_unittest(line: AssertionLine) -> str:
    if line.assertion is AssertionType.NOT_NULL:
        return f"self.assertIsNotNone({line.path})"
    if line.assertion is AssertionType.NULL:
        return f"self.assertIsNone({line.path})"
    if line.assertion is AssertionType.IS:
        return f"self.assertIs({line.path}, {line.expected})"
    return f"self.assertEqual({line.expected}, {line.path})"


_RENDERERS: Dict[str, Callable[[AssertionLine], str]] = {
    PYTEST_DIALECT: render_pytest,
    UNITTEST_DIALECT: render_unittest,
}


def renderer_for(dialect: str) -> Callable[[AssertionLine], str]:
    try:
        return _RENDERERS[dialect]
    except KeyError:
        raise ConfigurationError(
            f"Unknown dialect {dialect!r}, expected one of {', '.join(DIALECTS)}"
        ) from None
