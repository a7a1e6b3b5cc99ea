"""Path expressions.

A path expression is Python source that re-obtains a value starting from
the root name, e.g. ``cast(Address, person.address).street``. Results that
may be accessed further are wrapped in ``typing.cast`` with their *runtime*
type, because accessors are often annotated with a broader type than the
instance they actually return and type checkers would otherwise reject the
generated assertion.
"""

from typing import Any, Optional

from assertify.accessors import AccessorDescriptor, AccessorStyle
from assertify.emitters import key_literal
from assertify.kinds import ValueKind

# Results read through an accessor that get wrapped in cast()
QUALIFIED_KINDS = frozenset(
    {
        ValueKind.INTEGER32,
        ValueKind.INTEGER64,
        ValueKind.SEQUENCE,
        ValueKind.COMPOSITE,
    }
)


def type_name(value: Any) -> str:
    """Simple name of the runtime type of ``value``."""
    return type(value).__name__


def qualify(expression: str, value: Any) -> str:
    return f"cast({type_name(value)}, {expression})"


def access(path: str, accessor: AccessorDescriptor) -> str:
    """Append the invocation syntax of ``accessor`` to ``path``."""
    if accessor.style is AccessorStyle.ITEM:
        return f"{path}[{key_literal(accessor.name)}]"
    if accessor.style is AccessorStyle.GETTER:
        return f"{path}.{accessor.name}()"
    return f"{path}.{accessor.name}"


class PathBuilder:
    """Builds the path of the next value from the current one."""

    @staticmethod
    def root(name: str) -> str:
        return name

    @staticmethod
    def for_accessor(
        path: str, accessor: Optional[AccessorDescriptor], value: Any, kind: ValueKind
    ) -> str:
        """Path of ``value`` as read through ``accessor``.

        Without an accessor (root, already-built element paths) the path is
        returned unchanged. Null, text, boolean and enumerated results are
        left unqualified since nothing is accessed on them afterwards.
        """
        if accessor is None:
            return path
        expression = access(path, accessor)
        if kind in QUALIFIED_KINDS:
            return qualify(expression, value)
        return expression

    @staticmethod
    def for_element(path: str, index: int, element: Any) -> str:
        """Path of a sequence element, always qualified by its runtime type."""
        expression = f"{path}[{index}]"
        if element is None:
            return expression
        return qualify(expression, element)

    @staticmethod
    def for_size(path: str) -> str:
        return f"len({path})"
