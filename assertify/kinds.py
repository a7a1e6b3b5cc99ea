"""Value classification.

Every runtime value maps to exactly one ``ValueKind``. The kinds are closed;
the types inside ``COMPOSITE`` are open, which is why it is the fallback.
"""

import datetime
from collections.abc import Sequence
from enum import Enum

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

# Sequences that are really scalar payloads
_NON_SEQUENCE_TYPES = (str, bytes, bytearray, memoryview)


class ValueKind(Enum):
    """How the traversal engine treats a value."""

    NULL = "null"
    INTEGER64 = "integer64"
    INTEGER32 = "integer32"
    TEXT = "text"
    BOOLEAN = "boolean"
    ENUMERATED = "enumerated"
    TEMPORAL = "temporal"
    SEQUENCE = "sequence"
    COMPOSITE = "composite"

    @property
    def is_terminal(self) -> bool:
        """True for kinds that produce at most one assertion."""
        return self not in (ValueKind.SEQUENCE, ValueKind.COMPOSITE)

    @property
    def is_tracked(self) -> bool:
        """True for kinds recorded by identity in the visited set (tuples aside)."""
        return not self.is_terminal


def classify(value) -> ValueKind:
    """Return the kind of ``value``.

    ``bool`` is tested before ``int`` since it is an ``int`` subclass.
    """
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, int) and not isinstance(value, Enum):
        if INT32_MIN <= value <= INT32_MAX:
            return ValueKind.INTEGER32
        return ValueKind.INTEGER64
    if isinstance(value, str) and not isinstance(value, Enum):
        return ValueKind.TEXT
    if isinstance(value, Enum):
        return ValueKind.ENUMERATED
    if isinstance(value, (datetime.date, datetime.time)):
        return ValueKind.TEMPORAL
    if isinstance(value, Sequence) and not isinstance(value, _NON_SEQUENCE_TYPES):
        return ValueKind.SEQUENCE
    return ValueKind.COMPOSITE
