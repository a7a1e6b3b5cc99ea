"""Snapshot generator configuration.

``SnapshotConfig`` is frozen: the fluent ``Assertifier`` builder swaps in an
updated copy for every option, and a traversal only ever sees the copy that
was current when it started.
"""

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, FrozenSet, Optional, Tuple

if TYPE_CHECKING:
    from assertify.accessors import AccessorProvider

# Depth limit for recursive descent (root is depth 0)
DEFAULT_MAX_DEPTH = 64

LINE_TERMINATOR = "\n"

PYTEST_DIALECT = "pytest"
UNITTEST_DIALECT = "unittest"
DIALECTS = (PYTEST_DIALECT, UNITTEST_DIALECT)

# Accessors naming the runtime class of a value; never emitted
CLASS_IDENTITY_ACCESSORS = frozenset({"__class__", "get_class"})

# Identifier-like accessors, skipped unless ids are explicitly included
IDENTIFIER_ACCESSORS = frozenset({"id", "get_id", "pk"})

# Framework and infrastructure accessors that describe plumbing, not state
DENYLISTED_ACCESSORS = frozenset(
    {
        # ORM / persistence bookkeeping
        "metadata",
        "registry",
        "query",
        "query_class",
        "cache_key",
        "get_cache_key",
        "cache_key_attributes",
        "get_cache_key_attributes",
        "instance_id",
        "get_instance_id",
        "tech_version",
        "get_tech_version",
        "internal_date",
        "get_internal_date",
        # Descriptive type metadata
        "properties",
        "get_properties",
        "constraints",
        "get_constraints",
        "data_type_constraints",
        "get_data_type_constraints",
        "data_type_id",
        "get_data_type_id",
        "property_type",
        "get_property_type",
        # pydantic model plumbing
        "model_config",
        "model_fields",
        "model_computed_fields",
        "model_extra",
        "model_fields_set",
    }
)

# Values whose type lives in one of these modules are framework internals
FOREIGN_MODULE_PREFIXES: Tuple[str, ...] = (
    "logging",
    "threading",
    "_thread",
    "asyncio",
    "socket",
    "io",
    "_io",
    "unittest.mock",
    "sqlalchemy",
    "pydantic_core",
    "typing",
)


@dataclass(frozen=True)
class SnapshotConfig:
    """Inclusion policy for one snapshot generator.

    Attributes:
        include_null: Emit ``is None`` assertions for accessors returning None.
        include_empty_lists: Emit a length assertion for empty sequences.
        include_ids: Keep identifier-like accessors (``id``, ``pk``...).
        ignored_types: Types whose instances are skipped entirely.
        ignored_module_prefixes: Module prefixes treated as framework internals.
        max_depth: Deepest nesting level that may be traversed.
        dialect: Output flavour, ``"pytest"`` or ``"unittest"``.
        accessor_providers: Extra providers, consulted newest first before
            the built-in ones.
        type_accessors: Explicit accessor names per exact type, as
            ``(type, names)`` pairs.
    """

    include_null: bool = False
    include_empty_lists: bool = False
    include_ids: bool = False
    ignored_types: FrozenSet[type] = frozenset()
    ignored_module_prefixes: Tuple[str, ...] = field(default=FOREIGN_MODULE_PREFIXES)
    max_depth: int = DEFAULT_MAX_DEPTH
    dialect: str = PYTEST_DIALECT
    accessor_providers: Tuple["AccessorProvider", ...] = ()
    type_accessors: Tuple[Tuple[type, Tuple[str, ...]], ...] = ()

    def with_options(self, **changes) -> "SnapshotConfig":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def is_ignored_type(self, cls: type) -> bool:
        return cls in self.ignored_types

    def type_accessors_for(self, cls: type) -> Optional[Tuple[str, ...]]:
        for described, names in self.type_accessors:
            if described is cls:
                return names
        return None

    def is_foreign_module(self, module_name: str) -> bool:
        for prefix in self.ignored_module_prefixes:
            if module_name == prefix or module_name.startswith(prefix + "."):
                return True
        return False
