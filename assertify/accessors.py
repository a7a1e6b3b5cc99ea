"""Accessor discovery.

An accessor is a zero-argument read of one logical attribute of a composite
value. Discovery is a capability query answered by accessor providers:
the first provider that claims a value lists its accessors. Providers and
per-type tables belong to a ``SnapshotConfig``, so two generators never see
each other's registrations.

Consulted in this order:
    - the per-type table of the config (``Assertifier.describe_type()``)
    - providers added to the config (``Assertifier.use_provider()``)
    - pydantic models (declared and computed fields)
    - mappings (one accessor per key, item syntax)
    - plain objects (instance attributes, slots, properties, ``get_*`` methods)
"""

import inspect
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Protocol, Tuple, runtime_checkable

from pydantic import BaseModel

from assertify.config import (
    CLASS_IDENTITY_ACCESSORS,
    DENYLISTED_ACCESSORS,
    IDENTIFIER_ACCESSORS,
    SnapshotConfig,
)
from assertify.emitters import key_literal
from assertify.exceptions import IntrospectionError

logger = logging.getLogger(__name__)

GETTER_PREFIX = "get_"


class AccessorStyle(Enum):
    """Syntax used to invoke an accessor in a path expression."""

    ATTRIBUTE = "attribute"  # obj.name
    GETTER = "getter"  # obj.get_name()
    ITEM = "item"  # obj['key']


@dataclass(frozen=True)
class AccessorDescriptor:
    """One readable attribute discovered on a composite value.

    Attributes:
        name: Attribute or method name; for mapping entries the key itself
        declaring_type: Type the accessor was found on
        style: How the accessor is spelled in a path expression
        invoke: Zero-argument callable reading the current value
        denylisted: True when the name is framework plumbing
    """

    name: Any
    declaring_type: type
    style: AccessorStyle
    invoke: Callable[[], Any]
    denylisted: bool = False

    @property
    def is_identifier(self) -> bool:
        return isinstance(self.name, str) and self.name in IDENTIFIER_ACCESSORS

    @property
    def is_class_identity(self) -> bool:
        return isinstance(self.name, str) and self.name in CLASS_IDENTITY_ACCESSORS

    @property
    def is_private(self) -> bool:
        return (
            self.style is not AccessorStyle.ITEM
            and isinstance(self.name, str)
            and self.name.startswith("_")
        )


@runtime_checkable
class AccessorProvider(Protocol):
    """Structural contract for accessor providers."""

    def claims(self, value: Any) -> bool:
        """Return True if this provider describes ``value``."""
        ...

    def accessors(self, value: Any) -> List[AccessorDescriptor]:
        """List every accessor of ``value``, before policy filtering."""
        ...


def _attribute(value: Any, name: str, declaring_type: type) -> AccessorDescriptor:
    return AccessorDescriptor(
        name=name,
        declaring_type=declaring_type,
        style=AccessorStyle.ATTRIBUTE,
        invoke=lambda: getattr(value, name),
        denylisted=name in DENYLISTED_ACCESSORS,
    )


def _getter(value: Any, name: str, declaring_type: type) -> AccessorDescriptor:
    return AccessorDescriptor(
        name=name,
        declaring_type=declaring_type,
        style=AccessorStyle.GETTER,
        invoke=lambda: getattr(value, name)(),
        denylisted=name in DENYLISTED_ACCESSORS,
    )


def _takes_no_arguments(function: Any) -> bool:
    """True if ``function`` (unbound, expecting self) needs no other argument."""
    try:
        signature = inspect.signature(function)
    except (TypeError, ValueError):
        return False
    required = [
        param
        for param in signature.parameters.values()
        if param.default is inspect.Parameter.empty
        and param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD, param.KEYWORD_ONLY)
    ]
    return len(required) <= 1


class TypeTableProvider:
    """Accessors listed explicitly by the caller for exactly one type."""

    def __init__(self, cls: type, names: Iterable[str]) -> None:
        self.cls = cls
        self.names = tuple(names)

    def claims(self, value: Any) -> bool:
        return type(value) is self.cls

    def accessors(self, value: Any) -> List[AccessorDescriptor]:
        return [_attribute(value, name, self.cls) for name in self.names]


class PydanticModelProvider:
    """Declared and computed fields of pydantic models."""

    def claims(self, value: Any) -> bool:
        return isinstance(value, BaseModel)

    def accessors(self, value: Any) -> List[AccessorDescriptor]:
        cls = type(value)
        names = set(cls.model_fields) | set(cls.model_computed_fields)
        return [_attribute(value, name, cls) for name in sorted(names)]


class MappingProvider:
    """One accessor per key, in insertion order.

    Keys without a Python literal form (tuples, floats, arbitrary objects)
    cannot be spelled in a path expression and are left out.
    """

    def claims(self, value: Any) -> bool:
        return isinstance(value, Mapping)

    def accessors(self, value: Any) -> List[AccessorDescriptor]:
        cls = type(value)
        found: List[AccessorDescriptor] = []
        for key in list(value.keys()):
            if key_literal(key) is None:
                logger.debug("Skipping key %r of %s: no literal form", key, cls.__qualname__)
                continue
            found.append(
                AccessorDescriptor(
                    name=key,
                    declaring_type=cls,
                    style=AccessorStyle.ITEM,
                    invoke=lambda key=key: value[key],
                )
            )
        return found


class ObjectProvider:
    """Instance attributes, slots, properties and ``get_*`` methods."""

    def claims(self, value: Any) -> bool:
        return True

    def accessors(self, value: Any) -> List[AccessorDescriptor]:
        cls = type(value)
        found: Dict[str, AccessorDescriptor] = {}

        instance_dict = getattr(value, "__dict__", None)
        if isinstance(instance_dict, dict):
            for name in instance_dict:
                if isinstance(name, str):
                    found[name] = _attribute(value, name, cls)

        for klass in cls.__mro__:
            if klass is object:
                continue
            slots = klass.__dict__.get("__slots__", ())
            if isinstance(slots, str):
                slots = (slots,)
            for name in slots:
                if name not in found:
                    found[name] = _attribute(value, name, klass)
            for name, member in klass.__dict__.items():
                if name in found:
                    continue
                if isinstance(member, property):
                    found[name] = _attribute(value, name, klass)
                elif (
                    name.startswith(GETTER_PREFIX)
                    and inspect.isfunction(member)
                    and _takes_no_arguments(member)
                ):
                    found[name] = _getter(value, name, klass)

        return [found[name] for name in sorted(found)]


# Consulted after the config's own providers; the object provider claims
# everything and stays last
BUILTIN_PROVIDERS: Tuple[AccessorProvider, ...] = (
    PydanticModelProvider(),
    MappingProvider(),
)
FALLBACK_PROVIDER = ObjectProvider()


def provider_for(value: Any, config: SnapshotConfig) -> AccessorProvider:
    """Pick the provider describing ``value`` under ``config``."""
    cls = type(value)
    names = config.type_accessors_for(cls)
    if names is not None:
        return TypeTableProvider(cls, names)
    for provider in config.accessor_providers + BUILTIN_PROVIDERS:
        if provider.claims(value):
            return provider
    return FALLBACK_PROVIDER


def is_relevant(accessor: AccessorDescriptor, config: SnapshotConfig) -> bool:
    """Apply the inclusion policy to one accessor."""
    if accessor.is_class_identity or accessor.is_private or accessor.denylisted:
        return False
    if accessor.is_identifier and not config.include_ids:
        return False
    return True


def discover_accessors(
    value: Any, config: SnapshotConfig, provider: Optional[AccessorProvider] = None
) -> List[AccessorDescriptor]:
    """List the accessors of ``value`` that survive the inclusion policy.

    Raises:
        IntrospectionError: If the accessors cannot be enumerated
    """
    try:
        provider = provider or provider_for(value, config)
        candidates = provider.accessors(value)
    except Exception as e:
        raise IntrospectionError(
            f"Cannot enumerate accessors of {type(value).__qualname__}: {e}"
        ) from e

    relevant = [accessor for accessor in candidates if is_relevant(accessor, config)]
    if len(relevant) != len(candidates):
        logger.debug(
            "Filtered %d of %d accessors on %s",
            len(candidates) - len(relevant),
            len(candidates),
            type(value).__qualname__,
        )
    return relevant
