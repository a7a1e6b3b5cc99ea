"""Result type for accessor invocations.

Reading an attribute through introspection may legitimately fail (lazy
properties, proxies, half-initialised objects). Instead of letting the
exception escape or collapsing it silently into ``None``, the invocation is
captured as a Result that the traversal engine must explicitly inspect.

Usage:
------
    result = try_result(lambda: obj.address)

    if result.is_ok():
        value = result.unwrap()
    else:
        logger.debug("skipped: %r", result.error)

    # Treat failures as absent values
    value = result.unwrap_or(None)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Tuple, Type, TypeVar, Union

T = TypeVar("T")  # Success value type
E = TypeVar("E")  # Error type


@dataclass(frozen=True)
class Ok(Generic[T]):
    """A successful invocation holding the produced value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        """Get the value or a default (always returns value for Ok)."""
        return self.value

    @property
    def error(self) -> None:
        """Ok has no error, returns None."""
        return None

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True)
class Err(Generic[E]):
    """A failed invocation holding the captured exception."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self):
        """Raises ValueError since Err has no success value.

        Don't call this without checking is_ok() first!
        """
        raise ValueError(f"Called unwrap on Err: {self.error!r}")

    def unwrap_or(self, default: T) -> T:
        """Get the default value since this is an error."""
        return default

    @property
    def value(self) -> None:
        """Err has no value, returns None."""
        return None

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Union[Ok[T], Err[E]]


def try_result(
    f: Callable[[], T],
    error_types: Union[Type[BaseException], Tuple[Type[BaseException], ...]] = Exception,
) -> Result[T, BaseException]:
    """Run a potentially-raising callable and capture the outcome.

    Unlike a plain ``try/except`` returning ``None``, the caught exception is
    kept so callers can log what went wrong.

    Example:
        try_result(lambda: int("nope"))
        # Err(ValueError("invalid literal for int() with base 10: 'nope'"))

    Args:
        f: A zero-argument callable that might raise
        error_types: Exception type(s) to capture (default: Exception).
            Anything else propagates.

    Returns:
        Ok(value) if f() succeeds, Err(exception) if it raises a captured type
    """
    try:
        return Ok(f())
    except error_types as e:
        return Err(e)
