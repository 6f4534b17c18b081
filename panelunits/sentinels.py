"""
Lookup sentinel for unit factor resolution.

A registry unit either has an exact positive factor or none at all, and a lookup
may also miss the unit entirely. None is already taken by "unit has no numeric
factor" in the registry tables, so failed factor lookups return NOT_FOUND, which
callers turn into an explicit zero.

Example:
    >>> factor = category.factor_of("seconds")
    >>> factor = iffound(factor, default=0)
"""

from typing import Any, Callable, Final

__all__ = [
    'NOT_FOUND',
    'NotFoundType',
    'iffound',
]


# Sentinel Types -------------------------------------------------------------------------------------------------------

class NotFoundType:
    """
    Sentinel type for NOT_FOUND.

    Singleton, falsy, compared by identity. Pickling and copying return the same instance.
    """
    __slots__ = ()

    _instance: 'NotFoundType | None' = None

    def __new__(cls) -> 'NotFoundType':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return '<NOT_FOUND>'

    def __eq__(self, other: Any) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> tuple:
        return (self.__class__, ())


# Sentinel Objects -----------------------------------------------------------------------------------------------------

NOT_FOUND: Final[NotFoundType] = NotFoundType()
"""
Result of a factor lookup that found no usable factor.

Use with identity check: `if factor is NOT_FOUND:`
"""


# Helper Functions -----------------------------------------------------------------------------------------------------

def iffound(value: Any, *, default: Any = None, default_factory: Callable[[], Any] | None = None) -> Any:
    """
    Return value if it's not NOT_FOUND, otherwise return default.

    Args:
        value: The value to check. If not NOT_FOUND, this value is returned.
        default: The fallback value when value is NOT_FOUND.
        default_factory: Callable returning the fallback value. Takes precedence over default.

    Returns:
        The value itself if not NOT_FOUND, otherwise the default (or result of default_factory).

    Raises:
        ValueError: If both default and default_factory are provided.
    """
    if value is not NOT_FOUND:
        return value

    if default_factory is not None and default is not None:
        raise ValueError("Cannot specify both default and default_factory")

    if default_factory is not None:
        return default_factory()

    return default
