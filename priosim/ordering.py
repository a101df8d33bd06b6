"""
Comparers for ordering queue elements.

A comparer is a plain function of two elements returning a negative
number, zero, or a positive number when the first element sorts
before, together with, or after the second one.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from priosim.exceptions import ConfigurationError

T = TypeVar("T")

Comparer = Callable[[T, T], int]


def natural_order(a: Any, b: Any) -> int:
    """
    Three-way comparison using the elements' own ``<`` and ``>``.

    Raises:
        ConfigurationError: If the elements have no ordering. Such
            queues need an explicit comparer.
    """
    try:
        return (a > b) - (a < b)
    except TypeError as e:
        raise ConfigurationError(
            config_key="comparer",
            expected=(
                "an explicit comparer for elements without a natural order"
            ),
            received=f"{type(a).__name__} vs {type(b).__name__}",
        ) from e


def reverse_order(comparer: Comparer[T] = natural_order) -> Comparer[T]:
    """Return a comparer that sorts in the opposite direction of ``comparer``."""

    def compare(a: T, b: T) -> int:
        return comparer(b, a)

    return compare


def comparing(key: Callable[[T], Any], reverse: bool = False) -> Comparer[T]:
    """
    Build a comparer ordering elements by ``key(element)``.

    Example:
        >>> by_length = comparing(len)
        >>> by_length("aa", "b") > 0
        True
    """

    def compare(a: T, b: T) -> int:
        if reverse:
            return natural_order(key(b), key(a))
        return natural_order(key(a), key(b))

    return compare
