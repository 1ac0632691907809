"""Transformations over the failure channel of a Result."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fallible.result import Failure, Result

if TYPE_CHECKING:
    from collections.abc import Callable


def map_error[T, E, E2](func: Callable[[E], E2]) -> Callable[[Result[T, E]], Result[T, E2]]:
    """Return a function replacing a ``Failure``'s error with ``func(error)``.

    A ``Success`` is returned as-is and ``func`` is not called.
    """

    def mapper(result: Result[T, E]) -> Result[T, E2]:
        if isinstance(result, Failure):
            return Failure(func(result.error))
        return result

    return mapper


def tap_error[T, E](func: Callable[[E], object]) -> Callable[[Result[T, E]], Result[T, E]]:
    """Return a function that calls ``func(error)`` on a ``Failure`` for its side effect.

    The Result itself passes through unchanged.
    """

    def inspect_then_keep(error: E) -> E:
        func(error)
        return error

    return map_error(inspect_then_keep)


__all__ = ["map_error", "tap_error"]
