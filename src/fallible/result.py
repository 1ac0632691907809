"""Result type: a tagged success/failure value.

The variant class is the only discriminator. Both variants are frozen, so a
``Result`` can be passed around and compared structurally without anyone
mutating it along the way.
"""

from __future__ import annotations

import dataclasses
from typing import Any, TypeGuard, overload


@dataclasses.dataclass(frozen=True, slots=True)
class Success[T]:
    """A successful outcome carrying its value."""

    value: T


@dataclasses.dataclass(frozen=True, slots=True)
class Failure[E]:
    """An expected failure carrying its error payload."""

    error: E


type Result[T, E] = Success[T] | Failure[E]


@overload
def success() -> Success[None]: ...
@overload
def success[T](value: T) -> Success[T]: ...
def success(value: Any = None) -> Success[Any]:
    """Construct a ``Success``; call with no argument for a signal-only value."""
    return Success(value)


@overload
def failure() -> Failure[None]: ...
@overload
def failure[E](error: E) -> Failure[E]: ...
def failure(error: Any = None) -> Failure[Any]:
    """Construct a ``Failure``; call with no argument for a signal-only error."""
    return Failure(error)


def is_success[T, E](result: Result[T, E]) -> TypeGuard[Success[T]]:
    return isinstance(result, Success)


def is_failure[T, E](result: Result[T, E]) -> TypeGuard[Failure[E]]:
    return isinstance(result, Failure)


def is_result(obj: object) -> TypeGuard[Result[Any, Any]]:
    """Return True when ``obj`` is a ``Success`` or a ``Failure``."""
    return isinstance(obj, Success | Failure)


__all__ = [
    "Failure",
    "Result",
    "Success",
    "failure",
    "is_failure",
    "is_result",
    "is_success",
    "success",
]
