"""Propagation scopes: early return on the first failure.

A scope hands its body a ``Propagator``. Calling it with a ``Success``
unwraps the value; calling it with a ``Failure`` unwinds to the nearest
enclosing scope, which returns that failure. The unwind uses a private
``BaseException`` subclass, the same way ``asyncio.CancelledError`` and
``GeneratorExit`` travel, so ``except Exception`` blocks in user code (and
the catch-any adapter) never swallow it.

Example:
    def load(raw: str) -> Result[int, ParseError]:
        return run_fallible(lambda propagate: success(
            propagate(parse_int(propagate(parse_json(raw)))) + 1
        ))
"""

from __future__ import annotations

import functools
import inspect
import logging
from typing import TYPE_CHECKING, Any, Concatenate, cast

from fallible.config import current_settings
from fallible.errors import HINTS, NotAResultError, ScopeClosedError
from fallible.result import Failure, Result, Success

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

log = logging.getLogger(__name__)


class _Propagation(BaseException):
    """Non-local exit carrying a failure payload to the nearest enclosing scope."""

    def __init__(self, error: Any) -> None:
        super().__init__(error)
        self.error = error


class Propagator[E]:
    """The ``propagate`` capability of one scope.

    Only valid while the scope's body runs; the scope closes it on the way
    out.
    """

    __slots__ = ("_check", "_closed")

    def __init__(self, *, check_results: bool = True) -> None:
        self._closed = False
        self._check = check_results

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        self._closed = True

    def __call__[T](self, result: Result[T, E]) -> T:
        """Return the value of a ``Success``; exit the scope on a ``Failure``."""
        if self._closed:
            raise ScopeClosedError(
                "propagate called after its scope returned", hint=HINTS["scope_closed"]
            )
        if isinstance(result, Failure):
            raise _Propagation(result.error)
        if self._check and not isinstance(result, Success):
            raise NotAResultError(
                f"propagate expects a Success or Failure, got {type(result).__name__}",
                hint=HINTS["not_a_result"],
            )
        return cast("Success[T]", result).value

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"<Propagator {state} at {id(self):#x}>"


def _checked[T, E](outcome: object, *, check: bool) -> Result[T, E]:
    if check and not isinstance(outcome, Success | Failure):
        raise NotAResultError(
            f"fallible body must return a Success or Failure, got {type(outcome).__name__}",
            hint=HINTS["not_a_result"],
        )
    return cast("Result[T, E]", outcome)


def _short_circuit[E](exit_: _Propagation) -> Failure[E]:
    """Convert any exit that reaches a scope into that scope's failure."""
    if current_settings().trace:
        log.debug("Scope short-circuited with failure %r", exit_.error)
    return Failure(exit_.error)


def run_fallible[T, E](body: Callable[[Propagator[E]], Result[T, E]]) -> Result[T, E]:
    """Run ``body`` inside a propagation scope.

    Args:
        body: Receives the scope's ``Propagator`` and returns a ``Result``.

    Returns:
        The body's own ``Result``, or the first ``Failure`` handed to
        ``propagate``.

    Raises:
        NotAResultError: The body returned something other than a Result
            (when ``check_results`` is on).

    Every exception other than a propagation exit propagates unchanged. An
    exit raised through an outer scope's ``propagate`` inside ``body`` still
    ends at this scope, the nearest enclosing one.
    """
    check = current_settings().check_results
    propagate: Propagator[E] = Propagator(check_results=check)
    try:
        outcome = body(propagate)
    except _Propagation as exit_:
        return _short_circuit(exit_)
    finally:
        propagate.close()
    return _checked(outcome, check=check)


async def run_async_fallible[T, E](
    body: Callable[[Propagator[E]], Awaitable[Result[T, E]] | Result[T, E]],
) -> Result[T, E]:
    """Like ``run_fallible`` but ``body`` may suspend before returning.

    ``body`` is usually a coroutine function; a plain function returning a
    ``Result`` is also accepted. ``propagate`` keeps its meaning across
    every ``await`` inside the body.
    """
    check = current_settings().check_results
    propagate: Propagator[E] = Propagator(check_results=check)
    try:
        outcome = body(propagate)
        if inspect.isawaitable(outcome):
            outcome = await outcome
    except _Propagation as exit_:
        return _short_circuit(exit_)
    finally:
        propagate.close()
    return _checked(outcome, check=check)


def fallible[**P, T, E](
    func: Callable[Concatenate[Propagator[E], P], Result[T, E]],
) -> Callable[P, Result[T, E]]:
    """Decorate a function so each call runs in its own propagation scope.

    The decorated function takes ``propagate`` as its first parameter; callers
    omit it.

    Example:
        @fallible
        def total(propagate, a: str, b: str) -> Result[int, str]:
            return success(propagate(parse(a)) + propagate(parse(b)))

        total("1", "x")  # Failure(...)
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> Result[T, E]:
        return run_fallible(lambda propagate: func(propagate, *args, **kwargs))

    return wrapper


def async_fallible[**P, T, E](
    func: Callable[Concatenate[Propagator[E], P], Awaitable[Result[T, E]]],
) -> Callable[P, Awaitable[Result[T, E]]]:
    """Like ``fallible`` for coroutine functions."""

    @functools.wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> Result[T, E]:
        return await run_async_fallible(
            lambda propagate: func(propagate, *args, **kwargs)
        )

    return wrapper


__all__ = [
    "Propagator",
    "async_fallible",
    "fallible",
    "run_async_fallible",
    "run_fallible",
]
