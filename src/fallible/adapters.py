"""Adapters from raising code to Result-returning code.

Each adapter runs a callable and routes a raised exception through a single
policy: if the guard accepts it, it becomes a ``Failure``; otherwise it is
re-raised as the very same object, traceback intact. Only ``Exception``
instances are ever considered, so ``KeyboardInterrupt``, ``SystemExit``,
``asyncio.CancelledError`` and a scope's own early-return signal always pass
through.

Three guards are offered (any exception, a caller-supplied predicate, an
exception type), each in four shapes:

- ``catch_*``: call a zero-argument callable now.
- ``async_catch_*``: same, awaiting the callable's result if it is awaitable.
- ``wrap_*``: return a reusable function with the wrapped signature.
- ``async_wrap_*``: the awaiting variant of ``wrap_*``.
"""

from __future__ import annotations

import functools
import inspect
import logging
from typing import TYPE_CHECKING, Never, TypeGuard, cast

from fallible.config import current_settings
from fallible.errors import HINTS, InvalidGuardError
from fallible.result import Failure, Result, Success

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

log = logging.getLogger(__name__)

type ExceptionGuard[E] = Callable[[Exception], TypeGuard[E]]
type ExceptionTypes[E: Exception] = type[E] | tuple[type[E], ...]


# --- Policy ---


def _accept_any(_exception: Exception) -> TypeGuard[Exception]:
    return True


def _guard_or_reraise[E](exception: Exception, guard: ExceptionGuard[E]) -> Failure[E]:
    if not guard(exception):
        raise exception
    settings = current_settings()
    if settings.trace:
        log.debug(
            "Captured %s into failure: %s",
            type(exception).__name__,
            exception,
            exc_info=exception if settings.trace_tracebacks else None,
        )
    return Failure(cast("E", exception))


def _instance_guard[E: Exception](exception_type: ExceptionTypes[E]) -> ExceptionGuard[E]:
    types = exception_type if isinstance(exception_type, tuple) else (exception_type,)
    if not types or not all(
        isinstance(t, type) and issubclass(t, Exception) for t in types
    ):
        _invalid_guard(exception_type)

    def guard(exception: Exception) -> TypeGuard[E]:
        return isinstance(exception, types)

    return guard


def _invalid_guard(exception_type: object) -> Never:
    raise InvalidGuardError(
        f"Expected an Exception subclass or a tuple of them, got {exception_type!r}",
        hint=HINTS["invalid_guard"],
    )


def _capture[T, E](func: Callable[[], T], guard: ExceptionGuard[E]) -> Result[T, E]:
    try:
        value = func()
    except Exception as exc:
        return _guard_or_reraise(exc, guard)
    return Success(value)


async def _async_capture[T, E](
    func: Callable[[], Awaitable[T] | T], guard: ExceptionGuard[E]
) -> Result[T, E]:
    try:
        value = func()
        if inspect.isawaitable(value):
            value = await value
    except Exception as exc:
        return _guard_or_reraise(exc, guard)
    return Success(cast("T", value))


# --- Run now ---


def catch_any_exception[T](func: Callable[[], T]) -> Result[T, Exception]:
    """Call ``func`` and return its value in a ``Success``, or any exception in a ``Failure``."""
    return _capture(func, _accept_any)


def catch_guarded_exception[T, E](
    func: Callable[[], T], exception_guard: ExceptionGuard[E]
) -> Result[T, E]:
    """Call ``func``; an exception accepted by ``exception_guard`` becomes a ``Failure``.

    Exceptions the guard rejects are re-raised unchanged.
    """
    return _capture(func, exception_guard)


def catch_exception_by_type[T, E: Exception](
    func: Callable[[], T], exception_type: ExceptionTypes[E]
) -> Result[T, E]:
    """Call ``func``; an instance of ``exception_type`` becomes a ``Failure``.

    ``exception_type`` may be a tuple, as with ``isinstance``. Other
    exceptions are re-raised unchanged.

    Raises:
        InvalidGuardError: ``exception_type`` is not an Exception subclass.
    """
    return _capture(func, _instance_guard(exception_type))


async def async_catch_any_exception[T](
    func: Callable[[], Awaitable[T] | T],
) -> Result[T, Exception]:
    """Like ``catch_any_exception``, awaiting ``func``'s result when it is awaitable."""
    return await _async_capture(func, _accept_any)


async def async_catch_guarded_exception[T, E](
    func: Callable[[], Awaitable[T] | T], exception_guard: ExceptionGuard[E]
) -> Result[T, E]:
    """Like ``catch_guarded_exception``, awaiting ``func``'s result when it is awaitable."""
    return await _async_capture(func, exception_guard)


async def async_catch_exception_by_type[T, E: Exception](
    func: Callable[[], Awaitable[T] | T], exception_type: ExceptionTypes[E]
) -> Result[T, E]:
    """Like ``catch_exception_by_type``, awaiting ``func``'s result when it is awaitable."""
    return await _async_capture(func, _instance_guard(exception_type))


# --- Wrap for later ---


def _wrap[**P, T, E](
    func: Callable[P, T], guard: ExceptionGuard[E]
) -> Callable[P, Result[T, E]]:
    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> Result[T, E]:
        return _capture(lambda: func(*args, **kwargs), guard)

    return wrapper


def _async_wrap[**P, T, E](
    func: Callable[P, Awaitable[T] | T], guard: ExceptionGuard[E]
) -> Callable[P, Awaitable[Result[T, E]]]:
    @functools.wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> Result[T, E]:
        return await _async_capture(lambda: func(*args, **kwargs), guard)

    return wrapper


def wrap_any_exception[**P, T](func: Callable[P, T]) -> Callable[P, Result[T, Exception]]:
    """Wrap ``func`` so calls return a ``Result`` instead of raising.

    Usable as a decorator:

        @wrap_any_exception
        def read(path: str) -> bytes: ...
    """
    return _wrap(func, _accept_any)


def wrap_guarded_exception[**P, T, E](
    func: Callable[P, T], exception_guard: ExceptionGuard[E]
) -> Callable[P, Result[T, E]]:
    """Wrap ``func`` so exceptions accepted by ``exception_guard`` become a ``Failure``."""
    return _wrap(func, exception_guard)


def wrap_exception_by_type[**P, T, E: Exception](
    func: Callable[P, T], exception_type: ExceptionTypes[E]
) -> Callable[P, Result[T, E]]:
    """Wrap ``func`` so instances of ``exception_type`` become a ``Failure``.

    The type is validated here, not at call time.
    """
    return _wrap(func, _instance_guard(exception_type))


def async_wrap_any_exception[**P, T](
    func: Callable[P, Awaitable[T] | T],
) -> Callable[P, Awaitable[Result[T, Exception]]]:
    """Like ``wrap_any_exception``, awaiting ``func``'s result when it is awaitable."""
    return _async_wrap(func, _accept_any)


def async_wrap_guarded_exception[**P, T, E](
    func: Callable[P, Awaitable[T] | T], exception_guard: ExceptionGuard[E]
) -> Callable[P, Awaitable[Result[T, E]]]:
    """Like ``wrap_guarded_exception``, awaiting ``func``'s result when it is awaitable."""
    return _async_wrap(func, exception_guard)


def async_wrap_exception_by_type[**P, T, E: Exception](
    func: Callable[P, Awaitable[T] | T], exception_type: ExceptionTypes[E]
) -> Callable[P, Awaitable[Result[T, E]]]:
    """Like ``wrap_exception_by_type``; the type is validated when wrapping."""
    return _async_wrap(func, _instance_guard(exception_type))


__all__ = [
    "ExceptionGuard",
    "ExceptionTypes",
    "async_catch_any_exception",
    "async_catch_exception_by_type",
    "async_catch_guarded_exception",
    "async_wrap_any_exception",
    "async_wrap_exception_by_type",
    "async_wrap_guarded_exception",
    "catch_any_exception",
    "catch_exception_by_type",
    "catch_guarded_exception",
    "wrap_any_exception",
    "wrap_exception_by_type",
    "wrap_guarded_exception",
]
