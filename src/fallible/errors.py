"""Exception hierarchy for fallible.

These are defects raised when the toolkit itself is misused. They are never
folded into a ``Failure``; domain failures travel as values instead.
"""

from __future__ import annotations


class FallibleError(Exception):
    """Base exception for all fallible errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint

    def __str__(self) -> str:
        """Return the message followed by the hint, when there is one."""
        msg = super().__str__()
        return f"{msg}. {self.hint}" if self.hint else msg


class ConfigurationError(FallibleError):
    """Settings validation or resolution failed."""


class ScopeClosedError(FallibleError, RuntimeError):
    """A propagate capability was used after its scope returned."""


class NotAResultError(FallibleError, TypeError):
    """A value that should have been a Success or Failure was not."""


class InvalidGuardError(FallibleError, TypeError):
    """An exception type guard was built from something that is not an Exception class."""


HINTS = {
    "scope_closed": (
        "propagate is only valid while its run_fallible/run_async_fallible body "
        "is executing; do not store it or hand it to callbacks that outlive the body"
    ),
    "not_a_result": (
        "Return success(...) or failure(...) from the body and only pass "
        "Success/Failure values to propagate"
    ),
    "invalid_guard": (
        "Pass an Exception subclass or a tuple of them; BaseException-only "
        "signals such as KeyboardInterrupt are never captured"
    ),
}


__all__ = [
    "HINTS",
    "ConfigurationError",
    "FallibleError",
    "InvalidGuardError",
    "NotAResultError",
    "ScopeClosedError",
]
