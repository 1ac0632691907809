"""fallible: typed early-return error handling.

Public API:
    - Success / Failure / Result: the tagged outcome type
    - run_fallible() / run_async_fallible(): scopes whose ``propagate``
      returns early on the first Failure
    - map_error() / tap_error(): failure-channel combinators
    - catch_* / wrap_* adapters: turn raised exceptions into Failures
    - Settings / settings_scope(): diagnostics configuration
"""

from __future__ import annotations

import logging

from fallible.adapters import (
    ExceptionGuard,
    ExceptionTypes,
    async_catch_any_exception,
    async_catch_exception_by_type,
    async_catch_guarded_exception,
    async_wrap_any_exception,
    async_wrap_exception_by_type,
    async_wrap_guarded_exception,
    catch_any_exception,
    catch_exception_by_type,
    catch_guarded_exception,
    wrap_any_exception,
    wrap_exception_by_type,
    wrap_guarded_exception,
)
from fallible.combinators import map_error, tap_error
from fallible.config import (
    Settings,
    current_settings,
    reload_settings,
    resolve_settings,
    settings_scope,
)
from fallible.errors import (
    ConfigurationError,
    FallibleError,
    InvalidGuardError,
    NotAResultError,
    ScopeClosedError,
)
from fallible.propagation import (
    Propagator,
    async_fallible,
    fallible,
    run_async_fallible,
    run_fallible,
)
from fallible.result import (
    Failure,
    Result,
    Success,
    failure,
    is_failure,
    is_result,
    is_success,
    success,
)

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("fallible")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("fallible").addHandler(logging.NullHandler())

__all__ = [
    "ConfigurationError",
    "ExceptionGuard",
    "ExceptionTypes",
    "FallibleError",
    "Failure",
    "InvalidGuardError",
    "NotAResultError",
    "Propagator",
    "Result",
    "ScopeClosedError",
    "Settings",
    "Success",
    "async_catch_any_exception",
    "async_catch_exception_by_type",
    "async_catch_guarded_exception",
    "async_fallible",
    "async_wrap_any_exception",
    "async_wrap_exception_by_type",
    "async_wrap_guarded_exception",
    "catch_any_exception",
    "catch_exception_by_type",
    "catch_guarded_exception",
    "current_settings",
    "failure",
    "fallible",
    "is_failure",
    "is_result",
    "is_success",
    "map_error",
    "reload_settings",
    "resolve_settings",
    "run_async_fallible",
    "run_fallible",
    "settings_scope",
    "success",
    "tap_error",
    "wrap_any_exception",
    "wrap_exception_by_type",
    "wrap_guarded_exception",
]
