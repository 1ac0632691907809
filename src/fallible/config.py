"""Settings for fallible's diagnostics.

Resolution is layered: defaults, then ``FALLIBLE_*`` environment variables,
then explicit overrides. Everything flows through the pydantic ``Settings``
schema, so ``resolve_settings`` and ``settings_scope`` fail loudly on a bad
value. The lazily cached environment lookup behind ``current_settings``
logs a warning and falls back to defaults instead, because it runs inside
scopes and adapters. ``settings_scope`` installs settings for the current
context only, which keeps concurrent tasks from seeing each other's
overrides.
"""

from __future__ import annotations

from contextlib import contextmanager
import contextvars
from functools import cache
import logging
import os
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from fallible.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Generator, Mapping

log = logging.getLogger(__name__)

ENV_PREFIX = "FALLIBLE_"


class Settings(BaseModel):
    """Validated, immutable settings payload."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    #: Emit DEBUG records when a scope short-circuits or an adapter captures.
    trace: bool = Field(default=False)
    #: Attach the captured exception's traceback to trace records.
    trace_tracebacks: bool = Field(default=False)
    #: Reject non-Result values returned by bodies or passed to propagate.
    check_results: bool = Field(default=True)


def _env_values(environ: Mapping[str, str]) -> dict[str, str]:
    values: dict[str, str] = {}
    for name in Settings.model_fields:
        raw = environ.get(f"{ENV_PREFIX}{name.upper()}")
        if raw is not None and raw.strip():
            values[name] = raw.strip()
    return values


def resolve_settings(
    overrides: Mapping[str, Any] | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    **kwargs: Any,
) -> Settings:
    """Resolve settings from defaults, environment, and overrides.

    Args:
        overrides: Field values that win over the environment.
        environ: Environment mapping to read; defaults to ``os.environ``.
        **kwargs: Additional overrides, merged over ``overrides``.

    Raises:
        ConfigurationError: A field failed validation or is unknown.
    """
    merged: dict[str, Any] = _env_values(os.environ if environ is None else environ)
    merged.update(overrides or {})
    merged.update(kwargs)
    try:
        return Settings(**merged)
    except ValidationError as exc:
        fields = ", ".join(
            ".".join(str(part) for part in err["loc"]) or "<root>"
            for err in exc.errors()
        )
        raise ConfigurationError(
            f"Invalid fallible settings: {fields}",
            hint=(
                f"Boolean fields accept 1/0, true/false, yes/no or on/off; "
                f"environment names are {ENV_PREFIX}<FIELD> (e.g. {ENV_PREFIX}TRACE)"
            ),
        ) from exc


@cache
def _environment_settings() -> Settings:
    # Read lazily from inside scopes and adapters: never raise from here.
    try:
        settings = resolve_settings()
    except ConfigurationError as exc:
        log.warning("Ignoring invalid fallible environment settings, using defaults: %s", exc)
        return Settings()
    log.debug("Resolved fallible settings from environment: %r", settings)
    return settings


def reload_settings() -> Settings:
    """Drop the cached environment settings and resolve them again.

    Invalid ``FALLIBLE_*`` values are logged once as a warning and replaced by
    defaults. Call ``resolve_settings()`` to get the ``ConfigurationError``.
    """
    _environment_settings.cache_clear()
    return _environment_settings()


# --- Ambient scope ---

_AMBIENT: contextvars.ContextVar[Settings | None] = contextvars.ContextVar(
    "fallible_settings", default=None
)


def current_settings() -> Settings:
    """Return the settings in effect for the current context."""
    ambient = _AMBIENT.get()
    if ambient is not None:
        return ambient
    return _environment_settings()


@contextmanager
def settings_scope(
    settings_or_overrides: Settings | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> Generator[Settings]:
    """Install settings for the duration of a ``with`` block.

    Overrides are layered on top of the settings currently in effect, so
    nested scopes only need to name what they change.

    Example:
        with settings_scope(trace=True):
            result = run_fallible(body)
    """
    if isinstance(settings_or_overrides, Settings):
        base = settings_or_overrides.model_dump()
    else:
        base = {**current_settings().model_dump(), **(settings_or_overrides or {})}
    settings = resolve_settings(base, environ={}, **overrides)

    token = _AMBIENT.set(settings)
    try:
        yield settings
    finally:
        _AMBIENT.reset(token)


__all__ = [
    "ENV_PREFIX",
    "Settings",
    "current_settings",
    "reload_settings",
    "resolve_settings",
    "settings_scope",
]
