"""Configuration: frozen diagnostics settings resolved from the environment."""

from __future__ import annotations

from dataclasses import dataclass, replace
import logging
import os
from typing import Any

from dotenv import load_dotenv

from result_or_error.errors import ConfigurationError

load_dotenv()

logger = logging.getLogger(__name__)

TRACE_ENV_VAR = "RESULT_OR_ERROR_TRACE"
WARN_ON_MISUSE_ENV_VAR = "RESULT_OR_ERROR_WARN_ON_MISUSE"

_TRUE_VALUES = frozenset({"1"})
_FALSE_VALUES = frozenset({"0", ""})


def _env_flag(name: str, *, strict: bool = True) -> bool:
    raw = os.environ.get(name, "").strip()
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    hint = f"Set {name}=1 to enable or {name}=0 (or unset) to disable."
    if not strict:
        logger.warning("Ignoring invalid value for %s: %r. %s", name, raw, hint)
        return False
    raise ConfigurationError(f"Invalid value for {name}: {raw!r}", hint=hint)


@dataclass(frozen=True)
class Config:
    """Immutable diagnostics configuration.

    Both switches are off by default so the library stays silent.

    Example:
        configure(trace=True)
        # combinator routing is now logged at DEBUG on ``result_or_error.*``
    """

    #: Log which branch each combinator took, at DEBUG.
    trace: bool = False
    #: Log a WARNING when a sentinel error is read from a successful result.
    warn_on_misuse: bool = False

    def __post_init__(self) -> None:
        """Reject non-bool switches early for clear errors."""
        for name in ("trace", "warn_on_misuse"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ConfigurationError(
                    f"{name} must be a bool, got {type(value).__name__}",
                    hint=f"Pass {name}=True or {name}=False.",
                )

    @classmethod
    def from_env(cls, *, strict: bool = True) -> Config:
        """Resolve a Config from ``RESULT_OR_ERROR_*`` environment variables.

        Args:
            strict: Raise ``ConfigurationError`` on an unrecognised value.
                When False, the value is logged at WARNING and treated as off.
        """
        return cls(
            trace=_env_flag(TRACE_ENV_VAR, strict=strict),
            warn_on_misuse=_env_flag(WARN_ON_MISUSE_ENV_VAR, strict=strict),
        )


# Resolved on first use; a bad env value must not break ``import``.
_active: Config | None = None


def current_config() -> Config:
    """Return the active configuration, resolving it from the env on first use."""
    global _active  # noqa: PLW0603
    if _active is None:
        _active = Config.from_env(strict=False)
    return _active


def configure(config: Config | None = None, **changes: Any) -> Config:
    """Replace the active configuration and return it.

    Args:
        config: A complete Config to install. Defaults to the active one.
        **changes: Field overrides applied on top of *config*.
    """
    global _active  # noqa: PLW0603
    base = current_config() if config is None else config
    try:
        _active = replace(base, **changes) if changes else base
    except TypeError as e:
        raise ConfigurationError(
            str(e), hint="Valid fields: trace, warn_on_misuse."
        ) from e
    return _active
