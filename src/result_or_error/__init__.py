"""result-or-error: a value-or-errors container with composable combinators.

Public API:
    - ResultOrError: holds one value or a non-empty tuple of Error
    - Error / ErrorKind: immutable failure descriptions
    - deferred(): chain combinators on an awaitable ResultOrError
    - to_envelope() / from_envelope(): plain-dict transport form
    - configure(): diagnostics switches (tracing, misuse warnings)
"""

from __future__ import annotations

import logging

from result_or_error.config import Config, configure, current_config
from result_or_error.deferred import DeferredResult, deferred
from result_or_error.envelope import ResultEnvelope, from_envelope, to_envelope
from result_or_error.error import NO_ERRORS, NO_FIRST_ERROR, Error, ErrorKind
from result_or_error.errors import (
    ConfigurationError,
    EmptyErrorsError,
    EnvelopeError,
    InvariantViolationError,
    ResultOrErrorException,
)
from result_or_error.factory import (
    from_error,
    from_errors,
    from_value,
    to_result_or_error,
)
from result_or_error.result import ResultOrError

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("result-or-error")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("result_or_error").addHandler(logging.NullHandler())

__all__ = [
    "NO_ERRORS",
    "NO_FIRST_ERROR",
    "Config",
    "ConfigurationError",
    "DeferredResult",
    "EmptyErrorsError",
    "EnvelopeError",
    "Error",
    "ErrorKind",
    "InvariantViolationError",
    "ResultEnvelope",
    "ResultOrError",
    "ResultOrErrorException",
    "configure",
    "current_config",
    "deferred",
    "from_envelope",
    "from_error",
    "from_errors",
    "from_value",
    "to_envelope",
    "to_result_or_error",
]
