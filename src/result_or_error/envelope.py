"""Envelope: a JSON-friendly dict form of a ResultOrError.

Useful at process boundaries (HTTP handlers, task queues) where a container
has to travel as plain data and be rebuilt on the other side.
"""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Annotated, Any, Literal, TypedDict

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from result_or_error.error import Error, ErrorDict, ErrorKind
from result_or_error.errors import EnvelopeError
from result_or_error.result import ResultOrError

logger = logging.getLogger(__name__)


class ResultEnvelope(TypedDict, total=False):
    """Envelope produced by ``to_envelope``.

    ``status`` is ``"ok"`` with ``value`` present, or ``"error"`` with a
    non-empty ``errors`` list.
    """

    status: Literal["ok", "error"]
    value: Any
    errors: list[ErrorDict]


class _ErrorPayload(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: ErrorKind
    code: str
    description: str
    metadata: dict[str, Any] = Field(default_factory=dict)


class _OkPayload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    status: Literal["ok"]
    value: Any


class _ErrorsPayload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    status: Literal["error"]
    errors: list[_ErrorPayload] = Field(min_length=1)


_ENVELOPE_ADAPTER: TypeAdapter[_OkPayload | _ErrorsPayload] = TypeAdapter(
    Annotated[_OkPayload | _ErrorsPayload, Field(discriminator="status")]
)


def to_envelope(result: ResultOrError[Any]) -> ResultEnvelope:
    """Render *result* as an envelope dict.

    The value is included as-is; callers that need JSON must hold
    JSON-compatible values.
    """
    if result.is_error:
        return {
            "status": "error",
            "errors": [e.to_dict() for e in result.errors],
        }
    return {"status": "ok", "value": result.value}


def from_envelope(data: Mapping[str, Any]) -> ResultOrError[Any]:
    """Rebuild a container from an envelope dict.

    Raises:
        EnvelopeError: If *data* is not a well-formed envelope.
    """
    try:
        payload = _ENVELOPE_ADAPTER.validate_python(data)
    except ValidationError as e:
        details = e.errors(include_url=False)
        logger.debug("Rejected envelope payload: %d validation error(s)", len(details))
        raise EnvelopeError(
            f"Invalid result envelope: {e.error_count()} validation error(s)",
            hint="Expected {'status': 'ok', 'value': ...} or "
            "{'status': 'error', 'errors': [...]}.",
            details=details,
        ) from e

    if isinstance(payload, _OkPayload):
        return ResultOrError.from_value(payload.value)
    return ResultOrError.from_errors(
        Error(
            kind=item.kind,
            code=item.code,
            description=item.description,
            metadata=item.metadata,
        )
        for item in payload.errors
    )
