"""
Response validation and serialization shared by the threaded and asyncio
dispatchers.
"""

from typing import Any, Callable, Container, Iterable, Optional, Sequence
import json

from .exceptions import BuckoError, ResponseSerializationError, ResponseValidationError
from .response import RawResponse, Result, parse_json_or_none

ACCEPTABLE_STATUS = range(200, 300)

# Statuses whose body is empty by definition
EMPTY_BODY_STATUS = (204, 205)

Validator = Callable[[RawResponse], Optional[BuckoError]]
Serializer = Callable[[RawResponse], Result]


def status_validator(acceptable: Container[int] = ACCEPTABLE_STATUS) -> Validator:
    def validate(raw: RawResponse) -> Optional[BuckoError]:
        if raw.status_code in acceptable:
            return None
        return ResponseValidationError(
            f"Response status code was unacceptable: {raw.status_code}",
            status_code=raw.status_code,
            payload=parse_json_or_none(raw.data),
        )

    return validate


def content_type_validator(acceptable: Sequence[str]) -> Validator:
    """
    Accept responses whose Content-Type matches one of ``acceptable``.

    Entries may use wildcards (``*/*``, ``application/*``). Empty bodies pass.
    """
    wanted = [_split_mime(value) for value in acceptable]

    def validate(raw: RawResponse) -> Optional[BuckoError]:
        if not raw.data:
            return None
        header = raw.headers.get("Content-Type")
        if header:
            kind, sub = _split_mime(header)
            for want_kind, want_sub in wanted:
                if want_kind in ("*", kind) and want_sub in ("*", sub):
                    return None
        return ResponseValidationError(
            f"Response content type {header!r} was unacceptable",
            status_code=raw.status_code,
            payload=parse_json_or_none(raw.data),
        )

    return validate


def _split_mime(value: str):
    mime = value.split(";", 1)[0].strip().lower()
    kind, _, sub = mime.partition("/")
    return kind or "*", sub or "*"


def run_validators(raw: RawResponse, validators: Iterable[Validator]) -> Optional[BuckoError]:
    """Return the first validation error, if any."""
    for validator in validators:
        error = validator(raw)
        if error is not None:
            return error
    return None


def serialize_data(raw: RawResponse) -> Result:
    return Result(value=raw.data)


def serialize_json(raw: RawResponse) -> Result:
    """
    Decode the body as JSON.

    An empty body is None for 204/205 and a serialization error otherwise.
    """
    if raw.status_code in EMPTY_BODY_STATUS:
        return Result(value=None)

    if not raw.data:
        return Result(
            error=ResponseSerializationError(
                "Response could not be serialized, input data was empty"
            )
        )

    try:
        value: Any = json.loads(raw.data)
    except (ValueError, UnicodeDecodeError) as e:
        error = ResponseSerializationError(f"JSON could not be serialized: {e}")
        error.__cause__ = e
        return Result(error=error)

    return Result(value=value)
