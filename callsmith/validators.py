"""Sanitize and validate raw appointment payloads.

Two passes over whatever JSON the client sent:

  sanitize_appointment_payload  — keep known keys, coerce, trim, drop empty
                                  optionals.  Pure and cannot fail.
  validate_appointment_request  — check types, presence, enums and formats.
                                  Returns a ValidationSuccess or a
                                  ValidationFailure; bad input never raises.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Literal, NamedTuple, Union

from pydantic import ValidationError as PydanticValidationError

from callsmith.errors import ValidationError
from callsmith.models.appointment import AppointmentRequest

log = logging.getLogger("callsmith.validators")

# Wire names in declaration order.
KNOWN_FIELDS = (
    "businessName",
    "phoneNumber",
    "contactName",
    "timezone",
    "preferredDate",
    "preferredTimeWindow",
    "reason",
    "specialInstructions",
    "voiceProfile",
    "callBackNumber",
    "email",
)

# Fields where an empty value means "use the default" / "not provided".
_DROP_WHEN_EMPTY = {
    "contactName",
    "specialInstructions",
    "callBackNumber",
    "email",
    "timezone",
    "voiceProfile",
}

_PHONE_FIELDS = {"phoneNumber", "callBackNumber"}

DEFAULT_FAILURE_MESSAGE = "Invalid request payload."


class FieldIssue(NamedTuple):
    path: tuple[str, ...]
    message: str


@dataclass(frozen=True)
class ValidationSuccess:
    data: AppointmentRequest
    success: Literal[True] = True


@dataclass(frozen=True)
class ValidationFailure:
    issues: list[FieldIssue] = field(default_factory=list)
    success: Literal[False] = False

    @property
    def message(self) -> str:
        return self.issues[0].message if self.issues else DEFAULT_FAILURE_MESSAGE

    def field_errors(self) -> dict[str, str]:
        return self.to_error().field_errors()

    def to_error(self) -> ValidationError:
        return ValidationError(self.issues)


ValidationResult = Union[ValidationSuccess, ValidationFailure]


def _coerce(key: str, value: Any) -> Any:
    if isinstance(value, str):
        return value.strip()
    # Phone numbers sent as JSON integers; floats and bools are type errors.
    if key in _PHONE_FIELDS and isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


def sanitize_appointment_payload(raw: Any) -> dict[str, Any]:
    """Return a new dict holding only recognized, trimmed fields.

    Non-dict input is treated as an empty object.  ``None`` and empty strings
    for optional fields are dropped so they read as absent.  The caller's
    object is never modified.
    """
    if not isinstance(raw, dict):
        return {}

    sanitized: dict[str, Any] = {}
    for key in KNOWN_FIELDS:
        if key not in raw or raw[key] is None:
            continue
        value = _coerce(key, raw[key])
        if value == "" and key in _DROP_WHEN_EMPTY:
            continue
        sanitized[key] = value
    return sanitized


def _issue_from_error(error: dict[str, Any]) -> FieldIssue:
    path = tuple(str(part) for part in error.get("loc", ()))
    name = path[0] if path else "request"
    kind = error.get("type", "")
    ctx = error.get("ctx") or {}

    if kind == "missing":
        message = f"{name} is required."
    elif kind == "string_type":
        message = f"{name} must be a string."
    elif kind == "string_too_long":
        message = f"{name} must be at most {ctx.get('max_length')} characters."
    elif kind == "extra_forbidden":
        message = f"{name} is not a recognized field."
    elif kind in ("model_type", "dict_type"):
        message = DEFAULT_FAILURE_MESSAGE
    else:
        # PydanticCustomError messages are already field-specific.
        message = error.get("msg") or DEFAULT_FAILURE_MESSAGE
    return FieldIssue(path, message)


def validate_appointment_request(payload: Any) -> ValidationResult:
    """Validate a sanitized payload into an AppointmentRequest."""
    try:
        data = AppointmentRequest.model_validate(payload)
    except PydanticValidationError as exc:
        issues = [_issue_from_error(err) for err in exc.errors()]
        log.debug("Validation failed: %s", [i.message for i in issues])
        return ValidationFailure(issues=issues)
    return ValidationSuccess(data=data)


def parse_appointment_request(raw: Any) -> ValidationResult:
    """Sanitize then validate in one step."""
    return validate_appointment_request(sanitize_appointment_payload(raw))
