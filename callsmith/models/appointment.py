"""Pydantic model for a validated appointment request.

Field names travel over the wire in camelCase (``businessName``,
``callBackNumber`` ...) and are exposed as snake_case attributes in Python.
Every string validator below raises ``PydanticCustomError`` so the message
reaching the form names the field the way the client spelled it.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

VOICE_PROFILES = ("friendly", "professional", "concise", "empathetic")

SUPPORTED_TIMEZONES = (
    "America/New_York",
    "America/Chicago",
    "America/Denver",
    "America/Los_Angeles",
    "Europe/London",
    "Europe/Paris",
    "Asia/Singapore",
    "Asia/Tokyo",
    "Australia/Sydney",
)

DEFAULT_TIMEZONE = "America/New_York"
DEFAULT_VOICE_PROFILE = "friendly"

# Separators a person might type inside a phone number.
_PHONE_SEPARATORS = re.compile(r"[\s\-.()]")
_PHONE_DIGITS = re.compile(r"^\+?\d{7,15}$")
_EMAIL = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

_REQUIRED_FIELDS = ("business_name", "phone_number", "preferred_date",
                    "preferred_time_window", "reason")


def is_phone_shaped(value: str) -> bool:
    """True for an optional ``+`` and 7-15 digits once separators are removed."""
    return bool(_PHONE_DIGITS.match(_PHONE_SEPARATORS.sub("", value)))


def _wire_name(info: ValidationInfo) -> str:
    return to_camel(info.field_name) if info.field_name else "value"


class AppointmentRequest(BaseModel):
    """Validated description of the call to be placed."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        strict=True,
        extra="forbid",
    )

    business_name: str = Field(max_length=120)
    phone_number: str
    contact_name: Optional[str] = None
    timezone: str = DEFAULT_TIMEZONE
    preferred_date: str
    preferred_time_window: str
    reason: str = Field(max_length=1000)
    special_instructions: Optional[str] = Field(default=None, max_length=1000)
    voice_profile: str = DEFAULT_VOICE_PROFILE
    call_back_number: Optional[str] = None
    email: Optional[str] = None

    @field_validator(*_REQUIRED_FIELDS)
    @classmethod
    def _not_blank(cls, value: str, info: ValidationInfo) -> str:
        if not value.strip():
            raise PydanticCustomError(
                "required", "{field} is required.", {"field": _wire_name(info)}
            )
        return value

    @field_validator("phone_number", "call_back_number")
    @classmethod
    def _phone_shaped(cls, value: Optional[str], info: ValidationInfo) -> Optional[str]:
        if value is not None and value.strip() and not is_phone_shaped(value):
            raise PydanticCustomError(
                "phone_format",
                "{field} must be a valid phone number.",
                {"field": _wire_name(info)},
            )
        return value

    @field_validator("email")
    @classmethod
    def _email_shaped(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not _EMAIL.match(value):
            raise PydanticCustomError(
                "email_format", "email must be a valid email address."
            )
        return value

    @field_validator("preferred_date")
    @classmethod
    def _calendar_date(cls, value: str) -> str:
        if not value.strip():
            return value
        try:
            if not _ISO_DATE.match(value):
                raise ValueError(value)
            date.fromisoformat(value)
        except ValueError:
            raise PydanticCustomError(
                "date_format", "preferredDate must be a date in YYYY-MM-DD format."
            ) from None
        return value

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        if value not in SUPPORTED_TIMEZONES:
            raise PydanticCustomError(
                "enum",
                "timezone must be one of: {options}.",
                {"options": ", ".join(SUPPORTED_TIMEZONES)},
            )
        return value

    @field_validator("voice_profile")
    @classmethod
    def _known_voice(cls, value: str) -> str:
        if value not in VOICE_PROFILES:
            raise PydanticCustomError(
                "enum",
                "voiceProfile must be one of: {options}.",
                {"options": ", ".join(VOICE_PROFILES)},
            )
        return value

    def to_payload(self) -> dict[str, Any]:
        """camelCase dict with absent optionals omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)
