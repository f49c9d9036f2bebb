"""Pydantic models for call plans, call results and the assembled response."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

CallStatus = Literal["initiated", "completed", "simulated", "failed"]


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CallPlan(_WireModel):
    """Planner output: what to say on the call."""

    script: str = Field(min_length=1)
    itinerary: list[str] = []
    summary: Optional[str] = None

    @field_validator("script")
    @classmethod
    def _script_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("script must not be empty")
        return value

    @field_validator("itinerary")
    @classmethod
    def _drop_blank_steps(cls, value: list[str]) -> list[str]:
        return [step.strip() for step in value if step and step.strip()]

    @field_validator("summary")
    @classmethod
    def _blank_summary_is_absent(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value.strip()


class CallResult(_WireModel):
    """Telephony report of a placed (or simulated) call.

    Only ``status`` carries meaning for the pipeline; the remaining fields
    are whatever the telephony backend chose to report.
    """

    id: str
    status: CallStatus
    provider: str = ""
    to: str = ""
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    details: dict[str, Any] = {}


class ResponseMetadata(_WireModel):
    business_name: str
    request_timestamp: str  # ISO-8601 UTC, millisecond precision, "Z" suffix


class AppointmentResponse(_WireModel):
    """Payload returned to the client for a successful request."""

    script: str
    call: CallResult
    summary: str
    itinerary: list[str]
    metadata: ResponseMetadata

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


def format_request_timestamp(moment: datetime) -> str:
    """Render an aware datetime as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in UTC."""
    utc = moment.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"
