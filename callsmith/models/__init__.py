"""Data models for the appointment call pipeline."""

from .appointment import SUPPORTED_TIMEZONES, VOICE_PROFILES, AppointmentRequest
from .call import AppointmentResponse, CallPlan, CallResult, ResponseMetadata

__all__ = [
    "AppointmentRequest",
    "AppointmentResponse",
    "CallPlan",
    "CallResult",
    "ResponseMetadata",
    "SUPPORTED_TIMEZONES",
    "VOICE_PROFILES",
]
