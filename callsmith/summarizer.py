"""Fallback outcome summary for when the planner does not supply one."""

from __future__ import annotations

import logging

from callsmith.models.appointment import AppointmentRequest

log = logging.getLogger("callsmith.summarizer")


def generic_summary(request: AppointmentRequest) -> str:
    return (
        f"Placed a call to {request.business_name} at {request.phone_number} "
        "to arrange the appointment."
    )


def summarize_call_outcome(request: AppointmentRequest, script: str) -> str:
    """Build a short human-readable summary of the requested appointment.

    Deterministic and side-effect free apart from a debug log line.  Never
    raises: any problem building the detailed summary falls back to a
    generic sentence naming the business and phone number.
    """
    try:
        return _detailed_summary(request, script)
    except Exception:
        log.debug("Falling back to generic summary", exc_info=True)
        return generic_summary(request)


def _detailed_summary(request: AppointmentRequest, script: str) -> str:
    reason = request.reason.rstrip(".")
    sentences = [
        f"Requested an appointment with {request.business_name} ({reason}) "
        f"on {request.preferred_date} ({request.preferred_time_window}, "
        f"{request.timezone}) via {request.phone_number}."
    ]
    if request.contact_name:
        sentences.append(f"Asked to speak with {request.contact_name}.")
    if request.call_back_number:
        sentences.append(f"Left {request.call_back_number} as the callback number.")
    if request.email:
        sentences.append(f"Confirmation requested at {request.email}.")

    lines = [line for line in script.splitlines() if line.strip()]
    if lines:
        noun = "line" if len(lines) == 1 else "lines"
        sentences.append(
            f"The {request.voice_profile} assistant used a script of {len(lines)} {noun}."
        )
    return " ".join(sentences)
