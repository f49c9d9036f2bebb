"""Prompt text for the LLM call planners."""

from __future__ import annotations

from callsmith.models.appointment import AppointmentRequest

SYSTEM_PROMPT = """\
You are a phone assistant that calls businesses to book appointments on \
behalf of a client. Draft the script the assistant will speak on the call.

Rules:
- The script is read aloud by text-to-speech. Write short spoken sentences, \
no markdown, no bullet characters.
- Introduce yourself as an assistant calling on behalf of the client.
- State the reason for the appointment, the preferred date and time window \
(with the timezone), and ask for the earliest matching slot.
- If the client gave a callback number, offer it. Never invent details the \
client did not provide. Never say "null", "none" or "N/A".
- Match the requested voice tone.

Reply with a single JSON object and nothing else:
{"script": "<full spoken script>", "itinerary": ["<call step>", ...], "summary": "<one sentence>"}
The itinerary lists the discrete steps of the call in order. Omit "summary" \
if you cannot state the outcome in advance."""

_FIELD_LABELS = (
    ("business_name", "Business"),
    ("phone_number", "Phone number"),
    ("contact_name", "Ask for"),
    ("reason", "Reason for the appointment"),
    ("preferred_date", "Preferred date"),
    ("preferred_time_window", "Preferred time window"),
    ("timezone", "Timezone"),
    ("special_instructions", "Special instructions"),
    ("voice_profile", "Voice tone"),
    ("call_back_number", "Client callback number"),
    ("email", "Client email for confirmations"),
)


def render_user_prompt(request: AppointmentRequest) -> str:
    """List the request fields, skipping the ones the client left out."""
    lines = ["Appointment request:"]
    for attr, label in _FIELD_LABELS:
        value = getattr(request, attr)
        if value:
            lines.append(f"- {label}: {value}")
    return "\n".join(lines)
