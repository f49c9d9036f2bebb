"""Project a request's outcome onto the status timeline shown to the user.

Pure presentation logic: it reads only the response shape returned by the
HTTP surface, never the orchestrator's internals.  Every submission starts
a fresh list; entries are replaced wholesale, never patched.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union

from pydantic import BaseModel

from callsmith.models.call import AppointmentResponse

TimelineStatus = Literal["pending", "active", "done", "error"]

SIMULATED_CALL_DESCRIPTION = (
    "Simulated call created. Configure telephony credentials to enable live calling."
)


class TimelineEntry(BaseModel):
    id: str
    label: str
    description: str
    status: TimelineStatus


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class InFlight:
    pass


@dataclass(frozen=True)
class Succeeded:
    response: AppointmentResponse


@dataclass(frozen=True)
class Failed:
    message: str


TimelineState = Union[Idle, InFlight, Succeeded, Failed]


def _collecting(status: TimelineStatus, description: str) -> TimelineEntry:
    return TimelineEntry(
        id="collecting", label="Collecting details", status=status, description=description
    )


def _call_entry(status: str) -> TimelineEntry:
    if status == "completed":
        entry_status: TimelineStatus = "done"
    else:
        entry_status = "active"

    if status == "simulated":
        description = SIMULATED_CALL_DESCRIPTION
    else:
        description = f"Call {status or 'initiated'}."
    return TimelineEntry(id="call", label="Call status", status=entry_status, description=description)


def project_timeline(state: TimelineState) -> list[TimelineEntry]:
    """Map an idle/in-flight/succeeded/failed request onto timeline entries."""
    if isinstance(state, InFlight):
        return [_collecting("active", "Crafting call script and preparing the assistant.")]

    if isinstance(state, Failed):
        return [_collecting("error", state.message or "Submission failed.")]

    if isinstance(state, Succeeded):
        response = state.response
        return [
            TimelineEntry(
                id="script",
                label="Script finalized",
                status="done",
                description=response.script
                or "Assistant prepared a call script based on your preferences.",
            ),
            _call_entry(response.call.status),
            TimelineEntry(
                id="summary",
                label="Summary",
                status="done" if response.summary else "pending",
                description=response.summary
                or "Waiting for the assistant to return the appointment summary.",
            ),
        ]

    return [
        TimelineEntry(
            id="init",
            label="Ready",
            status="done",
            description="Provide appointment details to start a call.",
        )
    ]
