"""Offline call planner that fills a fixed script template.

Used when no LLM is configured (local development, demos, tests).  It never
supplies a summary, so the orchestrator's summarizer fallback always runs.
"""

from __future__ import annotations

from callsmith.models.appointment import AppointmentRequest
from callsmith.models.call import CallPlan
from callsmith.planners.base import CallPlanner

_OPENERS = {
    "friendly": "Hi there! ",
    "professional": "Good day. ",
    "concise": "Hello. ",
    "empathetic": "Hello, thank you so much for taking my call. ",
}


class TemplateCallPlanner(CallPlanner):
    name = "template"

    async def generate_call_plan(self, request: AppointmentRequest) -> CallPlan:
        return build_template_plan(request)


def build_template_plan(request: AppointmentRequest) -> CallPlan:
    opener = _OPENERS.get(request.voice_profile, "Hello. ")
    lines = [
        f"{opener}I'm an assistant calling {request.business_name} on behalf of a client.",
    ]
    itinerary = ["Introduce the assistant and the client"]

    if request.contact_name:
        lines.append(f"May I please speak with {request.contact_name}?")
        itinerary.append(f"Ask for {request.contact_name}")

    lines.append(f"I'd like to book an appointment for the following: {request.reason}.")
    lines.append(
        f"The preferred date is {request.preferred_date}, "
        f"{request.preferred_time_window} {request.timezone} time."
    )
    itinerary.append("State the reason and preferred time")

    if request.special_instructions:
        lines.append(request.special_instructions)
        itinerary.append("Relay the special instructions")

    lines.append("What is the earliest available slot that fits?")
    itinerary.append("Negotiate an available slot")

    if request.call_back_number:
        lines.append(f"If anything changes, the client can be reached at {request.call_back_number}.")
        itinerary.append("Share the callback number")
    if request.email:
        lines.append(f"Please send the confirmation to {request.email}.")
        itinerary.append("Request an email confirmation")

    lines.append("Thank you for your help!")
    itinerary.append("Confirm the booking and close the call")

    return CallPlan(script="\n".join(lines), itinerary=itinerary)
