"""CallPlanner ABC and the shared reply parser for LLM-backed planners."""

from __future__ import annotations

import json
import re
from abc import ABC, abstractmethod

from pydantic import ValidationError as PydanticValidationError

from callsmith.errors import PlanningError
from callsmith.models.appointment import AppointmentRequest
from callsmith.models.call import CallPlan


class CallPlanner(ABC):
    """Turns a validated appointment request into a call plan.

    Implementations raise ``PlanningError`` when no plan can be produced
    (upstream unavailable, unusable reply).  They do not retry.
    """

    name: str = "planner"

    @abstractmethod
    async def generate_call_plan(self, request: AppointmentRequest) -> CallPlan:
        """Return the script, itinerary and optional summary for the call."""


def extract_json_object(text: str) -> dict | None:
    """Extract a JSON object from LLM output.

    Accepts a fenced ```json block, a bare object on its own line, or a
    reply that is nothing but the object.  Returns None when nothing parses.
    """
    pattern = r"```(?:json)?\s*\n?({.*?})\s*\n?```"
    match = re.search(pattern, text, re.DOTALL)
    if match:
        try:
            return json.loads(match.group(1))
        except json.JSONDecodeError:
            pass

    stripped = text.strip()
    if stripped.startswith("{") and stripped.endswith("}"):
        try:
            return json.loads(stripped)
        except json.JSONDecodeError:
            pass

    for line in text.split("\n"):
        line = line.strip()
        if line.startswith("{") and line.endswith("}"):
            try:
                return json.loads(line)
            except json.JSONDecodeError:
                continue

    return None


def parse_call_plan(text: str) -> CallPlan:
    """Parse an LLM reply into a CallPlan or raise PlanningError."""
    data = extract_json_object(text or "")
    if not isinstance(data, dict):
        raise PlanningError("The planner returned a reply without a call plan.")
    try:
        return CallPlan.model_validate(data)
    except PydanticValidationError as exc:
        raise PlanningError("The planner returned an incomplete call plan.") from exc
