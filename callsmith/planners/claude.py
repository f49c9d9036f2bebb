"""Call planner backed by Anthropic's Claude Messages API."""

from __future__ import annotations

import logging

import anthropic

from callsmith.errors import PlanningError
from callsmith.models.appointment import AppointmentRequest
from callsmith.models.call import CallPlan
from callsmith.planners.base import CallPlanner, parse_call_plan
from callsmith.prompts import SYSTEM_PROMPT, render_user_prompt

log = logging.getLogger("callsmith.planners.claude")


class ClaudeCallPlanner(CallPlanner):
    """Ask Claude for a JSON call plan and parse the reply."""

    name = "claude"

    def __init__(
        self,
        api_key: str,
        model: str = "claude-sonnet-4-5",
        max_tokens: int = 1024,
        client: anthropic.AsyncAnthropic | None = None,
    ) -> None:
        self._client = client or anthropic.AsyncAnthropic(api_key=api_key)
        self._model = model
        self._max_tokens = max_tokens

    async def generate_call_plan(self, request: AppointmentRequest) -> CallPlan:
        try:
            message = await self._client.messages.create(
                model=self._model,
                max_tokens=self._max_tokens,
                system=SYSTEM_PROMPT,
                messages=[{"role": "user", "content": render_user_prompt(request)}],
            )
        except anthropic.APIError as exc:
            raise PlanningError(
                "The call planner is unavailable. Please try again shortly."
            ) from exc

        reply = "".join(
            block.text for block in message.content if getattr(block, "type", "") == "text"
        )
        if not reply.strip():
            raise PlanningError("The call planner returned an empty reply.")

        plan = parse_call_plan(reply)
        log.info(
            "Claude plan ready: %d script chars, %d itinerary steps",
            len(plan.script),
            len(plan.itinerary),
        )
        return plan
