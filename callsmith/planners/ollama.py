"""Call planner backed by a local Ollama server."""

from __future__ import annotations

import logging

import httpx

from callsmith.errors import PlanningError
from callsmith.models.appointment import AppointmentRequest
from callsmith.models.call import CallPlan
from callsmith.planners.base import CallPlanner, parse_call_plan
from callsmith.prompts import SYSTEM_PROMPT, render_user_prompt

log = logging.getLogger("callsmith.planners.ollama")


class OllamaCallPlanner(CallPlanner):
    """POST the prompt to Ollama's /api/chat and parse the JSON reply."""

    name = "ollama"

    def __init__(self, base_url: str = "http://localhost:11434", model: str = "qwen2.5:7b") -> None:
        self._base_url = base_url.rstrip("/")
        self._model = model

    async def generate_call_plan(self, request: AppointmentRequest) -> CallPlan:
        payload = {
            "model": self._model,
            "stream": False,
            "format": "json",
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": render_user_prompt(request)},
            ],
        }
        try:
            async with httpx.AsyncClient(timeout=60) as client:
                resp = await client.post(f"{self._base_url}/api/chat", json=payload)
                resp.raise_for_status()
                data = resp.json()
        except httpx.ConnectError as exc:
            raise PlanningError(
                "The call planner is unavailable. Please try again shortly."
            ) from exc
        except httpx.HTTPStatusError as exc:
            raise PlanningError(
                f"The call planner returned an error (status {exc.response.status_code})."
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise PlanningError("The call planner request failed.") from exc

        message = data.get("message") if isinstance(data, dict) else None
        if not isinstance(message, dict):
            raise PlanningError("The call planner returned an unexpected response.")
        reply = message.get("content") or ""
        if not isinstance(reply, str):
            raise PlanningError("The call planner returned an unexpected response.")
        plan = parse_call_plan(reply)
        log.info("Ollama plan ready: %d itinerary steps", len(plan.itinerary))
        return plan
