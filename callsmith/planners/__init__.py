"""Call planner abstractions and implementations."""

from __future__ import annotations

import logging

from callsmith.config import Settings

from .base import CallPlanner, extract_json_object, parse_call_plan
from .template import TemplateCallPlanner

log = logging.getLogger("callsmith.planners")

__all__ = [
    "CallPlanner",
    "TemplateCallPlanner",
    "create_planner",
    "extract_json_object",
    "parse_call_plan",
]


def create_planner(settings: Settings) -> CallPlanner:
    """Build the planner selected by ``LLM_PROVIDER``.

    Claude without an API key degrades to the template planner; startup
    validation already refuses that combination outside DEBUG.
    """
    if settings.llm_provider == "claude":
        if settings.anthropic_api_key:
            from .claude import ClaudeCallPlanner

            return ClaudeCallPlanner(
                api_key=settings.anthropic_api_key,
                model=settings.anthropic_model,
            )
        log.warning("ANTHROPIC_API_KEY not set, using the template planner")
        return TemplateCallPlanner()

    if settings.llm_provider == "ollama":
        from .ollama import OllamaCallPlanner

        return OllamaCallPlanner(base_url=settings.ollama_url, model=settings.ollama_model)

    return TemplateCallPlanner()
