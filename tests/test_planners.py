"""Tests for call planners and LLM reply parsing."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import anthropic
import httpx
import pytest

from callsmith.errors import PlanningError
from callsmith.models.appointment import AppointmentRequest
from callsmith.planners import TemplateCallPlanner, extract_json_object, parse_call_plan
from callsmith.planners.claude import ClaudeCallPlanner
from callsmith.planners.ollama import OllamaCallPlanner
from callsmith.prompts import render_user_prompt

PLAN_JSON = (
    '{"script": "Hi, I am calling for a client.", '
    '"itinerary": ["Introduce", "Ask for a slot"], '
    '"summary": "Cleaning requested at Sunrise Dental."}'
)


@pytest.fixture
def request_obj(valid_payload):
    return AppointmentRequest.model_validate(valid_payload)


# ── JSON extraction ─────────────────────────────────────────────────


class TestExtractJsonObject:
    def test_fenced_json(self):
        text = f"Here is the plan.\n\n```json\n{PLAN_JSON}\n```"
        assert extract_json_object(text)["script"].startswith("Hi")

    def test_bare_json_line(self):
        text = f"Sure.\n{PLAN_JSON}"
        assert extract_json_object(text)["itinerary"] == ["Introduce", "Ask for a slot"]

    def test_whole_reply_multiline(self):
        text = '{\n  "script": "Hello",\n  "itinerary": []\n}'
        assert extract_json_object(text) == {"script": "Hello", "itinerary": []}

    def test_no_json(self):
        assert extract_json_object("I could not draft a script.") is None

    def test_invalid_json(self):
        assert extract_json_object("```json\n{script: hi}\n```") is None


class TestParseCallPlan:
    def test_valid_plan(self):
        plan = parse_call_plan(PLAN_JSON)
        assert plan.script == "Hi, I am calling for a client."
        assert plan.summary == "Cleaning requested at Sunrise Dental."

    def test_blank_summary_is_absent(self):
        plan = parse_call_plan('{"script": "Hello", "summary": "  "}')
        assert plan.summary is None
        assert plan.itinerary == []

    def test_blank_itinerary_steps_dropped(self):
        plan = parse_call_plan('{"script": "Hello", "itinerary": ["a", " ", "b"]}')
        assert plan.itinerary == ["a", "b"]

    def test_missing_script(self):
        with pytest.raises(PlanningError):
            parse_call_plan('{"itinerary": ["a"]}')

    def test_empty_script(self):
        with pytest.raises(PlanningError):
            parse_call_plan('{"script": "   "}')

    def test_no_plan(self):
        with pytest.raises(PlanningError):
            parse_call_plan("Sorry, I can't help with that.")


# ── Prompt rendering ────────────────────────────────────────────────


class TestRenderUserPrompt:
    def test_includes_present_fields(self, request_obj):
        prompt = render_user_prompt(request_obj)
        assert "Business: Sunrise Dental" in prompt
        assert "Preferred date: 2024-06-01" in prompt
        assert "Voice tone: friendly" in prompt

    def test_skips_absent_fields(self, request_obj):
        prompt = render_user_prompt(request_obj)
        assert "None" not in prompt
        assert "Ask for" not in prompt
        assert "callback" not in prompt


# ── Template planner ────────────────────────────────────────────────


class TestTemplateCallPlanner:
    async def test_builds_plan_without_summary(self, request_obj):
        plan = await TemplateCallPlanner().generate_call_plan(request_obj)
        assert "Sunrise Dental" in plan.script
        assert "Book cleaning" in plan.script
        assert plan.summary is None
        assert plan.itinerary[0] == "Introduce the assistant and the client"
        assert plan.itinerary[-1] == "Confirm the booking and close the call"

    async def test_optional_steps(self, valid_payload):
        request = AppointmentRequest.model_validate({
            **valid_payload,
            "contactName": "Dr. Smith",
            "specialInstructions": "Ask for the hygienist Maria.",
            "callBackNumber": "+15559876543",
        })
        plan = await TemplateCallPlanner().generate_call_plan(request)
        assert "Dr. Smith" in plan.script
        assert "Ask for the hygienist Maria." in plan.script
        assert "+15559876543" in plan.script
        assert "Share the callback number" in plan.itinerary


# ── Claude planner ──────────────────────────────────────────────────


def _claude_client(reply: str):
    client = MagicMock()
    client.messages.create = AsyncMock(
        return_value=SimpleNamespace(content=[SimpleNamespace(type="text", text=reply)])
    )
    return client


class TestClaudeCallPlanner:
    async def test_returns_parsed_plan(self, request_obj):
        client = _claude_client(f"```json\n{PLAN_JSON}\n```")
        planner = ClaudeCallPlanner(api_key="test", model="claude-test", client=client)

        plan = await planner.generate_call_plan(request_obj)

        assert plan.itinerary == ["Introduce", "Ask for a slot"]
        kwargs = client.messages.create.call_args.kwargs
        assert kwargs["model"] == "claude-test"
        assert "Sunrise Dental" in kwargs["messages"][0]["content"]

    async def test_api_error_becomes_planning_error(self, request_obj):
        client = MagicMock()
        client.messages.create = AsyncMock(
            side_effect=anthropic.APIConnectionError(
                request=httpx.Request("POST", "https://api.anthropic.com/v1/messages")
            )
        )
        planner = ClaudeCallPlanner(api_key="test", client=client)

        with pytest.raises(PlanningError) as exc_info:
            await planner.generate_call_plan(request_obj)
        assert isinstance(exc_info.value.__cause__, anthropic.APIConnectionError)

    async def test_empty_reply(self, request_obj):
        planner = ClaudeCallPlanner(api_key="test", client=_claude_client("  "))
        with pytest.raises(PlanningError, match="empty"):
            await planner.generate_call_plan(request_obj)

    async def test_unparsable_reply(self, request_obj):
        planner = ClaudeCallPlanner(api_key="test", client=_claude_client("No plan today."))
        with pytest.raises(PlanningError):
            await planner.generate_call_plan(request_obj)


# ── Ollama planner ──────────────────────────────────────────────────


def _patch_transport(monkeypatch, handler):
    real_client = httpx.AsyncClient

    def factory(**kwargs):
        return real_client(transport=httpx.MockTransport(handler), **kwargs)

    monkeypatch.setattr("callsmith.planners.ollama.httpx.AsyncClient", factory)


class TestOllamaCallPlanner:
    async def test_returns_parsed_plan(self, request_obj, monkeypatch):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            return httpx.Response(200, json={"message": {"content": PLAN_JSON}})

        _patch_transport(monkeypatch, handler)
        plan = await OllamaCallPlanner(base_url="http://ollama:11434/").generate_call_plan(request_obj)

        assert seen["url"] == "http://ollama:11434/api/chat"
        assert plan.summary == "Cleaning requested at Sunrise Dental."

    async def test_http_error(self, request_obj, monkeypatch):
        _patch_transport(monkeypatch, lambda request: httpx.Response(503))
        with pytest.raises(PlanningError, match="503"):
            await OllamaCallPlanner().generate_call_plan(request_obj)

    async def test_connection_error(self, request_obj, monkeypatch):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        _patch_transport(monkeypatch, handler)
        with pytest.raises(PlanningError, match="unavailable"):
            await OllamaCallPlanner().generate_call_plan(request_obj)

    @pytest.mark.parametrize("body", [["unexpected"], {"message": "text"}, {"message": {"content": 7}}])
    async def test_unexpected_response_shape(self, request_obj, monkeypatch, body):
        _patch_transport(monkeypatch, lambda request: httpx.Response(200, json=body))
        with pytest.raises(PlanningError, match="unexpected response"):
            await OllamaCallPlanner().generate_call_plan(request_obj)
