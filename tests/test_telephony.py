"""Tests for CallInitiator implementations."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from twilio.base.exceptions import TwilioRestException

from callsmith.errors import CallInitiationError
from callsmith.telephony import CallInitiator, SimulatedCallInitiator, to_e164
from callsmith.telephony.twilio_call import (
    TwilioCallInitiator,
    build_twiml,
    map_twilio_status,
)


class TestToE164:
    @pytest.mark.parametrize("raw,expected", [
        ("+15551234567", "+15551234567"),
        ("+1 (555) 123-4567", "+15551234567"),
        ("555.123.4567", "+15551234567"),
        ("442071234567", "+442071234567"),
    ])
    def test_normalizes(self, raw, expected):
        assert to_e164(raw) == expected


class TestCallInitiatorABC:
    def test_cannot_instantiate(self):
        with pytest.raises(TypeError):
            CallInitiator()


# ── Simulated ───────────────────────────────────────────────────────


class TestSimulatedCallInitiator:
    async def test_returns_simulated_result(self):
        result = await SimulatedCallInitiator().initiate_call(
            to="+1 555 123 4567",
            script="Hello there.",
            voice_profile="friendly",
            callback_number="+15559876543",
        )
        assert result.status == "simulated"
        assert result.id.startswith("sim-")
        assert result.to == "+15551234567"
        assert result.started_at is not None
        assert result.details["callbackNumber"] == "+15559876543"

    async def test_ids_are_unique(self):
        initiator = SimulatedCallInitiator()
        first = await initiator.initiate_call("+15551234567", "Hi", "friendly")
        second = await initiator.initiate_call("+15551234567", "Hi", "friendly")
        assert first.id != second.id


# ── Twilio ──────────────────────────────────────────────────────────


class TestTwiml:
    def test_says_each_line_with_profile_voice(self):
        twiml = build_twiml("Hello.\n\nI'd like a cleaning.", "professional")
        assert twiml.count("<Say") == 2
        assert 'voice="Polly.Matthew"' in twiml
        assert "I'd like a cleaning." in twiml or "I&apos;d like a cleaning." in twiml

    def test_callback_number_read_out(self):
        twiml = build_twiml("Hello.", "friendly", "+15559876543")
        assert "+15559876543" in twiml

    def test_unknown_profile_uses_default_voice(self):
        assert 'voice="Polly.Joanna"' in build_twiml("Hello.", "whisper")


class TestMapTwilioStatus:
    @pytest.mark.parametrize("twilio_status,expected", [
        ("queued", "initiated"),
        ("ringing", "initiated"),
        ("in-progress", "initiated"),
        ("completed", "completed"),
        ("busy", "failed"),
        ("no-answer", "failed"),
        ("failed", "failed"),
        (None, "initiated"),
    ])
    def test_mapping(self, twilio_status, expected):
        assert map_twilio_status(twilio_status) == expected


class TestTwilioCallInitiator:
    def _initiator(self, client):
        return TwilioCallInitiator(
            account_sid="ACtest", auth_token="token", from_number="+15550001111", client=client,
        )

    async def test_creates_call(self):
        client = MagicMock()
        client.calls.create.return_value = SimpleNamespace(sid="CA123", status="queued")

        result = await self._initiator(client).initiate_call(
            to="(555) 123-4567", script="Hello.", voice_profile="friendly",
        )

        assert result.id == "CA123"
        assert result.status == "initiated"
        assert result.provider == "twilio"
        kwargs = client.calls.create.call_args.kwargs
        assert kwargs["to"] == "+15551234567"
        assert kwargs["from_"] == "+15550001111"
        assert "<Say" in kwargs["twiml"]

    async def test_rest_error_becomes_call_initiation_error(self):
        client = MagicMock()
        client.calls.create.side_effect = TwilioRestException(
            400, "/Calls", msg="The 'To' number is not a valid phone number."
        )

        with pytest.raises(CallInitiationError) as exc_info:
            await self._initiator(client).initiate_call("+15551234567", "Hello.", "friendly")
        assert isinstance(exc_info.value.__cause__, TwilioRestException)

    def test_requires_from_number(self):
        with pytest.raises(ValueError):
            TwilioCallInitiator(account_sid="AC", auth_token="t", from_number="", client=MagicMock())
