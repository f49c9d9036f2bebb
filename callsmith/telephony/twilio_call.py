"""Twilio Programmable Voice call initiator.

Places an outbound call with inline TwiML that speaks the script using an
Amazon Polly voice picked from the voice profile.  The Twilio SDK is
synchronous, so ``calls.create`` runs in the default thread pool.

API reference:
  https://www.twilio.com/docs/voice/api/call-resource#create-a-call-resource
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from functools import partial
from typing import Any, Optional

from twilio.base.exceptions import TwilioException
from twilio.rest import Client
from twilio.twiml.voice_response import VoiceResponse

from callsmith.errors import CallInitiationError
from callsmith.models.call import CallResult, CallStatus
from callsmith.telephony.base import CallInitiator, to_e164

log = logging.getLogger("callsmith.telephony.twilio")

VOICES = {
    "friendly": "Polly.Joanna",
    "professional": "Polly.Matthew",
    "concise": "Polly.Kendra",
    "empathetic": "Polly.Salli",
}
DEFAULT_VOICE = "Polly.Joanna"

_TERMINAL_FAILURES = {"failed", "busy", "no-answer", "canceled"}


def map_twilio_status(status: str | None) -> CallStatus:
    """Collapse Twilio's call statuses onto the pipeline's closed set."""
    if status == "completed":
        return "completed"
    if status in _TERMINAL_FAILURES:
        return "failed"
    return "initiated"


def build_twiml(script: str, voice_profile: str, callback_number: Optional[str] = None) -> str:
    """Render the TwiML document spoken on the call."""
    voice = VOICES.get(voice_profile, DEFAULT_VOICE)
    response = VoiceResponse()
    for line in script.splitlines():
        if line.strip():
            response.say(line.strip(), voice=voice)
            response.pause(length=1)
    if callback_number:
        response.say(
            f"If you need to reach my client, the callback number is {callback_number}.",
            voice=voice,
        )
    return str(response)


class TwilioCallInitiator(CallInitiator):
    """CallInitiator backed by the Twilio REST API."""

    name = "twilio"

    def __init__(
        self,
        account_sid: str,
        auth_token: str,
        from_number: str,
        client: Client | None = None,
    ) -> None:
        if not from_number:
            raise ValueError("A Twilio caller number is required (TWILIO_PHONE_NUMBER).")
        self._client = client or Client(account_sid, auth_token)
        self._from_number = from_number

    async def _run_in_executor(self, func, *args, **kwargs) -> Any:
        """Run a synchronous Twilio API call in the default thread pool."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, partial(func, *args, **kwargs))

    async def initiate_call(
        self,
        to: str,
        script: str,
        voice_profile: str,
        callback_number: Optional[str] = None,
    ) -> CallResult:
        destination = to_e164(to)
        twiml = build_twiml(script, voice_profile, callback_number)

        try:
            call = await self._run_in_executor(
                self._client.calls.create,
                to=destination,
                from_=self._from_number,
                twiml=twiml,
            )
        except TwilioException as exc:
            raise CallInitiationError(
                "The call could not be placed. Check the phone number and try again."
            ) from exc

        status = map_twilio_status(getattr(call, "status", None))
        log.info("Twilio call %s created (status=%s)", call.sid, call.status)
        return CallResult(
            id=call.sid,
            status=status,
            provider=self.name,
            to=destination,
            started_at=datetime.now(timezone.utc),
            details={"twilioStatus": call.status, "voice": VOICES.get(voice_profile, DEFAULT_VOICE)},
        )
