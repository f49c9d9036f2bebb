"""Telephony stand-in used when live credentials are not configured."""

from __future__ import annotations

import logging
import secrets
from datetime import datetime, timezone
from typing import Optional

from callsmith.models.call import CallResult
from callsmith.telephony.base import CallInitiator, to_e164

log = logging.getLogger("callsmith.telephony.simulated")


class SimulatedCallInitiator(CallInitiator):
    """Records the call that would have been placed. Never raises."""

    name = "simulated"

    async def initiate_call(
        self,
        to: str,
        script: str,
        voice_profile: str,
        callback_number: Optional[str] = None,
    ) -> CallResult:
        call_id = f"sim-{secrets.token_hex(6)}"
        log.info("Simulated call %s (%d script chars)", call_id, len(script))
        return CallResult(
            id=call_id,
            status="simulated",
            provider=self.name,
            to=to_e164(to),
            started_at=datetime.now(timezone.utc),
            details={
                "voiceProfile": voice_profile,
                "callbackNumber": callback_number,
                "scriptPreview": script[:160],
            },
        )
