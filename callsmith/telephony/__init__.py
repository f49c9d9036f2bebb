"""Telephony abstractions and implementations."""

from __future__ import annotations

import logging

from callsmith.config import Settings

from .base import CallInitiator, to_e164
from .simulated import SimulatedCallInitiator

log = logging.getLogger("callsmith.telephony")

__all__ = ["CallInitiator", "SimulatedCallInitiator", "create_call_initiator", "to_e164"]


def create_call_initiator(settings: Settings) -> CallInitiator:
    """Twilio when credentials are configured, otherwise the simulator."""
    if settings.twilio_configured:
        from .twilio_call import TwilioCallInitiator

        return TwilioCallInitiator(
            account_sid=settings.twilio_account_sid,
            auth_token=settings.twilio_auth_token,
            from_number=settings.twilio_phone_number,
        )
    log.warning("Twilio credentials not configured; calls will be simulated")
    return SimulatedCallInitiator()
