"""CallInitiator ABC: places an outbound call that speaks a script.

Any telephony backend (Twilio, a SIP trunk, a simulator) implements this
interface.  A simulated call is a normal result with status "simulated",
not an error.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Optional

from callsmith.models.call import CallResult

_SEPARATORS = re.compile(r"[\s\-.()]")


def to_e164(number: str, default_country_code: str = "1") -> str:
    """Strip separators and make sure the number carries a country code.

    Ten bare digits are assumed to be a North American number.
    """
    digits = _SEPARATORS.sub("", number)
    if digits.startswith("+"):
        return digits
    if len(digits) == 10:
        return f"+{default_country_code}{digits}"
    return f"+{digits}"


class CallInitiator(ABC):
    """Abstract telephony backend."""

    name: str = "telephony"

    @abstractmethod
    async def initiate_call(
        self,
        to: str,
        script: str,
        voice_profile: str,
        callback_number: Optional[str] = None,
    ) -> CallResult:
        """Place a call to ``to`` that speaks ``script``.

        Args:
            to: Destination phone number as the client typed it.
            script: Text to speak on the call.
            voice_profile: One of the supported voice tones.
            callback_number: Optional number to read out for follow-ups.

        Returns:
            CallResult describing the call.

        Raises:
            CallInitiationError: if the backend refused or failed the call.
        """
