"""Per-request appointment pipeline: validate → plan → call → summarize.

One ``AppointmentOrchestrator`` is built at startup with its collaborators
and shared by every request.  It holds no per-request state; each call to
``handle()`` walks a single request through

    received → sanitized → validated → planned → called → summarized → assembled

and stops at the first failure.  The outcome is returned as a tagged union
(``AppointmentSuccess`` / ``AppointmentFailure``) rather than raised, so the
HTTP layer only maps it onto a status code.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Literal, Optional, Union

from callsmith.errors import (
    CallInitiationError,
    CallSmithError,
    PlanningError,
    UnexpectedError,
)
from callsmith.models.appointment import AppointmentRequest
from callsmith.models.call import (
    AppointmentResponse,
    CallPlan,
    CallResult,
    ResponseMetadata,
    format_request_timestamp,
)
from callsmith.planners.base import CallPlanner
from callsmith.summarizer import summarize_call_outcome
from callsmith.telephony.base import CallInitiator
from callsmith.validators import (
    ValidationFailure,
    sanitize_appointment_payload,
    validate_appointment_request,
)

log = logging.getLogger("callsmith.orchestrator")

Summarizer = Callable[[AppointmentRequest, str], str]


def redact_pii(value: str | None) -> str:
    """Mask PII for logging — show first 3 and last 2 chars only."""
    if not value or len(value) <= 5:
        return "***"
    return value[:3] + "***" + value[-2:]


@dataclass(frozen=True)
class AppointmentSuccess:
    response: AppointmentResponse
    success: Literal[True] = True

    @property
    def status_code(self) -> int:
        return 200


@dataclass(frozen=True)
class AppointmentFailure:
    error: CallSmithError
    success: Literal[False] = False

    @property
    def status_code(self) -> int:
        return self.error.status_code

    @property
    def message(self) -> str:
        return self.error.public_message


AppointmentOutcome = Union[AppointmentSuccess, AppointmentFailure]


class AppointmentOrchestrator:
    """Sequences validation, planning, call initiation and summarization.

    Collaborator waits are bounded: a planner or telephony call that outlives
    its timeout counts as a failure of that collaborator.  Nothing is retried.
    """

    def __init__(
        self,
        planner: CallPlanner,
        initiator: CallInitiator,
        summarizer: Summarizer = summarize_call_outcome,
        planner_timeout: Optional[float] = 45.0,
        call_timeout: Optional[float] = 20.0,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._planner = planner
        self._initiator = initiator
        self._summarizer = summarizer
        self._planner_timeout = planner_timeout
        self._call_timeout = call_timeout
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    @property
    def planner(self) -> CallPlanner:
        return self._planner

    @property
    def initiator(self) -> CallInitiator:
        return self._initiator

    async def handle(self, payload: Any) -> AppointmentOutcome:
        """Run one request through the pipeline. Never raises."""
        try:
            sanitized = sanitize_appointment_payload(payload)
            parsed = validate_appointment_request(sanitized)
            if isinstance(parsed, ValidationFailure):
                log.warning("Rejected appointment request: %s", parsed.message)
                return AppointmentFailure(parsed.to_error())

            request = parsed.data
            log.info(
                "Appointment request validated: business=%s phone=%s voice=%s",
                request.business_name,
                redact_pii(request.phone_number),
                request.voice_profile,
            )

            plan = await self._plan(request)
            call = await self._call(request, plan)
            summary = plan.summary or self._summarizer(request, plan.script)

            response = AppointmentResponse(
                script=plan.script,
                call=call,
                summary=summary,
                itinerary=list(plan.itinerary),
                metadata=ResponseMetadata(
                    business_name=request.business_name,
                    request_timestamp=format_request_timestamp(self._clock()),
                ),
            )
        except CallSmithError as exc:
            log.error("[appointments] failed request: %s", exc, exc_info=exc)
            return AppointmentFailure(exc)
        except Exception as exc:
            log.exception("[appointments] failed request")
            return AppointmentFailure(UnexpectedError(str(exc)))

        log.info("Appointment call %s assembled (status=%s)", call.id, call.status)
        return AppointmentSuccess(response)

    async def _plan(self, request: AppointmentRequest) -> CallPlan:
        try:
            plan = await asyncio.wait_for(
                self._planner.generate_call_plan(request), self._planner_timeout
            )
        except asyncio.TimeoutError as exc:
            raise PlanningError(
                "The call planner took too long to respond. Please try again."
            ) from exc
        except CallSmithError:
            raise
        except Exception as exc:
            raise PlanningError("The call planner failed.") from exc
        log.info("Call plan ready via %s: %d itinerary steps", self._planner.name, len(plan.itinerary))
        return plan

    async def _call(self, request: AppointmentRequest, plan: CallPlan) -> CallResult:
        try:
            return await asyncio.wait_for(
                self._initiator.initiate_call(
                    to=request.phone_number,
                    script=plan.script,
                    voice_profile=request.voice_profile,
                    callback_number=request.call_back_number,
                ),
                self._call_timeout,
            )
        except asyncio.TimeoutError as exc:
            raise CallInitiationError(
                "The telephony provider took too long to respond. Please try again."
            ) from exc
        except CallSmithError:
            raise
        except Exception as exc:
            raise CallInitiationError("The call could not be placed.") from exc
