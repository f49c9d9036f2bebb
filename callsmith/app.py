"""FastAPI application — HTTP surface for appointment calls.

Endpoints:

  POST /appointments            Validate, plan and place an appointment call
  POST /appointments/timeline   Project an outcome onto status timeline entries
  GET  /health                  Health check

The appointment flow:
  1. Client posts the appointment form as JSON (any body is accepted)
  2. The payload is sanitized and validated        → 400 {"message", "errors"}
  3. The planner drafts the call script             → 500 {"message"} on failure
  4. The telephony backend places (or simulates) the call
  5. The response carries script, call, summary, itinerary and metadata
"""

from __future__ import annotations

# Load .env into os.environ early so SDK clients that read the environment
# directly see the same values as Settings.
from dotenv import load_dotenv
load_dotenv()

import json
import logging
import time
from typing import Any

# Configure root logger early so all callsmith.* loggers have a handler
# when run via `uvicorn --factory callsmith.app:create_app`.
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(name)-20s %(levelname)-7s %(message)s",
)

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from callsmith import __version__
from callsmith.config import settings
from callsmith.models.call import AppointmentResponse
from callsmith.orchestrator import AppointmentOrchestrator, AppointmentSuccess
from callsmith.planners import create_planner
from callsmith.telephony import create_call_initiator
from callsmith.timeline import Failed, InFlight, Succeeded, TimelineState, project_timeline

log = logging.getLogger("callsmith.app")

_START_TIME = time.time()


async def _read_json_body(request: Request) -> Any:
    """Parse the body as JSON; unreadable bodies count as an empty object."""
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return {}


def create_app(orchestrator: AppointmentOrchestrator | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if orchestrator is None:
        orchestrator = _create_orchestrator()

    app = FastAPI(
        title="CallSmith",
        description="Places appointment-booking phone calls on a user's behalf",
        version=__version__,
    )
    app.state.orchestrator = orchestrator

    # ── Health check ───────────────────────────────────────────

    @app.get("/health")
    async def health() -> JSONResponse:
        """Lightweight health check — confirms the event loop is responsive."""
        uptime = round(time.time() - _START_TIME, 1)
        return JSONResponse({
            "status": "ok",
            "uptime": uptime,
            "planner": orchestrator.planner.name,
            "telephony": orchestrator.initiator.name,
        })

    # ── Appointments ───────────────────────────────────────────

    @app.post("/appointments")
    async def create_appointment(request: Request) -> JSONResponse:
        """Place an appointment call and return the assembled result."""
        body = await _read_json_body(request)
        outcome = await orchestrator.handle(body)

        if isinstance(outcome, AppointmentSuccess):
            return JSONResponse(outcome.response.to_json(), status_code=200)
        return JSONResponse(outcome.error.to_body(), status_code=outcome.status_code)

    @app.post("/appointments/timeline")
    async def appointment_timeline(request: Request) -> JSONResponse:
        """Project an appointment outcome onto timeline entries.

        Body: {"response": <AppointmentResponse>} | {"error": "<message>"}
        | {} for a request still in flight.
        """
        body = await _read_json_body(request)
        if not isinstance(body, dict):
            body = {}

        state: TimelineState
        if body.get("error") is not None:
            state = Failed(str(body["error"]))
        elif body.get("response") is not None:
            try:
                state = Succeeded(AppointmentResponse.model_validate(body["response"]))
            except PydanticValidationError:
                return JSONResponse(
                    {"message": "response is not a valid appointment response."},
                    status_code=400,
                )
        else:
            state = InFlight()

        entries = project_timeline(state)
        return JSONResponse({"entries": [e.model_dump() for e in entries]})

    return app


# ── Helper functions ──────────────────────────────────────────────

def _create_orchestrator() -> AppointmentOrchestrator:
    """Build the orchestrator with the configured planner and telephony."""
    for warning in settings.validate_startup():
        log.warning(warning)

    planner = create_planner(settings)
    initiator = create_call_initiator(settings)
    log.info("Planner: %s, telephony: %s", planner.name, initiator.name)

    return AppointmentOrchestrator(
        planner=planner,
        initiator=initiator,
        planner_timeout=settings.planner_timeout_seconds,
        call_timeout=settings.call_timeout_seconds,
    )


if __name__ == "__main__":
    import uvicorn

    log_config = uvicorn.config.LOGGING_CONFIG
    log_config["formatters"]["default"]["fmt"] = (
        "%(asctime)s %(name)-12s %(levelname)-8s %(message)s"
    )

    uvicorn.run(
        "callsmith.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_config=log_config,
    )
