"""Error taxonomy for the appointment call pipeline.

Every error carries the HTTP status it maps to and the message that may be
shown to the caller.  Collaborator adapters raise ``PlanningError`` and
``CallInitiationError`` chained from the SDK exception; the orchestrator
wraps anything else in ``UnexpectedError``.
"""

from __future__ import annotations

GENERIC_FAILURE_MESSAGE = "Unable to process appointment request."


class CallSmithError(Exception):
    """Base class for request-level failures."""

    status_code = 500

    def __init__(self, message: str = "") -> None:
        super().__init__(message or GENERIC_FAILURE_MESSAGE)

    @property
    def public_message(self) -> str:
        return str(self) or GENERIC_FAILURE_MESSAGE

    def to_body(self) -> dict:
        return {"message": self.public_message}


class ValidationError(CallSmithError):
    """One or more field-level violations in the submitted request."""

    status_code = 400

    def __init__(self, issues: list) -> None:
        self.issues = list(issues)
        first = self.issues[0].message if self.issues else "Invalid request payload."
        super().__init__(first)

    def field_errors(self) -> dict[str, str]:
        """First message per top-level field, for form consumers."""
        errors: dict[str, str] = {}
        for issue in self.issues:
            if issue.path:
                errors.setdefault(issue.path[0], issue.message)
        return errors

    def to_body(self) -> dict:
        return {"message": self.public_message, "errors": self.field_errors()}


class PlanningError(CallSmithError):
    """The call planner could not produce a call plan."""


class CallInitiationError(CallSmithError):
    """The telephony backend could not place the call."""


class UnexpectedError(CallSmithError):
    """Any other failure. The public message never includes internals."""

    @property
    def public_message(self) -> str:
        return GENERIC_FAILURE_MESSAGE
