"""Shared fixtures: a valid appointment payload and fake collaborators."""

import os
import sys
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from callsmith.models.call import CallPlan, CallResult
from callsmith.planners.base import CallPlanner
from callsmith.telephony.base import CallInitiator


@pytest.fixture
def valid_payload():
    return {
        "businessName": "Sunrise Dental",
        "phoneNumber": "+15551234567",
        "reason": "Book cleaning",
        "preferredDate": "2024-06-01",
        "preferredTimeWindow": "9am-12pm",
        "timezone": "America/New_York",
        "voiceProfile": "friendly",
    }


@pytest.fixture
def call_plan():
    return CallPlan(
        script="Hi, I'm calling on behalf of a client.\nI'd like to book a cleaning.",
        itinerary=["Introduce the assistant", "Request a cleaning"],
    )


@pytest.fixture
def planner(call_plan):
    fake = MagicMock(spec=CallPlanner)
    fake.name = "fake-planner"
    fake.generate_call_plan = AsyncMock(return_value=call_plan)
    return fake


@pytest.fixture
def call_result():
    return CallResult(
        id="CA123",
        status="initiated",
        provider="fake",
        to="+15551234567",
        started_at=datetime(2024, 5, 30, 12, 0, tzinfo=timezone.utc),
    )


@pytest.fixture
def initiator(call_result):
    fake = MagicMock(spec=CallInitiator)
    fake.name = "fake-telephony"
    fake.initiate_call = AsyncMock(return_value=call_result)
    return fake
