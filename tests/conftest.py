"""
Pytest configuration and shared fixtures.
"""
import json
import pytest
from dataclasses import dataclass
from datetime import date

from cyclecoach.models.phase import CyclePhase, PhaseInfo, TrackingMethod
from cyclecoach.models.profile import OnboardingProfile

@pytest.fixture
def regular_profile() -> OnboardingProfile:
    """Profile with a regular 28-day cycle, last period on 2024-03-01."""
    return OnboardingProfile(
        user_id="user-123",
        name="Test User",
        age="29",
        diet="vegetarian",
        symptoms=["cramps", "bloating"],
        goals=["more energy"],
        medical_conditions=[],
        lifestyle={"stressLevel": "Moderate", "sleepHours": "7-8"},
        last_period_date=date(2024, 3, 1),
        cycle_length="28",
        irregular_periods=False
    )

@pytest.fixture
def irregular_profile() -> OnboardingProfile:
    """Profile reporting irregular periods."""
    return OnboardingProfile(
        user_id="user-456",
        last_period_date=date(2024, 3, 1),
        cycle_length=28,
        irregular_periods=True
    )

@pytest.fixture
def luteal_phase() -> PhaseInfo:
    """Calendar-tracked luteal phase, day 20."""
    return PhaseInfo(
        phase=CyclePhase.LUTEAL,
        phase_name="Luteal Phase",
        tracking_method=TrackingMethod.CALENDAR,
        days_since_last_period=20
    )

@pytest.fixture
def lunar_phase() -> PhaseInfo:
    """Lunar-tracked follicular phase."""
    return PhaseInfo(
        phase=CyclePhase.FOLLICULAR,
        phase_name="Follicular Phase",
        tracking_method=TrackingMethod.LUNAR,
        lunar_day=10.0
    )

@dataclass
class FakeLambdaContext:
    """Minimal Lambda context accepted by Powertools."""
    function_name: str = "cyclecoach-test"
    memory_limit_in_mb: int = 128
    invoked_function_arn: str = "arn:aws:lambda:us-east-1:123456789012:function:cyclecoach-test"
    aws_request_id: str = "52fdfc07-2182-154f-163f-5f0f9a621d72"

@pytest.fixture
def lambda_context() -> FakeLambdaContext:
    """Create a fake Lambda context."""
    return FakeLambdaContext()

@pytest.fixture
def api_event():
    """Build API Gateway proxy events for an authenticated caller."""
    def _event(body=None, user_id="user-123", query=None):
        event = {
            "path": "/chat",
            "httpMethod": "POST",
            "body": json.dumps(body) if body is not None else None,
            "queryStringParameters": query,
            "requestContext": {
                "authorizer": {"claims": {"sub": user_id}} if user_id else {}
            }
        }
        return event
    return _event
