"""
Tests for chat orchestration.
"""
import pytest
from datetime import date
from unittest.mock import Mock

from cyclecoach.models.phase import CyclePhase, ReportedPhase, TrackingMethod
from cyclecoach.models.question import QuestionCategory
from cyclecoach.models.recommendation import ChatResponse
from cyclecoach.services.catalog import get_default_foods
from cyclecoach.services.chat import ChatService, apply_reported_phase
from cyclecoach.services.composer import ResponseComposer
from cyclecoach.services.exceptions import GenerationError, ProfileMissingError

@pytest.fixture
def stores(regular_profile):
    """Create mocked profile and history stores."""
    profiles = Mock()
    profiles.get_onboarding_data.return_value = regular_profile
    history = Mock()
    return profiles, history

def test_handle_message_fallback(stores):
    """Test a cycle question is answered from the catalog and persisted."""
    profiles, history = stores
    service = ChatService(ResponseComposer(), profiles, history)

    response = service.handle_message("user-123", "what phase am I in", now=date(2024, 3, 21))

    assert "It's been 20 days since your last period." in response.message
    assert response.ingredients == get_default_foods(CyclePhase.LUTEAL)
    history.save_chat_turn.assert_called_once_with(
        "user-123", "what phase am I in", response.message, response.ingredients
    )

def test_handle_message_passes_category_and_phase(stores, regular_profile):
    """Test the composer receives the classified category and computed phase."""
    profiles, history = stores
    composer = Mock()
    composer.compose.return_value = ChatResponse(message="ok", ingredients=[])
    service = ChatService(composer, profiles, history)

    service.handle_message("user-123", "what should I eat", now=date(2024, 3, 4))

    category, message, profile, phase_info = composer.compose.call_args[0]
    assert category == QuestionCategory.ADVICE
    assert message == "what should I eat"
    assert profile == regular_profile
    assert phase_info.phase == CyclePhase.MENSTRUAL
    assert phase_info.days_since_last_period == 3

def test_client_phase_override(stores):
    """Test a client-reported phase replaces the computed one."""
    profiles, history = stores
    composer = Mock()
    composer.compose.return_value = ChatResponse(message="ok", ingredients=[])
    service = ChatService(composer, profiles, history)

    service.handle_message("user-123", "snack ideas", current_phase="ovulatory", now=date(2024, 3, 4))

    phase_info = composer.compose.call_args[0][3]
    assert phase_info.phase == CyclePhase.OVULATORY
    assert phase_info.phase_name == "Ovulatory Phase"
    assert phase_info.days_since_last_period is None

def test_missing_profile(stores):
    """Test users without onboarding cannot chat."""
    profiles, history = stores
    profiles.get_onboarding_data.return_value = None
    service = ChatService(ResponseComposer(), profiles, history)

    with pytest.raises(ProfileMissingError):
        service.handle_message("user-123", "hello")
    history.save_chat_turn.assert_not_called()

def test_failed_generation_is_not_persisted(stores):
    """Test nothing is saved when composing fails."""
    profiles, history = stores
    composer = Mock()
    composer.compose.side_effect = GenerationError("bad json")
    service = ChatService(composer, profiles, history)

    with pytest.raises(GenerationError):
        service.handle_message("user-123", "what should I eat")
    history.save_chat_turn.assert_not_called()

def test_get_history(stores):
    """Test history is read through the history store."""
    profiles, history = stores
    history.get_chat_history.return_value = []
    service = ChatService(ResponseComposer(), profiles, history)

    assert service.get_history("user-123", 5) == []
    history.get_chat_history.assert_called_once_with("user-123", 5)

def test_client_phase_object(stores):
    """Test the dashboard phase payload supplies phase, name and elapsed days."""
    profiles, history = stores
    composer = Mock()
    composer.compose.return_value = ChatResponse(message="ok", ingredients=[])
    service = ChatService(composer, profiles, history)

    service.handle_message(
        "user-123", "snack ideas",
        current_phase={
            "phase": "luteal",
            "phaseName": "Luteal Phase",
            "daysSinceLastPeriod": 20,
            "isIrregular": False,
            "trackingMethod": "calendar"
        },
        now=date(2024, 3, 4)
    )

    phase_info = composer.compose.call_args[0][3]
    assert phase_info.phase == CyclePhase.LUTEAL
    assert phase_info.phase_name == "Luteal Phase"
    assert phase_info.days_since_last_period == 20
    assert phase_info.tracking_method == TrackingMethod.CALENDAR

def test_client_phase_narrative_uses_reported_days(stores):
    """Test the cycle narrative reports the client's elapsed days."""
    profiles, history = stores
    service = ChatService(ResponseComposer(), profiles, history)

    response = service.handle_message(
        "user-123", "what phase am I in",
        current_phase=ReportedPhase(phase=CyclePhase.OVULATORY, days_since_last_period=14),
        now=date(2024, 3, 4)
    )

    assert "**Ovulatory Phase**" in response.message
    assert "It's been 14 days since your last period." in response.message
    assert "3 days" not in response.message

def test_client_phase_shorthand_drops_stale_days(stores):
    """Test a bare phase does not inherit days computed for another phase."""
    profiles, history = stores
    service = ChatService(ResponseComposer(), profiles, history)

    response = service.handle_message(
        "user-123", "what phase am I in", current_phase="ovulatory", now=date(2024, 3, 4)
    )

    assert "**Ovulatory Phase**" in response.message
    assert "since your last period" not in response.message

def test_apply_reported_phase_same_phase_keeps_days(luteal_phase):
    """Test a matching bare phase keeps the computed day count."""
    info = apply_reported_phase(luteal_phase, ReportedPhase(phase="luteal"))
    assert info == luteal_phase

def test_apply_reported_phase_lunar(luteal_phase):
    """Test a lunar-tracked report clears elapsed days."""
    info = apply_reported_phase(
        luteal_phase,
        ReportedPhase(phase="luteal", tracking_method="lunar", days_since_last_period=20)
    )
    assert info.is_lunar
    assert info.days_since_last_period is None
