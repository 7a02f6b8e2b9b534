"""
Service module for handling a chat message end to end.
"""
from typing import List, Optional, Union

from aws_lambda_powertools import Logger

from cyclecoach.models.chat import ChatTurn
from cyclecoach.models.phase import CyclePhase, PhaseInfo, ReportedPhase, TrackingMethod
from cyclecoach.models.recommendation import ChatResponse
from cyclecoach.services.classifier import classify
from cyclecoach.services.composer import ResponseComposer
from cyclecoach.services.exceptions import ProfileMissingError
from cyclecoach.services.phase import compute_phase
from cyclecoach.services.storage import (
    DEFAULT_HISTORY_LIMIT,
    ChatHistoryStore,
    ProfileStore
)
from cyclecoach.services.utils import DateLike

logger = Logger()

def apply_reported_phase(computed: PhaseInfo, reported: ReportedPhase) -> PhaseInfo:
    """
    Replace the computed phase with the one the dashboard reported.

    Reported fields win. Computed day counts are only carried over when the
    reported phase matches the computed one; otherwise they describe a
    different phase and are dropped.

    Example:
        >>> info = apply_reported_phase(computed, ReportedPhase(phase="ovulatory"))
        >>> info.phase_name, info.days_since_last_period
        ('Ovulatory Phase', None)
    """
    if reported.phase == computed.phase:
        base = computed
    else:
        base = PhaseInfo(
            phase=reported.phase,
            phase_name=reported.phase.display_name,
            tracking_method=computed.tracking_method
        )

    update = {
        key: value for key, value in (
            ("phase_name", reported.phase_name),
            ("tracking_method", reported.tracking_method),
            ("days_since_last_period", reported.days_since_last_period),
        ) if value is not None
    }
    tracking_method = update.get("tracking_method", base.tracking_method)
    if tracking_method == TrackingMethod.LUNAR:
        update["days_since_last_period"] = None
    else:
        update["lunar_day"] = None
    return base.model_copy(update=update)

class ChatService:
    """
    Orchestrates one chat exchange.

    Loads the profile, classifies the message, computes the phase, composes
    the reply and appends the exchange to history. Nothing is persisted when
    composing fails.
    """

    def __init__(
        self,
        composer: ResponseComposer,
        profiles: ProfileStore,
        history: ChatHistoryStore
    ):
        self.composer = composer
        self.profiles = profiles
        self.history = history

    def handle_message(
        self,
        user_id: str,
        message: str,
        current_phase: Optional[Union[ReportedPhase, CyclePhase, str, dict]] = None,
        now: Optional[DateLike] = None
    ) -> ChatResponse:
        """
        Answer a user's message.

        Args:
            user_id: Caller identity
            message: Free-text message
            current_phase: Phase reported by the dashboard, as a
                ReportedPhase, its payload dict or a bare phase; overrides
                the computed phase
            now: Date to evaluate the phase at, defaults to today

        Returns:
            ChatResponse for the message

        Raises:
            ProfileMissingError: If the user has not completed onboarding
            GenerationError: If the LLM path fails
        """
        profile = self.profiles.get_onboarding_data(user_id)
        if profile is None:
            raise ProfileMissingError(user_id)

        category = classify(message)
        phase_info = compute_phase(profile, now)
        if current_phase:
            phase_info = apply_reported_phase(
                phase_info, ReportedPhase.model_validate(current_phase)
            )

        logger.info("Handling chat message", extra={
            "user_id": user_id,
            "category": category.value,
            "phase": phase_info.phase.value,
            "tracking_method": phase_info.tracking_method.value
        })

        response = self.composer.compose(category, message, profile, phase_info)

        self.history.save_chat_turn(
            user_id,
            message,
            response.message,
            response.ingredients
        )
        return response

    def get_history(
        self,
        user_id: str,
        limit: int = DEFAULT_HISTORY_LIMIT
    ) -> List[ChatTurn]:
        """Get recent chat turns for a user, newest first."""
        return self.history.get_chat_history(user_id, limit)
