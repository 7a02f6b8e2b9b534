"""
Persistence for onboarding profiles and chat history.

Both stores share the single tracker table:
    PK=USER#<user_id>, SK=ONBOARDING        onboarding profile
    PK=USER#<user_id>, SK=CHAT#<timestamp>  one chat turn
"""
import json
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional

from aws_lambda_powertools import Logger

from cyclecoach.models.chat import ChatTurn
from cyclecoach.models.profile import OnboardingProfile
from cyclecoach.models.recommendation import RecommendationCard
from cyclecoach.utils.dynamo import (
    create_chat_sk,
    create_onboarding_sk,
    create_pk,
    get_dynamo
)

logger = Logger()

DEFAULT_HISTORY_LIMIT = 50

def _to_dynamo(data: Dict[str, Any]) -> Dict[str, Any]:
    # boto3 rejects floats, so route numbers through Decimal
    return json.loads(json.dumps(data), parse_float=Decimal)

class ProfileStore:
    """Reads and writes onboarding profiles."""

    def __init__(self, dynamo=None):
        self.dynamo = dynamo or get_dynamo()

    def get_onboarding_data(self, user_id: str) -> Optional[OnboardingProfile]:
        """
        Get the onboarding profile for a user.

        Returns:
            OnboardingProfile if the user completed onboarding, None otherwise
        """
        item = self.dynamo.get_item({
            "PK": create_pk(user_id),
            "SK": create_onboarding_sk()
        })
        if not item:
            return None

        data = {k: v for k, v in item.items() if k not in ("PK", "SK")}
        data.setdefault("user_id", user_id)
        return OnboardingProfile.model_validate(data)

    def save_onboarding_data(self, profile: OnboardingProfile) -> OnboardingProfile:
        """
        Save a profile, replacing any previous answers.

        Sets completed_at when the profile does not carry one.
        """
        if profile.completed_at is None:
            profile = profile.model_copy(update={
                "completed_at": datetime.now(timezone.utc)
            })

        item = {
            "PK": create_pk(profile.user_id),
            "SK": create_onboarding_sk(),
            **_to_dynamo(profile.model_dump(mode="json"))
        }
        self.dynamo.put_item(item)
        logger.info("Saved onboarding data", extra={"user_id": profile.user_id})
        return profile

class ChatHistoryStore:
    """Append-only chat history per user."""

    def __init__(self, dynamo=None):
        self.dynamo = dynamo or get_dynamo()

    def save_chat_turn(
        self,
        user_id: str,
        message: str,
        response: str,
        ingredients: List[RecommendationCard],
        created_at: Optional[datetime] = None
    ) -> ChatTurn:
        """
        Append one exchange to the user's history.

        Args:
            user_id: Owner of the conversation
            message: The user's message
            response: Assistant reply text
            ingredients: Cards shown with the reply
            created_at: Timestamp of the exchange, defaults to now (UTC)

        Returns:
            The stored ChatTurn
        """
        turn = ChatTurn(
            user_id=user_id,
            message=message,
            response=response,
            ingredients=list(ingredients or []),
            created_at=created_at or datetime.now(timezone.utc)
        )
        data = turn.model_dump(mode="json")
        item = {
            "PK": create_pk(user_id),
            "SK": create_chat_sk(data["created_at"]),
            **_to_dynamo(data)
        }
        self.dynamo.put_item(item)
        return turn

    def get_chat_history(
        self,
        user_id: str,
        limit: int = DEFAULT_HISTORY_LIMIT
    ) -> List[ChatTurn]:
        """
        Get the most recent chat turns for a user.

        Returns:
            Up to `limit` turns, newest first
        """
        items = self.dynamo.query_items(
            partition_key="PK",
            partition_value=create_pk(user_id),
            sort_key_prefix="CHAT#",
            newest_first=True,
            limit=limit
        )

        turns = []
        for item in items:
            data = {k: v for k, v in item.items() if k not in ("PK", "SK")}
            data.setdefault("user_id", user_id)
            turns.append(ChatTurn.model_validate(data))
        return turns
