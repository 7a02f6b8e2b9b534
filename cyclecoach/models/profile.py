"""
Onboarding profile model collected by the health-intake questionnaire.
"""
import re
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

DEFAULT_CYCLE_LENGTH = 28

def parse_cycle_length(value: Any) -> int:
    """
    Parse a cycle length the way the intake form stores it.

    Accepts ints or strings such as "30" or "30 days". Missing, unparseable
    or zero values fall back to the default 28-day cycle.

    Example:
        >>> parse_cycle_length("32 days")
        32
        >>> parse_cycle_length(None)
        28
    """
    if value is None:
        return DEFAULT_CYCLE_LENGTH
    match = re.match(r"\s*(\d+)", str(value))
    if not match:
        return DEFAULT_CYCLE_LENGTH
    return int(match.group(1)) or DEFAULT_CYCLE_LENGTH

class OnboardingProfile(BaseModel):
    """
    Represents a user's onboarding answers.

    Owned by the profile store; read-only input to phase calculation.
    Accepts both camelCase (as sent by the web client) and snake_case keys.
    """
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True
    )

    user_id: str
    name: Optional[str] = None
    age: Optional[str] = None
    height: Optional[str] = None
    weight: Optional[str] = None
    diet: Optional[str] = None
    symptoms: List[str] = Field(default_factory=list)
    goals: List[str] = Field(default_factory=list)
    lifestyle: Dict[str, Any] = Field(default_factory=dict)
    medical_conditions: List[str] = Field(default_factory=list)
    medications: List[str] = Field(default_factory=list)
    allergies: List[str] = Field(default_factory=list)
    last_period_date: Optional[date] = None
    cycle_length: Optional[Union[int, str]] = None
    period_length: Optional[str] = None
    period_description: Optional[str] = None
    irregular_periods: bool = False
    stress_level: Optional[str] = None
    sleep_hours: Optional[str] = None
    exercise_level: Optional[str] = None
    water_intake: Optional[str] = None
    completed_at: Optional[datetime] = None

    @field_validator("last_period_date", mode="before")
    @classmethod
    def _parse_last_period_date(cls, value: Any) -> Any:
        # Intake form sends either YYYY-MM-DD or a full ISO timestamp
        if isinstance(value, str):
            value = value.strip()
            if not value:
                return None
            return value[:10]
        return value

    @field_validator("age", "height", "weight", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Any:
        if isinstance(value, (int, float, Decimal)):
            return str(value)
        return value

    @field_validator("cycle_length", mode="before")
    @classmethod
    def _normalize_cycle_length(cls, value: Any) -> Any:
        # DynamoDB returns numbers as Decimal
        if isinstance(value, Decimal):
            return int(value)
        return value

    @field_validator(
        "symptoms", "goals", "medical_conditions", "medications", "allergies",
        mode="before"
    )
    @classmethod
    def _default_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("irregular_periods", mode="before")
    @classmethod
    def _default_irregular(cls, value: Any) -> Any:
        return False if value is None else value

    @property
    def cycle_length_days(self) -> int:
        """Cycle length in days, defaulting to 28."""
        return parse_cycle_length(self.cycle_length)
