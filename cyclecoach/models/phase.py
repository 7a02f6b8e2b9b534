"""
Phase model definitions for menstrual cycle phase inference.
"""
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, model_serializer, model_validator
from pydantic.alias_generators import to_camel

class CyclePhase(str, Enum):
    """
    Menstrual cycle phases.
    """
    MENSTRUAL = "menstrual"
    FOLLICULAR = "follicular"
    OVULATORY = "ovulatory"
    LUTEAL = "luteal"

    @property
    def display_name(self) -> str:
        """Human readable phase name, e.g. 'Luteal Phase'."""
        return f"{self.value.title()} Phase"

class TrackingMethod(str, Enum):
    """
    How the current phase was estimated.
    """
    CALENDAR = "calendar"  # Elapsed days since the last period
    LUNAR = "lunar"        # Moon calendar fallback

class CalendarRule(str, Enum):
    """
    Day cutoffs used when classifying a calendar-tracked cycle.
    """
    CYCLE_RELATIVE = "cycle_relative"  # Scaled by the profile's cycle length
    FIXED = "fixed"                    # 5/13/16 regardless of cycle length

class PhaseInfo(BaseModel):
    """
    Derived cycle phase for a profile at a given instant.

    Never persisted as authoritative state; recomputed on every request.
    Serialized with camelCase keys when dumped by alias.
    """
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True
    )

    phase: CyclePhase
    phase_name: str
    tracking_method: TrackingMethod
    days_since_last_period: Optional[int] = None
    lunar_day: Optional[float] = None

    @property
    def is_lunar(self) -> bool:
        """Check if the phase comes from the lunar fallback."""
        return self.tracking_method == TrackingMethod.LUNAR

    @model_serializer(mode="wrap")
    def _omit_empty(self, handler):
        data = handler(self)
        return {key: value for key, value in data.items() if value is not None}

class ReportedPhase(BaseModel):
    """
    Phase the dashboard reports alongside a chat message.

    Mirrors the current-phase payload; only `phase` is required. A bare
    phase string is accepted as shorthand for `{"phase": value}`.
    """
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True
    )

    phase: CyclePhase
    phase_name: Optional[str] = None
    tracking_method: Optional[TrackingMethod] = None
    days_since_last_period: Optional[int] = Field(default=None, ge=0)
    is_irregular: Optional[bool] = None

    @model_validator(mode="before")
    @classmethod
    def _expand_shorthand(cls, value):
        if isinstance(value, str):
            return {"phase": value}
        return value
