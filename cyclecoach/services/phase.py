"""
Service module for menstrual cycle phase inference.

This module estimates the user's current cycle phase from onboarding data.
Calendar tracking uses the days elapsed since the last period; when that data
is missing, marked irregular or stale, a lunar calendar fallback is used
instead. The lunar fallback is global: every user on the same day gets the
same phase.

Typical usage:
    >>> info = compute_phase(profile)
    >>> print(info.phase_name, info.tracking_method.value)
    >>> display = get_phase_display(info, profile)
"""
import os
from typing import Any, Dict, Optional

from aws_lambda_powertools import Logger

from cyclecoach.models.phase import CalendarRule, CyclePhase, PhaseInfo, TrackingMethod
from cyclecoach.models.profile import OnboardingProfile
from cyclecoach.services.constants import (
    FIXED_PHASE_CUTOFFS,
    FOLLICULAR_PHASE_RATIO,
    KNOWN_NEW_MOON,
    LUNAR_MONTH_DAYS,
    LUNAR_PHASE_CUTOFFS,
    MENSTRUAL_PHASE_MAX_DAY,
    OVULATORY_PHASE_RATIO,
    PHASE_DETAILS,
    STALE_PERIOD_DATA_DAYS
)
from cyclecoach.services.exceptions import ProfileMissingError
from cyclecoach.services.utils import DateLike, days_between, floor_ratio, to_date

logger = Logger()

def default_calendar_rule() -> CalendarRule:
    """
    Calendar rule configured through CALENDAR_PHASE_RULE.

    Returns:
        Configured rule, cycle-relative when unset

    Raises:
        ValueError: If the variable holds an unknown rule name
    """
    return CalendarRule(
        os.environ.get("CALENDAR_PHASE_RULE", CalendarRule.CYCLE_RELATIVE.value)
    )

def get_lunar_day(now: Optional[DateLike] = None) -> float:
    """
    Position in the synodic month, in days since the reference new moon.

    Args:
        now: Date to evaluate, defaults to today

    Returns:
        Lunar day in [0, 29.53)
    """
    days_since_new_moon = days_between(KNOWN_NEW_MOON, to_date(now))
    return days_since_new_moon % LUNAR_MONTH_DAYS

def compute_lunar_phase(now: Optional[DateLike] = None) -> CyclePhase:
    """
    Map the moon calendar onto a cycle phase.

    Pure function of the date; ignores any profile.

    Example:
        >>> compute_lunar_phase(date(2024, 1, 11))
        <CyclePhase.MENSTRUAL: 'menstrual'>
    """
    lunar_day = get_lunar_day(now)
    for last_day, phase in LUNAR_PHASE_CUTOFFS:
        if lunar_day <= last_day:
            return phase
    return CyclePhase.LUTEAL

def classify_calendar_day(
    days: int,
    cycle_length: int,
    rule: CalendarRule = CalendarRule.CYCLE_RELATIVE
) -> CyclePhase:
    """
    Determine the phase for a number of days since the last period started.

    Args:
        days: Whole days since the last period (0 on the first day)
        cycle_length: User's cycle length in days
        rule: Cutoff rule to apply

    Returns:
        Cycle phase

    Example:
        >>> classify_calendar_day(20, 28)
        <CyclePhase.LUTEAL: 'luteal'>
        >>> classify_calendar_day(15, 28, CalendarRule.FIXED)
        <CyclePhase.OVULATORY: 'ovulatory'>
    """
    if rule == CalendarRule.FIXED:
        for last_day, phase in FIXED_PHASE_CUTOFFS:
            if days <= last_day:
                return phase
        return CyclePhase.LUTEAL

    if days <= MENSTRUAL_PHASE_MAX_DAY:
        return CyclePhase.MENSTRUAL
    if days <= floor_ratio(cycle_length, FOLLICULAR_PHASE_RATIO):
        return CyclePhase.FOLLICULAR
    if days <= floor_ratio(cycle_length, OVULATORY_PHASE_RATIO):
        return CyclePhase.OVULATORY
    return CyclePhase.LUTEAL

def get_tracking_method(
    profile: OnboardingProfile,
    now: Optional[DateLike] = None
) -> TrackingMethod:
    """
    Decide whether calendar data is usable for this profile.

    Lunar tracking is used when the last period date is missing, the user
    reports irregular periods, or the date is more than 60 days old.
    """
    if profile.irregular_periods or profile.last_period_date is None:
        return TrackingMethod.LUNAR
    if days_between(profile.last_period_date, to_date(now)) > STALE_PERIOD_DATA_DAYS:
        return TrackingMethod.LUNAR
    return TrackingMethod.CALENDAR

def _lunar_phase_info(today) -> PhaseInfo:
    phase = compute_lunar_phase(today)
    return PhaseInfo(
        phase=phase,
        phase_name=phase.display_name,
        tracking_method=TrackingMethod.LUNAR,
        lunar_day=round(get_lunar_day(today), 2)
    )

def compute_phase(
    profile: Optional[OnboardingProfile],
    now: Optional[DateLike] = None,
    rule: Optional[CalendarRule] = None
) -> PhaseInfo:
    """
    Compute the current cycle phase for a profile.

    Args:
        profile: User's onboarding profile
        now: Date to evaluate, defaults to today
        rule: Calendar cutoff rule, defaults to CALENDAR_PHASE_RULE

    Returns:
        PhaseInfo; days_since_last_period is only set for calendar tracking

    Raises:
        ProfileMissingError: If the profile is missing

    Example:
        >>> info = compute_phase(profile, date(2024, 3, 4))
        >>> info.phase, info.days_since_last_period
        (<CyclePhase.MENSTRUAL: 'menstrual'>, 3)
    """
    if profile is None:
        raise ProfileMissingError()

    today = to_date(now)
    if rule is None:
        rule = default_calendar_rule()

    method = get_tracking_method(profile, today)
    if method == TrackingMethod.LUNAR:
        logger.debug("Using lunar phase tracking", extra={
            "user_id": profile.user_id,
            "irregular_periods": profile.irregular_periods,
            "has_last_period_date": profile.last_period_date is not None
        })
        return _lunar_phase_info(today)

    days = days_between(profile.last_period_date, today)
    if days < 0:
        days = 0  # Safety clamp for a last period date in the future

    phase = classify_calendar_day(days, profile.cycle_length_days, rule)
    return PhaseInfo(
        phase=phase,
        phase_name=phase.display_name,
        tracking_method=TrackingMethod.CALENDAR,
        days_since_last_period=days
    )

def get_phase_details(phase: CyclePhase) -> Dict[str, Any]:
    """
    Get static content for a phase.

    Returns:
        Dictionary with name, description, emoji, color, days, narrative,
        foods, movements and emotions
    """
    return dict(PHASE_DETAILS[phase])

def get_phase_display(
    phase_info: PhaseInfo,
    profile: Optional[OnboardingProfile] = None
) -> Dict[str, Any]:
    """
    Build the current-phase payload shown on the dashboard.

    Args:
        phase_info: Computed phase
        profile: Profile the phase was computed for

    Returns:
        Dictionary merging phase info with the display table, camelCase keys
    """
    details = get_phase_details(phase_info.phase)
    is_irregular = bool(
        profile is not None
        and (profile.irregular_periods or profile.last_period_date is None)
    )
    display = {
        **phase_info.model_dump(mode="json", by_alias=True),
        "name": details["name"],
        "description": details["description"],
        "emoji": details["emoji"],
        "color": details["color"],
        "days": details["days"],
        "isIrregular": is_irregular,
    }
    return display
