# -*- coding: utf-8 -*-
"""
Trophy tiers - pure logic, no I/O.

Tier 1 is the best reward (finished within four hours), tier 8 the worst.
"""

import datetime as dt
import math
from typing import Dict

from core.errors import ValidationError

MIN_TIER = 1
MAX_TIER = 8

PROMPT_HOURS = 4  # inclusive
CARRY_OVER_STEP_HOURS = 3

TROPHY_TITLES: Dict[int, str] = {
    1: "Diamond",
    2: "Gold",
    3: "Silver",
    4: "Bronze",
    5: "Iron",
    6: "Stone",
    7: "Wood",
    8: "Participation",
}


def _check_interval(start: dt.datetime, end: dt.datetime) -> None:
    if not isinstance(start, dt.datetime) or not isinstance(end, dt.datetime):
        raise ValidationError("Start and end must be datetimes.")
    if (start.tzinfo is None) != (end.tzinfo is None):
        raise ValidationError("Cannot mix naive and timezone-aware datetimes.")
    if end < start:
        raise ValidationError("End time is before start time.")


def _diff_hours(start: dt.datetime, end: dt.datetime) -> float:
    return (end - start).total_seconds() / 3600.0


def compute_tier(start: dt.datetime, end: dt.datetime) -> int:
    """
    Map a session's start/end to a trophy tier in [1, 8].

    - up to 4 hours elapsed (inclusive): tier 1
    - otherwise, finished on the same calendar day it started: tier 2
    - otherwise 3 + one tier per 3 hours past the first midnight, capped at 8

    Carry-over is measured from the first midnight after ``start``, not
    from the start of ``end``'s day. The two agree when the session
    finishes the day after it started. Later days keep counting, so any
    session spanning a second midnight lands on tier 8 (08:00 on day D to
    08:00 on day D+5 is tier 8, not 3 + 8 // 3).

    The 4-hour rule is checked first: 23:59 to 00:01 is tier 1, not 3.

    Calendar days are read off ``end``'s clock; aware ``start`` values are
    converted to ``end``'s timezone first.
    """
    _check_interval(start, end)

    if _diff_hours(start, end) <= PROMPT_HOURS:
        return MIN_TIER

    if end.tzinfo is not None:
        start = start.astimezone(end.tzinfo)
    if start.date() == end.date():
        return 2

    first_midnight = start.replace(
        hour=0, minute=0, second=0, microsecond=0
    ) + dt.timedelta(days=1)
    carry_hours = (end - first_midnight).total_seconds() / 3600.0
    return min(MAX_TIER, 3 + math.floor(carry_hours / CARRY_OVER_STEP_HOURS))


def compute_tier_legacy(start: dt.datetime, end: dt.datetime) -> int:
    """
    Superseded by compute_tier(); ignores calendar days entirely.

    One tier per started 3 hours past the first 4, capped at 8.
    """
    _check_interval(start, end)
    diff = _diff_hours(start, end)
    if diff <= PROMPT_HOURS:
        return MIN_TIER
    extra = diff - PROMPT_HOURS
    return min(MAX_TIER, 1 + math.ceil(extra / CARRY_OVER_STEP_HOURS))


def validate_tier(tier) -> int:
    # bool is an int subclass; True must not pass as tier 1
    if isinstance(tier, bool) or not isinstance(tier, int):
        raise ValidationError(f"Tier must be an integer, got {tier!r}.")
    if not MIN_TIER <= tier <= MAX_TIER:
        raise ValidationError(f"Tier must be between {MIN_TIER} and {MAX_TIER}.")
    return tier


def tier_title(tier: int) -> str:
    return TROPHY_TITLES[validate_tier(tier)]


def format_duration(seconds: float) -> str:
    """Format an elapsed time as e.g. '1 day 2 hours 5 minutes'."""
    total_min = int(max(0, seconds) // 60)
    days, rem = divmod(total_min, 24 * 60)
    hours, minutes = divmod(rem, 60)

    parts = []
    for value, unit in ((days, "day"), (hours, "hour"), (minutes, "minute")):
        if value:
            parts.append(f"{value} {unit}{'' if value == 1 else 's'}")
    return " ".join(parts) if parts else "0 minutes"
