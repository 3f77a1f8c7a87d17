"""
Rotation scheduling based on weekday, day-of-month and time-of-day windows.

Decides whether wallpaper rotation should be active at a given moment:
- Weekly constraint: rotation only on the listed weekdays
- Monthly constraint: rotation only on the listed days of the month
- Daily window: rotation only between start and end time (inclusive)

Malformed time strings are treated as absent constraints rather than errors;
`validate_schedule` reports them for the `validate` command.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, time
from enum import Enum
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

TIME_FORMAT = "%H:%M"


class Weekday(Enum):
    """Day of the week, valued like `datetime.weekday()` (Monday is 0)."""
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @classmethod
    def parse(cls, name: str) -> Optional['Weekday']:
        """
        Parse a weekday name.

        Accepts three-letter abbreviations, the common longer abbreviations
        ("tues", "thur", "thurs") and full English names, case-insensitively.

        Returns:
            Matching Weekday, or None if the name is not recognised
        """
        return _WEEKDAY_ALIASES.get(name.strip().lower())

    @classmethod
    def of(cls, moment: datetime) -> 'Weekday':
        """Get the weekday of a datetime."""
        return cls(moment.weekday())

    @property
    def short_name(self) -> str:
        return self.name[:3].lower()


_WEEKDAY_ALIASES: Dict[str, Weekday] = {}
for _day in Weekday:
    _WEEKDAY_ALIASES[_day.short_name] = _day
    _WEEKDAY_ALIASES[_day.name.lower()] = _day
_WEEKDAY_ALIASES.update({
    "tues": Weekday.TUESDAY,
    "thur": Weekday.THURSDAY,
    "thurs": Weekday.THURSDAY,
})


def parse_hhmm(value: Optional[str]) -> Optional[time]:
    """
    Parse an "HH:MM" string.

    Returns:
        Parsed time, or None if value is empty or malformed
    """
    if not value:
        return None
    try:
        return datetime.strptime(value.strip(), TIME_FORMAT).time()
    except ValueError:
        return None


@dataclass
class ScheduleConstraints:
    """
    Temporal constraints on when rotation may run.

    Every field is optional; an absent field does not constrain anything.
    """
    start_time: Optional[str] = None  # "HH:MM" format
    end_time: Optional[str] = None    # "HH:MM" format
    weekly: Optional[List[str]] = None
    monthly: Optional[List[int]] = None

    def get_start_time(self) -> Optional[time]:
        """Parse start_time, None if absent or malformed."""
        return parse_hhmm(self.start_time)

    def get_end_time(self) -> Optional[time]:
        """Parse end_time, None if absent or malformed."""
        return parse_hhmm(self.end_time)

    def get_weekdays(self) -> Optional[List[Weekday]]:
        """Parsed weekly constraint; unknown names are dropped."""
        if self.weekly is None:
            return None
        days = []
        for name in self.weekly:
            day = Weekday.parse(name)
            if day is not None:
                days.append(day)
        return days

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for TOML, omitting absent fields."""
        data: Dict[str, Any] = {}
        if self.start_time is not None:
            data['start_time'] = self.start_time
        if self.end_time is not None:
            data['end_time'] = self.end_time
        if self.weekly is not None:
            data['weekly'] = list(self.weekly)
        if self.monthly is not None:
            data['monthly'] = list(self.monthly)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ScheduleConstraints':
        return cls(
            start_time=data.get('start_time'),
            end_time=data.get('end_time'),
            weekly=list(data['weekly']) if data.get('weekly') is not None else None,
            monthly=list(data['monthly']) if data.get('monthly') is not None else None,
        )


def should_run(now: datetime, constraints: ScheduleConstraints) -> bool:
    """
    Decide whether rotation should be active at `now`.

    Constraints are checked in order (weekday, day of month, start time,
    end time) and the first failing one short-circuits. Both time bounds
    are inclusive.

    Args:
        now: Moment to evaluate
        constraints: Schedule constraints

    Returns:
        True if rotation may run
    """
    weekdays = constraints.get_weekdays()
    if weekdays is not None and Weekday.of(now) not in weekdays:
        return False

    if constraints.monthly is not None and now.day not in constraints.monthly:
        return False

    current = now.time()

    start = constraints.get_start_time()
    if start is not None and current < start:
        return False

    end = constraints.get_end_time()
    if end is not None and current > end:
        return False

    return True


def validate_schedule(constraints: ScheduleConstraints) -> List[str]:
    """
    List problems that `should_run` silently ignores.

    Returns:
        Human-readable problem descriptions (empty if none)
    """
    problems = []
    for label, value in (("start_time", constraints.start_time), ("end_time", constraints.end_time)):
        if value is not None and parse_hhmm(value) is None:
            problems.append(f"{label} '{value}' is not in HH:MM format and will be ignored")

    for name in constraints.weekly or []:
        if Weekday.parse(name) is None:
            problems.append(f"weekly entry '{name}' is not a weekday name")

    for day in constraints.monthly or []:
        if not 1 <= day <= 31:
            problems.append(f"monthly entry {day} is not a day of the month")

    start, end = constraints.get_start_time(), constraints.get_end_time()
    if start is not None and end is not None and start > end:
        problems.append(f"start_time {constraints.start_time} is after end_time {constraints.end_time}; "
                        "rotation will never run")
    return problems


def describe_schedule(constraints: ScheduleConstraints, now: Optional[datetime] = None) -> Dict[str, Any]:
    """
    Export schedule state as a JSON-friendly dict for `status`.
    """
    if now is None:
        now = datetime.now()

    weekdays = constraints.get_weekdays()
    start = constraints.get_start_time()
    end = constraints.get_end_time()
    return {
        "active_now": should_run(now, constraints),
        "weekly": [day.short_name for day in weekdays] if weekdays is not None else None,
        "monthly": constraints.monthly,
        "start_time": start.strftime(TIME_FORMAT) if start else None,
        "end_time": end.strftime(TIME_FORMAT) if end else None,
    }
