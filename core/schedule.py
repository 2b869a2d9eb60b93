"""Canonical ordering of workouts and the tomorrow / other-day split.

Days and time slots are closed, ordered vocabularies. A workout's position
is ``day rank + time rank / 100``; with at most six time slots a full day
step always dominates the time component. Values outside a vocabulary rank
as -1 and therefore sort first.
"""

from __future__ import annotations

import calendar
import re
from datetime import date
from enum import Enum
from functools import cmp_to_key
from typing import Any, Iterable, Mapping, Optional, Sequence


class WorkoutDay(Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    EVERY_THIRD_FRIDAY = "Every Third Friday"
    SATURDAY = "Saturday"
    ALL_SATURDAYS_EXCEPT_LAST = "All Saturdays Except the Last of the Month"
    SUNDAY = "Sunday"

    @property
    def rank(self) -> int:
        return _DAY_ORDER.index(self)

    @property
    def weekday(self) -> int:
        """Nominal weekday, 0=Sunday..6=Saturday."""
        return _NOMINAL_WEEKDAY[self]

    @classmethod
    def parse(cls, value: Any) -> Optional["WorkoutDay"]:
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        needle = value.strip().lower()
        for day in cls:
            if day.value.lower() == needle:
                return day
        return None


_DAY_ORDER: list[WorkoutDay] = list(WorkoutDay)

_NOMINAL_WEEKDAY: dict[WorkoutDay, int] = {
    WorkoutDay.SUNDAY: 0,
    WorkoutDay.MONDAY: 1,
    WorkoutDay.TUESDAY: 2,
    WorkoutDay.WEDNESDAY: 3,
    WorkoutDay.THURSDAY: 4,
    WorkoutDay.FRIDAY: 5,
    WorkoutDay.EVERY_THIRD_FRIDAY: 5,
    WorkoutDay.SATURDAY: 6,
    WorkoutDay.ALL_SATURDAYS_EXCEPT_LAST: 6,
}

_START_RE = re.compile(r"^\s*(\d{1,2}):?(\d{2})\s*$")


class TimeSlot(Enum):
    AM_0515 = "05:15 AM–6:00 AM"
    AM_0530 = "05:30 AM–6:15 AM"
    AM_0545 = "05:45 AM–6:30 AM"
    AM_0600 = "06:00 AM–7:00 AM"
    AM_0630 = "06:30 AM–7:30 AM"
    AM_0700 = "07:00 AM–8:00 AM"

    @property
    def rank(self) -> int:
        return _SLOT_ORDER.index(self)

    @property
    def start(self) -> tuple[int, int]:
        hh, mm = self.value.split(" ", 1)[0].split(":")
        return int(hh), int(mm)

    @classmethod
    def parse(cls, value: Any) -> Optional["TimeSlot"]:
        """Accept a slot label, the label with an ASCII hyphen, or a bare start time.

        ``"0530"`` and ``"05:30"`` both resolve to the 05:30 slot.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        needle = value.strip().replace("-", "–").lower()
        for slot in cls:
            if slot.value.lower() == needle:
                return slot
        m = _START_RE.match(value)
        if m:
            start = (int(m.group(1)), int(m.group(2)))
            for slot in cls:
                if slot.start == start:
                    return slot
        return None


_SLOT_ORDER: list[TimeSlot] = list(TimeSlot)

DAY_VOCABULARY: tuple[str, ...] = tuple(d.value for d in WorkoutDay)
TIME_VOCABULARY: tuple[str, ...] = tuple(t.value for t in TimeSlot)

# today (0=Sunday..6=Saturday) -> days that fall on the following day
TOMORROW_DAYS: dict[int, frozenset[WorkoutDay]] = {
    0: frozenset({WorkoutDay.MONDAY}),
    1: frozenset({WorkoutDay.TUESDAY}),
    2: frozenset({WorkoutDay.WEDNESDAY}),
    3: frozenset({WorkoutDay.THURSDAY}),
    4: frozenset({WorkoutDay.FRIDAY, WorkoutDay.EVERY_THIRD_FRIDAY}),
    5: frozenset({WorkoutDay.SATURDAY, WorkoutDay.ALL_SATURDAYS_EXCEPT_LAST}),
    6: frozenset({WorkoutDay.SUNDAY}),
}


def _get(workout: Any, key: str) -> Any:
    if isinstance(workout, Mapping):
        return workout.get(key)
    return getattr(workout, key, None)


def _identity(workout: Any) -> Any:
    ident = _get(workout, "_id")
    return ident if ident is not None else id(workout)


def day_rank(day: Any) -> int:
    parsed = WorkoutDay.parse(day)
    return parsed.rank if parsed is not None else -1


def time_rank(time: Any) -> int:
    parsed = TimeSlot.parse(time)
    return parsed.rank if parsed is not None else -1


def order_value(workout: Any) -> float:
    return day_rank(_get(workout, "day")) + time_rank(_get(workout, "time")) / 100


def total_order(a: Any, b: Any) -> float:
    """Comparator: negative when ``a`` comes first, zero on a tie."""
    return order_value(a) - order_value(b)


def sort_workouts(workouts: Iterable[Any]) -> list[Any]:
    # sorted() is stable, ties keep insertion order
    return sorted(workouts, key=cmp_to_key(total_order))


def weekday_index(day: date) -> int:
    """Python weekday (Monday=0) to the 0=Sunday..6=Saturday convention."""
    return (day.weekday() + 1) % 7


def is_eligible_on(day: WorkoutDay, on_date: date) -> bool:
    """Whether a workout on ``day`` actually runs on ``on_date``.

    Only meaningful for dates that already fall on the day's nominal weekday.
    """
    if day is WorkoutDay.EVERY_THIRD_FRIDAY:
        return 15 <= on_date.day <= 21
    if day is WorkoutDay.ALL_SATURDAYS_EXCEPT_LAST:
        last = calendar.monthrange(on_date.year, on_date.month)[1]
        return on_date.day + 7 <= last
    return True


def _validate_today(today: int) -> int:
    if today not in TOMORROW_DAYS:
        raise ValueError(f"today must be a weekday index 0-6, got {today!r}")
    return today


def occurs_tomorrow(workouts: Sequence[Any], today: int, on_date: Optional[date] = None) -> list[Any]:
    """Workouts that fall on the day after ``today`` (0=Sunday..6=Saturday).

    Irregular recurrences match their nominal weekday unconditionally unless
    ``on_date`` (tomorrow's calendar date) is given, in which case "Every
    Third Friday" and "All Saturdays Except the Last of the Month" are
    checked against it.
    """
    targets = TOMORROW_DAYS[_validate_today(today)]
    picked = []
    for w in workouts:
        day = WorkoutDay.parse(_get(w, "day"))
        if day is None or day not in targets:
            continue
        if on_date is not None and not is_eligible_on(day, on_date):
            continue
        picked.append(w)
    return sort_workouts(picked)


def occurs_other_day(workouts: Sequence[Any], today: int, on_date: Optional[date] = None) -> list[Any]:
    tomorrow_ids = {_identity(w) for w in occurs_tomorrow(workouts, today, on_date=on_date)}
    return sort_workouts(w for w in workouts if _identity(w) not in tomorrow_ids)

