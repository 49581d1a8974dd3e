"""
Tick Schedule - Turns a cron expression into a lazy stream of tick instants.

Cron evaluation itself is delegated to APScheduler's CronTrigger. This
module only adapts it to a pull-based cursor:
- Infinite and forward-only: there is no way to rewind a schedule
- Deterministic: two schedules opened from the same arguments produce the
  same instants term by term
- Lazy: nothing past the next instant is ever computed
"""

from __future__ import annotations
from datetime import datetime, timezone

from apscheduler.triggers.base import BaseTrigger
from apscheduler.triggers.combining import OrTrigger
from apscheduler.triggers.cron import CronTrigger


# Standard cron numbering (0 and 7 are both Sunday). APScheduler counts
# from Monday, so numeric day-of-week fields are rewritten as names.
_CRON_WEEKDAYS = ("sun", "mon", "tue", "wed", "thu", "fri", "sat")


def _translate_day_of_week(field: str) -> str:
    if field == "*" or any(c.isalpha() for c in field):
        return field

    days: list[str] = []
    for part in field.split(","):
        base, _, step = part.partition("/")
        stride = int(step) if step else 1
        if base == "*":
            low, high = 0, 6
        elif "-" in base:
            start, end = base.split("-", 1)
            low, high = int(start), int(end)
        else:
            low = int(base)
            high = 7 if step else low

        if not (0 <= low <= 7 and 0 <= high <= 7) or stride < 1:
            raise ValueError(f"day of week out of range: {part!r}")

        for day in range(low, high + 1, stride):
            name = _CRON_WEEKDAYS[day % 7]
            if name not in days:
                days.append(name)
    return ",".join(days)


def _restricted(field: str) -> bool:
    return not field.startswith("*")


def build_trigger(expr: str, tz: str) -> BaseTrigger:
    """
    Build a trigger from a 5-field cron expression.

    When both day of month and day of week are restricted, a day matching
    either one fires (classic cron). CronTrigger alone requires both, so the
    two fields get one trigger each, joined with an OrTrigger.

    Raises ValueError for malformed expressions or unknown timezones.
    """
    fields = expr.split()
    if len(fields) != 5:
        raise ValueError(f"Wrong number of fields; got {len(fields)}, expected 5")
    minute, hour, day, month, day_of_week = fields
    either_day = _restricted(day) and _restricted(day_of_week)
    day_of_week = _translate_day_of_week(day_of_week)

    def cron(day: str, day_of_week: str) -> CronTrigger:
        return CronTrigger(
            minute=minute,
            hour=hour,
            day=day,
            month=month,
            day_of_week=day_of_week,
            timezone=tz,
        )

    if either_day:
        return OrTrigger([cron(day, "*"), cron("*", day_of_week)])
    return cron(day, day_of_week)


class TickSchedule:
    """
    Cursor over the instants a cron schedule fires at.

    Usage:
        schedule = open_schedule("0 12 * * 1-5", "Asia/Seoul", start_at)
        schedule.peek()   # next instant, not consumed
        next(schedule)    # next instant, consumed
    """

    def __init__(self, trigger: BaseTrigger, starting_instant: datetime):
        self._trigger = trigger
        self._next = self._fire_time(None, starting_instant)

    def __iter__(self) -> TickSchedule:
        return self

    def __next__(self) -> datetime:
        current = self._next
        self._next = self._fire_time(current, current)
        return current

    def peek(self) -> datetime:
        """Get the next instant without consuming it."""
        return self._next

    def _fire_time(self, previous: datetime | None, now: datetime) -> datetime:
        fire_time = self._trigger.get_next_fire_time(previous, now)
        if fire_time is None:
            raise ValueError("schedule has no further trigger instants")
        return fire_time.astimezone(timezone.utc)


def open_schedule(expr: str, tz: str, starting_instant: datetime) -> TickSchedule:
    """
    Open a schedule whose first instant is the first fire time at or after
    starting_instant. Every later instant is strictly after its predecessor.
    """
    return TickSchedule(build_trigger(expr, tz), starting_instant)
