from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from resolutie import dates
from resolutie.constants import STREAK_GRACE_DAYS


@dataclass(frozen=True)
class StreakData:
    current_streak: int = 0
    longest_streak: int = 0
    last_completed_date: Optional[str] = None

    def as_dict(self):
        return {
            "current_streak": self.current_streak,
            "longest_streak": self.longest_streak,
            "last_completed_date": self.last_completed_date,
        }


def completions_by_date(logs: Iterable[dict], habit_ids) -> dict[str, set]:
    active = set(habit_ids)
    done_by_date: dict[str, set] = {}
    for log in logs:
        habit_id = log.get("habit_id")
        day = log.get("date")
        if habit_id not in active or not day:
            continue
        done_by_date.setdefault(day, set()).add(habit_id)
    return done_by_date


def fully_completed_dates(logs: Iterable[dict], habit_ids) -> list[str]:
    required = len(set(habit_ids))
    if required == 0:
        return []
    done_by_date = completions_by_date(logs, habit_ids)
    return sorted(day for day, done in done_by_date.items() if len(done) == required)


def calculate_streak(logs, habit_ids, today=None) -> StreakData:
    logs = list(logs or [])
    habit_ids = list(habit_ids or [])
    if not logs or not habit_ids:
        return StreakData()

    completed = fully_completed_dates(logs, habit_ids)
    if not completed:
        return StreakData()

    completed_set = set(completed)
    last_completed = completed[-1]
    today_iso = dates.today(today)

    current = 0
    if dates.days_between(last_completed, today_iso) <= STREAK_GRACE_DAYS and last_completed <= today_iso:
        check_day = last_completed
        while check_day in completed_set:
            current += 1
            check_day = dates.shift_day(check_day, -1)

    longest = 0
    running = 0
    previous = None
    for day in completed:
        if previous is not None and dates.days_between(previous, day) == 1:
            running += 1
        else:
            running = 1
        longest = max(longest, running)
        previous = day

    return StreakData(
        current_streak=current,
        longest_streak=longest,
        last_completed_date=last_completed,
    )


def streak_message(streak: int) -> str:
    if streak <= 0:
        return "Start your streak today!"
    if streak == 1:
        return "1 day in a row 🔥"
    if streak < 7:
        return f"{streak} days in a row 🔥"
    if streak < 30:
        return f"{streak} days! Amazing! 🔥🔥"
    if streak < 100:
        return f"{streak} days! You're on fire! 🔥🔥🔥"
    return f"{streak} days! LEGENDARY! 🔥🔥🔥🔥"
