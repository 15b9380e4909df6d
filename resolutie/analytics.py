from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

import pandas as pd

from resolutie import dates
from resolutie.constants import CONSISTENCY_WINDOW_DAYS
from resolutie.streaks import StreakData, calculate_streak, fully_completed_dates


@dataclass
class AnalyticsSummary:
    total_habits: int
    completed_today: int
    streak: StreakData
    weekly_progress: list = field(default_factory=list)
    hourly_activity: list = field(default_factory=list)
    peak_hour: Optional[int] = None
    consistency_score: int = 0


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _completion_hour(value) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, datetime):
        moment = value
    else:
        raw = str(value).strip()
        if not raw:
            return None
        try:
            moment = datetime.fromisoformat(raw.replace("Z", "+00:00"))
        except ValueError:
            return None
    if moment.tzinfo is not None:
        moment = moment.astimezone()
    return moment.hour


def hourly_activity(logs) -> list[dict]:
    counts = [0] * 24
    for log in logs or []:
        hour = _completion_hour(log.get("completed_at"))
        if hour is None:
            continue
        counts[hour] += 1
    return [{"hour": hour, "count": count} for hour, count in enumerate(counts)]


def peak_activity_hour(logs=None, activity=None) -> Optional[int]:
    activity = activity if activity is not None else hourly_activity(logs)
    peak = None
    for item in activity:
        if item["count"] == 0:
            continue
        if peak is None or item["count"] > peak["count"]:
            peak = item
    return peak["hour"] if peak else None


def daily_progress(day_list, habits, logs) -> list[dict]:
    habit_ids = {habit["id"] for habit in habits or []}
    total = len(habits or [])
    done_by_date: dict[str, set] = {}
    for log in logs or []:
        if log.get("habit_id") not in habit_ids:
            continue
        done_by_date.setdefault(log.get("date"), set()).add(log["habit_id"])

    series = []
    for day in day_list:
        completed = len(done_by_date.get(day, ()))
        percentage = round_half_up(completed / total * 100) if total > 0 else 0
        series.append(
            {
                "date": day,
                "completed": completed,
                "total": total,
                "percentage": percentage,
            }
        )
    return series


def consistency_score(logs, habits, days: int = CONSISTENCY_WINDOW_DAYS, today=None) -> int:
    if not habits or days <= 0:
        return 0
    window = [dates.days_ago(offset, today) for offset in range(days)]
    progress = daily_progress(window, habits, logs)
    average = sum(item["percentage"] for item in progress) / days
    return round_half_up(average)


def consistency_message(score: int) -> tuple[str, str]:
    if score >= 90:
        return "🏆", "Outstanding! You are very consistent!"
    if score >= 70:
        return "🔥", "Great! Keep it up!"
    if score >= 50:
        return "💪", "Not bad! There is room to improve."
    if score >= 30:
        return "📈", "Making progress! Try to be more consistent."
    return "🌱", "Start now, one step at a time!"


def monthly_stats(year: int, month: int, habits, logs) -> dict:
    month_days = dates.month_dates(year, month)
    progress = daily_progress(month_days, habits, logs)
    completed = sum(item["completed"] for item in progress)
    total = sum(item["total"] for item in progress)
    habit_ids = [habit["id"] for habit in habits or []]
    month_set = set(month_days)
    streak_days = len([day for day in fully_completed_dates(logs or [], habit_ids) if day in month_set])
    return {
        "month": f"{year:04d}-{month:02d}",
        "completed_habits": completed,
        "total_habits": total,
        "completion_rate": round_half_up(completed / total * 100) if total > 0 else 0,
        "streak_days": streak_days,
    }


def build_summary(habits, logs, today=None) -> AnalyticsSummary:
    habits = list(habits or [])
    logs = list(logs or [])
    habit_ids = [habit["id"] for habit in habits]
    today_iso = dates.today(today)
    today_progress = daily_progress([today_iso], habits, logs)[0]
    activity = hourly_activity(logs)
    return AnalyticsSummary(
        total_habits=len(habits),
        completed_today=today_progress["completed"],
        streak=calculate_streak(logs, habit_ids, today=today_iso),
        weekly_progress=daily_progress(dates.week_dates(0, today_iso), habits, logs),
        hourly_activity=activity,
        peak_hour=peak_activity_hour(activity=activity),
        consistency_score=consistency_score(logs, habits, today=today_iso),
    )


def daily_progress_frame(day_list, habits, logs) -> pd.DataFrame:
    df = pd.DataFrame(
        daily_progress(day_list, habits, logs),
        columns=["date", "completed", "total", "percentage"],
    )
    if df.empty:
        return df
    df["date"] = pd.to_datetime(df["date"]).dt.date
    df["weekday"] = df["date"].apply(lambda d: d.weekday())
    df["is_weekend"] = df["weekday"] >= 5
    return df


def hourly_activity_frame(logs, start_hour: int = 0, end_hour: int = 23) -> pd.DataFrame:
    df = pd.DataFrame(hourly_activity(logs), columns=["hour", "count"])
    df = df[(df["hour"] >= start_hour) & (df["hour"] <= end_hour)].reset_index(drop=True)
    df["label"] = df["hour"].apply(dates.format_hour)
    return df
