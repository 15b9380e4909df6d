from resolutie import analytics

TODAY = "2024-01-03"
HABITS = [{"id": "a", "title": "Read"}, {"id": "b", "title": "Walk"}]


def _log(habit_id, day, hour=8):
    return {"habit_id": habit_id, "date": day, "completed_at": f"{day}T{hour:02d}:15:00"}


def test_hourly_activity_histogram_and_peak():
    logs = [_log("a", TODAY, 7), _log("b", TODAY, 7), _log("a", "2024-01-02", 7), _log("a", "2024-01-01", 20)]
    activity = analytics.hourly_activity(logs)
    assert len(activity) == 24
    assert activity[7] == {"hour": 7, "count": 3}
    assert activity[20] == {"hour": 20, "count": 1}
    assert sum(item["count"] for item in activity) == 4
    assert analytics.peak_activity_hour(logs) == 7


def test_peak_hour_ties_pick_earliest_hour():
    logs = [_log("a", TODAY, 21), _log("a", TODAY, 6)]
    assert analytics.peak_activity_hour(logs) == 6


def test_peak_hour_is_none_without_activity():
    assert analytics.peak_activity_hour([]) is None
    assert analytics.peak_activity_hour(activity=analytics.hourly_activity([])) is None


def test_hourly_activity_skips_unparseable_timestamps():
    logs = [{"habit_id": "a", "date": TODAY, "completed_at": "not a time"}, {"habit_id": "a", "date": TODAY}]
    assert all(item["count"] == 0 for item in analytics.hourly_activity(logs))


def test_round_half_up():
    assert analytics.round_half_up(12.5) == 13
    assert analytics.round_half_up(2.5) == 3
    assert analytics.round_half_up(2.49) == 2


def test_daily_progress_rounds_half_up():
    habits = [{"id": str(i)} for i in range(8)]
    progress = analytics.daily_progress([TODAY], habits, [_log("0", TODAY)])
    assert progress == [{"date": TODAY, "completed": 1, "total": 8, "percentage": 13}]


def test_daily_progress_without_habits_is_zero():
    progress = analytics.daily_progress([TODAY], [], [_log("a", TODAY)])
    assert progress[0]["percentage"] == 0
    assert progress[0]["total"] == 0


def test_daily_progress_ignores_deleted_habits_and_duplicates():
    logs = [_log("a", TODAY), _log("a", TODAY), _log("gone", TODAY)]
    progress = analytics.daily_progress([TODAY], HABITS, logs)
    assert progress[0]["completed"] == 1
    assert progress[0]["percentage"] == 50


def test_consistency_score_averages_window():
    logs = [_log("a", TODAY), _log("b", TODAY), _log("a", "2024-01-02")]
    # (100 + 50) / 30 days = 5
    assert analytics.consistency_score(logs, HABITS, today=TODAY) == 5
    assert analytics.consistency_score(logs, HABITS, days=2, today=TODAY) == 75
    assert analytics.consistency_score(logs, [], today=TODAY) == 0


def test_consistency_message_tiers():
    assert analytics.consistency_message(95)[0] == "🏆"
    assert analytics.consistency_message(70)[0] == "🔥"
    assert analytics.consistency_message(50)[0] == "💪"
    assert analytics.consistency_message(30)[0] == "📈"
    assert analytics.consistency_message(0)[0] == "🌱"


def test_monthly_stats():
    logs = [
        _log("a", "2024-02-01"),
        _log("b", "2024-02-01"),
        _log("a", "2024-02-02"),
        _log("a", "2024-03-01"),
    ]
    stats = analytics.monthly_stats(2024, 2, HABITS, logs)
    assert stats == {
        "month": "2024-02",
        "completed_habits": 3,
        "total_habits": 58,
        "completion_rate": 5,
        "streak_days": 1,
    }


def test_build_summary():
    logs = [
        _log("a", "2024-01-02", 7),
        _log("b", "2024-01-02", 7),
        _log("a", TODAY, 9),
        _log("b", TODAY, 7),
    ]
    summary = analytics.build_summary(HABITS, logs, today=TODAY)
    assert summary.total_habits == 2
    assert summary.completed_today == 2
    assert summary.streak.current_streak == 2
    assert summary.peak_hour == 7
    assert len(summary.weekly_progress) == 7
    assert summary.weekly_progress[0]["date"] == "2023-12-31"
    assert summary.weekly_progress[3] == {"date": TODAY, "completed": 2, "total": 2, "percentage": 100}
    assert summary.consistency_score == 7


def test_build_summary_for_empty_dashboard():
    summary = analytics.build_summary([], [], today=TODAY)
    assert summary.total_habits == 0
    assert summary.completed_today == 0
    assert summary.streak.current_streak == 0
    assert summary.peak_hour is None
    assert summary.consistency_score == 0


def test_daily_progress_frame_flags_weekends():
    df = analytics.daily_progress_frame(["2024-01-06", "2024-01-08"], HABITS, [_log("a", "2024-01-06")])
    assert list(df["percentage"]) == [50, 0]
    assert list(df["is_weekend"]) == [True, False]


def test_hourly_activity_frame_limits_hours():
    df = analytics.hourly_activity_frame([_log("a", TODAY, 7)], start_hour=6, end_hour=9)
    assert list(df["hour"]) == [6, 7, 8, 9]
    assert list(df["count"]) == [0, 1, 0, 0]
    assert list(df["label"]) == ["6 AM", "7 AM", "8 AM", "9 AM"]
