from __future__ import annotations

from resolutie.constants import GOAL_STATUSES, HABIT_FREQUENCIES, TODO_PRIORITIES, TODO_PRIORITY_ORDER
from resolutie.data.records import new_id, utc_now_iso
from resolutie.validation import (
    ValidationError,
    optional_text,
    parse_day,
    require_api_key,
    require_choice,
    require_day,
    require_title,
    sanitize_text,
)


def _find(gateway, kind, record_id):
    for item in gateway.fetch_all(kind):
        if item["id"] == record_id:
            return item
    raise ValidationError(f"{kind[:-1].replace('_', ' ').title()} not found")


def add_dream(gateway, title, description=None):
    record = {
        "id": new_id(),
        "user_id": gateway.user_id,
        "title": require_title(title),
        "description": optional_text(description),
        "created_at": utc_now_iso(),
    }
    return record, gateway.save("dreams", record)


def update_dream(gateway, dream_id, title=None, description=None):
    record = dict(_find(gateway, "dreams", dream_id))
    if title is not None:
        record["title"] = require_title(title)
    if description is not None:
        record["description"] = optional_text(description)
    return record, gateway.save("dreams", record)


def delete_dream(gateway, dream_id):
    return gateway.delete("dreams", dream_id)


def add_goal(
    gateway,
    title,
    time_bound,
    specific="",
    measurable="",
    achievable="",
    relevant="",
    dream_id=None,
):
    record = {
        "id": new_id(),
        "user_id": gateway.user_id,
        "dream_id": dream_id or None,
        "title": require_title(title),
        "specific": sanitize_text(specific),
        "measurable": sanitize_text(measurable),
        "achievable": sanitize_text(achievable),
        "relevant": sanitize_text(relevant),
        "time_bound": require_day(time_bound),
        "status": "active",
        "created_at": utc_now_iso(),
    }
    return record, gateway.save("goals", record)


def update_goal(gateway, goal_id, updates):
    record = dict(_find(gateway, "goals", goal_id))
    clean = dict(updates or {})
    if "title" in clean:
        record["title"] = require_title(clean["title"])
    for key in ("specific", "measurable", "achievable", "relevant"):
        if key in clean:
            record[key] = sanitize_text(clean[key])
    if "time_bound" in clean:
        record["time_bound"] = require_day(clean["time_bound"])
    if "status" in clean:
        record["status"] = require_choice(clean["status"], GOAL_STATUSES, "goal status")
    if "dream_id" in clean:
        record["dream_id"] = clean["dream_id"] or None
    return record, gateway.save("goals", record)


def set_goal_status(gateway, goal_id, status):
    return update_goal(gateway, goal_id, {"status": status})


def delete_goal(gateway, goal_id):
    return gateway.delete("goals", goal_id)


def add_habit(gateway, title, label="", frequency="daily", goal_id=None):
    record = {
        "id": new_id(),
        "user_id": gateway.user_id,
        "goal_id": goal_id or None,
        "title": require_title(title, "Habit name"),
        "label": sanitize_text(label, 60) or "General",
        "frequency": require_choice(frequency, HABIT_FREQUENCIES, "habit frequency"),
        "created_at": utc_now_iso(),
    }
    return record, gateway.save("habits", record)


def update_habit(gateway, habit_id, updates):
    record = dict(_find(gateway, "habits", habit_id))
    clean = dict(updates or {})
    if "title" in clean:
        record["title"] = require_title(clean["title"], "Habit name")
    if "label" in clean:
        record["label"] = sanitize_text(clean["label"], 60) or "General"
    if "frequency" in clean:
        record["frequency"] = require_choice(clean["frequency"], HABIT_FREQUENCIES, "habit frequency")
    if "goal_id" in clean:
        record["goal_id"] = clean["goal_id"] or None
    return record, gateway.save("habits", record)


def delete_habit(gateway, habit_id):
    return gateway.delete("habits", habit_id)


def habits_by_label(habits):
    grouped = {}
    for habit in habits:
        grouped.setdefault(habit.get("label") or "General", []).append(habit)
    return grouped


def add_todo(gateway, title, description=None, priority="medium", due_date=None):
    record = {
        "id": new_id(),
        "user_id": gateway.user_id,
        "title": require_title(title),
        "description": optional_text(description),
        "priority": require_choice(priority, TODO_PRIORITIES, "priority"),
        "due_date": parse_day(due_date, "Due date"),
        "completed": False,
        "completed_at": None,
        "created_at": utc_now_iso(),
    }
    return record, gateway.save("todos", record)


def update_todo(gateway, todo_id, updates):
    record = dict(_find(gateway, "todos", todo_id))
    clean = dict(updates or {})
    if "title" in clean:
        record["title"] = require_title(clean["title"])
    if "description" in clean:
        record["description"] = optional_text(clean["description"])
    if "priority" in clean:
        record["priority"] = require_choice(clean["priority"], TODO_PRIORITIES, "priority")
    if "due_date" in clean:
        record["due_date"] = parse_day(clean["due_date"], "Due date")
    return record, gateway.save("todos", record)


def toggle_todo(gateway, todo_id):
    record = dict(_find(gateway, "todos", todo_id))
    record["completed"] = not bool(record.get("completed"))
    record["completed_at"] = utc_now_iso() if record["completed"] else None
    return record, gateway.save("todos", record)


def delete_todo(gateway, todo_id):
    return gateway.delete("todos", todo_id)


def sort_todos(todos):
    def sort_key(todo):
        due_date = todo.get("due_date")
        return (
            bool(todo.get("completed")),
            TODO_PRIORITY_ORDER.get(todo.get("priority"), 1),
            due_date is None,
            due_date or "",
        )

    return sorted(todos, key=sort_key)


def filter_todos(todos, status="all"):
    if status == "pending":
        return [todo for todo in todos if not todo.get("completed")]
    if status == "completed":
        return [todo for todo in todos if todo.get("completed")]
    return list(todos)


def save_api_key(local_store, api_key):
    return local_store.update_settings({"openai_api_key": require_api_key(api_key)})
