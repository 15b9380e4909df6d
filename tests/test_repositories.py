import pytest

from resolutie.data import repositories
from resolutie.validation import ValidationError


def test_add_and_update_dream(offline_gateway):
    dream, ok = repositories.add_dream(offline_gateway, "  Live abroad ", "")
    assert ok is True
    assert dream["title"] == "Live abroad"
    assert dream["description"] is None

    updated, ok = repositories.update_dream(offline_gateway, dream["id"], description="Lisbon")
    assert updated["description"] == "Lisbon"
    assert offline_gateway.fetch_all("dreams")[0]["description"] == "Lisbon"


def test_update_missing_record_raises(offline_gateway):
    with pytest.raises(ValidationError, match="Dream not found"):
        repositories.update_dream(offline_gateway, "missing", title="x")


def test_goal_requires_title_and_deadline(offline_gateway):
    with pytest.raises(ValidationError):
        repositories.add_goal(offline_gateway, "", "2024-12-31")
    with pytest.raises(ValidationError, match="Deadline is required"):
        repositories.add_goal(offline_gateway, "Ship it", None)


def test_goal_lifecycle(offline_gateway):
    dream, _ = repositories.add_dream(offline_gateway, "Be healthy")
    goal, _ = repositories.add_goal(
        offline_gateway,
        "Run 10k",
        "2024-09-01",
        specific="Run 10k under an hour",
        dream_id=dream["id"],
    )
    assert goal["status"] == "active"
    assert goal["dream_id"] == dream["id"]

    goal, _ = repositories.set_goal_status(offline_gateway, goal["id"], "completed")
    assert goal["status"] == "completed"
    with pytest.raises(ValidationError):
        repositories.set_goal_status(offline_gateway, goal["id"], "abandoned")

    assert repositories.delete_goal(offline_gateway, goal["id"]) is True
    assert offline_gateway.fetch_all("goals") == []


def test_habit_defaults_and_grouping(offline_gateway):
    repositories.add_habit(offline_gateway, "Meditate", label="Mind")
    repositories.add_habit(offline_gateway, "Stretch")
    with pytest.raises(ValidationError, match="Habit name cannot be empty"):
        repositories.add_habit(offline_gateway, " ")
    with pytest.raises(ValidationError):
        repositories.add_habit(offline_gateway, "Swim", frequency="hourly")

    grouped = repositories.habits_by_label(offline_gateway.fetch_all("habits"))
    assert sorted(grouped) == ["General", "Mind"]


def test_update_habit(offline_gateway):
    habit, _ = repositories.add_habit(offline_gateway, "Read", label="Mind")
    habit, _ = repositories.update_habit(offline_gateway, habit["id"], {"title": "Read 20 pages", "frequency": "weekly"})
    assert habit["title"] == "Read 20 pages"
    assert habit["frequency"] == "weekly"
    assert habit["label"] == "Mind"


def test_todo_toggle_and_delete(offline_gateway):
    todo, _ = repositories.add_todo(offline_gateway, "Pay rent", priority="high", due_date="2024-02-01")
    assert todo["due_date"] == "2024-02-01"
    todo, _ = repositories.toggle_todo(offline_gateway, todo["id"])
    assert todo["completed"] is True
    assert todo["completed_at"]
    todo, _ = repositories.toggle_todo(offline_gateway, todo["id"])
    assert todo["completed"] is False
    assert todo["completed_at"] is None
    assert repositories.delete_todo(offline_gateway, todo["id"]) is True
    assert offline_gateway.fetch_all("todos") == []


def test_add_todo_rejects_unknown_priority(offline_gateway):
    with pytest.raises(ValidationError):
        repositories.add_todo(offline_gateway, "Pay rent", priority="urgent")


def test_sort_todos():
    todos = [
        {"id": "done", "priority": "high", "completed": True, "due_date": None},
        {"id": "low", "priority": "low", "completed": False, "due_date": "2024-01-01"},
        {"id": "high-late", "priority": "high", "completed": False, "due_date": "2024-03-01"},
        {"id": "high-none", "priority": "high", "completed": False, "due_date": None},
        {"id": "high-soon", "priority": "high", "completed": False, "due_date": "2024-02-01"},
        {"id": "medium", "priority": "medium", "completed": False, "due_date": None},
    ]
    assert [t["id"] for t in repositories.sort_todos(todos)] == [
        "high-soon",
        "high-late",
        "high-none",
        "medium",
        "low",
        "done",
    ]


def test_filter_todos():
    todos = [{"id": "a", "completed": True}, {"id": "b", "completed": False}]
    assert [t["id"] for t in repositories.filter_todos(todos, "pending")] == ["b"]
    assert [t["id"] for t in repositories.filter_todos(todos, "completed")] == ["a"]
    assert len(repositories.filter_todos(todos)) == 2


def test_save_api_key(local_store):
    key = "sk-" + "k" * 40
    assert repositories.save_api_key(local_store, key)["openai_api_key"] == key
    with pytest.raises(ValidationError):
        repositories.save_api_key(local_store, "sk-bad")
    assert local_store.get_settings()["openai_api_key"] == key
