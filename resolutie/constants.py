LOCAL_USER_ID = "local"

STORAGE_KEYS = {
    "user": "resolutie_user",
    "dreams": "resolutie_dreams",
    "goals": "resolutie_goals",
    "habits": "resolutie_habits",
    "progress_logs": "resolutie_progress_logs",
    "todos": "resolutie_todos",
    "settings": "resolutie_settings",
    "theme": "resolutie_theme",
    "dashboard_order": "resolutie_dashboard_order",
}
LOCAL_STORAGE_TABLE = "local_storage"

ENTITY_KINDS = ["dreams", "goals", "habits", "progress_logs", "todos"]
EXPORT_COLLECTIONS = ["dreams", "goals", "habits", "progress_logs", "todos"]

GOAL_STATUSES = ["active", "completed", "paused"]
HABIT_FREQUENCIES = ["daily", "weekly"]
TODO_PRIORITIES = ["low", "medium", "high"]
TODO_PRIORITY_ORDER = {"high": 0, "medium": 1, "low": 2}

THEMES = ["light", "dark", "system"]
DEFAULT_THEME = "system"

DEFAULT_SECTION_ORDER = ["habits", "goals", "todos", "quick_actions"]

CONSISTENCY_WINDOW_DAYS = 30
STREAK_GRACE_DAYS = 1

API_KEY_PREFIX = "sk-"
API_KEY_MIN_LENGTH = 40

TITLE_MAX_LENGTH = 120

