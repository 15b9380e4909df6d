from __future__ import annotations

from datetime import date as dt_date
from typing import Optional, List, Dict, Any, Literal

from pydantic import BaseModel, Field


class DreamRecord(BaseModel):
    id: str
    user_id: Optional[str] = None
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    created_at: str


class GoalRecord(BaseModel):
    id: str
    user_id: Optional[str] = None
    dream_id: Optional[str] = None
    title: str = Field(..., min_length=1)
    specific: Optional[str] = None
    measurable: Optional[str] = None
    achievable: Optional[str] = None
    relevant: Optional[str] = None
    time_bound: dt_date
    status: Literal["active", "completed", "paused"] = "active"
    created_at: str


class HabitRecord(BaseModel):
    id: str
    user_id: Optional[str] = None
    goal_id: Optional[str] = None
    title: str = Field(..., min_length=1)
    label: str = ""
    frequency: Literal["daily", "weekly"] = "daily"
    created_at: str


class ProgressLogRecord(BaseModel):
    id: str
    habit_id: str
    user_id: Optional[str] = None
    completed_at: str
    date: dt_date
    notes: Optional[str] = None


class TodoRecord(BaseModel):
    id: str
    user_id: Optional[str] = None
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    priority: Literal["low", "medium", "high"] = "medium"
    due_date: Optional[dt_date] = None
    completed: bool = False
    completed_at: Optional[str] = None
    created_at: str


ENTITY_SCHEMAS = {
    "dreams": DreamRecord,
    "goals": GoalRecord,
    "habits": HabitRecord,
    "progress_logs": ProgressLogRecord,
    "todos": TodoRecord,
}


class EntityListResponse(BaseModel):
    items: List[Dict[str, Any]]


class SnapshotResponse(BaseModel):
    user_id: str
    dreams: List[Dict[str, Any]]
    goals: List[Dict[str, Any]]
    habits: List[Dict[str, Any]]
    progress_logs: List[Dict[str, Any]]
    todos: List[Dict[str, Any]]


class DeleteResponse(BaseModel):
    ok: bool
    deleted: int
