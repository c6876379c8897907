"""
Sprint data structures for the Prep context.

A Sprint is a day-by-day interview preparation plan for one application:

    Sprint
    └── DailyPlan (one per day until the interview)
        └── Block (morning, evening)
            └── Task

Block and day completion are derived from their tasks, so they can never
disagree with the task flags. to_dict()/from_dict() use the persisted JSON
shape (camelCase keys, derived "completed" flags included).
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from prepdesk.contexts.prep.exceptions import InvalidSprintStructureError


class RoleType(str, Enum):
    SDE = "SDE"
    SDET = "SDET"
    QA = "QA"
    DATA = "Data"
    PM = "PM"


class FocusArea(str, Enum):
    DSA = "DSA"
    SYSTEM_DESIGN = "SystemDesign"
    BEHAVIORAL = "Behavioral"
    REVIEW = "Review"
    MOCK = "Mock"


class BlockType(str, Enum):
    MORNING = "morning"
    EVENING = "evening"


class SprintStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    EXPIRED = "expired"


@dataclass
class Task:
    id: str
    description: str
    category: str
    completed: bool = False
    estimated_minutes: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        data = {
            "id": self.id,
            "description": self.description,
            "completed": self.completed,
            "category": self.category,
        }
        if self.estimated_minutes is not None:
            data["estimatedMinutes"] = self.estimated_minutes
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        _require_keys(data, ["id", "description"], "task")
        return cls(
            id=str(data["id"]),
            description=str(data["description"]),
            category=str(data.get("category") or "General"),
            completed=bool(data.get("completed", False)),
            estimated_minutes=data.get("estimatedMinutes"),
        )


@dataclass
class Block:
    id: str
    type: str
    duration: str
    tasks: list[Task] = field(default_factory=list)

    @property
    def completed(self) -> bool:
        """True once every task in the block is done."""
        return all(task.completed for task in self.tasks)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "duration": self.duration,
            "tasks": [task.to_dict() for task in self.tasks],
            "completed": self.completed,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Block":
        _require_keys(data, ["id", "type", "duration"], "block")
        return cls(
            id=str(data["id"]),
            type=str(data["type"]),
            duration=str(data["duration"]),
            tasks=[Task.from_dict(task) for task in _require_list(data.get("tasks", []), "tasks")],
        )


@dataclass
class DailyPlan:
    day: int
    date: str
    focus: str
    blocks: list[Block] = field(default_factory=list)

    @property
    def completed(self) -> bool:
        """True once every block of the day is complete."""
        return all(block.completed for block in self.blocks)

    def to_dict(self) -> dict[str, Any]:
        return {
            "day": self.day,
            "date": self.date,
            "focus": self.focus,
            "blocks": [block.to_dict() for block in self.blocks],
            "completed": self.completed,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DailyPlan":
        _require_keys(data, ["day", "date", "focus"], "daily plan")
        return cls(
            day=int(data["day"]),
            date=str(data["date"]),
            focus=str(data["focus"]),
            blocks=[Block.from_dict(block) for block in _require_list(data.get("blocks", []), "blocks")],
        )


@dataclass
class Sprint:
    """
    Interview preparation sprint for one application.

    Factory methods:
        from_dict(data) - Rebuild from the persisted JSON shape
        from_json(text) - Rebuild from a JSON document
    """

    id: str
    application_id: str
    interview_date: str
    role_type: str
    total_days: int
    daily_plans: list[DailyPlan]
    status: str = SprintStatus.ACTIVE.value
    created_at: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "applicationId": self.application_id,
            "interviewDate": self.interview_date,
            "roleType": self.role_type,
            "totalDays": self.total_days,
            "dailyPlans": [plan.to_dict() for plan in self.daily_plans],
            "status": self.status,
            "createdAt": self.created_at,
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: dict) -> "Sprint":
        """
        Rebuild a sprint from its persisted shape.

        dailyPlans may be stored as a JSON string; totalDays defaults to the
        number of plans when absent and must match it when present. A sprint
        always has at least one day.

        Raises:
            InvalidSprintStructureError: If required fields are missing or malformed
        """
        _require_keys(data, ["id", "applicationId", "interviewDate", "roleType", "dailyPlans"], "sprint")

        raw_plans = data["dailyPlans"]
        plans_value = get_daily_plans_array(raw_plans)
        if not plans_value and raw_plans not in ([], "[]"):
            raise InvalidSprintStructureError(
                f"Sprint {data['id']} has unreadable dailyPlans: {str(raw_plans)[:80]!r}"
            )

        try:
            daily_plans = [DailyPlan.from_dict(plan) for plan in plans_value]
            total_days = int(data.get("totalDays") or len(daily_plans))
        except InvalidSprintStructureError:
            raise
        except (TypeError, ValueError) as e:
            raise InvalidSprintStructureError(f"Sprint {data['id']} is malformed: {e}") from e

        if total_days < 1 or total_days != len(daily_plans):
            raise InvalidSprintStructureError(
                f"Sprint {data['id']} has totalDays={total_days} but {len(daily_plans)} daily plan(s)"
            )

        return cls(
            id=str(data["id"]),
            application_id=str(data["applicationId"]),
            interview_date=str(data["interviewDate"]),
            role_type=str(data["roleType"]),
            total_days=total_days,
            daily_plans=daily_plans,
            status=str(data.get("status") or SprintStatus.ACTIVE.value),
            created_at=data.get("createdAt"),
        )

    @classmethod
    def from_json(cls, text: str) -> "Sprint":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise InvalidSprintStructureError(f"Sprint document is not valid JSON: {e}") from e
        return cls.from_dict(data)

    def iter_tasks(self):
        """Yield (day_index, block_index, task_index, task) for every task."""
        for day_index, plan in enumerate(self.daily_plans):
            for block_index, block in enumerate(plan.blocks):
                for task_index, task in enumerate(block.tasks):
                    yield day_index, block_index, task_index, task


def get_daily_plans_array(value: Any) -> list:
    """
    Read daily plans that may be stored as a list or as a JSON string.

    Anything unreadable (invalid JSON, a JSON non-list, other types) yields [].
    """
    if not value:
        return []
    if isinstance(value, list):
        return value
    if isinstance(value, str):
        try:
            parsed = json.loads(value)
        except json.JSONDecodeError:
            return []
        return parsed if isinstance(parsed, list) else []
    return []


def _require_keys(data: Any, keys: list[str], kind: str) -> None:
    if not isinstance(data, dict):
        raise InvalidSprintStructureError(f"Expected {kind} object, got {type(data).__name__}")
    missing = [key for key in keys if key not in data]
    if missing:
        raise InvalidSprintStructureError(f"{kind.capitalize()} is missing required fields: {missing}")


def _require_list(value: Any, name: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise InvalidSprintStructureError(f"Field '{name}' must be a list, got {type(value).__name__}")
    return value
