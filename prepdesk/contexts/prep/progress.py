"""
Sprint progress and lifecycle operations.

All operations return updated copies; the sprints passed in are never mutated.
"""

import copy
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional, Union

from prepdesk.contexts.prep.exceptions import InvalidTaskPathError
from prepdesk.contexts.prep.logger import _log_debug, _log_error, _log_info, _log_success
from prepdesk.contexts.prep.registries import SprintTemplateRegistry
from prepdesk.contexts.prep.sprint_data_structure import (
    Sprint,
    SprintStatus,
    get_daily_plans_array,
)
from prepdesk.contexts.prep.sprint_generator import generate_sprint


@dataclass
class SprintProgress:
    """Task and day completion counts for one sprint."""

    total_tasks: int
    completed_tasks: int
    total_days: int
    completed_days: int

    @property
    def percent_complete(self) -> float:
        if not self.total_tasks:
            return 0.0
        return round(100.0 * self.completed_tasks / self.total_tasks, 1)

    def to_dict(self) -> dict:
        return {
            "totalTasks": self.total_tasks,
            "completedTasks": self.completed_tasks,
            "totalDays": self.total_days,
            "completedDays": self.completed_days,
            "percentComplete": self.percent_complete,
        }


@dataclass
class SprintReconciliation:
    """Outcome of making sure an application has exactly one sprint for its interview."""

    created: Optional[Sprint] = None
    updated: Optional[Sprint] = None
    expired: List[Sprint] = field(default_factory=list)

    @property
    def sprint(self) -> Sprint:
        """The sprint that is now current for the application."""
        return self.created or self.updated


def set_task_completion(
    sprint: Sprint,
    day_index: int,
    block_index: int,
    task_index: int,
    completed: bool = True,
) -> Sprint:
    """
    Mark one task done (or not done) and recompute the sprint status.

    Block and day completion follow from the task flags. The sprint becomes
    completed once every day is complete; a completed sprint stays completed.

    Args:
        sprint: Sprint to update
        day_index: Zero-based day index
        block_index: Zero-based block index within the day
        task_index: Zero-based task index within the block
        completed: New completion flag

    Returns:
        Updated copy of the sprint

    Raises:
        InvalidTaskPathError: If the index path does not point at a task
    """
    indices = (day_index, block_index, task_index)
    if any(not isinstance(index, int) or index < 0 for index in indices):
        _log_error(f"Sprint {sprint.id}: rejected task path {indices}")
        raise InvalidTaskPathError("Invalid task path for sprint daily plan", *indices, sprint_id=sprint.id)

    try:
        plan = sprint.daily_plans[day_index]
        block = plan.blocks[block_index]
        block.tasks[task_index]
    except IndexError as e:
        _log_error(f"Sprint {sprint.id}: no task at {indices}")
        raise InvalidTaskPathError(
            "Invalid task path for sprint daily plan", *indices, sprint_id=sprint.id
        ) from e

    updated = copy.deepcopy(sprint)
    updated.daily_plans[day_index].blocks[block_index].tasks[task_index].completed = completed

    all_days_complete = all(day.completed for day in updated.daily_plans)
    if sprint.status == SprintStatus.COMPLETED.value or all_days_complete:
        updated.status = SprintStatus.COMPLETED.value
        if sprint.status != SprintStatus.COMPLETED.value:
            _log_success(f"Sprint {sprint.id} completed")

    _log_debug(
        f"Sprint {sprint.id}: task {indices} -> {'done' if completed else 'open'} (status {updated.status})"
    )
    return updated


def expire_sprints_for_application(sprints: List[Sprint], application_id: str) -> List[Sprint]:
    """
    Expire the active sprints of an application (e.g., after a rejection).

    Returns:
        All sprints, with the affected ones replaced by expired copies
    """
    result = []
    expired_count = 0

    for sprint in sprints:
        if sprint.application_id == application_id and sprint.status == SprintStatus.ACTIVE.value:
            expired = copy.deepcopy(sprint)
            expired.status = SprintStatus.EXPIRED.value
            result.append(expired)
            expired_count += 1
        else:
            result.append(sprint)

    if expired_count:
        _log_info(f"Expired {expired_count} sprint(s) for application {application_id}")
    return result


def ensure_sprint_for_interview(
    sprints: List[Sprint],
    application_id: str,
    interview_date: Union[datetime, date, str],
    role_type: str,
    now: Optional[datetime] = None,
    registry: Optional[SprintTemplateRegistry] = None,
) -> SprintReconciliation:
    """
    Create or refresh the sprint for an application's interview.

    - No sprint for the application: a new one is created.
    - Otherwise the first existing sprint is regenerated for the new date
      (keeping its id) and any other active sprints for the application
      are expired.

    Args:
        sprints: Known sprints (any applications)
        application_id: Application whose interview was scheduled
        interview_date: Interview day
        role_type: Role type for the curriculum
        now: Current time (defaults to the wall clock)
        registry: Curriculum registry (defaults to the configured one)
    """
    existing = [sprint for sprint in sprints if sprint.application_id == application_id]
    fresh = generate_sprint(application_id, interview_date, role_type, now=now, registry=registry)

    if not existing:
        return SprintReconciliation(created=fresh)

    primary, *duplicates = existing
    fresh.id = primary.id

    expired = []
    for duplicate in duplicates:
        if duplicate.status == SprintStatus.ACTIVE.value:
            stale = copy.deepcopy(duplicate)
            stale.status = SprintStatus.EXPIRED.value
            expired.append(stale)

    if expired:
        _log_info(f"Expired {len(expired)} duplicate sprint(s) for application {application_id}")
    return SprintReconciliation(updated=fresh, expired=expired)


def summarize_progress(sprint: Sprint) -> SprintProgress:
    tasks = [task for _, _, _, task in sprint.iter_tasks()]
    return SprintProgress(
        total_tasks=len(tasks),
        completed_tasks=sum(1 for task in tasks if task.completed),
        total_days=len(sprint.daily_plans),
        completed_days=sum(1 for plan in sprint.daily_plans if plan.completed),
    )


__all__ = [
    "SprintProgress",
    "SprintReconciliation",
    "get_daily_plans_array",
    "set_task_completion",
    "expire_sprints_for_application",
    "ensure_sprint_for_interview",
    "summarize_progress",
]
