"""
Interview prep sprint generation.

Lays out one day of preparation per calendar day between today and the
interview, following the role's curriculum table and padding with review days.
"""

import math
import uuid
from datetime import date, datetime
from typing import List, Optional, Union

from prepdesk.contexts.intake.date_parsing import try_parse_date_input
from prepdesk.contexts.prep.exceptions import InvalidInterviewDateError
from prepdesk.contexts.prep.logger import _log_debug, log_sprint_generated
from prepdesk.contexts.prep.registries import (
    DayTemplate,
    SprintTemplateRegistry,
    get_default_registry,
)
from prepdesk.contexts.prep.sprint_data_structure import (
    Block,
    BlockType,
    DailyPlan,
    Sprint,
    SprintStatus,
    Task,
)
from prepdesk.utils.timestamp import add_days, days_between, now as current_time, start_of_day, to_iso


def _new_id() -> str:
    return str(uuid.uuid4())


def resolve_interview_date(
    interview_date: Union[datetime, date, str], now: Optional[datetime] = None
) -> datetime:
    """
    Turn an interview date argument into a start-of-day datetime.

    Strings may be anything try_parse_date_input understands ("2026-11-02",
    "next friday", "in 5 days").

    Raises:
        InvalidInterviewDateError: If the value cannot be read as a day
    """
    if isinstance(interview_date, (datetime, date)):
        return start_of_day(interview_date)

    if isinstance(interview_date, str):
        parsed = try_parse_date_input(interview_date, now)
        if parsed is not None:
            return parsed
        raise InvalidInterviewDateError("Could not understand interview date", interview_date)

    raise InvalidInterviewDateError("Interview date must be a date, datetime or string", interview_date)


def generate_tasks(
    focus: str, topics: List[str], registry: SprintTemplateRegistry
) -> List[Task]:
    category = topics[0] if topics else "General"
    return [
        Task(id=_new_id(), description=description, category=category)
        for description in registry.render_task_descriptions(focus, topics)
    ]


def generate_blocks(
    focus: str, topics: List[str], registry: SprintTemplateRegistry
) -> List[Block]:
    """Split the day's tasks into a morning block (larger half) and an evening block."""
    tasks = generate_tasks(focus, topics, registry)
    midpoint = math.ceil(len(tasks) / 2)

    return [
        Block(
            id=_new_id(),
            type=BlockType.MORNING.value,
            duration=registry.block_duration,
            tasks=tasks[:midpoint],
        ),
        Block(
            id=_new_id(),
            type=BlockType.EVENING.value,
            duration=registry.block_duration,
            tasks=tasks[midpoint:],
        ),
    ]


def generate_daily_plans(
    days_remaining: int,
    role_type: str,
    start_date: datetime,
    registry: SprintTemplateRegistry,
) -> List[DailyPlan]:
    """One plan per day; days past the end of the role table become review filler."""
    templates = registry.get_day_templates(role_type, days_remaining)
    filler = registry.get_filler_day()

    plans = []
    for index in range(days_remaining):
        day_template: DayTemplate = templates[index] if index < len(templates) else filler
        plans.append(
            DailyPlan(
                day=index + 1,
                date=to_iso(add_days(start_date, index)),
                focus=day_template.focus,
                blocks=generate_blocks(day_template.focus, day_template.topics, registry),
            )
        )

    filler_days = max(0, days_remaining - len(templates))
    if filler_days:
        _log_debug(f"Padded sprint with {filler_days} review day(s)")

    return plans


def generate_sprint(
    application_id: str,
    interview_date: Union[datetime, date, str],
    role_type: str,
    now: Optional[datetime] = None,
    registry: Optional[SprintTemplateRegistry] = None,
) -> Sprint:
    """
    Generate a prep sprint running from today up to the interview.

    Args:
        application_id: Application the sprint prepares for
        interview_date: Interview day (datetime, date or date expression)
        role_type: Role type value ("SDE", "SDET", "QA", "Data", "PM")
        now: Current time (defaults to the wall clock)
        registry: Curriculum registry (defaults to the configured one)

    Returns:
        Active Sprint with at least one day

    Raises:
        InvalidInterviewDateError: If interview_date cannot be read

    Example:
        >>> sprint = generate_sprint("app-1", datetime(2026, 10, 29), "SDE", now=datetime(2026, 10, 19, 9))
        >>> sprint.total_days, sprint.daily_plans[0].focus
        (10, 'DSA')
    """
    current = now or current_time()
    registry = registry or get_default_registry()
    role = role_type.value if hasattr(role_type, "value") else str(role_type)

    today = start_of_day(current)
    interview_day = resolve_interview_date(interview_date, current)
    days_remaining = max(1, days_between(interview_day, today))

    sprint = Sprint(
        id=_new_id(),
        application_id=application_id,
        interview_date=to_iso(interview_day),
        role_type=role,
        total_days=days_remaining,
        daily_plans=generate_daily_plans(days_remaining, role, today, registry),
        status=SprintStatus.ACTIVE.value,
        created_at=to_iso(current),
    )

    log_sprint_generated(sprint)
    return sprint
