"""
Prep Context

Responsibilities:
- Generates day-by-day interview preparation sprints from role type and interview date
- Loads the sprint curriculum (day tables, task templates) from YAML
- Applies task completion and sprint lifecycle changes
- Tags interview questions by category

Owns: Sprint structure, curriculum tables, progress rules
Never: Parses chat intake or persists sprints
"""

from prepdesk.contexts.prep.category_tagger import QuestionCategory, auto_tag_category
from prepdesk.contexts.prep.exceptions import (
    InvalidInterviewDateError,
    InvalidSprintStructureError,
    InvalidTaskPathError,
)
from prepdesk.contexts.prep.progress import (
    SprintProgress,
    SprintReconciliation,
    ensure_sprint_for_interview,
    expire_sprints_for_application,
    set_task_completion,
    summarize_progress,
)
from prepdesk.contexts.prep.registries import DayTemplate, SprintTemplateRegistry
from prepdesk.contexts.prep.sprint_data_structure import (
    Block,
    BlockType,
    DailyPlan,
    FocusArea,
    RoleType,
    Sprint,
    SprintStatus,
    Task,
    get_daily_plans_array,
)
from prepdesk.contexts.prep.sprint_generator import generate_sprint

__all__ = [
    # Generation
    "generate_sprint",
    "SprintTemplateRegistry",
    "DayTemplate",
    # Data structure classes
    "Sprint",
    "DailyPlan",
    "Block",
    "Task",
    "RoleType",
    "FocusArea",
    "BlockType",
    "SprintStatus",
    "get_daily_plans_array",
    # Progress and lifecycle
    "set_task_completion",
    "expire_sprints_for_application",
    "ensure_sprint_for_interview",
    "summarize_progress",
    "SprintProgress",
    "SprintReconciliation",
    # Question tagging
    "auto_tag_category",
    "QuestionCategory",
    # Exceptions
    "InvalidTaskPathError",
    "InvalidInterviewDateError",
    "InvalidSprintStructureError",
]
