"""Custom exceptions for the prep context with sprint references."""

from typing import Any, Optional


class InvalidTaskPathError(IndexError):
    """
    Exception raised when a (day, block, task) index path does not exist in a sprint.

    Attributes:
        message: Error description
        day_index: Zero-based day index requested
        block_index: Zero-based block index requested
        task_index: Zero-based task index requested
        sprint_id: Sprint the path was resolved against
    """

    def __init__(
        self,
        message: str,
        day_index: Optional[int] = None,
        block_index: Optional[int] = None,
        task_index: Optional[int] = None,
        sprint_id: Optional[str] = None,
    ):
        self.message = message
        self.day_index = day_index
        self.block_index = block_index
        self.task_index = task_index
        self.sprint_id = sprint_id

        parts = [message]

        if sprint_id:
            parts.append(f"Sprint: {sprint_id}")
        parts.append(f"Path: day={day_index}, block={block_index}, task={task_index}")

        super().__init__("\n".join(parts))


class InvalidInterviewDateError(ValueError):
    """
    Exception raised when an interview date cannot be turned into a calendar day.

    Attributes:
        message: Error description
        value: The value that could not be interpreted
    """

    def __init__(self, message: str, value: Any = None):
        self.message = message
        self.value = value

        parts = [message]
        if value is not None:
            parts.append(f"Got: {value!r}")

        super().__init__("\n".join(parts))


class InvalidSprintStructureError(ValueError):
    """
    Exception raised when persisted sprint data is missing required fields.

    This is raised when a sprint payload doesn't conform to the expected
    shape (e.g., missing 'dailyPlans', blocks that are not lists, etc.).
    """

    pass
