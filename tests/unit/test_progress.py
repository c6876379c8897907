"""Unit tests for sprint progress and lifecycle operations."""

from datetime import date, datetime

import pytest
from loguru import logger

from prepdesk.contexts.prep.exceptions import InvalidTaskPathError
from prepdesk.contexts.prep.progress import (
    ensure_sprint_for_interview,
    expire_sprints_for_application,
    get_daily_plans_array,
    set_task_completion,
    summarize_progress,
)
from prepdesk.contexts.prep.sprint_generator import generate_sprint

NOW = datetime(2026, 10, 19, 9, 30)


@pytest.fixture
def two_day_sprint():
    return generate_sprint("app-1", date(2026, 10, 21), "SDE", now=NOW)


@pytest.mark.unit
def test_completing_every_task_completes_sprint(two_day_sprint):
    sprint = two_day_sprint
    for day_index, block_index, task_index, _ in list(sprint.iter_tasks()):
        assert sprint.status == "active"
        sprint = set_task_completion(sprint, day_index, block_index, task_index, True)

    assert sprint.status == "completed"
    assert all(plan.completed for plan in sprint.daily_plans)


@pytest.mark.unit
def test_set_task_completion_returns_copy(two_day_sprint):
    updated = set_task_completion(two_day_sprint, 0, 0, 1, True)

    assert updated.daily_plans[0].blocks[0].tasks[1].completed
    assert not two_day_sprint.daily_plans[0].blocks[0].tasks[1].completed


@pytest.mark.unit
def test_block_and_day_completion_are_derived(two_day_sprint):
    sprint = set_task_completion(two_day_sprint, 0, 0, 0, True)
    assert not sprint.daily_plans[0].blocks[0].completed

    sprint = set_task_completion(sprint, 0, 0, 1, True)
    assert sprint.daily_plans[0].blocks[0].completed
    assert not sprint.daily_plans[0].completed
    assert sprint.status == "active"


@pytest.mark.unit
def test_completed_sprint_stays_completed_after_undo(two_day_sprint):
    sprint = two_day_sprint
    for day_index, block_index, task_index, _ in list(sprint.iter_tasks()):
        sprint = set_task_completion(sprint, day_index, block_index, task_index, True)

    reopened = set_task_completion(sprint, 0, 0, 0, False)

    assert not reopened.daily_plans[0].completed
    assert reopened.status == "completed"


@pytest.mark.unit
@pytest.mark.parametrize("path", [(5, 0, 0), (0, 2, 0), (0, 0, 9), (-1, 0, 0)])
def test_invalid_task_path_raises(two_day_sprint, path):
    with pytest.raises(InvalidTaskPathError) as excinfo:
        set_task_completion(two_day_sprint, *path, True)

    assert isinstance(excinfo.value, IndexError)
    assert excinfo.value.day_index == path[0]


@pytest.fixture
def log_messages():
    messages = []
    handler_id = logger.add(lambda message: messages.append(message.record), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.mark.unit
def test_completion_and_bad_paths_are_logged(two_day_sprint, log_messages):
    with pytest.raises(InvalidTaskPathError):
        set_task_completion(two_day_sprint, 9, 0, 0, True)

    sprint = two_day_sprint
    for day_index, block_index, task_index, _ in list(sprint.iter_tasks()):
        sprint = set_task_completion(sprint, day_index, block_index, task_index, True)

    levels = {record["level"].name: record["message"] for record in log_messages}
    assert levels["ERROR"] == f"[prep] Sprint {sprint.id}: no task at (9, 0, 0)"
    assert levels["SUCCESS"] == f"[prep] Sprint {sprint.id} completed"


@pytest.mark.unit
def test_expire_sprints_for_application():
    first = generate_sprint("app-1", date(2026, 10, 21), "SDE", now=NOW)
    second = generate_sprint("app-1", date(2026, 10, 23), "SDE", now=NOW)
    other = generate_sprint("app-2", date(2026, 10, 21), "PM", now=NOW)

    result = expire_sprints_for_application([first, second, other], "app-1")

    assert [sprint.status for sprint in result] == ["expired", "expired", "active"]
    assert first.status == "active"


@pytest.mark.unit
def test_ensure_sprint_creates_when_missing():
    outcome = ensure_sprint_for_interview([], "app-1", date(2026, 10, 26), "SDE", now=NOW)

    assert outcome.created is not None
    assert outcome.updated is None
    assert outcome.sprint.total_days == 7


@pytest.mark.unit
def test_ensure_sprint_updates_first_and_expires_duplicates():
    first = generate_sprint("app-1", date(2026, 10, 21), "SDE", now=NOW)
    duplicate = generate_sprint("app-1", date(2026, 10, 22), "SDE", now=NOW)
    other = generate_sprint("app-2", date(2026, 10, 21), "SDE", now=NOW)

    outcome = ensure_sprint_for_interview(
        [first, duplicate, other], "app-1", date(2026, 10, 29), "SDE", now=NOW
    )

    assert outcome.created is None
    assert outcome.updated.id == first.id
    assert outcome.updated.total_days == 10
    assert [sprint.id for sprint in outcome.expired] == [duplicate.id]
    assert outcome.expired[0].status == "expired"


@pytest.mark.unit
def test_summarize_progress(two_day_sprint):
    sprint = set_task_completion(two_day_sprint, 0, 0, 0, True)
    progress = summarize_progress(sprint)

    assert progress.total_tasks == 8
    assert progress.completed_tasks == 1
    assert progress.completed_days == 0
    assert progress.total_days == 2
    assert progress.percent_complete == 12.5
    assert progress.to_dict()["percentComplete"] == 12.5


@pytest.mark.unit
def test_get_daily_plans_array():
    assert get_daily_plans_array([{"day": 1}]) == [{"day": 1}]
    assert get_daily_plans_array('[{"day": 1}]') == [{"day": 1}]
    assert get_daily_plans_array('{"day": 1}') == []
    assert get_daily_plans_array("oops") == []
    assert get_daily_plans_array(None) == []
    assert get_daily_plans_array(5) == []
