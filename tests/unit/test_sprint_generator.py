"""Unit tests for interview prep sprint generation."""

import json
from datetime import date, datetime

import pytest

from prepdesk.contexts.prep.exceptions import InvalidInterviewDateError, InvalidSprintStructureError
from prepdesk.contexts.prep.sprint_data_structure import RoleType, Sprint
from prepdesk.contexts.prep.sprint_generator import generate_sprint

NOW = datetime(2026, 10, 19, 9, 30)


@pytest.mark.unit
def test_ten_day_sde_sprint_pads_with_review():
    sprint = generate_sprint("app-1", datetime(2026, 10, 29), "SDE", now=NOW)

    assert sprint.total_days == 10
    assert len(sprint.daily_plans) == 10
    assert [plan.day for plan in sprint.daily_plans] == list(range(1, 11))
    assert [plan.focus for plan in sprint.daily_plans] == [
        "DSA",
        "DSA",
        "DSA",
        "SystemDesign",
        "SystemDesign",
        "SystemDesign",
        "Review",
        "Review",
        "Review",
        "Review",
    ]

    first_tasks = [task for block in sprint.daily_plans[0].blocks for task in block.tasks]
    assert first_tasks[0].description == "Solve 2 problems on Arrays"
    assert first_tasks[1].description == "Review pattern: Arrays, Strings"
    assert {task.category for task in first_tasks} == {"Arrays"}

    filler_tasks = [task for block in sprint.daily_plans[9].blocks for task in block.tasks]
    assert {task.category for task in filler_tasks} == {"General Review"}
    assert filler_tasks[0].description == "Review weak topics"


@pytest.mark.unit
def test_interview_today_gives_single_review_day():
    sprint = generate_sprint("app-1", datetime(2026, 10, 19, 17, 0), "SDE", now=NOW)

    assert sprint.total_days == 1
    assert sprint.daily_plans[0].focus == "Review"
    assert sprint.daily_plans[0].blocks[0].tasks[0].category == "Company Questions"


@pytest.mark.unit
def test_past_interview_is_clamped_to_one_day():
    sprint = generate_sprint("app-1", date(2026, 10, 1), "SDE", now=NOW)

    assert sprint.total_days == 1


@pytest.mark.unit
def test_condensed_sde_tier():
    sprint = generate_sprint("app-1", date(2026, 10, 24), "SDE", now=NOW)

    assert [plan.focus for plan in sprint.daily_plans] == [
        "DSA",
        "SystemDesign",
        "Review",
        "Review",
        "Review",
    ]
    assert sprint.daily_plans[0].blocks[0].tasks[0].category == "Core Patterns"


@pytest.mark.unit
def test_qa_uses_sdet_curriculum():
    sprint = generate_sprint("app-1", date(2026, 10, 26), RoleType.QA, now=NOW)

    assert sprint.role_type == "QA"
    assert sprint.total_days == 7
    assert sprint.daily_plans[0].blocks[0].tasks[0].category == "Test Case Design"
    assert sprint.daily_plans[5].focus == "Behavioral"


@pytest.mark.unit
def test_unknown_role_uses_general_preparation():
    sprint = generate_sprint("app-1", date(2026, 10, 22), "Designer", now=NOW)

    assert sprint.total_days == 3
    assert sprint.daily_plans[0].blocks[0].tasks[0].category == "General Preparation"
    assert sprint.daily_plans[1].blocks[0].tasks[0].category == "General Review"


@pytest.mark.unit
@pytest.mark.parametrize("role", ["SDE", "SDET", "QA", "Data", "PM"])
def test_every_day_has_morning_and_evening_blocks(role):
    sprint = generate_sprint("app-1", date(2026, 10, 30), role, now=NOW)

    for plan in sprint.daily_plans:
        assert [block.type for block in plan.blocks] == ["morning", "evening"]
        assert [len(block.tasks) for block in plan.blocks] == [2, 2]
        assert {block.duration for block in plan.blocks} == {"60-90 min"}
        assert not plan.completed


@pytest.mark.unit
def test_dates_and_timestamps():
    sprint = generate_sprint("app-1", datetime(2026, 10, 29, 14, 0), "Data", now=NOW)

    assert sprint.interview_date == "2026-10-29T00:00:00"
    assert sprint.created_at == "2026-10-19T09:30:00"
    assert sprint.status == "active"
    assert sprint.daily_plans[0].date == "2026-10-19T00:00:00"
    assert sprint.daily_plans[-1].date == "2026-10-28T00:00:00"


@pytest.mark.unit
def test_ids_are_unique():
    sprint = generate_sprint("app-1", date(2026, 10, 26), "PM", now=NOW)

    ids = [sprint.id]
    for plan in sprint.daily_plans:
        for block in plan.blocks:
            ids.append(block.id)
            ids.extend(task.id for task in block.tasks)

    assert len(ids) == len(set(ids))


@pytest.mark.unit
def test_interview_date_expression():
    sprint = generate_sprint("app-1", "in 3 days", "SDE", now=NOW)

    assert sprint.total_days == 3


@pytest.mark.unit
@pytest.mark.parametrize("bad_date", ["sometime", 12345, None])
def test_unusable_interview_date_raises(bad_date):
    with pytest.raises(InvalidInterviewDateError):
        generate_sprint("app-1", bad_date, "SDE", now=NOW)


# =============================================================================
# PERSISTED SHAPE
# =============================================================================


@pytest.mark.unit
def test_sprint_dict_round_trip():
    sprint = generate_sprint("app-1", date(2026, 10, 22), "SDE", now=NOW)
    data = sprint.to_dict()

    assert data["applicationId"] == "app-1"
    assert data["totalDays"] == 3
    assert data["dailyPlans"][0]["completed"] is False
    assert data["dailyPlans"][0]["blocks"][0]["completed"] is False
    assert Sprint.from_dict(data) == sprint


@pytest.mark.unit
def test_sprint_from_dict_accepts_json_string_plans():
    sprint = generate_sprint("app-1", date(2026, 10, 21), "SDE", now=NOW)
    data = sprint.to_dict()
    data["dailyPlans"] = json.dumps([plan.to_dict() for plan in sprint.daily_plans])

    assert Sprint.from_dict(data).daily_plans == sprint.daily_plans


@pytest.mark.unit
def test_malformed_sprint_raises():
    with pytest.raises(InvalidSprintStructureError):
        Sprint.from_dict({"id": "x"})

    with pytest.raises(InvalidSprintStructureError):
        Sprint.from_dict(
            {
                "id": "x",
                "applicationId": "app-1",
                "interviewDate": "2026-10-22T00:00:00",
                "roleType": "SDE",
                "dailyPlans": "not json",
            }
        )

    with pytest.raises(InvalidSprintStructureError):
        Sprint.from_json("{broken")


@pytest.mark.unit
@pytest.mark.parametrize(
    "plans,total_days",
    [
        ([], None),
        ([], "abc"),
        ("[]", 0),
    ],
)
def test_sprint_without_days_or_bad_total_raises(plans, total_days):
    data = {
        "id": "x",
        "applicationId": "app-1",
        "interviewDate": "2026-10-22T00:00:00",
        "roleType": "SDE",
        "dailyPlans": plans,
    }
    if total_days is not None:
        data["totalDays"] = total_days

    with pytest.raises(InvalidSprintStructureError):
        Sprint.from_dict(data)


@pytest.mark.unit
def test_total_days_must_match_plans():
    data = generate_sprint("app-1", date(2026, 10, 21), "SDE", now=NOW).to_dict()
    data["totalDays"] = "abc"

    with pytest.raises(InvalidSprintStructureError):
        Sprint.from_dict(data)

    data["totalDays"] = 5
    with pytest.raises(InvalidSprintStructureError, match="totalDays=5"):
        Sprint.from_dict(data)
