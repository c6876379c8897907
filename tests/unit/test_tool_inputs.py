"""Unit tests for status-update and interview-round tool payload normalizers."""

from datetime import date

import pytest

from prepdesk.contexts.intake.tool_inputs import (
    RoundUpdate,
    StatusUpdate,
    normalize_round_type,
    normalize_round_updates_input,
    normalize_status_updates_input,
    updates_to_dicts,
)

APP_ID = "fd4338ab-688b-4351-a83e-c8d608683c64"


# =============================================================================
# STATUS UPDATES
# =============================================================================


@pytest.mark.unit
def test_status_update_alternate_keys():
    updates = normalize_status_updates_input({"companyName": "MistralAI", "status": "Interview"})

    assert updates == [StatusUpdate(new_status="interview", company="MistralAI")]


@pytest.mark.unit
def test_status_update_application_id_alias():
    updates = normalize_status_updates_input(
        {"updates": [{"application_id": APP_ID, "state": "shortlisted"}]}
    )

    assert len(updates) == 1
    assert updates[0].application_id == APP_ID
    assert updates[0].new_status == "shortlisted"
    assert updates[0].company is None


@pytest.mark.unit
def test_status_update_strings():
    updates = normalize_status_updates_input(["Stripe: offer", "Notion | got rejected", "no separator"])

    assert [update.to_dict() for update in updates] == [
        {"company": "Stripe", "newStatus": "offer"},
        {"company": "Notion", "newStatus": "rejected"},
    ]


@pytest.mark.unit
def test_status_update_defaults_to_applied():
    updates = normalize_status_updates_input({"data": {"updates": [{"company": "Figma"}]}})

    assert updates == [StatusUpdate(new_status="applied", company="Figma")]


@pytest.mark.unit
def test_status_update_without_target_is_dropped():
    assert normalize_status_updates_input([{"status": "offer"}, 42, None]) == []
    assert normalize_status_updates_input(None) == []


# =============================================================================
# ROUND UPDATES
# =============================================================================


@pytest.mark.unit
def test_round_update_alternate_keys():
    updates = normalize_round_updates_input(
        {"companyName": "MistralAI", "round": "2nd round", "date": "28th feb 2026"}
    )

    assert len(updates) == 1
    assert updates[0].company == "MistralAI"
    assert updates[0].round_number == 2
    assert updates[0].round_type == "TechnicalRound2"
    assert updates[0].scheduled_date == "28th feb 2026"


@pytest.mark.unit
def test_round_update_application_id_and_scheduled_on():
    updates = normalize_round_updates_input(
        {"updates": [{"appId": APP_ID, "roundNumber": "1", "scheduled_on": "2026-02-25"}]}
    )

    assert updates == [
        RoundUpdate(
            scheduled_date="2026-02-25",
            application_id=APP_ID,
            round_type="TechnicalRound1",
            round_number=1,
        )
    ]


@pytest.mark.unit
def test_round_update_date_object_and_wire_form():
    updates = normalize_round_updates_input(
        {"data": {"updates": [{"company": "Stripe", "type": "HR", "date": date(2026, 11, 2)}]}}
    )

    assert updates[0].to_dict() == {
        "company": "Stripe",
        "roundType": "HR",
        "scheduledDate": "2026-11-02",
    }


@pytest.mark.unit
def test_updates_to_dicts():
    updates = normalize_status_updates_input(["Stripe: rejected", {"appId": APP_ID, "status": "offer"}])

    assert updates_to_dicts(updates) == [
        {"company": "Stripe", "newStatus": "rejected"},
        {"applicationId": APP_ID, "newStatus": "offer"},
    ]
    assert updates_to_dicts([]) == []


@pytest.mark.unit
def test_round_update_numeric_round_infers_type():
    updates = normalize_round_updates_input([{"company": "Stripe", "roundNumber": 5, "date": "friday"}])

    assert updates[0].round_number == 5
    assert updates[0].round_type == "Final"


@pytest.mark.unit
def test_round_update_without_date_is_dropped():
    assert normalize_round_updates_input({"company": "Stripe", "roundType": "system design"}) == []
    assert normalize_round_updates_input("Stripe round 2 tomorrow") == []


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw,expected",
    [
        ("TechnicalRound1", "TechnicalRound1"),
        ("Tech 1", "TechnicalRound1"),
        ("Round 2", "TechnicalRound2"),
        ("system design", "SystemDesign"),
        ("Hiring Manager", "Managerial"),
        ("take-home assignment", "Assignment"),
        ("Final round", "Final"),
        ("hr", "HR"),
        ("coffee chat", None),
        (None, None),
    ],
)
def test_normalize_round_type(raw, expected):
    assert normalize_round_type(raw) == expected
