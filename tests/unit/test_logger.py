"""Unit tests for session log setup and the context log wrappers."""

from datetime import datetime

import pytest
from loguru import logger

from prepdesk.contexts.intake.application_intake import IntakeApplication
from prepdesk.contexts.intake.logger import log_batch_result, setup_intake_logger
from prepdesk.contexts.prep.logger import _log_info, setup_prep_logger
from prepdesk.utils.logger import LOGS_PATH, session_log_dir


@pytest.mark.unit
def test_session_log_dir():
    log_dir = session_log_dir("sprint", started=datetime(2026, 10, 19, 10, 15, 0))

    assert log_dir == LOGS_PATH / "sprint_20261019_101500"


@pytest.mark.unit
def test_prep_session_log_has_provenance_and_prefix(tmp_path):
    log_file = setup_prep_logger(tmp_path / "session", action="complete")
    _log_info("Loaded sprint")
    logger.remove()

    text = log_file.read_text()
    assert log_file.name == "prep.log"
    assert "Context: prep" in text
    assert "Action: complete" in text
    assert "[prep] Loaded sprint" in text


@pytest.mark.unit
def test_intake_batch_log_truncates_long_notes(tmp_path):
    log_file = setup_intake_logger(tmp_path, source="payload.json")
    notes = "recruiter call " * 10
    log_batch_result(3, [IntakeApplication(company="Stripe", notes=notes)], dropped=2)
    logger.remove()

    text = log_file.read_text()
    assert "Source: payload.json" in text
    assert "[intake] Normalized 3 raw entries into 1 applications" in text
    assert "[intake] Dropped 2 entries with no resolvable company" in text
    assert notes not in text
    assert "recruiter call recruiter call" in text
