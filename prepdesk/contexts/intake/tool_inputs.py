"""
Normalizers for chat tool payloads that update existing applications.

Language models call the status-update and interview-round tools with many
payload shapes: a bare list, {"updates": [...]}, {"data": {"updates": [...]}},
a single update object, or (for status) a "Company: status" string. Field
names drift as well ("companyName", "appId", "scheduled_on", ...). These
helpers accept all of them and return uniform update records.
"""

import math
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional

from prepdesk.contexts.intake.application_intake import normalize_status, sanitize_company_name
from prepdesk.contexts.intake.logger import _log_debug

INTERVIEW_ROUND_TYPES = (
    "TechnicalRound1",
    "TechnicalRound2",
    "SystemDesign",
    "Managerial",
    "Assignment",
    "Final",
    "HR",
)

# Field aliases, checked in order
APPLICATION_ID_KEYS = ["applicationId", "application_id", "appId", "appID", "id"]
COMPANY_KEYS = ["company", "companyName", "name", "employer"]
STATUS_KEYS = ["newStatus", "status", "state"]
ROLE_KEYS = ["role", "position", "jobRole", "title"]
ROUND_TYPE_KEYS = ["roundType", "type", "round", "interviewRound"]
ROUND_NUMBER_KEYS = ["roundNumber", "roundNo", "round", "round_num"]
SCHEDULED_DATE_KEYS = [
    "scheduledDate",
    "date",
    "interviewDate",
    "interview_date",
    "scheduled_on",
    "scheduledOn",
]
NOTES_KEYS = ["notes", "note", "comment", "remarks"]

DEFAULT_STATUS = "applied"


@dataclass
class StatusUpdate:
    """A requested status change, addressed by application id and/or company."""

    new_status: str
    application_id: Optional[str] = None
    company: Optional[str] = None

    def to_dict(self) -> dict[str, str]:
        data = {
            "applicationId": self.application_id,
            "company": self.company,
            "newStatus": self.new_status,
        }
        return {key: value for key, value in data.items() if value}


@dataclass
class RoundUpdate:
    """A scheduled interview round. scheduled_date is kept as the caller wrote it."""

    scheduled_date: str
    application_id: Optional[str] = None
    company: Optional[str] = None
    role: Optional[str] = None
    round_type: Optional[str] = None
    round_number: Optional[int] = None
    notes: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data = {
            "applicationId": self.application_id,
            "company": self.company,
            "role": self.role,
            "roundType": self.round_type,
            "roundNumber": self.round_number,
            "scheduledDate": self.scheduled_date,
            "notes": self.notes,
        }
        return {key: value for key, value in data.items() if value}


# =============================================================================
# FIELD HELPERS
# =============================================================================


def get_string_field(obj: dict, keys: list[str]) -> Optional[str]:
    """
    Return the first non-blank string (or finite number, as text) among keys.

    Example:
        >>> get_string_field({"id": "", "appId": " abc "}, ["id", "appId"])
        'abc'
    """
    for key in keys:
        value = obj.get(key)
        if isinstance(value, bool):
            continue
        if isinstance(value, str) and value.strip():
            return value.strip()
        if isinstance(value, (int, float)) and math.isfinite(value):
            return str(value)
    return None


def normalize_round_type(raw: Optional[str]) -> Optional[str]:
    """Map loose round labels ("tech 2", "system design", "hr") onto a round type."""
    if not isinstance(raw, str):
        return None
    normalized = raw.strip()
    if not normalized:
        return None

    if normalized in INTERVIEW_ROUND_TYPES:
        return normalized

    compact = re.sub(r"[\s_-]+", "", normalized.lower())

    if any(token in compact for token in ("tech1", "technical1", "round1")):
        return "TechnicalRound1"
    if any(token in compact for token in ("tech2", "technical2", "round2")):
        return "TechnicalRound2"
    if "systemdesign" in compact or "sysdesign" in compact:
        return "SystemDesign"
    if "manager" in compact:
        return "Managerial"
    if "assignment" in compact:
        return "Assignment"
    if "final" in compact:
        return "Final"
    if compact == "hr" or "humanresources" in compact:
        return "HR"

    return None


def normalize_round_number(raw: Any) -> Optional[int]:
    """First positive integer in the value ("2nd round" -> 2)."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        if not math.isfinite(raw) or raw <= 0:
            return None
        return int(raw)

    if not isinstance(raw, str):
        return None
    match = re.search(r"(\d+)", raw)
    if not match:
        return None
    parsed = int(match.group(1))
    return parsed if parsed > 0 else None


def infer_round_type_from_number(round_number: Optional[int]) -> Optional[str]:
    if not round_number:
        return None
    if round_number <= 1:
        return "TechnicalRound1"
    if round_number == 2:
        return "TechnicalRound2"
    if round_number == 3:
        return "SystemDesign"
    if round_number == 4:
        return "Managerial"
    return "Final"


def normalize_date_field(raw: Any) -> Optional[str]:
    """Strings are kept verbatim (trimmed); dates and datetimes become ISO strings."""
    if isinstance(raw, str) and raw.strip():
        return raw.strip()
    if isinstance(raw, (date, datetime)):
        return raw.isoformat()
    return None


def _first_present(obj: dict, keys: list[str]) -> Any:
    for key in keys:
        if obj.get(key) is not None:
            return obj[key]
    return None


def _unwrap_updates(payload: Any, accept_strings: bool) -> list:
    if isinstance(payload, list):
        return list(payload)
    if isinstance(payload, str):
        return [payload] if accept_strings else []
    if not isinstance(payload, dict):
        return []

    if isinstance(payload.get("updates"), list):
        return list(payload["updates"])
    if isinstance(payload.get("update"), list):
        return list(payload["update"])
    data = payload.get("data")
    if isinstance(data, dict) and isinstance(data.get("updates"), list):
        return list(data["updates"])
    return [payload]


# =============================================================================
# STATUS UPDATES
# =============================================================================


def normalize_status_update(raw: Any) -> Optional[StatusUpdate]:
    if isinstance(raw, str):
        parts = re.split(r"[:|]", raw)
        if len(parts) < 2:
            return None
        company = sanitize_company_name(parts[0])
        if not company:
            return None
        return StatusUpdate(new_status=normalize_status(parts[1]) or DEFAULT_STATUS, company=company)

    if not isinstance(raw, dict):
        return None

    application_id = get_string_field(raw, APPLICATION_ID_KEYS)
    company_raw = get_string_field(raw, COMPANY_KEYS)
    company = sanitize_company_name(company_raw) if company_raw else None
    new_status = normalize_status(get_string_field(raw, STATUS_KEYS)) or DEFAULT_STATUS

    if not application_id and not company:
        return None
    return StatusUpdate(new_status=new_status, application_id=application_id, company=company or None)


def normalize_status_updates_input(payload: Any) -> list[StatusUpdate]:
    """
    Normalize a status-update tool payload into StatusUpdate records.

    Entries addressing neither an application id nor a company are dropped.
    A missing or unrecognized status defaults to "applied".

    Example:
        >>> normalize_status_updates_input({"companyName": "MistralAI", "status": "Interview"})
        [StatusUpdate(new_status='interview', application_id=None, company='MistralAI')]
    """
    raw_updates = _unwrap_updates(payload, accept_strings=True)
    updates = [update for update in map(normalize_status_update, raw_updates) if update]
    _log_debug(f"Status payload: {len(raw_updates)} raw -> {len(updates)} updates")
    return updates


# =============================================================================
# ROUND UPDATES
# =============================================================================


def normalize_round_update(raw: Any) -> Optional[RoundUpdate]:
    if not isinstance(raw, dict):
        return None

    scheduled_date = normalize_date_field(_first_present(raw, SCHEDULED_DATE_KEYS))
    if not scheduled_date:
        return None

    company_raw = get_string_field(raw, COMPANY_KEYS)
    round_number = normalize_round_number(
        get_string_field(raw, ROUND_NUMBER_KEYS) or raw.get("roundNumber")
    )
    round_type = normalize_round_type(
        get_string_field(raw, ROUND_TYPE_KEYS)
    ) or infer_round_type_from_number(round_number)

    return RoundUpdate(
        scheduled_date=scheduled_date,
        application_id=get_string_field(raw, APPLICATION_ID_KEYS),
        company=(sanitize_company_name(company_raw) or None) if company_raw else None,
        role=get_string_field(raw, ROLE_KEYS),
        round_type=round_type,
        round_number=round_number,
        notes=get_string_field(raw, NOTES_KEYS),
    )


def normalize_round_updates_input(payload: Any) -> list[RoundUpdate]:
    """
    Normalize an interview-round tool payload into RoundUpdate records.

    Entries without a scheduled date are dropped. When no round type can be
    read, it is inferred from the round number.

    Args:
        payload: List of updates, envelope dict, or a single update dict

    Returns:
        RoundUpdate records in input order
    """
    raw_updates = _unwrap_updates(payload, accept_strings=False)
    updates = [update for update in map(normalize_round_update, raw_updates) if update]
    _log_debug(f"Round payload: {len(raw_updates)} raw -> {len(updates)} updates")
    return updates


def updates_to_dicts(updates: list) -> list[dict]:
    """Wire form of a list of StatusUpdate/RoundUpdate records."""
    return [update.to_dict() for update in updates]


__all__ = [
    "INTERVIEW_ROUND_TYPES",
    "StatusUpdate",
    "RoundUpdate",
    "normalize_status_updates_input",
    "normalize_round_updates_input",
    "updates_to_dicts",
]
