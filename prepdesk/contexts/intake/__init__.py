"""
Intake Context

Responsibilities:
- Turns chat-style application intake into clean application records
- Canonicalizes role text and resolves relative/loose dates
- Normalizes status-update and interview-round tool payloads

Owns: Free-text extraction rules for company, role, notes and dates
Never: Persists records or schedules prep sprints
"""

from prepdesk.contexts.intake.application_intake import (
    IntakeApplication,
    normalize_applications_for_creation,
    normalize_status,
    sanitize_company_name,
)
from prepdesk.contexts.intake.date_parsing import (
    parse_date_input,
    parse_loose_date_expression,
    try_parse_date_input,
)
from prepdesk.contexts.intake.roles import normalize_role_text
from prepdesk.contexts.intake.tool_inputs import (
    RoundUpdate,
    StatusUpdate,
    normalize_round_updates_input,
    normalize_status_updates_input,
)

__all__ = [
    # Application intake
    "IntakeApplication",
    "normalize_applications_for_creation",
    "normalize_status",
    "sanitize_company_name",
    "normalize_role_text",
    # Dates
    "try_parse_date_input",
    "parse_date_input",
    "parse_loose_date_expression",
    # Tool payloads
    "StatusUpdate",
    "RoundUpdate",
    "normalize_status_updates_input",
    "normalize_round_updates_input",
]
