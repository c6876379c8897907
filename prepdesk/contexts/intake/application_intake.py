"""
Application intake normalization for the Intake context.

Chat tools hand over application payloads that are only loosely structured:
a whole sentence in the company field ("Applied for zee5 - sdet role - hr said
12 lpa budget"), several companies in one string, roles hidden in notes, and so on.
This module turns such payloads into clean IntakeApplication records.

Design principle: every step is a pure, best-effort extraction. A field that
cannot be resolved is omitted; normalization itself never raises.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Iterable, Optional, Union

from prepdesk.contexts.intake.date_parsing import parse_loose_date_expression
from prepdesk.contexts.intake.logger import _log_debug, log_batch_result
from prepdesk.contexts.intake.patterns import (
    APPLICATION_STATUSES,
    INTAKE_PHRASE_PATTERNS,
    ROLE_FROM_TEXT_PATTERNS,
    ROLE_SUFFIX_PATTERNS,
    STANDALONE_ROLE_PATTERNS,
    CompanyPatterns,
    DatePatterns,
    NotesPatterns,
    SentencePatterns,
)
from prepdesk.contexts.intake.roles import (
    is_generic_role,
    looks_like_role_text,
    normalize_role_text,
    roles_equivalent,
    unique_roles,
)
from prepdesk.utils.text_processing import merge_text, normalize_unicode, normalize_whitespace
from prepdesk.utils.timestamp import to_iso

# Maximum words in one segment of a comma-separated company list
MAX_COMPANY_SEGMENT_WORDS = 5


@dataclass
class IntakeApplication:
    """
    One application record as produced by chat intake.

    Factory methods:
        from_value(raw) - Coerce a string, dict or IntakeApplication
    """

    company: str
    role: Optional[str] = None
    status: Optional[str] = None
    notes: Optional[str] = None
    application_date: Optional[str] = None

    @classmethod
    def from_value(cls, raw: Any) -> "IntakeApplication":
        """
        Coerce a raw intake entry.

        Strings become company-only records. Dicts may use camelCase
        (applicationDate) or snake_case (application_date) keys.
        """
        if isinstance(raw, IntakeApplication):
            return replace(raw)
        if isinstance(raw, str):
            return cls(company=raw)
        if isinstance(raw, dict):
            return cls(
                company=_as_text(raw.get("company")) or "",
                role=_as_text(raw.get("role")),
                status=_as_text(raw.get("status")),
                notes=_as_text(raw.get("notes")),
                application_date=_as_text(
                    raw.get("applicationDate", raw.get("application_date"))
                ),
            )
        return cls(company=_as_text(raw) or "")

    def to_dict(self) -> dict[str, str]:
        """Wire form with camelCase keys; unset fields are omitted."""
        data = {
            "company": self.company,
            "role": self.role,
            "status": self.status,
            "notes": self.notes,
            "applicationDate": self.application_date,
        }
        return {key: value for key, value in data.items() if value}


@dataclass
class ExtractedFields:
    """Partial fields recovered by one extraction strategy."""

    company: Optional[str] = None
    role: Optional[str] = None
    notes: Optional[str] = None


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


# =============================================================================
# FIELD CLEANUP
# =============================================================================


def normalize_status(raw: Any) -> Optional[str]:
    """
    Map free-typed status text onto an application status.

    Example:
        >>> normalize_status("Interview")
        'interview'
        >>> normalize_status("got rejected")
        'rejected'
    """
    if not isinstance(raw, str):
        return None
    normalized = raw.strip().lower()
    if not normalized:
        return None

    if normalized in APPLICATION_STATUSES:
        return normalized

    if "reject" in normalized:
        return "rejected"
    if "short" in normalized:
        return "shortlisted"
    if "interview" in normalized or "screen" in normalized:
        return "interview"
    if "offer" in normalized:
        return "offer"
    if "appl" in normalized:
        return "applied"

    return None


def normalize_notes_text(notes: Optional[str]) -> Optional[str]:
    """Strip a leading "Notes:" label and separators; capitalize known acronyms."""
    if not notes:
        return None

    cleaned = normalize_whitespace(notes)
    cleaned = NotesPatterns.LEADING_PUNCTUATION.sub("", cleaned)
    cleaned = NotesPatterns.LEADING_LABEL.sub("", cleaned)
    cleaned = NotesPatterns.LEADING_PUNCTUATION.sub("", cleaned)
    cleaned = NotesPatterns.ACRONYM.sub(lambda match: match.group(1).upper(), cleaned)
    cleaned = normalize_whitespace(cleaned)

    return cleaned or None


def normalize_application_date(
    date_value: Optional[str], base_date: Optional[datetime] = None
) -> Optional[str]:
    if not date_value:
        return None
    parsed = parse_loose_date_expression(date_value, base_date)
    if parsed is None:
        return None
    return to_iso(parsed)


def strip_intake_phrases(text: str) -> str:
    """Remove leading chat phrases such as "applied for" or "put me down for"."""
    cleaned = normalize_whitespace(text)
    for pattern in INTAKE_PHRASE_PATTERNS:
        cleaned = pattern.sub("", cleaned)
    return normalize_whitespace(cleaned)


def _capitalize_lowercase_name(name: str) -> str:
    if name != name.lower():
        return name
    return " ".join(word[:1].upper() + word[1:] for word in name.split())


def sanitize_company_name(name: str) -> str:
    """
    Clean a company name of status/notes suffixes, chat phrases and delimiters.

    Names typed entirely in lowercase are capitalized word by word; any other
    casing is kept as typed ("MistralAI", "eBay").

    Example:
        >>> sanitize_company_name("Applied for zee5 - sdet role")
        'Zee5'
        >>> sanitize_company_name("Stripe | referral")
        'Stripe'
    """
    if not name:
        return ""

    cleaned = normalize_whitespace(normalize_unicode(name))
    cleaned = cleaned.split("|")[0].strip()
    cleaned = CompanyPatterns.TRAILING_NOTES_FRAGMENT.sub("", cleaned)

    dash_fields = parse_dash_structured_fields(cleaned)
    if dash_fields.company:
        cleaned = dash_fields.company

    cleaned = strip_intake_phrases(cleaned)
    cleaned = CompanyPatterns.TRAILING_DATE_TOKEN.sub("", cleaned)
    cleaned = CompanyPatterns.TRAILING_STATUS.sub("", cleaned)

    return _capitalize_lowercase_name(normalize_whitespace(cleaned))


# =============================================================================
# EXTRACTION STRATEGIES
# =============================================================================


def split_dash_segments(value: str) -> list[str]:
    segments = normalize_unicode(value).split(" - ")
    return [normalize_whitespace(segment) for segment in segments if segment.strip()]


def parse_dash_structured_fields(raw: str) -> ExtractedFields:
    """
    Parse "Company - Role - Notes: ..." style text.

    The first segment is the company; later segments fill the first free slot:
    an explicit "Notes:" segment goes to notes, role-like text to role, and
    anything else to notes.
    """
    segments = split_dash_segments(raw)
    if len(segments) < 2:
        return ExtractedFields()

    company, *tail = segments
    role = None
    notes = None

    for segment in tail:
        if not notes and NotesPatterns.LEADING_LABEL.match(segment):
            notes = normalize_notes_text(segment)
            continue

        if not role and looks_like_role_text(segment):
            role = normalize_role_text(segment)
            continue

        if not notes:
            notes = normalize_notes_text(segment)

    return ExtractedFields(company=company, role=role, notes=notes)


def parse_position_sentence(raw: str) -> ExtractedFields:
    """Parse "for <role> position at <company>" sentences and the inverse order."""
    text = normalize_whitespace(raw)
    if not text:
        return ExtractedFields()

    role_then_company = SentencePatterns.FOR_ROLE_AT_COMPANY.search(
        text
    ) or SentencePatterns.AS_ROLE_AT_COMPANY.search(text)
    if role_then_company:
        return ExtractedFields(
            company=normalize_whitespace(role_then_company.group(2)),
            role=normalize_role_text(role_then_company.group(1)),
            notes=normalize_notes_text(role_then_company.group(3)),
        )

    company_then_role = SentencePatterns.COMPANY_THEN_ROLE.search(text)
    if company_then_role:
        return ExtractedFields(
            company=normalize_whitespace(company_then_role.group(1)),
            role=normalize_role_text(company_then_role.group(2)),
            notes=normalize_notes_text(company_then_role.group(3)),
        )

    return ExtractedFields()


def parse_add_application_sentence(raw: str) -> ExtractedFields:
    """Parse "add application for <company>, <role>. <notes>" commands."""
    text = normalize_whitespace(raw)
    if not text:
        return ExtractedFields()

    match = SentencePatterns.ADD_APPLICATION.search(text)
    if not match:
        return ExtractedFields()

    role_candidate = normalize_role_text(match.group(2))
    return ExtractedFields(
        company=normalize_whitespace(match.group(1)) or None,
        role=role_candidate if role_candidate and looks_like_role_text(role_candidate) else None,
        notes=normalize_notes_text(match.group(3)),
    )


def extract_role_from_text(value: str) -> Optional[str]:
    """Find a role introduced by "for"/"as"/"role of" or followed by "role"/"position"."""
    text = normalize_whitespace(value)
    if not text:
        return None

    for pattern in ROLE_FROM_TEXT_PATTERNS:
        match = pattern.search(text)
        candidate = normalize_role_text(match.group(1)) if match else None
        if candidate and looks_like_role_text(candidate):
            return candidate

    return None


def extract_standalone_role_from_text(value: str) -> Optional[str]:
    """Find a self-contained role token such as "SDE2", "L5" or "Backend Engineer"."""
    text = normalize_whitespace(value)
    if not text:
        return None

    for pattern in STANDALONE_ROLE_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        candidate = normalize_role_text(match.group(1))
        if candidate and looks_like_role_text(candidate):
            return candidate

    return None


def strip_role_suffix_from_company(raw_company: str) -> str:
    """Drop a trailing role clause ("Google for SDE2 role") when it really names a role."""
    text = normalize_whitespace(raw_company)
    if not text:
        return ""

    for pattern in ROLE_SUFFIX_PATTERNS:
        match = pattern.match(text)
        if not match:
            continue
        role_candidate = normalize_role_text(match.group(2))
        if role_candidate and looks_like_role_text(role_candidate):
            return normalize_whitespace(match.group(1))

    return text


def split_role_clause_tail(raw_company: str) -> tuple[str, Optional[str]]:
    """
    Cut text after the first comma when the part before it ends in a role clause.

    Example:
        >>> split_role_clause_tail("Stripe as a product manager, referred by Alice")
        ('Stripe as a product manager', 'referred by Alice')
    """
    text = normalize_whitespace(raw_company)
    head, separator, tail = text.partition(",")
    head = normalize_whitespace(head)

    if separator and strip_role_suffix_from_company(head) != head:
        return head, normalize_notes_text(tail)
    return text, None


def strip_notes_clause(value: str) -> str:
    """Remove a "notes: ..." or "sent my resume ..." clause and the separator before it."""
    text = normalize_whitespace(value)
    for pattern in (NotesPatterns.NOTES_CLAUSE, NotesPatterns.RESUME_CLAUSE):
        match = pattern.search(text)
        if match:
            text = NotesPatterns.TRAILING_PUNCTUATION.sub("", text[: match.start()])
    return normalize_whitespace(text)


def extract_notes_from_text(value: str) -> Optional[str]:
    text = normalize_whitespace(value)
    if not text:
        return None

    notes_match = NotesPatterns.NOTES_CLAUSE.search(text)
    if notes_match:
        return normalize_notes_text(notes_match.group(1))

    resume_match = NotesPatterns.RESUME_CLAUSE.search(text)
    if resume_match:
        return normalize_notes_text(resume_match.group(1))

    return None


def extract_application_date_from_text(
    value: str, base_date: Optional[datetime] = None
) -> Optional[str]:
    """
    Find an application date in text that mentions applying.

    Relative tokens ("yesterday", "next friday", "in 2 days") win over an
    explicit "applied on <date>" clause.
    """
    text = normalize_whitespace(value)
    if not text or not DatePatterns.APPLY_VERB.search(text):
        return None

    token_match = DatePatterns.RELATIVE_TOKEN.search(text)
    if token_match:
        parsed = parse_loose_date_expression(token_match.group(1), base_date)
        if parsed is not None:
            return to_iso(parsed)

    on_date_match = DatePatterns.APPLIED_ON.search(text)
    if on_date_match:
        expression = on_date_match.group(1).split(" - ")[0]
        parsed = parse_loose_date_expression(expression, base_date)
        if parsed is not None:
            return to_iso(parsed)

    return None


# =============================================================================
# COMPANY LIST EXPANSION
# =============================================================================


def is_likely_company_segment(part: str) -> bool:
    cleaned = sanitize_company_name(strip_role_suffix_from_company(part))
    if not cleaned:
        return False

    if CompanyPatterns.NON_COMPANY_WORD.search(cleaned):
        return False
    if len(cleaned.split()) > MAX_COMPANY_SEGMENT_WORDS:
        return False

    return bool(CompanyPatterns.COMPANY_CHARSET.match(cleaned))


def extract_company_list_candidate(raw_company: str) -> str:
    """Strip intake phrases and a trailing role clause, leaving a possible company list."""
    candidate = strip_intake_phrases(raw_company or "")
    if not candidate:
        return ""

    candidate = CompanyPatterns.TRAILING_ROLE_CLAUSE.sub("", candidate)
    return normalize_whitespace(candidate)


def _split_company_list(candidate: str) -> list[str]:
    return [part.strip() for part in candidate.split(",") if part.strip()]


def should_split_company_list(app: IntakeApplication) -> bool:
    parts = _split_company_list(extract_company_list_candidate(app.company))
    if len(parts) <= 1:
        return False
    # A role clause before a comma belongs to that one company ("Stripe as a PM, referred by Alice")
    if any(strip_role_suffix_from_company(part) != normalize_whitespace(part) for part in parts[:-1]):
        return False
    return all(is_likely_company_segment(part) for part in parts)


def expand_comma_separated_company_list(
    apps: list[IntakeApplication], base_date: Optional[datetime] = None
) -> list[IntakeApplication]:
    """
    Split a single entry naming several companies into one entry per company.

    Role, notes and application date are extracted once from the original text
    and shared by every resulting entry. Batches of more than one entry are
    already itemized and pass through unchanged.
    """
    if len(apps) != 1:
        return apps

    single = apps[0]
    if not should_split_company_list(single):
        return apps

    shared_role = (
        normalize_role_text(single.role)
        or extract_role_from_text(single.company)
        or extract_standalone_role_from_text(single.company)
    )
    shared_notes = normalize_notes_text(single.notes) or extract_notes_from_text(single.company)
    shared_date = (
        normalize_application_date(single.application_date, base_date)
        or extract_application_date_from_text(single.company, base_date)
        or extract_application_date_from_text(single.notes or "", base_date)
    )

    companies = _split_company_list(extract_company_list_candidate(single.company))
    _log_debug(f"Split company list into {len(companies)} entries: {companies}")

    return [
        replace(
            single,
            company=company,
            role=shared_role,
            notes=shared_notes,
            application_date=shared_date,
        )
        for company in companies
    ]


# =============================================================================
# PER-ENTRY NORMALIZATION
# =============================================================================


def _pick_role(candidates: Iterable[Optional[str]]) -> Optional[str]:
    """First candidate wins unless it is generic and a specific one exists."""
    present = [candidate for candidate in candidates if candidate]
    if not present:
        return None

    role = present[0]
    if is_generic_role(role):
        specific = next((candidate for candidate in present if not is_generic_role(candidate)), None)
        if specific:
            role = specific
    return role


def normalize_application(
    app: IntakeApplication, base_date: Optional[datetime] = None
) -> IntakeApplication:
    """Resolve company, role, status, notes and date for one entry."""
    raw_company = app.company or ""
    raw_notes = app.notes or ""

    dash_fields = parse_dash_structured_fields(raw_company)
    sentence_fields = parse_position_sentence(raw_company)
    add_fields = parse_add_application_sentence(raw_company)

    company_candidate = (
        add_fields.company or sentence_fields.company or dash_fields.company or raw_company
    )
    company_candidate = strip_notes_clause(strip_intake_phrases(company_candidate))
    company_candidate, trailing_notes = split_role_clause_tail(company_candidate)
    company = sanitize_company_name(strip_role_suffix_from_company(company_candidate))

    role = _pick_role(
        [
            normalize_role_text(app.role),
            add_fields.role,
            sentence_fields.role,
            dash_fields.role,
            extract_role_from_text(raw_company),
            extract_role_from_text(company_candidate),
            extract_standalone_role_from_text(raw_company),
            extract_role_from_text(raw_notes),
            extract_standalone_role_from_text(raw_notes),
        ]
    )

    notes = merge_text(
        normalize_notes_text(app.notes),
        merge_text(
            add_fields.notes,
            merge_text(
                sentence_fields.notes,
                merge_text(
                    dash_fields.notes,
                    merge_text(extract_notes_from_text(raw_company), trailing_notes),
                ),
            ),
        ),
    )

    application_date = (
        normalize_application_date(app.application_date, base_date)
        or extract_application_date_from_text(raw_company, base_date)
        or extract_application_date_from_text(raw_notes, base_date)
    )

    if company != raw_company.strip():
        _log_debug(f"Company {raw_company!r} -> {company!r}")

    return IntakeApplication(
        company=company,
        role=role,
        status=normalize_status(app.status),
        notes=notes,
        application_date=application_date,
    )


# =============================================================================
# BATCH ROLE BACKFILL
# =============================================================================


def backfill_batch_roles(apps: list[IntakeApplication]) -> list[IntakeApplication]:
    """
    Share one role across a batch when the evidence is unambiguous.

    - Exactly one distinct specific role: every entry with a missing or
      generic role receives it.
    - No specific role but exactly one distinct role overall, and some entry
      lacks a role: entries without a role receive it.
    - Anything else is ambiguous and roles are left as they are.
    """
    if len(apps) <= 1:
        return apps

    defined_roles = [role for role in (normalize_role_text(app.role) for app in apps) if role]
    unique_specific_roles = unique_roles(role for role in defined_roles if not is_generic_role(role))

    if len(unique_specific_roles) == 1:
        shared_role = unique_specific_roles[0]
        filled = sum(1 for app in apps if not roles_equivalent(app.role, shared_role))
        _log_debug(f"Backfilling specific role {shared_role!r} into {filled} entries")
        return [
            replace(app, role=shared_role if is_generic_role(app.role) else normalize_role_text(app.role))
            for app in apps
        ]

    if not unique_specific_roles:
        unique_defined_roles = unique_roles(defined_roles)
        if len(unique_defined_roles) == 1 and len(defined_roles) < len(apps):
            shared_role = unique_defined_roles[0]
            _log_debug(f"Backfilling only known role {shared_role!r} across batch")
            return [replace(app, role=normalize_role_text(app.role) or shared_role) for app in apps]

    return [replace(app, role=normalize_role_text(app.role)) for app in apps]


# =============================================================================
# ENTRY POINT
# =============================================================================


def normalize_applications_for_creation(
    raw_apps: Iterable[Union[IntakeApplication, dict, str]],
    base_date: Optional[datetime] = None,
) -> list[IntakeApplication]:
    """
    Normalize application intake payloads from chat tool calls.

    - Splits a single comma-separated company list into separate entries
    - Extracts role, notes and application date from malformed company text
    - Backfills one specific role across entries that are missing or generic
    - Drops entries whose company cannot be resolved

    Args:
        raw_apps: Strings (company only), dicts or IntakeApplication records
        base_date: Reference day for relative dates such as "yesterday" (defaults to now)

    Returns:
        Clean IntakeApplication records, ready for persistence

    Example:
        >>> normalize_applications_for_creation(["Applied for zee5 - sdet role - hr said 12 lpa budget"])
        [IntakeApplication(company='Zee5', role='SDET', status=None, notes='HR said 12 LPA budget', application_date=None)]
    """
    coerced = [IntakeApplication.from_value(raw) for raw in raw_apps]
    expanded = expand_comma_separated_company_list(coerced, base_date)

    normalized = [normalize_application(app, base_date) for app in expanded]
    kept = [app for app in normalized if app.company]

    result = backfill_batch_roles(kept)
    log_batch_result(len(coerced), result, dropped=len(normalized) - len(kept))
    return result
