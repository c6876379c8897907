"""
Reusable patterns and constants for application intake parsing.

This module provides the vocabulary and regex patterns used across the intake
context to pull company, role, notes and dates out of chat-style text.

Pattern classes follow one convention:
- Dataclasses with frozen=True for immutability
- Class-level constants for patterns
- Helper modules (roles.py, application_intake.py) that use these patterns
"""

import re
from dataclasses import dataclass

# =============================================================================
# VOCABULARY
# =============================================================================

APPLICATION_STATUSES = ("applied", "shortlisted", "interview", "offer", "rejected")

# Role labels too vague to keep when a specific role is known (compared by role_key)
GENERIC_ROLE_KEYS = frozenset(
    {
        "software engineer",
        "software developer",
        "developer",
        "engineer",
        "sde",
        "swe",
    }
)

# Words kept lowercase inside a multi-word role ("Head of Engineering")
ROLE_CONNECTOR_WORDS = frozenset({"of", "and", "for", "to"})

# Monday-first to line up with datetime.weekday()
DAYS_OF_WEEK = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

_WEEKDAY_PATTERN = "|".join(DAYS_OF_WEEK)

# Relative date at the end of a phrase - e.g., "Amazon next friday", "SDE2 yesterday"
_TRAILING_DATE_TOKEN = (
    rf"\s+(?:on\s+)?(?:yesterday|today|tomorrow|in\s+\d+\s+days?"
    rf"|(?:next\s+|last\s+)?(?:{_WEEKDAY_PATTERN}))\s*$"
)


# =============================================================================
# ROLE PATTERNS
# =============================================================================


@dataclass(frozen=True)
class RolePatterns:
    """
    Regex patterns for recognizing and cleaning role text.
    """

    # Any token that makes a phrase read like a job title
    ROLE_KEYWORD: re.Pattern = re.compile(
        r"\b(?:ml|machine learning|ai|data|software|sde|sde\d+|swe|swe\d+|sdet|qa|developer|dev"
        r"|engineer|scientist|manager|architect|analyst|designer|devops|frontend|backend"
        r"|full stack|mobile|intern|l\d+|e\d+|ic\d+)\b",
        re.IGNORECASE,
    )

    # Level tokens after hyphen removal - e.g., "sde2", "l5", "ic3"
    COMPACT_LEVEL: re.Pattern = re.compile(r"^(?:sde|swe|l|e|ic)\d+$")

    # Level tokens written apart - e.g., "SDE 2", "swe - 3", "IC 4"
    SPACED_LEVEL: re.Pattern = re.compile(r"\b(sde|swe|ic)\s*-?\s*(\d+)\b", re.IGNORECASE)

    EDGE_OPENERS: re.Pattern = re.compile(r"^[`\"'(\[{]+")
    EDGE_CLOSERS: re.Pattern = re.compile(r"[`\"')\]}]+$")
    LEADING_ROLE_OF: re.Pattern = re.compile(r"^role\s+of\s+", re.IGNORECASE)
    LEADING_FOR_AS: re.Pattern = re.compile(
        r"^(?:for|as)\s+(?:an?\s+|the\s+)?(?:role\s+of\s+)?", re.IGNORECASE
    )
    TRAILING_DATE_TOKEN: re.Pattern = re.compile(_TRAILING_DATE_TOKEN, re.IGNORECASE)
    TRAILING_ROLE_WORD: re.Pattern = re.compile(r"\s+(?:role|position)$", re.IGNORECASE)
    STANDALONE_DEV: re.Pattern = re.compile(r"\bdev\b", re.IGNORECASE)


# Role embedded in a sentence. The greedy prefix in the end-anchored pattern
# binds to the last "for"/"as" ("applied for Google as a backend engineer").
ROLE_FROM_TEXT_PATTERNS = [
    re.compile(
        r"\b(?:for|as)\s+(?:an?\s+|the\s+)?(?:role\s+of\s+)?([^,;|]+?)\s+(?:role|position)\b",
        re.IGNORECASE,
    ),
    re.compile(r"^.*\b(?:for|as)\s+(?:an?\s+|the\s+)?([^,;|]+)$", re.IGNORECASE),
    re.compile(r"\brole\s+of\s+([^,;|]+)$", re.IGNORECASE),
    re.compile(r"-\s*([^,;|]+?)\s+(?:role|position)$", re.IGNORECASE),
]

# Roles that stand on their own anywhere in the text - e.g., "SDE2", "L5", "Backend Engineer"
STANDALONE_ROLE_PATTERNS = [
    re.compile(r"\b((?:sde|swe)\s*-?\s*\d+)\b", re.IGNORECASE),
    re.compile(r"\b((?:l|e|ic)\s*-?\s*\d+)\b", re.IGNORECASE),
    re.compile(
        r"\b((?:frontend|backend|full stack|fullstack|ml|machine learning|data|devops|sdet"
        r"|software|mobile|qa|platform|cloud)\s+(?:engineer|developer|scientist|manager|analyst))\b",
        re.IGNORECASE,
    ),
]

# Company text followed by a role clause; group 1 = company, group 2 = role candidate
ROLE_SUFFIX_PATTERNS = [
    re.compile(
        r"^(.*?)\s+(?:for|as)\s+(?:an?\s+|the\s+)?(?:role\s+of\s+)?([^,;|]+?)\s+(?:role|position)\s*$",
        re.IGNORECASE,
    ),
    re.compile(r"^(.*?)\s*-\s*([^,;|]+?)\s+(?:role|position)\s*$", re.IGNORECASE),
    re.compile(
        r"^(.*?)\s+(?:for|as)\s+(?:an?\s+|the\s+)?(?:role\s+of\s+)?([^,;|]+)\s*$",
        re.IGNORECASE,
    ),
]


# =============================================================================
# COMPANY PATTERNS
# =============================================================================


@dataclass(frozen=True)
class CompanyPatterns:
    """
    Regex patterns for isolating a company name from intake text.
    """

    # Words that never appear in a bare company name
    NON_COMPANY_WORD: re.Pattern = re.compile(
        r"\b(?:put|down|applied|apply|position|role|resume|notes?|just|sent|submitted"
        r"|for|at|in|my|i|to)\b",
        re.IGNORECASE,
    )

    # Characters allowed in a company segment of a comma-separated list
    COMPANY_CHARSET: re.Pattern = re.compile(r"^[a-z0-9.&'/()\- ]+$", re.IGNORECASE)

    # Role clause at the end of a company list - e.g., "... for the SDE2 role"
    TRAILING_ROLE_CLAUSE: re.Pattern = re.compile(
        r"\s+(?:for|as)\s+(?:an?\s+|the\s+)?(?:role\s+of\s+)?[^,.;]+?\s+(?:role|position)\s*$",
        re.IGNORECASE,
    )

    TRAILING_NOTES_FRAGMENT: re.Pattern = re.compile(r"\s+-\s*notes?\s*:.*$", re.IGNORECASE)

    TRAILING_STATUS: re.Pattern = re.compile(
        r"\s+(?:applied|shortlisted|interview|offer|rejected|status)\s*$", re.IGNORECASE
    )

    TRAILING_DATE_TOKEN: re.Pattern = re.compile(_TRAILING_DATE_TOKEN, re.IGNORECASE)


# Leading chat phrases wrapped around the company - applied in order
INTAKE_PHRASE_PATTERNS = [
    re.compile(
        r"^(?:i\s+)?(?:have\s+)?(?:just\s+)?(?:applied|apply|submitted|sent)"
        r"(?:\s+(?:my\s+|the\s+)?(?:resume|cv|application))?\s+(?:for|to|at)\s+",
        re.IGNORECASE,
    ),
    re.compile(r"^put\s+me\s+down\s+for\s+", re.IGNORECASE),
    re.compile(r"^add\s+(?:an?\s+)?application\s+for\s+", re.IGNORECASE),
]


# =============================================================================
# SENTENCE PATTERNS
# =============================================================================


@dataclass(frozen=True)
class SentencePatterns:
    """
    Regex patterns for whole-sentence intake commands.
    """

    # "... for a backend engineer position at Stripe, referred by Alice"
    FOR_ROLE_AT_COMPANY: re.Pattern = re.compile(
        r"\bfor\s+(?:an?\s+|the\s+)?(.+?)\s+(?:position|role)\s+(?:at|in)\s+([^,.;]+)(.*)$",
        re.IGNORECASE,
    )

    # "... as an SDET role at Zee5"
    AS_ROLE_AT_COMPANY: re.Pattern = re.compile(
        r"\bas\s+(?:an?\s+|the\s+)?(.+?)\s+(?:position|role)\s+(?:at|in)\s+([^,.;]+)(.*)$",
        re.IGNORECASE,
    )

    # "... at Stripe for the backend engineer role"
    COMPANY_THEN_ROLE: re.Pattern = re.compile(
        r"\b(?:at|in)\s+([^,.;]+?)\s+(?:for|as)\s+(?:an?\s+|the\s+)?(.+?)\s+(?:position|role)(.*)$",
        re.IGNORECASE,
    )

    # "add application for Notion, product manager. notes: referral"
    ADD_APPLICATION: re.Pattern = re.compile(
        r"\badd\s+(?:an?\s+)?application\s+for\s+([^,.;]+)(?:,\s*([^.;]+))?(.*)$",
        re.IGNORECASE,
    )


# =============================================================================
# NOTES PATTERNS
# =============================================================================


@dataclass(frozen=True)
class NotesPatterns:
    """
    Regex patterns for notes clauses and cleanup.
    """

    NOTES_CLAUSE: re.Pattern = re.compile(r"\bnotes?\s*:\s*(.+)$", re.IGNORECASE)
    RESUME_CLAUSE: re.Pattern = re.compile(
        r"\b((?:just\s+)?(?:sent|submitted)\s+(?:my\s+)?(?:resume|cv)(?:.*)?)$", re.IGNORECASE
    )
    LEADING_LABEL: re.Pattern = re.compile(r"^notes?\s*:\s*", re.IGNORECASE)
    LEADING_PUNCTUATION: re.Pattern = re.compile(r"^[-,:;.\s]+")
    TRAILING_PUNCTUATION: re.Pattern = re.compile(r"[-,:;.\s]+$")

    # Acronyms recruiters and candidates type in lowercase
    ACRONYM: re.Pattern = re.compile(
        r"\b(hr|lpa|ctc|oa|qa|sde|sdet|ml|ai|api|ui|ux|esop)\b", re.IGNORECASE
    )


# =============================================================================
# DATE PATTERNS
# =============================================================================


@dataclass(frozen=True)
class DatePatterns:
    """
    Regex patterns for relative and absolute date expressions.
    """

    ISO_LIKE: re.Pattern = re.compile(r"^\d{4}-\d{2}-\d{2}(?:T.*)?$")
    IN_N_DAYS: re.Pattern = re.compile(r"\bin\s+(\d+)\s+days?\b")
    ORDINAL_SUFFIX: re.Pattern = re.compile(r"\b(\d{1,2})(?:st|nd|rd|th)\b", re.IGNORECASE)

    APPLY_VERB: re.Pattern = re.compile(
        r"\b(?:applied|apply|submitted|sent(?:\s+my\s+resume)?)\b", re.IGNORECASE
    )

    # Relative token anywhere in an intake sentence
    RELATIVE_TOKEN: re.Pattern = re.compile(
        rf"\b(yesterday|today|tomorrow|in\s+\d+\s+days?|next\s+(?:{_WEEKDAY_PATTERN})|(?:{_WEEKDAY_PATTERN}))\b",
        re.IGNORECASE,
    )

    # "applied on Feb 28" / "sent my resume on 2026-02-28"
    APPLIED_ON: re.Pattern = re.compile(
        r"\b(?:applied|apply|submitted|sent(?:\s+my\s+resume)?)\s+on\s+([^,.;!?]+)",
        re.IGNORECASE,
    )


# Absolute formats tried after relative parsing fails (ordinals and commas removed first)
LOOSE_DATE_FORMATS = (
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%m/%d/%y",
    "%d %B %Y",
    "%d %b %Y",
    "%B %d %Y",
    "%b %d %Y",
)

# Year-less formats take the year of the base date
LOOSE_DATE_FORMATS_NO_YEAR = (
    "%d %B",
    "%d %b",
    "%B %d",
    "%b %d",
)
