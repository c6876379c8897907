"""
Role canonicalization for the Intake context.

Turns free-typed role text ("sde-2", "backend dev role", "for the role of ml engineer")
into a consistent display form ("SDE2", "Backend Developer", "ML Engineer") and
answers equivalence/genericity questions used when backfilling roles across a batch.
"""

import re
from typing import Iterable, Optional

from prepdesk.contexts.intake.patterns import (
    GENERIC_ROLE_KEYS,
    ROLE_CONNECTOR_WORDS,
    RolePatterns,
)
from prepdesk.utils.text_processing import normalize_whitespace

# Tokens always written in capitals
UPPERCASE_TOKENS = frozenset({"ml", "ai", "sde", "sdet", "swe", "ui", "ux", "qa"})

# Tokens with fixed mixed-case spellings
SPECIAL_TOKENS = {
    "dev": "Developer",
    "devops": "DevOps",
    "ios": "iOS",
}


def normalize_role_token(token: str) -> str:
    """
    Canonicalize a single role word.

    Example:
        >>> [normalize_role_token(t) for t in ["sde-2", "l5", "devops", "ios", "backend"]]
        ['SDE2', 'L5', 'DevOps', 'iOS', 'Backend']
    """
    lower = token.lower()
    compact_level = lower.replace("-", "")

    if RolePatterns.COMPACT_LEVEL.match(compact_level):
        return compact_level.upper()

    if lower in SPECIAL_TOKENS:
        return SPECIAL_TOKENS[lower]
    if lower in UPPERCASE_TOKENS:
        return lower.upper()

    return lower[:1].upper() + lower[1:]


def to_display_role(role: str) -> str:
    """Canonicalize every word of a role, keeping connector words lowercase mid-phrase."""
    words = role.split()
    if not words:
        return role

    display = []
    for index, word in enumerate(words):
        lower = word.lower()
        if index > 0 and lower in ROLE_CONNECTOR_WORDS:
            display.append(lower)
        else:
            display.append(normalize_role_token(word))
    return " ".join(display)


def normalize_role_text(role: Optional[str]) -> Optional[str]:
    """
    Clean and canonicalize free-typed role text.

    Strips quoting, "role of"/"for a"/"as the" lead-ins, a trailing relative
    date ("next friday") and a trailing "role"/"position". Expands "dev" and
    joins split level tokens ("SDE 2").

    Args:
        role: Raw role text

    Returns:
        Display-form role, or None if nothing is left
    """
    if not role:
        return None

    cleaned = normalize_whitespace(role)
    cleaned = RolePatterns.EDGE_OPENERS.sub("", cleaned)
    cleaned = RolePatterns.EDGE_CLOSERS.sub("", cleaned)
    cleaned = RolePatterns.LEADING_ROLE_OF.sub("", cleaned)
    cleaned = RolePatterns.LEADING_FOR_AS.sub("", cleaned)
    cleaned = RolePatterns.TRAILING_DATE_TOKEN.sub("", cleaned)
    cleaned = RolePatterns.TRAILING_ROLE_WORD.sub("", cleaned)
    cleaned = RolePatterns.STANDALONE_DEV.sub("developer", cleaned)
    cleaned = RolePatterns.SPACED_LEVEL.sub(r"\1\2", cleaned)
    cleaned = normalize_whitespace(cleaned)

    if not cleaned:
        return None
    return to_display_role(cleaned)


def role_key(role: str) -> str:
    """Comparison key: lowercase alphanumerics separated by single spaces."""
    return normalize_whitespace(re.sub(r"[^a-z0-9]+", " ", role.lower()))


def roles_equivalent(a: Optional[str], b: Optional[str]) -> bool:
    if not a or not b:
        return False
    return role_key(a) == role_key(b)


def is_generic_role(role: Optional[str]) -> bool:
    """A missing role counts as generic."""
    if not role:
        return True
    return role_key(role) in GENERIC_ROLE_KEYS


def looks_like_role_text(value: str) -> bool:
    return bool(RolePatterns.ROLE_KEYWORD.search(value))


def unique_roles(roles: Iterable[str]) -> list[str]:
    """Deduplicate roles by role_key, keeping the first spelling seen."""
    seen = set()
    out = []

    for role in roles:
        key = role_key(role)
        if key in seen:
            continue
        seen.add(key)
        out.append(role)

    return out
