"""
Text processing utilities for chat-style input and display.
"""

import re
import unicodedata
from typing import Optional

# Unicode replacements: problematic char → ASCII equivalent
UNICODE_REPLACEMENTS = {
    # Spaces
    "\u00a0": " ",  # non-breaking space → space
    "\u202f": " ",  # narrow no-break space
    # Zero-width characters → remove
    "\u200b": "",  # zero-width space
    "\u200c": "",  # zero-width non-joiner
    "\u200d": "",  # zero-width joiner
    "\u2060": "",  # word joiner
    "\ufeff": "",  # BOM / zero-width no-break space
    # Quotes
    "\u2018": "'",  # left single quote
    "\u2019": "'",  # right single quote
    "\u201c": '"',  # left double quote
    "\u201d": '"',  # right double quote
    # Dashes (chat clients auto-replace " - " separators)
    "\u2013": "-",  # en dash
    "\u2014": "-",  # em dash
}


def normalize_unicode(text: str) -> str:
    """
    Normalize unicode characters that cause parsing issues.

    Applies NFKC normalization and replaces common problematic characters
    with ASCII equivalents.

    Args:
        text: Raw text possibly containing problematic unicode

    Returns:
        Text with normalized unicode
    """
    text = unicodedata.normalize("NFKC", text)

    for char, replacement in UNICODE_REPLACEMENTS.items():
        text = text.replace(char, replacement)

    return text


def normalize_whitespace(value: str) -> str:
    """Collapse runs of whitespace into single spaces and trim."""
    return re.sub(r"\s+", " ", value).strip()


def merge_text(primary: Optional[str], secondary: Optional[str]) -> Optional[str]:
    """
    Merge two free-text fragments without duplicating content.

    If one fragment contains the other (case-insensitive), the longer one is kept.
    Otherwise the fragments are joined as sentences.

    Args:
        primary: Preferred fragment (comes first when joined)
        secondary: Additional fragment

    Returns:
        Merged text, or None if both are empty

    Example:
        >>> merge_text("Referral from Bob", "referral from bob")
        'Referral from Bob'
        >>> merge_text("Referral", "HR call on Monday")
        'Referral. HR call on Monday'
    """
    if not primary:
        return secondary or None
    if not secondary:
        return primary

    a = primary.lower()
    b = secondary.lower()
    if b in a:
        return primary
    if a in b:
        return secondary

    return f"{primary}. {secondary}"


def truncate_display(text: str, max_len: int) -> str:
    """
    Truncate text for display with ellipsis if needed.

    Args:
        text: Text to truncate
        max_len: Maximum length including ellipsis

    Returns:
        Original text if within max_len, otherwise truncated with "..."

    Example:
        >>> truncate_display("short", 10)
        "short"
        >>> truncate_display("this is a very long string", 10)
        "this is..."
    """
    return text if len(text) <= max_len else text[: max_len - 3] + "..."
