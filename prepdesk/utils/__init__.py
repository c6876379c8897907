"""
Shared utilities for PREPDESK.

Common functionality used across contexts:
- Text processing
- Timestamps and day arithmetic
- Logger configuration
"""

from prepdesk.utils.text_processing import merge_text, normalize_whitespace
from prepdesk.utils.timestamp import now, start_of_day, today

__all__ = ["merge_text", "normalize_whitespace", "now", "start_of_day", "today"]
