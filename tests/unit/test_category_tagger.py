"""Unit tests for interview question category tagging."""

import pytest

from prepdesk.contexts.prep.category_tagger import QuestionCategory, auto_tag_category


@pytest.mark.unit
@pytest.mark.parametrize(
    "question,expected",
    [
        ("Design a URL shortener", QuestionCategory.SYSTEM_DESIGN),
        ("How would you shard a database?", QuestionCategory.SYSTEM_DESIGN),
        ("Write a SQL query to find duplicate emails", QuestionCategory.SQL),
        ("Tell me about a time you had a conflict", QuestionCategory.BEHAVIORAL),
        ("Reverse a linked list", QuestionCategory.DSA),
        ("Find the longest palindrome substring", QuestionCategory.DSA),
        ("What is your favorite color?", QuestionCategory.OTHER),
        ("", QuestionCategory.OTHER),
    ],
)
def test_auto_tag_category(question, expected):
    assert auto_tag_category(question) == expected


@pytest.mark.unit
def test_system_design_wins_over_dsa():
    """Categories are checked most-specific first."""
    assert auto_tag_category("Design a hash map") == QuestionCategory.SYSTEM_DESIGN
    assert auto_tag_category("Design a hash map").value == "SystemDesign"
