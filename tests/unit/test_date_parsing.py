"""Unit tests for relative and loose date parsing."""

from datetime import datetime

import pytest

from prepdesk.contexts.intake.date_parsing import (
    parse_date_input,
    parse_loose_date_expression,
    try_parse_date_input,
)

# Monday afternoon
BASE = datetime(2026, 10, 19, 15, 30)


@pytest.mark.unit
@pytest.mark.parametrize(
    "expression,expected",
    [
        ("today", datetime(2026, 10, 19)),
        ("Tomorrow", datetime(2026, 10, 20)),
        ("yesterday", datetime(2026, 10, 18)),
        ("in 3 days", datetime(2026, 10, 22)),
        ("in 1 day", datetime(2026, 10, 20)),
        ("friday", datetime(2026, 10, 23)),
        ("sunday", datetime(2026, 10, 25)),
        ("monday", datetime(2026, 10, 19)),
        ("next monday", datetime(2026, 10, 26)),
        ("next friday", datetime(2026, 10, 23)),
        ("2026-11-02", datetime(2026, 11, 2)),
        ("2026-11-02T15:45:00", datetime(2026, 11, 2)),
    ],
)
def test_try_parse_date_input(expression, expected):
    assert try_parse_date_input(expression, BASE) == expected


@pytest.mark.unit
def test_try_parse_date_input_unknown():
    assert try_parse_date_input("someday", BASE) is None
    assert try_parse_date_input("", BASE) is None


@pytest.mark.unit
def test_parse_date_input_falls_back_one_week_out():
    assert parse_date_input("whenever works", BASE) == datetime(2026, 10, 26)
    assert parse_date_input("tomorrow", BASE) == datetime(2026, 10, 20)


@pytest.mark.unit
@pytest.mark.parametrize(
    "expression,expected",
    [
        ("28th feb 2026", datetime(2026, 2, 28)),
        ("Feb 28, 2026", datetime(2026, 2, 28)),
        ("02/28/2026", datetime(2026, 2, 28)),
        ("3rd March 2026", datetime(2026, 3, 3)),
        ("February 28", datetime(2026, 2, 28)),
        ("yesterday", datetime(2026, 10, 18)),
    ],
)
def test_parse_loose_date_expression(expression, expected):
    assert parse_loose_date_expression(expression, BASE) == expected


@pytest.mark.unit
def test_parse_loose_date_expression_unknown():
    assert parse_loose_date_expression("not a date", BASE) is None
    assert parse_loose_date_expression("   ", BASE) is None
