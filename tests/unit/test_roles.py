"""Unit tests for role canonicalization."""

import pytest

from prepdesk.contexts.intake.roles import (
    is_generic_role,
    looks_like_role_text,
    normalize_role_text,
    normalize_role_token,
    roles_equivalent,
    unique_roles,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    "token,expected",
    [
        ("sde-2", "SDE2"),
        ("l5", "L5"),
        ("ic3", "IC3"),
        ("devops", "DevOps"),
        ("ios", "iOS"),
        ("ml", "ML"),
        ("sdet", "SDET"),
        ("backend", "Backend"),
    ],
)
def test_normalize_role_token(token, expected):
    assert normalize_role_token(token) == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw,expected",
    [
        ("for the role of ml engineer", "ML Engineer"),
        ("backend dev role", "Backend Developer"),
        ("SDE 2", "SDE2"),
        ("swe-3", "SWE3"),
        ("'head of engineering'", "Head of Engineering"),
        ("as a data scientist", "Data Scientist"),
        ("sdet position", "SDET"),
        ("SDE2 next friday", "SDE2"),
        ("backend engineer role yesterday", "Backend Engineer"),
        ("ml engineer in 3 days", "ML Engineer"),
    ],
)
def test_normalize_role_text(raw, expected):
    assert normalize_role_text(raw) == expected


@pytest.mark.unit
def test_normalize_role_text_empty():
    assert normalize_role_text(None) is None
    assert normalize_role_text("") is None
    assert normalize_role_text("   ") is None


@pytest.mark.unit
def test_generic_roles():
    """Missing and vague roles are generic; leveled or specialized ones are not."""
    assert is_generic_role(None)
    assert is_generic_role("Software Engineer")
    assert is_generic_role("software-developer")
    assert is_generic_role("SDE")

    assert not is_generic_role("SDE2")
    assert not is_generic_role("ML Engineer")
    assert not is_generic_role("Backend Developer")


@pytest.mark.unit
def test_roles_equivalent_ignores_case_and_punctuation():
    assert roles_equivalent("ML Engineer", "ml-engineer")
    assert not roles_equivalent("ML Engineer", "Data Engineer")
    assert not roles_equivalent(None, "ML Engineer")


@pytest.mark.unit
def test_unique_roles_keeps_first_spelling():
    assert unique_roles(["ML Engineer", "ml engineer", "SDET"]) == ["ML Engineer", "SDET"]


@pytest.mark.unit
def test_looks_like_role_text():
    assert looks_like_role_text("sdet role")
    assert looks_like_role_text("Product Manager")
    assert not looks_like_role_text("hr said 12 lpa budget")
    assert not looks_like_role_text("Razorpay")
