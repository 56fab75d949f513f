"""Tests for auditgen.codegen.core.naming."""

from __future__ import annotations

import pytest

from auditgen.codegen.core.naming import to_storage_name


@pytest.mark.parametrize(
    ("identifier", "expected"),
    [
        ("CreatedAt", "created_at"),
        ("ModifiedBy", "modified_by"),
        ("Id", "id"),
        ("createdAt", "created_at"),
        ("UserProfileImageUrl", "user_profile_image_url"),
        ("name", "name"),
        ("Version2", "version2"),
    ],
)
def test_to_storage_name_converts_identifiers(identifier: str, expected: str) -> None:
    assert to_storage_name(identifier) == expected


def test_to_storage_name_separates_every_upper_case_letter() -> None:
    assert to_storage_name("ID") == "i_d"


@pytest.mark.parametrize("identifier", ["", "   ", "\t"])
def test_to_storage_name_returns_blank_input_unchanged(identifier: str) -> None:
    assert to_storage_name(identifier) == identifier


@pytest.mark.parametrize("identifier", ["CreatedAt", "OrderLineTotal", "isPaid", "X"])
def test_to_storage_name_has_no_leading_or_doubled_separators(identifier: str) -> None:
    result = to_storage_name(identifier)

    assert not result.startswith("_")
    assert "__" not in result
    assert result == result.lower()


def test_to_storage_name_is_a_no_op_on_storage_names() -> None:
    once = to_storage_name("UpdatedAt")

    assert to_storage_name(once) == once
