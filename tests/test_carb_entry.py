"""Unit tests for the carb entry model."""

from datetime import datetime, timedelta

import pytest
import pytz
from pydantic import ValidationError

from carb_ledger.domain.carb_entry import CarbEntry


def _start() -> datetime:
    return datetime(2024, 1, 15, 8, 0, 0, tzinfo=pytz.UTC)


def test_entry_keeps_supplied_values_without_fat_protein() -> None:
    """Test that quantity and absorption time are stored as given."""
    entry = CarbEntry(
        quantity_grams=45.0,
        start_date=_start(),
        food_type="Pasta",
        absorption_time=timedelta(hours=3),
    )

    if entry.quantity_grams != 45.0:
        raise AssertionError(f"Expected 45 g, got {entry.quantity_grams}")

    if entry.absorption_time != timedelta(hours=3):
        raise AssertionError(f"Expected 3 h, got {entry.absorption_time}")

    if entry.is_uploaded:
        raise AssertionError("Expected is_uploaded to default to False")

    if not entry.created_by_current_app:
        raise AssertionError("Expected created_by_current_app to be True")


def test_fat_and_protein_replace_quantity_and_absorption() -> None:
    """Test that fat and protein override the supplied quantity."""
    entry = CarbEntry(
        quantity_grams=45.0,
        start_date=_start(),
        food_type="Pizza",
        absorption_time=timedelta(hours=2),
        fat_grams=10,
        protein_grams=5,
    )

    if abs(entry.quantity_grams - 11.0) > 1e-9:
        raise AssertionError(f"Expected 11 g equivalent, got {entry.quantity_grams}")

    if entry.absorption_time != timedelta(hours=3):
        raise AssertionError(f"Expected 3 h, got {entry.absorption_time}")

    if entry.food_type != "Pizza":
        raise AssertionError(f"Expected food_type='Pizza', got {entry.food_type}")


def test_fat_and_protein_allow_missing_quantity() -> None:
    """Test that quantity may be omitted when fat and protein are given."""
    entry = CarbEntry(start_date=_start(), fat_grams=0, protein_grams=50)

    if entry.quantity_grams != 20.0:
        raise AssertionError(f"Expected 20 g equivalent, got {entry.quantity_grams}")


def test_fat_without_protein_is_ignored() -> None:
    """Test that the equivalence needs both fat and protein."""
    entry = CarbEntry(quantity_grams=30.0, start_date=_start(), fat_grams=20)

    if entry.quantity_grams != 30.0:
        raise AssertionError(f"Expected 30 g, got {entry.quantity_grams}")

    if entry.absorption_time is not None:
        raise AssertionError(f"Expected no absorption time, got {entry.absorption_time}")


def test_fat_and_protein_are_not_retained() -> None:
    """Test that fat and protein are consumed at construction."""
    entry = CarbEntry(start_date=_start(), fat_grams=10, protein_grams=5)
    dumped = entry.model_dump()

    if "fat_grams" in dumped or "protein_grams" in dumped:
        raise AssertionError(f"Expected no fat/protein fields, got {sorted(dumped)}")


def test_with_absorption_time_returns_new_entry() -> None:
    """Test copy-with-change of the absorption time."""
    entry = CarbEntry(quantity_grams=20.0, start_date=_start())
    adjusted = entry.with_absorption_time(timedelta(hours=4))

    if adjusted.absorption_time != timedelta(hours=4):
        raise AssertionError(f"Expected 4 h, got {adjusted.absorption_time}")

    if entry.absorption_time is not None:
        raise AssertionError("Expected original entry to be unchanged")

    if adjusted.quantity_grams != entry.quantity_grams:
        raise AssertionError("Expected quantity to carry over")


def test_entry_is_frozen() -> None:
    """Test that entry fields cannot be assigned."""
    entry = CarbEntry(quantity_grams=20.0, start_date=_start())

    with pytest.raises(ValidationError):
        entry.quantity_grams = 25.0  # type: ignore[misc]


def test_end_date() -> None:
    """Test end date with and without an absorption time."""
    entry = CarbEntry(quantity_grams=20.0, start_date=_start())

    if entry.end_date != _start():
        raise AssertionError(f"Expected end_date=start_date, got {entry.end_date}")

    adjusted = entry.with_absorption_time(timedelta(hours=3))
    if adjusted.end_date != _start() + timedelta(hours=3):
        raise AssertionError(f"Expected end_date three hours later, got {adjusted.end_date}")


def test_entries_compare_by_value() -> None:
    """Test value equality of entries."""
    first = CarbEntry(quantity_grams=20.0, start_date=_start(), sync_identifier="abc")
    second = CarbEntry(quantity_grams=20.0, start_date=_start(), sync_identifier="abc")

    if first != second:
        raise AssertionError("Expected equal entries")

    if first == second.with_absorption_time(timedelta(hours=2)):
        raise AssertionError("Expected entries with different absorption times to differ")
