"""Unit tests for next due date calculation."""

from datetime import date

import pytest

from tagreport.services.due_dates import calculate_next_due_date, frequency_label


@pytest.mark.parametrize("frequency,expected", [
    ("monthly", date(2024, 2, 15)),
    ("threemonthly", date(2024, 4, 15)),
    ("sixmonthly", date(2024, 7, 15)),
    ("twelvemonthly", date(2025, 1, 15)),
    ("annually", date(2025, 1, 15)),
    ("twentyfourmonthly", date(2026, 1, 15)),
    ("fiveyearly", date(2029, 1, 15)),
    ("weekly", date(2025, 1, 15)),
])
def test_pass_adds_frequency_interval(frequency, expected):
    assert calculate_next_due_date(date(2024, 1, 15), frequency, "pass") == expected


def test_fail_is_due_on_test_date():
    assert calculate_next_due_date(date(2024, 1, 15), "fiveyearly", "fail") == date(2024, 1, 15)


def test_accepts_iso_string_dates():
    assert calculate_next_due_date("2024-01-15", "twelvemonthly", "pass") == date(2025, 1, 15)


def test_month_end_is_clamped():
    assert calculate_next_due_date(date(2024, 1, 31), "monthly", "pass") == date(2024, 2, 29)
    assert calculate_next_due_date(date(2024, 2, 29), "twelvemonthly", "pass") == date(2025, 2, 28)


def test_frequency_labels():
    assert frequency_label("threemonthly") == "3 Monthly"
    assert frequency_label("fiveyearly") == "5 Yearly"
    assert frequency_label("something-else") == "12 Monthly"
