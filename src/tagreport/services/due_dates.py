"""
Next test due date for a result
"""

from datetime import date, datetime
from typing import Union

from dateutil.relativedelta import relativedelta

from ..schemas.enums import Frequency, ResultValue

RETEST_INTERVALS = {
    Frequency.MONTHLY.value: relativedelta(months=1),
    Frequency.THREE_MONTHLY.value: relativedelta(months=3),
    Frequency.SIX_MONTHLY.value: relativedelta(months=6),
    Frequency.TWELVE_MONTHLY.value: relativedelta(years=1),
    Frequency.ANNUALLY.value: relativedelta(years=1),
    Frequency.TWENTY_FOUR_MONTHLY.value: relativedelta(years=2),
    Frequency.FIVE_YEARLY.value: relativedelta(years=5),
}
DEFAULT_INTERVAL = relativedelta(years=1)

FREQUENCY_LABELS = {
    Frequency.MONTHLY.value: "Monthly",
    Frequency.THREE_MONTHLY.value: "3 Monthly",
    Frequency.SIX_MONTHLY.value: "6 Monthly",
    Frequency.TWELVE_MONTHLY.value: "12 Monthly",
    Frequency.ANNUALLY.value: "Annually",
    Frequency.TWENTY_FOUR_MONTHLY.value: "24 Monthly",
    Frequency.FIVE_YEARLY.value: "5 Yearly",
}


def _value(enum_or_str) -> str:
    return getattr(enum_or_str, "value", enum_or_str)


def _as_date(test_date: Union[date, datetime, str]) -> date:
    if isinstance(test_date, datetime):
        return test_date.date()
    if isinstance(test_date, date):
        return test_date
    return date.fromisoformat(str(test_date)[:10])


def calculate_next_due_date(test_date, frequency, result) -> date:
    """Failed items are due for retest immediately; passed items move on by
    the frequency's interval (one year for anything unrecognised)."""
    tested_on = _as_date(test_date)
    if _value(result) == ResultValue.FAIL.value:
        return tested_on
    return tested_on + RETEST_INTERVALS.get(_value(frequency), DEFAULT_INTERVAL)


def frequency_label(frequency) -> str:
    return FREQUENCY_LABELS.get(_value(frequency), "12 Monthly")
