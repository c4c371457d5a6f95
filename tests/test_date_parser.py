"""Tests for date conversion helpers."""

from datetime import date, datetime, timedelta

from jobledger.utils.date_parser import (
    add_months,
    days_until,
    dmy_to_iso,
    iso_to_dmy,
    parse_iso,
    to_iso,
)


def _local_midnight_iso(year: int, month: int, day: int) -> str:
    return to_iso(datetime(year, month, day))


def test_dmy_to_iso_format():
    """Test that output is a UTC ISO string with milliseconds."""
    iso = dmy_to_iso("05/09/2025")
    assert iso.endswith("Z")
    assert len(iso) == len("2025-09-05T00:00:00.000Z")


def test_dmy_round_trip():
    """Test dd/mm/yyyy -> ISO -> dd/mm/yyyy."""
    for text in ["05/09/2025", "29/02/2024", "31/12/1999", "01/01/2030"]:
        assert iso_to_dmy(dmy_to_iso(text)) == text


def test_dmy_single_digit_fields():
    """Test that one-digit day and month are accepted and padded on output."""
    assert iso_to_dmy(dmy_to_iso("5/9/2025")) == "05/09/2025"


def test_dmy_to_iso_is_local_midnight():
    """Test that the ISO value is local midnight of the date."""
    moment = parse_iso(dmy_to_iso("05/09/2025"))
    assert (moment.year, moment.month, moment.day) == (2025, 9, 5)
    assert (moment.hour, moment.minute) == (0, 0)


def test_dmy_to_iso_rejects_invalid_dates():
    """Test that impossible calendar dates are rejected."""
    assert dmy_to_iso("31/02/2024") == ""
    assert dmy_to_iso("29/02/2023") == ""
    assert dmy_to_iso("00/01/2024") == ""
    assert dmy_to_iso("12/13/2024") == ""


def test_dmy_to_iso_rejects_bad_patterns():
    """Test that text not matching dd/mm/yyyy is rejected."""
    assert dmy_to_iso("") == ""
    assert dmy_to_iso(None) == ""
    assert dmy_to_iso("2024-01-15") == ""
    assert dmy_to_iso("5/9/25") == ""
    assert dmy_to_iso("05/09/2025 ") == ""
    assert dmy_to_iso("105/09/2025") == ""


def test_iso_to_dmy_invalid():
    """Test that unparseable ISO text gives an empty string."""
    assert iso_to_dmy("") == ""
    assert iso_to_dmy(None) == ""
    assert iso_to_dmy("not a date") == ""


def test_add_months_simple():
    """Test adding one month."""
    result = add_months(_local_midnight_iso(2025, 9, 5), 1)
    assert iso_to_dmy(result) == "05/10/2025"


def test_add_months_across_year():
    """Test adding months past December."""
    result = add_months(_local_midnight_iso(2025, 11, 15), 3)
    assert iso_to_dmy(result) == "15/02/2026"


def test_add_months_negative():
    """Test subtracting months."""
    result = add_months(_local_midnight_iso(2025, 1, 10), -1)
    assert iso_to_dmy(result) == "10/12/2024"


def test_add_months_rolls_over_short_months():
    """Test that missing days roll into the next month instead of clamping."""
    assert iso_to_dmy(add_months(_local_midnight_iso(2023, 1, 31), 1)) == "03/03/2023"
    assert iso_to_dmy(add_months(_local_midnight_iso(2024, 1, 31), 1)) == "02/03/2024"
    assert iso_to_dmy(add_months(_local_midnight_iso(2025, 3, 31), 1)) == "01/05/2025"


def test_add_months_drops_time_of_day():
    """Test that the result is local midnight."""
    source = to_iso(datetime(2025, 9, 5, 17, 45))
    moment = parse_iso(add_months(source, 1))
    assert (moment.hour, moment.minute) == (0, 0)


def test_add_months_default_is_one():
    """Test the default month count."""
    assert iso_to_dmy(add_months(_local_midnight_iso(2025, 6, 1))) == "01/07/2025"


def test_add_months_invalid():
    """Test that unparseable input gives an empty string."""
    assert add_months("garbage", 1) == ""


def test_days_until_today_tomorrow_yesterday():
    """Test day counts around today."""
    today = date.today()
    assert days_until(_local_midnight_iso(today.year, today.month, today.day)) == 0

    tomorrow = today + timedelta(days=1)
    assert days_until(_local_midnight_iso(tomorrow.year, tomorrow.month, tomorrow.day)) == 1

    yesterday = today - timedelta(days=1)
    assert days_until(_local_midnight_iso(yesterday.year, yesterday.month, yesterday.day)) == -1


def test_days_until_ignores_time_of_day():
    """Test that only calendar dates are compared."""
    late_today = to_iso(datetime.now().replace(hour=23, minute=59))
    assert days_until(late_today) == 0


def test_days_until_with_reference_date():
    """Test counting from an explicit reference date."""
    iso = _local_midnight_iso(2025, 10, 5)
    assert days_until(iso, today=date(2025, 9, 5)) == 30
    assert days_until(iso, today=date(2025, 10, 8)) == -3


def test_days_until_invalid():
    """Test that unparseable input gives None."""
    assert days_until("") is None
    assert days_until("tomorrow-ish") is None
