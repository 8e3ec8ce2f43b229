import datetime as dt
from decimal import Decimal

from asciiviz.formatting import default_formatter, format_date, format_label, format_number


def test_format_number_thousands():
    assert format_number(1234567) == "1,234,567"
    assert format_number(1234.56) == "1,235"
    assert format_number(-2500) == "-2,500"


def test_format_number_fractions():
    assert format_number(10.0) == "10"
    assert format_number(3.14159) == "3.14"
    assert format_number(Decimal("2.5")) == "2.50"


def test_format_date():
    assert format_date(dt.date(2024, 1, 5)) == "2024-01-05"
    assert format_date(dt.datetime(2024, 1, 5, 23, 59, tzinfo=dt.timezone.utc)) == "2024-01-05"


def test_format_label_dispatches_on_type():
    assert format_label("North") == "North"
    assert format_label(12000) == "12,000"
    assert format_label(dt.date(2023, 12, 31)) == "2023-12-31"
    assert format_label(True) == "True"
    assert format_label(None) == "None"


def test_default_formatter():
    assert default_formatter("date") is format_date
    assert default_formatter("number") is format_number
    assert default_formatter("other") is format_label
