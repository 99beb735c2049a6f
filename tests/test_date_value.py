"""Unit tests for calendar values and their single-letter fields.

The tests cover the accepted textual formats, offset normalization, the field
lookup table exposed to templates, and the coverage of the zero-padding
lookup table.

Usage
-----
Run ``pytest tests/test_date_value.py -v``.
"""

from __future__ import annotations

import datetime as dt

import pytest

from blades._constants import MONTH_ABBREVIATIONS, PADDED_NUMBERS
from blades.content import Fields, StringEncoder, field_hash
from blades.template import compile_template
from blades.values import DateParseError, DateValue


def _lookup(value: DateValue, name: str, *, escaped: bool = True) -> str | None:
    encoder = StringEncoder()
    render = value.render_field_escaped if escaped else value.render_field_unescaped
    if not render(field_hash(name), name, encoder):
        return None
    return encoder.getvalue()


@pytest.fixture
def thursday() -> DateValue:
    """Return the date-time most of the field tests read from."""
    return DateValue.parse("2020-03-05T07:08:09")


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("y", "2020"),
        ("m", "03"),
        ("d", "05"),
        ("e", "5"),
        ("H", "07"),
        ("M", "08"),
        ("S", "09"),
        ("a", "Thu"),
        ("b", "Mar"),
    ],
)
def test_single_letter_fields(thursday: DateValue, name: str, expected: str) -> None:
    """Every recognised letter renders its component in both modes."""
    assert _lookup(thursday, name) == expected
    assert _lookup(thursday, name, escaped=False) == expected


@pytest.mark.parametrize("name", ["yy", "year", "month", "", "x", "Y", "D", "."])
def test_unknown_names_are_not_found(thursday: DateValue, name: str) -> None:
    """Longer names and unmapped letters fall through to outer contexts."""
    assert _lookup(thursday, name) is None, f"{name!r} should not resolve"


def test_weekday_is_sunday_indexed() -> None:
    assert _lookup(DateValue.parse("2023-01-01"), "a") == "Sun"
    assert _lookup(DateValue.parse("2023-01-07"), "a") == "Sat"


def test_december_uses_last_month_abbreviation() -> None:
    value = DateValue.parse("1999-12-31 23:59:59")
    assert _lookup(value, "b") == "Dec"
    assert _lookup(value, "H") + _lookup(value, "M") + _lookup(value, "S") == "235959"


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("2020-03-05T07:08:09", dt.datetime(2020, 3, 5, 7, 8, 9)),
        ("2020-03-05T07:08:09.250", dt.datetime(2020, 3, 5, 7, 8, 9, 250000)),
        ("2020-03-05", dt.datetime(2020, 3, 5)),
        ("2020-03-05 07:08:09", dt.datetime(2020, 3, 5, 7, 8, 9)),
        ("2020-03-05 07:08:09.123456789", dt.datetime(2020, 3, 5, 7, 8, 9, 123456)),
        ("2021-01-01T10:20:30+02:00", dt.datetime(2021, 1, 1, 8, 20, 30)),
        ("2021-01-01T00:30:00-01:00", dt.datetime(2021, 1, 1, 1, 30)),
        ("2021-01-01T10:20:30Z", dt.datetime(2021, 1, 1, 10, 20, 30)),
    ],
)
def test_parse_accepted_formats(text: str, expected: dt.datetime) -> None:
    """Each accepted format parses to the same naive UTC instant."""
    parsed = DateValue.parse(text)
    assert parsed.moment == expected, f"{text!r} parsed to {parsed.moment!r}"
    assert parsed.moment.tzinfo is None


def test_offset_crossing_midnight_changes_the_date() -> None:
    parsed = DateValue.parse("2021-01-01T01:00:00+02:00")
    assert parsed.moment == dt.datetime(2020, 12, 31, 23, 0)
    assert _lookup(parsed, "y") == "2020"


@pytest.mark.parametrize(
    "text", ["not-a-date", "2020-13-01", "2020-02-30", "07:08:09", ""]
)
def test_parse_failure_names_the_input(text: str) -> None:
    with pytest.raises(DateParseError) as excinfo:
        DateValue.parse(text)
    assert excinfo.value.text == text
    assert text in str(excinfo.value)


def test_parse_error_is_a_value_error() -> None:
    with pytest.raises(ValueError, match="not-a-date"):
        DateValue.parse("not-a-date")


def test_construction_normalizes_dates_and_offsets() -> None:
    assert DateValue(dt.date(2020, 3, 5)).moment == dt.datetime(2020, 3, 5)
    aware = dt.datetime(2020, 3, 5, 12, tzinfo=dt.timezone(dt.timedelta(hours=-5)))
    assert DateValue(aware).moment == dt.datetime(2020, 3, 5, 17)


def test_now_is_naive_utc() -> None:
    before = dt.datetime.now(dt.UTC).replace(tzinfo=None)
    value = DateValue.now()
    after = dt.datetime.now(dt.UTC).replace(tzinfo=None)
    assert value.moment.tzinfo is None
    assert before <= value.moment <= after


def test_values_order_by_instant() -> None:
    earlier = DateValue.parse("2020-01-01")
    later = DateValue.parse("2020-01-01T00:00:01")
    assert earlier < later
    assert sorted([later, earlier]) == [earlier, later]
    assert DateValue.parse("2020-01-01") == earlier


def test_section_exposes_components_through_template(thursday: DateValue) -> None:
    template = compile_template("{{#date}}{{a}}, {{e}} {{b}} {{y}}{{/date}}")
    assert template.render(Fields({"date": thursday})) == "Thu, 5 Mar 2020"
    template = compile_template("{{y}}-{{m}}-{{d}}T{{H}}:{{M}}:{{S}}")
    assert template.render(thursday) == "2020-03-05T07:08:09"


def test_direct_reference_prints_nothing(thursday: DateValue) -> None:
    encoder = StringEncoder()
    thursday.render_escaped(encoder)
    thursday.render_unescaped(encoder)
    assert encoder.getvalue() == ""
    assert str(thursday) == "2020-03-05T07:08:09"


def test_padding_table_covers_every_component() -> None:
    """Months, days, hours, minutes and seconds all index inside the table."""
    assert len(PADDED_NUMBERS) == 60
    assert all(len(entry) == 2 for entry in PADDED_NUMBERS)
    assert all(int(PADDED_NUMBERS[n]) == n for n in range(60))
    for upper in (12, 31, 23, 59):
        assert PADDED_NUMBERS[upper] == f"{upper:02d}"
    assert len(MONTH_ABBREVIATIONS) == 12
