"""Calendar values exposed to templates through single-letter fields.

A :class:`DateValue` prints nothing on its own. Templates open it as a
section and pick components by letter, which keeps formatting in the template
and off the Python side::

    {{#date}}{{y}}-{{m}}-{{d}} ({{a}}){{/date}}

Recognised letters are ``y`` (year), ``m`` (two-digit month), ``d`` (two-digit
day), ``e`` (unpadded day), ``H``/``M``/``S`` (two-digit hour, minute and
second), ``a`` (weekday abbreviation) and ``b`` (month abbreviation). Any
longer name is deliberately unknown so it falls through to the enclosing
context.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import datetime as dt
import re
import typing as typ

from blades._constants import (
    MONTH_ABBREVIATIONS,
    PADDED_NUMBERS,
    WEEKDAY_ABBREVIATIONS,
)
from blades.content import Content

if typ.TYPE_CHECKING:
    from blades.content import Encoder
    from blades.template import Section

EXCESS_FRACTION = re.compile(r"(\.\d{6})\d+")


class DateParseError(ValueError):
    """Raised when text matches none of the accepted date formats."""

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"unable to parse date and time from {text}")


def _strptime(fmt: str) -> cabc.Callable[[str], dt.datetime]:
    def parse(text: str) -> dt.datetime:
        return dt.datetime.strptime(text, fmt)  # noqa: DTZ007 - naive by design

    return parse


def _parse_with_offset(text: str) -> dt.datetime:
    parsed = dt.datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        msg = f"{text!r} carries no UTC offset"
        raise ValueError(msg)
    return parsed


# Tried in order; the first that succeeds wins.
PARSERS: tuple[cabc.Callable[[str], dt.datetime], ...] = (
    _strptime("%Y-%m-%dT%H:%M:%S.%f"),
    _strptime("%Y-%m-%dT%H:%M:%S"),
    _strptime("%Y-%m-%d"),
    _strptime("%Y-%m-%d %H:%M:%S.%f"),
    _strptime("%Y-%m-%d %H:%M:%S"),
    _parse_with_offset,
)

FIELDS: dict[str, cabc.Callable[[dt.datetime], str]] = {
    "y": lambda moment: str(moment.year),
    "m": lambda moment: PADDED_NUMBERS[moment.month],
    "d": lambda moment: PADDED_NUMBERS[moment.day],
    "e": lambda moment: str(moment.day),
    "H": lambda moment: PADDED_NUMBERS[moment.hour],
    "M": lambda moment: PADDED_NUMBERS[moment.minute],
    "S": lambda moment: PADDED_NUMBERS[moment.second],
    "a": lambda moment: WEEKDAY_ABBREVIATIONS[moment.isoweekday() % 7],
    "b": lambda moment: MONTH_ABBREVIATIONS[moment.month - 1],
}


@dc.dataclass(frozen=True, slots=True, order=True)
class DateValue(Content):
    """A naive date-time in UTC.

    Aware datetimes are converted to UTC and stripped of their offset; bare
    dates become midnight of that day.
    """

    moment: dt.datetime

    def __post_init__(self) -> None:
        moment = self.moment
        if not isinstance(moment, dt.datetime):
            moment = dt.datetime.combine(moment, dt.time())
        if moment.tzinfo is not None:
            moment = moment.astimezone(dt.UTC).replace(tzinfo=None)
        object.__setattr__(self, "moment", moment)

    def __str__(self) -> str:
        return self.isoformat()

    @classmethod
    def parse(cls, text: str) -> DateValue:
        """Parse ``text`` using the first accepted format that matches.

        Parameters
        ----------
        text : str
            ``YYYY-MM-DD``, ``YYYY-MM-DDTHH:MM:SS[.frac]``,
            ``YYYY-MM-DD HH:MM:SS[.frac]`` or any date-time carrying a UTC
            offset (for example ``2021-01-01T10:20:30+02:00``).

        Returns
        -------
        DateValue
            The parsed value, normalized to naive UTC.

        Raises
        ------
        DateParseError
            If no format matches. The error names ``text`` verbatim.
        """
        candidate = EXCESS_FRACTION.sub(r"\1", text.strip())
        for parser in PARSERS:
            try:
                return cls(parser(candidate))
            except ValueError:
                continue
        raise DateParseError(text)

    @classmethod
    def now(cls) -> DateValue:
        """Capture the current time."""
        return cls(dt.datetime.now(dt.UTC))

    def isoformat(self) -> str:
        return self.moment.isoformat()

    def render_section(self, section: Section, encoder: Encoder) -> None:
        section.with_content(self).render(encoder)

    def render_field_escaped(self, key: int, name: str, encoder: Encoder) -> bool:
        if len(name) != 1:
            return False
        component = FIELDS.get(name)
        if component is None:
            return False
        encoder.write_unescaped(component(self.moment))
        return True

    def render_field_unescaped(self, key: int, name: str, encoder: Encoder) -> bool:
        return self.render_field_escaped(key, name, encoder)


__all__ = ["DateParseError", "DateValue"]
