"""Recursive value type for user-authored page and site metadata.

Front matter and config files hold data whose shape is only known at build
time. :func:`DynamicValue.from_raw` converts the parsed data into a closed set
of immutable variants (:class:`Number`, :class:`String`, :class:`DateTime`,
:class:`List` and :class:`Map`) that all speak the rendering contract.

Only collections are truthy. Scalars print through interpolation; opening one
as a section renders the block once without making the scalar the context.

Examples
--------
>>> from blades.template import compile_template
>>> value = DynamicValue.from_raw({"authors": [{"name": "Ada"}, {"name": "Alan"}]})
>>> compile_template("{{#authors}}{{name}};{{/authors}}").render(value)
'Ada;Alan;'
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import datetime as dt
import types
import typing as typ
from decimal import Decimal

from blades.content import Content

from .dates import DateValue

if typ.TYPE_CHECKING:
    from blades.content import Encoder
    from blades.template import Section


class ValueConversionError(TypeError):
    """Raised when parsed data contains a value with no matching variant."""


def _format_number(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    # shortest round-tripping digits, written positionally: 1e-05 -> 0.00001
    return format(Decimal(repr(value)), "f")


class DynamicValue(Content):
    """Base of the closed variant set; every method dispatches on the variant."""

    __slots__ = ()

    @classmethod
    def from_raw(cls, raw: object, *, where: str = "value") -> DynamicValue:
        """Convert parsed TOML or YAML data into a value tree.

        Parameters
        ----------
        raw : object
            Parsed data: numbers, strings, dates, datetimes, lists and
            mappings, nested arbitrarily.
        where : str, optional
            Location used in error messages, extended with keys and indexes
            while descending.

        Returns
        -------
        DynamicValue
            The converted tree.

        Raises
        ------
        ValueConversionError
            If ``raw`` contains booleans, nulls, bare times or any other type
            without a variant.
        """
        match raw:
            case DynamicValue():
                return raw
            case bool() | None:
                pass
            case int() | float():
                return Number(float(raw))
            case str():
                return String(raw)
            case DateValue():
                return DateTime(raw)
            case dt.date():
                return DateTime(DateValue(raw))
            case cabc.Mapping():
                return Map(
                    {
                        str(key): cls.from_raw(item, where=f"{where}.{key}")
                        for key, item in raw.items()
                    }
                )
            case list() | tuple():
                return List(
                    [
                        cls.from_raw(item, where=f"{where}[{index}]")
                        for index, item in enumerate(raw)
                    ]
                )
        msg = f"{where}: cannot represent {type(raw).__name__} as a dynamic value"
        raise ValueConversionError(msg)

    def is_truthy(self) -> bool:
        match self:
            case List(items):
                return bool(items)
            case Map(entries):
                return bool(entries)
            case _:
                return False

    def render_escaped(self, encoder: Encoder) -> None:
        match self:
            case Number(value):
                encoder.write_unescaped(_format_number(value))
            case String(text):
                encoder.write_escaped(text)
            case DateTime(date):
                date.render_escaped(encoder)

    def render_unescaped(self, encoder: Encoder) -> None:
        match self:
            case Number(value):
                encoder.write_unescaped(_format_number(value))
            case String(text):
                encoder.write_unescaped(text)
            case DateTime(date):
                date.render_unescaped(encoder)

    def render_section(self, section: Section, encoder: Encoder) -> None:
        match self:
            case List(items):
                for item in items:
                    section.with_content(item).render(encoder)
            case Map(entries):
                if entries:
                    section.with_content(self).render(encoder)
            case _:
                section.render(encoder)

    def render_field_escaped(self, key: int, name: str, encoder: Encoder) -> bool:
        match self:
            case Map(entries) if name in entries:
                entries[name].render_escaped(encoder)
                return True
            case _:
                return False

    def render_field_unescaped(self, key: int, name: str, encoder: Encoder) -> bool:
        match self:
            case Map(entries) if name in entries:
                entries[name].render_unescaped(encoder)
                return True
            case _:
                return False

    def render_field_section(
        self, key: int, name: str, section: Section, encoder: Encoder
    ) -> bool:
        match self:
            case Map(entries) if name in entries:
                entries[name].render_section(section, encoder)
                return True
            case _:
                return False

    def render_field_inverse(
        self, key: int, name: str, section: Section, encoder: Encoder
    ) -> bool:
        match self:
            case Map(entries) if name in entries:
                entries[name].render_inverse(section, encoder)
                return True
            case _:
                return False


@dc.dataclass(frozen=True, slots=True)
class Number(DynamicValue):
    value: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", float(self.value))


@dc.dataclass(frozen=True, slots=True)
class String(DynamicValue):
    text: str


@dc.dataclass(frozen=True, slots=True)
class DateTime(DynamicValue):
    date: DateValue


@dc.dataclass(frozen=True, slots=True)
class List(DynamicValue):
    """An ordered sequence, stored as a tuple."""

    items: tuple[DynamicValue, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))


@dc.dataclass(frozen=True, slots=True)
class Map(DynamicValue):
    """A read-only mapping that keeps insertion order."""

    entries: cabc.Mapping[str, DynamicValue] = dc.field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", types.MappingProxyType(dict(self.entries)))

    def get(self, name: str) -> DynamicValue | None:
        return self.entries.get(name)


__all__ = [
    "DateTime",
    "DynamicValue",
    "List",
    "Map",
    "Number",
    "String",
    "ValueConversionError",
]
