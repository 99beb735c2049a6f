"""The rendering contract shared by every value embedded in a template.

Templates never inspect the values they render. Instead the engine asks each
value a fixed set of questions: is it truthy, how does it print itself
(escaped or raw), how does it drive a section block, and can it resolve a
named field. :class:`Content` carries the default answers; the value types
in :mod:`blades.values` override the ones they care about.

Field lookups return ``True`` when ``self`` owns the name and ``False``
otherwise, so the engine can keep searching enclosing contexts. A miss is
never an exception.

Examples
--------
>>> from blades.content import Fields, StringEncoder
>>> from blades.values import String
>>> encoder = StringEncoder()
>>> Fields({"title": String("<Home>")}).render_field_escaped(
...     field_hash("title"), "title", encoder
... )
True
>>> encoder.getvalue()
'&lt;Home&gt;'
"""

from __future__ import annotations

import collections.abc as cabc
import html
import types
import typing as typ
import zlib

if typ.TYPE_CHECKING:
    from .template import Section


def field_hash(name: str) -> int:
    """Return the stable hash the engine passes alongside ``name``."""
    return zlib.crc32(name.encode("utf-8"))


class Encoder(typ.Protocol):
    """Output sink receiving rendered text."""

    def write_escaped(self, text: str) -> None: ...

    def write_unescaped(self, text: str) -> None: ...


class StringEncoder:
    """Collect rendered output in memory, HTML-escaping where requested."""

    def __init__(self) -> None:
        self._parts: list[str] = []

    def write_escaped(self, text: str) -> None:
        self._parts.append(html.escape(text, quote=True))

    def write_unescaped(self, text: str) -> None:
        self._parts.append(text)

    def getvalue(self) -> str:
        """Return everything written so far."""
        return "".join(self._parts)


class StreamEncoder:
    """Write rendered output straight to a text stream.

    Errors raised by the stream (for example ``OSError`` on a full disk)
    propagate to the caller unchanged.
    """

    def __init__(self, stream: typ.TextIO) -> None:
        self._stream = stream

    def write_escaped(self, text: str) -> None:
        self._stream.write(html.escape(text, quote=True))

    def write_unescaped(self, text: str) -> None:
        self._stream.write(text)


class Content:
    """Base implementation of the rendering contract.

    The defaults describe an opaque value: it is truthy, prints nothing, renders
    a section block once without becoming its context, and owns no fields.
    """

    __slots__ = ()

    def is_truthy(self) -> bool:
        return True

    def render_escaped(self, encoder: Encoder) -> None:
        return None

    def render_unescaped(self, encoder: Encoder) -> None:
        return None

    def render_section(self, section: Section, encoder: Encoder) -> None:
        if self.is_truthy():
            section.render(encoder)

    def render_inverse(self, section: Section, encoder: Encoder) -> None:
        if not self.is_truthy():
            section.render(encoder)

    def render_field_escaped(self, key: int, name: str, encoder: Encoder) -> bool:
        return False

    def render_field_unescaped(self, key: int, name: str, encoder: Encoder) -> bool:
        return False

    def render_field_section(
        self, key: int, name: str, section: Section, encoder: Encoder
    ) -> bool:
        return False

    def render_field_inverse(
        self, key: int, name: str, section: Section, encoder: Encoder
    ) -> bool:
        return False


class Fields(Content):
    """Record-style content exposing a fixed set of named values.

    Page and site contexts are built from ``Fields``: each entry is itself a
    :class:`Content`, and a field tag renders the entry the same way a direct
    reference to it would.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: cabc.Mapping[str, Content]) -> None:
        self._entries = types.MappingProxyType(dict(entries))

    def __repr__(self) -> str:
        return f"Fields({dict(self._entries)!r})"

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def get(self, name: str) -> Content | None:
        """Return the entry stored under ``name``, if any."""
        return self._entries.get(name)

    def is_truthy(self) -> bool:
        return bool(self._entries)

    def render_section(self, section: Section, encoder: Encoder) -> None:
        if self._entries:
            section.with_content(self).render(encoder)

    def render_field_escaped(self, key: int, name: str, encoder: Encoder) -> bool:
        value = self._entries.get(name)
        if value is None:
            return False
        value.render_escaped(encoder)
        return True

    def render_field_unescaped(self, key: int, name: str, encoder: Encoder) -> bool:
        value = self._entries.get(name)
        if value is None:
            return False
        value.render_unescaped(encoder)
        return True

    def render_field_section(
        self, key: int, name: str, section: Section, encoder: Encoder
    ) -> bool:
        value = self._entries.get(name)
        if value is None:
            return False
        value.render_section(section, encoder)
        return True

    def render_field_inverse(
        self, key: int, name: str, section: Section, encoder: Encoder
    ) -> bool:
        value = self._entries.get(name)
        if value is None:
            return False
        value.render_inverse(section, encoder)
        return True


__all__ = [
    "Content",
    "Encoder",
    "Fields",
    "StreamEncoder",
    "StringEncoder",
    "field_hash",
]
