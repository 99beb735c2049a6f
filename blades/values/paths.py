"""Breadcrumb view over a page path."""

from __future__ import annotations

import dataclasses as dc
import os
import re
import typing as typ

from blades.content import Content

if typ.TYPE_CHECKING:
    from blades.content import Encoder
    from blades.template import Section

SEPARATORS = re.compile("[" + re.escape(os.sep + (os.altsep or "")) + "]")


@dc.dataclass(frozen=True, slots=True)
class Segment(Content):
    """One breadcrumb entry: the segment's own name and the path up to it."""

    name: str
    full: str

    def _field(self, name: str) -> str | None:
        match name:
            case "name":
                return self.name
            case "full":
                return self.full
            case _:
                return None

    def render_field_escaped(self, key: int, name: str, encoder: Encoder) -> bool:
        value = self._field(name)
        if value is None:
            return False
        encoder.write_escaped(value)
        return True

    def render_field_unescaped(self, key: int, name: str, encoder: Encoder) -> bool:
        value = self._field(name)
        if value is None:
            return False
        encoder.write_unescaped(value)
        return True

    def render_field_section(
        self, key: int, name: str, section: Section, encoder: Encoder
    ) -> bool:
        value = self._field(name)
        if value is None:
            return False
        if value:
            section.render(encoder)
        return True

    def render_field_inverse(
        self, key: int, name: str, section: Section, encoder: Encoder
    ) -> bool:
        value = self._field(name)
        if value is None:
            return False
        if not value:
            section.render(encoder)
        return True


@dc.dataclass(frozen=True, slots=True)
class PathSegments(Content):
    """A relative path that renders as ``/path`` or iterates as breadcrumbs.

    The wrapped text never starts with a separator; rendering it directly adds
    one back. Opening it as a section yields a :class:`Segment` per ancestor:

    >>> from blades.content import Fields
    >>> from blades.template import compile_template
    >>> template = compile_template("{{#path}}<{{full}}>{{/path}}")
    >>> template.render(Fields({"path": PathSegments("blog/2020/post")}))
    '<blog><blog/2020><blog/2020/post>'
    """

    text: str = ""

    def __str__(self) -> str:
        return self.text

    def segments(self) -> typ.Iterator[Segment]:
        """Yield the breadcrumb entries for this path, outermost first."""
        text = self.text
        if not text:
            return
        previous = 0
        for match in SEPARATORS.finditer(text):
            index = match.start()
            yield Segment(text[previous:index], text[:index])
            previous = match.end()
        if previous < len(text):
            yield Segment(text[previous:], text)

    def is_truthy(self) -> bool:
        return bool(self.text)

    def render_escaped(self, encoder: Encoder) -> None:
        if self.text:
            encoder.write_unescaped("/")
            encoder.write_escaped(self.text)

    def render_unescaped(self, encoder: Encoder) -> None:
        if self.text:
            encoder.write_unescaped("/")
            encoder.write_unescaped(self.text)

    def render_section(self, section: Section, encoder: Encoder) -> None:
        for segment in self.segments():
            section.with_content(segment).render(encoder)


__all__ = ["PathSegments", "Segment"]
