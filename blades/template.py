"""Compile and render logic-less, mustache-style templates.

The engine knows nothing about the values it renders. Every tag is turned
into a question for the :class:`~blades.content.Content` objects on the
context stack, innermost first, and the first context that reports the name
as found wins.

Supported tags
--------------
- ``{{name}}``: escaped field.
- ``{{{name}}}`` and ``{{&name}}``: unescaped field.
- ``{{#name}}...{{/name}}``: section, driven by the value's
  ``render_section``.
- ``{{^name}}...{{/name}}``: inverted section; also rendered when no context
  knows ``name``.
- ``{{!comment}}``: ignored.
- ``{{>partial}}``: another template rendered with the current stack.
- ``{{.}}``: the innermost context rendered directly.

Examples
--------
>>> from blades.content import Fields
>>> from blades.values import List, String
>>> template = compile_template("{{#tags}}[{{.}}]{{/tags}}")
>>> template.render(Fields({"tags": List([String("a"), String("b")])}))
'[a][b]'
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import re
import typing as typ

from .content import StringEncoder, field_hash

if typ.TYPE_CHECKING:
    from .content import Content, Encoder

PartialLookup = cabc.Callable[[str], "Template | None"]

TAG_PATTERN = re.compile(r"\{\{(\{)?\s*([#^/!>&]?)\s*(.*?)\s*(\})?\}\}", re.DOTALL)
IMPLICIT_ITERATOR = "."


class TemplateSyntaxError(ValueError):
    """Raised when a template's sections are unbalanced or malformed."""


class MissingTemplateError(LookupError):
    """Raised when a template or partial cannot be found."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"missing template '{name}'")


@dc.dataclass(frozen=True, slots=True)
class Text:
    text: str


@dc.dataclass(frozen=True, slots=True)
class Variable:
    name: str
    key: int
    escaped: bool


@dc.dataclass(frozen=True, slots=True)
class Block:
    name: str
    key: int
    children: tuple[Node, ...]
    inverted: bool = False


@dc.dataclass(frozen=True, slots=True)
class Partial:
    name: str


Node = Text | Variable | Block | Partial


class Section:
    """A template block paired with the context stack it renders against.

    Content implementations receive a ``Section`` in ``render_section`` and
    decide how many times to render it, optionally pushing themselves (or a
    child value) with :meth:`with_content` first.
    """

    __slots__ = ("_contents", "_nodes", "_partials")

    def __init__(
        self,
        nodes: tuple[Node, ...],
        contents: tuple[Content, ...] = (),
        partials: PartialLookup | None = None,
    ) -> None:
        self._nodes = nodes
        self._contents = contents
        self._partials = partials

    @property
    def contents(self) -> tuple[Content, ...]:
        """Return the context stack, outermost first."""
        return self._contents

    def with_content(self, content: Content) -> Section:
        """Return a copy of this section with ``content`` as the innermost context."""
        return Section(self._nodes, (*self._contents, content), self._partials)

    def render(self, encoder: Encoder) -> None:
        """Render the block once against the current context stack."""
        for node in self._nodes:
            match node:
                case Text(text):
                    encoder.write_unescaped(text)
                case Variable(name, _, escaped) if name == IMPLICIT_ITERATOR:
                    self._render_innermost(escaped, encoder)
                case Variable(name, key, True):
                    self._resolve(
                        lambda c: c.render_field_escaped(key, name, encoder)
                    )
                case Variable(name, key, False):
                    self._resolve(
                        lambda c: c.render_field_unescaped(key, name, encoder)
                    )
                case Block(name, key, children, False):
                    nested = Section(children, self._contents, self._partials)
                    self._resolve(
                        lambda c: c.render_field_section(key, name, nested, encoder)
                    )
                case Block(name, key, children, True):
                    nested = Section(children, self._contents, self._partials)
                    found = self._resolve(
                        lambda c: c.render_field_inverse(key, name, nested, encoder)
                    )
                    if not found:
                        nested.render(encoder)
                case Partial(name):
                    self._render_partial(name, encoder)

    def _resolve(self, attempt: cabc.Callable[[Content], bool]) -> bool:
        for content in reversed(self._contents):
            if attempt(content):
                return True
        return False

    def _render_innermost(self, escaped: bool, encoder: Encoder) -> None:
        if not self._contents:
            return
        innermost = self._contents[-1]
        if escaped:
            innermost.render_escaped(encoder)
        else:
            innermost.render_unescaped(encoder)

    def _render_partial(self, name: str, encoder: Encoder) -> None:
        partial = self._partials(name) if self._partials else None
        if partial is None:
            raise MissingTemplateError(name)
        Section(partial.nodes, self._contents, self._partials).render(encoder)


@dc.dataclass(frozen=True, slots=True)
class Template:
    """A compiled template, immutable and safe to share between threads."""

    name: str
    nodes: tuple[Node, ...]

    def render(
        self, content: Content, *, partials: PartialLookup | None = None
    ) -> str:
        """Render the template with ``content`` as the outermost context."""
        encoder = StringEncoder()
        self.render_to(content, encoder, partials=partials)
        return encoder.getvalue()

    def render_to(
        self,
        content: Content,
        encoder: Encoder,
        *,
        partials: PartialLookup | None = None,
    ) -> None:
        """Render the template into ``encoder``."""
        Section(self.nodes, (content,), partials).render(encoder)


def compile_template(source: str, *, name: str = "<string>") -> Template:
    """Parse ``source`` into a :class:`Template`.

    Parameters
    ----------
    source : str
        Template text.
    name : str, optional
        Name used in error messages and stored on the template.

    Returns
    -------
    Template
        The compiled template.

    Raises
    ------
    TemplateSyntaxError
        If a section is closed without being opened, closed under the wrong
        name, left open at the end of the source, or a tag is empty or
        followed by a stray closing brace.
    """
    root: list[Node] = []
    current = root
    open_blocks: list[tuple[str, bool, list[Node], int]] = []
    position = 0

    for match in TAG_PATTERN.finditer(source):
        start, end = match.span()
        if start > position:
            current.append(Text(source[position:start]))
        position = end
        line = source.count("\n", 0, start) + 1
        triple, sigil, tag, closing = match.groups()

        if triple and not closing:
            msg = f"{name}:{line}: unterminated triple mustache '{{{{{{{tag}'"
            raise TemplateSyntaxError(msg)
        if closing and not triple:
            msg = f"{name}:{line}: unexpected '}}' after tag '{tag}'"
            raise TemplateSyntaxError(msg)
        if sigil == "!":
            continue
        if not tag:
            msg = f"{name}:{line}: empty tag"
            raise TemplateSyntaxError(msg)

        match sigil:
            case "#" | "^":
                open_blocks.append((tag, sigil == "^", current, line))
                current = []
            case "/":
                if not open_blocks:
                    msg = f"{name}:{line}: closing tag '{tag}' has no open section"
                    raise TemplateSyntaxError(msg)
                opened, inverted, parent, _ = open_blocks.pop()
                if opened != tag:
                    msg = (
                        f"{name}:{line}: closing tag '{tag}' does not match "
                        f"open section '{opened}'"
                    )
                    raise TemplateSyntaxError(msg)
                parent.append(Block(tag, field_hash(tag), tuple(current), inverted))
                current = parent
            case ">":
                current.append(Partial(tag))
            case "&":
                current.append(Variable(tag, field_hash(tag), escaped=False))
            case _:
                current.append(Variable(tag, field_hash(tag), escaped=not triple))

    if open_blocks:
        opened, _, _, line = open_blocks[-1]
        msg = f"{name}:{line}: section '{opened}' is never closed"
        raise TemplateSyntaxError(msg)
    if position < len(source):
        current.append(Text(source[position:]))
    return Template(name, tuple(root))


__all__ = [
    "MissingTemplateError",
    "Section",
    "Template",
    "TemplateSyntaxError",
    "compile_template",
]
