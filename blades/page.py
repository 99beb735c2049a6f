"""Load Markdown pages and their TOML front matter into render contexts.

A page source looks like::

    +++
    title = "Hello"
    date = 2020-03-05T07:08:09
    template = "post.html"

    [extra]
    tags = ["intro", "meta"]
    +++
    The *Markdown* body.

The front matter is optional. ``date`` may be a TOML date-time, a TOML date,
or a string in any format :meth:`~blades.values.DateValue.parse` accepts.
Everything under ``[extra]`` is exposed to templates as ``extra`` without a
schema.
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import logging
import tomllib
import typing as typ
from pathlib import Path, PurePath

from ._constants import FRONT_MATTER_FENCE, INDEX_STEM
from .content import Content, Fields
from .values import (
    DateParseError,
    DateValue,
    DynamicValue,
    Map,
    PathSegments,
    String,
    ValueConversionError,
)

if typ.TYPE_CHECKING:
    from .renderer import HtmlContentRenderer

logger = logging.getLogger(__name__)

KNOWN_KEYS = frozenset({"title", "date", "template", "extra"})


class PageSourceError(ValueError):
    """Raised when a page's front matter cannot be parsed."""


@dc.dataclass(frozen=True, slots=True)
class Page:
    """A parsed page, ready to be rendered by a template."""

    source: Path
    path: PathSegments
    title: str = ""
    date: DateValue | None = None
    template: str | None = None
    extra: Map = dc.field(default_factory=Map)
    content: str = ""

    def context(self, site: Content) -> Fields:
        """Return the fields a template sees when rendering this page."""
        fields: dict[str, Content] = {
            "title": String(self.title),
            "path": self.path,
            "content": String(self.content),
            "extra": self.extra,
            "site": site,
        }
        if self.date is not None:
            fields["date"] = self.date
        return Fields(fields)


def split_front_matter(text: str) -> tuple[str, str]:
    """Split ``text`` into its front matter and body.

    Returns an empty front matter when the first line is not a ``+++`` fence.

    Raises
    ------
    PageSourceError
        If the opening fence is never closed.
    """
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].strip() != FRONT_MATTER_FENCE:
        return "", text
    for index, line in enumerate(lines[1:], start=1):
        if line.strip() == FRONT_MATTER_FENCE:
            return "".join(lines[1:index]), "".join(lines[index + 1 :])
    msg = f"front matter opened with '{FRONT_MATTER_FENCE}' is never closed"
    raise PageSourceError(msg)


def page_path(source: Path, content_dir: Path) -> PathSegments:
    """Return the output path of ``source`` relative to ``content_dir``.

    The suffix is dropped and an ``index`` page stands for its directory, so
    ``blog/index.md`` and ``blog.md`` both map to ``blog``.
    """
    relative = PurePath(source).relative_to(content_dir).with_suffix("")
    if relative.name == INDEX_STEM:
        relative = relative.parent
    text = str(relative)
    return PathSegments("" if text == "." else text)


def load_page(
    source: Path, *, content_dir: Path, renderer: HtmlContentRenderer
) -> Page:
    """Read and parse one page source.

    Parameters
    ----------
    source : Path
        Markdown file inside ``content_dir``.
    content_dir : Path
        Root of the site's content tree.
    renderer : HtmlContentRenderer
        Converts the Markdown body to HTML.

    Returns
    -------
    Page
        The parsed page.

    Raises
    ------
    PageSourceError
        If the front matter is unterminated, is not valid TOML, or holds a
        value that cannot be exposed to templates.
    """
    text = source.read_text(encoding="utf-8")
    try:
        header, body = split_front_matter(text)
        meta = tomllib.loads(header)
        unknown = sorted(set(meta) - KNOWN_KEYS)
        if unknown:
            logger.warning("%s: ignoring unknown keys %s", source, ", ".join(unknown))
        page = Page(
            source=source,
            path=page_path(source, content_dir),
            title=_optional_str(meta, "title") or "",
            date=_parse_date(meta.get("date")),
            template=_optional_str(meta, "template"),
            extra=_build_extra(meta.get("extra")),
            content=renderer.markdown(body),
        )
    except (
        tomllib.TOMLDecodeError,
        DateParseError,
        ValueConversionError,
        PageSourceError,
    ) as exc:
        msg = f"{source}: {exc}"
        raise PageSourceError(msg) from exc
    logger.debug("Loaded page %s as '%s'", source, page.path)
    return page


def _optional_str(meta: dict[str, typ.Any], key: str) -> str | None:
    value = meta.get(key)
    if value is None or isinstance(value, str):
        return value
    msg = f"'{key}' must be a string, got {type(value).__name__}"
    raise PageSourceError(msg)


def _parse_date(value: object) -> DateValue | None:
    match value:
        case None:
            return None
        case str():
            return DateValue.parse(value)
        case dt.date():
            return DateValue(value)
        case _:
            msg = f"'date' must be a date or a string, got {type(value).__name__}"
            raise PageSourceError(msg)


def _build_extra(value: object) -> Map:
    match value:
        case None:
            return Map()
        case dict():
            return typ.cast("Map", DynamicValue.from_raw(value, where="extra"))
        case _:
            msg = "'extra' must be a table"
            raise PageSourceError(msg)


__all__ = ["Page", "PageSourceError", "load_page", "page_path", "split_front_matter"]
