"""Typed dataclasses describing a blades site configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from blades._constants import TEMPLATE_DIR
from blades.content import Fields
from blades.values import Map, String


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class SiteConfig:
    """Site-wide settings shared by every rendered page."""

    title: str = ""
    url: str = ""
    theme: str = ""
    theme_dir: Path = Path("themes")
    templates_dir: Path = Path(TEMPLATE_DIR)
    content_dir: Path = Path("content")
    output_dir: Path = Path("public")
    page_template: str = "page.html"
    pygments_style: str = "monokai"
    extra: Map = dc.field(default_factory=Map)

    def context(self, *, pygments_css: str = "") -> Fields:
        """Return the ``site`` context exposed to every page template.

        ``pygments_css`` is the stylesheet for highlighted code blocks, so a
        layout can inline it with ``{{{pygments_css}}}``.
        """
        return Fields(
            {
                "title": String(self.title),
                "url": String(self.url),
                "extra": self.extra,
                "pygments_css": String(pygments_css),
            }
        )
