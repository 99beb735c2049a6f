"""Render every page of a site through its templates.

:class:`SiteBuilder` ties the pieces together: it loads the template
registry once, parses each Markdown page under the content directory, renders
it with the page's own template (or the site default), and writes
``<output_dir>/<page path>/index.html``.

>>> from pathlib import Path
>>> from blades.builder import SiteBuilder
>>> from blades.config import load_site_config
>>> builder = SiteBuilder(load_site_config(Path("blades.yaml")))  # doctest: +SKIP
>>> builder.run()  # doctest: +SKIP
[PosixPath('public/index.html'), PosixPath('public/blog/index.html')]
"""

from __future__ import annotations

import logging
import typing as typ

from ._constants import PAGE_SUFFIX
from .page import Page, load_page
from .renderer import HtmlContentRenderer
from .templates import Templates

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from .config import SiteConfig

logger = logging.getLogger(__name__)


class SiteBuildError(RuntimeError):
    """Raised when the pages of a site cannot be written consistently."""


class SiteBuilder:
    """Render the pages of one site."""

    def __init__(
        self,
        config: SiteConfig,
        *,
        templates: Templates | None = None,
        renderer: HtmlContentRenderer | None = None,
    ) -> None:
        """Initialize the builder.

        Parameters
        ----------
        config : SiteConfig
            Parsed site configuration.
        templates : Templates, optional
            Pre-loaded registry; defaults to :meth:`Templates.load` on
            ``config``.
        renderer : HtmlContentRenderer, optional
            Markdown renderer; defaults to one using the configured Pygments
            style.
        """
        self.config = config
        self.templates = Templates.load(config) if templates is None else templates
        self.renderer = renderer or HtmlContentRenderer(config.pygments_style)
        self._site = config.context(pygments_css=self.renderer.stylesheet)

    def discover(self) -> list[Path]:
        """Return every page source under the content directory, sorted."""
        content_dir = self.config.content_dir
        if not content_dir.is_dir():
            logger.warning("Content directory %s does not exist", content_dir)
            return []
        return sorted(content_dir.rglob(f"*{PAGE_SUFFIX}"))

    def load(self, sources: cabc.Iterable[Path]) -> list[Page]:
        """Parse ``sources`` into pages."""
        return [
            load_page(
                source, content_dir=self.config.content_dir, renderer=self.renderer
            )
            for source in sources
        ]

    def render(self, page: Page) -> str:
        """Render ``page`` with its template."""
        name = page.template or self.config.page_template
        return self.templates.render(name, page.context(self._site))

    def output_path(self, page: Page) -> Path:
        """Return where ``page`` is written."""
        return self.config.output_dir / str(page.path) / "index.html"

    def run(self, sources: cabc.Iterable[Path] | None = None) -> list[Path]:
        """Render and write pages, returning the written paths.

        Parameters
        ----------
        sources : Iterable[Path], optional
            Page sources to build; defaults to :meth:`discover`.

        Raises
        ------
        SiteBuildError
            If two pages map to the same output path.
        PageSourceError
            If a page's front matter is malformed.
        MissingTemplateError
            If a page names a template that neither the site nor the theme
            provides.
        """
        pages = self.load(self.discover() if sources is None else sources)
        claimed: dict[Path, Page] = {}
        for page in pages:
            target = self.output_path(page)
            if target in claimed:
                msg = (
                    f"{page.source} and {claimed[target].source} "
                    f"both render to {target}"
                )
                raise SiteBuildError(msg)
            claimed[target] = page

        written: list[Path] = []
        for target, page in claimed.items():
            html = self.render(page)
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(html, encoding="utf-8")
            logger.debug("Rendered %s to %s", page.source, target)
            written.append(target)
        return written


__all__ = ["SiteBuildError", "SiteBuilder"]
