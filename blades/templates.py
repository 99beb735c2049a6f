"""Registry of the site's templates and its theme's templates.

Templates live in the site's ``templates`` directory and, when a theme is
configured, in ``<theme_dir>/<theme>/templates``. A site template shadows a
theme template of the same name, which is how sites override single pieces
of a theme. Discovery and search order come from Jinja's
:class:`~jinja2.FileSystemLoader`; the sources themselves are compiled by
:func:`blades.template.compile_template`.

Examples
--------
>>> from pathlib import Path
>>> from blades.config import load_site_config
>>> from blades.templates import Templates
>>> site = load_site_config(Path("blades.yaml"))  # doctest: +SKIP
>>> templates = Templates.load(site)  # doctest: +SKIP
>>> templates.get("page.html").name  # doctest: +SKIP
'page.html'
"""

from __future__ import annotations

import logging
import types
import typing as typ

from jinja2 import Environment, FileSystemLoader

from ._constants import TEMPLATE_DIR, TEMPLATE_SUFFIX
from .template import MissingTemplateError, Template, compile_template

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from .config import SiteConfig
    from .content import Content

logger = logging.getLogger(__name__)


class Templates:
    """Compiled templates keyed by their path relative to the template root.

    The registry is filled once by :meth:`load` (or :meth:`from_folders`) and
    never changes afterwards, so it can be shared by concurrent renders.
    """

    def __init__(self, templates: cabc.Mapping[str, Template]) -> None:
        self._templates = types.MappingProxyType(dict(templates))

    @classmethod
    def load(cls, config: SiteConfig) -> Templates:
        """Load the site's templates followed by its theme's templates.

        Parameters
        ----------
        config : SiteConfig
            Site configuration naming the template directory, the theme
            directory, and the theme.

        Returns
        -------
        Templates
            Registry holding every ``.html`` template found. Directories that
            do not exist are skipped.
        """
        folders = [config.templates_dir]
        if config.theme:
            folders.append(config.theme_dir / config.theme / TEMPLATE_DIR)
        return cls.from_folders(*folders)

    @classmethod
    def from_folders(cls, *folders: Path) -> Templates:
        """Compile every ``.html`` template under ``folders``, earliest first."""
        existing: list[str] = []
        for folder in folders:
            if folder.is_dir():
                existing.append(str(folder))
            else:
                logger.debug("Template directory %s does not exist, skipping", folder)
        loader = FileSystemLoader(existing)
        environment = Environment(loader=loader, autoescape=False)
        templates: dict[str, Template] = {}
        for name in loader.list_templates():
            if not name.endswith(TEMPLATE_SUFFIX):
                continue
            source, filename, _ = loader.get_source(environment, name)
            logger.debug("Compiling template %s from %s", name, filename)
            templates[name] = compile_template(source, name=name)
        return cls(templates)

    def __contains__(self, name: object) -> bool:
        return name in self._templates

    def __len__(self) -> int:
        return len(self._templates)

    @property
    def names(self) -> list[str]:
        """Return the sorted names of all loaded templates."""
        return sorted(self._templates)

    def find(self, name: str) -> Template | None:
        """Return the template called ``name`` or ``None``."""
        return self._templates.get(name)

    def get(self, name: str) -> Template:
        """Return the template called ``name``.

        Raises
        ------
        MissingTemplateError
            If neither the site nor the theme provides ``name``.
        """
        template = self._templates.get(name)
        if template is None:
            raise MissingTemplateError(name)
        return template

    def render(self, name: str, content: Content) -> str:
        """Render template ``name`` with partials resolved through this registry."""
        return self.get(name).render(content, partials=self.find)


__all__ = ["MissingTemplateError", "Templates"]
