"""Load and validate the site configuration for blades builds.

This subpackage parses the project's ``blades.yaml`` file into a
:class:`SiteConfig` that the template registry, page loader, and builder
consume. Free-form ``extra`` data is converted to a
:class:`~blades.values.Map` so templates can reach it as ``site.extra``.

Examples
--------
>>> from pathlib import Path
>>> from blades.config import load_site_config
>>> site = load_site_config(Path("blades.yaml"))  # doctest: +SKIP
>>> site.page_template  # doctest: +SKIP
'page.html'
"""

from .loader import load_site_config
from .models import SiteConfig, SiteConfigError

__all__ = ["SiteConfig", "SiteConfigError", "load_site_config"]
