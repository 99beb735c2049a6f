"""Cyclopts CLI entrypoint for building blades sites.

The ``blades`` console script renders every Markdown page under the site's
content directory through the site and theme templates, and can list the
templates a site resolves. Every option can also be supplied through a
``BLADES_`` prefixed environment variable.

Examples
--------
Build the site described by ``blades.yaml`` in the working directory:

>>> from blades.cli import main
>>> main()  # doctest: +SKIP

Build into a different output folder:

>>> from blades.cli import app
>>> app(["build", "--output-dir", "dist"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .builder import SiteBuilder
from .config import load_site_config
from .templates import Templates

DEFAULT_CONFIG = Path("blades.yaml")

app = App(name="blades", config=cyclopts.config.Env("BLADES_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command(help="Render every page of the site to HTML.")
def build(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="BLADES_CONFIG")
    ] = DEFAULT_CONFIG,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="BLADES_OUTPUT_DIR"),
    ] = None,
    verbose: typ.Annotated[
        bool, Parameter(help="Log every template and page as it is processed")
    ] = False,
) -> None:
    """Build the site described by ``config``.

    Parameters
    ----------
    config : Path, optional
        Path to the ``blades.yaml`` configuration file (overridable via
        ``BLADES_CONFIG``).
    output_dir : Path or None, optional
        Override the configured output directory.
    verbose : bool, optional
        Emit debug logging for templates and pages.

    Returns
    -------
    None
        Writes rendered pages and prints their paths.
    """
    _configure_logging(verbose)
    site_config = load_site_config(config)
    if output_dir is not None:
        site_config.output_dir = output_dir
    for path in SiteBuilder(site_config).run():
        print(f"wrote {_format_path(path)}")


@app.command(help="List the templates available to the site.")
def templates(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="BLADES_CONFIG")
    ] = DEFAULT_CONFIG,
) -> None:
    """Print the name of every template the site and its theme provide."""
    site_config = load_site_config(config)
    for name in Templates.load(site_config).names:
        print(name)


def main() -> None:
    """Invoke the Cyclopts application that powers the `blades` console command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
