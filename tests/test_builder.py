"""Tests for the site builder and the ``blades`` CLI commands.

Each test lays out a small site (config, templates, theme, content) in
``tmp_path`` and builds it end to end.

Usage
-----
Run ``pytest tests/test_builder.py -v``.
"""

from __future__ import annotations

import typing as typ

import pytest

from blades import cli
from blades.builder import SiteBuildError, SiteBuilder
from blades.config import load_site_config
from blades.page import PageSourceError
from blades.template import MissingTemplateError

if typ.TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """Lay out a site with one local template, one theme template and two pages."""
    (tmp_path / "blades.yaml").write_text(
        "title: Blades\ntheme: plain\n", encoding="utf-8"
    )
    templates = tmp_path / "templates"
    templates.mkdir()
    (templates / "page.html").write_text(
        "<h1>{{title}}</h1>{{{content}}}", encoding="utf-8"
    )
    theme = tmp_path / "themes" / "plain" / "templates"
    theme.mkdir(parents=True)
    (theme / "post.html").write_text(
        "{{#site}}{{title}}{{/site}}:{{title}}"
        "{{#date}} on {{y}}-{{m}}-{{d}}{{/date}}",
        encoding="utf-8",
    )
    content = tmp_path / "content"
    (content / "blog").mkdir(parents=True)
    (content / "index.md").write_text(
        '+++\ntitle = "Home"\n+++\nWelcome\n', encoding="utf-8"
    )
    (content / "blog" / "first.md").write_text(
        '+++\ntitle = "First"\ntemplate = "post.html"\ndate = 2020-03-05\n+++\n',
        encoding="utf-8",
    )
    return tmp_path


def test_run_writes_every_page(site_root: Path) -> None:
    builder = SiteBuilder(load_site_config(site_root / "blades.yaml"))

    written = builder.run()

    public = site_root / "public"
    assert written == [public / "blog" / "first" / "index.html", public / "index.html"]
    assert (public / "index.html").read_text(encoding="utf-8") == (
        "<h1>Home</h1><p>Welcome</p>"
    )
    assert (public / "blog" / "first" / "index.html").read_text(encoding="utf-8") == (
        "Blades:First on 2020-03-05"
    )


def test_run_rejects_two_pages_with_one_output(site_root: Path) -> None:
    (site_root / "content" / "blog.md").write_text("Blog\n", encoding="utf-8")
    (site_root / "content" / "blog" / "index.md").write_text("Blog\n", encoding="utf-8")
    builder = SiteBuilder(load_site_config(site_root / "blades.yaml"))

    with pytest.raises(SiteBuildError, match="both render to"):
        builder.run()
    assert not (site_root / "public").exists()


def test_run_reports_missing_templates(site_root: Path) -> None:
    (site_root / "content" / "odd.md").write_text(
        '+++\ntemplate = "odd.html"\n+++\n', encoding="utf-8"
    )
    builder = SiteBuilder(load_site_config(site_root / "blades.yaml"))
    with pytest.raises(MissingTemplateError, match="odd.html"):
        builder.run([site_root / "content" / "odd.md"])


def test_run_reports_malformed_pages(site_root: Path) -> None:
    bad = site_root / "content" / "bad.md"
    bad.write_text('+++\ndate = "soon"\n+++\n', encoding="utf-8")
    builder = SiteBuilder(load_site_config(site_root / "blades.yaml"))
    with pytest.raises(PageSourceError, match="soon"):
        builder.run()


def test_site_context_carries_highlight_stylesheet(site_root: Path) -> None:
    (site_root / "templates" / "page.html").write_text(
        "<style>{{#site}}{{{pygments_css}}}{{/site}}</style>", encoding="utf-8"
    )
    builder = SiteBuilder(load_site_config(site_root / "blades.yaml"))

    builder.run([site_root / "content" / "index.md"])

    html = (site_root / "public" / "index.html").read_text(encoding="utf-8")
    assert ".codehilite" in html
    assert html.count("<style>") == 1


def test_missing_content_directory_builds_nothing(tmp_path: Path) -> None:
    (tmp_path / "blades.yaml").write_text("title: Empty\n", encoding="utf-8")
    builder = SiteBuilder(load_site_config(tmp_path / "blades.yaml"))
    assert builder.run() == []


def test_cli_build_prints_written_paths(
    site_root: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    output = site_root / "dist"
    cli.build(config=site_root / "blades.yaml", output_dir=output)
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 2
    assert all(line.startswith("wrote ") for line in lines)
    assert (output / "index.html").exists()


def test_cli_templates_lists_site_and_theme(
    site_root: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cli.templates(config=site_root / "blades.yaml")
    assert capsys.readouterr().out.splitlines() == ["page.html", "post.html"]
