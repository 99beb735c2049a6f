"""Unit tests for loading ``blades.yaml`` site configuration.

Usage
-----
Run ``pytest tests/test_config.py -v``.
"""

from __future__ import annotations

import datetime as dt
import typing as typ

import pytest

from blades.config import SiteConfig, SiteConfigError, load_site_config
from blades.template import compile_template
from blades.values import DateTime, DateValue, Map, Number, String

if typ.TYPE_CHECKING:
    from pathlib import Path


def _write_config(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "blades.yaml"
    path.write_text(text.strip() + "\n", encoding="utf-8")
    return path


def test_defaults_resolve_against_config_directory(tmp_path: Path) -> None:
    config = load_site_config(_write_config(tmp_path, "title: Blades"))
    assert config.title == "Blades"
    assert config.theme == ""
    assert config.content_dir == tmp_path / "content"
    assert config.templates_dir == tmp_path / "templates"
    assert config.theme_dir == tmp_path / "themes"
    assert config.output_dir == tmp_path / "public"
    assert config.page_template == "page.html"
    assert config.extra == Map()


def test_explicit_values_override_defaults(tmp_path: Path) -> None:
    output = tmp_path / "elsewhere"
    config = load_site_config(
        _write_config(
            tmp_path,
            f"""
title: Blades
url: https://example.invalid
theme: plain
theme_dir: vendor/themes
output_dir: {output}
page_template: post.html
pygments_style: friendly
extra:
  launched: 2020-03-05
  version: 2
  links:
    - label: Home
        """,
        )
    )
    assert config.url == "https://example.invalid"
    assert config.theme == "plain"
    assert config.theme_dir == tmp_path / "vendor" / "themes"
    assert config.output_dir == output
    assert config.page_template == "post.html"
    assert config.pygments_style == "friendly"
    assert config.extra.get("launched") == DateTime(
        DateValue(dt.datetime(2020, 3, 5))
    )
    assert config.extra.get("version") == Number(2)


def test_site_context_exposes_title_url_and_extra() -> None:
    config = SiteConfig(
        title="Blades", url="https://example.invalid", extra=Map({"a": String("b")})
    )
    template = compile_template("{{title}} {{url}} {{#extra}}{{a}}{{/extra}}")
    assert template.render(config.context()) == "Blades https://example.invalid b"


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="not found"):
        load_site_config(tmp_path / "absent.yaml")


def test_non_mapping_document_raises(tmp_path: Path) -> None:
    with pytest.raises(TypeError, match="must be a mapping"):
        load_site_config(_write_config(tmp_path, "- just\n- a list"))


@pytest.mark.parametrize(
    ("text", "message"),
    [
        ("title: 3", "'title' must be a string"),
        ("output_dir: [a]", "'output_dir' must be a string"),
        ("extra: nope", "'extra' must be a mapping"),
        ("extra:\n  draft: true", r"extra\.draft"),
        ("themes: plain", "Unknown configuration keys: themes"),
    ],
)
def test_invalid_values_raise_site_config_error(
    tmp_path: Path, text: str, message: str
) -> None:
    with pytest.raises(SiteConfigError, match=message):
        load_site_config(_write_config(tmp_path, text))
