"""Load the site configuration YAML into a typed dataclass."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from blades.values import DynamicValue, Map, ValueConversionError

from .models import SiteConfig, SiteConfigError

_STRING_FIELDS = ("title", "url", "theme", "page_template", "pygments_style")
_PATH_FIELDS = ("theme_dir", "templates_dir", "content_dir", "output_dir")


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML file describing a site.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration (for example,
        ``blades.yaml``). Relative directories inside it resolve against the
        file's parent directory.

    Returns
    -------
    SiteConfig
        Parsed configuration with defaults applied for absent keys.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If a field has the wrong type or ``extra`` holds values that cannot
        be exposed to templates.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from blades.config import load_site_config
    >>> config = load_site_config(Path("blades.yaml"))  # doctest: +SKIP
    >>> config.output_dir.name  # doctest: +SKIP
    'public'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    root = path.parent
    config = SiteConfig()
    for name in _STRING_FIELDS:
        if name in raw:
            setattr(config, name, _require_str(raw[name], name))
    for name in _PATH_FIELDS:
        value = _require_str(raw[name], name) if name in raw else None
        setattr(config, name, root / (value or getattr(config, name)))
    config.extra = _build_extra(raw.get("extra"))

    unknown = sorted(set(raw) - {*_STRING_FIELDS, *_PATH_FIELDS, "extra"})
    if unknown:
        msg = f"Unknown configuration keys: {', '.join(unknown)}."
        raise SiteConfigError(msg)
    return config


def _require_str(value: object, name: str) -> str:
    """Return ``value`` when it is a string, otherwise fail naming the key."""
    if not isinstance(value, str):
        msg = f"'{name}' must be a string, got {type(value).__name__}."
        raise SiteConfigError(msg)
    return value


def _build_extra(payload: object) -> Map:
    match payload:
        case None:
            return Map()
        case dict():
            try:
                value = DynamicValue.from_raw(payload, where="extra")
            except ValueConversionError as exc:
                raise SiteConfigError(str(exc)) from exc
            return typ.cast("Map", value)
        case _:
            msg = "'extra' must be a mapping."
            raise SiteConfigError(msg)
