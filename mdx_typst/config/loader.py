"""Load book configuration YAML into :class:`BookConfig`."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .models import SECTION_STYLES, BookConfig, BookConfigError

_STRING_FIELDS = ("title", "subtitle", "version", "source_extension", "output_name")


def load_book_config(path: Path | None) -> BookConfig:
    """Load the YAML configuration describing the assembled book.

    Parameters
    ----------
    path : Path or None
        Filesystem path to the YAML file. ``None`` returns the defaults.

    Returns
    -------
    BookConfig
        Parsed configuration with defaults applied for omitted fields.

    Raises
    ------
    FileNotFoundError
        If ``path`` is given but does not exist.
    BookConfigError
        If the YAML cannot be parsed, is not a mapping, or holds an invalid
        value (for example an unknown ``section_style``).

    Examples
    --------
    >>> from pathlib import Path
    >>> from mdx_typst.config import load_book_config
    >>> config = load_book_config(Path("config/book.yaml"))  # doctest: +SKIP
    >>> config.tab  # doctest: +SKIP
    'Guides'
    """
    if path is None:
        return BookConfig()
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        with path.open("r", encoding="utf-8") as handle:
            loaded = loader.load(handle) or {}
    except YAMLError as exc:
        msg = f"Configuration file '{path}' is not valid YAML: {exc}"
        raise BookConfigError(msg) from exc
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise BookConfigError(msg)
    return _build_book_config(dict(loaded), base_dir=path.parent)


def _build_book_config(raw: dict[str, typ.Any], *, base_dir: Path) -> BookConfig:
    config = BookConfig()
    for field in _STRING_FIELDS:
        if field in raw:
            setattr(config, field, _as_string(raw[field], field))

    tab = raw.get("tab")
    config.tab = _as_string(tab, "tab") if tab is not None else None

    names = raw.get("descriptor_names")
    if names is not None:
        match names:
            case str():
                config.descriptor_names = (names,)
            case list() if names:
                config.descriptor_names = tuple(
                    _as_string(name, "descriptor_names") for name in names
                )
            case _:
                msg = "'descriptor_names' must be a string or a non-empty list."
                raise BookConfigError(msg)

    if "output_dir" in raw:
        config.output_dir = _resolve(raw["output_dir"], "output_dir", base_dir)
    if "template_path" in raw:
        config.template_path = _resolve(raw["template_path"], "template_path", base_dir)

    style = raw.get("section_style", config.section_style)
    if style not in SECTION_STYLES:
        expected = ", ".join(SECTION_STYLES)
        msg = f"Unknown section_style {style!r}; expected one of: {expected}."
        raise BookConfigError(msg)
    config.section_style = style

    descriptions = raw.get("section_descriptions") or {}
    if not isinstance(descriptions, dict):
        msg = "'section_descriptions' must be a mapping of group name to text."
        raise BookConfigError(msg)
    config.section_descriptions = {
        str(group): _as_string(text, f"section_descriptions.{group}")
        for group, text in descriptions.items()
    }
    if "default_description" in raw:
        config.default_description = _as_string(
            raw["default_description"], "default_description"
        )
    return config


def _as_string(value: object, field: str) -> str:
    match value:
        case str():
            return value
        case bool():
            msg = f"'{field}' must be a string, not a boolean."
            raise BookConfigError(msg)
        case int() | float():
            return str(value)
        case _:
            msg = f"'{field}' must be a string."
            raise BookConfigError(msg)


def _resolve(value: object, field: str, base_dir: Path) -> Path:
    """Return ``value`` as a path, anchoring relative paths at ``base_dir``."""
    path = Path(_as_string(value, field)).expanduser()
    return path if path.is_absolute() else (base_dir / path).resolve()


__all__ = ["load_book_config"]
