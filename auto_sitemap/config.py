"""
Load plugin options from a JSON config file plus command line overrides.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from auto_sitemap.entries import SitemapEntry
from auto_sitemap.plugin import AutoSitemapOptions


def load_json(path: str | None) -> Any:
    if not path:
        return {}
    file_path = Path(path).resolve()
    if not file_path.exists():
        raise ValueError(f"config file not found: {file_path}")
    try:
        return json.loads(file_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {file_path}: {exc}") from exc


def parse_csv(value: str | None) -> list[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def load_entries(path: str | None) -> list[SitemapEntry]:
    if not path:
        return []
    data = load_json(path)
    if not isinstance(data, list):
        raise ValueError("entries file must contain a JSON list")
    return [SitemapEntry.from_dict(item) for item in data]


def load_options(path: str | None, overrides: dict[str, Any] | None = None) -> AutoSitemapOptions:
    """Read camelCase options from ``path`` and apply non-empty ``overrides``."""
    data = load_json(path)
    if not isinstance(data, dict):
        raise ValueError("JSON root must be an object")
    merged = dict(data)
    for key, value in (overrides or {}).items():
        if value is None or value == [] or value == "":
            continue
        merged[key] = value
    return AutoSitemapOptions.from_dict(merged)
