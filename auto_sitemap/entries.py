"""
Sitemap entry and output file records.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

ChangeFrequency = Literal["always", "hourly", "daily", "weekly", "monthly", "yearly", "never"]
CHANGE_FREQUENCIES = ("always", "hourly", "daily", "weekly", "monthly", "yearly", "never")


@dataclass
class SitemapEntry:
    url: str
    last_modified: str | None = None
    change_frequency: ChangeFrequency | None = None
    priority: float | int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SitemapEntry:
        if not isinstance(data, dict):
            raise ValueError("Sitemap entry must be an object")
        url = str(data.get("url") or "").strip()
        if not url:
            raise ValueError("Sitemap entry is missing a url")

        last_modified = first_present(data, "lastModified", "last_modified")
        change_frequency = first_present(data, "changeFrequency", "change_frequency")
        if change_frequency is not None:
            change_frequency = str(change_frequency).strip().lower()
            if change_frequency not in CHANGE_FREQUENCIES:
                raise ValueError(
                    f"Unsupported changeFrequency for {url}: {change_frequency} "
                    f"(expected one of {', '.join(CHANGE_FREQUENCIES)})"
                )

        priority = data.get("priority")
        if priority is not None and (isinstance(priority, bool) or not isinstance(priority, (int, float))):
            raise ValueError(f"priority must be a number for {url}")

        return cls(
            url=url,
            last_modified=str(last_modified) if last_modified is not None else None,
            change_frequency=change_frequency,
            priority=priority,
        )


@dataclass(frozen=True)
class SitemapFile:
    path: str
    content: str


def first_present(data: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = data.get(key)
        if value is not None and value != "":
            return value
    return None
