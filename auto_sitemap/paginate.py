"""
Split an ordered entry list into capped sitemap files plus an index.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TypeVar

from auto_sitemap.entries import SitemapEntry, SitemapFile
from auto_sitemap.render import render_index, render_urlset

DEFAULT_MAX_ENTRIES = 5000
INDEX_FILE_NAME = "sitemap.xml"
MISSING_BASE_URL_WARNING = (
    "auto-sitemap: baseUrl is required to generate sitemap index. "
    "Only individual sitemap files were generated."
)

T = TypeVar("T")


@dataclass
class SitemapBuild:
    files: list[SitemapFile]
    index: SitemapFile | None = None
    warnings: list[str] = field(default_factory=list)
    entry_count: int = 0

    @property
    def chunked(self) -> bool:
        return len(self.files) > 1

    def all_files(self) -> list[SitemapFile]:
        return [*self.files, self.index] if self.index else list(self.files)


def split_chunks(items: list[T], size: int) -> list[list[T]]:
    return [items[i : i + size] for i in range(0, len(items), size)]


def check_max_entries(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError("maxEntries must be a positive integer")
    return value


def chunk_file_name(position: int) -> str:
    return f"sitemap-{position}.xml"


def paginate(
    entries: list[SitemapEntry],
    *,
    base_url: str | None,
    max_entries: int = DEFAULT_MAX_ENTRIES,
    generated_at: datetime | None = None,
) -> SitemapBuild:
    """Render ``entries`` as one ``sitemap.xml`` or as numbered chunks plus an index.

    Chunks keep the input order. When chunking is needed but ``base_url`` is
    empty the index is skipped and a warning is recorded instead of raising.
    """
    check_max_entries(max_entries)

    if len(entries) <= max_entries:
        return SitemapBuild(
            files=[SitemapFile(INDEX_FILE_NAME, render_urlset(base_url, entries))],
            entry_count=len(entries),
        )

    files = [
        SitemapFile(chunk_file_name(idx), render_urlset(base_url, chunk))
        for idx, chunk in enumerate(split_chunks(entries, max_entries), start=1)
    ]
    if not base_url:
        return SitemapBuild(files=files, warnings=[MISSING_BASE_URL_WARNING], entry_count=len(entries))

    index = SitemapFile(INDEX_FILE_NAME, render_index(base_url, [f.path for f in files], generated_at))
    return SitemapBuild(files=files, index=index, entry_count=len(entries))
