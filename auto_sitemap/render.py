"""
XML rendering for sitemap urlsets and sitemap indexes.

Both renderers only depend on their arguments. The index renderer captures a
single generation timestamp per call unless one is passed in.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from datetime import UTC, datetime
from decimal import Decimal

from auto_sitemap.entries import SitemapEntry

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'


def trim_base_url(base_url: str | None) -> str:
    return (base_url or "").strip().rstrip("/")


def join_url(base: str | None, path: str) -> str:
    return f"{trim_base_url(base)}/{path.lstrip('/')}"


def format_number(value: float | int) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, float):
        return format(Decimal(repr(value)), "f")
    return str(value)


def format_timestamp(moment: datetime) -> str:
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_urlset(base_url: str | None, entries: list[SitemapEntry]) -> ET.Element:
    root = ET.Element("urlset", xmlns=SITEMAP_NS)
    for entry in entries:
        url_node = ET.SubElement(root, "url")
        ET.SubElement(url_node, "loc").text = join_url(base_url, entry.url)
        if entry.last_modified:
            ET.SubElement(url_node, "lastmod").text = entry.last_modified
        if entry.change_frequency:
            ET.SubElement(url_node, "changefreq").text = entry.change_frequency
        if entry.priority is not None:
            ET.SubElement(url_node, "priority").text = format_number(entry.priority)
    return root


def build_index(base_url: str, file_names: list[str], lastmod: str) -> ET.Element:
    root = ET.Element("sitemapindex", xmlns=SITEMAP_NS)
    for name in file_names:
        sitemap_node = ET.SubElement(root, "sitemap")
        ET.SubElement(sitemap_node, "loc").text = f"{trim_base_url(base_url)}/{name}"
        ET.SubElement(sitemap_node, "lastmod").text = lastmod
    return root


def to_xml(root: ET.Element) -> str:
    ET.indent(root, space="  ")
    return XML_DECLARATION + ET.tostring(root, encoding="unicode") + "\n"


def render_urlset(base_url: str | None, entries: list[SitemapEntry]) -> str:
    return to_xml(build_urlset(base_url, entries))


def render_index(base_url: str, file_names: list[str], generated_at: datetime | None = None) -> str:
    lastmod = format_timestamp(generated_at or datetime.now(UTC))
    return to_xml(build_index(base_url, file_names, lastmod))
