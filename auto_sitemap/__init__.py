"""
auto-sitemap: sitemap and sitemap-index generation for build outputs.
"""

from auto_sitemap.entries import CHANGE_FREQUENCIES, SitemapEntry, SitemapFile
from auto_sitemap.host import BuildArtifact, BuildConfig, BuildResult
from auto_sitemap.paginate import SitemapBuild, paginate
from auto_sitemap.plugin import AutoSitemapOptions, AutoSitemapPlugin, auto_sitemap
from auto_sitemap.render import join_url, render_index, render_urlset

__all__ = [
    "CHANGE_FREQUENCIES",
    "AutoSitemapOptions",
    "AutoSitemapPlugin",
    "BuildArtifact",
    "BuildConfig",
    "BuildResult",
    "SitemapBuild",
    "SitemapEntry",
    "SitemapFile",
    "auto_sitemap",
    "join_url",
    "paginate",
    "render_index",
    "render_urlset",
]
