"""
After-build plugin that turns build outputs into sitemap files.

The plugin collects auto-derived entries from the build result, appends the
user-supplied entries, paginates them, writes every sitemap file into the
build output directory and registers the written files as build outputs.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from pathlib import Path, PurePosixPath
from typing import Any, Callable

from auto_sitemap.entries import SitemapEntry
from auto_sitemap.host import BuildArtifact, BuildConfig, BuildResult, file_to_build_artifact, write_file
from auto_sitemap.paginate import DEFAULT_MAX_ENTRIES, SitemapBuild, check_max_entries, paginate

PLUGIN_NAME = "auto-sitemap"
PLUGIN_VERSION = "0.1.0"
DEFAULT_EXTENSIONS = ("html", "js", "txt", "md", "mdx")

EntryTransform = Callable[[SitemapEntry], SitemapEntry]


@dataclass
class AutoSitemapOptions:
    base_url: str | None = None
    site_map_entries: list[SitemapEntry] = field(default_factory=list)
    authorized_extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    parse_auto_site_map_entries: EntryTransform | None = None
    disable_auto_entries: bool = False
    max_entries: int = DEFAULT_MAX_ENTRIES

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AutoSitemapOptions:
        base_url = data.get("baseUrl", data.get("base_url"))
        if base_url is not None and not isinstance(base_url, str):
            raise ValueError("baseUrl must be a string")

        raw_entries = data.get("siteMapEntries", data.get("site_map_entries")) or []
        if not isinstance(raw_entries, list):
            raise ValueError("siteMapEntries must be a list")

        extensions = data.get("authorizedExtensions", data.get("authorized_extensions"))
        if extensions is None:
            extensions = DEFAULT_EXTENSIONS
        elif not isinstance(extensions, (list, tuple)):
            raise ValueError("authorizedExtensions must be a list")

        disable = data.get("disableAutoEntries", data.get("disable_auto_entries", False))
        if not isinstance(disable, bool):
            raise ValueError("disableAutoEntries must be a boolean")

        transform = data.get("parseAutoSiteMapEntries", data.get("parse_auto_site_map_entries"))
        if transform is not None and not callable(transform):
            raise ValueError("parseAutoSiteMapEntries must be callable")

        max_entries = check_max_entries(data.get("maxEntries", data.get("max_entries", DEFAULT_MAX_ENTRIES)))

        return cls(
            base_url=(base_url.strip() or None) if base_url else None,
            site_map_entries=[SitemapEntry.from_dict(item) for item in raw_entries],
            authorized_extensions=tuple(str(ext) for ext in extensions),
            parse_auto_site_map_entries=transform,
            disable_auto_entries=disable,
            max_entries=max_entries,
        )


def normalize_extension(ext: str) -> str:
    return ext.strip().lstrip(".").lower()


def has_authorized_extension(path: str, extensions: tuple[str, ...] | list[str]) -> bool:
    suffix = normalize_extension(PurePosixPath(path).suffix)
    return bool(suffix) and suffix in {normalize_extension(ext) for ext in extensions}


def strip_output_dir(entry: SitemapEntry, outdir: str | None) -> SitemapEntry:
    """Drop the path up to and including the first ``outdir`` segment run.

    The output directory only matches whole path segments, so ``out`` never
    matches inside ``about``. URLs without the output directory are kept.
    """
    marker = PurePosixPath(Path(outdir).as_posix()).parts if outdir else ()
    if marker in ((), (".",)):
        return entry
    parts = PurePosixPath(entry.url).parts
    for start in range(len(parts) - len(marker) + 1):
        if parts[start : start + len(marker)] == marker:
            return replace(entry, url="/" + "/".join(parts[start + len(marker) :]))
    return entry


def collect_entries(
    outputs: list[BuildArtifact],
    options: AutoSitemapOptions,
    outdir: str | None,
) -> list[SitemapEntry]:
    auto_entries: list[SitemapEntry] = []
    if not options.disable_auto_entries:
        transform = options.parse_auto_site_map_entries or (lambda entry: strip_output_dir(entry, outdir))
        for artifact in outputs:
            if artifact.kind != "entry-point":
                continue
            if not has_authorized_extension(artifact.path, options.authorized_extensions):
                continue
            auto_entries.append(transform(SitemapEntry(url=Path(artifact.path).as_posix())))
    return [*auto_entries, *options.site_map_entries]


class AutoSitemapPlugin:
    name = PLUGIN_NAME
    version = PLUGIN_VERSION

    def __init__(self, options: AutoSitemapOptions) -> None:
        check_max_entries(options.max_entries)
        self.options = options

    def after_build(self, build_config: BuildConfig, result: BuildResult) -> SitemapBuild:
        entries = collect_entries(result.outputs, self.options, build_config.outdir)
        sitemap_build = paginate(
            entries,
            base_url=self.options.base_url,
            max_entries=self.options.max_entries,
        )
        for warning in sitemap_build.warnings:
            print(f"Warning: {warning}", file=sys.stderr)

        outdir = Path(build_config.outdir or ".")
        registered: list[BuildArtifact] = []
        for sitemap_file in sitemap_build.all_files():
            file_path = outdir / sitemap_file.path
            write_file(file_path, sitemap_file.content)
            registered.append(file_to_build_artifact(file_path, loader="file", kind="entry-point", sourcemap=None))
        result.outputs.extend(registered)
        return sitemap_build


def auto_sitemap(options: AutoSitemapOptions | dict[str, Any]) -> AutoSitemapPlugin:
    if isinstance(options, dict):
        options = AutoSitemapOptions.from_dict(options)
    return AutoSitemapPlugin(options)
