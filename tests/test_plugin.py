from dataclasses import replace
from hashlib import sha256
import xml.etree.ElementTree as ET

import pytest

from auto_sitemap.entries import SitemapEntry
from auto_sitemap.host import BuildArtifact, BuildConfig, BuildResult
from auto_sitemap.plugin import (
    AutoSitemapOptions,
    AutoSitemapPlugin,
    auto_sitemap,
    collect_entries,
    has_authorized_extension,
    strip_output_dir,
)
from auto_sitemap.render import SITEMAP_NS

NS = {"sm": SITEMAP_NS}


def read_locs(path) -> list[str]:
    root = ET.fromstring(path.read_bytes())
    return [node.text for node in root.findall("sm:url/sm:loc", NS)]


def test_extension_predicate():
    assert has_authorized_extension("dist/index.html", ["html"])
    assert has_authorized_extension("dist/README.MD", [".md"])
    assert not has_authorized_extension("dist/style.css", ["html"])
    assert not has_authorized_extension("dist/html", ["html"])


def test_strip_output_dir():
    entry = SitemapEntry(url="/work/site/dist/blog/index.html", priority=0.3)
    assert strip_output_dir(entry, "dist") == SitemapEntry(url="/blog/index.html", priority=0.3)
    assert strip_output_dir(entry, "./dist/") == SitemapEntry(url="/blog/index.html", priority=0.3)
    assert strip_output_dir(entry, None) is entry
    assert strip_output_dir(entry, ".") is entry


def test_strip_output_dir_matches_whole_segments():
    assert strip_output_dir(SitemapEntry(url="out/about/index.html"), "out").url == "/about/index.html"
    assert strip_output_dir(SitemapEntry(url="out/index.html"), "out").url == "/index.html"
    assert strip_output_dir(SitemapEntry(url="build/guides/build-tools.html"), "build").url == "/guides/build-tools.html"
    assert strip_output_dir(SitemapEntry(url="build/build/a.html"), "build").url == "/build/a.html"


def test_strip_output_dir_leaves_unmatched_urls():
    entry = SitemapEntry(url="public/layout.html")
    assert strip_output_dir(entry, "out") is entry


def test_collect_entries_keeps_pages_distinct_when_names_contain_outdir():
    outputs = [BuildArtifact(path="out/about/index.html"), BuildArtifact(path="out/index.html")]
    options = AutoSitemapOptions(authorized_extensions=("html",))
    assert [e.url for e in collect_entries(outputs, options, "out")] == ["/about/index.html", "/index.html"]


def test_collect_entries_filters_and_orders(tmp_path):
    outdir = tmp_path.as_posix()
    outputs = [
        BuildArtifact(path=f"{outdir}/index.html"),
        BuildArtifact(path=f"{outdir}/about.html"),
        BuildArtifact(path=f"{outdir}/style.css"),
        BuildArtifact(path=f"{outdir}/chunk.html", kind="chunk"),
    ]
    options = AutoSitemapOptions(
        base_url="https://example.com",
        authorized_extensions=("html",),
        site_map_entries=[SitemapEntry(url="/contact")],
    )
    entries = collect_entries(outputs, options, outdir)
    assert [e.url for e in entries] == ["/index.html", "/about.html", "/contact"]


def test_collect_entries_custom_transform():
    options = AutoSitemapOptions(
        parse_auto_site_map_entries=lambda entry: replace(entry, url=entry.url.upper(), priority=1),
    )
    entries = collect_entries([BuildArtifact(path="out/a.md")], options, "out")
    assert entries == [SitemapEntry(url="OUT/A.MD", priority=1)]


def test_collect_entries_disabled():
    options = AutoSitemapOptions(disable_auto_entries=True, site_map_entries=[SitemapEntry(url="/only")])
    entries = collect_entries([BuildArtifact(path="out/a.html")], options, "out")
    assert [e.url for e in entries] == ["/only"]


def test_end_to_end_single_sitemap(tmp_path):
    outdir = tmp_path.as_posix()
    result = BuildResult(
        outputs=[
            BuildArtifact(path=f"{outdir}/index.html"),
            BuildArtifact(path=f"{outdir}/about.html"),
            BuildArtifact(path=f"{outdir}/style.css"),
        ]
    )
    plugin = AutoSitemapPlugin(
        AutoSitemapOptions(
            base_url="https://example.com",
            authorized_extensions=("html",),
            site_map_entries=[SitemapEntry(url="/contact", priority=0)],
        )
    )
    build = plugin.after_build(BuildConfig(outdir=outdir), result)

    sitemap_path = tmp_path / "sitemap.xml"
    assert [f.path for f in build.all_files()] == ["sitemap.xml"]
    assert read_locs(sitemap_path) == [
        "https://example.com/index.html",
        "https://example.com/about.html",
        "https://example.com/contact",
    ]
    registered = result.outputs[3:]
    assert len(registered) == 1
    assert registered[0].path == sitemap_path.as_posix()
    assert registered[0].hash == sha256(sitemap_path.read_bytes()).hexdigest()
    assert registered[0].kind == "entry-point"
    assert registered[0].loader == "file"
    assert registered[0].sourcemap is None


def test_chunked_without_base_url_warns_and_skips_index(tmp_path, capsys):
    entries = [SitemapEntry(url=f"/p/{n}") for n in range(7000)]
    result = BuildResult()
    plugin = AutoSitemapPlugin(
        AutoSitemapOptions(base_url=None, site_map_entries=entries, disable_auto_entries=True, max_entries=5000)
    )
    build = plugin.after_build(BuildConfig(outdir=tmp_path.as_posix()), result)

    assert len(build.files) == 2
    assert build.index is None
    assert len(build.warnings) == 1
    assert "baseUrl is required" in capsys.readouterr().err
    assert sorted(p.name for p in tmp_path.iterdir()) == ["sitemap-1.xml", "sitemap-2.xml"]
    assert [a.path.rsplit("/", 1)[-1] for a in result.outputs] == ["sitemap-1.xml", "sitemap-2.xml"]
    assert len(read_locs(tmp_path / "sitemap-1.xml")) == 5000
    assert len(read_locs(tmp_path / "sitemap-2.xml")) == 2000


def test_chunked_with_base_url_registers_index(tmp_path, capsys):
    entries = [SitemapEntry(url=f"/p/{n}") for n in range(5)]
    result = BuildResult()
    plugin = auto_sitemap({"baseUrl": "https://example.com/", "siteMapEntries": [], "maxEntries": 2})
    plugin.options.site_map_entries.extend(entries)
    build = plugin.after_build(BuildConfig(outdir=tmp_path.as_posix()), result)

    assert [f.path for f in build.all_files()] == ["sitemap-1.xml", "sitemap-2.xml", "sitemap-3.xml", "sitemap.xml"]
    assert [a.path.rsplit("/", 1)[-1] for a in result.outputs] == [
        "sitemap-1.xml",
        "sitemap-2.xml",
        "sitemap-3.xml",
        "sitemap.xml",
    ]
    index = ET.fromstring((tmp_path / "sitemap.xml").read_bytes())
    assert index.tag == f"{{{SITEMAP_NS}}}sitemapindex"
    assert capsys.readouterr().err == ""


def test_options_from_dict_defaults():
    options = AutoSitemapOptions.from_dict({"baseUrl": "https://example.com"})
    assert options.authorized_extensions == ("html", "js", "txt", "md", "mdx")
    assert options.max_entries == 5000
    assert options.disable_auto_entries is False
    assert options.site_map_entries == []
    assert options.parse_auto_site_map_entries is None


@pytest.mark.parametrize(
    "data",
    [
        {"maxEntries": 0},
        {"maxEntries": "10"},
        {"baseUrl": 5},
        {"siteMapEntries": "nope"},
        {"authorizedExtensions": "html"},
        {"disableAutoEntries": "yes"},
        {"parseAutoSiteMapEntries": "strip"},
    ],
)
def test_options_from_dict_rejects_invalid(data):
    with pytest.raises(ValueError):
        AutoSitemapOptions.from_dict(data)


@pytest.mark.parametrize("max_entries", ["10", 0, -5, 2.5, True])
def test_plugin_rejects_bad_max_entries_on_options_object(max_entries):
    with pytest.raises(ValueError, match="maxEntries"):
        AutoSitemapPlugin(AutoSitemapOptions(max_entries=max_entries))


def test_plugin_metadata():
    plugin = AutoSitemapPlugin(AutoSitemapOptions())
    assert plugin.name == "auto-sitemap"
    assert plugin.version == "0.1.0"


def test_write_failure_propagates(tmp_path):
    blocker = tmp_path / "blocked"
    blocker.write_text("not a directory", encoding="utf-8")
    plugin = AutoSitemapPlugin(AutoSitemapOptions(base_url="https://example.com"))
    with pytest.raises(OSError):
        plugin.after_build(BuildConfig(outdir=blocker.as_posix()), BuildResult())
