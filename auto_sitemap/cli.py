#!/usr/bin/env python3
"""
Generate sitemap XML for a finished build directory.
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from auto_sitemap.config import load_entries, load_options, parse_csv
from auto_sitemap.host import BuildConfig, collect_build_outputs
from auto_sitemap.plugin import AutoSitemapPlugin


def run_generate(args: argparse.Namespace) -> int:
    try:
        options = load_options(
            args.config,
            {
                "baseUrl": args.base_url,
                "authorizedExtensions": parse_csv(args.authorized_extensions),
                "maxEntries": args.max_entries,
                "disableAutoEntries": args.disable_auto_entries,
            },
        )
        options.site_map_entries.extend(load_entries(args.entries_file))
        plugin = AutoSitemapPlugin(options)
        result = collect_build_outputs(args.outdir)
    except ValueError as exc:
        print(f"Error: {exc}")
        return 2

    outputs_before = len(result.outputs)
    sitemap_build = plugin.after_build(BuildConfig(outdir=args.outdir), result)
    registered = result.outputs[outputs_before:]
    entry_count = sitemap_build.entry_count

    print(f"Base URL: {options.base_url or '(none)'}")
    print(f"Total entries: {entry_count}")
    print(f"Sitemap files: {len(sitemap_build.files)}")
    if sitemap_build.index:
        print(f"Sitemap index: {Path(args.outdir) / sitemap_build.index.path}")
    for artifact in registered:
        print(f"Wrote {artifact.path}")

    if args.summary_json:
        summary = {
            "base_url": options.base_url,
            "total_entries": entry_count,
            "max_entries": options.max_entries,
            "chunked": sitemap_build.chunked,
            "sitemap_files": [f.path for f in sitemap_build.files],
            "index_file": sitemap_build.index.path if sitemap_build.index else None,
            "warnings": sitemap_build.warnings,
            "outputs": [{"path": a.path, "hash": a.hash, "kind": a.kind} for a in registered],
        }
        summary_path = Path(args.summary_json)
        summary_path.parent.mkdir(parents=True, exist_ok=True)
        summary_path.write_text(json.dumps(summary, indent=2), encoding="utf-8")
        print(f"Summary: {summary_path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate sitemap XML from build outputs.")
    sub = parser.add_subparsers(dest="command", required=True)

    p_generate = sub.add_parser("generate", help="Write sitemap files into a build output directory")
    p_generate.add_argument("--outdir", required=True, help="Build output directory")
    p_generate.add_argument("--base-url", default="", help="Base URL prefixed to every <loc>")
    p_generate.add_argument("--config", default="", help="JSON file with plugin options")
    p_generate.add_argument("--entries-file", default="", help="JSON list of extra sitemap entries")
    p_generate.add_argument("--authorized-extensions", default="", help="Comma-separated extensions, e.g. html,md")
    p_generate.add_argument("--max-entries", type=int, default=None, help="Entries per sitemap file (default 5000)")
    p_generate.add_argument(
        "--disable-auto-entries",
        action="store_true",
        default=None,
        help="Skip entries derived from build outputs",
    )
    p_generate.add_argument("--summary-json", default="", help="Optional path for a JSON run summary")
    p_generate.set_defaults(func=run_generate)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
