"""
Build-host model: artifacts, build config and the file primitives the plugin
hands its output to.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from hashlib import sha256
from pathlib import Path


@dataclass
class BuildArtifact:
    path: str
    kind: str = "entry-point"
    loader: str = "file"
    hash: str | None = None
    sourcemap: str | None = None


@dataclass
class BuildConfig:
    outdir: str | None = None


@dataclass
class BuildResult:
    outputs: list[BuildArtifact] = field(default_factory=list)


def write_file(path: str | Path, content: str) -> None:
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(content, encoding="utf-8")


def file_to_build_artifact(
    path: str | Path,
    *,
    loader: str,
    kind: str,
    sourcemap: str | None = None,
) -> BuildArtifact:
    digest = sha256(Path(path).read_bytes()).hexdigest()
    return BuildArtifact(
        path=Path(path).as_posix(),
        kind=kind,
        loader=loader,
        hash=digest,
        sourcemap=sourcemap or None,
    )


def collect_build_outputs(outdir: str | Path) -> BuildResult:
    """Treat every file already in ``outdir`` as an output of the build."""
    root = Path(outdir)
    if not root.is_dir():
        raise ValueError(f"output directory not found: {root}")
    outputs: list[BuildArtifact] = []
    for file_path in sorted(p for p in root.rglob("*") if p.is_file()):
        kind = "sourcemap" if file_path.suffix == ".map" else "entry-point"
        outputs.append(BuildArtifact(path=file_path.as_posix(), kind=kind))
    return BuildResult(outputs=outputs)
