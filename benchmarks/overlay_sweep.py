"""Parametric benchmark sweep: vary root count, namespace count and file count."""
from __future__ import annotations

import gc
import os
import tempfile
import time
import tracemalloc
from typing import Callable

from assetfs import WALK_FILES, AssetFileSystem


def _measure(fn: Callable[[], None]) -> tuple[float, float]:
    """Run fn once, return (elapsed_sec, peak_kib)."""
    gc.collect()
    tracemalloc.start()
    t0 = time.perf_counter()
    fn()
    elapsed = time.perf_counter() - t0
    _, peak = tracemalloc.get_traced_memory()
    tracemalloc.stop()
    gc.collect()
    return elapsed, peak / 1024.0


def _fmt(v: float) -> str:
    return f"{v:,.1f}"


def _populate(base: str, roots: int, files: int) -> list[str]:
    """Spread *files* over *roots*; every root also holds a shared copy."""
    result = []
    for r in range(roots):
        root = os.path.join(base, f"root{r:03d}")
        os.makedirs(os.path.join(root, "static", "css"))
        with open(os.path.join(root, "static", "css", "shared.css"), "wb") as f:
            f.write(b"s")
        for i in range(r, files, roots):
            with open(os.path.join(root, "static", f"f{i:06d}.txt"), "wb") as f:
                f.write(b"x")
        result.append(root)
    return result


# ---------------------------------------------------------------------------
#  Resolution (vary root count; the target lives in the last root)
# ---------------------------------------------------------------------------

def _resolve_last_root(fs: AssetFileSystem, files: int) -> None:
    target = f"static/f{files - 1:06d}.txt"
    for _ in range(1000):
        fs.asset_info(target)


def _walk_all(fs: AssetFileSystem) -> None:
    count = sum(1 for _ in fs.iter_walk(".", WALK_FILES))
    assert count > 0


def _glob_unique(fs: AssetFileSystem, files: int) -> None:
    paths = fs.glob_paths("static/**/*")
    assert len(paths) == files + 1


def run_sweep() -> str:
    lines: list[str] = []

    # === 1. Root count sweep ===
    root_counts = [1, 2, 4, 8, 16, 32]
    files = 2000

    lines.append("## 1. Resolve / walk / glob by root count")
    lines.append("")
    lines.append(f"files = {files:,} spread over the roots, 1000 resolves of a last-root file")
    lines.append("")
    lines.append("| Roots | resolve ms | walk ms | walk KiB | glob ms | glob KiB |")
    lines.append("|---:|---:|---:|---:|---:|---:|")

    for cnt in root_counts:
        print(f"  roots {cnt} ...", end=" ", flush=True)
        with tempfile.TemporaryDirectory() as td:
            fs = AssetFileSystem(_populate(td, cnt, files))
            t1, _ = _measure(lambda: _resolve_last_root(fs, files))
            t2, m2 = _measure(lambda: _walk_all(fs))
            t3, m3 = _measure(lambda: _glob_unique(fs, files))
        lines.append(
            f"| {cnt} | {_fmt(t1*1000)} | {_fmt(t2*1000)} | {_fmt(m2)} "
            f"| {_fmt(t3*1000)} | {_fmt(m3)} |"
        )
        print(f"done (resolve={t1*1000:.0f}ms)")

    lines.append("")

    # === 2. Namespace sweep ===
    ns_counts = [1, 4, 16, 64]

    lines.append("## 2. Whole-overlay walk by namespace count")
    lines.append("")
    lines.append("one root per namespace, 100 files each")
    lines.append("")
    lines.append("| Namespaces | walk ms | walk KiB |")
    lines.append("|---:|---:|---:|")

    for cnt in ns_counts:
        print(f"  namespaces {cnt} ...", end=" ", flush=True)
        with tempfile.TemporaryDirectory() as td:
            fs = AssetFileSystem()
            for n in range(cnt):
                ns_base = os.path.join(td, f"ns{n:03d}")
                os.mkdir(ns_base)
                for root in _populate(ns_base, 1, 100):
                    fs.namespace(f"ns{n:03d}").register_path(root)
            t1, m1 = _measure(lambda: _walk_all(fs))
        lines.append(f"| {cnt} | {_fmt(t1*1000)} | {_fmt(m1)} |")
        print(f"done (walk={t1*1000:.0f}ms)")

    lines.append("")
    return "\n".join(lines)


if __name__ == "__main__":
    print("=== Overlay Benchmark Sweep ===\n")
    result = run_sweep()
    print("\n" + result)

    # Save to file
    from datetime import datetime
    from pathlib import Path
    out_dir = Path("benchmarks") / "results"
    out_dir.mkdir(parents=True, exist_ok=True)
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_path = out_dir / f"overlay_sweep_{ts}.md"
    out_path.write_text(f"# Overlay Benchmark Sweep\n\n{result}", encoding="utf-8")
    print(f"\nSaved: {out_path}")
