"""
Terminal output for reduction runs.

Level-tagged lines (colored only when stdout is a TTY), the per-mesh
before/after report, mesh warnings and the batch totals line.
"""

from __future__ import annotations

import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vertmesh_reducer.reducer import ReductionStats

RESET = "\033[0m"
BOLD = "\033[1m"
DIM = "\033[2m"
CYAN = "\033[36m"
RED = "\033[91m"
GREEN = "\033[92m"
YELLOW = "\033[93m"

_USE_COLOR = hasattr(sys.stdout, "isatty") and sys.stdout.isatty()

# Tags are right-aligned to this width so messages line up
_TAG_WIDTH = 6


def _paint(code: str, text: str) -> str:
    if not _USE_COLOR:
        return text
    return f"{code}{text}{RESET}"


def bold(text: str) -> str:
    return _paint(BOLD, text)


def dim(text: str) -> str:
    return _paint(DIM, text)


def cyan(text: str) -> str:
    return _paint(CYAN, text)


def red(text: str) -> str:
    return _paint(RED, text)


def green(text: str) -> str:
    return _paint(GREEN, text)


def yellow(text: str) -> str:
    return _paint(YELLOW, text)


def _emit(tag: str, code: str, msg: str) -> None:
    padding = " " * max(_TAG_WIDTH - len(tag), 0)
    print(f"{padding}{_paint(code, tag)}  {msg}")


def log_info(msg: str) -> None:
    _emit("INFO", CYAN, msg)


def log_ok(msg: str) -> None:
    _emit("OK", GREEN, msg)


def log_warn(msg: str) -> None:
    _emit("WARN", YELLOW, msg)


def log_error(msg: str) -> None:
    _emit("ERROR", RED, msg)


def log_step(current: int, total: int, msg: str) -> None:
    """Blank line, then ``[current/total] msg``."""
    print(f"\n{cyan(f'[{current}/{total}]')} {msg}")


def log_detail(msg: str, indent: int = 6) -> None:
    print(f"{' ' * indent}{msg}")


def print_header(title: str, width: int = 60) -> None:
    rule = cyan("=" * width)
    print(f"\n{rule}\n  {bold(title)}\n{rule}")


def format_duration(seconds: float) -> str:
    """``1m 15.0s``, ``2.50s``, ``250.0ms`` or ``500μs``."""
    if seconds >= 60:
        minutes, rest = divmod(seconds, 60)
        return f"{int(minutes)}m {rest:.1f}s"
    if seconds >= 1:
        return f"{seconds:.2f}s"
    if seconds >= 0.001:
        return f"{seconds * 1e3:.1f}ms"
    return f"{seconds * 1e6:.0f}μs"


def format_count(count: int, singular: str, plural: str | None = None) -> str:
    word = singular if count == 1 else (plural or f"{singular}s")
    return f"{count:,} {word}"


def format_bytes(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.2f} MB"


def format_delta(before: int, after: int, unit: str = "") -> str:
    """Signed difference, green when it shrank and red when it grew."""
    diff = after - before
    if diff == 0:
        return dim("no change")
    text = f"{diff:+,}{unit}"
    return green(text) if diff < 0 else red(text)


def format_transition(before: int, after: int) -> str:
    """``before -> after``, highlighting the new value when it shrank."""
    shown = f"{after:,}"
    if after < before:
        shown = green(shown)
    return f"{before:,} -> {shown}"


def format_report_line(stats: ReductionStats) -> str:
    """One-line before/after report for a reduced mesh."""
    name = bold(stats.mesh_name)
    if not stats.changed:
        return (
            f"{name}: {stats.reduced_verts:,} verts, "
            f"{stats.reduced_triangles:,} tris, {stats.reduced_frames:,} frames "
            f"({stats.reduced_bytes:,} bytes) - {dim('no reduction needed')}"
        )
    return (
        f"{name}: REDUCED "
        f"{format_transition(stats.original_verts, stats.reduced_verts)} verts, "
        f"{format_transition(stats.original_triangles, stats.reduced_triangles)} tris, "
        f"{format_transition(stats.original_frames, stats.reduced_frames)} frames "
        f"({stats.original_bytes:,} -> {stats.reduced_bytes:,} bytes)"
    )


def log_mesh_report(stats: ReductionStats, target: Path, elapsed: float) -> None:
    """Report line for one mesh plus where it was written and how long it took."""
    log_detail(f"- {format_report_line(stats)}")
    log_detail(dim(f"{format_duration(elapsed)} -> {target}"))


def log_mesh_warnings(stats: ReductionStats) -> None:
    """Print every warning the reducer recorded for a mesh."""
    for warning in stats.warnings:
        log_warn(f"{stats.mesh_name}: {warning}")


def log_batch_totals(
    changed: int,
    total: int,
    bytes_before: int,
    bytes_after: int,
    failed: int,
    elapsed: float,
) -> None:
    """Closing summary of a batch: reduced meshes, size change, failures."""
    print()
    log_info(
        f"{changed}/{total} meshes reduced, "
        f"{format_bytes(bytes_before)} -> {format_bytes(bytes_after)} "
        f"({format_delta(bytes_before, bytes_after, ' bytes')})"
    )
    if failed:
        log_warn(f"{format_count(failed, 'file')} failed")
    else:
        log_ok(f"Done in {format_duration(elapsed)}")


@dataclass
class TimingResult:
    """Elapsed time of one ``timed()`` block."""

    elapsed: float
    message: str


@contextmanager
def timed(description: str) -> Iterator[TimingResult]:
    """Measure the wrapped block; ``elapsed`` is filled in on exit."""
    result = TimingResult(elapsed=0.0, message=description)
    start = time.perf_counter()
    try:
        yield result
    finally:
        result.elapsed = time.perf_counter() - start


class StepTimer:
    """Numbered progress over the files of a batch."""

    def __init__(self, total_steps: int) -> None:
        self.total = total_steps
        self.current = 0
        self._started = time.perf_counter()

    def step(self, message: str) -> None:
        self.current += 1
        log_step(self.current, self.total, message)

    def total_elapsed(self) -> float:
        return time.perf_counter() - self._started
