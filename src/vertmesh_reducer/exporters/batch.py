"""Batch reduction of mesh files with per-mesh reporting."""

from dataclasses import dataclass, field
from pathlib import Path

from vertmesh_reducer.exporters.json_mesh import load_mesh, save_mesh
from vertmesh_reducer.reducer import ReductionOptions, ReductionStats, reduce
from vertmesh_reducer.utils.logging import (
    StepTimer,
    cyan,
    format_count,
    log_batch_totals,
    log_error,
    log_mesh_report,
    log_mesh_warnings,
    print_header,
    timed,
)


@dataclass
class BatchSummary:
    """Outcome of reducing a batch of mesh files."""

    results: list[ReductionStats] = field(default_factory=list)
    outputs: list[Path] = field(default_factory=list)
    failures: dict[str, str] = field(default_factory=dict)

    @property
    def total_before(self) -> int:
        return sum(s.original_bytes for s in self.results)

    @property
    def total_after(self) -> int:
        return sum(s.reduced_bytes for s in self.results)

    @property
    def changed_count(self) -> int:
        return sum(1 for s in self.results if s.changed)

    @property
    def ok(self) -> bool:
        return not self.failures


def output_path_for(
    source: Path, output_dir: Path | None = None, suffix: str = "_reduced"
) -> Path:
    """``<stem><suffix>.json`` next to the source or inside ``output_dir``."""
    target_dir = output_dir if output_dir is not None else source.parent
    return target_dir / f"{source.stem}{suffix}.json"


def reduce_files(
    paths: list[Path],
    options: ReductionOptions | None = None,
    output_dir: Path | None = None,
    suffix: str = "_reduced",
    quiet: bool = False,
) -> BatchSummary:
    """
    Reduce every mesh file in ``paths`` and save the results.

    Files that cannot be loaded or saved are reported and recorded in
    ``BatchSummary.failures``; the batch carries on with the next file.
    Warnings and errors are printed even when ``quiet`` is set.
    """
    options = options or ReductionOptions()
    summary = BatchSummary()

    if not quiet:
        print_header(f"Reducing {format_count(len(paths), 'mesh file')}")
    step = StepTimer(len(paths))

    for path in paths:
        if not quiet:
            step.step(cyan(path.name))

        try:
            mesh = load_mesh(path)
        except (OSError, ValueError) as e:
            log_error(f"Failed to load {path}: {e}")
            summary.failures[str(path)] = str(e)
            continue

        with timed(f"Reduce {mesh.name}") as t:
            _, stats = reduce(mesh, options)
        if stats is None:  # pragma: no cover - mesh is never None here
            continue
        log_mesh_warnings(stats)

        target = output_path_for(path, output_dir, suffix)
        try:
            save_mesh(mesh, target)
        except OSError as e:
            log_error(f"Failed to save {target}: {e}")
            summary.failures[str(path)] = str(e)
            continue

        summary.results.append(stats)
        summary.outputs.append(target)
        if not quiet:
            log_mesh_report(stats, target, t.elapsed)

    if not quiet:
        log_batch_totals(
            summary.changed_count,
            len(summary.results),
            summary.total_before,
            summary.total_after,
            len(summary.failures),
            step.total_elapsed(),
        )

    return summary
