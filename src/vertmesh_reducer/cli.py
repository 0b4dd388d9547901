"""Command-line interface for the animated mesh reducer."""

import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

try:
    __version__ = version("vertmesh-reducer")
except PackageNotFoundError:
    __version__ = "unknown"

from vertmesh_reducer.utils.constants import DEFAULT_OPTIONS

app = typer.Typer(
    name="vertmesh-reducer",
    help="Weld vertices and drop interpolable keyframes in vertex-animated meshes",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)
console = Console()

COMMANDS = ("reduce", "inspect")


def version_callback(value: bool) -> None:
    if value:
        print(f"vertmesh-reducer {__version__}")
        raise typer.Exit()


@app.callback()
def common(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show the version and exit.",
        ),
    ] = None,
) -> None:
    """Reduce vertex-animated meshes stored as JSON."""


@app.command()
def reduce(
    inputs: Annotated[
        list[Path],
        typer.Argument(
            help="Mesh files ([bold green].json[/])",
            metavar="INPUT...",
        ),
    ],
    output_dir: Annotated[
        Path | None,
        typer.Option(
            "--output-dir",
            "-d",
            help="Directory for reduced meshes (default: next to each input)",
            rich_help_panel="Output",
        ),
    ] = None,
    suffix: Annotated[
        str,
        typer.Option(
            help="Suffix appended to output file names",
            rich_help_panel="Output",
        ),
    ] = "_reduced",
    position_tolerance: Annotated[
        float,
        typer.Option(
            help="Max position drift for welding (fraction of mesh scale)",
            rich_help_panel="Vertex Welding",
        ),
    ] = DEFAULT_OPTIONS["position_tolerance"],
    uv_tolerance: Annotated[
        float,
        typer.Option(
            help="Max UV drift for welding (0..1)",
            rich_help_panel="Vertex Welding",
        ),
    ] = DEFAULT_OPTIONS["uv_tolerance"],
    normal_angle: Annotated[
        float,
        typer.Option(
            help="Max face normal drift in degrees (0=ignore normals)",
            rich_help_panel="Vertex Welding",
        ),
    ] = DEFAULT_OPTIONS["normal_angle_tolerance_deg"],
    uv_snap_grid: Annotated[
        float,
        typer.Option(
            help="UV snap grid before comparing (0=no snapping)",
            rich_help_panel="Vertex Welding",
        ),
    ] = DEFAULT_OPTIONS["uv_snap_grid"],
    weld: Annotated[
        bool,
        typer.Option(
            "--weld/--no-weld",
            help="Enable/Disable vertex welding and duplicate triangle removal",
            rich_help_panel="Vertex Welding",
        ),
    ] = DEFAULT_OPTIONS["weld_vertices"],
    frame_tolerance: Annotated[
        float,
        typer.Option(
            help="Max interpolation error for dropped frames (fraction of mesh scale)",
            rich_help_panel="Keyframe Decimation",
        ),
    ] = DEFAULT_OPTIONS["frame_error_tolerance"],
    motion_scale: Annotated[
        float,
        typer.Option(
            help="Extra error budget per unit of vertex motion (0=uniform budget)",
            rich_help_panel="Keyframe Decimation",
        ),
    ] = DEFAULT_OPTIONS["motion_error_scale"],
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Only print errors and warnings",
        ),
    ] = False,
) -> None:
    """
    Reduce mesh files and write [italic]<name>_reduced.json[/] copies.
    """
    missing = [p for p in inputs if not p.is_file()]
    for path in missing:
        console.print(f"[bold red][ERROR][/] File not found: {path.absolute()}")
    if missing:
        raise typer.Exit(code=1)

    from vertmesh_reducer.exporters import reduce_files
    from vertmesh_reducer.reducer import ReductionOptions

    options = ReductionOptions(
        position_tolerance=position_tolerance,
        uv_tolerance=uv_tolerance,
        normal_angle_tolerance_deg=normal_angle,
        frame_error_tolerance=frame_tolerance,
        motion_error_scale=motion_scale,
        uv_snap_grid=uv_snap_grid,
        weld_vertices=weld,
    )

    summary = reduce_files(
        list(inputs), options, output_dir=output_dir, suffix=suffix, quiet=quiet
    )
    if not summary.ok:
        raise typer.Exit(code=1)


@app.command()
def inspect(
    input_path: Annotated[
        Path,
        typer.Argument(help="Mesh file ([bold green].json[/])", metavar="INPUT"),
    ],
) -> None:
    """
    Show counts, scale and animation sequences of a mesh without changing it.
    """
    if not input_path.is_file():
        console.print(f"[bold red][ERROR][/] File not found: {input_path.absolute()}")
        raise typer.Exit(code=1)

    from vertmesh_reducer.analyzers import compute_mesh_scale
    from vertmesh_reducer.exporters import load_mesh
    from vertmesh_reducer.utils import estimate_mesh_bytes

    try:
        mesh = load_mesh(input_path)
    except (OSError, ValueError) as e:
        console.print(f"[bold red][ERROR][/] {e}")
        raise typer.Exit(code=1) from e

    size = estimate_mesh_bytes(
        len(mesh.triangles), mesh.frame_vertex_count, mesh.anim_frame_count
    )
    console.print(f"[bold]{mesh.name}[/]")
    console.print(
        f"  {mesh.frame_vertex_count:,} verts, {len(mesh.triangles):,} tris, "
        f"{mesh.anim_frame_count:,} frames ({size:,} bytes)"
    )
    console.print(f"  mesh scale: {compute_mesh_scale(mesh):.4g}")

    if mesh.anim_sequences:
        table = Table("Sequence", "Start", "Frames", "Rate", "Seconds")
        for seq in mesh.anim_sequences:
            table.add_row(
                seq.name,
                str(seq.start_frame),
                str(seq.frame_count),
                f"{seq.rate:g}",
                f"{seq.duration:.2f}",
            )
        console.print(table)


def main() -> None:
    """Entry point; ``reduce`` is the default command."""
    args = sys.argv[1:]

    # 'vertmesh-reducer mesh.json' maps to 'vertmesh-reducer reduce mesh.json'
    if args and args[0] not in COMMANDS and not args[0].startswith("-"):
        args = ["reduce"] + args

    app(args=args, prog_name="vertmesh-reducer")


if __name__ == "__main__":
    main()
