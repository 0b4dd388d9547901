"""
Animated Mesh Reducer
=====================
Shrinks vertex-animated meshes (a full position per vertex per keyframe)
for memory-constrained targets.

Reductions:
- Welds vertex slots whose whole animation track and face-corner attributes
  (texture, flags, UVs, face normal) match within tolerance
- Removes triangles that become identical after welding
- Drops keyframes that linear interpolation between kept frames reproduces,
  with error budgets that grow for fast-moving vertices
- Keeps the first/last frame of the animation and of every sequence, and
  rescales sequence rates so play time is unchanged
- Rebuilds vertex adjacency and per-frame bounding boxes/spheres

Usage:
    CLI:
        vertmesh-reducer soldier.json
        vertmesh-reducer reduce *.json -d reduced/ --frame-tolerance 0.02
        vertmesh-reducer inspect soldier.json

    Python:
        from vertmesh_reducer import ReductionOptions, reduce
        changed, stats = reduce(mesh, ReductionOptions(frame_error_tolerance=0.02))
"""

from importlib.metadata import PackageNotFoundError, version

from vertmesh_reducer.cli import main
from vertmesh_reducer.mesh import AnimSequence, Mesh, Triangle
from vertmesh_reducer.reducer import ReductionOptions, ReductionStats, reduce

try:
    __version__ = version("vertmesh-reducer")
except PackageNotFoundError:
    __version__ = "unknown"

__all__ = [
    "AnimSequence",
    "Mesh",
    "ReductionOptions",
    "ReductionStats",
    "Triangle",
    "main",
    "reduce",
]
