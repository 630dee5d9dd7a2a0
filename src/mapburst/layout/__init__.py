from .arc import ArcGeometry, Scales, arc_path, compute_arc
from .partition import PartitionedNode, ancestor_path, ancestors, partition
from .scale import LinearScale, SqrtScale, interpolate

__all__ = [
    "ArcGeometry",
    "LinearScale",
    "PartitionedNode",
    "Scales",
    "SqrtScale",
    "ancestor_path",
    "ancestors",
    "arc_path",
    "compute_arc",
    "interpolate",
    "partition",
]
