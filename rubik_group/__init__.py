"""Group structure and reachability invariant of the 3x3 Rubik's cube."""

from .cube import IDENTITY, CubeValidationError, PRubik
from .invariant import (
    Invariant,
    Mismatch,
    ReachableCube,
    UnreachableCubeError,
    corner_rotation,
    edge_flip,
    flip_edge,
    from_invariant,
    invariant,
    is_valid,
    parity,
    rotate_corner,
    swap_edges,
)
from .moves import FACE_TURNS, apply_moves, elementary_turn, scramble
from .orientation import AXES, ORIENTATIONS, Axis, Orientation, cross, rotate
from .pieces import (
    CORNER_PIECES,
    CORNERS,
    EDGE_PIECES,
    EDGES,
    Corner,
    CornerPiece,
    Edge,
    EdgePiece,
    InadmissiblePieceError,
)

__all__ = [
    "AXES",
    "Axis",
    "CORNERS",
    "CORNER_PIECES",
    "Corner",
    "CornerPiece",
    "CubeValidationError",
    "EDGES",
    "EDGE_PIECES",
    "Edge",
    "EdgePiece",
    "FACE_TURNS",
    "IDENTITY",
    "InadmissiblePieceError",
    "Invariant",
    "Mismatch",
    "ORIENTATIONS",
    "Orientation",
    "PRubik",
    "ReachableCube",
    "UnreachableCubeError",
    "apply_moves",
    "corner_rotation",
    "cross",
    "edge_flip",
    "elementary_turn",
    "flip_edge",
    "from_invariant",
    "invariant",
    "is_valid",
    "parity",
    "rotate",
    "rotate_corner",
    "scramble",
    "swap_edges",
]
