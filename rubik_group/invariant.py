"""Reachability invariant of pre-cube configurations.

Three homomorphisms leave the PRubik group:

- ``parity``: sign of the permutation of the 12 physical edges times the sign
  of the permutation of the 8 physical corners.
- ``edge_flip``: sign of the permutation of all 24 edge pieces. Since edge
  permutations commute with flip, this is -1 exactly when an odd number of
  edges end up flipped.
- ``corner_rotation``: total corner twist mod 3, each corner measured against
  its ordering with the first sticker on axis X.

Together they form a surjective homomorphism onto Z/2 x Z/2 x Z/3. Signs are
reported as +1/-1 and the rotation as 0, 1 or 2. A configuration is reachable
by quarter turns exactly when its invariant is the identity (+1, +1, 0).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

import numpy as np

from .cube import IDENTITY, PRubik, CubeValidationError, cycle_lengths
from .moves import Move, apply_moves
from .orientation import Axis, Orientation
from .pieces import CORNER_REFERENCES, CORNER_TWIST, N_CORNER_PIECES, N_EDGE_PIECES, CornerPiece, EdgePiece

DEFAULT_SWAP_EDGES = (
    EdgePiece(Orientation(True, Axis.Z), Orientation(True, Axis.X)),
    EdgePiece(Orientation(True, Axis.Z), Orientation(True, Axis.Y)),
)
DEFAULT_FLIP_EDGE = EdgePiece(Orientation(True, Axis.Z), Orientation(True, Axis.X))
DEFAULT_ROTATE_CORNER = CornerPiece.from_pair(Orientation(True, Axis.X), Orientation(True, Axis.Y))


@dataclass(frozen=True)
class Invariant:
    """Element of Z/2 x Z/2 x Z/3, written as (sign, sign, residue)."""

    parity: int = 1
    edge_flip: int = 1
    corner_rotation: int = 0

    def __post_init__(self):
        if self.parity not in (1, -1):
            raise ValueError(f"parity must be +1 or -1, got {self.parity!r}")
        if self.edge_flip not in (1, -1):
            raise ValueError(f"edge_flip must be +1 or -1, got {self.edge_flip!r}")
        if not isinstance(self.corner_rotation, int) or self.corner_rotation not in (0, 1, 2):
            raise ValueError(f"corner_rotation must be 0, 1 or 2, got {self.corner_rotation!r}")

    @classmethod
    def identity(cls) -> "Invariant":
        return cls(1, 1, 0)

    @classmethod
    def all(cls) -> list["Invariant"]:
        return [cls(p, f, r) for p in (1, -1) for f in (1, -1) for r in range(3)]

    def __mul__(self, other: "Invariant") -> "Invariant":
        if not isinstance(other, Invariant):
            return NotImplemented
        return Invariant(
            self.parity * other.parity,
            self.edge_flip * other.edge_flip,
            (self.corner_rotation + other.corner_rotation) % 3,
        )

    def inverse(self) -> "Invariant":
        return Invariant(self.parity, self.edge_flip, (-self.corner_rotation) % 3)

    def is_identity(self) -> bool:
        return self == INVARIANT_IDENTITY

    def as_tuple(self) -> tuple[int, int, int]:
        return self.parity, self.edge_flip, self.corner_rotation


INVARIANT_IDENTITY = Invariant.identity()


class Mismatch(Enum):
    PARITY = "parity mismatch"
    EDGE_FLIP = "edge-flip mismatch"
    CORNER_ROTATION = "corner-rotation mismatch"


class UnreachableCubeError(ValueError):
    """Raised when a configuration that fails the invariant is coerced into ReachableCube."""

    def __init__(self, mismatches: Iterable[Mismatch]):
        self.mismatches = tuple(mismatches)
        super().__init__("Cube is not reachable: " + ", ".join(m.value for m in self.mismatches))


def permutation_sign(perm: np.ndarray) -> int:
    lengths = cycle_lengths(perm)
    return -1 if (len(perm) - len(lengths)) % 2 else 1


def parity(cube: PRubik) -> int:
    return permutation_sign(cube.edge_class_permutation()) * permutation_sign(cube.corner_class_permutation())


def edge_flip(cube: PRubik) -> int:
    return permutation_sign(cube.edges)


def corner_rotation(cube: PRubik) -> int:
    # each reference ordering has twist 0; its image carries the corner's twist
    return int(np.sum(CORNER_TWIST[cube.corners[CORNER_REFERENCES]])) % 3


def invariant(cube: PRubik) -> Invariant:
    return Invariant(parity(cube), edge_flip(cube), corner_rotation(cube))


def mismatches(cube: PRubik) -> list[Mismatch]:
    value = invariant(cube)
    found: list[Mismatch] = []
    if value.parity != 1:
        found.append(Mismatch.PARITY)
    if value.edge_flip != 1:
        found.append(Mismatch.EDGE_FLIP)
    if value.corner_rotation != 0:
        found.append(Mismatch.CORNER_ROTATION)
    return found


def is_valid(cube: PRubik) -> bool:
    """True iff `cube` is reachable from the solved cube by quarter turns."""
    return invariant(cube).is_identity()


# generators of the invariant's target group


def swap_edges(a: EdgePiece | None = None, b: EdgePiece | None = None) -> PRubik:
    """Exchange two edges of one face, leaving every corner in place. Flips parity only."""
    if a is None and b is None:
        a, b = DEFAULT_SWAP_EDGES
    if a is None or b is None:
        raise CubeValidationError("swap_edges needs both edges or neither")
    if a.equivalent(b):
        raise CubeValidationError(f"Cannot swap edge {a} with itself")
    if not (a.orientations & b.orientations):
        raise CubeValidationError(f"Edges {a} and {b} do not share a face")

    edges = np.arange(N_EDGE_PIECES, dtype=np.int32)
    edges[a.index] = b.index
    edges[b.index] = a.index
    edges[a.flip().index] = b.flip().index
    edges[b.flip().index] = a.flip().index
    return PRubik(edges, np.arange(N_CORNER_PIECES, dtype=np.int32))


def flip_edge(piece: EdgePiece | None = None) -> PRubik:
    """Exchange the two stickers of a single edge. Flips edge_flip only."""
    if piece is None:
        piece = DEFAULT_FLIP_EDGE

    edges = np.arange(N_EDGE_PIECES, dtype=np.int32)
    edges[piece.index] = piece.flip().index
    edges[piece.flip().index] = piece.index
    return PRubik(edges, np.arange(N_CORNER_PIECES, dtype=np.int32))


def rotate_corner(piece: CornerPiece | None = None) -> PRubik:
    """Twist a single corner by one step in place. Adds 1 to corner_rotation only."""
    if piece is None:
        piece = DEFAULT_ROTATE_CORNER

    reference = piece.corner.reference
    members = [reference, reference.cyclic(), reference.cyclic().cyclic()]
    corners = np.arange(N_CORNER_PIECES, dtype=np.int32)
    for i, member in enumerate(members):
        corners[member.index] = members[(i + 2) % 3].index
    return PRubik(np.arange(N_EDGE_PIECES, dtype=np.int32), corners)


def from_invariant(value: Invariant) -> PRubik:
    """A configuration whose invariant is `value` (right inverse of `invariant`)."""
    cube = IDENTITY
    if value.parity == -1:
        cube = cube * swap_edges()
    if value.edge_flip == -1:
        cube = cube * flip_edge()
    if value.corner_rotation:
        cube = cube * rotate_corner() ** value.corner_rotation
    return cube


class ReachableCube:
    """A PRubik configuration known to satisfy the invariant.

    Products, inverses and quarter turns of reachable cubes are reachable, so
    those operations skip re-validation.
    """

    __slots__ = ("_cube",)

    def __init__(self, cube: PRubik):
        if not isinstance(cube, PRubik):
            raise TypeError(f"ReachableCube wraps a PRubik, got {type(cube).__name__}")
        found = mismatches(cube)
        if found:
            raise UnreachableCubeError(found)
        self._cube = cube

    @classmethod
    def _trusted(cls, cube: PRubik) -> "ReachableCube":
        reachable = cls.__new__(cls)
        reachable._cube = cube
        return reachable

    @classmethod
    def identity(cls) -> "ReachableCube":
        return cls._trusted(IDENTITY)

    @classmethod
    def from_moves(cls, moves: Iterable[Move]) -> "ReachableCube":
        return cls.identity().apply_moves(moves)

    @property
    def cube(self) -> PRubik:
        return self._cube

    def __mul__(self, other: "ReachableCube") -> "ReachableCube":
        if not isinstance(other, ReachableCube):
            return NotImplemented
        return ReachableCube._trusted(self._cube * other._cube)

    def __pow__(self, exponent: int) -> "ReachableCube":
        if not isinstance(exponent, int):
            return NotImplemented
        return ReachableCube._trusted(self._cube ** exponent)

    def inverse(self) -> "ReachableCube":
        return ReachableCube._trusted(self._cube.inverse())

    def apply_moves(self, moves: Iterable[Move]) -> "ReachableCube":
        return ReachableCube._trusted(apply_moves(self._cube, moves))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ReachableCube):
            return NotImplemented
        return self._cube == other._cube

    def __hash__(self) -> int:
        return hash(self._cube)

    def __repr__(self) -> str:
        return f"ReachableCube({self._cube!r})"
