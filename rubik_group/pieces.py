"""Edge and corner pieces, their physical equivalence classes and lookup tables.

An edge piece is an ordered pair of adjacent orientations; reversing the pair
(`flip`) gives the other ordering of the same physical edge. A corner piece is
an ordered, positively oriented triple; `cyclic` rotates the ordering. All
tables are built once at import time and indexed by `piece.index`.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .orientation import ORIENTATIONS, Axis, Orientation, cross, rotate

N_EDGE_PIECES = 24
N_CORNER_PIECES = 24
N_EDGES = 12
N_CORNERS = 8


class InadmissiblePieceError(ValueError):
    """Raised when orientations cannot form an edge or corner piece."""


def _check_orientation(value: object, name: str) -> None:
    if not isinstance(value, Orientation):
        raise InadmissiblePieceError(f"{name} must be an Orientation, got {value!r}")


@dataclass(frozen=True)
class EdgePiece:
    fst: Orientation
    snd: Orientation

    def __post_init__(self):
        _check_orientation(self.fst, "fst")
        _check_orientation(self.snd, "snd")
        if not self.fst.adjacent(self.snd):
            raise InadmissiblePieceError(f"Edge stickers {self.fst} and {self.snd} are not adjacent")

    def __str__(self) -> str:
        return f"{self.fst}{self.snd}"

    def __repr__(self) -> str:
        return f"EdgePiece({self.fst}, {self.snd})"

    @property
    def index(self) -> int:
        return _EDGE_PIECE_INDEX[self]

    @property
    def orientations(self) -> frozenset[Orientation]:
        return frozenset((self.fst, self.snd))

    @property
    def edge(self) -> "Edge":
        return Edge(int(EDGE_CLASS_OF[self.index]))

    def flip(self) -> "EdgePiece":
        return EdgePiece(self.snd, self.fst)

    def rotate(self, face: Orientation) -> "EdgePiece":
        """Image of this piece under a counterclockwise quarter turn of `face` (if it lies on it)."""
        if face not in self.orientations:
            return self
        return EdgePiece(rotate(self.fst, face), rotate(self.snd, face))

    def equivalent(self, other: "EdgePiece") -> bool:
        return self.orientations == other.orientations


@dataclass(frozen=True)
class CornerPiece:
    fst: Orientation
    snd: Orientation
    thd: Orientation

    def __post_init__(self):
        _check_orientation(self.fst, "fst")
        _check_orientation(self.snd, "snd")
        _check_orientation(self.thd, "thd")
        if not self.fst.adjacent(self.snd):
            raise InadmissiblePieceError(f"Corner stickers {self.fst} and {self.snd} are not adjacent")
        if self.thd != cross(self.fst, self.snd):
            raise InadmissiblePieceError(
                f"Corner stickers ({self.fst}, {self.snd}, {self.thd}) are not a right-handed basis"
            )

    @classmethod
    def from_pair(cls, fst: Orientation, snd: Orientation) -> "CornerPiece":
        _check_orientation(fst, "fst")
        _check_orientation(snd, "snd")
        if not fst.adjacent(snd):
            raise InadmissiblePieceError(f"Corner stickers {fst} and {snd} are not adjacent")
        return cls(fst, snd, cross(fst, snd))

    def __str__(self) -> str:
        return f"{self.fst}{self.snd}{self.thd}"

    def __repr__(self) -> str:
        return f"CornerPiece({self.fst}, {self.snd}, {self.thd})"

    @property
    def index(self) -> int:
        return _CORNER_PIECE_INDEX[self]

    @property
    def orientations(self) -> frozenset[Orientation]:
        return frozenset((self.fst, self.snd, self.thd))

    @property
    def corner(self) -> "Corner":
        return Corner(int(CORNER_CLASS_OF[self.index]))

    def cyclic(self) -> "CornerPiece":
        return CornerPiece(self.snd, self.thd, self.fst)

    def rotate(self, face: Orientation) -> "CornerPiece":
        if face not in self.orientations:
            return self
        return CornerPiece(rotate(self.fst, face), rotate(self.snd, face), rotate(self.thd, face))

    def with_axis(self, axis: Axis) -> "CornerPiece":
        """The ordering of this corner whose first sticker lies on `axis`."""
        piece = self
        for _ in range(3):
            if piece.fst.axis == axis:
                return piece
            piece = piece.cyclic()
        raise RuntimeError(f"Corner {self} has no sticker on axis {axis.name}")

    def equivalent(self, other: "CornerPiece") -> bool:
        return self.orientations == other.orientations


EDGE_PIECES = tuple(EdgePiece(a, b) for a in ORIENTATIONS for b in ORIENTATIONS if a.adjacent(b))
CORNER_PIECES = tuple(CornerPiece.from_pair(a, b) for a in ORIENTATIONS for b in ORIENTATIONS if a.adjacent(b))

_EDGE_PIECE_INDEX = {piece: i for i, piece in enumerate(EDGE_PIECES)}
_CORNER_PIECE_INDEX = {piece: i for i, piece in enumerate(CORNER_PIECES)}


def _readonly(arr: np.ndarray) -> np.ndarray:
    arr.flags.writeable = False
    return arr


def _classify(pieces: tuple, expected: int) -> tuple[np.ndarray, np.ndarray]:
    """Group pieces by orientation set. Classes are numbered by first appearance."""
    class_of = np.empty(len(pieces), dtype=np.int32)
    representatives: list[int] = []
    seen: dict[frozenset[Orientation], int] = {}
    for i, piece in enumerate(pieces):
        key = piece.orientations
        if key not in seen:
            seen[key] = len(representatives)
            representatives.append(i)
        class_of[i] = seen[key]
    if len(representatives) != expected:
        raise RuntimeError(f"Expected {expected} piece classes, got {len(representatives)}")
    return _readonly(class_of), _readonly(np.asarray(representatives, dtype=np.int32))


def _build_tables():
    if len(EDGE_PIECES) != N_EDGE_PIECES or len(CORNER_PIECES) != N_CORNER_PIECES:
        raise RuntimeError(
            f"Expected {N_EDGE_PIECES} edge and {N_CORNER_PIECES} corner pieces, "
            f"got {len(EDGE_PIECES)} and {len(CORNER_PIECES)}"
        )

    flip_table = np.array([_EDGE_PIECE_INDEX[p.flip()] for p in EDGE_PIECES], dtype=np.int32)
    cyclic_table = np.array([_CORNER_PIECE_INDEX[p.cyclic()] for p in CORNER_PIECES], dtype=np.int32)

    edge_class_of, edge_reps = _classify(EDGE_PIECES, N_EDGES)
    corner_class_of, corner_reps = _classify(CORNER_PIECES, N_CORNERS)

    corner_references = np.array(
        [_CORNER_PIECE_INDEX[CORNER_PIECES[i].with_axis(Axis.X)] for i in corner_reps],
        dtype=np.int32,
    )

    # cyclic steps taking each corner ordering to its X-axis ordering
    corner_twist = np.empty(N_CORNER_PIECES, dtype=np.int32)
    for i, piece in enumerate(CORNER_PIECES):
        steps = 0
        while piece.fst.axis != Axis.X:
            piece = piece.cyclic()
            steps += 1
        corner_twist[i] = steps

    return (
        _readonly(flip_table),
        _readonly(cyclic_table),
        edge_class_of,
        edge_reps,
        corner_class_of,
        corner_reps,
        _readonly(corner_references),
        _readonly(corner_twist),
    )


(
    FLIP_TABLE,
    CYCLIC_TABLE,
    EDGE_CLASS_OF,
    EDGE_REPRESENTATIVES,
    CORNER_CLASS_OF,
    CORNER_REPRESENTATIVES,
    CORNER_REFERENCES,
    CORNER_TWIST,
) = _build_tables()


@dataclass(frozen=True)
class Edge:
    """Physical edge: the class {e, flip(e)} of edge pieces, identified by its index 0..11."""

    index: int

    def __post_init__(self):
        if not isinstance(self.index, int) or self.index < 0 or self.index >= N_EDGES:
            raise ValueError(f"Edge index must be in range 0..{N_EDGES - 1}, got {self.index!r}")

    @classmethod
    def of(cls, piece: EdgePiece) -> "Edge":
        return piece.edge

    @property
    def representative(self) -> EdgePiece:
        return EDGE_PIECES[int(EDGE_REPRESENTATIVES[self.index])]

    @property
    def members(self) -> tuple[EdgePiece, EdgePiece]:
        piece = self.representative
        return piece, piece.flip()

    @property
    def orientations(self) -> frozenset[Orientation]:
        return self.representative.orientations

    def __str__(self) -> str:
        return str(self.representative)


@dataclass(frozen=True)
class Corner:
    """Physical corner: the class {c, cyclic(c), cyclic(cyclic(c))}, identified by its index 0..7."""

    index: int

    def __post_init__(self):
        if not isinstance(self.index, int) or self.index < 0 or self.index >= N_CORNERS:
            raise ValueError(f"Corner index must be in range 0..{N_CORNERS - 1}, got {self.index!r}")

    @classmethod
    def of(cls, piece: CornerPiece) -> "Corner":
        return piece.corner

    @property
    def representative(self) -> CornerPiece:
        return CORNER_PIECES[int(CORNER_REPRESENTATIVES[self.index])]

    @property
    def reference(self) -> CornerPiece:
        """Ordering whose first sticker lies on axis X; corner twist is measured against it."""
        return CORNER_PIECES[int(CORNER_REFERENCES[self.index])]

    @property
    def members(self) -> tuple[CornerPiece, CornerPiece, CornerPiece]:
        piece = self.representative
        return piece, piece.cyclic(), piece.cyclic().cyclic()

    @property
    def orientations(self) -> frozenset[Orientation]:
        return self.representative.orientations

    def __str__(self) -> str:
        return str(self.representative)


EDGES = tuple(Edge(i) for i in range(N_EDGES))
CORNERS = tuple(Corner(i) for i in range(N_CORNERS))
