"""Pre-cube configurations (the PRubik group)."""

from __future__ import annotations

import math

import numpy as np

from .orientation import Orientation
from .pieces import (
    CORNER_CLASS_OF,
    CORNER_PIECES,
    CORNER_REPRESENTATIVES,
    CYCLIC_TABLE,
    EDGE_CLASS_OF,
    EDGE_PIECES,
    EDGE_REPRESENTATIVES,
    FLIP_TABLE,
    N_CORNER_PIECES,
    N_EDGE_PIECES,
    CornerPiece,
    EdgePiece,
)


class CubeValidationError(ValueError):
    """Raised when permutation data does not describe a pre-cube configuration."""


def _validate_permutation(values, size: int, name: str) -> np.ndarray:
    arr = np.asarray(values)
    if arr.ndim != 1 or arr.size != size:
        raise CubeValidationError(f"{name} must be a flat permutation of length {size}, got shape {arr.shape}")
    if arr.dtype.kind not in "iu":
        raise CubeValidationError(f"{name} must contain integer piece indices, got dtype {arr.dtype}")
    if np.any(arr < 0) or np.any(arr >= size):
        raise CubeValidationError(f"{name} contains piece indices outside 0..{size - 1}")
    if not np.array_equal(np.sort(arr), np.arange(size)):
        raise CubeValidationError(f"{name} is not a bijection; every piece index must appear exactly once")
    return arr.astype(np.int32, copy=True)


def _invert(perm: np.ndarray) -> np.ndarray:
    inv = np.empty_like(perm)
    inv[perm] = np.arange(perm.size, dtype=perm.dtype)
    return inv


def cycle_lengths(perm: np.ndarray) -> list[int]:
    """Lengths of all cycles (fixed points included) of an index permutation."""
    seen = np.zeros(len(perm), dtype=bool)
    lengths: list[int] = []
    for start in range(len(perm)):
        if seen[start]:
            continue
        length = 0
        i = start
        while not seen[i]:
            seen[i] = True
            i = int(perm[i])
            length += 1
        lengths.append(length)
    return lengths


class PRubik:
    """Immutable cube configuration: a pair of compatible piece permutations.

    `edges[i]` is the index of the edge piece that edge piece `i` is carried to
    (and likewise for `corners`). Both permutations commute with the piece
    structure: `edges[flip(e)] == flip(edges[e])` and
    `corners[cyclic(c)] == cyclic(corners[c])`.

    Multiplication follows left action notation: `a * b` performs `b` first,
    then `a`.
    """

    __slots__ = ("_edges", "_corners")

    def __init__(self, edges, corners):
        edges_arr = _validate_permutation(edges, N_EDGE_PIECES, "edges")
        corners_arr = _validate_permutation(corners, N_CORNER_PIECES, "corners")

        if not np.array_equal(edges_arr[FLIP_TABLE], FLIP_TABLE[edges_arr]):
            raise CubeValidationError("Edge permutation does not commute with flip")
        if not np.array_equal(corners_arr[CYCLIC_TABLE], CYCLIC_TABLE[corners_arr]):
            raise CubeValidationError("Corner permutation does not commute with cyclic")

        edges_arr.flags.writeable = False
        corners_arr.flags.writeable = False
        self._edges = edges_arr
        self._corners = corners_arr

    @classmethod
    def _trusted(cls, edges: np.ndarray, corners: np.ndarray) -> "PRubik":
        # products and inverses of compatible permutations stay compatible
        cube = cls.__new__(cls)
        edges = edges.astype(np.int32, copy=False)
        corners = corners.astype(np.int32, copy=False)
        edges.flags.writeable = False
        corners.flags.writeable = False
        cube._edges = edges
        cube._corners = corners
        return cube

    @classmethod
    def identity(cls) -> "PRubik":
        return cls._trusted(
            np.arange(N_EDGE_PIECES, dtype=np.int32),
            np.arange(N_CORNER_PIECES, dtype=np.int32),
        )

    @property
    def edges(self) -> np.ndarray:
        return self._edges

    @property
    def corners(self) -> np.ndarray:
        return self._corners

    # group operations

    def __mul__(self, other: "PRubik") -> "PRubik":
        if not isinstance(other, PRubik):
            return NotImplemented
        return PRubik._trusted(self._edges[other._edges], self._corners[other._corners])

    def inverse(self) -> "PRubik":
        return PRubik._trusted(_invert(self._edges), _invert(self._corners))

    def __pow__(self, exponent: int) -> "PRubik":
        if not isinstance(exponent, int):
            return NotImplemented
        base = self
        if exponent < 0:
            base = self.inverse()
            exponent = -exponent
        # exponentiation by squaring
        result = PRubik.identity()
        while True:
            if exponent & 1:
                result = result * base
            exponent >>= 1
            if not exponent:
                break
            base = base * base
        return result

    def order(self) -> int:
        """Least n > 0 with self ** n == identity."""
        lengths = cycle_lengths(self._edges) + cycle_lengths(self._corners)
        return math.lcm(*lengths)

    def conjugate(self, other: "PRubik") -> "PRubik":
        """Conjugate this element by `other`: other⁻¹ · self · other."""
        return other.inverse() * self * other

    def commutator(self, other: "PRubik") -> "PRubik":
        """self⁻¹ · other⁻¹ · self · other."""
        return self.inverse() * other.inverse() * self * other

    def is_identity(self) -> bool:
        return bool(
            np.array_equal(self._edges, np.arange(N_EDGE_PIECES))
            and np.array_equal(self._corners, np.arange(N_CORNER_PIECES))
        )

    def __bool__(self) -> bool:
        return not self.is_identity()

    # piece access

    def edge_image(self, piece: EdgePiece) -> EdgePiece:
        return EDGE_PIECES[int(self._edges[piece.index])]

    def corner_image(self, piece: CornerPiece) -> CornerPiece:
        return CORNER_PIECES[int(self._corners[piece.index])]

    def edge_at(self, fst: Orientation, snd: Orientation) -> EdgePiece:
        """Edge piece occupying location (fst, snd); its `fst` is the sticker showing on face `fst`."""
        location = EdgePiece(fst, snd)
        source = np.flatnonzero(self._edges == location.index)[0]
        return EDGE_PIECES[int(source)]

    def corner_at(self, fst: Orientation, snd: Orientation, thd: Orientation) -> CornerPiece:
        location = CornerPiece(fst, snd, thd)
        source = np.flatnonzero(self._corners == location.index)[0]
        return CORNER_PIECES[int(source)]

    def edge_class_permutation(self) -> np.ndarray:
        """Permutation induced on the 12 physical edges."""
        return EDGE_CLASS_OF[self._edges[EDGE_REPRESENTATIVES]]

    def corner_class_permutation(self) -> np.ndarray:
        """Permutation induced on the 8 physical corners."""
        return CORNER_CLASS_OF[self._corners[CORNER_REPRESENTATIVES]]

    # value semantics

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PRubik):
            return NotImplemented
        return bool(np.array_equal(self._edges, other._edges) and np.array_equal(self._corners, other._corners))

    def __hash__(self) -> int:
        return hash((self._edges.tobytes(), self._corners.tobytes()))

    def __repr__(self) -> str:
        if self.is_identity():
            return "PRubik.identity()"
        moved_edges = [
            f"{EDGE_PIECES[i]}->{EDGE_PIECES[int(j)]}" for i, j in enumerate(self._edges) if i != int(j)
        ]
        moved_corners = [
            f"{CORNER_PIECES[i]}->{CORNER_PIECES[int(j)]}" for i, j in enumerate(self._corners) if i != int(j)
        ]
        return f"PRubik(edges=[{', '.join(moved_edges)}], corners=[{', '.join(moved_corners)}])"


IDENTITY = PRubik.identity()
