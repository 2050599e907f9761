"""Quarter-turn generation and move application."""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np

from .cube import IDENTITY, PRubik
from .orientation import ORIENTATIONS, Orientation
from .pieces import CORNER_PIECES, EDGE_PIECES, N_CORNER_PIECES, N_EDGE_PIECES

Move = Orientation | str

# Each move is a counterclockwise quarter turn about the named face.
# A clockwise turn is the same face three times, a half turn twice.
N_MOVES = len(ORIENTATIONS)
MOVE_NAMES = [str(face) for face in ORIENTATIONS]


def _generate_face_turn_permutation(face: Orientation) -> tuple[np.ndarray, np.ndarray]:
    edges = np.empty(N_EDGE_PIECES, dtype=np.int32)
    for piece in EDGE_PIECES:
        edges[piece.index] = piece.rotate(face).index

    corners = np.empty(N_CORNER_PIECES, dtype=np.int32)
    for piece in CORNER_PIECES:
        corners[piece.index] = piece.rotate(face).index

    return edges, corners


def _generate_move_permutations() -> tuple[np.ndarray, np.ndarray]:
    edge_perms = np.empty((N_MOVES, N_EDGE_PIECES), dtype=np.int32)
    corner_perms = np.empty((N_MOVES, N_CORNER_PIECES), dtype=np.int32)
    for i, face in enumerate(ORIENTATIONS):
        edge_perms[i], corner_perms[i] = _generate_face_turn_permutation(face)

    edge_perms.flags.writeable = False
    corner_perms.flags.writeable = False
    return edge_perms, corner_perms


def _generate_face_turns() -> dict[Orientation, PRubik]:
    turns: dict[Orientation, PRubik] = {}
    for i, face in enumerate(ORIENTATIONS):
        turn = PRubik(MOVE_EDGE_PERMUTATIONS[i], MOVE_CORNER_PERMUTATIONS[i])
        if turn.order() != 4:
            raise RuntimeError(f"Quarter turn about {face} has order {turn.order()}, expected 4")
        turns[face] = turn
    return turns


MOVE_EDGE_PERMUTATIONS, MOVE_CORNER_PERMUTATIONS = _generate_move_permutations()
FACE_TURNS = _generate_face_turns()


def _coerce_move(move: Move) -> Orientation:
    if isinstance(move, Orientation):
        return move
    if isinstance(move, str):
        return Orientation.parse(move)
    raise ValueError(f"Move must be an Orientation or a string like '+X', got {move!r}")


def elementary_turn(face: Move) -> PRubik:
    """Counterclockwise quarter turn about `face`."""
    return FACE_TURNS[_coerce_move(face)]


def apply_move(cube: PRubik, move: Move) -> PRubik:
    return elementary_turn(move) * cube


def apply_moves(cube: PRubik, moves: Iterable[Move]) -> PRubik:
    """Apply quarter turns in sequence order, starting from `cube`."""
    for move in moves:
        cube = apply_move(cube, move)
    return cube


def moves_to_cube(moves: Iterable[Move]) -> PRubik:
    return apply_moves(IDENTITY, moves)


def invert_moves(moves: Sequence[Move]) -> list[Orientation]:
    """Sequence undoing `moves`: reverse order, each face turned three more times."""
    inverse: list[Orientation] = []
    for move in reversed(moves):
        inverse.extend([_coerce_move(move)] * 3)
    return inverse


def scramble(
    steps: int,
    seed: int | None = None,
    rng: np.random.Generator | None = None,
) -> tuple[PRubik, list[Orientation]]:
    """Random sequence of `steps` quarter turns applied to the solved cube.

    The same face is never chosen a fourth time in a row, since that would
    cancel the previous three turns.
    """
    if isinstance(steps, bool) or not isinstance(steps, int) or steps < 0:
        raise ValueError("Scramble steps must be a non-negative integer")
    if seed is not None and rng is not None:
        raise ValueError("Pass either seed or rng to scramble, not both")

    if rng is None:
        rng = np.random.default_rng(seed)

    move_list: list[Orientation] = []
    all_moves = np.arange(N_MOVES, dtype=np.int32)
    for _ in range(steps):
        if len(move_list) >= 3 and move_list[-1] == move_list[-2] == move_list[-3]:
            candidates = all_moves[all_moves != move_list[-1].index]
        else:
            candidates = all_moves
        move_list.append(ORIENTATIONS[int(rng.choice(candidates))])

    return moves_to_cube(move_list), move_list
