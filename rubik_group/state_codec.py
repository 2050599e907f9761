"""In-memory encodings of PRubik configurations and their validation."""

from __future__ import annotations

from typing import Any

import numpy as np

from .cube import CubeValidationError, PRubik
from .pieces import N_CORNER_PIECES, N_EDGE_PIECES

ONE_HOT_ROWS = N_EDGE_PIECES + N_CORNER_PIECES
ONE_HOT_COLS = max(N_EDGE_PIECES, N_CORNER_PIECES)


def cube_to_arrays(cube: PRubik) -> tuple[np.ndarray, np.ndarray]:
    """Writable int32 copies of the edge and corner permutations."""
    return cube.edges.astype(np.int32, copy=True), cube.corners.astype(np.int32, copy=True)


def cube_from_arrays(edges: list[int] | np.ndarray, corners: list[int] | np.ndarray) -> PRubik:
    return PRubik(np.asarray(edges), np.asarray(corners))


def encode_one_hot(cube: PRubik) -> np.ndarray:
    """(48, 24) matrix: row i < 24 marks the image of edge piece i, row 24 + j that of corner piece j."""
    one_hot = np.zeros((ONE_HOT_ROWS, ONE_HOT_COLS), dtype=np.int8)
    one_hot[np.arange(N_EDGE_PIECES), cube.edges.astype(np.int64)] = 1
    one_hot[N_EDGE_PIECES + np.arange(N_CORNER_PIECES), cube.corners.astype(np.int64)] = 1
    return one_hot


def decode_one_hot(one_hot: list[list[int]] | np.ndarray) -> PRubik:
    arr = np.asarray(one_hot)

    if arr.ndim == 1:
        if arr.size != ONE_HOT_ROWS * ONE_HOT_COLS:
            raise CubeValidationError(f"One-hot cube must have {ONE_HOT_ROWS * ONE_HOT_COLS} values when flattened")
        arr = arr.reshape(ONE_HOT_ROWS, ONE_HOT_COLS)

    if arr.shape != (ONE_HOT_ROWS, ONE_HOT_COLS):
        raise CubeValidationError(
            f"One-hot cube must have shape ({ONE_HOT_ROWS}, {ONE_HOT_COLS}), got {arr.shape}"
        )

    if not np.isin(arr, (0, 1)).all():
        raise CubeValidationError("One-hot cube must contain only 0/1 values")
    arr = arr.astype(np.int8, copy=False)

    row_sums = arr.sum(axis=1)
    if not np.all(row_sums == 1):
        raise CubeValidationError("Each piece one-hot vector must contain exactly one 1")

    images = np.argmax(arr, axis=1).astype(np.int32)
    return cube_from_arrays(images[:N_EDGE_PIECES], images[N_EDGE_PIECES:])


def cube_to_json(cube: PRubik) -> dict[str, list[int]]:
    return {
        "edges": cube.edges.astype(int).tolist(),
        "corners": cube.corners.astype(int).tolist(),
    }


def cube_from_json(obj: dict[str, Any]) -> PRubik:
    if not isinstance(obj, dict):
        raise CubeValidationError("Cube JSON must be an object")
    missing = [key for key in ("edges", "corners") if key not in obj]
    if missing:
        raise CubeValidationError(f"Cube JSON is missing keys: {', '.join(missing)}")
    return cube_from_arrays(obj["edges"], obj["corners"])
