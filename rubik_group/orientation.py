"""Axis and orientation algebra for the 3x3 cube."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class Axis(IntEnum):
    X = 0
    Y = 1
    Z = 2

    def rotate(self) -> "Axis":
        """Cyclic successor: X -> Y -> Z -> X."""
        return Axis((self + 1) % 3)

    def other(self, axis: "Axis") -> "Axis":
        """Third axis given two distinct ones. Returns self when both are equal."""
        if self == axis:
            return self
        return Axis(3 - self - axis)


AXES = (Axis.X, Axis.Y, Axis.Z)


def rotate_axis(axis: Axis) -> Axis:
    return axis.rotate()


def other_axis(a: Axis, b: Axis) -> Axis:
    return a.other(b)


@dataclass(frozen=True)
class Orientation:
    """Signed axis: one of the six faces (and one of the six sticker colours)."""

    positive: bool
    axis: Axis

    def __post_init__(self):
        if not isinstance(self.positive, bool):
            raise ValueError(f"Orientation sign must be a bool, got {self.positive!r}")
        if isinstance(self.axis, Axis):
            return
        if isinstance(self.axis, bool) or not isinstance(self.axis, int) or self.axis not in (0, 1, 2):
            raise ValueError(f"Orientation axis must be an Axis (0, 1 or 2), got {self.axis!r}")
        object.__setattr__(self, "axis", Axis(self.axis))

    def __neg__(self) -> "Orientation":
        return Orientation(not self.positive, self.axis)

    def __str__(self) -> str:
        return f"{'+' if self.positive else '-'}{self.axis.name}"

    def __repr__(self) -> str:
        return f"Orientation({self})"

    @property
    def index(self) -> int:
        # +X, -X, +Y, -Y, +Z, -Z
        return int(self.axis) * 2 + (0 if self.positive else 1)

    @classmethod
    def from_index(cls, index: int) -> "Orientation":
        if not isinstance(index, int) or index < 0 or index >= 6:
            raise ValueError(f"Orientation index must be in range 0..5, got {index!r}")
        return ORIENTATIONS[index]

    @classmethod
    def parse(cls, text: str) -> "Orientation":
        """Parse the `str()` form, e.g. "+X" or "-z"."""
        if not isinstance(text, str) or len(text.strip()) != 2:
            raise ValueError(f"Orientation must look like '+X' or '-Z', got {text!r}")
        sign, letter = text.strip()[0], text.strip()[1].upper()
        if sign not in "+-" or letter not in ("X", "Y", "Z"):
            raise ValueError(f"Orientation must look like '+X' or '-Z', got {text!r}")
        return cls(sign == "+", Axis[letter])

    def adjacent(self, other: "Orientation") -> bool:
        """Two faces are adjacent iff they lie on different axes."""
        return self.axis != other.axis


ORIENTATIONS = tuple(Orientation(positive, axis) for axis in AXES for positive in (True, False))

if len(ORIENTATIONS) != 6 or any(o.index != i for i, o in enumerate(ORIENTATIONS)):
    raise RuntimeError("Orientation table is inconsistent")


def adjacent(a: Orientation, b: Orientation) -> bool:
    return a.adjacent(b)


def cross(a: Orientation, b: Orientation) -> Orientation:
    """Third orientation completing the right-handed basis (a, b, cross(a, b)).

    Only meaningful for adjacent a, b. The sign is positive iff "b.axis follows
    a.axis" agrees with "a and b have equal signs".
    """
    successor = b.axis == a.axis.rotate()
    same_sign = a.positive == b.positive
    return Orientation(successor == same_sign, a.axis.other(b.axis))


def rotate(a: Orientation, r: Orientation) -> Orientation:
    """Image of sticker orientation `a` after a counterclockwise quarter turn about face `r`."""
    if a.axis == r.axis:
        return a
    return cross(r, a)
