import unittest

import numpy as np

from rubik_group.orientation import AXES, ORIENTATIONS, Axis, Orientation, cross
from rubik_group.pieces import (
    CORNER_CLASS_OF,
    CORNER_PIECES,
    CORNER_TWIST,
    CORNERS,
    CYCLIC_TABLE,
    EDGE_CLASS_OF,
    EDGE_PIECES,
    EDGES,
    FLIP_TABLE,
    Corner,
    CornerPiece,
    Edge,
    EdgePiece,
    InadmissiblePieceError,
)

PX = Orientation(True, Axis.X)
PY = Orientation(True, Axis.Y)
PZ = Orientation(True, Axis.Z)


class TestPieceConstruction(unittest.TestCase):
    def test_enumeration_counts(self):
        self.assertEqual(len(EDGE_PIECES), 24)
        self.assertEqual(len(CORNER_PIECES), 24)
        self.assertEqual(len(EDGES), 12)
        self.assertEqual(len(CORNERS), 8)
        self.assertEqual(len(set(EDGE_PIECES)), 24)
        self.assertEqual(len(set(CORNER_PIECES)), 24)

    def test_edge_rejects_non_adjacent_stickers(self):
        with self.assertRaises(InadmissiblePieceError):
            EdgePiece(PX, PX)
        with self.assertRaises(InadmissiblePieceError):
            EdgePiece(PX, -PX)
        with self.assertRaises(InadmissiblePieceError):
            EdgePiece(PX, "Y")

    def test_corner_rejects_non_basis(self):
        with self.assertRaises(InadmissiblePieceError):
            CornerPiece(PX, PY, -PZ)
        with self.assertRaises(InadmissiblePieceError):
            CornerPiece(PX, -PX, PZ)
        with self.assertRaises(InadmissiblePieceError):
            CornerPiece.from_pair(PY, -PY)
        self.assertEqual(CornerPiece.from_pair(PX, PY), CornerPiece(PX, PY, PZ))

    def test_integer_axes_build_the_same_pieces(self):
        with self.assertRaises(ValueError):
            EdgePiece(Orientation(True, 5), PX)
        corner = CornerPiece(Orientation(True, 0), Orientation(True, 1), Orientation(True, 2))
        self.assertEqual(corner, CornerPiece(PX, PY, PZ))
        self.assertEqual(corner.index, CornerPiece(PX, PY, PZ).index)

    def test_admissibility_error_is_value_error(self):
        self.assertTrue(issubclass(InadmissiblePieceError, ValueError))

    def test_index_matches_enumeration(self):
        for i, piece in enumerate(EDGE_PIECES):
            self.assertEqual(piece.index, i)
        for i, piece in enumerate(CORNER_PIECES):
            self.assertEqual(piece.index, i)


class TestPieceOperations(unittest.TestCase):
    def test_flip_is_fixed_point_free_involution(self):
        for piece in EDGE_PIECES:
            self.assertNotEqual(piece.flip(), piece)
            self.assertEqual(piece.flip().flip(), piece)
            self.assertEqual(piece.flip().orientations, piece.orientations)

    def test_cyclic_has_order_three(self):
        for piece in CORNER_PIECES:
            once = piece.cyclic()
            twice = once.cyclic()
            self.assertNotEqual(once, piece)
            self.assertNotEqual(twice, piece)
            self.assertEqual(twice.cyclic(), piece)
            self.assertEqual(once.orientations, piece.orientations)
            self.assertEqual(once.thd, cross(once.fst, once.snd))

    def test_tables_agree_with_operations(self):
        self.assertTrue(np.array_equal(FLIP_TABLE[FLIP_TABLE], np.arange(24)))
        self.assertFalse(np.any(FLIP_TABLE == np.arange(24)))
        third = CYCLIC_TABLE[CYCLIC_TABLE[CYCLIC_TABLE]]
        self.assertTrue(np.array_equal(third, np.arange(24)))
        for piece in EDGE_PIECES:
            self.assertEqual(EDGE_PIECES[FLIP_TABLE[piece.index]], piece.flip())
        for piece in CORNER_PIECES:
            self.assertEqual(CORNER_PIECES[CYCLIC_TABLE[piece.index]], piece.cyclic())

    def test_tables_are_read_only(self):
        with self.assertRaises(ValueError):
            FLIP_TABLE[0] = 0

    def test_with_axis_selects_ordering(self):
        for piece in CORNER_PIECES:
            for axis in AXES:
                chosen = piece.with_axis(axis)
                self.assertEqual(chosen.fst.axis, axis)
                self.assertTrue(chosen.equivalent(piece))

    def test_corner_twist_measures_steps_to_x_axis(self):
        for piece in CORNER_PIECES:
            moved = piece
            for _ in range(int(CORNER_TWIST[piece.index])):
                moved = moved.cyclic()
            self.assertEqual(moved.fst.axis, Axis.X)
            self.assertEqual(moved, piece.with_axis(Axis.X))

    def test_rotate_leaves_pieces_off_the_face(self):
        edge = EdgePiece(PX, PY)
        self.assertEqual(edge.rotate(-PZ), edge)
        self.assertEqual(edge.rotate(PZ), edge)
        self.assertEqual(EdgePiece(PX, PZ).rotate(PZ), EdgePiece(PY, PZ))
        corner = CornerPiece(PX, PY, PZ)
        self.assertEqual(corner.rotate(-PX), corner)
        self.assertEqual(corner.rotate(PZ), CornerPiece(PY, -PX, PZ))


class TestEquivalenceClasses(unittest.TestCase):
    def test_edge_classes_have_two_members(self):
        covered = set()
        for edge in EDGES:
            members = edge.members
            self.assertEqual(len(set(members)), 2)
            self.assertEqual(members[1], members[0].flip())
            for piece in members:
                self.assertEqual(piece.edge, edge)
                self.assertEqual(Edge.of(piece), edge)
            covered.update(members)
        self.assertEqual(covered, set(EDGE_PIECES))

    def test_corner_classes_have_three_members(self):
        covered = set()
        for corner in CORNERS:
            members = corner.members
            self.assertEqual(len(set(members)), 3)
            self.assertEqual(corner.reference.fst.axis, Axis.X)
            self.assertIn(corner.reference, members)
            for piece in members:
                self.assertEqual(piece.corner, corner)
                self.assertEqual(Corner.of(piece), corner)
            covered.update(members)
        self.assertEqual(covered, set(CORNER_PIECES))

    def test_equivalence_is_same_orientation_set(self):
        for a in EDGE_PIECES:
            for b in EDGE_PIECES:
                same = a.orientations == b.orientations
                self.assertEqual(a.equivalent(b), same)
                self.assertEqual(EDGE_CLASS_OF[a.index] == EDGE_CLASS_OF[b.index], same)
        for a in CORNER_PIECES:
            for b in CORNER_PIECES:
                same = a.orientations == b.orientations
                self.assertEqual(a.equivalent(b), same)
                self.assertEqual(CORNER_CLASS_OF[a.index] == CORNER_CLASS_OF[b.index], same)

    def test_class_index_range_is_checked(self):
        with self.assertRaises(ValueError):
            Edge(12)
        with self.assertRaises(ValueError):
            Corner(-1)

    def test_every_orientation_touches_four_edges_and_four_corners(self):
        for o in ORIENTATIONS:
            self.assertEqual(sum(o in e.orientations for e in EDGES), 4)
            self.assertEqual(sum(o in c.orientations for c in CORNERS), 4)


if __name__ == "__main__":
    unittest.main()
