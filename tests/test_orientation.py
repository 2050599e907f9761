import unittest

from rubik_group.orientation import (
    AXES,
    ORIENTATIONS,
    Axis,
    Orientation,
    adjacent,
    cross,
    other_axis,
    rotate,
    rotate_axis,
)

PX = Orientation(True, Axis.X)
PY = Orientation(True, Axis.Y)
PZ = Orientation(True, Axis.Z)


def adjacent_pairs():
    return [(a, b) for a in ORIENTATIONS for b in ORIENTATIONS if adjacent(a, b)]


class TestAxis(unittest.TestCase):
    def test_counts(self):
        self.assertEqual(len(AXES), 3)
        self.assertEqual(len(ORIENTATIONS), 6)
        self.assertEqual(len(set(ORIENTATIONS)), 6)

    def test_rotate_has_order_three(self):
        for a in AXES:
            self.assertNotEqual(rotate_axis(a), a)
            self.assertNotEqual(rotate_axis(rotate_axis(a)), a)
            self.assertEqual(rotate_axis(rotate_axis(rotate_axis(a))), a)

    def test_other_returns_third_axis(self):
        for a in AXES:
            self.assertEqual(other_axis(a, a), a)
            for b in AXES:
                if a == b:
                    continue
                c = other_axis(a, b)
                self.assertNotEqual(c, a)
                self.assertNotEqual(c, b)
                self.assertEqual(c, other_axis(b, a))


class TestOrientation(unittest.TestCase):
    def test_negation_keeps_axis(self):
        for o in ORIENTATIONS:
            self.assertEqual((-o).axis, o.axis)
            self.assertNotEqual(-o, o)
            self.assertEqual(-(-o), o)

    def test_adjacency_is_symmetric_and_irreflexive(self):
        for a in ORIENTATIONS:
            self.assertFalse(a.adjacent(a))
            self.assertFalse(a.adjacent(-a))
            for b in ORIENTATIONS:
                self.assertEqual(a.adjacent(b), b.adjacent(a))
        self.assertEqual(len(adjacent_pairs()), 24)

    def test_index_and_parse_roundtrip(self):
        for i, o in enumerate(ORIENTATIONS):
            self.assertEqual(o.index, i)
            self.assertEqual(Orientation.from_index(i), o)
            self.assertEqual(Orientation.parse(str(o)), o)
        self.assertEqual(Orientation.parse("-z"), -PZ)

    def test_parse_rejects_garbage(self):
        for text in ("X", "+W", "*X", "+XY", ""):
            with self.assertRaises(ValueError):
                Orientation.parse(text)
        with self.assertRaises(ValueError):
            Orientation.from_index(6)

    def test_construction_checks_fields(self):
        for positive, axis in ((True, 5), (True, -1), (1, Axis.X), (None, Axis.Y), (True, "X"), (False, True)):
            with self.assertRaises(ValueError):
                Orientation(positive, axis)
        converted = Orientation(False, 2)
        self.assertIs(converted.axis, Axis.Z)
        self.assertEqual(converted, -PZ)
        self.assertEqual(converted.index, 5)


class TestCross(unittest.TestCase):
    def test_right_handed_basis(self):
        self.assertEqual(cross(PX, PY), PZ)
        self.assertEqual(cross(PY, PZ), PX)
        self.assertEqual(cross(PZ, PX), PY)
        self.assertEqual(cross(PY, PX), -PZ)
        self.assertEqual(cross(-PX, PY), -PZ)

    def test_result_is_adjacent_to_both(self):
        for a, b in adjacent_pairs():
            c = cross(a, b)
            self.assertTrue(c.adjacent(a))
            self.assertTrue(c.adjacent(b))

    def test_anti_symmetry(self):
        for a, b in adjacent_pairs():
            self.assertEqual(cross(a, b), -cross(b, a))

    def test_cyclic_identities(self):
        for a, b in adjacent_pairs():
            self.assertEqual(cross(cross(a, b), a), b)
            self.assertEqual(cross(b, cross(a, b)), a)

    def test_injective_in_each_argument(self):
        for a in ORIENTATIONS:
            neighbours = [b for b in ORIENTATIONS if a.adjacent(b)]
            self.assertEqual(len({cross(a, b) for b in neighbours}), 4)
            self.assertEqual(len({cross(b, a) for b in neighbours}), 4)


class TestQuarterTurnOrientation(unittest.TestCase):
    def test_four_quarter_turns_restore_orientation(self):
        for r in ORIENTATIONS:
            for a in ORIENTATIONS:
                b = a
                for _ in range(4):
                    b = rotate(b, r)
                self.assertEqual(b, a, msg=f"a={a} r={r}")

    def test_fixes_own_axis_and_cycles_the_rest(self):
        for r in ORIENTATIONS:
            self.assertEqual(rotate(r, r), r)
            self.assertEqual(rotate(-r, r), -r)
            for a in ORIENTATIONS:
                if not a.adjacent(r):
                    continue
                once = rotate(a, r)
                self.assertNotEqual(once, a)
                self.assertTrue(once.adjacent(r))
                self.assertEqual(rotate(once, r), -a)

    def test_counterclockwise_about_positive_z(self):
        self.assertEqual(rotate(PX, PZ), PY)
        self.assertEqual(rotate(PY, PZ), -PX)


if __name__ == "__main__":
    unittest.main()
