# helicave/tests/test_geometry.py
"""
Geometry + AABB overlap checks.

Usage (from repo root):
  python -m pytest helicave/tests/test_geometry.py
"""
from itertools import product

from helicave.game.geometry import Dimensions, Point, Rectangle, overlaps


def box(x1, y1, x2, y2) -> Rectangle:
    return Rectangle(Point(x1, y1), Point(x2, y2))


def test_from_origin_spans_dimensions():
    r = Rectangle.from_origin(Point(10, 20), Dimensions(30, 5))
    assert r.start == Point(10, 20)
    assert r.end == Point(40, 25)


def test_overlap_basic():
    assert overlaps(box(0, 0, 10, 10), box(5, 5, 15, 15))
    assert overlaps(box(0, 0, 10, 10), box(2, 2, 4, 4)), "containment must count"
    assert not overlaps(box(0, 0, 10, 10), box(20, 0, 30, 10))
    assert not overlaps(box(0, 0, 10, 10), box(0, 20, 10, 30))


def test_edge_touching_is_not_overlap():
    a = box(0, 0, 10, 10)
    assert not overlaps(a, box(10, 0, 20, 10)), "right edge touch"
    assert not overlaps(a, box(-10, 0, 0, 10)), "left edge touch"
    assert not overlaps(a, box(0, 10, 10, 20)), "bottom edge touch"
    assert not overlaps(a, box(10, 10, 20, 20)), "corner touch"
    # one unit further in turns it into an overlap
    assert overlaps(a, box(9, 0, 19, 10))


def test_overlap_is_symmetric():
    coords = (0, 5, 10, 15)
    rects = [box(x1, y1, x2, y2)
             for x1, x2 in product(coords, coords) if x1 < x2
             for y1, y2 in ((0, 10), (5, 15), (10, 20))]
    for a, b in product(rects, rects):
        assert overlaps(a, b) == overlaps(b, a), f"asymmetric for {a} / {b}"


def test_values_are_immutable():
    p = Point(1, 2)
    try:
        p.x = 5  # type: ignore[misc]
    except AttributeError:
        pass
    else:
        raise AssertionError("Point must be frozen")
