"""Test geometric operations for scribble paths.

Tests for src.scribble_field.geometry:
    - Quadratic Bézier evaluation at t=0, 0.5, 1
    - Path flattening (M/Q/T), smooth-curve control reflection
    - Polyline length, bbox, point-in-rect masks
    - Stroke bbox with margin

Degenerate cases:
    - Straight line (control point on the chord)
    - Single point polyline / empty polyline
    - Path that doesn't start with M

Run:
    pytest tests/test_geometry.py -v
"""

import numpy as np
import pytest

from src.scribble_field import geometry
from src.scribble_field.generator import generate
from src.scribble_field.path import MoveTo, QuadraticCurveTo, parse_path


def test_quadratic_bezier_eval():
    p0, p1, p2 = np.array([0.0, 0.0]), np.array([1.0, 2.0]), np.array([2.0, 0.0])
    pts = geometry.quadratic_bezier_eval(p0, p1, p2, np.array([0.0, 0.5, 1.0]))

    assert pts.shape == (3, 2)
    np.testing.assert_allclose(pts[0], p0)
    np.testing.assert_allclose(pts[1], [1.0, 1.0])
    np.testing.assert_allclose(pts[2], p2)


def test_quadratic_bezier_straight_line():
    t = np.linspace(0, 1, 11)
    pts = geometry.quadratic_bezier_eval([0, 0], [5, 0], [10, 0], t)
    np.testing.assert_allclose(pts[:, 1], 0.0)
    np.testing.assert_allclose(pts[:, 0], 10 * t)


def test_path_to_polylines_counts_and_subpaths():
    cmds = parse_path("M 0 0 Q 1 2, 2 0 M 10 10 Q 11 11, 12 12")
    polylines = geometry.path_to_polylines(cmds, samples_per_curve=8)

    assert len(polylines) == 2
    assert polylines[0].shape == (9, 2)
    np.testing.assert_allclose(polylines[0][0], [0, 0])
    np.testing.assert_allclose(polylines[0][-1], [2, 0])
    np.testing.assert_allclose(polylines[1][0], [10, 10])


def test_smooth_curve_reflects_control():
    # T after Q 1 2, 2 0 uses control (3, -2)
    cmds = parse_path("M 0 0 Q 1 2, 2 0 T 4 0")
    (poly,) = geometry.path_to_polylines(cmds, samples_per_curve=2)

    assert poly.shape == (5, 2)
    np.testing.assert_allclose(poly[3], [3.0, -1.0])
    np.testing.assert_allclose(poly[4], [4.0, 0.0])


def test_path_to_polylines_errors():
    with pytest.raises(ValueError):
        geometry.path_to_polylines((QuadraticCurveTo(1, 1, 2, 2),))
    with pytest.raises(ValueError):
        geometry.path_to_polylines((MoveTo(0, 0),), samples_per_curve=0)
    assert geometry.path_to_polylines(()) == []


def test_polyline_length():
    pts = np.array([[0, 0], [3, 4], [3, 8]])
    assert geometry.polyline_length(pts) == pytest.approx(9.0)
    assert geometry.polyline_length(pts[:1]) == 0.0


def test_polyline_bbox():
    pts = np.array([[1, 5], [-2, 3], [4, -1]])
    assert geometry.polyline_bbox(pts) == (-2.0, -1.0, 4.0, 5.0)
    assert geometry.polyline_bbox(np.zeros((0, 2))) == (0.0, 0.0, 0.0, 0.0)


def test_points_in_rect():
    pts = np.array([[0, 0], [5, 5], [10, 10], [11, 5]])
    mask = geometry.points_in_rect(pts, (0, 0, 10, 10))
    assert mask.tolist() == [True, True, True, False]


def test_stroke_bbox_margin():
    cmds = parse_path("M 10 20 Q 30 20, 50 20")
    assert geometry.stroke_bbox(cmds) == pytest.approx((10, 20, 50, 20))
    assert geometry.stroke_bbox(cmds, margin=2) == pytest.approx((8, 18, 52, 22))


def test_flattened_curves_stay_in_control_hull():
    for s in generate(17, count=30):
        if s.heavy:
            continue
        pts = np.concatenate(geometry.path_to_polylines(s.path), axis=0)
        hull = [c.end for c in s.path] + [(c.cx, c.cy) for c in s.path if isinstance(c, QuadraticCurveTo)]
        xmin, ymin, xmax, ymax = geometry.polyline_bbox(np.array(hull))
        assert pts[:, 0].min() >= xmin - 1e-6
        assert pts[:, 0].max() <= xmax + 1e-6
        assert pts[:, 1].min() >= ymin - 1e-6
        assert pts[:, 1].max() <= ymax + 1e-6
