"""Geometric operations for scribble paths.

Provides:
    - Quadratic Bézier evaluation
    - Path flattening: M/Q/T commands → polylines (one per sub-path)
    - Polyline operations: length, bbox, point-in-rect masks
    - Stroke bounding box on the flattened curve

Used by:
    - strokes.py: bbox filtering and overdraw heatmaps
    - inspect_strokes.py: band coverage summary
    - Tests: bounds and shape checks on generated strokes

Coordinates are SVG user units (origin top-left, +y down). Control points
may sit off-canvas; a quadratic curve never leaves the hull of its three
points, so flattened curves are bounded by those points.
"""

from typing import List, Sequence, Tuple

import numpy as np

from src.scribble_field.path import MoveTo, PathCommand, QuadraticCurveTo, SmoothCurveTo


def quadratic_bezier_eval(
    p0: np.ndarray,
    p1: np.ndarray,
    p2: np.ndarray,
    t: np.ndarray
) -> np.ndarray:
    """Evaluate quadratic Bézier curve at parameters t.

    Parameters
    ----------
    p0, p1, p2 : np.ndarray
        Start, control and end points, shape (2,)
    t : np.ndarray
        Parameter values in [0, 1], shape (N,)

    Returns
    -------
    np.ndarray
        Points on curve, shape (N, 2)

    Notes
    -----
    B(t) = (1-t)²·p0 + 2(1-t)t·p1 + t²·p2
    """
    p0 = np.asarray(p0, dtype=np.float64)
    p1 = np.asarray(p1, dtype=np.float64)
    p2 = np.asarray(p2, dtype=np.float64)
    t = np.atleast_1d(np.asarray(t, dtype=np.float64))[:, None]

    one_minus_t = 1.0 - t
    return (one_minus_t ** 2) * p0 + 2.0 * one_minus_t * t * p1 + (t ** 2) * p2


def path_to_polylines(
    commands: Sequence[PathCommand],
    samples_per_curve: int = 16
) -> List[np.ndarray]:
    """Flatten path commands to polylines, one per sub-path.

    Parameters
    ----------
    commands : sequence of PathCommand
        Must start with MoveTo
    samples_per_curve : int
        Points per curve segment (including the end point), default 16

    Returns
    -------
    list of np.ndarray
        Each array has shape (N, 2), N ≥ 1

    Raises
    ------
    ValueError
        If the path does not start with MoveTo or samples_per_curve < 1

    Notes
    -----
    T reflects the previous Q control point about the current point; after a
    non-curve command the control point collapses onto the current point,
    which degrades T to a straight line (standard SVG behavior).
    """
    if samples_per_curve < 1:
        raise ValueError(f"samples_per_curve must be >= 1, got {samples_per_curve}")
    if not commands:
        return []
    if not isinstance(commands[0], MoveTo):
        raise ValueError(f"Path must start with MoveTo, got {type(commands[0]).__name__}")

    t = np.linspace(0.0, 1.0, samples_per_curve + 1)[1:]
    polylines: List[List[np.ndarray]] = []
    current = np.zeros(2)
    last_control = None

    for cmd in commands:
        end = np.array(cmd.end, dtype=np.float64)
        if isinstance(cmd, MoveTo):
            polylines.append([end[None, :]])
            last_control = None
        elif isinstance(cmd, QuadraticCurveTo):
            control = np.array([cmd.cx, cmd.cy], dtype=np.float64)
            polylines[-1].append(quadratic_bezier_eval(current, control, end, t))
            last_control = control
        elif isinstance(cmd, SmoothCurveTo):
            control = current if last_control is None else 2.0 * current - last_control
            polylines[-1].append(quadratic_bezier_eval(current, control, end, t))
            last_control = control
        else:
            raise ValueError(f"Unsupported path command: {cmd!r}")
        current = end

    return [np.concatenate(chunks, axis=0) for chunks in polylines]


def polyline_length(points: np.ndarray) -> float:
    """Sum of Euclidean distances between consecutive vertices."""
    points = np.asarray(points, dtype=np.float64)
    if points.shape[0] < 2:
        return 0.0
    return float(np.linalg.norm(np.diff(points, axis=0), axis=1).sum())


def polyline_bbox(points: np.ndarray) -> Tuple[float, float, float, float]:
    """Axis-aligned bbox (xmin, ymin, xmax, ymax); (0, 0, 0, 0) if empty."""
    points = np.asarray(points, dtype=np.float64)
    if points.shape[0] == 0:
        return (0.0, 0.0, 0.0, 0.0)
    xmin, ymin = points.min(axis=0)
    xmax, ymax = points.max(axis=0)
    return (float(xmin), float(ymin), float(xmax), float(ymax))


def points_in_rect(
    points: np.ndarray,
    rect_xyxy: Tuple[float, float, float, float]
) -> np.ndarray:
    """Boolean mask of points inside (or on the edge of) a rectangle."""
    points = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    xmin, ymin, xmax, ymax = rect_xyxy
    return (
        (points[:, 0] >= xmin) & (points[:, 0] <= xmax) &
        (points[:, 1] >= ymin) & (points[:, 1] <= ymax)
    )


def stroke_bbox(
    commands: Sequence[PathCommand],
    margin: float = 0.0,
    samples_per_curve: int = 16
) -> Tuple[float, float, float, float]:
    """Bounding box of the flattened path, grown by margin.

    Pass margin = stroke_width / 2 to cover the painted ribbon.
    """
    polylines = path_to_polylines(commands, samples_per_curve)
    if not polylines:
        return (0.0, 0.0, 0.0, 0.0)
    xmin, ymin, xmax, ymax = polyline_bbox(np.concatenate(polylines, axis=0))
    return (xmin - margin, ymin - margin, xmax + margin, ymax + margin)
