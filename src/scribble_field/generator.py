"""Procedural scribble-field generator.

generate(seed, count, width, height) → [Stroke, ...]

Produces `count` hand-drawn-looking regular strokes followed by 1-2 bold
"signature" strokes, all from a single seeded LCG. The draw order below is
part of the output contract: reordering any rand() call changes every stroke
after it.

Regular stroke:
    start point biased into the lower band → 2..7 quadratic segments with
    wobbling control points (20% of strokes may loop) → optional flick
    sub-path (18%) → optional dash (6%) → optional blur (8%)

Heavy stroke:
    lower-left → lower-right sweep drawn as Q + T in the signature color,
    width 8..15, painted last so it composites on top

Coordinate frame: SVG user space, origin top-left, +y down, canvas
[0, width] × [0, height] (600 × 140 by default).
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from src.scribble_field.path import (
    MoveTo,
    PathCommand,
    QuadraticCurveTo,
    SmoothCurveTo,
    format_path,
    round1,
    round2,
)
from src.scribble_field.prng import LCG
from src.utils.logging_config import get_logger

logger = get_logger(__name__)


PALETTE: Tuple[str, ...] = (
    "#e74c3c", "#c0392b",  # reds
    "#3498db", "#2980b9",  # blues
    "#2ecc71", "#27ae60",  # greens
    "#f1c40f", "#f39c12",  # yellow / orange
    "#8e44ad", "#9b59b6",  # purples
    "#34495e", "#2c3e50",  # darks
    "#6b4226",             # brown
)
SIGNATURE_COLOR = "#2b2b2b"

DEFAULT_COUNT = 30
DEFAULT_WIDTH = 600.0
DEFAULT_HEIGHT = 140.0

MIN_STROKE_WIDTH = 0.8
OPACITY_RANGE = (0.25, 0.85)


@dataclass(frozen=True)
class ScribbleParams:
    """Tuning knobs; defaults reproduce the reference scribble band.

    Changing any value changes the output for every seed, so treat a params
    set like a schema version.
    """
    palette: Tuple[str, ...] = PALETTE
    signature_color: str = SIGNATURE_COLOR
    loopy_chance: float = 0.2
    loop_segment_chance: float = 0.35
    flick_chance: float = 0.18
    dash_chance: float = 0.06
    blur_chance: float = 0.08
    max_heavy: int = 2


DEFAULT_PARAMS = ScribbleParams()


@dataclass(frozen=True)
class Stroke:
    """One decorative curve and its style.

    Attributes
    ----------
    path : tuple of PathCommand
        M/Q/T commands, coordinates rounded to 0.1
    color : str
        Hex color (palette entry or signature color)
    stroke_width : float
        ≥ 0.8
    opacity : float
        [0.25, 0.85], two decimals
    dash_pattern : (int, int) or None
        (on, off) lengths
    blur : float
        ≥ 0; 0 means no blur filter
    anchors : tuple of (x, y)
        On-canvas vertices of the primary sub-path (start and segment ends).
        Control points, loop midpoints and flick points are not anchors.
    heavy : bool
        True for signature strokes
    """
    path: Tuple[PathCommand, ...]
    color: str
    stroke_width: float
    opacity: float
    dash_pattern: Optional[Tuple[int, int]] = None
    blur: float = 0.0
    anchors: Tuple[Tuple[float, float], ...] = ()
    heavy: bool = False

    @property
    def d(self) -> str:
        """SVG path data."""
        return format_path(self.path)


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def _check_dimension(name: str, value) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number, got {type(value).__name__}: {value!r}")
    if not math.isfinite(value) or value < 0:
        raise ValueError(f"{name} must be finite and >= 0, got {value}")
    return float(value)


def _regular_stroke(
    rand: LCG,
    width: float,
    height: float,
    params: ScribbleParams
) -> Stroke:
    x0 = (0.05 + rand.next() * 0.9) * width
    y0 = (0.25 + rand.next() * 0.7) * height

    segments = rand.randrange(2, 8)
    path: List[PathCommand] = [MoveTo.at(x0, y0)]
    anchors = [path[0].end]

    color = rand.choice(params.palette)
    base_width = rand.randrange(1, 9)
    width_variance = base_width * (0.12 + rand.next() * 0.5)
    stroke_width = max(MIN_STROKE_WIDTH, round1(base_width + rand.jitter(width_variance)))
    opacity = _clamp(0.35 + rand.next() * 0.45, *OPACITY_RANGE)
    wobble = 14 + rand.next() * 28
    loopy = rand.chance(params.loopy_chance)

    x, y = x0, y0
    for _ in range(segments):
        cx = x + rand.jitter(wobble)
        cy = y + rand.jitter(wobble * 0.9)
        nx = _clamp(x + rand.next() * width * 0.12 - width * 0.06 + rand.jitter(30), 0.0, width)
        ny = _clamp(y + rand.next() * height * 0.12 - height * 0.06 + rand.jitter(30), 0.0, height)

        if loopy and rand.chance(params.loop_segment_chance):
            mid_x = (x + nx) / 2 + rand.jitter(12)
            mid_y = (y + ny) / 2 + rand.jitter(12)
            path.append(QuadraticCurveTo.at(cx, cy, mid_x, mid_y))
            loop_cx = mid_x + rand.jitter(10)
            loop_cy = mid_y + rand.jitter(10)
            path.append(QuadraticCurveTo.at(loop_cx, loop_cy, nx, ny))
        else:
            path.append(QuadraticCurveTo.at(cx, cy, nx, ny))

        anchors.append(path[-1].end)
        x, y = nx, ny

    if rand.chance(params.flick_chance):
        flick_segments = rand.randrange(1, 3)
        fx = x + rand.jitter(6)
        fy = y + rand.jitter(6)
        path.append(MoveTo.at(fx, fy))
        for _ in range(flick_segments):
            fnx = _clamp(fx + rand.jitter(40), 0.0, width)
            fny = _clamp(fy + rand.jitter(40), 0.0, height)
            fcx = fx + rand.jitter(12)
            fcy = fy + rand.jitter(12)
            path.append(QuadraticCurveTo.at(fcx, fcy, fnx, fny))
            fx, fy = fnx, fny

    dash_pattern = None
    if rand.chance(params.dash_chance):
        dash_pattern = (rand.randrange(2, 8), rand.randrange(3, 11))

    blur = 0.25 + rand.next() * 0.6 if rand.chance(params.blur_chance) else 0.0

    return Stroke(
        path=tuple(path),
        color=color,
        stroke_width=stroke_width,
        opacity=round2(opacity),
        dash_pattern=dash_pattern,
        blur=blur,
        anchors=tuple(anchors),
    )


def _heavy_stroke(
    rand: LCG,
    width: float,
    height: float,
    params: ScribbleParams
) -> Stroke:
    sx = 0.12 * width + rand.next() * width * 0.5
    sy = 0.55 * height + rand.next() * height * 0.35
    ex = 0.82 * width - rand.next() * width * 0.08
    ey = 0.75 * height + rand.next() * height * 0.12
    offset = 60 + rand.next() * 100

    path = (
        MoveTo.at(sx, sy),
        QuadraticCurveTo.at(sx + offset, sy - offset / 2, (sx + ex) / 2, (sy + ey) / 2),
        SmoothCurveTo.at(ex, ey),
    )
    stroke_width = float(rand.randrange(8, 16))
    opacity = 0.7 - rand.next() * 0.15
    blur = 0.05 + rand.next() * 0.25

    return Stroke(
        path=path,
        color=params.signature_color,
        stroke_width=stroke_width,
        opacity=round2(opacity),
        dash_pattern=None,
        blur=blur,
        anchors=(path[0].end, path[1].end, path[2].end),
        heavy=True,
    )


def generate(
    seed: int,
    count: int = DEFAULT_COUNT,
    width: float = DEFAULT_WIDTH,
    height: float = DEFAULT_HEIGHT,
    params: Optional[ScribbleParams] = None
) -> List[Stroke]:
    """Generate a reproducible scribble field.

    Parameters
    ----------
    seed : int
        32-bit unsigned seed; sole source of randomness
    count : int
        Number of regular strokes, default 30 (0 → heavy strokes only)
    width, height : float
        Canvas size in SVG user units, default 600 × 140
    params : ScribbleParams, optional
        Tuning knobs; defaults reproduce the reference band

    Returns
    -------
    list of Stroke
        Regular strokes in draw order, then 1-2 heavy strokes

    Raises
    ------
    ValueError
        Seed outside [0, 2^32), negative count, or negative / non-finite
        canvas dimensions

    Examples
    --------
    >>> strokes = generate(seed=42, count=5)
    >>> strokes == generate(seed=42, count=5)
    True
    >>> strokes[-1].heavy
    True
    """
    if isinstance(count, bool) or not isinstance(count, int) or count < 0:
        raise ValueError(f"count must be a non-negative integer, got {count!r}")
    width = _check_dimension("width", width)
    height = _check_dimension("height", height)
    params = params or DEFAULT_PARAMS

    rand = LCG(seed)

    strokes = [_regular_stroke(rand, width, height, params) for _ in range(count)]

    heavy_count = max(1, math.floor(rand.next() * params.max_heavy))
    strokes.extend(_heavy_stroke(rand, width, height, params) for _ in range(heavy_count))

    logger.debug(
        "Generated scribble field: seed=%d count=%d heavy=%d canvas=%gx%g draws=%d",
        seed, count, heavy_count, width, height, rand.draws
    )
    return strokes
