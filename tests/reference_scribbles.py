"""Straight-line reference of the scribble routine for cross-checking.

Builds path strings by concatenation with a closure-held seed, exactly the
way the flyer page does it, with no typed commands and no helpers shared with
src.scribble_field. The generator must agree with it byte for byte.

Not a test module (no test_ prefix); imported by test_generator.py.
"""

import math
from decimal import ROUND_HALF_UP, Decimal


def to_fixed(x, digits):
    """Fixed-point string of the exact binary value, half away from zero."""
    q = Decimal(1).scaleb(-digits)
    s = str(Decimal(x).quantize(q, rounding=ROUND_HALF_UP))
    if s.startswith("-") and Decimal(s) == 0:
        s = s[1:]
    return s


def seeded_random(seed):
    state = [seed]

    def rand():
        state[0] = (state[0] * 1664525 + 1013904223) % 4294967296
        return state[0] / 4294967296

    return rand


PALETTE = [
    '#e74c3c', '#c0392b',
    '#3498db', '#2980b9',
    '#2ecc71', '#27ae60',
    '#f1c40f', '#f39c12',
    '#8e44ad', '#9b59b6',
    '#34495e', '#2c3e50',
    '#6b4226',
]


def reference_scribbles(seed=1, count=30, vw=600, vh=140):
    """Return a list of dicts: d, stroke, strokeWidth, opacity, dash, blur."""
    rand = seeded_random(seed)

    def jitter(amount):
        return rand() * amount * 2 - amount

    def f1(v):
        return to_fixed(v, 1)

    strokes = []
    for _ in range(count):
        x0 = (0.05 + rand() * 0.9) * vw
        y0 = (0.25 + rand() * 0.7) * vh
        segments = 2 + math.floor(rand() * 6)
        d = f"M {f1(x0)} {f1(y0)}"
        x, y = x0, y0

        color = PALETTE[math.floor(rand() * len(PALETTE))]
        base_width = 1 + math.floor(rand() * 8)
        width_variance = base_width * (0.12 + rand() * 0.5)
        stroke_width = max(0.8, float(f1(base_width + jitter(width_variance))))
        opacity = max(0.25, min(0.85, 0.35 + rand() * 0.45))
        wobble = 14 + rand() * 28
        loopy = rand() < 0.2

        for _ in range(segments):
            cx = x + jitter(wobble)
            cy = y + jitter(wobble * 0.9)
            nx = max(0, min(vw, x + (rand() * vw * 0.12) - vw * 0.06 + jitter(30)))
            ny = max(0, min(vh, y + (rand() * vh * 0.12) - vh * 0.06 + jitter(30)))
            if loopy and rand() < 0.35:
                midx = (x + nx) / 2 + jitter(12)
                midy = (y + ny) / 2 + jitter(12)
                d += f" Q {f1(cx)} {f1(cy)}, {f1(midx)} {f1(midy)}"
                qx = f1(midx + jitter(10))
                qy = f1(midy + jitter(10))
                d += f" Q {qx} {qy}, {f1(nx)} {f1(ny)}"
            else:
                d += f" Q {f1(cx)} {f1(cy)}, {f1(nx)} {f1(ny)}"
            x, y = nx, ny

        if rand() < 0.18:
            ex_segments = 1 + math.floor(rand() * 2)
            sx = x + jitter(6)
            sy = y + jitter(6)
            d += f" M {f1(sx)} {f1(sy)}"
            for _ in range(ex_segments):
                enx = max(0, min(vw, sx + jitter(40)))
                eny = max(0, min(vh, sy + jitter(40)))
                qx = f1(sx + jitter(12))
                qy = f1(sy + jitter(12))
                d += f" Q {qx} {qy}, {f1(enx)} {f1(eny)}"
                sx, sy = enx, eny

        dash = None
        if rand() < 0.06:
            dash = (2 + math.floor(rand() * 6), 3 + math.floor(rand() * 8))
        blur = 0.25 + rand() * 0.6 if rand() < 0.08 else 0

        strokes.append({
            'd': d,
            'stroke': color,
            'strokeWidth': stroke_width,
            'opacity': float(to_fixed(opacity, 2)),
            'dash': dash,
            'blur': blur,
        })

    heavy_count = max(1, math.floor(rand() * 2))
    for _ in range(heavy_count):
        sx = 0.12 * vw + rand() * vw * 0.5
        sy = 0.55 * vh + rand() * vh * 0.35
        ex = 0.82 * vw - rand() * vw * 0.08
        ey = 0.75 * vh + rand() * vh * 0.12
        off = 60 + rand() * 100
        d = (
            f"M {f1(sx)} {f1(sy)} Q {f1(sx + off)} {f1(sy - off / 2)}, "
            f"{f1((sx + ex) / 2)} {f1((sy + ey) / 2)} T {f1(ex)} {f1(ey)}"
        )
        strokes.append({
            'd': d,
            'stroke': '#2b2b2b',
            'strokeWidth': 8 + math.floor(rand() * 8),
            'opacity': 0.7 - rand() * 0.15,
            'dash': None,
            'blur': 0.05 + rand() * 0.25,
        })

    return strokes
