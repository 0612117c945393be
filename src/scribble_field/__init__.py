"""Seeded scribble-field generator and its SVG rendering boundary.

Layering:
    prng → path → generator → render

Convenience imports:
    from src.scribble_field import generate, render_svg
"""

from .generator import (
    DEFAULT_PARAMS,
    PALETTE,
    SIGNATURE_COLOR,
    ScribbleParams,
    Stroke,
    generate,
)
from .path import MoveTo, QuadraticCurveTo, SmoothCurveTo, format_path, parse_path
from .prng import LCG, random_seed
from .render import RenderSettings, render_svg

__all__ = [
    'DEFAULT_PARAMS',
    'PALETTE',
    'SIGNATURE_COLOR',
    'ScribbleParams',
    'Stroke',
    'generate',
    'MoveTo',
    'QuadraticCurveTo',
    'SmoothCurveTo',
    'format_path',
    'parse_path',
    'LCG',
    'random_seed',
    'RenderSettings',
    'render_svg',
]
