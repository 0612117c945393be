"""SVG rendering boundary for scribble strokes.

The generator returns typed commands; this module is the only place where
strokes become markup. Mapping per stroke:

    d                 ← format_path(stroke.path)
    stroke            ← stroke.color
    stroke-width      ← stroke.stroke_width
    opacity           ← min(1, (stroke.opacity or 0.6) * 0.7)
    stroke-dasharray  ← "on off" when a dash pattern is set
    filter            ← none (blur == 0), sBlur1 (blur ≤ 0.45), sBlur2 (otherwise)

Strokes are emitted in sequence order, so heavy strokes (last) composite on
top of the regular ones.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from src.scribble_field.generator import Stroke
from src.scribble_field.path import format_path


@dataclass(frozen=True)
class RenderSettings:
    """Display-side constants applied on top of the generated style."""
    opacity_damping: float = 0.7
    default_opacity: float = 0.6
    blur_threshold: float = 0.45
    blur_std_low: float = 0.35
    blur_std_high: float = 0.6


DEFAULT_RENDER = RenderSettings()

BLUR_LOW_ID = "sBlur1"
BLUR_HIGH_ID = "sBlur2"


def render_opacity(opacity: float, settings: RenderSettings = DEFAULT_RENDER) -> float:
    """Damped display opacity, capped at 1.0 (0 falls back to the default)."""
    return min(1.0, (opacity or settings.default_opacity) * settings.opacity_damping)


def blur_filter_id(blur: float, settings: RenderSettings = DEFAULT_RENDER) -> Optional[str]:
    """Filter tier for a blur amount; None when the stroke is not blurred."""
    if not blur:
        return None
    return BLUR_HIGH_ID if blur > settings.blur_threshold else BLUR_LOW_ID


def _num(value: float) -> str:
    # 8.0 → "8", 2.35 → "2.35"
    return f"{value:g}"


def render_path_element(stroke: Stroke, settings: RenderSettings = DEFAULT_RENDER) -> str:
    """Single <path> element for one stroke."""
    attrs = [
        f'd="{format_path(stroke.path)}"',
        f'stroke="{stroke.color}"',
        f'stroke-width="{_num(stroke.stroke_width)}"',
        'stroke-linecap="round"',
        'stroke-linejoin="round"',
        'fill="none"',
        f'opacity="{_num(round(render_opacity(stroke.opacity, settings), 4))}"',
    ]
    if stroke.dash_pattern:
        on, off = stroke.dash_pattern
        attrs.append(f'stroke-dasharray="{on} {off}"')
    filter_id = blur_filter_id(stroke.blur, settings)
    if filter_id:
        attrs.append(f'filter="url(#{filter_id})"')
    return f"<path {' '.join(attrs)} />"


def render_svg(
    strokes: Sequence[Stroke],
    width: float,
    height: float,
    settings: Optional[RenderSettings] = None
) -> str:
    """Render strokes as a standalone SVG document.

    Parameters
    ----------
    strokes : sequence of Stroke
        Output of generate(); order is preserved
    width, height : float
        Canvas size used for generation (becomes the viewBox)
    settings : RenderSettings, optional
        Opacity damping and blur tiers

    Returns
    -------
    str
        SVG markup, newline-terminated

    Notes
    -----
    preserveAspectRatio="none" lets the band stretch to any box, matching
    how the overlay is placed over a flyer.
    """
    settings = settings or DEFAULT_RENDER
    lines: List[str] = [
        '<svg xmlns="http://www.w3.org/2000/svg" width="100%" height="100%" '
        f'viewBox="0 0 {_num(width)} {_num(height)}" preserveAspectRatio="none">',
        "  <defs>",
    ]
    for filter_id, std in ((BLUR_LOW_ID, settings.blur_std_low), (BLUR_HIGH_ID, settings.blur_std_high)):
        lines.append(f'    <filter id="{filter_id}" x="-20%" y="-20%" width="140%" height="140%">')
        lines.append(f'      <feGaussianBlur stdDeviation="{_num(std)}" />')
        lines.append("    </filter>")
    lines.append("  </defs>")
    lines.extend(f"  {render_path_element(s, settings)}" for s in strokes)
    lines.append("</svg>")
    return "\n".join(lines) + "\n"
