"""YAML schema validation and config loading.

Provides centralized validation for configuration and stroke files using pydantic:
    - Scribble schema (scribble.v1): seed, stroke count, canvas, tuning, render
    - Strokes schema (strokes.v1): serialized generator output

All loaders fail fast with actionable messages (file path, offending key,
expected range).

Units:
    - Geometry: SVG user units (the default band is 600 × 140)
    - Probabilities: [0.0, 1.0]
    - Colors: "#rrggbb"

Usage:
    from src.utils import validators

    cfg = validators.load_scribble_config("configs/scribble_default.v1.yaml")
    doc = validators.validate_strokes_file("outputs/strokes.yaml")
"""

import re
from pathlib import Path
from typing import List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

_HEX_COLOR_RE = re.compile(r"^#[0-9a-fA-F]{6}$")

SEED_MAX = 2 ** 32

# Anchors are clamped to the canvas and then rounded to 0.1
ANCHOR_TOLERANCE = 0.05


def _check_hex(v: str) -> str:
    if not _HEX_COLOR_RE.match(v):
        raise ValueError(f"Expected color as '#rrggbb', got {v!r}")
    return v.lower()


# ============================================================================
# SCRIBBLE SCHEMA V1
# ============================================================================

class CanvasV1(BaseModel):
    """Drawing region in SVG user units."""
    width: float = Field(600.0, ge=0.0, allow_inf_nan=False, description="Canvas width")
    height: float = Field(140.0, ge=0.0, allow_inf_nan=False, description="Canvas height")


class TuningV1(BaseModel):
    """Generator probabilities and colors (defaults = reference band)."""
    palette: List[str] = Field(
        default_factory=lambda: [
            "#e74c3c", "#c0392b", "#3498db", "#2980b9", "#2ecc71", "#27ae60",
            "#f1c40f", "#f39c12", "#8e44ad", "#9b59b6", "#34495e", "#2c3e50",
            "#6b4226",
        ],
        min_length=1,
        description="Regular stroke colors, picked uniformly"
    )
    signature_color: str = Field("#2b2b2b", description="Heavy stroke color")
    loopy_chance: float = Field(0.2, ge=0.0, le=1.0, description="P(stroke may loop)")
    loop_segment_chance: float = Field(0.35, ge=0.0, le=1.0, description="P(segment loops | loopy)")
    flick_chance: float = Field(0.18, ge=0.0, le=1.0, description="P(flick sub-path)")
    dash_chance: float = Field(0.06, ge=0.0, le=1.0, description="P(dashed)")
    blur_chance: float = Field(0.08, ge=0.0, le=1.0, description="P(blurred)")
    max_heavy: int = Field(2, ge=1, le=16, description="heavy = max(1, floor(rand * max_heavy))")

    @field_validator('palette')
    @classmethod
    def validate_palette(cls, v: List[str]) -> List[str]:
        return [_check_hex(c) for c in v]

    @field_validator('signature_color')
    @classmethod
    def validate_signature_color(cls, v: str) -> str:
        return _check_hex(v)


class RenderV1(BaseModel):
    """Display-side opacity damping and blur filter tiers."""
    opacity_damping: float = Field(0.7, gt=0.0, le=1.0, description="Render opacity multiplier")
    default_opacity: float = Field(0.6, gt=0.0, le=1.0, description="Used when stroke opacity is 0")
    blur_threshold: float = Field(0.45, ge=0.0, description="blur > threshold → strong filter")
    blur_std_low: float = Field(0.35, ge=0.0, description="stdDeviation of the light filter")
    blur_std_high: float = Field(0.6, ge=0.0, description="stdDeviation of the strong filter")


class ScribbleConfigV1(BaseModel):
    """Generator run definition (scribble.v1.yaml schema).

    seed is optional: leave it out to pick a fresh one per run (the scripts
    log it so the run can be reproduced).
    """
    model_config = ConfigDict(populate_by_name=True)

    schema_version: str = Field("scribble.v1", alias="schema", description="Schema version")
    seed: Optional[int] = Field(None, ge=0, lt=SEED_MAX, description="32-bit unsigned seed")
    count: int = Field(30, ge=0, le=10_000, description="Regular stroke count")
    canvas: CanvasV1 = Field(default_factory=CanvasV1)
    tuning: TuningV1 = Field(default_factory=TuningV1)
    render: RenderV1 = Field(default_factory=RenderV1)

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != "scribble.v1":
            raise ValueError(f"Expected schema 'scribble.v1', got '{v}'")
        return v


# ============================================================================
# STROKES SCHEMA V1
# ============================================================================

class StrokeV1(BaseModel):
    """Single serialized stroke."""
    id: str = Field(..., description="Stable stroke identifier (seed-idx)")
    d: str = Field(..., description="SVG path data, absolute M/Q/T commands")
    color: str
    stroke_width: float = Field(..., ge=0.8, allow_inf_nan=False)
    opacity: float = Field(..., ge=0.25, le=0.85)
    dash_pattern: Optional[Tuple[int, int]] = None
    blur: float = Field(0.0, ge=0.0, allow_inf_nan=False)
    heavy: bool = False
    anchors: List[Tuple[float, float]] = Field(default_factory=list)

    @field_validator('d')
    @classmethod
    def validate_d(cls, v: str) -> str:
        if not v.lstrip().startswith("M"):
            raise ValueError(f"Path data must start with an absolute M command, got {v[:20]!r}")
        return v

    @field_validator('color')
    @classmethod
    def validate_color(cls, v: str) -> str:
        return _check_hex(v)

    @field_validator('dash_pattern')
    @classmethod
    def validate_dash(cls, v: Optional[Tuple[int, int]]) -> Optional[Tuple[int, int]]:
        if v is not None and min(v) < 2:
            raise ValueError(f"Dash lengths must both be >= 2, got {v}")
        return v


class StrokesFileV1(BaseModel):
    """Container for a serialized generator run."""
    model_config = ConfigDict(populate_by_name=True)

    schema_version: str = Field("strokes.v1", alias="schema", description="Schema version")
    seed: int = Field(..., ge=0, lt=SEED_MAX)
    canvas: CanvasV1
    digest: Optional[str] = Field(None, description="sha256 of the stroke sequence")
    strokes: List[StrokeV1] = Field(..., description="Strokes in paint order")

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != "strokes.v1":
            raise ValueError(f"Expected schema 'strokes.v1', got '{v}'")
        return v

    @model_validator(mode='after')
    def validate_anchor_bounds(self) -> 'StrokesFileV1':
        """Anchors of regular strokes must lie on the canvas."""
        w, h = self.canvas.width, self.canvas.height
        for idx, stroke in enumerate(self.strokes):
            if stroke.heavy:
                continue
            for x, y in stroke.anchors:
                if not (0.0 <= x <= w + ANCHOR_TOLERANCE and 0.0 <= y <= h + ANCHOR_TOLERANCE):
                    raise ValueError(
                        f"Stroke {idx} ({stroke.id}) anchor ({x:.1f}, {y:.1f}) "
                        f"outside canvas [0, {w}] x [0, {h}]"
                    )
        return self


# ============================================================================
# PUBLIC API
# ============================================================================

def load_scribble_config(path: Union[str, Path]) -> ScribbleConfigV1:
    """Load and validate a scribble run config from YAML.

    Parameters
    ----------
    path : Union[str, Path]
        Path to scribble.v1 YAML file

    Returns
    -------
    ScribbleConfigV1
        Validated configuration

    Raises
    ------
    FileNotFoundError
        If path doesn't exist
    ValueError
        If validation fails (message names the file and offending keys)
    """
    from . import fs

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Scribble config not found: {path}")

    data = fs.load_yaml(path)
    try:
        return ScribbleConfigV1.model_validate(data or {})
    except ValidationError as e:
        raise ValueError(f"Scribble config validation failed at {path}: {e}") from e


def validate_strokes_file(path: Union[str, Path]) -> StrokesFileV1:
    """Load and validate a strokes file from YAML.

    Parameters
    ----------
    path : Union[str, Path]
        Path to strokes.v1 YAML file

    Returns
    -------
    StrokesFileV1
        Validated strokes container

    Raises
    ------
    FileNotFoundError
        If path doesn't exist
    ValueError
        If validation fails (message includes the stroke index)
    """
    from . import fs

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Strokes file not found: {path}")

    data = fs.load_yaml(path)
    try:
        return StrokesFileV1.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Strokes file validation failed at {path}: {e}") from e
