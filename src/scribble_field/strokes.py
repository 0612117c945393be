"""Stroke IDs, YAML serialization, and overdraw analysis.

Provides:
    - Stable stroke IDs: make_stroke_id(seed, idx) → "0000000042-00003"
    - Bidirectional conversion: stroke_to_yaml_dict() ↔ stroke_yaml_dict_to_stroke()
    - File I/O: save_strokes_yaml() / load_strokes_yaml() (strokes.v1 schema)
    - Bounding box: stroke_bbox() for region filtering
    - Visualization: strokes_heatmap() for overdraw analysis

YAML format (strokes.v1):
    schema, seed, canvas{width,height}, digest,
    strokes: [{id, d, color, stroke_width, opacity, dash_pattern, blur, heavy, anchors}]

The path is stored as its text form `d`; parsing it back reproduces the
commands exactly because coordinates are already rounded to 0.1.
"""

from collections import Counter
from pathlib import Path
from typing import Dict, List, Sequence, Tuple, Union

import numpy as np

from src.scribble_field import geometry
from src.scribble_field.generator import Stroke
from src.scribble_field.path import format_path, parse_path
from src.utils import fs, hashing, validators
from src.utils.logging_config import get_logger

logger = get_logger(__name__)

STROKES_SCHEMA = "strokes.v1"


def make_stroke_id(seed: int, idx: int) -> str:
    """Stable stroke ID: zero-padded seed and index.

    Examples
    --------
    >>> make_stroke_id(seed=42, idx=3)
    '0000000042-00003'

    Notes
    -----
    Same (seed, idx) always yields the same ID, so IDs line up between two
    runs of the same seed.
    """
    return f"{seed:010d}-{idx:05d}"


def stroke_to_yaml_dict(stroke: Stroke, stroke_id: str) -> Dict:
    """Convert a Stroke to a YAML-compatible dict (strokes.v1 entry)."""
    return {
        'id': stroke_id,
        'd': format_path(stroke.path),
        'color': stroke.color,
        'stroke_width': float(stroke.stroke_width),
        'opacity': float(stroke.opacity),
        'dash_pattern': list(stroke.dash_pattern) if stroke.dash_pattern else None,
        'blur': float(stroke.blur),
        'heavy': bool(stroke.heavy),
        'anchors': [[float(x), float(y)] for x, y in stroke.anchors],
    }


def stroke_yaml_dict_to_stroke(y: Dict) -> Stroke:
    """Convert a strokes.v1 entry back to a Stroke.

    Raises
    ------
    KeyError
        If a required field is missing
    ValueError
        If the path data cannot be parsed
    """
    try:
        dash = y.get('dash_pattern')
        return Stroke(
            path=parse_path(y['d']),
            color=y['color'],
            stroke_width=float(y['stroke_width']),
            opacity=float(y['opacity']),
            dash_pattern=(int(dash[0]), int(dash[1])) if dash else None,
            blur=float(y.get('blur', 0.0)),
            anchors=tuple((float(x), float(yy)) for x, yy in y.get('anchors', [])),
            heavy=bool(y.get('heavy', False)),
        )
    except KeyError as e:
        raise KeyError(f"Missing required stroke field: {e}. Check strokes.v1 schema.") from e


def strokes_document(
    strokes: Sequence[Stroke],
    seed: int,
    width: float,
    height: float
) -> Dict:
    """Build the strokes.v1 document for a generator run."""
    return {
        'schema': STROKES_SCHEMA,
        'seed': int(seed),
        'canvas': {'width': float(width), 'height': float(height)},
        'digest': hashing.sha256_strokes(strokes),
        'strokes': [stroke_to_yaml_dict(s, make_stroke_id(seed, i)) for i, s in enumerate(strokes)],
    }


def save_strokes_yaml(
    path: Union[str, Path],
    strokes: Sequence[Stroke],
    seed: int,
    width: float,
    height: float
) -> Dict:
    """Write a generator run to YAML atomically; returns the document."""
    doc = strokes_document(strokes, seed, width, height)
    fs.atomic_yaml_dump(doc, path)
    logger.info("Saved %d strokes to %s (sha256=%s)", len(strokes), path, doc['digest'][:12])
    return doc


def load_strokes_yaml(path: Union[str, Path]) -> Tuple[List[Stroke], validators.StrokesFileV1]:
    """Load and validate a strokes.v1 file.

    Returns
    -------
    (list of Stroke, StrokesFileV1)
        Strokes in paint order and the validated container (seed, canvas)

    Raises
    ------
    FileNotFoundError, ValueError
        Missing file, schema violation, unparsable path data, or a digest
        that doesn't match the strokes
    """
    doc = validators.validate_strokes_file(path)
    strokes = []
    for entry in doc.strokes:
        try:
            strokes.append(stroke_yaml_dict_to_stroke(entry.model_dump()))
        except ValueError as e:
            raise ValueError(f"Stroke {entry.id} in {path}: {e}") from e

    if doc.digest is not None:
        actual = hashing.sha256_strokes(strokes)
        if actual != doc.digest:
            raise ValueError(
                f"Digest mismatch in {path}: file says {doc.digest[:12]}, strokes hash to {actual[:12]}"
            )
    return strokes, doc


def count_strokes(path: Union[str, Path]) -> int:
    """Number of strokes in a strokes YAML file (0 if it has none)."""
    data = fs.load_yaml(path)
    if isinstance(data, dict) and isinstance(data.get('strokes'), list):
        return len(data['strokes'])
    return 0


def stroke_bbox(stroke: Stroke) -> Tuple[float, float, float, float]:
    """Bbox of the painted ribbon (flattened curve grown by half the width)."""
    return geometry.stroke_bbox(stroke.path, margin=stroke.stroke_width / 2)


def filter_strokes_by_bbox(
    strokes: Sequence[Stroke],
    bbox: Tuple[float, float, float, float]
) -> List[Stroke]:
    """Strokes whose bbox overlaps the region (xmin, ymin, xmax, ymax)."""
    xmin_f, ymin_f, xmax_f, ymax_f = bbox

    filtered = []
    for s in strokes:
        xmin, ymin, xmax, ymax = stroke_bbox(s)
        if not (xmax < xmin_f or xmin > xmax_f or ymax < ymin_f or ymin > ymax_f):
            filtered.append(s)
    return filtered


def strokes_heatmap(
    strokes: Sequence[Stroke],
    width: float,
    height: float,
    H: int,
    W: int,
    samples_per_curve: int = 16
) -> np.ndarray:
    """Overdraw heatmap: how many strokes pass through each cell.

    Parameters
    ----------
    strokes : sequence of Stroke
        Generator output
    width, height : float
        Canvas size the strokes were generated for
    H, W : int
        Heatmap resolution (rows, cols)
    samples_per_curve : int
        Flattening density, default 16

    Returns
    -------
    np.ndarray
        Shape (H, W), float32; each stroke adds at most 1 per cell

    Notes
    -----
    Centerline only (stroke width ignored). Off-canvas samples from flicks
    or control-point bulges are clipped to the border cells.
    """
    heatmap = np.zeros((H, W), dtype=np.float32)
    if width <= 0 or height <= 0:
        return heatmap

    sx = W / width
    sy = H / height
    for s in strokes:
        polylines = geometry.path_to_polylines(s.path, samples_per_curve)
        if not polylines:
            continue
        pts = np.concatenate(polylines, axis=0)
        cols = np.clip((pts[:, 0] * sx).astype(int), 0, W - 1)
        rows = np.clip((pts[:, 1] * sy).astype(int), 0, H - 1)
        cells = np.unique(rows * W + cols)
        heatmap.flat[cells] += 1.0

    return heatmap


def extract_stroke_colors(strokes: Sequence[Stroke]) -> Dict[str, int]:
    """Color usage counts, most common first."""
    return dict(Counter(s.color for s in strokes).most_common())
