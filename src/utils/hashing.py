"""SHA-256 hashing for generated output and config provenance.

Provides:
    - sha256_file(): Hash file contents (configs, written SVG/YAML)
    - sha256_string(): Hash a string
    - sha256_strokes(): Hash a stroke sequence via its canonical serialization
    - hash_dict(): Hash a JSON-serializable dict with sorted keys

A scribble run is referentially transparent, so sha256_strokes() doubles as
a cache key and as a cheap "same output?" check between two runs.

Usage:
    from src.utils import hashing
    digest = hashing.sha256_strokes(generate(seed=42))

Note: named `hashing.py` to avoid shadowing builtin `hash()`.
"""

import hashlib
import json
from pathlib import Path
from typing import TYPE_CHECKING, Sequence, Union

if TYPE_CHECKING:
    from src.scribble_field.generator import Stroke


def sha256_file(path: Union[str, Path], chunk_size: int = 1 << 20) -> str:
    """Compute SHA-256 hash of file contents.

    Parameters
    ----------
    path : Union[str, Path]
        File path
    chunk_size : int
        Read chunk size in bytes, default 1 MB

    Returns
    -------
    str
        SHA-256 hex digest (64 characters)

    Raises
    ------
    FileNotFoundError
        If file doesn't exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    sha256 = hashlib.sha256()
    with open(path, 'rb') as f:
        while True:
            chunk = f.read(chunk_size)
            if not chunk:
                break
            sha256.update(chunk)

    return sha256.hexdigest()


def sha256_string(s: str) -> str:
    """Compute SHA-256 hash of a UTF-8 string."""
    return hashlib.sha256(s.encode('utf-8')).hexdigest()


def hash_dict(d: dict) -> str:
    """Compute SHA-256 hash of a JSON-serializable dict (sorted keys).

    Examples
    --------
    >>> hash_dict({"seed": 42, "count": 30}) == hash_dict({"count": 30, "seed": 42})
    True
    """
    return sha256_string(json.dumps(d, sort_keys=True, separators=(',', ':')))


def sha256_strokes(strokes: Sequence["Stroke"]) -> str:
    """Compute SHA-256 hash of a stroke sequence.

    Parameters
    ----------
    strokes : sequence of Stroke
        Generator output

    Returns
    -------
    str
        SHA-256 hex digest

    Notes
    -----
    One line per stroke (path data, color, width, opacity, dash, blur, heavy),
    in sequence order. Order matters: the same strokes reordered hash
    differently. Blur is hashed with repr() so no precision is lost.
    """
    sha256 = hashlib.sha256()
    for s in strokes:
        dash = f"{s.dash_pattern[0]} {s.dash_pattern[1]}" if s.dash_pattern else "-"
        line = "|".join([
            s.d,
            s.color,
            repr(s.stroke_width),
            repr(s.opacity),
            dash,
            repr(s.blur),
            "H" if s.heavy else "R",
        ])
        sha256.update(line.encode('utf-8'))
        sha256.update(b"\n")
    return sha256.hexdigest()
