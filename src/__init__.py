"""Scribble Field: seeded hand-drawn scribble bands for flyer overlays.

This package generates reproducible "signature scrawl" strokes (SVG path data
plus style) from a 32-bit seed, serializes them, and renders them as SVG.

Architecture layers (strict one-way dependency):
    scripts/ → src/scribble_field/ → src/utils/

Key invariants:
    - Same (seed, count, width, height, tuning) → identical stroke sequence
    - Path coordinates rounded to one decimal; anchors stay on the canvas
    - Regular strokes first, heavy signature strokes last (painted on top)
    - YAML-only configs, validated with pydantic
"""

__version__ = "1.0.0"
