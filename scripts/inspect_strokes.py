#!/usr/bin/env python3
"""Validate a strokes.v1 YAML file and print a summary.

Usage:
    python scripts/inspect_strokes.py outputs/band_42.yaml
    python scripts/inspect_strokes.py outputs/band_42.yaml --svg outputs/band_42_again.svg
    python scripts/inspect_strokes.py outputs/band_42.yaml --regenerate

Checks:
    - Schema and value ranges (widths, opacities, dash lengths, colors)
    - Regular-stroke anchors on the canvas
    - Stored digest matches the strokes
    - --regenerate: rerun the generator with the file's seed and canvas and
      confirm the output is identical (default tuning only)
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

sys.path.insert(0, str(Path(__file__).parent.parent))

import yaml

from src.scribble_field import generator, render, strokes as stroke_utils
from src.utils import fs, hashing, logging_config


def parse_args(argv: Optional[List[str]] = None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Validate and summarize a strokes.v1 file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument('strokes_file', type=str, help='strokes.v1 YAML file')
    parser.add_argument('--svg', type=str, default=None, help='Re-render the strokes to this SVG')
    parser.add_argument(
        '--regenerate',
        action='store_true',
        help='Regenerate from the stored seed and compare digests'
    )
    parser.add_argument(
        '--heatmap',
        type=str,
        default='7,30',
        help='Overdraw heatmap resolution as H,W, default: 7,30'
    )
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')
    return parser.parse_args(argv)


def summarize(strokes, width: float, height: float, heatmap_hw) -> dict:
    """Counts, color usage, band extent and overdraw for a stroke list."""
    heavy = [s for s in strokes if s.heavy]
    bboxes = [stroke_utils.stroke_bbox(s) for s in strokes]
    H, W = heatmap_hw
    heat = stroke_utils.strokes_heatmap(strokes, width, height, H, W)

    return {
        'strokes': len(strokes),
        'regular': len(strokes) - len(heavy),
        'heavy': len(heavy),
        'dashed': sum(1 for s in strokes if s.dash_pattern),
        'blurred': sum(1 for s in strokes if s.blur > 0),
        'colors': stroke_utils.extract_stroke_colors(strokes),
        'extent': (
            min(b[0] for b in bboxes), min(b[1] for b in bboxes),
            max(b[2] for b in bboxes), max(b[3] for b in bboxes),
        ) if bboxes else (0.0, 0.0, 0.0, 0.0),
        'max_overdraw': int(heat.max()) if heat.size else 0,
        'covered_cells': int((heat > 0).sum()),
    }


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    logging_config.setup_logging(
        log_level="DEBUG" if args.verbose else "INFO",
        context={"app": "inspect"}
    )
    logger = logging_config.get_logger(__name__)

    try:
        strokes, doc = stroke_utils.load_strokes_yaml(args.strokes_file)
        heatmap_hw = tuple(int(v) for v in args.heatmap.split(','))
        if len(heatmap_hw) != 2 or min(heatmap_hw) < 1:
            raise ValueError(f"--heatmap must be two positive integers H,W, got {args.heatmap!r}")
    except (FileNotFoundError, KeyError, ValueError, yaml.YAMLError) as e:
        logger.error(str(e))
        return 2

    logging_config.push_context(seed=doc.seed)
    width, height = doc.canvas.width, doc.canvas.height

    summary = summarize(strokes, width, height, heatmap_hw)
    logger.info(
        f"{summary['strokes']} strokes ({summary['regular']} regular, {summary['heavy']} heavy, "
        f"{summary['dashed']} dashed, {summary['blurred']} blurred) on {width:g}x{height:g}"
    )
    logger.info("Extent: (%.1f, %.1f) - (%.1f, %.1f)", *summary['extent'])
    logger.info(f"Overdraw: max {summary['max_overdraw']}, {summary['covered_cells']} cells covered")
    if doc.digest:
        logger.info(f"Digest: sha256={doc.digest[:12]}")
    for color, n in summary['colors'].items():
        logger.debug(f"  {color}: {n}")

    if args.regenerate:
        regular = summary['regular']
        fresh = generator.generate(doc.seed, regular, width, height)
        fresh_digest = hashing.sha256_strokes(fresh)
        stored_digest = hashing.sha256_strokes(strokes)
        if fresh_digest != stored_digest:
            logger.error(
                f"Regenerated band differs: stored {stored_digest[:12]}, fresh {fresh_digest[:12]} "
                "(custom tuning or a different generator version?)"
            )
            return 1
        logger.info(f"Regenerated band matches (sha256={fresh_digest[:12]})")

    if args.svg:
        fs.atomic_write_text(render.render_svg(strokes, width, height), args.svg)
        logger.info(f"Saved SVG: {args.svg}")

    return 0


if __name__ == '__main__':
    sys.exit(main())
