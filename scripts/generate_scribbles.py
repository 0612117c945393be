#!/usr/bin/env python3
"""Generate a seeded scribble band and write it as SVG and/or YAML.

Usage:
    # Reference band from the default config
    python scripts/generate_scribbles.py --config configs/scribble_default.v1.yaml --svg outputs/band.svg

    # Override seed and size inline, keep the strokes for later inspection
    python scripts/generate_scribbles.py --seed 42 --count 12 --width 800 --height 160 \
        --svg outputs/band_42.svg --yaml outputs/band_42.yaml

    # No seed anywhere → a fresh one is picked and logged
    python scripts/generate_scribbles.py --svg outputs/band.svg

Outputs:
    - <svg>: standalone SVG document (viewBox = canvas, blur filters in <defs>)
    - <yaml>: strokes.v1 document (seed, canvas, digest, strokes)

Same seed + count + canvas + tuning always reproduces the same files.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

sys.path.insert(0, str(Path(__file__).parent.parent))

import yaml
from pydantic import ValidationError

from src.scribble_field import config as scribble_config
from src.scribble_field import render, strokes as stroke_utils
from src.utils import fs, hashing, logging_config, validators


def parse_args(argv: Optional[List[str]] = None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Generate a seeded scribble band",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='scribble.v1 YAML config (defaults apply when omitted)'
    )

    # Inline overrides
    parser.add_argument('--seed', type=int, help='32-bit unsigned seed (overrides config)')
    parser.add_argument('--count', type=int, help='Regular stroke count (overrides config)')
    parser.add_argument('--width', type=float, help='Canvas width (overrides config)')
    parser.add_argument('--height', type=float, help='Canvas height (overrides config)')

    # Outputs
    parser.add_argument('--svg', type=str, help='Write SVG document here')
    parser.add_argument('--yaml', type=str, help='Write strokes.v1 YAML here')

    # Logging
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')
    parser.add_argument('--json_logs', action='store_true', help='Emit JSON log lines')
    parser.add_argument('--log_file', type=str, default=None, help='Also log to this file')

    return parser.parse_args(argv)


def load_config(args) -> validators.ScribbleConfigV1:
    """Load the config file (if any) and apply command-line overrides.

    Overrides go through validation again, so a bad --count or --width fails
    with the same message a bad YAML value would.
    """
    if args.config:
        cfg = validators.load_scribble_config(args.config)
    else:
        cfg = validators.ScribbleConfigV1()

    data = cfg.model_dump(by_alias=True)
    if args.seed is not None:
        data['seed'] = args.seed
    if args.count is not None:
        data['count'] = args.count
    if args.width is not None:
        data['canvas']['width'] = args.width
    if args.height is not None:
        data['canvas']['height'] = args.height

    try:
        return validators.ScribbleConfigV1.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid command-line override: {e}") from e


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    logging_config.setup_logging(
        log_level="DEBUG" if args.verbose else "INFO",
        log_file=args.log_file,
        json=args.json_logs,
        context={"app": "generate"}
    )
    logging_config.install_excepthook()
    logger = logging_config.get_logger(__name__)

    try:
        cfg = load_config(args)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        logger.error(str(e))
        return 2

    if args.config:
        logger.info(f"Config: {args.config} (sha256={hashing.sha256_file(args.config)[:12]})")
    logger.info(f"Resolved config hash: {hashing.hash_dict(cfg.model_dump(by_alias=True))[:12]}")

    if not args.svg and not args.yaml:
        logger.warning("Neither --svg nor --yaml given; generating without writing files")

    seed, strokes = scribble_config.generate_from_config(cfg)
    logging_config.push_context(seed=seed)

    width, height = cfg.canvas.width, cfg.canvas.height
    digest = hashing.sha256_strokes(strokes)
    heavy = sum(1 for s in strokes if s.heavy)
    logger.info(
        f"Generated {len(strokes)} strokes ({len(strokes) - heavy} regular, {heavy} heavy) "
        f"on {width:g}x{height:g}, sha256={digest[:12]}"
    )

    try:
        if args.svg:
            svg = render.render_svg(
                strokes, width, height,
                scribble_config.render_settings_from_config(cfg)
            )
            fs.atomic_write_text(svg, args.svg)
            logger.info(f"Saved SVG: {args.svg}")

        if args.yaml:
            stroke_utils.save_strokes_yaml(args.yaml, strokes, seed, width, height)
    finally:
        logging_config.pop_context(keys=["seed"])
    return 0


if __name__ == '__main__':
    sys.exit(main())
