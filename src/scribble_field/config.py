"""Bridge from validated scribble.v1 configs to generator and render inputs."""

from typing import List, Optional, Tuple

from src.scribble_field.generator import ScribbleParams, Stroke, generate
from src.scribble_field.prng import random_seed
from src.scribble_field.render import RenderSettings
from src.utils.logging_config import get_logger
from src.utils.validators import ScribbleConfigV1

logger = get_logger(__name__)


def params_from_config(cfg: ScribbleConfigV1) -> ScribbleParams:
    tuning = cfg.tuning
    return ScribbleParams(
        palette=tuple(tuning.palette),
        signature_color=tuning.signature_color,
        loopy_chance=tuning.loopy_chance,
        loop_segment_chance=tuning.loop_segment_chance,
        flick_chance=tuning.flick_chance,
        dash_chance=tuning.dash_chance,
        blur_chance=tuning.blur_chance,
        max_heavy=tuning.max_heavy,
    )


def render_settings_from_config(cfg: ScribbleConfigV1) -> RenderSettings:
    return RenderSettings(**cfg.render.model_dump())


def resolve_seed(cfg: ScribbleConfigV1, seed: Optional[int] = None) -> int:
    """Explicit seed, else the config's, else a fresh random one."""
    if seed is not None:
        return seed
    if cfg.seed is not None:
        return cfg.seed
    seed = random_seed()
    logger.info("No seed configured; picked seed=%d", seed)
    return seed


def generate_from_config(
    cfg: ScribbleConfigV1,
    seed: Optional[int] = None
) -> Tuple[int, List[Stroke]]:
    """Run the generator for a config; returns (seed used, strokes)."""
    seed = resolve_seed(cfg, seed)
    strokes = generate(
        seed,
        count=cfg.count,
        width=cfg.canvas.width,
        height=cfg.canvas.height,
        params=params_from_config(cfg),
    )
    return seed, strokes
