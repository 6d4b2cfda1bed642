"""Downsample Companion - Scale factor strategies and image downsampling."""
from downsample_companion.strategy import (
    DownsampleStrategy,
    CENTER_INSIDE,
    CENTER_OUTSIDE,
    AT_LEAST,
    AT_MOST,
    NONE,
    DEFAULT,
    scale_factor,
    parse_strategy,
)
from downsample_companion.sampling import DecodePlan, plan_decode
from downsample_companion.scale import apply_plan, downsample
from downsample_companion.pipeline import process_one
from downsample_companion.io import load_image_rgba, save_image_with_icc

__version__ = "0.1.0"
__all__ = [
    "DownsampleStrategy",
    "CENTER_INSIDE",
    "CENTER_OUTSIDE",
    "AT_LEAST",
    "AT_MOST",
    "NONE",
    "DEFAULT",
    "scale_factor",
    "parse_strategy",
    "DecodePlan",
    "plan_decode",
    "apply_plan",
    "downsample",
    "process_one",
    "load_image_rgba",
    "save_image_with_icc",
]
