"""Decode planning: split a scale factor into sample size and residual scale."""
import math
from dataclasses import dataclass, asdict
from typing import Any, Dict, Tuple

from downsample_companion.strategy import (
    DownsampleStrategy,
    highest_one_bit,
    parse_strategy,
)

# Strategies whose factor is a power-of-two divisor rather than a multiplier
DIVISOR_STRATEGIES = frozenset({
    DownsampleStrategy.at_least,
    DownsampleStrategy.at_most,
    DownsampleStrategy.none,
})


@dataclass(frozen=True)
class DecodePlan:
    """How a source image is reduced to its output size."""
    strategy: DownsampleStrategy
    factor: float
    sample_size: int
    scale: float
    source_size: Tuple[int, int]
    output_size: Tuple[int, int]

    @property
    def sampled_size(self) -> Tuple[int, int]:
        """Size after power-of-two reduction, before the residual scale."""
        return sampled_dimensions(self.source_size, self.sample_size)

    @property
    def needs_resize(self) -> bool:
        """True when the sampled size still differs from the output size."""
        return self.sampled_size != self.output_size

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["strategy"] = self.strategy.value
        data["source_size"] = list(self.source_size)
        data["output_size"] = list(self.output_size)
        data["sampled_size"] = list(self.sampled_size)
        return data


def sampled_dimensions(src_wh: Tuple[int, int], sample_size: int) -> Tuple[int, int]:
    """
    Dimensions after reducing by an integer sample size.
    
    Matches Pillow's Image.reduce, which keeps partial edge blocks.
    """
    w, h = src_wh
    return (math.ceil(w / sample_size), math.ceil(h / sample_size))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positive values."""
    return math.floor(value + 0.5)


def check_dimensions(**dims: int) -> None:
    """Raise ValueError naming the first non-positive dimension."""
    for name, value in dims.items():
        if not isinstance(value, int) or isinstance(value, bool) or value < 1:
            raise ValueError(f"{name} must be a positive integer, got {value!r}")


def plan_decode(
    strategy: DownsampleStrategy,
    source_width: int,
    source_height: int,
    requested_width: int,
    requested_height: int
) -> DecodePlan:
    """
    Plan the reduction of a source image for a requested size.
    
    center_inside and center_outside return a multiplier: the output is
    factor * source, reached by the largest power-of-two sample size that
    does not undershoot it followed by a residual scale. at_least, at_most
    and none return a power-of-two divisor applied as the sample size alone.
    
    Args:
        strategy: Strategy (member or name)
        source_width: Source width in pixels
        source_height: Source height in pixels
        requested_width: Requested width in pixels
        requested_height: Requested height in pixels
        
    Returns:
        DecodePlan
        
    Raises:
        ValueError: If any dimension is not positive, or the strategy is unknown
    """
    strategy = parse_strategy(strategy)
    check_dimensions(
        source_width=source_width,
        source_height=source_height,
        requested_width=requested_width,
        requested_height=requested_height,
    )
    src = (source_width, source_height)
    factor = strategy.scale_factor(
        source_width, source_height, requested_width, requested_height
    )

    if strategy in DIVISOR_STRATEGIES:
        sample_size = max(1, int(factor))
        return DecodePlan(
            strategy=strategy,
            factor=factor,
            sample_size=sample_size,
            scale=1.0,
            source_size=src,
            output_size=sampled_dimensions(src, sample_size),
        )

    out_w = max(1, round_half_up(factor * source_width))
    out_h = max(1, round_half_up(factor * source_height))
    ratio = min(source_width / out_w, source_height / out_h)
    sample_size = max(1, highest_one_bit(int(ratio)))
    sampled_w, _ = sampled_dimensions(src, sample_size)
    return DecodePlan(
        strategy=strategy,
        factor=factor,
        sample_size=sample_size,
        scale=out_w / sampled_w,
        source_size=src,
        output_size=(out_w, out_h),
    )
