"""Downsample strategies: scale factors for fitting a source into a requested size."""
import enum
import math
from typing import Callable, Dict, Optional


class DownsampleStrategy(str, enum.Enum):
    """Named policy for fitting a source image into a requested size."""
    center_inside = "center_inside"
    center_outside = "center_outside"
    at_least = "at_least"
    at_most = "at_most"
    none = "none"
    # Alias of at_least
    default = "at_least"

    def scale_factor(
        self,
        source_width: int,
        source_height: int,
        requested_width: int,
        requested_height: int
    ) -> float:
        """Return the scale factor for this strategy. See :func:`scale_factor`."""
        return scale_factor(
            self, source_width, source_height, requested_width, requested_height
        )


CENTER_INSIDE = DownsampleStrategy.center_inside
CENTER_OUTSIDE = DownsampleStrategy.center_outside
AT_LEAST = DownsampleStrategy.at_least
AT_MOST = DownsampleStrategy.at_most
NONE = DownsampleStrategy.none
DEFAULT = DownsampleStrategy.default


def highest_one_bit(value: int) -> int:
    """
    Clear all but the highest set bit of a positive integer.
    
    Args:
        value: Positive integer
        
    Returns:
        Largest power of two <= value (0 for 0)
    """
    if value <= 0:
        return 0
    return 1 << (value.bit_length() - 1)


def _center_inside(sw: int, sh: int, rw: int, rh: int) -> float:
    # One side lands on the request, the other fits within it
    return min(rw / sw, rh / sh)


def _center_outside(sw: int, sh: int, rw: int, rh: int) -> float:
    # One side lands on the request, the other covers it
    return max(rw / sw, rh / sh)


def _at_least(sw: int, sh: int, rw: int, rh: int) -> float:
    min_integer_factor = min(sh // rh, sw // rw)
    if min_integer_factor == 0:
        return 1.0
    return float(highest_one_bit(min_integer_factor))


def _at_most(sw: int, sh: int, rw: int, rh: int) -> float:
    max_multiplier = math.ceil(max(sh / rh, sw / rw))
    if max_multiplier <= 1:
        return 1.0
    highest = highest_one_bit(max_multiplier)
    if highest == max_multiplier:
        return float(highest)
    return float(highest << 1)


def _none(sw: int, sh: int, rw: int, rh: int) -> float:
    return 1.0


_SCALE_FUNCS: Dict[DownsampleStrategy, Callable[[int, int, int, int], float]] = {
    DownsampleStrategy.center_inside: _center_inside,
    DownsampleStrategy.center_outside: _center_outside,
    DownsampleStrategy.at_least: _at_least,
    DownsampleStrategy.at_most: _at_most,
    DownsampleStrategy.none: _none,
}


def scale_factor(
    strategy: DownsampleStrategy,
    source_width: int,
    source_height: int,
    requested_width: int,
    requested_height: int
) -> float:
    """
    Compute the scale factor for fitting a source into a requested size.
    
    Pure and stateless. Dimensions must be strictly positive; zero requested
    dimensions raise ZeroDivisionError and are not otherwise checked.
    
    Strategies:
        - center_inside: min(rw/sw, rh/sh), may upscale
        - center_outside: max(rw/sw, rh/sh), may upscale
        - at_least: power-of-two divisor keeping the smaller output
          dimension in [requested, 2*requested), never upscales
        - at_most: power-of-two divisor keeping the larger output
          dimension in (requested/2, requested], never upscales
        - none: always 1.0
    
    Args:
        strategy: Strategy to apply
        source_width: Source width in pixels
        source_height: Source height in pixels
        requested_width: Requested width in pixels
        requested_height: Requested height in pixels
        
    Returns:
        Positive scale factor
    """
    func = _SCALE_FUNCS[parse_strategy(strategy)]
    return func(source_width, source_height, requested_width, requested_height)


def parse_strategy(name: Optional[str]) -> DownsampleStrategy:
    """
    Resolve a strategy from a member name or value.

    Case-insensitive; dashes and spaces are treated as underscores, so
    "CENTER_INSIDE", "center-inside" and "default" are all accepted.
    None resolves to DEFAULT.

    Args:
        name: Strategy name, member, or None

    Returns:
        Matching DownsampleStrategy

    Raises:
        ValueError: If the name is not a string or matches no strategy
    """
    if name is None:
        return DEFAULT
    if isinstance(name, DownsampleStrategy):
        return name
    if not isinstance(name, str):
        raise ValueError(f"Strategy must be a name, got {type(name).__name__}")
    key = name.strip().lower().replace("-", "_").replace(" ", "_")
    try:
        return DownsampleStrategy[key]
    except KeyError:
        pass
    try:
        return DownsampleStrategy(key)
    except ValueError:
        raise ValueError(
            f"Unknown strategy {name!r}, expected one of: {', '.join(strategy_names())}"
        ) from None


def strategy_names() -> list:
    """Return all accepted strategy names, aliases included."""
    return list(DownsampleStrategy.__members__)
