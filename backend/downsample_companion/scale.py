"""Image scaling operations driven by a decode plan."""
from typing import Tuple
from PIL import Image
from PIL.Image import Resampling

from downsample_companion.sampling import DecodePlan, plan_decode
from downsample_companion.strategy import DEFAULT, DownsampleStrategy

# Resampling constants
LANCZOS = Resampling.LANCZOS


def reduce_by_sample_size(pil_img: Image.Image, sample_size: int) -> Image.Image:
    """
    Reduce image by an integer power-of-two sample size (box averaging).
    
    Args:
        pil_img: Input PIL Image
        sample_size: Integer reduction factor (1 returns the image as-is)
        
    Returns:
        Reduced image
    """
    if sample_size <= 1:
        return pil_img
    return pil_img.reduce(sample_size)


def resize_lanczos_to_box(
    pil_img: Image.Image, 
    target_wh: Tuple[int, int]
) -> Image.Image:
    """
    Resize image to exact dimensions using Lanczos resampling.
    
    Args:
        pil_img: Input PIL Image
        target_wh: Target (width, height) tuple
        
    Returns:
        Resized image
    """
    if pil_img.size == tuple(target_wh):
        return pil_img
    return pil_img.resize(target_wh, resample=LANCZOS)


def apply_plan(pil_img: Image.Image, plan: DecodePlan) -> Image.Image:
    """
    Apply a decode plan: coarse reduction, then residual Lanczos scale.
    
    Args:
        pil_img: Input PIL Image, sized plan.source_size
        plan: DecodePlan from plan_decode
        
    Returns:
        Image sized plan.output_size
    """
    if pil_img.size != plan.source_size:
        raise ValueError(
            f"Image is {pil_img.width}x{pil_img.height}, plan expects "
            f"{plan.source_size[0]}x{plan.source_size[1]}"
        )
    reduced = reduce_by_sample_size(pil_img, plan.sample_size)
    return resize_lanczos_to_box(reduced, plan.output_size)


def downsample(
    pil_img: Image.Image,
    requested_wh: Tuple[int, int],
    strategy: DownsampleStrategy = DEFAULT
) -> Image.Image:
    """
    Downsample image for a requested size using a strategy.
    
    Args:
        pil_img: Input PIL Image
        requested_wh: Requested (width, height) tuple
        strategy: Downsample strategy
        
    Returns:
        Scaled image
    """
    plan = plan_decode(strategy, pil_img.width, pil_img.height, *requested_wh)
    return apply_plan(pil_img, plan)
