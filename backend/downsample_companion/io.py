"""Image I/O operations with ICC profile preservation."""
from pathlib import Path
from typing import Optional
from PIL import Image


def load_image_rgba(path: Path) -> Image.Image:
    """
    Load an image, keeping RGB/RGBA and converting other modes to RGBA.
    
    Args:
        path: Path to the image file
        
    Returns:
        PIL Image in RGB or RGBA mode
    """
    with Image.open(path) as img:
        img.load()
        if img.mode in ("RGB", "RGBA"):
            converted = img.copy()
        else:
            converted = img.convert("RGBA")
        return _with_info(converted, img)


def _with_info(converted: Image.Image, original: Image.Image) -> Image.Image:
    # Keep the ICC profile across convert()
    icc = original.info.get("icc_profile")
    if icc:
        converted.info["icc_profile"] = icc
    return converted


def save_image_with_icc(
    img: Image.Image, 
    output_path: Path, 
    icc_profile: Optional[bytes] = None
) -> None:
    """
    Save an image with optional ICC profile preservation.
    
    Args:
        img: PIL Image to save
        output_path: Destination path
        icc_profile: Optional ICC profile bytes to embed
    """
    params = {}
    if icc_profile:
        params["icc_profile"] = icc_profile
    output_path.parent.mkdir(parents=True, exist_ok=True)
    img.save(output_path, **params)


def get_icc_profile(pil_img: Image.Image) -> Optional[bytes]:
    """Return the embedded ICC profile bytes, or None."""
    return pil_img.info.get("icc_profile") or None
