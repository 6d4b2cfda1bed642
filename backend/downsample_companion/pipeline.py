"""Main downsampling pipeline."""
import json
import logging
from pathlib import Path
from typing import Optional, Dict, Any, Union

from downsample_companion.io import (
    load_image_rgba,
    save_image_with_icc,
    get_icc_profile
)
from downsample_companion.sampling import check_dimensions, plan_decode
from downsample_companion.scale import apply_plan
from downsample_companion.strategy import DEFAULT, DownsampleStrategy, parse_strategy

LOGGER = logging.getLogger(__name__)


def _append_jsonl(log_jsonl: Path, record: Dict[str, Any]) -> None:
    log_jsonl.parent.mkdir(parents=True, exist_ok=True)
    with open(log_jsonl, "a", encoding="utf-8") as f:
        f.write(json.dumps(record, ensure_ascii=False) + "\n")


def process_one(
    src: Path,
    dst: Path,
    requested_width: int,
    requested_height: int,
    strategy: Union[str, DownsampleStrategy] = DEFAULT,
    log_jsonl: Optional[Path] = None,
) -> Dict[str, Any]:
    """
    Downsample a single image file for a requested size.
    
    Pipeline steps:
    1. Load image and extract ICC profile
    2. Compute the strategy's scale factor and decode plan
    3. Reduce by the power-of-two sample size
    4. Apply the residual Lanczos scale, if any
    5. Save with ICC profile preservation
    
    Args:
        src: Source image path
        dst: Destination image path
        requested_width: Requested width in pixels
        requested_height: Requested height in pixels
        strategy: Downsample strategy (member or name)
        log_jsonl: Optional path to log JSONL file
        
    Returns:
        Dictionary with processing metadata
        
    Raises:
        RuntimeError: Wrapping any failure, prefixed with the source path
    """
    try:
        strategy = parse_strategy(strategy)
        check_dimensions(
            requested_width=requested_width,
            requested_height=requested_height,
        )

        pil = load_image_rgba(src)
        icc = get_icc_profile(pil)
        meta: Dict[str, Any] = {
            "src": str(src),
            "w": pil.width,
            "h": pil.height,
            "requested_w": requested_width,
            "requested_h": requested_height,
        }

        plan = plan_decode(
            strategy, pil.width, pil.height, requested_width, requested_height
        )
        meta.update({
            "strategy": plan.strategy.value,
            "factor": plan.factor,
            "sample_size": plan.sample_size,
            "scale": plan.scale,
        })
        LOGGER.debug(
            "%s: %s factor=%s sample_size=%d scale=%.4f",
            src, plan.strategy.value, plan.factor, plan.sample_size, plan.scale
        )

        pil = apply_plan(pil, plan)

        save_image_with_icc(pil, dst, icc)
        meta.update({
            "dst": str(dst),
            "ok": True,
            "final_w": pil.width,
            "final_h": pil.height
        })
        LOGGER.info(
            "Processed %s (%dx%d) -> %s (%dx%d)",
            src, meta["w"], meta["h"], dst, pil.width, pil.height
        )

        if log_jsonl:
            _append_jsonl(log_jsonl, meta)

        return meta

    except Exception as e:
        error_msg = f"{src}: {e}"
        LOGGER.error("Failed to process %s", error_msg)

        if log_jsonl:
            try:
                _append_jsonl(log_jsonl, {"src": str(src), "error": str(e), "ok": False})
            except OSError:
                LOGGER.exception("Could not write error record to %s", log_jsonl)

        raise RuntimeError(error_msg) from e
