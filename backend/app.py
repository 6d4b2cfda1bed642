"""FastAPI application for Downsample Companion."""
import logging
from pathlib import Path
from fastapi import FastAPI, UploadFile, File, Form, HTTPException, Query
from fastapi.responses import JSONResponse, FileResponse, Response
from fastapi.middleware.cors import CORSMiddleware
from downsample_companion import config
from downsample_companion.pipeline import process_one
from downsample_companion.sampling import plan_decode
from downsample_companion.strategy import (
    DownsampleStrategy,
    parse_strategy,
    strategy_names,
)

LOGGER = logging.getLogger(__name__)

app = FastAPI(
    title="Downsample Companion",
    description="Scale factors and downsampling for requested image sizes.",
    version="0.1.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)


def _resolve_strategy(name: str) -> DownsampleStrategy:
    try:
        return parse_strategy(name)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _check_size(label: str, value: int, upper: int) -> None:
    if value < 1 or value > upper:
        raise HTTPException(
            status_code=400,
            detail=f"{label} must be between 1 and {upper}"
        )


@app.get("/strategies")
async def strategies() -> JSONResponse:
    """List accepted strategy names and the configured default."""
    return JSONResponse({
        "ok": True,
        "strategies": strategy_names(),
        "values": {name: parse_strategy(name).value for name in strategy_names()},
        "default": parse_strategy(config.DEFAULT_STRATEGY).value,
    })


@app.get("/scale-factor")
async def get_scale_factor(
    source_width: int = Query(...),
    source_height: int = Query(...),
    requested_width: int = Query(...),
    requested_height: int = Query(...),
    strategy: str = Query(None),
) -> JSONResponse:
    """
    Compute the scale factor and decode plan for the given dimensions.
    
    Args:
        source_width: Source width in pixels
        source_height: Source height in pixels
        requested_width: Requested width in pixels (1..MAX_REQUESTED_SIZE)
        requested_height: Requested height in pixels (1..MAX_REQUESTED_SIZE)
        strategy: Strategy name (default: configured DEFAULT_STRATEGY)
        
    Returns:
        JSON response with factor and plan
    """
    s = _resolve_strategy(strategy or config.DEFAULT_STRATEGY)
    if source_width < 1 or source_height < 1:
        raise HTTPException(
            status_code=400,
            detail="Source dimensions must be positive"
        )
    _check_size("requested_width", requested_width, config.MAX_REQUESTED_SIZE)
    _check_size("requested_height", requested_height, config.MAX_REQUESTED_SIZE)

    plan = plan_decode(s, source_width, source_height, requested_width, requested_height)
    return JSONResponse({
        "ok": True,
        "strategy": s.value,
        "factor": plan.factor,
        "plan": plan.to_dict(),
    })


@app.post("/process")
async def process(
    file: UploadFile = File(...),
    requested_width: int = Form(...),
    requested_height: int = Form(...),
    strategy: str = Form(None),
) -> JSONResponse:
    """
    Downsample an uploaded image for a requested size.
    
    Args:
        file: Uploaded image file
        requested_width: Requested width in pixels (1..MAX_REQUESTED_SIZE)
        requested_height: Requested height in pixels (1..MAX_REQUESTED_SIZE)
        strategy: Strategy name (default: configured DEFAULT_STRATEGY)
        
    Returns:
        JSON response with processing metadata
    """
    try:
        s = _resolve_strategy(strategy or config.DEFAULT_STRATEGY)
        _check_size("requested_width", requested_width, config.MAX_REQUESTED_SIZE)
        _check_size("requested_height", requested_height, config.MAX_REQUESTED_SIZE)

        if not file.filename:
            raise HTTPException(status_code=400, detail="Filename is required")
        config.INPUT_DIR.mkdir(parents=True, exist_ok=True)
        src_path = config.INPUT_DIR / Path(file.filename).name
        content = await file.read()
        if len(content) == 0:
            raise HTTPException(status_code=400, detail="Empty file")
        src_path.write_bytes(content)

        output_path = config.OUTPUT_DIR / (src_path.stem + config.OUTPUT_SUFFIX + ".png")
        meta = process_one(
            src=src_path,
            dst=output_path,
            requested_width=requested_width,
            requested_height=requested_height,
            strategy=s,
            log_jsonl=config.LOG_JSONL,
        )

        return JSONResponse({"ok": True, "meta": meta})

    except HTTPException:
        raise
    except Exception as e:
        LOGGER.exception("Processing failed")
        return JSONResponse(
            {"ok": False, "error": str(e)},
            status_code=500
        )


@app.get("/download", response_model=None)
async def download(path: str) -> Response:
    """
    Download a processed image file.
    
    Args:
        path: Path to the file to download
        
    Returns:
        File response or error JSON
    """
    # Only serve files from OUTPUT_DIR
    p = config.OUTPUT_DIR / Path(path).name

    if not p.exists() or not p.is_file():
        return JSONResponse(
            {"ok": False, "error": "File not found"},
            status_code=404
        )

    return FileResponse(p)
