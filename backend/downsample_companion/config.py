"""Runtime configuration, read from environment variables with defaults."""
import os
from pathlib import Path

# Directories for uploads and processed output
OUTPUT_DIR = Path(os.environ.get("DOWNSAMPLE_OUTPUT_DIR", "output"))
INPUT_DIR = Path(os.environ.get("DOWNSAMPLE_INPUT_DIR", "inputs"))

# Upper bound accepted for requested width/height by the HTTP API
MAX_REQUESTED_SIZE: int = int(os.environ.get("DOWNSAMPLE_MAX_REQUESTED_SIZE", "4096"))

# Strategy used when a request names none. Options: "center_inside",
# "center_outside", "at_least", "at_most", "none", "default"
DEFAULT_STRATEGY = os.environ.get("DOWNSAMPLE_DEFAULT_STRATEGY", "default")

# Optional JSONL file receiving one record per processed image
_log_jsonl = os.environ.get("DOWNSAMPLE_LOG_JSONL")
LOG_JSONL = Path(_log_jsonl) if _log_jsonl else None

# Suffix appended to processed file stems
OUTPUT_SUFFIX = "_ds"
