"""
Request Logger (v1.0.0)
One structured JSON line per outfit generation attempt.
"""
import os
import json
import logging
from pathlib import Path
from datetime import datetime, timezone
from typing import Optional

from outfit_service.config import get_settings

REQUEST_LOGGER_NAME = "outfit.requests"

# Configure request logger
request_logger = logging.getLogger(REQUEST_LOGGER_NAME)
request_logger.setLevel(logging.INFO)

# Prevent propagation to root logger
request_logger.propagate = False


def get_logs_dir() -> Path:
    """Directory holding requests.log (OUTFIT_LOGS_DIR overrides)."""
    default = Path(__file__).parent.parent.parent / "logs"
    return Path(os.getenv("OUTFIT_LOGS_DIR", str(default)))


def _ensure_file_handler() -> None:
    """Attach the file handler on first use."""
    if request_logger.handlers:
        return

    logs_dir = get_logs_dir()
    logs_dir.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(logs_dir / "requests.log", encoding="utf-8")
    file_handler.setFormatter(logging.Formatter("%(message)s"))
    request_logger.addHandler(file_handler)


def log_request(
    user_id: str,
    operation: str,
    latency_ms: int,
    status: str,
    outfit_id: Optional[str] = None,
    stage: Optional[str] = None,
    error_kind: Optional[str] = None,
    error: Optional[str] = None,
    item_count: int = 0
):
    """
    Log a structured request entry.

    Args:
        user_id: Authenticated user
        operation: generate or regenerate
        latency_ms: Request latency in milliseconds
        status: success or fail
        outfit_id: Persisted outfit id on success
        stage: Pipeline stage that failed (tags, embedding, inventory, ...)
        error_kind: Error class kind on failure
        error: Error message if failed
        item_count: Number of pieces in the outfit
    """
    if not is_logging_enabled():
        return

    entry = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "user_id": user_id,
        "operation": operation,
        "latency_ms": latency_ms,
        "status": status,
    }

    if outfit_id:
        entry["outfit_id"] = outfit_id
        entry["item_count"] = item_count
    if stage:
        entry["stage"] = stage
    if error_kind:
        entry["error_kind"] = error_kind
    if error:
        entry["error"] = error

    _ensure_file_handler()
    request_logger.info(json.dumps(entry))


def is_logging_enabled() -> bool:
    """Check if request logging is enabled."""
    return get_settings().logging_enabled
