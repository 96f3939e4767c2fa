"""
Metrics Module (v1.0.0)
Track generation counts, failures by kind, feedback and LLM token usage.
"""
import threading
from typing import Dict, Any, Optional


def _empty_metrics() -> Dict[str, Any]:
    return {
        "total_generations": 0,
        "successful_generations": 0,
        "failed_generations": 0,
        "failures_by_kind": {},
        "regenerations": 0,
        "feedback_count": 0,
        "total_tokens": 0,
    }


# Thread-safe metrics storage
_lock = threading.Lock()
_metrics = _empty_metrics()

# Cost per 1K tokens (approximate, GPT-4o-mini)
COST_PER_1K_TOKENS = 0.002


def record_generation(success: bool, error_kind: Optional[str] = None, regeneration: bool = False):
    """
    Record an outfit generation attempt.

    Args:
        success: Whether an outfit was persisted
        error_kind: Error kind on failure
        regeneration: Whether the prompt came from the feedback loop
    """
    with _lock:
        _metrics["total_generations"] += 1

        if regeneration:
            _metrics["regenerations"] += 1

        if success:
            _metrics["successful_generations"] += 1
        else:
            _metrics["failed_generations"] += 1
            kind = error_kind or "unknown"
            _metrics["failures_by_kind"][kind] = _metrics["failures_by_kind"].get(kind, 0) + 1


def record_feedback():
    """Record a stored feedback entry."""
    with _lock:
        _metrics["feedback_count"] += 1


def record_tokens(tokens: int):
    """Record LLM token usage."""
    with _lock:
        _metrics["total_tokens"] += tokens


def estimate_cost(tokens: int) -> float:
    """Estimate cost in USD for a token count."""
    return round((tokens / 1000) * COST_PER_1K_TOKENS, 6)


def get_metrics() -> Dict[str, Any]:
    """Get current metrics snapshot."""
    with _lock:
        total = _metrics["total_generations"]
        successes = _metrics["successful_generations"]

        return {
            "total_generations": total,
            "successful_generations": successes,
            "failed_generations": _metrics["failed_generations"],
            "success_ratio": round(successes / total, 3) if total > 0 else 0.0,
            "failures_by_kind": dict(_metrics["failures_by_kind"]),
            "regenerations": _metrics["regenerations"],
            "feedback_count": _metrics["feedback_count"],
            "total_tokens": _metrics["total_tokens"],
            "total_cost_usd": estimate_cost(_metrics["total_tokens"]),
        }


def reset_metrics():
    """Reset all metrics (for testing)."""
    global _metrics
    with _lock:
        _metrics = _empty_metrics()
