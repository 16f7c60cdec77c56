"""
Metrics collection for the Ledgerbook API.
"""
from typing import Dict, Any
from collections import defaultdict
from datetime import datetime, timezone

# In-memory metrics store, reset on process restart
_metrics: Dict[str, Any] = {}


def reset_metrics() -> None:
    """Clear all counters and restart the uptime clock."""
    _metrics.clear()
    _metrics.update({
        "requests": defaultdict(int),
        "errors": defaultdict(int),
        "reconciliation_runs": defaultdict(int),
        "response_times": [],
        "start_time": datetime.now(timezone.utc).isoformat(),
    })


reset_metrics()


def record_request(method: str, path: str, status_code: int, duration_ms: float):
    """Record HTTP request metrics."""
    _metrics["requests"][f"{method} {path}"] += 1
    _metrics["requests"][f"status_{status_code}"] += 1

    # Keep last 1000 response times
    _metrics["response_times"].append(duration_ms)
    if len(_metrics["response_times"]) > 1000:
        _metrics["response_times"] = _metrics["response_times"][-1000:]


def record_error(error_type: str, path: str = ""):
    """Record error metrics."""
    _metrics["errors"][error_type] += 1
    if path:
        _metrics["errors"][f"{error_type}:{path}"] += 1


def record_reconciliation_run(operation: str, is_balanced: bool):
    """Record one reconciliation operation and whether it balanced."""
    outcome = "balanced" if is_balanced else "unbalanced"
    _metrics["reconciliation_runs"][f"{operation}:{outcome}"] += 1


def get_metrics() -> Dict[str, Any]:
    """Get current metrics."""
    response_times = _metrics["response_times"]
    avg_response_time = sum(response_times) / len(response_times) if response_times else 0
    p95_response_time = sorted(response_times)[int(len(response_times) * 0.95)] if len(response_times) >= 20 else 0

    total_requests = sum(
        v for k, v in _metrics["requests"].items() if not k.startswith("status_")
    )
    total_errors = sum(
        v for k, v in _metrics["errors"].items() if ":" not in k
    )
    total_runs = sum(_metrics["reconciliation_runs"].values())

    uptime_seconds = (datetime.now(timezone.utc) - datetime.fromisoformat(_metrics["start_time"])).total_seconds()

    return {
        "uptime_seconds": int(uptime_seconds),
        "uptime_human": _format_uptime(uptime_seconds),
        "requests": {
            "total": total_requests,
            "by_endpoint": {k: v for k, v in _metrics["requests"].items() if not k.startswith("status_")},
            "by_status": {k: v for k, v in _metrics["requests"].items() if k.startswith("status_")},
        },
        "errors": {
            "total": total_errors,
            "by_type": dict(_metrics["errors"]),
        },
        "reconciliation_runs": {
            "total": total_runs,
            "by_operation_and_outcome": dict(_metrics["reconciliation_runs"]),
        },
        "performance": {
            "avg_response_time_ms": round(avg_response_time, 2),
            "p95_response_time_ms": round(p95_response_time, 2),
        },
    }


def _format_uptime(seconds: float) -> str:
    seconds = int(seconds)
    days, seconds = divmod(seconds, 86400)
    hours, seconds = divmod(seconds, 3600)
    minutes, seconds = divmod(seconds, 60)
    parts = []
    if days:
        parts.append(f"{days}d")
    if hours:
        parts.append(f"{hours}h")
    if minutes:
        parts.append(f"{minutes}m")
    parts.append(f"{seconds}s")
    return " ".join(parts)
