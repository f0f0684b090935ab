"""
Request metrics for the Incapsula transport.

Each IncapsulaHTTPClient owns one RequestMetrics collector; nothing here is
process-wide.
"""

import statistics
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class OperationMetrics:
    """Counters for one operation tag."""
    total_requests: int = 0
    successful_requests: int = 0
    failed_requests: int = 0
    total_response_time: float = 0
    response_times: deque = field(default_factory=lambda: deque(maxlen=1000))
    errors_by_type: Dict[str, int] = field(default_factory=dict)


class RequestMetrics:
    """Per-operation request metrics collector."""

    def __init__(self) -> None:
        self.operations: Dict[str, OperationMetrics] = {}
        self.start_time = time.time()

    def record_request(self, operation: str, success: bool, response_time: float,
                       error_type: Optional[str] = None) -> None:
        """
        Record one request.

        Args:
            operation: Operation tag the request was issued with
            success: Whether the transport call completed
            response_time: Response time in seconds
            error_type: Type of error if request failed
        """
        metrics = self.operations.setdefault(operation, OperationMetrics())
        metrics.total_requests += 1
        metrics.total_response_time += response_time
        metrics.response_times.append(response_time)

        if success:
            metrics.successful_requests += 1
        else:
            metrics.failed_requests += 1
            if error_type:
                metrics.errors_by_type[error_type] = metrics.errors_by_type.get(error_type, 0) + 1

    def get_metrics(self) -> Dict[str, Any]:
        """Snapshot of all counters, grouped by operation tag."""
        operations = {}
        for name, metrics in self.operations.items():
            response_times = list(metrics.response_times)
            operations[name] = {
                "total_requests": metrics.total_requests,
                "successful_requests": metrics.successful_requests,
                "failed_requests": metrics.failed_requests,
                "success_rate": (
                    metrics.successful_requests / metrics.total_requests * 100
                    if metrics.total_requests > 0 else 100
                ),
                "average_response_time": (
                    metrics.total_response_time / metrics.total_requests
                    if metrics.total_requests > 0 else 0
                ),
                "max_response_time": max(response_times) if response_times else 0,
                "p95_response_time": (
                    statistics.quantiles(response_times, n=100)[94]
                    if len(response_times) >= 5 else 0
                ),
                "errors_by_type": dict(metrics.errors_by_type),
            }

        return {
            "uptime_seconds": time.time() - self.start_time,
            "total_requests": sum(m.total_requests for m in self.operations.values()),
            "operations": operations,
        }
