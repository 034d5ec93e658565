"""Observability Module - Logging, Tracing, and Metrics

This module provides:
1. Structured logging with context
2. Analysis stage tracing
3. Performance metrics collection
"""
import time
import logging
from typing import Dict, Any, Optional
from dataclasses import dataclass, field
from datetime import datetime

from config.settings import LOG_LEVEL

# Configure structured logging
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format='%(asctime)s | %(name)s | %(levelname)s | %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)

logger = logging.getLogger("vitara")


@dataclass
class StageTrace:
    """Represents a single analysis stage execution."""
    stage_name: str
    start_time: datetime = field(default_factory=datetime.now)
    end_time: Optional[datetime] = None
    duration_ms: Optional[float] = None
    input_summary: str = ""
    success: bool = True
    error: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def complete(self, success: bool = True, error: str = None):
        """Mark trace as complete."""
        self.end_time = datetime.now()
        self.duration_ms = (self.end_time - self.start_time).total_seconds() * 1000
        self.success = success
        self.error = error


@dataclass
class PipelineMetrics:
    """Aggregated metrics for the analysis pipeline."""
    total_requests: int = 0
    successful_requests: int = 0
    failed_requests: int = 0
    total_latency_ms: float = 0
    stage_latencies: Dict[str, list] = field(default_factory=dict)

    @property
    def success_rate(self) -> float:
        if self.total_requests == 0:
            return 0.0
        return self.successful_requests / self.total_requests

    @property
    def avg_latency_ms(self) -> float:
        if self.total_requests == 0:
            return 0.0
        return self.total_latency_ms / self.total_requests

    def record(self, trace: StageTrace):
        """Record a trace into metrics."""
        self.total_requests += 1
        if trace.success:
            self.successful_requests += 1
        else:
            self.failed_requests += 1

        if trace.duration_ms is not None:
            self.total_latency_ms += trace.duration_ms
            self.stage_latencies.setdefault(trace.stage_name, []).append(trace.duration_ms)

    def reset(self):
        self.total_requests = 0
        self.successful_requests = 0
        self.failed_requests = 0
        self.total_latency_ms = 0
        self.stage_latencies = {}

    def summary(self) -> Dict[str, Any]:
        """Return metrics summary."""
        stage_avg = {}
        for stage, latencies in self.stage_latencies.items():
            if latencies:
                stage_avg[stage] = round(sum(latencies) / len(latencies), 3)

        return {
            "total_requests": self.total_requests,
            "success_rate": f"{self.success_rate:.1%}",
            "avg_latency_ms": f"{self.avg_latency_ms:.2f}ms",
            "stage_avg_latency": stage_avg
        }


# Global metrics instance
metrics = PipelineMetrics()


class Tracer:
    """Context manager for tracing a pipeline stage."""

    def __init__(self, stage_name: str, input_data: Any = None):
        self.trace = StageTrace(stage_name=stage_name)
        if input_data is not None:
            self.trace.input_summary = str(input_data)[:200]
        self._started = 0.0

    def __enter__(self):
        logger.debug(f"▶ {self.trace.stage_name} started")
        self._started = time.perf_counter()
        return self.trace

    def __exit__(self, exc_type, exc_val, exc_tb):
        elapsed_ms = (time.perf_counter() - self._started) * 1000
        if exc_type:
            self.trace.complete(success=False, error=str(exc_val))
            logger.error(f"✖ {self.trace.stage_name} failed: {exc_val}")
        else:
            self.trace.complete(success=True)
            logger.debug(f"✔ {self.trace.stage_name} completed in {elapsed_ms:.2f}ms")
        self.trace.duration_ms = elapsed_ms

        metrics.record(self.trace)
        return False  # Don't suppress exceptions


def get_metrics_summary() -> Dict[str, Any]:
    """Get current metrics summary for the dashboard."""
    return metrics.summary()
