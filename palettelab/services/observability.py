"""
Observability helpers for the palette extraction pipeline.

Stage timing and memory logging around the CPU-bound parts of the engine.
"""

import time
from contextlib import contextmanager
from dataclasses import dataclass, asdict
from typing import Dict, Any, Optional

import psutil
from loguru import logger


@dataclass
class PerformanceMetrics:
    """Performance metrics for one pipeline stage."""
    operation_name: str
    duration_ms: float
    memory_usage_mb: float
    sample_count: int
    cluster_count: int
    timestamp: float
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _rss_mb() -> float:
    return psutil.Process().memory_info().rss / 1024 / 1024


@contextmanager
def performance_monitor(operation_name: str, sample_count: int = 0, cluster_count: int = 0):
    """Context manager for monitoring performance of operations.

    Yields a dict that is filled with the stage metrics once the block exits.
    """
    start_time = time.time()
    start_memory = _rss_mb()
    result: Dict[str, Any] = {}

    error_msg = None

    try:
        yield result
    except Exception as e:
        error_msg = str(e)
        raise
    finally:
        end_time = time.time()
        end_memory = _rss_mb()

        metrics = PerformanceMetrics(
            operation_name=operation_name,
            duration_ms=(end_time - start_time) * 1000,
            memory_usage_mb=max(end_memory, start_memory),
            sample_count=sample_count,
            cluster_count=cluster_count,
            timestamp=end_time,
            error=error_msg
        )
        result.update(metrics.to_dict())

        if error_msg:
            logger.error(f"Operation {operation_name} failed after {metrics.duration_ms:.1f}ms: {error_msg}")
        else:
            logger.info(f"Operation {operation_name} completed in {metrics.duration_ms:.1f}ms "
                        f"(memory: {metrics.memory_usage_mb:.1f}MB)")


def log_memory_usage(stage_name: str) -> Dict[str, Any]:
    """Log current memory usage for a specific stage."""
    memory_mb = _rss_mb()

    logger.debug(f"Memory usage at {stage_name}: {memory_mb:.1f}MB")

    return {
        'stage': stage_name,
        'memory_mb': memory_mb,
        'timestamp': time.time()
    }
