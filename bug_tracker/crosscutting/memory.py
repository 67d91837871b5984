"""
Name: Process memory snapshot

Responsibilities:
  - Report resident memory and Python heap figures in MB for debug logs

Collaborators:
  - container.ServiceContext (periodic monitor in development)

Notes:
  - ru_maxrss is KiB on Linux and bytes on macOS
  - tracemalloc figures are only present when tracing was started
"""

from __future__ import annotations

import gc
import resource
import sys
import tracemalloc

_MB = 1024 * 1024


def _to_mb(value: float) -> float:
    return round(value / _MB, 2)


def memory_usage() -> dict[str, float]:
    """Snapshot of process memory; keys are suffixed with their unit."""
    usage: dict[str, float] = {"gc_objects": float(len(gc.get_objects()))}

    max_rss = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    scale = 1 if sys.platform == "darwin" else 1024
    usage["max_rss_mb"] = _to_mb(max_rss * scale)

    if tracemalloc.is_tracing():
        current, peak = tracemalloc.get_traced_memory()
        usage["heap_used_mb"] = _to_mb(current)
        usage["heap_peak_mb"] = _to_mb(peak)

    return usage
