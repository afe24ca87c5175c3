"""
metrics.py - Prometheus metrics for Panchangam fetches.

- panchangam_load_total{outcome} - Loads by outcome (remote, fallback, failed, superseded)
- panchangam_remote_errors_total{code} - Remote fetch failures by error code
- panchangam_fetch_latency_seconds{endpoint} - Remote request latency
"""

from __future__ import annotations

import time

from contextlib import contextmanager

from prometheus_client import Counter, Histogram

panchangam_load_total = Counter(
    "panchangam_load_total",
    "Panchangam loads by outcome",
    ["outcome"],  # outcome: remote, fallback, failed, superseded
)

panchangam_remote_errors_total = Counter(
    "panchangam_remote_errors_total",
    "Remote almanac fetch failures",
    ["code"],
)

panchangam_fetch_latency_seconds = Histogram(
    "panchangam_fetch_latency_seconds",
    "Remote almanac request latency",
    ["endpoint"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 15.0, 30.0),
)


def record_load(outcome: str) -> None:
    panchangam_load_total.labels(outcome=outcome).inc()


def record_remote_error(code: str) -> None:
    panchangam_remote_errors_total.labels(code=code).inc()


@contextmanager
def track_latency(endpoint: str):
    """Observe the wall time of the wrapped block, success or failure."""
    start = time.perf_counter()
    try:
        yield
    finally:
        panchangam_fetch_latency_seconds.labels(endpoint=endpoint).observe(
            time.perf_counter() - start
        )
