"""Monitoring utilities leveraging Prometheus client."""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Iterator

from prometheus_client import Counter, Histogram

http_requests_total = Counter(
    "phonebook_http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)

http_request_latency_seconds = Histogram(
    "phonebook_http_request_latency_seconds",
    "HTTP request latency",
    ["method", "path"],
)

store_requests_total = Counter(
    "phonebook_store_requests_total",
    "Calls made against the record store",
    ["operation", "outcome"],
)

store_request_latency_seconds = Histogram(
    "phonebook_store_request_latency_seconds",
    "Record store call latency",
    ["operation"],
)


def observe_request(method: str, path: str, status: int, duration_seconds: float) -> None:
    http_requests_total.labels(method=method, path=path, status=str(status)).inc()
    http_request_latency_seconds.labels(method=method, path=path).observe(duration_seconds)


@contextmanager
def track_store_call(operation: str) -> Iterator[None]:
    """Count a store call and record its latency, tagging failures as errors."""

    start = time.perf_counter()
    outcome = "error"
    try:
        yield
        outcome = "success"
    finally:
        store_request_latency_seconds.labels(operation=operation).observe(time.perf_counter() - start)
        store_requests_total.labels(operation=operation, outcome=outcome).inc()
