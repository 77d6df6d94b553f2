"""
Prometheus metrics for metadata resolution.

Module-level metric objects (singletons, thread-safe) recorded by
[MetadataResolver][tzmeta.resolver.resolver.MetadataResolver]. Exposition is
left to the host application, e.g. with ``prometheus_client.start_http_server``
or its own ``/metrics`` route.

Architecture:
    RESOLVE_COUNTER:            Hops resolved, labelled by contract shape.
    FETCH_COUNTER:              Remote metadata fetches, labelled by outcome.
    RESOLVE_DURATION_SECONDS:   Histogram of top-level resolution latency.
"""

from __future__ import annotations

from prometheus_client import Counter, Histogram


RESOLVE_COUNTER = Counter(
    "tzmeta_resolve_hops",
    "Resolution hops by contract shape",
    ["shape"],
)

# outcome: ok | http_error | transport_error | checksum_mismatch
FETCH_COUNTER = Counter(
    "tzmeta_fetches",
    "Remote metadata fetches by outcome",
    ["outcome"],
)

RESOLVE_DURATION_SECONDS = Histogram(
    "tzmeta_resolve_duration_seconds",
    "Duration of top-level metadata resolution in seconds",
    buckets=(0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10, 30, 60, 120),
)
