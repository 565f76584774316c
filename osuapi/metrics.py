from __future__ import annotations

from typing import Optional

from prometheus_client import CollectorRegistry
from prometheus_client import Counter

from osuapi.endpoints import ENDPOINTS
from osuapi.endpoints import EndpointKind


class Metrics:
    """Per-endpoint osu!api request counters."""

    def __init__(self, registry: Optional[CollectorRegistry] = None) -> None:
        # a private registry keeps several clients from clashing on
        # prometheus' global default registry
        self.registry = registry if registry is not None else CollectorRegistry()

        self.counters = Counter(
            "osu_requests",
            "osu!api request count",
            ["type"],
            registry=self.registry,
        )

        for endpoint in ENDPOINTS.values():
            self.counters.labels(type=endpoint.metric_label)

    def inc(self, kind: EndpointKind) -> None:
        self.counters.labels(type=ENDPOINTS[kind].metric_label).inc()

    def count(self, kind: EndpointKind) -> float:
        value = self.registry.get_sample_value(
            "osu_requests_total",
            {"type": ENDPOINTS[kind].metric_label},
        )
        return value or 0.0
