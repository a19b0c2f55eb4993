"""OpenTelemetry metrics for the aid request pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource

from aid_bot.application.ports.telemetry_port import TelemetryPort


@dataclass
class OtelConfig:
    service_name: str = "aid-bot"
    otlp_endpoint: str | None = None  # e.g., "http://localhost:4317"
    environment: str = "production"


class OpenTelemetryAdapter(TelemetryPort):
    """Counters via incr(), histograms via observe(); instruments are created lazily."""

    def __init__(self, cfg: OtelConfig) -> None:
        self._cfg = cfg
        self._counters: dict[str, Any] = {}
        self._histograms: dict[str, Any] = {}

        resource = Resource.create(
            {
                "service.name": cfg.service_name,
                "deployment.environment": cfg.environment,
            }
        )
        readers = []
        if cfg.otlp_endpoint:
            from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter

            readers.append(
                PeriodicExportingMetricReader(OTLPMetricExporter(endpoint=cfg.otlp_endpoint))
            )
        self._provider = MeterProvider(resource=resource, metric_readers=readers)
        self._meter = self._provider.get_meter("aid_bot")

    def incr(self, name: str, tags: dict[str, Any] | None = None) -> None:
        if name not in self._counters:
            self._counters[name] = self._meter.create_counter(
                name=name, description=f"Counter for {name}"
            )
        self._counters[name].add(1, attributes=tags or {})

    def observe(self, name: str, value: float, tags: dict[str, Any] | None = None) -> None:
        if name not in self._histograms:
            self._histograms[name] = self._meter.create_histogram(
                name=name, description=f"Histogram for {name}"
            )
        self._histograms[name].record(value, attributes=tags or {})

    def shutdown(self) -> None:
        self._provider.shutdown()


class NoopTelemetry(TelemetryPort):
    """Used when telemetry is disabled."""

    def incr(self, name: str, tags: dict[str, Any] | None = None) -> None:
        return None

    def observe(self, name: str, value: float, tags: dict[str, Any] | None = None) -> None:
        return None
