"""\
OpenTelemetry
=============

Author: Akshay Mestry <xa@mes3.dev>
Created on: Friday, July 04 2025
Last updated on: Monday, October 19 2026

This module provides `OpenTelemetry` integration for the package. Root
resolution is wrapped in a span so applications that already export
traces can see when, and from where, the upward walk ran.
"""

from __future__ import annotations

import typing as t

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (
    OTLPSpanExporter,
)
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.trace.export import ConsoleSpanExporter
from opentelemetry.sdk.trace.export import SimpleSpanProcessor

from rootfinder.utils.logging import get_logger

if t.TYPE_CHECKING:
    from rootfinder.core.config import Config

__all__: list[str] = ["get_tracer"]

logger = get_logger(__name__)


def get_tracer(
    config: Config | None = None,
    name: str | None = None,
) -> trace.Tracer:
    """Configure and return a tracer.

    With telemetry disabled, this returns a tracer from whatever
    provider is installed globally (the no-op provider unless the host
    application set one up) and leaves the global state alone. With
    telemetry enabled, it installs an SDK `TracerProvider` that prints
    spans to the console in debug mode and exports them over OTLP
    otherwise.

    :param config: An optional configuration object. If not provided,
        a default `Config` instance is created.
    :param name: Override for the service name, defaults to `None`. If
        not provided, uses the name from the configuration.
    :return: A configured `OpenTelemetry Tracer` instance.
    """
    if config is None:
        from rootfinder.core.config import Config

        config = Config()
    service = name or config.telemetry.name or config.name
    if not config.telemetry.enabled:
        return trace.get_tracer(service)
    resource = Resource.create(
        {
            "service.name": service,
            "service.version": getattr(config, "version", "unknown"),
            "deployment.environment": (
                "development" if config.debug else "production"
            ),
            "telemetry.sdk.name": "rootfinder",
        }
    )
    if config.debug:
        processor = SimpleSpanProcessor(ConsoleSpanExporter())
    else:
        try:
            exporter = OTLPSpanExporter()
            processor = BatchSpanProcessor(exporter)
        except Exception as error:
            logger.warning(
                f"OTLP exporter unavailable, using console: {error}"
            )
            processor = SimpleSpanProcessor(ConsoleSpanExporter())
    provider = TracerProvider(resource=resource)
    provider.add_span_processor(processor)
    trace.set_tracer_provider(provider)
    return trace.get_tracer(service)
