"""\
OpenTelemetry
=============

Author: Akshay Mestry <xa@mes3.dev>
Created on: Sunday, October 11 2026
Last updated on: Sunday, October 18 2026

This module provides `OpenTelemetry` integration for errchain. Error
chains are attached to spans with both their short and detailed
renderings, so a trace shows the annotated path an error took through
the application alongside the usual timing information.
"""

from __future__ import annotations

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (
    OTLPSpanExporter,
)
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.trace.export import ConsoleSpanExporter
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.trace import Status
from opentelemetry.trace import StatusCode

from errchain.core.chain import details
from errchain.core.chain import walk
from errchain.core.config import Config
from errchain.core.errors import BaseErr

__all__: list[str] = [
    "get_tracer",
    "record_error",
]


def get_tracer(
    config: Config | None = None,
    name: str | None = None,
) -> trace.Tracer:
    """Configure and return a tracer.

    This function sets up an `OpenTelemetry TracerProvider` based on the
    library's configuration. Spans are exported to the console in debug
    mode and over OTLP otherwise. With telemetry disabled, the provider
    is installed without any span processor.

    :param config: An optional configuration object to initialise the
        tracer. If not provided, a default `Config` instance is created.
    :param name: Override for the service name, defaults to `None`. If
        not provided, uses the name from the configuration.
    :return: A configured `OpenTelemetry Tracer` instance.
    """
    if config is None:
        config = Config()
    service = name or config.telemetry.name or config.name
    resource = Resource.create(
        {
            "service.name": service,
            "service.version": config.version,
            "deployment.environment": (
                "development" if config.debug else "production"
            ),
            "telemetry.sdk.name": "errchain",
        }
    )
    provider = TracerProvider(resource=resource)
    if config.telemetry.enabled:
        if config.debug:
            provider.add_span_processor(
                SimpleSpanProcessor(ConsoleSpanExporter())
            )
        else:
            try:
                processor = BatchSpanProcessor(OTLPSpanExporter())
            except Exception:
                processor = SimpleSpanProcessor(ConsoleSpanExporter())
            provider.add_span_processor(processor)
    trace.set_tracer_provider(provider)
    return provider.get_tracer(service)


def record_error(
    err: BaseException | None,
    span: trace.Span | None = None,
) -> None:
    """Attach an error chain to a span and mark the span as failed.

    The span receives the error's short and detailed renderings, its
    type, the number of errors reachable through its causes and, for
    annotated errors, how many annotations it carries. The error is
    also recorded as an exception event.

    :param err: The error to record. `None` is ignored.
    :param span: The span to record on, defaults to the current span.
    """
    if err is None:
        return
    if span is None:
        span = trace.get_current_span()
    message = str(err)
    span.set_attribute("error.type", type(err).__qualname__)
    span.set_attribute("error.message", message)
    span.set_attribute("error.details", details(err))
    span.set_attribute("error.chain", sum(1 for _ in walk(err)))
    if isinstance(err, BaseErr):
        span.set_attribute("error.annotations", len(err.annotations))
    span.record_exception(err)
    span.set_status(Status(StatusCode.ERROR, message))
