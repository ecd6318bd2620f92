"""
cep_weather.observability.tracing

Distributed tracing for both services (OpenTelemetry).

Responsibilities:
- Own the tracer provider, tracer and W3C propagator as one explicit object.
- Open scoped spans that always close and record classified failures.
- Inject/extract trace context across the gateway -> temperature service hop.
- Flush pending spans on shutdown.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, MutableMapping
from contextlib import contextmanager
from typing import Any

from opentelemetry.baggage.propagation import W3CBaggagePropagator
from opentelemetry.context import Context
from opentelemetry.exporter.zipkin.json import ZipkinExporter
from opentelemetry.propagators.composite import CompositePropagator
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SimpleSpanProcessor,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import ALWAYS_ON
from opentelemetry.trace import Span, Status, StatusCode
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

from cep_weather.errors import LookupFailure
from cep_weather.observability.logging import get_logger
from cep_weather.settings import Settings

log = get_logger(__name__)


class Tracing:
    """
    Tracing context for one service process.

    Built once at startup and handed to every component that opens spans. The
    OpenTelemetry global tracer provider and propagator are left untouched, so two
    services (or two test apps) can live in one interpreter without sharing state.
    """

    def __init__(
        self,
        *,
        service_name: str,
        service_version: str = "1.0.0",
        environment: str = "dev",
        exporter: SpanExporter | None = None,
        batch: bool = True,
    ) -> None:
        resource = Resource.create(
            {
                SERVICE_NAME: service_name,
                SERVICE_VERSION: service_version,
                "environment": environment,
            }
        )
        self.provider = TracerProvider(resource=resource, sampler=ALWAYS_ON)
        if exporter is not None:
            # Batch export runs on a background thread; export errors are logged by the
            # SDK and never reach request handling.
            processor = BatchSpanProcessor(exporter) if batch else SimpleSpanProcessor(exporter)
            self.provider.add_span_processor(processor)
        self.tracer = self.provider.get_tracer(service_name, service_version)
        self.propagator = CompositePropagator(
            [TraceContextTextMapPropagator(), W3CBaggagePropagator()]
        )

    @contextmanager
    def span(
        self,
        name: str,
        *,
        context: Context | None = None,
        attributes: Mapping[str, Any] | None = None,
    ) -> Iterator[Span]:
        with self.tracer.start_as_current_span(
            name,
            context=context,
            attributes=_clean(attributes),
            record_exception=False,
            set_status_on_exception=False,
        ) as span:
            try:
                yield span
            except LookupFailure as e:
                mark_failure(span, e)
                raise
            except Exception as e:
                span.record_exception(e)
                span.set_status(Status(StatusCode.ERROR, type(e).__name__))
                raise

    def inject(self, headers: MutableMapping[str, str]) -> None:
        # Writes traceparent/tracestate/baggage for the currently active span.
        self.propagator.inject(headers)

    def extract(self, headers: Mapping[str, str]) -> Context:
        return self.propagator.extract(headers)

    def shutdown(self) -> None:
        # Drains the batch processor so in-flight spans are exported before exit.
        self.provider.force_flush()
        self.provider.shutdown()


def mark_failure(span: Span, failure: LookupFailure) -> None:
    span.set_attribute("error.kind", failure.kind.value)
    if failure.detail:
        span.set_attribute("error.detail", failure.detail)
    span.record_exception(failure)
    span.set_status(Status(StatusCode.ERROR, failure.message))


def _clean(attributes: Mapping[str, Any] | None) -> dict[str, Any] | None:
    if attributes is None:
        return None
    return {k: v for k, v in attributes.items() if v is not None}


def build_tracing(settings: Settings, *, service_name: str) -> Tracing:
    exporter: SpanExporter | None
    if settings.trace_exporter == "zipkin":
        exporter = ZipkinExporter(endpoint=settings.zipkin_endpoint)
    elif settings.trace_exporter == "console":
        exporter = ConsoleSpanExporter()
    else:
        exporter = None

    log.info(
        "tracing.configured",
        exporter=settings.trace_exporter,
        endpoint=settings.zipkin_endpoint if settings.trace_exporter == "zipkin" else None,
    )
    return Tracing(
        service_name=service_name,
        service_version=settings.service_version,
        environment=settings.env,
        exporter=exporter,
    )


# --- Module Notes -----------------------------------------------------------
# Span lifetimes are lexical (`with tracing.span(...)`), so every early return or
# raised failure still ends the span before control leaves the operation.
