"""OpenTelemetry initialization helpers for the Phonebook service."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from phonebook.core.config import settings

logger = logging.getLogger(__name__)
_TRACING_INITIALIZED = False


def setup_tracing(app: Optional[FastAPI] = None) -> None:
    """Configure the tracer provider and instrument FastAPI if requested.

    Spans are exported only when ``OTEL_EXPORTER_OTLP_ENDPOINT`` is set.
    """

    global _TRACING_INITIALIZED
    if not _TRACING_INITIALIZED:
        resource = Resource.create(
            {
                "service.name": settings.API_TITLE.lower().replace(" ", "-"),
                "service.version": settings.API_VERSION,
                "environment": settings.ENVIRONMENT,
            }
        )

        provider = TracerProvider(resource=resource)
        if settings.OTEL_EXPORTER_OTLP_ENDPOINT:
            exporter = OTLPSpanExporter(endpoint=str(settings.OTEL_EXPORTER_OTLP_ENDPOINT))
            provider.add_span_processor(BatchSpanProcessor(exporter))
            logger.info("OpenTelemetry tracing exporting to %s", settings.OTEL_EXPORTER_OTLP_ENDPOINT)
        else:
            logger.info("OTEL_EXPORTER_OTLP_ENDPOINT not set; spans are recorded but not exported.")
        trace.set_tracer_provider(provider)

        _TRACING_INITIALIZED = True

    if app is not None:
        FastAPIInstrumentor.instrument_app(app)


__all__ = ["setup_tracing"]
