"""Export des traces OpenTelemetry vers un collecteur OTLP (gRPC).

Inactif tant que `OTLP_ENDPOINT` n'est pas renseigné.
"""

from __future__ import annotations

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from diveatlas.core.settings import Settings


def setup_tracing(settings: Settings) -> bool:
    """Installe le provider de traces global; retourne False si aucun collecteur n'est configuré."""
    if not settings.OTLP_ENDPOINT:
        return False
    provider = TracerProvider(resource=Resource.create({"service.name": settings.APP_NAME}))
    exporter = OTLPSpanExporter(endpoint=settings.OTLP_ENDPOINT, insecure=True)
    provider.add_span_processor(BatchSpanProcessor(exporter))
    trace.set_tracer_provider(provider)
    return True
