"""Health check: probes de dependências e agregação do status."""

from .aggregator import HealthAggregator, HealthReport, derive_overall_status
from .probes import FirestoreProbe, OpenAIProbe, ProbeResult, RedisProbe

__all__ = [
    "FirestoreProbe",
    "HealthAggregator",
    "HealthReport",
    "OpenAIProbe",
    "ProbeResult",
    "RedisProbe",
    "derive_overall_status",
]
