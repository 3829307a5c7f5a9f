"""Protocolos e contratos do core da aplicação."""

from .dependency_probe import DependencyProbeProtocol
from .forwarder import DestinationForwarderProtocol
from .rate_limiter import RateLimiterProtocol

__all__ = [
    "DependencyProbeProtocol",
    "DestinationForwarderProtocol",
    "RateLimiterProtocol",
]
