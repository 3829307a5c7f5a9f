"""Serviços de aplicação.

Unidades reutilizáveis de orquestração: roteamento, forwarding e health.
"""

from app.services.forwarder import DestinationForwarder, ForwardResult
from app.services.intent_router import IntentRouter, classify_keyword

__all__ = [
    "DestinationForwarder",
    "ForwardResult",
    "IntentRouter",
    "classify_keyword",
]
