"""Use cases do canal WhatsApp."""

from .route_inbound import RouteInboundUseCase, RoutingSummary

__all__ = [
    "RouteInboundUseCase",
    "RoutingSummary",
]
