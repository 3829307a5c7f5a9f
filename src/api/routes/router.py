"""Agregador de rotas — registra health, métricas e webhook.

Uso:
    from api.routes import create_api_router

    app = FastAPI()
    app.include_router(create_api_router())
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.health.router import router as health_router
from api.routes.whatsapp.router import router as whatsapp_router


def create_api_router() -> APIRouter:
    """Cria router principal com todos os sub-routers registrados.

    Returns:
        APIRouter configurado com todos os endpoints.
    """
    api_router = APIRouter()

    # Health e métricas na raiz
    api_router.include_router(health_router, tags=["health"])

    # WhatsApp (/webhook/whatsapp)
    api_router.include_router(whatsapp_router, tags=["whatsapp"])

    return api_router
