"""Factories de clientes externos: Redis, Firestore e OpenAI."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from google.cloud.firestore import Client as FirestoreClient
    from openai import AsyncOpenAI
    from redis.asyncio import Redis as AsyncRedis

    from config.settings import OpenAISettings

logger = logging.getLogger(__name__)


def create_async_redis_client(redis_url: str) -> AsyncRedis[bytes]:
    """Cria cliente Redis assíncrono.

    Raises:
        ValueError: Se REDIS_URL não configurado
    """
    from redis.asyncio import Redis as AsyncRedis

    if not redis_url:
        msg = "REDIS_URL não configurado"
        raise ValueError(msg)

    client: AsyncRedis[bytes] = AsyncRedis.from_url(
        redis_url,
        decode_responses=False,
        socket_timeout=5.0,
        socket_connect_timeout=5.0,
    )

    logger.info("async_redis_client_created")
    return client


def create_firestore_client(project_id: str) -> FirestoreClient:
    """Cria cliente Firestore para o projeto informado."""
    from google.cloud import firestore

    client = firestore.Client(project=project_id or None)
    logger.info("firestore_client_created", extra={"project": project_id})
    return client


def create_openai_client(settings: OpenAISettings) -> AsyncOpenAI | None:
    """Cria AsyncOpenAI, ou None se a integração estiver desabilitada."""
    if not settings.enabled or not settings.api_key:
        return None

    from openai import AsyncOpenAI

    client = AsyncOpenAI(
        api_key=settings.api_key,
        base_url=settings.base_url or None,
        timeout=settings.timeout_seconds,
        max_retries=0,
    )
    logger.info("openai_client_created", extra={"custom_base_url": bool(settings.base_url)})
    return client
