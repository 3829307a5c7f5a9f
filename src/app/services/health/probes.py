"""Probes de dependências externas (API LLM, Redis, Firestore).

Cada probe executa a operação mais barata que prova alcance da dependência
e mede a latência em volta da chamada, com sucesso ou falha. `probe()`
nunca levanta exceção.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal

import openai

if TYPE_CHECKING:
    from collections.abc import Callable

    from openai import AsyncOpenAI
    from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)

ProbeStatus = Literal["ok", "fail"]


@dataclass(frozen=True, slots=True)
class ProbeResult:
    """Resultado imutável de uma checagem de dependência."""

    status: ProbeStatus
    latency_ms: int
    error: str | None = None
    status_code: int | None = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    def as_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"status": self.status, "latency_ms": self.latency_ms}
        if self.error is not None:
            data["error"] = self.error
        if self.status_code is not None:
            data["status_code"] = self.status_code
        return data


def _elapsed_ms(started_at: float) -> int:
    return int(round((time.perf_counter() - started_at) * 1000))


def _error_message(exc: BaseException) -> str:
    message = str(exc).strip()
    return f"{type(exc).__name__}: {message}" if message else type(exc).__name__


class OpenAIProbe:
    """Probe da API externa: listagem de modelos (round-trip mínimo)."""

    name = "external"

    def __init__(self, client: AsyncOpenAI | None, timeout_seconds: float = 5.0) -> None:
        self._client = client
        self._timeout = timeout_seconds

    async def probe(self) -> ProbeResult:
        if self._client is None:
            return ProbeResult(status="fail", latency_ms=0, error="not_configured")

        started_at = time.perf_counter()
        try:
            await asyncio.wait_for(self._client.models.list(), timeout=self._timeout)
        except TimeoutError:
            return _failed(self.name, started_at, "timeout")
        except openai.APIStatusError as exc:
            return _failed(self.name, started_at, exc.message, exc.status_code)
        except Exception as exc:
            return _failed(self.name, started_at, _error_message(exc))
        return ProbeResult(status="ok", latency_ms=_elapsed_ms(started_at))


class RedisProbe:
    """Probe do cache: connect + PING com cliente transitório.

    O cliente é aberto a cada probe e sempre fechado, inclusive na falha.

    Args:
        redis_url: URL de conexão; vazia = não configurado
        timeout_seconds: Limite de connect + PING
        client_factory: Cria o cliente a partir da URL (injetável em testes)
    """

    name = "cache"

    def __init__(
        self,
        redis_url: str,
        timeout_seconds: float = 5.0,
        client_factory: Callable[[str], AsyncRedis[bytes]] | None = None,
    ) -> None:
        self._redis_url = redis_url
        self._timeout = timeout_seconds
        self._client_factory = client_factory or self._default_factory

    def _default_factory(self, redis_url: str) -> AsyncRedis[bytes]:
        from redis.asyncio import Redis as AsyncRedis

        return AsyncRedis.from_url(
            redis_url,
            socket_connect_timeout=self._timeout,
            socket_timeout=self._timeout,
        )

    async def probe(self) -> ProbeResult:
        if not self._redis_url:
            return ProbeResult(status="fail", latency_ms=0, error="not_configured")

        started_at = time.perf_counter()
        client = None
        try:
            client = self._client_factory(self._redis_url)
            response = await asyncio.wait_for(client.ping(), timeout=self._timeout)
        except TimeoutError:
            return _failed(self.name, started_at, "timeout")
        except Exception as exc:
            return _failed(self.name, started_at, _error_message(exc))
        finally:
            if client is not None:
                await _close_quietly(client)

        if response is not True and str(response).upper() != "PONG":
            return _failed(self.name, started_at, f"unexpected_ping_response: {response!r}")
        return ProbeResult(status="ok", latency_ms=_elapsed_ms(started_at))


class FirestoreProbe:
    """Probe do banco: leitura de um único documento.

    Documento inexistente ainda prova alcance do banco e conta como ok.
    """

    name = "database"

    def __init__(
        self,
        client: Any | None,
        collection: str = "_health",
        document: str = "check",
        timeout_seconds: float = 5.0,
    ) -> None:
        self._client = client
        self._collection = collection
        self._document = document
        self._timeout = timeout_seconds

    def _read_document(self) -> bool:
        snapshot = self._client.collection(self._collection).document(self._document).get()
        return bool(getattr(snapshot, "exists", False))

    async def probe(self) -> ProbeResult:
        if self._client is None:
            return ProbeResult(status="fail", latency_ms=0, error="not_configured")

        started_at = time.perf_counter()
        try:
            exists = await asyncio.wait_for(
                asyncio.to_thread(self._read_document),
                timeout=self._timeout,
            )
        except TimeoutError:
            return _failed(self.name, started_at, "timeout")
        except Exception as exc:
            code = getattr(exc, "code", None)
            return _failed(
                self.name,
                started_at,
                _error_message(exc),
                code if isinstance(code, int) else None,
            )
        if not exists:
            logger.debug("health_database_document_missing", extra={"collection": self._collection})
        return ProbeResult(status="ok", latency_ms=_elapsed_ms(started_at))


def _failed(
    name: str,
    started_at: float,
    error: str,
    status_code: int | None = None,
) -> ProbeResult:
    result = ProbeResult(
        status="fail",
        latency_ms=_elapsed_ms(started_at),
        error=error,
        status_code=status_code,
    )
    logger.error(
        "health_probe_failed",
        extra={"check": name, "error": error, "status_code": status_code},
    )
    return result


async def _close_quietly(client: Any) -> None:
    close_async = getattr(client, "aclose", None)
    try:
        if callable(close_async):
            await close_async()
        else:
            await client.close()
    except Exception as exc:
        logger.warning("health_cache_cleanup_failed", extra={"error_type": type(exc).__name__})
