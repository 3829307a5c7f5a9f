"""WorkerRuntime: loop de ingestão da fila Redis e ciclo de vida.

Estados: stopped -> starting -> running -> stopping -> stopped.

O loop consome payloads de webhook enfileirados (BRPOP em uma lista Redis)
e os processa pelo mesmo use case do endpoint POST. Roda independente da
superfície HTTP; health e /metrics apenas leem snapshots.
"""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from app.observability import reset_correlation_id, set_correlation_id
from config.settings.base.guards import missing_required
from utils.errors import ConfigurationError, InfrastructureError

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from redis.asyncio import Redis as AsyncRedis

    from app.runtime.metrics import WorkerMetrics
    from app.services.forwarder import DestinationForwarder
    from app.use_cases.whatsapp.route_inbound import RouteInboundUseCase
    from config.settings.infra.worker import WorkerSettings

logger = logging.getLogger(__name__)

QUEUE_CONNECT_TIMEOUT_SECONDS = 5.0


class WorkerState(StrEnum):
    STOPPED = "stopped"
    STARTING = "starting"
    RUNNING = "running"
    STOPPING = "stopping"


class WorkerRuntime:
    """Dono do loop de ingestão e dos recursos que ele usa.

    Args:
        settings: WorkerSettings (fila, timeouts, grace period)
        metrics: Contadores compartilhados com o webhook
        use_case: Pipeline normalize -> route -> forward
        forwarder: Forwarder cujo cliente HTTP é aberto/fechado aqui
        queue_factory: Cria o cliente Redis da fila; None = sem fila
        required_secrets: nome -> valor que precisam existir para iniciar
    """

    def __init__(
        self,
        settings: WorkerSettings,
        metrics: WorkerMetrics,
        use_case: RouteInboundUseCase,
        forwarder: DestinationForwarder,
        queue_factory: Callable[[], AsyncRedis[bytes]] | None = None,
        required_secrets: Mapping[str, str | None] | None = None,
    ) -> None:
        self._settings = settings
        self._metrics = metrics
        self._use_case = use_case
        self._forwarder = forwarder
        self._queue_factory = queue_factory
        self._required_secrets = dict(required_secrets or {})

        self._state = WorkerState.STOPPED
        self._queue: AsyncRedis[bytes] | None = None
        self._loop_task: asyncio.Task[None] | None = None
        self._in_flight: set[asyncio.Task[None]] = set()
        self._semaphore = asyncio.Semaphore(settings.max_in_flight)

    @property
    def state(self) -> WorkerState:
        return self._state

    def is_started(self) -> bool:
        return self._state == WorkerState.RUNNING

    def get_metrics(self) -> dict[str, Any]:
        """Snapshot de métricas, seguro durante start/stop concorrentes."""
        snapshot = self._metrics.snapshot()
        snapshot["state"] = self._state.value
        snapshot["in_flight"] = len(self._in_flight)
        return snapshot

    async def start(self) -> None:
        """Inicia o worker; chamada repetida enquanto ativo é no-op.

        Raises:
            ConfigurationError: Secret obrigatório ausente (fatal).
            InfrastructureError: Fila inacessível no startup.
        """
        if self._state in (WorkerState.STARTING, WorkerState.RUNNING):
            return
        if self._state == WorkerState.STOPPING:
            logger.warning("worker_start_ignored", extra={"reason": "stopping"})
            return

        self._state = WorkerState.STARTING
        logger.info("worker_starting", extra={"queue_enabled": self._queue_enabled})
        try:
            missing = missing_required(self._required_secrets)
            if missing:
                raise ConfigurationError(f"Secrets obrigatórios ausentes: {', '.join(missing)}")
            await self._forwarder.open()
            if self._queue_enabled and self._state is WorkerState.STARTING:
                await self._open_queue()
        except BaseException:
            await self._release_resources()
            self._state = WorkerState.STOPPED
            raise

        if self._state is not WorkerState.STARTING:
            # stop() rodou durante o startup e já liberou os recursos
            await self._release_resources()
            logger.warning("worker_start_aborted", extra={"state": self._state.value})
            return

        if self._queue is not None:
            self._loop_task = asyncio.create_task(self._run_loop(), name="worker-ingestion")
        self._state = WorkerState.RUNNING
        self._metrics.mark_started()
        logger.info("worker_started", extra={"queue_key": self._settings.queue_key})

    async def stop(self) -> None:
        """Drena jobs em andamento (com grace period) e libera recursos."""
        if self._state in (WorkerState.STOPPED, WorkerState.STOPPING):
            return
        self._state = WorkerState.STOPPING
        logger.info("worker_stopping", extra={"in_flight": len(self._in_flight)})

        if self._loop_task is not None:
            self._loop_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._loop_task
            self._loop_task = None

        await self._drain(self._settings.shutdown_grace_seconds)
        await self._release_resources()
        self._state = WorkerState.STOPPED
        logger.info("worker_stopped")

    @property
    def _queue_enabled(self) -> bool:
        return self._settings.enabled and self._queue_factory is not None

    async def _open_queue(self) -> None:
        assert self._queue_factory is not None
        self._queue = self._queue_factory()
        try:
            await asyncio.wait_for(self._queue.ping(), timeout=QUEUE_CONNECT_TIMEOUT_SECONDS)
        except Exception as exc:
            raise InfrastructureError(f"fila indisponível: {type(exc).__name__}") from exc

    async def _release_resources(self) -> None:
        if self._queue is not None:
            try:
                await self._queue.aclose()
            except Exception as exc:
                logger.warning(
                    "worker_queue_close_failed",
                    extra={"error_type": type(exc).__name__},
                )
            self._queue = None
        await self._forwarder.aclose()

    async def _run_loop(self) -> None:
        assert self._queue is not None
        while True:
            try:
                item = await self._queue.brpop(
                    [self._settings.queue_key],
                    timeout=self._settings.poll_timeout_seconds,
                )
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                logger.error(
                    "worker_poll_failed",
                    extra={"error_type": type(exc).__name__},
                )
                await asyncio.sleep(self._settings.error_backoff_seconds)
                continue

            if item is None:
                continue
            _, raw_job = item
            await self._semaphore.acquire()
            task = asyncio.create_task(self._process_job(raw_job))
            self._in_flight.add(task)
            task.add_done_callback(self._on_job_done)

    def _on_job_done(self, task: asyncio.Task[None]) -> None:
        self._in_flight.discard(task)
        self._semaphore.release()

    async def _process_job(self, raw_job: bytes | str) -> None:
        token = set_correlation_id(None)
        try:
            try:
                payload = json.loads(raw_job)
            except (json.JSONDecodeError, UnicodeDecodeError, TypeError):
                self._metrics.record_failed()
                logger.warning("worker_job_invalid_json")
                return
            if not isinstance(payload, dict):
                self._metrics.record_failed()
                logger.warning("worker_job_not_object")
                return
            await self._use_case.execute(payload)
        except Exception:
            self._metrics.record_failed()
            logger.exception("worker_job_failed")
        finally:
            reset_correlation_id(token)

    async def _drain(self, timeout_seconds: float) -> None:
        if not self._in_flight:
            return
        pending_now = list(self._in_flight)
        logger.info(
            "worker_shutdown_wait",
            extra={"pending_jobs": len(pending_now), "timeout_seconds": timeout_seconds},
        )
        _, pending = await asyncio.wait(pending_now, timeout=timeout_seconds)
        if not pending:
            return
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        logger.warning("worker_shutdown_cancelled", extra={"cancelled_jobs": len(pending)})
