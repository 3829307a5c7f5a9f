"""Contadores do processo compartilhados entre webhook, worker e health.

Incrementos e snapshot passam pelo mesmo lock, então uma leitura nunca
observa um estado parcial.
"""

from __future__ import annotations

import threading
from datetime import UTC, datetime
from typing import Any


def _utc_now_iso() -> str:
    return datetime.now(UTC).isoformat()


class WorkerMetrics:
    """Métricas de processamento de mensagens."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._processed = 0
        self._failed = 0
        self._forwarded = 0
        self._routing_misses = 0
        self._rate_limited = 0
        self._last_activity_at: str | None = None
        self._started_at: str | None = None

    def _touch(self) -> None:
        self._last_activity_at = _utc_now_iso()

    def record_processed(self, forwarded: bool = False) -> None:
        with self._lock:
            self._processed += 1
            if forwarded:
                self._forwarded += 1
            self._touch()

    def record_failed(self) -> None:
        with self._lock:
            self._failed += 1
            self._touch()

    def record_routing_miss(self) -> None:
        with self._lock:
            self._processed += 1
            self._routing_misses += 1
            self._touch()

    def record_rate_limited(self) -> None:
        with self._lock:
            self._rate_limited += 1
            self._touch()

    def mark_started(self) -> None:
        with self._lock:
            self._started_at = _utc_now_iso()

    def snapshot(self) -> dict[str, Any]:
        """Cópia consistente dos contadores."""
        with self._lock:
            return {
                "processed": self._processed,
                "failed": self._failed,
                "forwarded": self._forwarded,
                "routing_misses": self._routing_misses,
                "rate_limited": self._rate_limited,
                "last_activity_at": self._last_activity_at,
                "started_at": self._started_at,
            }
