"""Runtime do worker de ingestão: ciclo de vida e métricas."""

from .metrics import WorkerMetrics
from .worker import WorkerRuntime, WorkerState

__all__ = [
    "WorkerMetrics",
    "WorkerRuntime",
    "WorkerState",
]
