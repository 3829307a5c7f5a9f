"""Agregador de settings de infraestrutura.

Re-exporta todas as settings de infraestrutura para uso externo.
"""

from __future__ import annotations

from config.settings.infra.firestore import (
    FirestoreSettings,
    get_firestore_settings,
)
from config.settings.infra.worker import (
    WorkerSettings,
    get_worker_settings,
)

__all__ = [
    # Firestore
    "FirestoreSettings",
    # Worker
    "WorkerSettings",
    "get_firestore_settings",
    "get_worker_settings",
]
