"""Settings do Firestore.

Banco consultado pelo probe de database (leitura de um único documento).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class FirestoreSettings:
    """Configurações do Firestore.

    Attributes:
        project_id: ID do projeto GCP (usa GCP_PROJECT se não definido)
        health_collection: Collection lida pelo probe
        health_document: Documento lido pelo probe
    """

    project_id: str = ""
    health_collection: str = "_health"
    health_document: str = "check"

    def validate(self, gcp_project: str) -> list[str]:
        """Valida configurações do Firestore.

        Args:
            gcp_project: Projeto GCP padrão para fallback.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if not (self.project_id or gcp_project):
            errors.append("FIRESTORE_PROJECT_ID ou GCP_PROJECT deve estar configurado")

        if not self.health_collection or not self.health_document:
            errors.append("FIRESTORE_HEALTH_COLLECTION/DOCUMENT não podem ser vazios")

        return errors


def _load_firestore_from_env() -> FirestoreSettings:
    """Carrega FirestoreSettings de variáveis de ambiente."""
    return FirestoreSettings(
        project_id=os.getenv("FIRESTORE_PROJECT_ID", ""),
        health_collection=os.getenv("FIRESTORE_HEALTH_COLLECTION", "_health"),
        health_document=os.getenv("FIRESTORE_HEALTH_DOCUMENT", "check"),
    )


@lru_cache(maxsize=1)
def get_firestore_settings() -> FirestoreSettings:
    """Retorna instância cacheada de FirestoreSettings."""
    return _load_firestore_from_env()
